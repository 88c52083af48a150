"""
Data Transfer Objects (DTOs) Layer

DTOs decouple callers from the domain aggregates and the database models.

Structure:
- request/: Commands carrying primitive input into the domain services
- response/: Aggregated results returned by the domain services
"""
