"""
Domain Layer

This package contains the core business domain logic, separated from
persistence concerns and infrastructure.

Structure:
- value_objects/: Immutable, self-validating value types
- aggregates/: Aggregate roots (Category, Product, User)
"""
