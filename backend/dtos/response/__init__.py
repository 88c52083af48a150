"""
Response DTOs

DTOs for data handed back to the application layer that are not aggregates
themselves, such as aggregated statistics.
"""

from .statistics_response import ProductStatistics, UserStatistics

__all__ = ["ProductStatistics", "UserStatistics"]
