"""
Card Advisor - Credit Card Recommendation Service

A FastAPI-based service that ranks credit cards per spending category
by expected net annual benefit and keeps each user's latest
recommendation set.
"""

__version__ = "0.1.0"
