"""
Data persistence layer.

Provides the abstract repository and its concrete implementations
for storing registered card records.
"""

from .json_store import JSONCardStore
from .postgres import PostgresCardRepository
from .repository import CardRepository

__all__ = [
    "CardRepository",
    "JSONCardStore",
    "PostgresCardRepository",
]
