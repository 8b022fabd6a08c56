"""Persistence-related exceptions."""

from memopad.domain.exceptions import PersistenceError


class DatabaseError(PersistenceError):
    """Database operation error."""
