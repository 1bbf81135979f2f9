"""
SQLAlchemy ORM base class
All models inherit from this Base
"""

from datetime import timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base"""
    pass


class UTCDateTime(TypeDecorator):
    """
    Timestamp stored as naive UTC
    Aware values are converted to UTC before binding, so columns and query
    parameters agree on the UTC calendar day whatever offset the caller used.
    Naive values are taken to be UTC already.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
