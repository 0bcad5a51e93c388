# devfeed/adapters/outbound/persistence/models/base_model.py

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

# Parent class of every ORM model, holds the shared metadata
Base = declarative_base()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """created_at / updated_at columns, set from the application clock in UTC."""

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
