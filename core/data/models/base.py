"""Declarative base shared by all ORM models."""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Column default for timestamps (timezone-aware UTC)."""
    return datetime.now(timezone.utc)
