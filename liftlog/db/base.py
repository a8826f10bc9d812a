"""SQLAlchemy declarative base and metadata."""

from enum import Enum

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for all ORM models."""

    pass


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum members by value (matches the PostgreSQL enum labels)."""
    return [member.value for member in enum_cls]
