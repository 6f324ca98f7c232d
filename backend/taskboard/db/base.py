"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Enumerated columns store the enum's value literal and load back as the enum member

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - native_enum=False: VARCHAR + application-side validation, portable across
      PostgreSQL and SQLite, no ALTER TYPE migrations when a member is added
"""

from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all task board ORM models."""
    pass


def enum_column(enum_cls: type[Enum], length: int = 20) -> SAEnum:
    """Column type persisting a closed str Enum by value ("In Progress", not IN_PROGRESS)."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=length,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
