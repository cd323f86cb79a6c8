"""SQLAlchemy declarative base for Reviewpool.

Every table uses a natural text primary key supplied by the caller
(team name, user ID, pull request ID), so there is no shared id or
timestamp mixin.

Example:
    >>> class MyModel(Base):
    ...     __tablename__ = "my_table"
    ...     name: Mapped[str] = mapped_column(Text, primary_key=True)
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """SQLAlchemy 2.0 declarative base for all Reviewpool models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
