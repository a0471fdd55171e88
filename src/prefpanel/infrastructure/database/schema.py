"""SQLAlchemy Core table definitions for the preference database."""

from __future__ import annotations

from sqlalchemy import Column, MetaData, PrimaryKeyConstraint, Table, Text

metadata = MetaData()

prefs = Table(
    "prefs",
    metadata,
    Column("layer", Text, nullable=False),  # default | user
    Column("key", Text, nullable=False),
    Column("kind", Text, nullable=False),  # bool | int | string
    Column("value", Text, nullable=False),  # JSON-encoded scalar
    Column("modified", Text, nullable=False),
    PrimaryKeyConstraint("layer", "key"),
)
