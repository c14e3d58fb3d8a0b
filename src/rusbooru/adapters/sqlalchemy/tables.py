"""SQLAlchemy metadata for the persisted tag cache."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text

metadata = MetaData()

tag_cache_records_table = Table(
    "tag_cache_records",
    metadata,
    Column("name", String, primary_key=True),
    Column("payload", Text, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
