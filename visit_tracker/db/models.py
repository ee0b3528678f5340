"""
Database Models for the Visit Tracker

This module defines the SQLModel database schemas for:
- Visit: One row per recorded page view (append-only log)
- SettingRecord: Keyed JSON documents (the "links" configuration lives here)

Design Decisions:
- Timestamps are stored as integer milliseconds since epoch, which is also
  the wire format served to the admin UI
- Index on ts for the window range queries (the only filter we ever apply)
- Settings value is stored as serialized JSON text; the document shape is
  owned by the links service, not by the table
"""

from typing import Optional

from sqlalchemy import BigInteger, String, Text
from sqlmodel import Column, Field, SQLModel


class Visit(SQLModel, table=True):
    """
    Append-only visit log.

    Fields:
    - id: Auto-incrementing primary key (defines "most recent" ordering)
    - ts: Insertion time, milliseconds since epoch
    - ip: Best-effort client address (may be empty)
    - ua: Raw User-Agent header (may be empty)
    - country: Country code from proxy/CDN headers, or "Unknown"
    - path: Client-reported path, "/" when absent
    - ref: Client-reported referrer, "" when absent

    Rows are never updated or deleted by the application.
    """
    __tablename__ = "visits"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    ts: int = Field(sa_column=Column(BigInteger, nullable=False, index=True))
    ip: Optional[str] = Field(default="", sa_column=Column(Text, nullable=True))
    ua: Optional[str] = Field(default="", sa_column=Column(Text, nullable=True))
    country: Optional[str] = Field(default="Unknown", sa_column=Column(String(64), nullable=True))
    path: Optional[str] = Field(default="/", sa_column=Column(Text, nullable=True))
    ref: Optional[str] = Field(default="", sa_column=Column(Text, nullable=True))


class SettingRecord(SQLModel, table=True):
    """
    Key/value settings table.

    Exactly one row per key. Writes replace value_json and updated_at
    wholesale (last writer wins).
    """
    __tablename__ = "settings"

    key: str = Field(sa_column=Column(String(64), primary_key=True))
    value_json: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: int = Field(sa_column=Column(BigInteger, nullable=False))
