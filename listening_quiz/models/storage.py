from datetime import datetime

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel

from listening_quiz.core.time import utc_now


class StorageEntry(SQLModel, table=True):
    """One serialized value per key, the durable local store."""

    __tablename__ = "storage_entries"

    key: str = Field(primary_key=True)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
