"""
redact-data - Storage Database Models

SQLAlchemy models for the SQL-backed DataStorer. Each Data is stored as a
JSON document keyed by its normalized path.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...data import Data


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all database models."""

    pass


class DataRecord(Base):
    """
    One Data document.

    The primary key on path gives upsert-by-path semantics.
    """

    __tablename__ = "data"

    path: Mapped[str] = mapped_column(String(1024), primary_key=True)
    document: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    def to_data(self) -> Data:
        """Deserialize the stored document."""
        return Data.model_validate_json(self.document)

    @classmethod
    def values_for(cls, data: Data) -> dict[str, object]:
        """Column values for inserting or replacing ``data``."""
        return {
            "path": data.key,
            "document": data.model_dump_json(),
            "updated_at": datetime.now(UTC),
        }
