"""HistoryItem entity - one persisted generated image with its parameters."""

from typing import Optional

from sqlalchemy import BigInteger, Column, Index, text
from sqlmodel import Field, SQLModel
from uuid_extensions import uuid7


def _new_id() -> str:
    # UUIDv7 strings sort in creation order within a process
    return str(uuid7())


class HistoryItem(SQLModel, table=True):
    """HistoryItem records a generated image inside a collection.

    Rows are append-only: nothing in the application updates or deletes them.
    """

    __tablename__ = "history_items"  # type: ignore[assignment]
    __table_args__ = (
        Index("idx_history_collection_created", "collection_id", text("created_at DESC")),
    )

    id: str = Field(default_factory=_new_id, primary_key=True)
    collection_id: str = Field(nullable=False)
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))  # epoch milliseconds
    prompt: Optional[str] = Field(default=None)
    style: Optional[str] = Field(default=None)
    model_id: Optional[str] = Field(default=None)
    aspect: Optional[str] = Field(default=None)
    seed: Optional[int] = Field(default=None, sa_column=Column(BigInteger))
    width: Optional[int] = Field(default=None)
    height: Optional[int] = Field(default=None)
    image_url: Optional[str] = Field(default=None)
