"""History record preparation: mirroring and row construction for a write batch."""

import asyncio
import time
from dataclasses import dataclass
from typing import Optional

import structlog

from image_studio.models.history_item import HistoryItem
from image_studio.services.mirror.pinata_client import PinataClient, mirror_image

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HistoryRecord:
    """One generated image as submitted by the client."""

    prompt: str
    style: Optional[str]
    model_id: str
    aspect: str
    seed: int
    width: int
    height: int
    image_url: str
    created_at: Optional[int] = None


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


async def build_history_items(
    collection_id: str,
    records: list[HistoryRecord],
    mirror: Optional[PinataClient] = None,
    now: Optional[int] = None,
) -> list[HistoryItem]:
    """Turn submitted records into HistoryItem rows ready for a batched insert.

    Images are mirrored concurrently; a failed mirror keeps the original URL.
    Each row receives a fresh id, and records without ``created_at`` share one
    server timestamp for the whole batch.

    Args:
        collection_id: Collection the records belong to
        records: Records in submission order
        mirror: Pinata client, or None when mirroring is disabled
        now: Timestamp override in epoch milliseconds (defaults to now_ms())

    Returns:
        HistoryItem entities in submission order
    """
    timestamp = now if now is not None else now_ms()

    results = await asyncio.gather(*(mirror_image(mirror, r.image_url) for r in records))

    items = []
    for record, result in zip(records, results):
        items.append(
            HistoryItem(
                collection_id=collection_id,
                created_at=record.created_at if record.created_at is not None else timestamp,
                prompt=record.prompt,
                style=record.style,
                model_id=record.model_id,
                aspect=record.aspect,
                seed=record.seed,
                width=record.width,
                height=record.height,
                image_url=result.url,
            )
        )

    mirrored = sum(1 for result in results if result.mirrored)
    if mirror is not None:
        logger.info(
            "history.mirror_completed",
            collection_id=collection_id,
            mirrored=mirrored,
            kept_original=len(results) - mirrored,
        )
    return items
