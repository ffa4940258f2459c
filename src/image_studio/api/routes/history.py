"""Generation history API endpoints.

This module implements the shared history of a collection:
- POST /api/history - Append a batch of generated images (optionally mirrored)
- GET /api/history?collectionId=... - Newest 200 items of a collection

Collections are addressed only by their identifier; there is no ownership check.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from image_studio.api.dependencies import get_mirror, get_uow_factory
from image_studio.api.errors import ApiError
from image_studio.models.history_item import HistoryItem
from image_studio.services.history import HistoryRecord, build_history_items
from image_studio.services.mirror.pinata_client import PinataClient
from image_studio.uow import UnitOfWorkFactory

logger = structlog.get_logger()
router = APIRouter(prefix="/api/history", tags=["history"])

# Column ranges: width/height are INTEGER, seed and created_at are BIGINT
INT32_MAX = 2**31 - 1
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1


# Request/Response Models


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


class HistoryItemIn(CamelModel):
    """A generated image submitted for persistence."""

    prompt: str = Field(default="")
    style: Optional[str] = Field(default=None)
    model_id: str
    aspect: str
    seed: int = Field(ge=BIGINT_MIN, le=BIGINT_MAX)
    width: int = Field(ge=0, le=INT32_MAX)
    height: int = Field(ge=0, le=INT32_MAX)
    image_url: str
    created_at: Optional[int] = Field(
        default=None,
        ge=0,
        le=BIGINT_MAX,
        description="Epoch milliseconds; server time when omitted",
    )

    def to_record(self) -> HistoryRecord:
        return HistoryRecord(
            prompt=self.prompt,
            style=self.style,
            model_id=self.model_id,
            aspect=self.aspect,
            seed=self.seed,
            width=self.width,
            height=self.height,
            image_url=self.image_url,
            created_at=self.created_at,
        )


class HistoryWriteRequest(CamelModel):
    collection_id: Optional[str] = None
    items: Optional[list[HistoryItemIn]] = None


class HistoryWriteResponse(BaseModel):
    ok: bool


class HistoryItemDTO(CamelModel):
    """Persisted history item as returned to the UI."""

    id: str
    collection_id: str
    created_at: int
    prompt: str
    style: Optional[str]
    model_id: str
    aspect: str
    seed: int
    width: int
    height: int
    image_url: str

    @classmethod
    def from_entity(cls, item: HistoryItem) -> "HistoryItemDTO":
        """Build DTO from entity, filling defaults for null columns."""
        return cls(
            id=item.id,
            collection_id=item.collection_id,
            created_at=int(item.created_at),
            prompt=item.prompt or "",
            style=item.style,
            model_id=item.model_id or "",
            aspect=item.aspect or "1:1",
            seed=int(item.seed or 0),
            width=int(item.width or 0),
            height=int(item.height or 0),
            image_url=item.image_url or "",
        )


class HistoryReadResponse(BaseModel):
    items: list[HistoryItemDTO]


# API Endpoints


@router.post("", response_model=HistoryWriteResponse, status_code=status.HTTP_200_OK)
async def write_history(
    request: HistoryWriteRequest,
    uow_factory: Optional[UnitOfWorkFactory] = Depends(get_uow_factory),
    mirror: Optional[PinataClient] = Depends(get_mirror),
) -> HistoryWriteResponse:
    """Append generated images to a collection's history.

    Raises:
        ApiError 400: Missing collectionId or empty items
        ApiError 501: No history store configured

    Example:
        POST /api/history
        {
            "collectionId": "abc123",
            "items": [{"prompt": "a fox", "style": null, "modelId": "flux-dev",
                       "aspect": "1:1", "seed": 7, "width": 768, "height": 768,
                       "imageUrl": "https://replicate.delivery/..."}]
        }

        Response 200:
        {"ok": true}
    """
    if not request.collection_id or not request.items:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid payload")

    if uow_factory is None:
        raise ApiError(status.HTTP_501_NOT_IMPLEMENTED, "Database not configured")

    items = await build_history_items(
        request.collection_id,
        [item.to_record() for item in request.items],
        mirror=mirror,
    )

    async with await uow_factory() as uow:
        await uow.history_items.add_many(items)

    logger.info("history.written", collection_id=request.collection_id, count=len(items))
    return HistoryWriteResponse(ok=True)


@router.get("", response_model=HistoryReadResponse, status_code=status.HTTP_200_OK)
async def read_history(
    collection_id: Optional[str] = Query(default=None, alias="collectionId"),
    uow_factory: Optional[UnitOfWorkFactory] = Depends(get_uow_factory),
) -> HistoryReadResponse:
    """Return the newest items of a collection.

    Without a configured history store the response is an empty list, so the
    UI keeps working.

    Raises:
        ApiError 400: Missing collectionId
    """
    if not collection_id:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Missing collectionId")

    if uow_factory is None:
        return HistoryReadResponse(items=[])

    async with await uow_factory() as uow:
        items = await uow.history_items.list_by_collection(collection_id)

    return HistoryReadResponse(items=[HistoryItemDTO.from_entity(item) for item in items])
