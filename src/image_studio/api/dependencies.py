"""FastAPI dependency injection functions.

Long-lived clients are built once in the application lifespan and stored on
app.state; these dependencies hand them to route handlers.
"""

from typing import Optional

from fastapi import Request

from image_studio.services.image_generation.replicate_client import ReplicateImageClient
from image_studio.services.mirror.pinata_client import PinataClient
from image_studio.uow import UnitOfWorkFactory


def get_uow_factory(request: Request) -> Optional[UnitOfWorkFactory]:
    """Get UnitOfWork factory from app state.

    Returns:
        UnitOfWork factory from app lifespan, or None when no history store
        is configured

    Example:
        >>> @router.get("/endpoint")
        >>> async def endpoint(uow_factory=Depends(get_uow_factory)):
        ...     async with await uow_factory() as uow:
        ...         await uow.history_items.list_by_collection("abc123")
    """
    return getattr(request.app.state, "uow_factory", None)


def get_image_client(request: Request) -> ReplicateImageClient:
    """Get the inference provider client from app state."""
    return request.app.state.image_client


def get_mirror(request: Request) -> Optional[PinataClient]:
    """Get the Pinata mirror client, or None when mirroring is disabled."""
    return getattr(request.app.state, "mirror", None)
