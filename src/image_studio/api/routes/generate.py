"""Image generation API endpoint.

POST /api/generate - Compose provider parameters from UI settings, run the model
and return normalized image URLs.
"""

from typing import Literal, Optional

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from image_studio.api.dependencies import get_image_client
from image_studio.api.errors import ApiError
from image_studio.services.image_generation.catalog import DEFAULT_NUM_IMAGES, get_route
from image_studio.services.image_generation.dimensions import resolve_dimensions
from image_studio.services.image_generation.prompt_builder import build_prompt
from image_studio.services.image_generation.replicate_client import (
    GenerationInput,
    ReplicateImageClient,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["generate"])

AspectTag = Literal["1:1", "3:4", "4:3", "16:9"]


# Request/Response Models


class GenerateRequest(BaseModel):
    """Generation settings as composed by the UI."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    prompt: str = Field(default="", description="Text prompt")
    style: Optional[str] = Field(default=None, description="Style preset label")
    model_id: str = Field(..., description="flux-pro, flux-dev or flux-schnell")
    aspect: AspectTag = Field(..., description="Aspect ratio tag")
    resolution: int = Field(..., description="Longer output side in pixels")
    cfg: float = Field(..., description="Guidance scale")
    steps: int = Field(..., description="Inference step count")
    seed: int = Field(..., description="Requested seed")
    num_images: int = Field(default=DEFAULT_NUM_IMAGES, description="Images to generate")


class ImageDTO(BaseModel):
    url: str


class GenerateResponse(BaseModel):
    """Normalized generation result."""

    images: list[ImageDTO]
    seed: int
    width: int
    height: int


# API Endpoints


@router.post("/generate", response_model=GenerateResponse, status_code=status.HTTP_200_OK)
async def generate_images(
    request: GenerateRequest,
    image_client: ReplicateImageClient = Depends(get_image_client),
) -> GenerateResponse:
    """Generate images for the composed request.

    Raises:
        ApiError 400: Unsupported modelId (no provider call is made)
        ApiError 500: Provider call or output normalization failed

    Example:
        POST /api/generate
        {
            "prompt": "a lighthouse at dusk",
            "style": "Cinematic",
            "modelId": "flux-dev",
            "aspect": "16:9",
            "resolution": 1024,
            "cfg": 7,
            "steps": 30,
            "seed": 42
        }

        Response 200:
        {
            "images": [{"url": "https://replicate.delivery/..."}],
            "seed": 42,
            "width": 1024,
            "height": 576
        }
    """
    route = get_route(request.model_id)
    if route is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, f"Unsupported modelId: {request.model_id}")

    width, height = resolve_dimensions(request.aspect, request.resolution)
    params = GenerationInput(
        prompt=build_prompt(request.prompt, request.style),
        seed=request.seed,
        steps=request.steps,
        guidance_scale=request.cfg,
        width=width,
        height=height,
        num_images=request.num_images,
    )

    logger.info(
        "generation.started",
        model_id=request.model_id,
        route=route,
        width=width,
        height=height,
        num_images=request.num_images,
    )

    try:
        output = await image_client.generate(route, params)
    except Exception as e:
        logger.error(
            "generation.failed",
            model_id=request.model_id,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=e,
        )
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Generation failed")

    logger.info(
        "generation.completed",
        model_id=request.model_id,
        image_count=len(output.urls),
    )

    return GenerateResponse(
        images=[ImageDTO(url=url) for url in output.urls],
        seed=output.seed if output.seed is not None else request.seed,
        width=width,
        height=height,
    )
