"""Catalog endpoint feeding the request composer.

GET /api/options - Models, aspect tags, style presets and default settings.
"""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from image_studio.services.image_generation import catalog

router = APIRouter(prefix="/api", tags=["options"])


class ModelDTO(BaseModel):
    id: str
    name: str
    tags: list[str]


class DefaultsDTO(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    model_id: str
    aspect: str
    resolution: int
    cfg: float
    steps: int
    num_images: int


class OptionsResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    models: list[ModelDTO]
    aspects: list[str]
    style_presets: list[str]
    defaults: DefaultsDTO


@router.get("/options", response_model=OptionsResponse)
async def get_options() -> OptionsResponse:
    return OptionsResponse(
        models=[ModelDTO(id=m.id, name=m.name, tags=list(m.tags)) for m in catalog.MODELS],
        aspects=list(catalog.ASPECT_RATIOS),
        style_presets=list(catalog.STYLE_PRESETS),
        defaults=DefaultsDTO(
            model_id=catalog.DEFAULT_MODEL_ID,
            aspect=catalog.DEFAULT_ASPECT,
            resolution=catalog.DEFAULT_RESOLUTION,
            cfg=catalog.DEFAULT_CFG,
            steps=catalog.DEFAULT_STEPS,
            num_images=catalog.DEFAULT_NUM_IMAGES,
        ),
    )
