"""Static catalog of models, aspect ratios and style presets offered by the studio."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModelInfo:
    """A selectable model and the provider route it maps to."""

    id: str
    name: str
    route: str
    tags: tuple[str, ...] = field(default_factory=tuple)


MODELS: tuple[ModelInfo, ...] = (
    ModelInfo("flux-pro", "FLUX.1 Pro", "black-forest-labs/flux-pro", ("quality", "photoreal")),
    ModelInfo("flux-dev", "FLUX.1 Dev", "black-forest-labs/flux-dev", ("balanced", "general")),
    ModelInfo(
        "flux-schnell", "FLUX.1 Schnell", "black-forest-labs/flux-schnell", ("fast", "iterative")
    ),
)

# Logical model id -> Replicate model reference
MODEL_ROUTES: dict[str, str] = {model.id: model.route for model in MODELS}

# Aspect tag -> (width ratio, height ratio)
ASPECT_RATIOS: dict[str, tuple[int, int]] = {
    "1:1": (1, 1),
    "3:4": (3, 4),
    "4:3": (4, 3),
    "16:9": (16, 9),
}

STYLE_PRESETS: tuple[str, ...] = (
    "Cinematic",
    "Analog film",
    "Neon noir",
    "Watercolor",
    "Studio lighting",
    "Isometric",
    "3D render",
    "Fantasy art",
)

DEFAULT_MODEL_ID = "flux-pro"
DEFAULT_ASPECT = "1:1"
DEFAULT_RESOLUTION = 768
DEFAULT_CFG = 7.0
DEFAULT_STEPS = 30
DEFAULT_NUM_IMAGES = 4


def get_route(model_id: str) -> str | None:
    """Return the provider route for a model id, or None if the id is unsupported."""
    return MODEL_ROUTES.get(model_id)
