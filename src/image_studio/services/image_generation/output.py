"""Normalization of inference provider output into a list of image URLs.

The provider answers in one of two shapes: several images, or a single image.
Each image entry is either a bare URL string or an object carrying a ``url``
(a mapping key, or an attribute such as on Replicate's ``FileOutput``).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class ImageList:
    """Provider returned an ``images`` array."""

    entries: tuple[Any, ...]
    seed: Optional[int] = None


@dataclass(frozen=True)
class SingleImage:
    """Provider returned a single ``image`` value."""

    entry: Any
    seed: Optional[int] = None


ProviderOutput = Union[ImageList, SingleImage]


def _extract_seed(raw: Mapping) -> Optional[int]:
    seed = raw.get("seed")
    if seed is None:
        return None
    return int(seed)


def classify_output(raw: Any) -> ProviderOutput:
    """Tag raw provider output as an ImageList or a SingleImage.

    Mappings are read through their ``images``/``image`` keys (plus an optional
    ``seed``). Bare lists and tuples are image arrays; anything else is a
    single image.

    Args:
        raw: Output object returned by the provider SDK

    Returns:
        Tagged provider output
    """
    if isinstance(raw, Mapping):
        seed = _extract_seed(raw)
        images = raw.get("images")
        if isinstance(images, (list, tuple)):
            return ImageList(entries=tuple(images), seed=seed)
        return SingleImage(entry=raw.get("image"), seed=seed)

    if isinstance(raw, (list, tuple)):
        return ImageList(entries=tuple(raw))

    return SingleImage(entry=raw)


def entry_url(entry: Any) -> Optional[str]:
    """Return the URL carried by an image entry, or None if it has none."""
    if not entry:
        return None
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        url = entry.get("url")
    else:
        url = getattr(entry, "url", None)
    if not url:
        return None
    return str(url)


def image_urls(output: ProviderOutput) -> list[str]:
    """Flatten tagged provider output into an ordered list of URLs.

    Entries without a usable URL are dropped; order is preserved.
    """
    if isinstance(output, ImageList):
        entries: tuple[Any, ...] = output.entries
    else:
        entries = (output.entry,)

    urls = []
    for entry in entries:
        url = entry_url(entry)
        if url:
            urls.append(url)
    return urls
