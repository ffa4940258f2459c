"""Prompt composition for image generation."""

from typing import Optional


def build_prompt(prompt: Optional[str], style: Optional[str] = None) -> str:
    """Combine the user prompt and an optional style preset into provider text.

    The style is lower-cased and appended after a comma, e.g.
    ("a red fox", "Watercolor") -> "a red fox, watercolor".

    Args:
        prompt: Text prompt from the user (may be None or padded with whitespace)
        style: Optional style preset label

    Returns:
        Combined prompt text, stripped of surrounding whitespace
    """
    style_suffix = f", {style.lower()}" if style else ""
    return f"{(prompt or '').strip()}{style_suffix}".strip()
