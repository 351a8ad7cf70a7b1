"""Caption reflow for the story text attached to a video."""

from __future__ import annotations

CAPTION_LINE_WIDTH = 30


def reflow_caption(text: str | None, width: int = CAPTION_LINE_WIDTH) -> str | None:
    """Split text into lines of at most ``width`` characters.

    Returns None for missing or blank text.
    """
    if text is None:
        return None
    flat = " ".join(text.split())
    if not flat:
        return None
    return "\n".join(flat[i : i + width] for i in range(0, len(flat), width))
