"""Image sniffing and JPEG re-encoding."""

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from services.errors import NoResultFailure, ValidationFailure

JPEG_QUALITY = 90

_SIGNATURES = {
    "jpeg": (b"\xff\xd8\xff",),
    "png": (b"\x89PNG\r\n\x1a\n",),
}
_CONTENT_TYPES = {"jpeg": "image/jpeg", "png": "image/png"}
_EXTENSIONS = {"jpeg": ".jpg", "png": ".png"}


def sniff_image_format(data: bytes) -> str:
    """Return "jpeg" or "png" from magic bytes; anything else is rejected."""
    for name, signatures in _SIGNATURES.items():
        if any(data.startswith(sig) for sig in signatures):
            return name
    raise ValidationFailure("unsupported image format (expected JPEG or PNG)")


def content_type_for(image_format: str) -> str:
    return _CONTENT_TYPES[image_format]


def extension_for(image_format: str) -> str:
    return _EXTENSIONS[image_format]


def to_jpeg(data: bytes, *, quality: int = JPEG_QUALITY, provider: str | None = None) -> bytes:
    """Re-encode a provider-produced image; undecodable bytes are a "no result"."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise NoResultFailure(f"could not decode image: {exc}", provider=provider) from exc
    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=quality)
    return out.getvalue()
