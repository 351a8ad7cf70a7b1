import io

import pytest
from PIL import Image

from services.errors import NoResultFailure, ValidationFailure
from services.images import sniff_image_format, to_jpeg

from conftest import make_image


def test_sniff_jpeg_and_png() -> None:
    assert sniff_image_format(make_image("JPEG")) == "jpeg"
    assert sniff_image_format(make_image("PNG")) == "png"


@pytest.mark.parametrize("data", [b"", b"GIF89a\x01\x00", b"RIFF\x00\x00\x00\x00WEBPVP8 "])
def test_sniff_rejects_other_formats(data: bytes) -> None:
    with pytest.raises(ValidationFailure, match="unsupported image format"):
        sniff_image_format(data)


def test_to_jpeg_reencodes_png() -> None:
    out = to_jpeg(make_image("PNG", size=(32, 32)))
    assert out[:3] == b"\xff\xd8\xff"
    with Image.open(io.BytesIO(out)) as img:
        assert img.format == "JPEG"
        assert img.size == (32, 32)


def test_to_jpeg_rejects_garbage_as_no_result() -> None:
    with pytest.raises(NoResultFailure) as excinfo:
        to_jpeg(b"\x89PNG\r\n\x1a\nnot really", provider="image-stylization")
    assert excinfo.value.provider == "image-stylization"
