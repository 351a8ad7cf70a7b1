"""Shared fixtures: settings, fixture media and a scriptable fake encoder."""

from __future__ import annotations

import io
import json
import stat
import sys
import wave
from pathlib import Path

import pytest
from PIL import Image

from app.config import Settings
from models.profile import PROFILES


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_settings(tmp_path: Path, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "gmaps_key": "gmaps-test",
        "deepgram_key": "deepgram-test",
        "gemini_key": "gemini-test",
        "stability_key": "stability-test",
        "http_timeout_seconds": 5,
        "encoder_timeout_seconds": 10,
        "ffmpeg_path": "ffmpeg",
        "temp_media_dir": str(tmp_path / "tmp_media"),
        "cors_allow_origins": ("*",),
        "profile": PROFILES["default"],
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


def make_image(fmt: str = "JPEG", size: tuple[int, int] = (64, 48)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 120, 40)).save(buf, format=fmt)
    return buf.getvalue()


def make_silent_wav(seconds: float = 1.0, rate: int = 16000) -> bytes:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b"\x00\x00" * int(seconds * rate))
    return buf.getvalue()


_FAKE_ENCODER = """#!{python}
import json
import sys
import time

mode = {mode!r}
with open({argv_log!r}, "w") as fh:
    json.dump(sys.argv, fh)
out = sys.argv[-1]
if mode == "ok":
    with open(out, "wb") as fh:
        fh.write(b"\\x00\\x00\\x00\\x18ftypmp42fake-video")
    sys.exit(0)
if mode == "fail":
    sys.stderr.write("Unknown encoder 'libopus'\\n")
    sys.exit(1)
if mode == "hang":
    time.sleep(30)
    sys.exit(0)
if mode == "slow":
    time.sleep(1)
    with open(out, "wb") as fh:
        fh.write(b"late")
    sys.exit(0)
if mode == "no-output":
    sys.exit(0)
"""


class FakeEncoder:
    def __init__(self, root: Path) -> None:
        self._root = root
        self.argv_log = root / "encoder-argv.json"

    def script(self, mode: str) -> str:
        path = self._root / f"fake-ffmpeg-{mode}"
        path.write_text(
            _FAKE_ENCODER.format(python=sys.executable, mode=mode, argv_log=str(self.argv_log)),
            encoding="utf-8",
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    @property
    def argv(self) -> list[str]:
        return json.loads(self.argv_log.read_text(encoding="utf-8"))


@pytest.fixture
def fake_encoder(tmp_path: Path) -> FakeEncoder:
    root = tmp_path / "bin"
    root.mkdir()
    return FakeEncoder(root)
