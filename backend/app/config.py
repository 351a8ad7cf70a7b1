"""Process configuration, built once at startup and passed to every adapter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from models.profile import DEFAULT_PROFILE, PROFILES, PipelineProfile

BACKEND_ROOT = Path(__file__).resolve().parent.parent


def _read_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, minimum)


def _read_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    """Credentials, timeouts and the selected pipeline profile."""

    gmaps_key: str
    deepgram_key: str
    gemini_key: str
    stability_key: str
    http_timeout_seconds: int
    encoder_timeout_seconds: int
    ffmpeg_path: str
    temp_media_dir: str
    cors_allow_origins: tuple[str, ...]
    profile: PipelineProfile

    @classmethod
    def from_env(
        cls,
        *,
        autoload_dotenv: bool = True,
        dotenv_path: Path | None = None,
    ) -> "Settings":
        if autoload_dotenv:
            load_dotenv(dotenv_path or BACKEND_ROOT / ".env", override=False)
        profile_name = os.getenv("PIPELINE_PROFILE", "").strip() or DEFAULT_PROFILE
        return cls(
            gmaps_key=os.getenv("GMAPS_KEY", "").strip(),
            deepgram_key=os.getenv("DEEPGRAM_KEY", "").strip(),
            gemini_key=os.getenv("GEMINI_KEY", "").strip(),
            stability_key=os.getenv("STABILITY_KEY", "").strip(),
            http_timeout_seconds=_read_int("HTTP_TIMEOUT_SECONDS", default=30, minimum=1),
            encoder_timeout_seconds=_read_int("ENCODER_TIMEOUT_SECONDS", default=120, minimum=1),
            ffmpeg_path=os.getenv("FFMPEG_PATH", "").strip() or "ffmpeg",
            temp_media_dir=os.getenv("TEMP_MEDIA_DIR", "").strip() or str(BACKEND_ROOT / "tmp_media"),
            cors_allow_origins=_read_list("CORS_ALLOW_ORIGINS", default=("*",)),
            profile=PROFILES.get(profile_name, PROFILES[DEFAULT_PROFILE]),
        )

    def missing_credentials(self) -> list[str]:
        missing: list[str] = []
        if not self.gmaps_key:
            missing.append("GMAPS_KEY")
        if not self.deepgram_key:
            missing.append("DEEPGRAM_KEY")
        if not self.gemini_key:
            missing.append("GEMINI_KEY")
        if not self.stability_key:
            missing.append("STABILITY_KEY")
        return missing
