from dataclasses import dataclass


@dataclass(frozen=True)
class TranscriptionJob:
    language_tag: str          # e.g. "zh-TW"; must be in the supported table
    audio: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class Transcript:
    transcript: str            # "" when no speech was detected
    language_tag: str


@dataclass(frozen=True)
class StylizationJob:
    source_image: bytes        # JPEG or PNG
    prompt: str                # already truncated to the provider limit


@dataclass(frozen=True)
class VideoCompositionJob:
    image: bytes               # JPEG or PNG still
    audio: bytes               # narration; any container the encoder can decode
    caption: str | None = None # reflowed caption lines, newline separated
