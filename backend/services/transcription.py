"""Speech-to-text via Deepgram prerecorded transcription."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from models.jobs import Transcript, TranscriptionJob
from services.errors import NoResultFailure, ValidationFailure
from services.upstream import json_body, send

logger = logging.getLogger(__name__)

PROVIDER = "speech-to-text"
LISTEN_URL = "https://api.deepgram.com/v1/listen"


@dataclass(frozen=True)
class SpeechModel:
    model: str
    language: str


# Language tag -> provider model configuration.
SUPPORTED_LANGUAGES: dict[str, SpeechModel] = {
    "en": SpeechModel("nova-2", "en"),
    "en-US": SpeechModel("nova-2", "en-US"),
    "en-GB": SpeechModel("nova-2", "en-GB"),
    "zh-TW": SpeechModel("nova-2", "zh-TW"),
    "zh-CN": SpeechModel("nova-2", "zh-CN"),
    "ja": SpeechModel("nova-2", "ja"),
    "ko": SpeechModel("nova-2", "ko"),
    "es": SpeechModel("nova-2", "es"),
    "fr": SpeechModel("nova-2", "fr"),
    "de": SpeechModel("nova-2", "de"),
}


def normalize_language_tag(language_tag: str) -> str:
    return language_tag.strip()


def speech_model_for(language_tag: str) -> SpeechModel:
    model = SUPPORTED_LANGUAGES.get(normalize_language_tag(language_tag))
    if model is None:
        raise ValidationFailure(f"unsupported language: {language_tag!r}", provider=PROVIDER)
    return model


class TranscriptionClient:
    def __init__(self, client: httpx.AsyncClient, *, api_key: str, timeout: float) -> None:
        self._client = client
        self._api_key = api_key
        self._timeout = timeout

    async def transcribe(self, job: TranscriptionJob) -> Transcript:
        language_tag = normalize_language_tag(job.language_tag)
        speech_model = speech_model_for(language_tag)
        logger.info(
            "[transcription] %d bytes model=%s language=%s",
            len(job.audio),
            speech_model.model,
            speech_model.language,
        )
        response = await send(
            self._client,
            "POST",
            LISTEN_URL,
            provider=PROVIDER,
            timeout=self._timeout,
            params={"model": speech_model.model, "language": speech_model.language},
            headers={
                "Authorization": f"Token {self._api_key}",
                "Content-Type": job.content_type,
            },
            content=job.audio,
        )
        data = json_body(response, provider=PROVIDER)
        channels = (data.get("results") or {}).get("channels") or []
        alternatives = (channels[0].get("alternatives") or []) if channels else []
        if not alternatives:
            raise NoResultFailure("transcription returned no channels", provider=PROVIDER)
        # Silence yields an empty transcript, which is a valid result.
        transcript = alternatives[0].get("transcript") or ""
        return Transcript(transcript=transcript, language_tag=language_tag)
