"""Prompt synthesis via the Gemini generateContent REST endpoint."""

from __future__ import annotations

import logging

import httpx

from services.errors import NoResultFailure
from services.upstream import json_body, send

logger = logging.getLogger(__name__)

PROVIDER = "text-generation"
GENERATE_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
MAX_PROMPT_WORDS = 200


def limit_words(text: str, max_words: int = MAX_PROMPT_WORDS) -> str:
    words = text.split()
    if len(words) <= max_words:
        return text.strip()
    return " ".join(words[:max_words])


class TextGenerationClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str,
        model: str,
        temperature: float,
        timeout: float,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._timeout = timeout

    async def generate(self, instruction: str) -> str:
        logger.info("[text_generation] model=%s instruction_chars=%d", self._model, len(instruction))
        response = await send(
            self._client,
            "POST",
            GENERATE_URL.format(model=self._model),
            provider=PROVIDER,
            timeout=self._timeout,
            params={"key": self._api_key},
            json={
                "contents": [{"role": "user", "parts": [{"text": instruction}]}],
                "generationConfig": {"temperature": self._temperature},
            },
        )
        data = json_body(response, provider=PROVIDER)
        candidates = data.get("candidates") or []
        parts = ((candidates[0].get("content") or {}).get("parts") or []) if candidates else []
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise NoResultFailure("model returned no text", provider=PROVIDER)
        return text
