"""Image-to-image stylization via the Stability AI v1 generation API."""

from __future__ import annotations

import logging

import httpx

from models.jobs import StylizationJob
from models.profile import PipelineProfile
from services.errors import NoResultFailure
from services.images import content_type_for, extension_for, sniff_image_format
from services.upstream import send

logger = logging.getLogger(__name__)

PROVIDER = "image-stylization"
IMAGE_TO_IMAGE_URL = "https://api.stability.ai/v1/generation/{engine}/image-to-image"
MAX_PROMPT_CHARS = 2000


def truncate_prompt(prompt: str, limit: int = MAX_PROMPT_CHARS) -> str:
    return prompt[:limit]


class StylizationClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str,
        profile: PipelineProfile,
        timeout: float,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._profile = profile
        self._timeout = timeout

    def _form_fields(self, prompt: str) -> dict[str, str]:
        return {
            "init_image_mode": "IMAGE_STRENGTH",
            "image_strength": f"{self._profile.image_strength:g}",
            "cfg_scale": str(self._profile.cfg_scale),
            "clip_guidance_preset": self._profile.clip_guidance_preset,
            "text_prompts[0][text]": prompt,
            "text_prompts[0][weight]": "1",
        }

    async def stylize(self, job: StylizationJob) -> bytes:
        """Submit one image-to-image job and return the provider's PNG bytes."""
        image_format = sniff_image_format(job.source_image)
        logger.info(
            "[stylization] engine=%s prompt_chars=%d image=%s",
            self._profile.stylization_engine,
            len(job.prompt),
            image_format,
        )
        response = await send(
            self._client,
            "POST",
            IMAGE_TO_IMAGE_URL.format(engine=self._profile.stylization_engine),
            provider=PROVIDER,
            timeout=self._timeout,
            error_prefix="Failed to generate image: ",
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "image/png",
            },
            data=self._form_fields(job.prompt),
            files={
                "init_image": (
                    f"image{extension_for(image_format)}",
                    job.source_image,
                    content_type_for(image_format),
                ),
            },
        )
        if not response.content:
            raise NoResultFailure("provider returned an empty image", provider=PROVIDER)
        return response.content
