"""Story-to-video pipeline: sequences adapters and the compositor per operation."""

from __future__ import annotations

import asyncio
import logging

import httpx

from app.config import Settings
from models.jobs import StylizationJob, Transcript, TranscriptionJob, VideoCompositionJob
from models.places import GeoPoint, PanoramaRequest
from models.profile import PipelineProfile
from services.assets import TempAssetStore
from services.captions import reflow_caption
from services.compositor import VideoCompositor
from services.geocoding import GeocodingClient
from services.images import sniff_image_format, to_jpeg
from services.streetview import StreetViewClient
from services.stylization import PROVIDER as STYLIZATION_PROVIDER, StylizationClient, truncate_prompt
from services.text_generation import TextGenerationClient, limit_words
from services.transcription import TranscriptionClient, speech_model_for

logger = logging.getLogger(__name__)


class Pipeline:
    """
    One instance per process. Holds only immutable collaborators, so
    concurrent requests share nothing mutable.
    """

    def __init__(
        self,
        *,
        profile: PipelineProfile,
        geocoding: GeocodingClient,
        streetview: StreetViewClient,
        transcription: TranscriptionClient,
        text_generation: TextGenerationClient,
        stylization: StylizationClient,
        compositor: VideoCompositor,
    ) -> None:
        self.profile = profile
        self.geocoding = geocoding
        self.streetview = streetview
        self.transcription = transcription
        self.text_generation = text_generation
        self.stylization = stylization
        self.compositor = compositor

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient) -> "Pipeline":
        timeout = float(settings.http_timeout_seconds)
        profile = settings.profile
        return cls(
            profile=profile,
            geocoding=GeocodingClient(client, api_key=settings.gmaps_key, timeout=timeout),
            streetview=StreetViewClient(client, api_key=settings.gmaps_key, timeout=timeout),
            transcription=TranscriptionClient(client, api_key=settings.deepgram_key, timeout=timeout),
            text_generation=TextGenerationClient(
                client,
                api_key=settings.gemini_key,
                model=profile.text_model,
                temperature=profile.temperature,
                timeout=timeout,
            ),
            stylization=StylizationClient(
                client,
                api_key=settings.stability_key,
                profile=profile,
                timeout=timeout,
            ),
            compositor=VideoCompositor(
                TempAssetStore(settings.temp_media_dir),
                ffmpeg_path=settings.ffmpeg_path,
                timeout=float(settings.encoder_timeout_seconds),
                zoom=profile.zoom,
            ),
        )

    async def find_place(self, query: str) -> GeoPoint:
        return await self.geocoding.find_place(query)

    async def static_streetview(self, request: PanoramaRequest) -> bytes:
        return await self.streetview.fetch_panorama(request)

    async def speech_to_text(self, job: TranscriptionJob) -> Transcript:
        # Reject unsupported tags before any outbound call.
        speech_model_for(job.language_tag)
        return await self.transcription.transcribe(job)

    async def generate_prompt(self, story: str) -> str:
        instruction = self.profile.render_prompt(story)
        logger.info(
            "[pipeline] prompt-generation template=%s story_chars=%d",
            self.profile.prompt_template_version,
            len(story),
        )
        return limit_words(await self.text_generation.generate(instruction))

    async def stylize_image(self, image: bytes, prompt: str) -> bytes:
        sniff_image_format(image)
        job = StylizationJob(source_image=image, prompt=truncate_prompt(prompt))
        stylized = await self.stylization.stylize(job)
        return await asyncio.to_thread(to_jpeg, stylized, provider=STYLIZATION_PROVIDER)

    async def to_video(self, image: bytes, audio: bytes, story: str | None = None) -> bytes:
        job = VideoCompositionJob(image=image, audio=audio, caption=reflow_caption(story))
        logger.info("[pipeline] to-video image=%d bytes audio=%d bytes", len(image), len(audio))
        return await self.compositor.compose(job)
