"""Speech, prompt, stylization and video routes."""

import logging

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from app.models import PromptRequest, PromptResponse, TranscriptResponse
from models.jobs import TranscriptionJob
from routes.deps import ERROR_RESPONSES, get_pipeline
from services.pipeline import Pipeline

router = APIRouter(tags=["media"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


@router.post("/stt", response_model=TranscriptResponse)
async def speech_to_text(
    language: str = Form(...),
    audio: UploadFile = File(...),
    pipeline: Pipeline = Depends(get_pipeline),
) -> TranscriptResponse:
    logger.info("[media] POST /api/stt language=%s", language)
    job = TranscriptionJob(
        language_tag=language,
        audio=await audio.read(),
        content_type=audio.content_type or "application/octet-stream",
    )
    result = await pipeline.speech_to_text(job)
    return TranscriptResponse(transcript=result.transcript, language=result.language_tag)


@router.post("/prompt-gen", response_model=PromptResponse)
async def prompt_generation(
    body: PromptRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> PromptResponse:
    logger.info("[media] POST /api/prompt-gen")
    return PromptResponse(prompt=await pipeline.generate_prompt(body.prompt))


@router.post("/image-to-image", response_class=Response)
async def image_to_image(
    image: UploadFile = File(...),
    prompt: str = Form(...),
    pipeline: Pipeline = Depends(get_pipeline),
) -> Response:
    logger.info("[media] POST /api/image-to-image prompt_chars=%d", len(prompt))
    stylized = await pipeline.stylize_image(await image.read(), prompt)
    return Response(content=stylized, media_type="image/jpeg")


@router.post("/to-video", response_class=Response)
async def to_video(
    image: UploadFile = File(...),
    audio: UploadFile = File(...),
    prompt: str | None = Form(None),
    pipeline: Pipeline = Depends(get_pipeline),
) -> Response:
    logger.info("[media] POST /api/to-video")
    video = await pipeline.to_video(await image.read(), await audio.read(), prompt)
    return Response(content=video, media_type="video/mp4")
