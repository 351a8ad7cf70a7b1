"""Place lookup and Street View routes."""

import logging

from fastapi import APIRouter, Depends, Response

from app.models import FindPlaceRequest, FindPlaceResponse, LatLng, StreetViewRequest
from models.places import PanoramaRequest
from routes.deps import ERROR_RESPONSES, get_pipeline
from services.pipeline import Pipeline

router = APIRouter(tags=["places"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


@router.post("/find-place", response_model=FindPlaceResponse)
async def find_place(
    body: FindPlaceRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> FindPlaceResponse:
    logger.info("[places] POST /api/find-place")
    point = await pipeline.find_place(body.query)
    return FindPlaceResponse(location=LatLng(lat=point.latitude, lng=point.longitude))


@router.post("/static-streetview", response_class=Response)
async def static_streetview(
    body: StreetViewRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> Response:
    logger.info("[places] POST /api/static-streetview pano=%s", body.pano_id)
    image = await pipeline.static_streetview(
        PanoramaRequest(panorama_id=body.pano_id, heading=body.heading, pitch=body.pitch)
    )
    return Response(content=image, media_type="image/jpeg")
