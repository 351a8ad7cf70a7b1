"""Street View static panorama fetch."""

from __future__ import annotations

import logging

import httpx

from models.places import PanoramaRequest
from services.errors import NoResultFailure
from services.upstream import send

logger = logging.getLogger(__name__)

PROVIDER = "streetview"
STREETVIEW_URL = "https://maps.googleapis.com/maps/api/streetview"
IMAGE_SIZE = "640x640"


class StreetViewClient:
    def __init__(self, client: httpx.AsyncClient, *, api_key: str, timeout: float) -> None:
        self._client = client
        self._api_key = api_key
        self._timeout = timeout

    async def resolve_image_url(self, request: PanoramaRequest) -> httpx.URL:
        """First step: follow the signed redirect to the final image URL."""
        response = await send(
            self._client,
            "GET",
            STREETVIEW_URL,
            provider=PROVIDER,
            timeout=self._timeout,
            follow_redirects=True,
            params={
                "size": IMAGE_SIZE,
                "key": self._api_key,
                "pano": request.panorama_id,
                "heading": f"{request.heading:.10g}",
                "pitch": f"{request.pitch:.10g}",
            },
        )
        return response.url

    async def fetch_image(self, url: httpx.URL | str) -> bytes:
        response = await send(self._client, "GET", str(url), provider=PROVIDER, timeout=self._timeout)
        if not response.content:
            raise NoResultFailure("empty panorama image", provider=PROVIDER)
        return response.content

    async def fetch_panorama(self, request: PanoramaRequest) -> bytes:
        url = await self.resolve_image_url(request)
        logger.info("[streetview] pano=%s resolved to host=%s", request.panorama_id, httpx.URL(url).host)
        return await self.fetch_image(url)
