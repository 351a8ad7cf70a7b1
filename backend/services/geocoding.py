"""Place lookup via the Google Places "find place from text" endpoint."""

from __future__ import annotations

import logging

import httpx

from models.places import GeoPoint
from services.errors import NoResultFailure, TransportFailure
from services.upstream import json_body, send

logger = logging.getLogger(__name__)

PROVIDER = "geocoding"
FIND_PLACE_URL = "https://maps.googleapis.com/maps/api/place/findplacefromtext/json"


class GeocodingClient:
    def __init__(self, client: httpx.AsyncClient, *, api_key: str, timeout: float) -> None:
        self._client = client
        self._api_key = api_key
        self._timeout = timeout

    async def find_place(self, query: str) -> GeoPoint:
        """Resolve free text to the first candidate's coordinates."""
        logger.info("[geocoding] find_place query=%r", query)
        response = await send(
            self._client,
            "GET",
            FIND_PLACE_URL,
            provider=PROVIDER,
            timeout=self._timeout,
            params={
                "key": self._api_key,
                "fields": "geometry",
                "input": query,
                "inputtype": "textquery",
            },
        )
        data = json_body(response, provider=PROVIDER)
        if data.get("error_message"):
            raise TransportFailure(data["error_message"], provider=PROVIDER)

        candidates = data.get("candidates") or []
        location = (candidates[0].get("geometry") or {}).get("location") if candidates else None
        if not location or "lat" not in location or "lng" not in location:
            raise NoResultFailure("No location found", provider=PROVIDER)
        return GeoPoint(latitude=float(location["lat"]), longitude=float(location["lng"]))
