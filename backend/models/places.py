from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PanoramaRequest:
    panorama_id: str           # Street View pano ID
    heading: float             # compass heading, degrees
    pitch: float               # up/down angle, degrees
