from .jobs import (
    StylizationJob,
    Transcript,
    TranscriptionJob,
    VideoCompositionJob,
)
from .places import GeoPoint, PanoramaRequest
from .profile import DEFAULT_PROFILE, PROFILES, PipelineProfile, ZoomCurve

__all__ = [
    "GeoPoint",
    "PanoramaRequest",
    "TranscriptionJob",
    "Transcript",
    "StylizationJob",
    "VideoCompositionJob",
    "PipelineProfile",
    "ZoomCurve",
    "PROFILES",
    "DEFAULT_PROFILE",
]
