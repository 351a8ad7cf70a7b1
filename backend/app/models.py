from pydantic import BaseModel, ConfigDict, Field


class FindPlaceRequest(BaseModel):
    query: str = Field(min_length=1)


class LatLng(BaseModel):
    lat: float
    lng: float


class FindPlaceResponse(BaseModel):
    location: LatLng


class StreetViewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pano_id: str = Field(alias="panoID", min_length=1)
    heading: float
    pitch: float


class TranscriptResponse(BaseModel):
    transcript: str
    language: str


class PromptRequest(BaseModel):
    prompt: str


class PromptResponse(BaseModel):
    prompt: str


class ErrorResponse(BaseModel):
    detail: str
    kind: str
    provider: str | None = None
