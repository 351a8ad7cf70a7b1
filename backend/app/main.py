import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings
from routes.media import router as media_router
from routes.places import router as places_router
from services.errors import PipelineError
from services.pipeline import Pipeline

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 422,
    "no_result": 404,
    "transport": 502,
    "timeout": 504,
    "encoding": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    for name in settings.missing_credentials():
        logger.warning("[main] %s is not set; the matching route will fail upstream.", name)
    async with httpx.AsyncClient() as client:
        app.state.pipeline = Pipeline.from_settings(settings, client)
        logger.info("[main] Pipeline ready (profile=%s)", settings.profile.name)
        yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Storyscape API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(_request: Request, exc: PipelineError) -> JSONResponse:
        return JSONResponse(status_code=STATUS_BY_KIND.get(exc.kind, 500), content=exc.to_payload())

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "The server is working"}

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(places_router, prefix="/api")
    app.include_router(media_router, prefix="/api")
    return app


app = create_app()
