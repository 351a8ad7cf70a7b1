from fastapi.testclient import TestClient

from app.main import create_app
from services.pipeline import Pipeline

from conftest import make_settings


def test_lifespan_builds_pipeline_from_settings(tmp_path) -> None:
    app = create_app(make_settings(tmp_path, gmaps_key=""))
    with TestClient(app) as client:
        assert isinstance(app.state.pipeline, Pipeline)
        assert app.state.pipeline.profile.name == "default"
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_route_is_404(tmp_path) -> None:
    with TestClient(create_app(make_settings(tmp_path))) as client:
        response = client.get("/api/does-not-exist")
    assert response.status_code == 404
