"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from headerscope import api
from headerscope.api import app, get_exporter, get_pipeline
from headerscope.config import Settings, get_settings
from headerscope.core.errors import AuthenticationError, DownloadError
from headerscope.services.excel_exporter import ExcelExporter
from headerscope.services.pipeline import HeaderExtractionPipeline


class StubTokenProvider:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    def get_token(self) -> str:
        if self.error:
            raise self.error
        return "tok"


class StubDownloader:
    def __init__(self, archives: dict[str, bytes]) -> None:
        self.archives = archives

    def download(self, artifact_name: str, token: str) -> bytes:
        if artifact_name not in self.archives:
            raise DownloadError("HTTP 404 - artifact not found")
        return self.archives[artifact_name]


@pytest.fixture
def remote_settings() -> Settings:
    return Settings(
        _env_file=None,
        api_base_url="https://tenant.example.com",
        token_url="https://auth.example.com/token",
        client_id="client",
        client_secret="secret",
    )


@pytest.fixture
def client(tmp_path):
    app.dependency_overrides[get_exporter] = lambda: ExcelExporter(tmp_path / "report.xlsx")
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_pipeline(pipeline: HeaderExtractionPipeline) -> None:
    app.dependency_overrides[get_pipeline] = lambda: pipeline


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_empty_iflows(client):
    response = client.post("/extract", json={"iflows": []})
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_missing_iflows(client):
    response = client.post("/extract", json={})
    assert response.status_code == 400


def test_extract_with_partial_failure(client, tmp_path, remote_settings, sample_archive):
    _use_pipeline(HeaderExtractionPipeline(
        remote_settings,
        token_provider=StubTokenProvider(),
        downloader=StubDownloader({"MyFlow": sample_archive}),
    ))

    response = client.post("/extract", json={"iflows": ["MyFlow", "Wrong"]})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["file"] == str(tmp_path / "report.xlsx")
    assert body["summary"] == {"total": 2, "processed": 1, "failed": 1}
    assert body["failed"] == [{"iflow": "Wrong", "error": "HTTP 404 - artifact not found"}]
    assert (tmp_path / "report.xlsx").exists()


def test_extract_all_failed(client, tmp_path, remote_settings):
    _use_pipeline(HeaderExtractionPipeline(
        remote_settings,
        token_provider=StubTokenProvider(),
        downloader=StubDownloader({}),
    ))

    body = client.post("/extract", json={"iflows": ["Wrong"]}).json()

    assert body["file"] is None
    assert body["summary"] == {"total": 1, "processed": 0, "failed": 1}
    assert not (tmp_path / "report.xlsx").exists()


def test_authentication_failure(client, remote_settings):
    _use_pipeline(HeaderExtractionPipeline(
        remote_settings,
        token_provider=StubTokenProvider(AuthenticationError("denied")),
        downloader=StubDownloader({}),
    ))

    response = client.post("/extract", json={"iflows": ["MyFlow"]})

    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "denied"}


def test_main_runs_uvicorn_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setenv("HEADERSCOPE_API_HOST", "0.0.0.0")
    monkeypatch.setenv("HEADERSCOPE_API_PORT", "8081")
    monkeypatch.setattr(api, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(api.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    get_settings.cache_clear()

    try:
        api.main()
    finally:
        get_settings.cache_clear()

    assert calls == [((app,), {"host": "0.0.0.0", "port": 8081})]
