"""Shared pytest fixtures."""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from reelgate.app import App
from reelgate.config import Config
from reelgate.core.core import Core
from reelgate.web.server import create_fastapi_app

PASSWORD = "letmein"
VIDEO_BYTES = bytes(i % 251 for i in range(1000))


class FakeClock:
    """Manually advanced clock for deterministic expiry."""

    def __init__(self) -> None:
        self.current = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def video_bytes() -> bytes:
    return VIDEO_BYTES


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    """A 1000-byte stand-in for the video."""
    path = tmp_path / "movie.mp4"
    path.write_bytes(VIDEO_BYTES)
    return path


@pytest.fixture
def config(video_file: Path) -> Config:
    return Config(password=PASSWORD, video_path=str(video_file), stream_chunk_size=64)


@pytest.fixture
def core(config: Config, clock: FakeClock) -> Core:
    return Core(config, clock)


@pytest.fixture
def make_client(config: Config, clock: FakeClock) -> Iterator[Callable[..., TestClient]]:
    """Build a TestClient for an app with optional config overrides."""
    clients: list[TestClient] = []

    def factory(**overrides: Any) -> TestClient:
        app_config = config.model_copy(update=overrides)
        client = TestClient(create_fastapi_app(App(app_config, clock), app_config))
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    return make_client()


@pytest.fixture
def session_token(client: TestClient) -> str:
    response = client.post("/api/verify-password", json={"password": PASSWORD})
    return response.json()["token"]


@pytest.fixture
def media_token(client: TestClient, session_token: str) -> str:
    response = client.get("/api/video-token", headers={"Authorization": f"Bearer {session_token}"})
    return response.json()["token"]
