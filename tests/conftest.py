from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pdfsync.config import Config
from pdfsync.core.coordinator import PresentationCoordinator
from pdfsync.core.passphrase import PassphraseManager
from pdfsync.main import create_app

PASSPHRASE = "abc123"


class FakeSocket:
    """Records frames; optionally fails every send like a dead peer."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list = []
        self.fail = fail

    async def send_json(self, data: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)

    def types(self) -> list:
        return [frame["type"] for frame in self.sent]


@pytest.fixture
def coordinator() -> PresentationCoordinator:
    return PresentationCoordinator(PassphraseManager(initial=PASSPHRASE))


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        host="127.0.0.1",
        port=3000,
        log_level="info",
        upload_dir=tmp_path / "uploads",
        max_upload_mb=1,
        cors_origins=["*"],
        passphrase_bytes=8,
        initial_passphrase=PASSPHRASE,
    )


@pytest.fixture
def client(config: Config):
    with TestClient(create_app(config)) as c:
        yield c
