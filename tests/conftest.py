from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from spa_booking.config import Settings
from spa_booking.main import create_app

ADMIN_KEY = "test-admin-key"


class RecordingMailer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[Tuple[str, str, str]] = []

    @property
    def enabled(self) -> bool:
        return True

    def send(self, to_email: str, subject: str, html_body: str) -> None:
        if self.fail:
            raise ConnectionError("smtp unreachable")
        self.sent.append((to_email, subject, html_body))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'spa-booking-test.db'}",
        admin_key=ADMIN_KEY,
    )


@pytest.fixture
def admin_key() -> str:
    return ADMIN_KEY


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def failing_mailer() -> RecordingMailer:
    return RecordingMailer(fail=True)


@pytest.fixture
def make_app(settings: Settings) -> Callable[..., FastAPI]:
    def _make(mailer: Optional[RecordingMailer] = None) -> FastAPI:
        return create_app(settings, mailer=mailer or RecordingMailer())

    return _make


@pytest.fixture
def client(make_app: Callable[..., FastAPI], mailer: RecordingMailer) -> Iterator[TestClient]:
    with TestClient(make_app(mailer)) as test_client:
        yield test_client
