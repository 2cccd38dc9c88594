from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("OIDC_ISSUER", "https://issuer.test")
os.environ.setdefault("JWKS_URL", "https://issuer.test/.well-known/jwks.json")
os.environ.setdefault("OIDC_AUDIENCE", "test-audience")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.application.errors import AuthError, DeliveryError
from src.config.settings import Settings
from src.domain.models.push_subscription import PushSubscription
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    activity,
    activity_reminder,
    animal,
    farm,
    membership,
    notification,
    profile,
    push_subscription,
)
from src.interfaces.http.main import create_app

CRON_SECRET = "cron-test-secret"


class StubJWKSClient:
    """Accepts any token and uses it as the subject, so ``Bearer alice`` is user alice."""

    def __init__(self, *, issuer: str, audience: str | None) -> None:
        self.issuer = issuer
        self.audience = audience

    async def decode_token(
        self, token: str, *, issuer: str, audience: str | None
    ) -> dict[str, Any]:
        if issuer != self.issuer or audience != self.audience:
            raise AuthError("Invalid token issuer or audience")
        return {"sub": token, "iss": issuer, "aud": audience, "given_name": token.title()}


class RecordingPushSender:
    """Records every send; endpoints listed in ``failures`` raise with that upstream status."""

    def __init__(self, failures: dict[str, int | None] | None = None) -> None:
        self.failures = failures or {}
        self.sent: list[tuple[str, dict[str, Any]]] = []

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        if subscription.endpoint in self.failures:
            status = self.failures[subscription.endpoint]
            raise DeliveryError(f"Push service returned {status}", upstream_status=status)
        self.sent.append((subscription.endpoint, payload))


@pytest.fixture()
def push_sender_factory():
    return RecordingPushSender


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "oidc_issuer": "https://issuer.test",
            "jwks_url": "https://issuer.test/.well-known/jwks.json",
            "oidc_audience": "test-audience",
            "log_level": "INFO",
            "environment": "test",
            "jwks_cache_ttl": 0,
            "cron_secret": CRON_SECRET,
            "reminder_run_deadline_seconds": None,
            "vapid_public_key": "BPublicTestKey",
        }
    )


@pytest.fixture()
def jwks_client(test_settings: Settings) -> StubJWKSClient:
    return StubJWKSClient(
        issuer=str(test_settings.oidc_issuer),
        audience=test_settings.oidc_audience,
    )


@pytest.fixture()
def push_sender() -> RecordingPushSender:
    return RecordingPushSender()


@pytest.fixture()
def app(test_settings: Settings, jwks_client: StubJWKSClient, push_sender: RecordingPushSender):
    return create_app(settings=test_settings, jwks_client=jwks_client, push_sender=push_sender)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
        await engine.dispose()


def auth(user: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user}"}


@pytest.fixture()
def headers():
    return auth
