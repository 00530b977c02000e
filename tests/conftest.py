import hashlib
import hmac

import pytest
from fastapi.testclient import TestClient

from webhook_probe.config import Settings
from webhook_probe.webhook.consumer import create_consumer_app

SECRET = "sk_prod_123456"


def sign(body: bytes, secret: str = SECRET) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.fixture
def settings() -> Settings:
    return Settings(secret=SECRET, port=3000)


@pytest.fixture
def blocks() -> list[str]:
    return []


@pytest.fixture
def client(settings: Settings, blocks: list[str]) -> TestClient:
    app = create_consumer_app(settings, sink=blocks.append)
    return TestClient(app)
