import pathlib
import sys

import pytest

# Ensure the repository root is on the path for direct test runs.
REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from fastapi.testclient import TestClient

import service_app
from flashdeck.client.store import FlashcardStore
from flashdeck.db.kv import KeyValueFlashcards

from fakes import FIXED_NOW, FakeAsyncRedis, TestClientAdapter, session_with


@pytest.fixture
def redis_backend() -> FakeAsyncRedis:
    return FakeAsyncRedis()


@pytest.fixture
def kv(redis_backend) -> KeyValueFlashcards:
    return KeyValueFlashcards(redis_backend, prefix="flashcards")


@pytest.fixture
def api(kv):
    service_app.app.dependency_overrides[service_app.get_flashcards] = lambda: kv
    service_app.app.dependency_overrides[service_app.get_clock] = lambda: (lambda: FIXED_NOW)
    with TestClient(service_app.app) as client:
        yield client
    service_app.app.dependency_overrides.clear()


@pytest.fixture
def proxy_adapter(api) -> TestClientAdapter:
    return TestClientAdapter(api)


@pytest.fixture
def store(proxy_adapter) -> FlashcardStore:
    return FlashcardStore("http://testserver", session=session_with(proxy_adapter), timeout=5)
