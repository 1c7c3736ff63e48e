import logging

import pytest

from flashdeck.client.store import FlashcardStore
from flashdeck.logging_config import get_logger, resolve_level
from flashdeck.utils.settings import default_settings


def test_request_timeout_defaults_and_parses(monkeypatch):
    monkeypatch.delenv("FLASHDECK_REQUEST_TIMEOUT", raising=False)
    assert default_settings().request_timeout == 10.0

    monkeypatch.setenv("FLASHDECK_REQUEST_TIMEOUT", "2.5")
    assert default_settings().request_timeout == 2.5


@pytest.mark.parametrize("raw", ["ten", "0", "-3", "nan"])
def test_malformed_request_timeout_is_reported_by_name(monkeypatch, raw):
    monkeypatch.setenv("FLASHDECK_REQUEST_TIMEOUT", raw)

    with pytest.raises(ValueError, match="FLASHDECK_REQUEST_TIMEOUT"):
        FlashcardStore("http://proxy.local")


def test_override_wins_over_environment(monkeypatch):
    monkeypatch.setenv("FLASHDECK_KV_PREFIX", "from-env")

    assert default_settings(override={"kv_prefix": "decks"}).kv_prefix == "decks"


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("FLASHDECK_LOG_LEVEL", "warning")
    assert get_logger("flashdeck.test.env-level").level == logging.WARNING

    monkeypatch.setenv("FLASHDECK_LOG_LEVEL", "chatty")
    assert resolve_level() == logging.INFO
    assert resolve_level(logging.DEBUG) == logging.DEBUG


def test_get_logger_reuses_handler():
    first = get_logger("flashdeck.test.reuse")
    second = get_logger("flashdeck.test.reuse", "ERROR")

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.ERROR
