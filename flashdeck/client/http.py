from __future__ import annotations

import json
from typing import Any

import requests

from flashdeck.errors import DecodeError, NetworkError, ServerError, ValidationError


def send_request(session: requests.Session, method: str, url: str, *, timeout: float, **kwargs: Any) -> requests.Response:
    """Issue one request; transport failures become NetworkError. No retries."""
    try:
        return session.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        raise NetworkError(f"{method} {url} failed: {exc}") from exc


def error_detail(response: requests.Response) -> str:
    """Prefer the JSON `error` field of a failure body, else the raw text."""
    text = response.text or ""
    try:
        payload = json.loads(text) if text else None
    except json.JSONDecodeError:
        payload = None
    if isinstance(payload, dict):
        detail = payload.get("error") or payload.get("detail")
        if detail:
            return str(detail)
    return text.strip() or (response.reason or "")


def raise_for_status(response: requests.Response, action: str) -> None:
    if response.ok:
        return
    message = f"Failed to {action}: {response.status_code} {error_detail(response)}".rstrip()
    if response.status_code == 400:
        raise ValidationError(message)
    raise ServerError(message, status_code=response.status_code)


def decode_json(response: requests.Response, action: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(f"Failed to {action}: response is not valid JSON ({exc})") from exc


__all__ = ["send_request", "error_detail", "raise_for_status", "decode_json"]
