"""HTTP client layer for webwise."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
import json
from typing import Any

import httpx

from ._version import __version__
from .constants import DATASET_URL, DEFAULT_AI_MODEL, DEFAULT_TIMEOUT_SECONDS, GEMINI_API_URL_TEMPLATE
from .exceptions import ContentError, HttpStatusError, NetworkError, RequestTimeoutError

_SHARED_CLIENT: ContextVar[httpx.Client | None] = ContextVar(
    "webwise_shared_client", default=None
)


def _build_headers() -> dict[str, str]:
    return {
        "User-Agent": f"webwise/{__version__}",
        "Accept": "application/json",
    }


@contextmanager
def use_shared_client(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Iterator[httpx.Client]:
    """Provide a reusable HTTP client for all requests within a CLI run."""
    with httpx.Client(timeout=timeout, follow_redirects=True, headers=_build_headers()) as client:
        token = _SHARED_CLIENT.set(client)
        try:
            yield client
        finally:
            _SHARED_CLIENT.reset(token)


def _send(
    method: str,
    url: str,
    *,
    timeout: float,
    params: Mapping[str, str] | None = None,
    json_body: Any = None,
    headers: Mapping[str, str] | None = None,
) -> str:
    """Send one request, retrying a single time on connection failure."""
    shared_client = _SHARED_CLIENT.get()
    extra_headers = dict(headers or {})
    retry_once = True
    while True:
        try:
            if shared_client is None or timeout != DEFAULT_TIMEOUT_SECONDS:
                with httpx.Client(
                    timeout=timeout, follow_redirects=True, headers=_build_headers()
                ) as client:
                    response = client.request(
                        method, url, params=params, json=json_body, headers=extra_headers
                    )
            else:
                response = shared_client.request(
                    method, url, params=params, json=json_body, headers=extra_headers
                )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(url) from exc
        except httpx.ConnectError as exc:
            if retry_once:
                retry_once = False
                continue
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except httpx.RequestError as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise HttpStatusError(response.status_code, url)

        body = response.text
        if not body.strip():
            raise ContentError(url)
        return body


def _parse_json_payload(raw: str, url: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ContentError(url) from exc


def fetch_dataset_payload(
    url: str = DATASET_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """Download the web-features catalog (``data.json``)."""
    payload = _parse_json_payload(_send("GET", url, timeout=timeout), url)
    if not isinstance(payload, dict):
        raise ContentError(url)
    return payload


def generate_content(
    prompt: str,
    *,
    api_key: str,
    model: str = DEFAULT_AI_MODEL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Run a single-prompt Gemini generation and return the first candidate's text."""
    url = GEMINI_API_URL_TEMPLATE.format(model=model)
    body = {"contents": [{"parts": [{"text": prompt}]}]}
    payload = _parse_json_payload(
        _send(
            "POST",
            url,
            timeout=timeout,
            json_body=body,
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
        ),
        url,
    )
    if not isinstance(payload, dict):
        raise ContentError(url)

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise ContentError(url)
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise ContentError(url)

    text = "".join(
        part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    if not text.strip():
        raise ContentError(url)
    return text
