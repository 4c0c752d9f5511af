"""HTTP client wrapper for the EVE FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx

API_URL = os.getenv("EVE_API_URL", "http://localhost:8000")


def check_capability(api_url: str = API_URL) -> dict[str, bool]:
    """Return the server's ``{available, hasAPIKey}`` capability flags.

    An unreachable server reports no capability rather than raising, so the
    caller can continue with heuristic-only processing.
    """
    try:
        r = httpx.get(f"{api_url}/api/health", timeout=5.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError:
        return {"available": False, "hasAPIKey": False}


def analyze_transcript(
    transcript: str,
    duration_seconds: float = 0.0,
    mode: str | None = None,
    api_url: str = API_URL,
) -> dict[str, Any]:
    """Send a transcript to the analyze endpoint.

    Raises:
        httpx.HTTPError: Transport failure or non-2xx response.
    """
    payload: dict[str, Any] = {"transcript": transcript, "durationSeconds": duration_seconds}
    if mode:
        payload["mode"] = mode
    r = httpx.post(f"{api_url}/api/analyze", json=payload, timeout=120.0)
    r.raise_for_status()
    return r.json()  # type: ignore[no-any-return]


def transcribe_audio(
    file_content: bytes,
    filename: str,
    api_url: str = API_URL,
) -> dict[str, Any]:
    """Upload a recording to the transcription endpoint.

    Raises:
        httpx.HTTPError: Transport failure or non-2xx response.
    """
    r = httpx.post(
        f"{api_url}/api/transcribe",
        files={"audio": (filename, file_content)},
        timeout=300.0,
    )
    r.raise_for_status()
    return r.json()  # type: ignore[no-any-return]
