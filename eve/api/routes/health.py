"""Capability endpoint: tells callers whether the model-backed path can run."""

from __future__ import annotations

from fastapi import APIRouter

from eve.api.models import CapabilityResponse
from eve.config import settings
from eve.pipeline_config import ProcessingMode

router = APIRouter()


@router.get("/api/health", response_model=CapabilityResponse)
async def capability() -> CapabilityResponse:
    """Report whether model-backed extraction is available.

    ``available`` is False when no API key is configured or the server is
    pinned to heuristic-only processing.
    """
    has_key = settings.model_available
    return CapabilityResponse(
        available=has_key and settings.processing_mode != ProcessingMode.HEURISTIC_ONLY,
        has_api_key=has_key,
    )
