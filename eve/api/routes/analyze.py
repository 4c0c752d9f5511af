"""Analyze endpoint: run the extraction pipeline on a transcript."""

from __future__ import annotations

import asyncio
from dataclasses import asdict

from fastapi import APIRouter

from eve.api.models import AnalyzeRequest, AnalyzeResponse
from eve.config import settings
from eve.extraction.orchestrator import extract
from eve.extraction.schema import record_to_dict
from eve.ingestion.models import Transcript

router = APIRouter()


@router.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    """Extract a structured meeting record from a Dutch transcript.

    Uses the language model when configured (or when ``mode`` asks for it) and
    falls back to the local heuristic on any model failure; the fallback reason
    is returned in ``notice``. An empty transcript yields a 400.
    """
    mode = request.mode or settings.processing_mode
    transcript = Transcript.from_text(request.transcript, request.duration_seconds)

    # The model call blocks; keep it off the event loop.
    result = await asyncio.to_thread(extract, transcript, mode, settings.model_available)

    body = record_to_dict(result.record)
    body["notice"] = asdict(result.notice) if result.notice else None
    return AnalyzeResponse.model_validate(body)
