"""Transcribe endpoint: turn a Dutch audio recording into transcript text."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, File, HTTPException, UploadFile

from eve.api.models import TranscribeResponse
from eve.config import settings
from eve.extraction.text import count_words
from eve.ingestion.models import TRANSCRIPT_LANGUAGE

logger = logging.getLogger(__name__)

router = APIRouter()

# 50 MB upload limit
MAX_UPLOAD_BYTES = 50 * 1024 * 1024


def _transcribe_audio(raw: bytes) -> TranscribeResponse:
    """Transcribe audio bytes via the AssemblyAI SDK.

    The SDK accepts bytes directly, so no temp file is needed.

    Raises:
        HTTPException(400): Bad audio content (transcript error from AssemblyAI).
        HTTPException(503): Infrastructure error (bad API key, network, provider outage).
    """
    import assemblyai as aai  # type: ignore[import-untyped]  # no stubs; import inside function

    aai.settings.api_key = settings.assemblyai_api_key
    transcriber = aai.Transcriber()
    config = aai.TranscriptionConfig(
        language_code=TRANSCRIPT_LANGUAGE,
        speaker_labels=True,
    )

    try:
        transcript = transcriber.transcribe(raw, config=config)
        if transcript.status == aai.TranscriptStatus.error:
            raise HTTPException(
                status_code=400,
                detail=f"Transcription failed: {transcript.error}",
            )
        text = transcript.text or ""
        speakers: list[str] = []
        for utterance in transcript.utterances or []:
            if utterance.speaker and utterance.speaker not in speakers:
                speakers.append(utterance.speaker)
        return TranscribeResponse(
            text=text,
            duration=float(transcript.audio_duration or 0),
            language=TRANSCRIPT_LANGUAGE,
            word_count=count_words(text),
            speakers=speakers,
        )
    except HTTPException:
        raise
    except Exception as exc:
        # Not the client's fault: invalid API key, network failure, provider outage.
        logger.exception("Transcription service error")
        raise HTTPException(
            status_code=503,
            detail=f"Transcription service unavailable: {exc}",
        ) from exc


@router.post("/api/transcribe", response_model=TranscribeResponse)
async def transcribe(audio: Annotated[UploadFile, File(...)]) -> TranscribeResponse:
    """Transcribe an uploaded recording (Dutch) with AssemblyAI.

    Returns 501 when no AssemblyAI key is configured; callers then fall back to
    live recognition or a text transcript.
    """
    raw = await audio.read()
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {MAX_UPLOAD_BYTES // (1024 * 1024)} MB.",
        )
    if not raw:
        raise HTTPException(status_code=400, detail="No audio provided")

    if not settings.assemblyai_api_key:
        raise HTTPException(
            status_code=501,
            detail="Audio transcription is not configured. Send a text transcript instead.",
        )

    # Run the synchronous SDK in a thread to avoid blocking the event loop.
    return await asyncio.to_thread(_transcribe_audio, raw)
