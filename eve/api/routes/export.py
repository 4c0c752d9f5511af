"""Export endpoint: package a finished meeting as a downloadable JSON document."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from eve.api.models import ExportRequest
from eve.export import build_export, export_filename
from eve.extraction.schema import record_from_dict

router = APIRouter()


@router.post("/api/export")
async def export_meeting(request: ExportRequest) -> JSONResponse:
    """Return the record, transcript and metadata as one JSON attachment."""
    record = record_from_dict(request.record.model_dump(by_alias=True, mode="json"))
    exported_at = datetime.now(UTC)
    document = build_export(record, request.transcript, request.duration_seconds, exported_at)
    return JSONResponse(
        content=document,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(exported_at)}"'
        },
    )
