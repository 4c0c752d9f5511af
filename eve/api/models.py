"""Pydantic request/response schemas for the EVE API.

Field names are camelCase on the wire (same as the export document); Python
code uses the snake_case attribute names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eve.extraction.errors import ModelErrorKind
from eve.extraction.models import Level, MeetingType, ProcessingMethod, Sentiment
from eve.pipeline_config import ProcessingMode


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CapabilityResponse(CamelModel):
    """Response body for /api/health, consulted to decide ``model_available``."""

    available: bool
    has_api_key: bool = Field(alias="hasAPIKey")


class ActionItemModel(CamelModel):
    task: str
    owner: str
    due_hint: str
    priority: Level
    rationale: str | None = None


class MeetingStatsModel(CamelModel):
    word_count: int
    sentence_count: int
    duration_seconds: float
    speaking_rate_per_minute: int


class MeetingRecordModel(CamelModel):
    """Canonical meeting record as returned by the API."""

    meeting_type: MeetingType
    summary: str
    key_decisions: list[str]
    action_items: list[ActionItemModel]
    key_insights: list[str]
    follow_up_needed: list[str]
    next_steps: list[str]
    blockers: list[str]
    participants: list[str]
    sentiment: Sentiment | None = None
    urgency: Level | None = None
    topics: list[str] = []
    stats: MeetingStatsModel
    processing_method: ProcessingMethod


class FallbackNoticeModel(CamelModel):
    kind: ModelErrorKind
    message: str


class AnalyzeRequest(CamelModel):
    """Request body for the /api/analyze endpoint."""

    transcript: str
    duration_seconds: float = 0.0
    mode: ProcessingMode | None = None


class AnalyzeResponse(MeetingRecordModel):
    """Meeting record plus the fallback notice, if the model path failed."""

    notice: FallbackNoticeModel | None = None


class TranscribeResponse(CamelModel):
    """Response body for the /api/transcribe endpoint."""

    text: str
    duration: float
    language: str
    word_count: int
    speakers: list[str] = []


class ExportRequest(CamelModel):
    """Request body for the /api/export endpoint."""

    transcript: str
    record: MeetingRecordModel
    duration_seconds: float | None = None
