"""Claude-powered extraction of a structured meeting record from a Dutch transcript."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import anthropic
from anthropic import Anthropic
from anthropic.types import TextBlock

from eve.config import settings
from eve.extraction.errors import ModelError, ModelErrorKind
from eve.extraction.models import MeetingRecord, ProcessingMethod
from eve.extraction.schema import coerce_record
from eve.extraction.text import compute_stats

logger = logging.getLogger(__name__)

# Output contract sent to the model. Keys match the export format.
RECORD_SCHEMA = """{
  "meetingType": "standup|brainstorm|beslissing|update|planning|evaluatie|overleg",
  "summary": "2-3 zinnen samenvatting van de meeting",
  "keyDecisions": ["Beslissing die genomen werd"],
  "actionItems": [
    {
      "task": "Specifieke taakbeschrijving",
      "owner": "Naam of rol van de verantwoordelijke",
      "dueHint": "Deadline of tijdsindicatie",
      "priority": "hoog|gemiddeld|laag",
      "rationale": "Waarom deze taak belangrijk is"
    }
  ],
  "keyInsights": ["Belangrijk punt uit de discussie"],
  "followUpNeeded": ["Punt dat opvolging nodig heeft"],
  "nextSteps": ["Volgende stap"],
  "blockers": ["Blokkerend probleem"],
  "participants": ["Naam of rol"],
  "sentiment": "positief|neutraal|negatief",
  "urgency": "hoog|gemiddeld|laag",
  "topics": ["Onderwerp"]
}"""

SYSTEM_PROMPT = (
    "Je bent een expert in het analyseren van Nederlandse meetings. "
    "Geef altijd uitsluitend geldige JSON terug, zonder extra tekst."
)

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


def build_prompt(transcript: str) -> str:
    """Combine the output schema, analysis instructions and the verbatim transcript."""
    return (
        "Analyseer dit Nederlandse meeting-transcript en haal er bruikbare inzichten uit. "
        "Houd rekening met Nederlandse context en nuances, en herken actiepunten ook "
        "als ze impliciet genoemd worden. Focus op praktische waarde, niet op een "
        "letterlijke weergave.\n\n"
        f"Geef je analyse terug in exact dit JSON-formaat:\n\n{RECORD_SCHEMA}\n\n"
        "Gebruik voor enumeraties alleen de genoemde waarden. Laat een lijst leeg als "
        "er niets gevonden is.\n\n"
        f"TRANSCRIPT:\n{transcript}"
    )


def _classify_api_error(exc: anthropic.APIError) -> ModelErrorKind:
    """Map an Anthropic SDK exception onto the fallback taxonomy."""
    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return ModelErrorKind.AUTH
    if isinstance(exc, anthropic.RateLimitError):
        return ModelErrorKind.QUOTA
    if isinstance(exc, anthropic.APIStatusError) and exc.status_code in (429, 529):
        # 529 = Anthropic "overloaded"
        return ModelErrorKind.QUOTA
    return ModelErrorKind.NETWORK


def _strip_code_fence(text: str) -> str:
    match = _FENCE_RE.search(text)
    return match.group(1).strip() if match else text.strip()


def parse_reply(text: str) -> dict[str, Any]:
    """Parse the model's reply text (optionally fenced) into a JSON object.

    Raises:
        ModelError: ``malformed`` when the reply is not a JSON object.
    """
    body = _strip_code_fence(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ModelError(ModelErrorKind.MALFORMED, f"Reply is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ModelError(
            ModelErrorKind.MALFORMED,
            f"Expected a JSON object, got {type(data).__name__}",
        )
    return data


def _reply_text(response: Any) -> str:
    # Plain text was requested, so the reply should contain a TextBlock.
    for block in response.content:
        if isinstance(block, TextBlock):
            return block.text
    raise ModelError(ModelErrorKind.MALFORMED, "Reply contained no text block")


def extract_via_model(
    text: str,
    duration_seconds: float = 0.0,
    *,
    client: Anthropic | None = None,
) -> MeetingRecord:
    """Extract a MeetingRecord from *text* with a single Claude call.

    Args:
        text: The transcript text, sent verbatim.
        duration_seconds: Recording length, used for locally computed stats.
        client: Optional pre-built client (tests, connection reuse).

    Returns:
        A record tagged ``model``.

    Raises:
        ModelError: On missing credentials, transport or API failures, and
            replies that do not parse. The call is never retried.
    """
    if client is None:
        if not settings.anthropic_api_key:
            raise ModelError(ModelErrorKind.AUTH, "ANTHROPIC_API_KEY is not configured")
        client = Anthropic(
            api_key=settings.anthropic_api_key,
            max_retries=0,
            timeout=settings.llm_timeout_seconds,
        )

    try:
        response = client.messages.create(
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            temperature=0.3,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_prompt(text)}],
        )
    except anthropic.APIError as exc:
        kind = _classify_api_error(exc)
        logger.warning("Model extraction failed (%s): %s", kind, exc)
        raise ModelError(kind, str(exc)) from exc

    raw = parse_reply(_reply_text(response))
    logger.info("Model reply parsed with %d top-level fields", len(raw))

    return coerce_record(
        raw,
        processing_method=ProcessingMethod.MODEL,
        stats=compute_stats(text, duration_seconds),
    )
