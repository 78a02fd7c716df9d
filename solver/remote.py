"""Remote timetable generation via an OpenAI-compatible chat-completions service.

One request per run, no retry. Anything short of a well-formed, catalog-
consistent reply degrades to the heuristic engine; the caller never sees a
transport or parse error.
"""

import logging
import re
from typing import Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from analysis.solution_validator import SolutionValidator
from config.manager import ConfigurationError
from config.schema import RemoteGenerationConfig
from models.catalog import Catalog
from models.compliance_report import ComplianceReport
from models.generation_request import GenerationRequest
from models.subject import Subject
from models.teacher import Teacher
from models.timeslot import TimeSlot
from models.timetable_entry import DAYS_PER_WEEK, TimetableEntry
from solver.assignment import AssignmentEngine, TimetableStrategy, heuristic_timetable
from solver.result import GeneratedTimetable, HeuristicTimetable

logger = logging.getLogger(__name__)

FALLBACK_COMPLIANCE_SCORE = 75

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class RemoteGenerationError(Exception):
    """Transport, status or parse failure; always handled by the fallback."""


# ─── Reply schema ─────────────────────────────────────────────────────────────

class RemoteReplyEntry(BaseModel):
    """One element of the ``timetable`` array in the reply."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    day_of_week: int = Field(ge=1, le=DAYS_PER_WEEK)
    time_slot_id: str
    subject_id: str
    teacher_id: str
    room_suggestion: Optional[str] = None
    compliance_note: Optional[str] = None


class RemoteReply(BaseModel):
    """Structured reply requested in the prompt."""

    timetable: list[RemoteReplyEntry]
    nep_compliance_score: float = Field(ge=0, le=100)
    optimization_notes: list[str] = []
    multidisciplinary_sessions: list[str] = []

    @field_validator("optimization_notes", "multidisciplinary_sessions", mode="before")
    @classmethod
    def _wrap_text(cls, v):
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v


RESPONSE_SHAPE = """\
{
  "timetable": [
    {
      "day_of_week": 1,
      "time_slot_id": "<time slot id>",
      "subject_id": "<subject id>",
      "teacher_id": "<teacher id>",
      "room_suggestion": "<room label>",
      "compliance_note": "<why this placement supports NEP 2020>"
    }
  ],
  "nep_compliance_score": 0,
  "optimization_notes": ["<note>"],
  "multidisciplinary_sessions": ["<session description>"]
}"""


def build_prompt(
    subjects: list[Subject],
    teachers: list[Teacher],
    time_slots: list[TimeSlot],
    request: GenerationRequest,
) -> str:
    """Renders the scheduling task as a single user message."""
    c = request.constraints
    p = request.preferences
    lines = [
        f"Create a NEP 2020 compliant weekly timetable (days 1-{DAYS_PER_WEEK}, "
        f"Monday to Saturday) for class {request.class_id} of school {request.school_id}.",
        "",
        "SUBJECTS (with NEP categories):",
        *(
            f"- [{s.id}] {s.name} ({s.category.value}, Priority: {s.nep_priority.value}, "
            f"Multidisciplinary: {str(s.multidisciplinary).lower()})"
            for s in subjects
        ),
        "",
        "TEACHERS:",
        *(
            f"- [{t.id}] {t.name} (Specialization: {', '.join(t.specialization) or 'none'}, "
            f"NEP Trained: {str(t.nep_trained).lower()})"
            for t in teachers
        ),
        "",
        "TIME SLOTS (only 'regular' slots may carry a subject):",
        *(f"- [{s.id}] {s.start_time}-{s.end_time} ({s.slot_type.value})" for s in time_slots),
        "",
        "NEP 2020 COMPLIANCE REQUIREMENTS:",
        "1. Multidisciplinary approach - integrate subjects where possible",
        "2. Holistic development - balance academic and co-curricular activities",
        "3. Flexible curriculum - allow for student choice and creativity",
        "4. Art education integration - ensure creative subjects are well-distributed",
        "5. Physical education - schedule during optimal times",
        "6. Value education - integrate throughout the week",
        "7. Assessment reforms - include time for continuous assessment",
        "",
        "CONSTRAINTS:",
        f"- Maximum {c.max_periods_per_day} periods per day",
        f"- Include {c.break_duration} minute breaks",
        f"- Strict NEP compliance: {str(c.nep_compliance_strict).lower()}",
        f"- Multidisciplinary sessions: {str(c.multidisciplinary_sessions).lower()}",
        f"- Co-curricular activities mandatory: {str(c.co_curricular_mandatory).lower()}",
        "- Never place two subjects in the same day and time slot",
        "",
        "PREFERENCES:",
        f"- Morning subjects: {', '.join(p.morning_subjects) or 'none'}",
        f"- Afternoon subjects: {', '.join(p.afternoon_subjects) or 'none'}",
        f"- Avoid consecutive periods of: {', '.join(p.avoid_consecutive) or 'none'}",
        "",
        "Use only the ids in square brackets. Respond with JSON only, in exactly this shape",
        "(nep_compliance_score is 0-100):",
        RESPONSE_SHAPE,
    ]
    return "\n".join(lines)


def strip_code_fence(text: str) -> str:
    """Removes a surrounding ```json ... ``` fence, if any."""
    text = text.strip()
    match = _FENCE.match(text)
    return match.group(1) if match else text


# ─── Generator ────────────────────────────────────────────────────────────────

class RemoteTimetableGenerator:
    """Asks the remote service for a timetable, falls back to the heuristic.

    Usage:
        generator = RemoteTimetableGenerator(config.remote, api_key)
        result = await generator.generate(subjects, teachers, time_slots, request)
    """

    def __init__(
        self,
        settings: RemoteGenerationConfig,
        api_key: str,
        engine: Optional[TimetableStrategy] = None,
        fallback_score: int = FALLBACK_COMPLIANCE_SCORE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Remote generation requires an API key.")
        self.settings = settings
        self._api_key = api_key
        self.engine = engine or AssignmentEngine()
        self.fallback_score = fallback_score
        self._transport = transport

    # ─── Public API ───────────────────────────────────────────────────────────

    async def generate(
        self,
        subjects: list[Subject],
        teachers: list[Teacher],
        time_slots: list[TimeSlot],
        request: GenerationRequest,
    ) -> Union[GeneratedTimetable, HeuristicTimetable]:
        """Single remote attempt; on any failure the heuristic result."""
        prompt = build_prompt(subjects, teachers, time_slots, request)
        try:
            text = await self._complete(prompt)
            result = self.parse_reply(text, subjects, teachers, time_slots, request)
        except RemoteGenerationError as e:
            logger.warning(f"Remote generation failed, using heuristic fallback: {e}")
            return heuristic_timetable(
                self.engine, subjects, teachers, time_slots, request,
                fallback_score=self.fallback_score,
                reason=str(e),
            )
        logger.info(
            f"Remote generation: {len(result.entries)} entries, "
            f"reported score {result.remote_score:.0f}"
        )
        return result

    def build_payload(self, prompt: str) -> dict:
        """Request body of the chat-completions call."""
        return {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": self.settings.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }

    def parse_reply(
        self,
        text: str,
        subjects: list[Subject],
        teachers: list[Teacher],
        time_slots: list[TimeSlot],
        request: GenerationRequest,
    ) -> GeneratedTimetable:
        """Turns the reply text into stamped entries.

        Raises RemoteGenerationError when the text is not JSON, does not
        match the schema, or does not fit the catalog.
        """
        try:
            reply = RemoteReply.model_validate_json(strip_code_fence(text))
        except ValidationError as e:
            raise RemoteGenerationError(
                f"malformed reply ({e.error_count()} validation errors)"
            ) from e

        if subjects and not reply.timetable:
            raise RemoteGenerationError("reply contains no timetable entries")

        confidence = reply.nep_compliance_score / 100
        entries = [
            TimetableEntry(
                school_id=request.school_id,
                class_id=request.class_id,
                subject_id=item.subject_id,
                teacher_id=item.teacher_id,
                time_slot_id=item.time_slot_id,
                day_of_week=item.day_of_week,
                room_number=item.room_suggestion,
                ai_confidence_score=confidence,
                compliance_note=item.compliance_note,
            )
            for item in reply.timetable
        ]

        catalog = Catalog(subjects=subjects, teachers=teachers, time_slots=time_slots)
        report = SolutionValidator().validate(entries, catalog)
        if not report.is_valid:
            first = report.errors[0]
            raise RemoteGenerationError(
                f"reply does not fit the catalog ({len(report.errors)} errors, "
                f"first: {first.constraint}: {first.description})"
            )

        return GeneratedTimetable(
            entries=entries,
            report=ComplianceReport.stub(round(reply.nep_compliance_score),
                                         recommendations=reply.optimization_notes),
            remote_score=reply.nep_compliance_score,
            optimization_notes=reply.optimization_notes,
            multidisciplinary_sessions=reply.multidisciplinary_sessions,
        )

    # ─── Transport ────────────────────────────────────────────────────────────

    async def _complete(self, prompt: str) -> str:
        """POSTs the prompt and returns the generated text block."""
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(
            timeout=self.settings.timeout_seconds, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self.settings.api_url, headers=headers, json=self.build_payload(prompt)
                )
            except httpx.HTTPError as e:
                raise RemoteGenerationError(f"transport error: {e!r}") from e

        if not response.is_success:
            raise RemoteGenerationError(f"HTTP {response.status_code} from {self.settings.api_url}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RemoteGenerationError(f"unexpected response body: {e!r}") from e
        if not isinstance(content, str) or not content.strip():
            raise RemoteGenerationError("empty completion")
        return content
