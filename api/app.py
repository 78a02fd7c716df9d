"""Thin HTTP surface (FastAPI) over the generation and scoring core.

Endpoints:
  GET  /api/health
  POST /api/generate-timetable
  POST /api/analyze-nep-compliance
"""

import logging
import time
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from analysis.compliance import ComplianceScorer
from config.defaults import default_app_config
from config.manager import ConfigurationError
from config.schema import AppConfig
from models.catalog import Catalog
from models.compliance_report import ComplianceReport
from models.generation_request import (
    GenerationRequest, SchedulingConstraints, SchedulingPreferences,
)
from models.timetable_entry import DAYS_PER_WEEK, TimetableEntry
from solver.generation import generate_timetable, prepare_generator
from solver.matcher import NoTeachersAvailable

logger = logging.getLogger(__name__)


# ─── Request / response bodies ────────────────────────────────────────────────

class GenerateTimetableBody(BaseModel):
    """Body of POST /api/generate-timetable; ids default to the config."""

    school_id: Optional[str] = None
    class_id: Optional[str] = None
    constraints: SchedulingConstraints = Field(default_factory=SchedulingConstraints)
    preferences: SchedulingPreferences = Field(default_factory=SchedulingPreferences)


class GenerationMetadata(BaseModel):
    generation_time: str                   # "0.42s"
    provenance: str                        # "generated" | "heuristic"
    nep_compliance_score: int
    dropped_subjects: list[str] = []
    fallback_reason: Optional[str] = None
    optimization_notes: list[str] = []
    multidisciplinary_sessions: list[str] = []


class GenerateTimetableResponse(BaseModel):
    success: bool = True
    timetable: list[TimetableEntry]
    metadata: GenerationMetadata


class AnalyzedEntry(BaseModel):
    """Externally supplied timetable entry; only placement fields are required."""

    id: Optional[str] = None
    school_id: Optional[str] = None
    class_id: Optional[str] = None
    subject_id: str
    teacher_id: Optional[str] = None
    time_slot_id: str
    day_of_week: int = Field(ge=1, le=DAYS_PER_WEEK)
    room_number: Optional[str] = None
    ai_confidence_score: Optional[float] = None


class AnalyzeComplianceBody(BaseModel):
    timetable: list[AnalyzedEntry] = []


# ─── App factory ──────────────────────────────────────────────────────────────

def create_app(
    catalog: Catalog,
    config: Optional[AppConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Builds the app around one catalog snapshot.

    ``transport`` is passed to the remote generator's HTTP client.
    """
    config = config or default_app_config()
    app = FastAPI(title="NEP Timetable Engine")

    @app.get("/api/health")
    async def health():
        return {
            "status": "OK",
            "message": "NEP Timetable Server is running",
            "remote_generation": config.remote.enabled,
        }

    @app.post("/api/generate-timetable", response_model=GenerateTimetableResponse)
    async def generate(body: GenerateTimetableBody):
        request = GenerationRequest(
            school_id=body.school_id or config.scheduling.school_id,
            class_id=body.class_id or config.scheduling.class_id,
            constraints=body.constraints,
            preferences=body.preferences,
        )
        started = time.perf_counter()
        try:
            generator = prepare_generator(config, transport=transport)
            result = await generate_timetable(catalog, request, config, generator=generator)
        except ConfigurationError as e:
            logger.error(f"Generation refused: {e}")
            raise HTTPException(status_code=503, detail=str(e))
        except NoTeachersAvailable as e:
            raise HTTPException(status_code=422, detail=str(e))
        elapsed = time.perf_counter() - started

        metadata = GenerationMetadata(
            generation_time=f"{elapsed:.2f}s",
            provenance=result.provenance,
            nep_compliance_score=result.report.overall_score,
        )
        if result.provenance == "heuristic":
            metadata.dropped_subjects = result.dropped_subject_ids
            metadata.fallback_reason = result.fallback_reason
        else:
            metadata.optimization_notes = result.optimization_notes
            metadata.multidisciplinary_sessions = result.multidisciplinary_sessions
        return GenerateTimetableResponse(timetable=result.entries, metadata=metadata)

    @app.post("/api/analyze-nep-compliance", response_model=ComplianceReport)
    async def analyze(body: AnalyzeComplianceBody):
        return ComplianceScorer().score(body.timetable, catalog.subjects, catalog.time_slots)

    return app
