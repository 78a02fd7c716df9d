"""Generation entry point: remote generator when configured, heuristic otherwise."""

import logging
from typing import Optional, Union

import httpx

from config.manager import ConfigManager
from config.schema import AppConfig
from models.catalog import Catalog
from models.generation_request import GenerationRequest
from solver.assignment import AssignmentEngine, TimetableStrategy, heuristic_timetable
from solver.remote import RemoteTimetableGenerator
from solver.result import GeneratedTimetable, HeuristicTimetable

logger = logging.getLogger(__name__)


def build_engine(config: AppConfig) -> AssignmentEngine:
    return AssignmentEngine(confidence=config.scheduling.heuristic_confidence)


def prepare_generator(
    config: AppConfig,
    api_key: Optional[str] = None,
    engine: Optional[TimetableStrategy] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[RemoteTimetableGenerator]:
    """Builds the remote generator, or None when remote generation is disabled.

    Credentials are resolved here, so a missing key raises
    ConfigurationError before any generation attempt.
    """
    if not config.remote.enabled:
        return None
    key = api_key or ConfigManager().resolve_api_key(config)
    return RemoteTimetableGenerator(
        config.remote,
        key,
        engine=engine or build_engine(config),
        fallback_score=config.scheduling.fallback_compliance_score,
        transport=transport,
    )


async def generate_timetable(
    catalog: Catalog,
    request: GenerationRequest,
    config: AppConfig,
    generator: Optional[RemoteTimetableGenerator] = None,
    engine: Optional[TimetableStrategy] = None,
) -> Union[GeneratedTimetable, HeuristicTimetable]:
    """Runs one generation for ``request.class_id``.

    Without a generator the heuristic engine runs directly.
    """
    if generator is None:
        logger.info("Remote generation disabled – running heuristic engine")
        return heuristic_timetable(
            engine or build_engine(config),
            catalog.subjects, catalog.teachers, catalog.time_slots, request,
            fallback_score=config.scheduling.fallback_compliance_score,
            reason="remote generation disabled",
        )
    return await generator.generate(
        catalog.subjects, catalog.teachers, catalog.time_slots, request
    )
