"""Shared fixtures: the three-subject scenario catalog and a mixed day grid."""

import pytest

from models.catalog import Catalog
from models.generation_request import GenerationRequest
from models.subject import NepPriority, Subject, SubjectCategory
from models.teacher import Teacher
from models.timeslot import SlotType, TimeSlot
from tests.builders import make_slots, make_subject, make_teacher


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def scenario_subjects() -> list[Subject]:
    """Math (high, core), Art (high, art, multidisciplinary), PE (medium)."""
    return [
        make_subject("math", "Mathematics", SubjectCategory.CORE, NepPriority.HIGH),
        make_subject("art", "Art Education", SubjectCategory.ART_EDUCATION,
                     NepPriority.HIGH, multidisciplinary=True),
        make_subject("pe", "Physical Education", SubjectCategory.PHYSICAL_EDUCATION,
                     NepPriority.MEDIUM),
    ]


@pytest.fixture
def scenario_teachers() -> list[Teacher]:
    return [make_teacher("t1", ["Mathematics"])]


@pytest.fixture
def scenario_slots() -> list[TimeSlot]:
    return make_slots(4)


@pytest.fixture
def scenario_catalog(scenario_subjects, scenario_teachers, scenario_slots) -> Catalog:
    return Catalog(
        subjects=scenario_subjects,
        teachers=scenario_teachers,
        time_slots=scenario_slots,
    )


@pytest.fixture
def mixed_slots() -> list[TimeSlot]:
    """Assembly, three periods, a break and a co-curricular period."""
    return [
        TimeSlot(id="asm", start_time="07:45", end_time="08:00", slot_type=SlotType.ASSEMBLY),
        TimeSlot(id="p1", start_time="08:00", end_time="08:40"),
        TimeSlot(id="p2", start_time="08:40", end_time="09:20"),
        TimeSlot(id="brk", start_time="09:20", end_time="09:35", slot_type=SlotType.BREAK),
        TimeSlot(id="p3", start_time="09:35", end_time="10:15"),
        TimeSlot(id="cc", start_time="10:15", end_time="10:55",
                 slot_type=SlotType.CO_CURRICULAR),
    ]


@pytest.fixture
def gen_request() -> GenerationRequest:
    return GenerationRequest(school_id="s1", class_id="10A")


@pytest.fixture
def anyio_backend():
    return "asyncio"
