"""Priority-greedy timetable assignment.

Single deterministic pass, no backtracking:
  1. Keep only regular slots (input order = chronological order).
  2. Stable sort of subjects by NEP priority (high → medium → low).
  3. Sorted position i → day i // len(pool) + 1, slot pool[i % len(pool)].
     Positions beyond len(pool) × days are dropped and reported.

The engine sits behind ``TimetableStrategy`` so that an exact solver can
replace it without touching the compliance scorer.
"""

import logging
from typing import Optional, Protocol

from models.compliance_report import ComplianceReport
from models.generation_request import GenerationRequest
from models.subject import Subject
from models.teacher import Teacher
from models.timeslot import TimeSlot
from models.timetable_entry import DAYS_PER_WEEK, TimetableEntry
from solver.matcher import TeacherMatcher
from solver.result import AssignmentResult, HeuristicTimetable
from solver.rooms import RoomAdvisor

logger = logging.getLogger(__name__)

# Fixed marker for heuristic output; remote output derives its own value.
HEURISTIC_CONFIDENCE = 0.75


class TimetableStrategy(Protocol):
    """Anything that turns a catalog snapshot into timetable entries."""

    def assign(
        self,
        subjects: list[Subject],
        teachers: list[Teacher],
        time_slots: list[TimeSlot],
        request: GenerationRequest,
    ) -> AssignmentResult: ...


class AssignmentEngine:
    """Greedy slot assignment by NEP priority.

    Usage:
        engine = AssignmentEngine()
        result = engine.assign(subjects, teachers, time_slots, request)
    """

    def __init__(
        self,
        matcher: Optional[TeacherMatcher] = None,
        room_advisor: Optional[RoomAdvisor] = None,
        confidence: float = HEURISTIC_CONFIDENCE,
        days_per_week: int = DAYS_PER_WEEK,
    ) -> None:
        self.matcher = matcher or TeacherMatcher()
        self.room_advisor = room_advisor or RoomAdvisor()
        self.confidence = confidence
        self.days_per_week = days_per_week

    def assign(
        self,
        subjects: list[Subject],
        teachers: list[Teacher],
        time_slots: list[TimeSlot],
        request: GenerationRequest,
    ) -> AssignmentResult:
        """Places one entry per subject until capacity runs out.

        Raises NoTeachersAvailable if a subject has to be placed and the
        teacher list is empty. Entries come back in sorted-subject order.
        """
        pool = [s for s in time_slots if s.is_assignable]
        capacity = len(pool) * self.days_per_week

        # (input index, subject); sorted() is stable, ties keep input order
        ordered = sorted(enumerate(subjects), key=lambda pair: pair[1].priority_rank)

        entries: list[TimetableEntry] = []
        dropped: list[str] = []

        for i, (input_index, subject) in enumerate(ordered):
            if i >= capacity:
                dropped.append(subject.id)
                continue
            day = i // len(pool) + 1
            slot = pool[i % len(pool)]
            teacher = self.matcher.match(subject, teachers, input_index)
            entries.append(TimetableEntry(
                school_id=request.school_id,
                class_id=request.class_id,
                subject_id=subject.id,
                teacher_id=teacher.id,
                time_slot_id=slot.id,
                day_of_week=day,
                room_number=self.room_advisor.suggest(subject),
                ai_confidence_score=self.confidence,
            ))

        if dropped:
            logger.warning(
                f"Capacity exhausted: {len(dropped)} of {len(subjects)} subjects dropped "
                f"({len(pool)} regular slots × {self.days_per_week} days)"
            )
        logger.info(f"Heuristic assignment: {len(entries)} entries for class {request.class_id}")

        return AssignmentResult(entries=entries, dropped_subject_ids=dropped)


def heuristic_timetable(
    strategy: TimetableStrategy,
    subjects: list[Subject],
    teachers: list[Teacher],
    time_slots: list[TimeSlot],
    request: GenerationRequest,
    fallback_score: int,
    reason: str,
) -> HeuristicTimetable:
    """Runs ``strategy`` and wraps it with the flat fallback report."""
    result = strategy.assign(subjects, teachers, time_slots, request)
    return HeuristicTimetable(
        entries=result.entries,
        report=ComplianceReport.stub(fallback_score),
        dropped_subject_ids=result.dropped_subject_ids,
        fallback_reason=reason,
    )
