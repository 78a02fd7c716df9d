"""NEP 2020 compliance rubric for finished timetables.

Six categories, each 0–100, evaluated independently; the overall score is
their mean. Scoring is a pure function of the entry set and the catalog,
so entry order never changes the result.
"""

import math
from typing import Optional

from models.compliance_report import ComplianceReport
from models.subject import Subject, SubjectCategory
from models.timeslot import TimeSlot
from models.timetable_entry import TimetableEntry

# ─── Rubric constants ─────────────────────────────────────────────────────────

# Art entries count as prioritized in the first N chronological slot positions.
ART_PRIORITY_POSITIONS = 4

# Presence checks (placeholders until real signals exist)
PE_PRESENT_SCORE = 90
PE_ABSENT_SCORE = 60
VALUE_PRESENT_SCORE = 85
VALUE_ABSENT_SCORE = 70
# No assessment-tracking input yet: fixed rubric weight.
FLEXIBLE_ASSESSMENT_SCORE = 80

# Score for ratio categories with nothing to measure
VACUOUS_SCORE = 100

TOTAL_CATEGORIES = len(SubjectCategory)

# (category, threshold, advisory). Fixed order = recommendation order.
RECOMMENDATION_RULES: list[tuple[str, int, str]] = [
    (
        "art_education_priority", 80,
        "Art Education: schedule art sessions during peak creativity hours "
        "(the first morning periods).",
    ),
    (
        "multidisciplinary_integration", 80,
        "Multidisciplinary Integration: add more multidisciplinary sessions, "
        "e.g. between Science and Mathematics.",
    ),
    (
        "physical_education_balance", 80,
        "Physical Education: include a physical education subject in the weekly schedule.",
    ),
]


def round_half_up(value: float) -> int:
    """Rounds .5 upwards (33.5 -> 34), unlike round()."""
    return int(math.floor(value + 0.5))


def _ratio_score(numerator: int, denominator: int) -> int:
    if denominator == 0:
        return VACUOUS_SCORE
    return min(100, round_half_up(numerator / denominator * 100))


# ─── Scorer ───────────────────────────────────────────────────────────────────

class ComplianceScorer:
    """Evaluates a timetable against the NEP 2020 rubric.

    Usage:
        report = ComplianceScorer().score(entries, subjects, time_slots)
    """

    def score(
        self,
        timetable: list[TimetableEntry],
        subjects: list[Subject],
        time_slots: Optional[list[TimeSlot]] = None,
    ) -> ComplianceReport:
        """Scores the entries against the subject catalog.

        ``time_slots`` orders the periods of a day chronologically; without
        it (or when empty) the distinct slot ids of the timetable are ordered
        by id. Entries only need ``subject_id`` and ``time_slot_id``.
        """
        categories = {
            "art_education_priority": self._art_education_priority(
                timetable, subjects, time_slots),
            "physical_education_balance": self._physical_education_balance(subjects),
            "multidisciplinary_integration": self._multidisciplinary_integration(subjects),
            "value_based_learning": self._value_based_learning(subjects),
            "flexible_assessment": FLEXIBLE_ASSESSMENT_SCORE,
            "holistic_development": self._holistic_development(subjects),
        }
        overall = round_half_up(sum(categories.values()) / len(categories))

        recommendations = [
            advice
            for name, threshold, advice in RECOMMENDATION_RULES
            if categories[name] < threshold
        ]
        return ComplianceReport(
            overall_score=overall,
            categories=categories,
            recommendations=recommendations,
        )

    # ── Categories ────────────────────────────────────────────────────────────

    def _art_education_priority(
        self,
        timetable: list[TimetableEntry],
        subjects: list[Subject],
        time_slots: Optional[list[TimeSlot]],
    ) -> int:
        """Art entries in the early positions / art subjects in the catalog."""
        art_ids = {s.id for s in subjects if s.category == SubjectCategory.ART_EDUCATION}
        if not art_ids:
            return VACUOUS_SCORE
        positions = slot_positions(timetable, time_slots)
        early = sum(
            1 for e in timetable
            if e.subject_id in art_ids
            and positions.get(e.time_slot_id, ART_PRIORITY_POSITIONS) < ART_PRIORITY_POSITIONS
        )
        return _ratio_score(early, len(art_ids))

    def _physical_education_balance(self, subjects: list[Subject]) -> int:
        if any(s.category == SubjectCategory.PHYSICAL_EDUCATION for s in subjects):
            return PE_PRESENT_SCORE
        return PE_ABSENT_SCORE

    def _multidisciplinary_integration(self, subjects: list[Subject]) -> int:
        return _ratio_score(sum(1 for s in subjects if s.multidisciplinary), len(subjects))

    def _value_based_learning(self, subjects: list[Subject]) -> int:
        if any(s.category == SubjectCategory.VALUE_EDUCATION for s in subjects):
            return VALUE_PRESENT_SCORE
        return VALUE_ABSENT_SCORE

    def _holistic_development(self, subjects: list[Subject]) -> int:
        if not subjects:
            return VACUOUS_SCORE
        return _ratio_score(len({s.category for s in subjects}), TOTAL_CATEGORIES)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def slot_positions(
    timetable: list[TimetableEntry], time_slots: Optional[list[TimeSlot]] = None
) -> dict[str, int]:
    """Maps time_slot_id → 0-based chronological position within a day.

    With ``time_slots``: regular slots ordered by start time. Without them
    (or with an empty list): the distinct slot ids of the timetable, numeric
    ids by value ("2" before "10"), then the rest by name.
    """
    if time_slots:
        regular = sorted(
            (s for s in time_slots if s.is_assignable),
            key=lambda s: (s.start_minutes, s.id),
        )
        return {s.id: i for i, s in enumerate(regular)}
    ids = sorted({e.time_slot_id for e in timetable}, key=_slot_id_key)
    return {slot_id: i for i, slot_id in enumerate(ids)}


def _slot_id_key(slot_id: str) -> tuple:
    if slot_id.isdigit():
        return (0, int(slot_id), slot_id)
    return (1, 0, slot_id)
