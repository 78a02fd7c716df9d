"""Shared helpers for the terminal and Excel timetable views."""

from datetime import date
from typing import Optional

from models.catalog import Catalog
from models.subject import Subject, SubjectCategory
from models.timeslot import TimeSlot
from models.timetable_entry import DAY_NAMES, TimetableEntry

# ─── Colour palette (RRGGBB, no #) ────────────────────────────────────────────

COLORS: dict[str, str] = {
    SubjectCategory.CORE.value:               "B3D4FF",
    SubjectCategory.ELECTIVE.value:           "FFF2B3",
    SubjectCategory.VOCATIONAL.value:         "D4B3FF",
    SubjectCategory.ART_EDUCATION.value:      "FFB3E6",
    SubjectCategory.PHYSICAL_EDUCATION.value: "B3FFB3",
    SubjectCategory.VALUE_EDUCATION.value:    "FFD4B3",
    "other":  "E0E0E0",
    "free":   "F5F5F5",
    "pause":  "DDDDDD",
    "header": "4472C4",
}

# Rich styles per category for the terminal grid
RICH_STYLES: dict[str, str] = {
    SubjectCategory.CORE.value:               "blue",
    SubjectCategory.ELECTIVE.value:           "yellow",
    SubjectCategory.VOCATIONAL.value:         "magenta",
    SubjectCategory.ART_EDUCATION.value:      "bright_magenta",
    SubjectCategory.PHYSICAL_EDUCATION.value: "green",
    SubjectCategory.VALUE_EDUCATION.value:    "dark_orange",
}


def today_str() -> str:
    """Today as DD.MM.YYYY."""
    return date.today().strftime("%d.%m.%Y")


def get_subject_color(subject: Optional[Subject]) -> str:
    """Hex colour of a subject (by category)."""
    if subject is None:
        return COLORS["other"]
    return COLORS.get(subject.category.value, COLORS["other"])


# ─── Calendar order ───────────────────────────────────────────────────────────

def chronological_slots(time_slots: list[TimeSlot]) -> list[TimeSlot]:
    """All slots of a day by start time (input order breaks ties)."""
    return sorted(time_slots, key=lambda s: s.start_minutes)


def calendar_order(
    entries: list[TimetableEntry], time_slots: list[TimeSlot]
) -> list[TimetableEntry]:
    """Entries re-sorted by (day_of_week, chronological slot).

    Engine output comes in subject-priority order; views need calendar order.
    Entries with unknown slot ids go last within their day.
    """
    position = {s.id: i for i, s in enumerate(chronological_slots(time_slots))}
    return sorted(
        entries,
        key=lambda e: (e.day_of_week, position.get(e.time_slot_id, len(position)), e.time_slot_id),
    )


def build_grid(entries: list[TimetableEntry]) -> dict[tuple[int, str], TimetableEntry]:
    """{(day_of_week, time_slot_id): entry} for one class."""
    return {e.cell_key: e for e in entries}


# ─── Cell content ─────────────────────────────────────────────────────────────

def format_entry(entry: TimetableEntry, catalog: Catalog) -> str:
    """Cell text: "Subject\\nTeacher\\nRoom" (names where the catalog knows them)."""
    subject = catalog.subject_by_id().get(entry.subject_id)
    teacher = catalog.teacher_by_id().get(entry.teacher_id)
    lines = [
        subject.name if subject else entry.subject_id,
        teacher.name if teacher else entry.teacher_id,
    ]
    if entry.room_number:
        lines.append(entry.room_number)
    return "\n".join(lines)


def grid_rows(
    entries: list[TimetableEntry], catalog: Catalog
) -> list[tuple[TimeSlot, list[Optional[TimetableEntry]]]]:
    """One row per slot in chronological order, one cell per day (Mon–Sat)."""
    grid = build_grid(entries)
    return [
        (slot, [grid.get((day, slot.id)) for day in range(1, len(DAY_NAMES) + 1)])
        for slot in chronological_slots(catalog.time_slots)
    ]
