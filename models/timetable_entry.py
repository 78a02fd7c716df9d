"""Data model for a single timetable entry (Pydantic v2)."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAYS_PER_WEEK = len(DAY_NAMES)


def new_entry_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimetableEntry(BaseModel):
    """One subject placed for one class on one day in one slot.

    Subject, teacher and slot are referenced by id, never embedded.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_entry_id)
    school_id: str
    class_id: str
    subject_id: str
    teacher_id: str
    time_slot_id: str
    day_of_week: int = Field(ge=1, le=DAYS_PER_WEEK)   # 1=Mon .. 6=Sat
    room_number: Optional[str] = None
    ai_confidence_score: float = Field(ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=utc_now)
    compliance_note: Optional[str] = None

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week - 1]

    @property
    def cell_key(self) -> tuple[int, str]:
        """(day_of_week, time_slot_id) – unique within one class."""
        return self.day_of_week, self.time_slot_id


_ENTRY_LIST = TypeAdapter(list[TimetableEntry])


def save_entries(entries: list[TimetableEntry], path: Path) -> None:
    """Writes a plain list of entries as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(_ENTRY_LIST.dump_json(entries, indent=2))


def load_entries(path: Path) -> list[TimetableEntry]:
    """Reads entries from JSON.

    Accepts a plain list, or an object with an ``entries`` or ``timetable``
    list (as written by ``generate``).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Timetable file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("entries", raw.get("timetable", []))
    return _ENTRY_LIST.validate_python(raw)
