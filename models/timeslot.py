"""Data model for a time slot of the daily grid."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SlotType(str, Enum):
    REGULAR = "regular"
    BREAK = "break"
    ASSEMBLY = "assembly"
    CO_CURRICULAR = "co_curricular"


def parse_clock(value: str) -> int:
    """Converts a wall-clock "HH:MM" string into minutes after midnight."""
    try:
        hours, minutes = value.split(":")
        h, m = int(hours), int(minutes)
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid time '{value}', expected HH:MM") from e
    if not (0 <= h < 24 and 0 <= m < 60):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return h * 60 + m


class TimeSlot(BaseModel):
    """One period of the daily grid.

    The same slot recurs on every school day; the day is carried by the
    timetable entry. ``duration_minutes`` is derived from the clock times
    when omitted and must agree with them when given.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    start_time: str
    end_time: str
    duration_minutes: Optional[int] = Field(None, gt=0)
    slot_type: SlotType = SlotType.REGULAR

    @model_validator(mode="before")
    @classmethod
    def _check_duration(cls, data):
        if not isinstance(data, dict):
            return data
        start = parse_clock(data.get("start_time"))
        end = parse_clock(data.get("end_time"))
        if end <= start:
            raise ValueError(
                f"Slot {data.get('id')}: end {data.get('end_time')} is not after "
                f"start {data.get('start_time')}"
            )
        duration = data.get("duration_minutes")
        if duration is None:
            return {**data, "duration_minutes": end - start}
        if duration != end - start:
            raise ValueError(
                f"Slot {data.get('id')}: duration_minutes={duration} disagrees with "
                f"{data.get('start_time')}-{data.get('end_time')} ({end - start} min)"
            )
        return data

    @property
    def is_assignable(self) -> bool:
        """Only regular slots may carry a subject."""
        return self.slot_type == SlotType.REGULAR

    @property
    def start_minutes(self) -> int:
        return parse_clock(self.start_time)

    @property
    def label(self) -> str:
        return f"{self.start_time}–{self.end_time}"

    def __str__(self) -> str:
        return f"{self.label} ({self.slot_type.value})"
