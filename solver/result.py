"""Result models of a generation run.

A run either used the remote generator or fell back to the heuristic
engine. Both arms are explicit types; ``provenance`` is the discriminator.
"""

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from models.compliance_report import ComplianceReport
from models.timetable_entry import TimetableEntry


class AssignmentResult(BaseModel):
    """Output of one heuristic assignment pass."""

    entries: list[TimetableEntry]
    dropped_subject_ids: list[str] = []   # beyond capacity, in priority order

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_subject_ids)


class _TimetableResult(BaseModel):
    entries: list[TimetableEntry]
    report: ComplianceReport

    def save_json(self, path: Path) -> None:
        """Writes the result as a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))


class GeneratedTimetable(_TimetableResult):
    """Timetable produced by the remote generator."""

    provenance: Literal["generated"] = "generated"
    remote_score: float                        # 0–100 as reported by the service
    optimization_notes: list[str] = []
    multidisciplinary_sessions: list[str] = []


class HeuristicTimetable(_TimetableResult):
    """Timetable produced by the assignment engine."""

    provenance: Literal["heuristic"] = "heuristic"
    dropped_subject_ids: list[str] = []
    fallback_reason: str = ""                  # why the remote generator was not used

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_subject_ids)


ComplianceAwareTimetable = Annotated[
    Union[GeneratedTimetable, HeuristicTimetable],
    Field(discriminator="provenance"),
]

_RESULT = TypeAdapter(ComplianceAwareTimetable)


def load_result(path: Path) -> Union[GeneratedTimetable, HeuristicTimetable]:
    """Reads a result written by ``save_json``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Result file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return _RESULT.validate_json(f.read())
