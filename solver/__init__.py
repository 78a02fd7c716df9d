"""Solver module: heuristic assignment engine and remote generation adapter."""

from .matcher import TeacherMatcher, NoTeachersAvailable
from .rooms import RoomAdvisor
from .assignment import AssignmentEngine, TimetableStrategy
from .result import (
    AssignmentResult, GeneratedTimetable, HeuristicTimetable, ComplianceAwareTimetable,
)
from .remote import RemoteTimetableGenerator

__all__ = [
    "TeacherMatcher",
    "NoTeachersAvailable",
    "RoomAdvisor",
    "AssignmentEngine",
    "TimetableStrategy",
    "AssignmentResult",
    "GeneratedTimetable",
    "HeuristicTimetable",
    "ComplianceAwareTimetable",
    "RemoteTimetableGenerator",
]
