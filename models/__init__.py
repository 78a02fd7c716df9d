from models.subject import Subject, SubjectCategory, NepPriority
from models.teacher import Teacher
from models.timeslot import TimeSlot, SlotType
from models.timetable_entry import TimetableEntry
from models.generation_request import (
    GenerationRequest, SchedulingConstraints, SchedulingPreferences,
)
from models.compliance_report import ComplianceReport
from models.catalog import Catalog, FeasibilityReport

__all__ = [
    "Subject",
    "SubjectCategory",
    "NepPriority",
    "Teacher",
    "TimeSlot",
    "SlotType",
    "TimetableEntry",
    "GenerationRequest",
    "SchedulingConstraints",
    "SchedulingPreferences",
    "ComplianceReport",
    "Catalog",
    "FeasibilityReport",
]
