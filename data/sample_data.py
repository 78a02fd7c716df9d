"""Sample catalog generator for the NEP timetable engine.

Produces a realistic secondary-school catalog with deliberate edge cases:
  1. Music has no specialized teacher → positional teacher pick
  2. Art and Physical Education are matched via the category keyword
     ("Art & Craft", "Physical Training") rather than the subject name
  3. The day grid contains assembly, two breaks and a co-curricular
     period, which the engine must skip

Every subject category occurs at least once, so the holistic
development score of the sample is 100.
"""

import random
from typing import Optional

from models.catalog import Catalog
from models.subject import NepPriority, Subject, SubjectCategory
from models.teacher import Teacher
from models.timeslot import SlotType, TimeSlot
from models.timetable_entry import utc_now
from solver.matcher import specialization_matches

# ─── Name lists ───────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Aarav", "Ananya", "Deepak", "Divya", "Harish", "Kavita", "Lakshmi",
    "Manoj", "Meera", "Neha", "Pooja", "Rahul", "Rajesh", "Ritu", "Sanjay",
    "Shreya", "Sunita", "Suresh", "Vikram", "Anil", "Farah", "Imran",
]

_LAST_NAMES = [
    "Sharma", "Verma", "Iyer", "Nair", "Patel", "Reddy", "Gupta", "Singh",
    "Menon", "Kulkarni", "Das", "Chatterjee", "Joshi", "Rao", "Mehta",
    "Khan", "Bose", "Pillai",
]

# ─── Subjects ─────────────────────────────────────────────────────────────────

# (id, name, code, category, credit_hours, priority, multidisciplinary)
SAMPLE_SUBJECTS: list[tuple] = [
    ("sub-math", "Mathematics", "MATH", SubjectCategory.CORE, 6, NepPriority.HIGH, False),
    ("sub-sci", "Science", "SCI", SubjectCategory.CORE, 6, NepPriority.HIGH, True),
    ("sub-eng", "English", "ENG", SubjectCategory.CORE, 5, NepPriority.HIGH, False),
    ("sub-hin", "Hindi", "HIN", SubjectCategory.CORE, 4, NepPriority.MEDIUM, False),
    ("sub-sst", "Social Science", "SST", SubjectCategory.CORE, 4, NepPriority.MEDIUM, True),
    ("sub-art", "Art Education", "ART", SubjectCategory.ART_EDUCATION, 2, NepPriority.HIGH, True),
    ("sub-pe", "Physical Education", "PE", SubjectCategory.PHYSICAL_EDUCATION, 3,
     NepPriority.MEDIUM, False),
    ("sub-val", "Value Education", "VAL", SubjectCategory.VALUE_EDUCATION, 1,
     NepPriority.MEDIUM, True),
    ("sub-comp", "Computer Applications", "CA", SubjectCategory.VOCATIONAL, 2,
     NepPriority.LOW, True),
    ("sub-mus", "Music", "MUS", SubjectCategory.ELECTIVE, 1, NepPriority.LOW, False),
]

# Specialization profiles: one teacher each, Music deliberately uncovered.
_TEACHER_PROFILES: list[list[str]] = [
    ["Mathematics", "Physics"],
    ["Science", "Biology", "Chemistry"],
    ["English", "Literature"],
    ["Hindi", "Sanskrit"],
    ["Social Science", "History", "Geography"],
    ["Art & Craft", "Painting"],
    ["Physical Training", "Yoga"],
    ["Value Education", "Counselling"],
    ["Computer Applications", "Mathematics"],
]

# ─── Day grid ─────────────────────────────────────────────────────────────────

# (id, start, end, type)
SAMPLE_DAY_GRID: list[tuple[str, str, str, SlotType]] = [
    ("ts-assembly", "07:50", "08:10", SlotType.ASSEMBLY),
    ("ts-p1", "08:10", "08:50", SlotType.REGULAR),
    ("ts-p2", "08:50", "09:30", SlotType.REGULAR),
    ("ts-p3", "09:30", "10:10", SlotType.REGULAR),
    ("ts-break1", "10:10", "10:25", SlotType.BREAK),
    ("ts-p4", "10:25", "11:05", SlotType.REGULAR),
    ("ts-p5", "11:05", "11:45", SlotType.REGULAR),
    ("ts-break2", "11:45", "12:15", SlotType.BREAK),
    ("ts-p6", "12:15", "12:55", SlotType.REGULAR),
    ("ts-p7", "12:55", "13:35", SlotType.REGULAR),
    ("ts-cocurricular", "13:35", "14:15", SlotType.CO_CURRICULAR),
]


class SampleCatalogGenerator:
    """Generates a complete sample catalog; deterministic for a given seed."""

    def __init__(self, school_id: str = "default-school", seed: Optional[int] = None) -> None:
        self.school_id = school_id
        self.rng = random.Random(seed)

    # ─── Subjects ─────────────────────────────────────────────────────────────

    def _generate_subjects(self) -> list[Subject]:
        return [
            Subject(
                id=sid, name=name, code=code, category=category,
                credit_hours=hours, nep_priority=priority, multidisciplinary=multi,
            )
            for sid, name, code, category, hours, priority, multi in SAMPLE_SUBJECTS
        ]

    # ─── Teachers ─────────────────────────────────────────────────────────────

    def _generate_teachers(self) -> list[Teacher]:
        """One teacher per specialization profile with a random name."""
        teachers = []
        used_names: set[str] = set()
        for i, tags in enumerate(_TEACHER_PROFILES, 1):
            name = self._unique_name(used_names)
            first, last = name.split(" ", 1)
            teachers.append(Teacher(
                id=f"tch-{i:02d}",
                school_id=self.school_id,
                name=name,
                email=f"{first.lower()}.{last.lower()}@school.example",
                specialization=tags,
                experience_years=self.rng.randint(1, 25),
                nep_trained=self.rng.random() < 0.7,
            ))
        return teachers

    def _unique_name(self, used: set[str]) -> str:
        while True:
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            if name not in used:
                used.add(name)
                return name

    # ─── Time slots ───────────────────────────────────────────────────────────

    def _generate_time_slots(self) -> list[TimeSlot]:
        return [
            TimeSlot(id=sid, start_time=start, end_time=end, slot_type=slot_type)
            for sid, start, end, slot_type in SAMPLE_DAY_GRID
        ]

    # ─── Complete catalog ─────────────────────────────────────────────────────

    def generate(self) -> Catalog:
        """Builds the full catalog."""
        return Catalog(
            subjects=self._generate_subjects(),
            teachers=self._generate_teachers(),
            time_slots=self._generate_time_slots(),
            created_at=utc_now(),
        )

    # ─── Output ───────────────────────────────────────────────────────────────

    def print_summary(self, catalog: Catalog) -> None:
        """Prints a Rich table overview of the generated catalog."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Sample catalog", box=box.ROUNDED)
        table.add_column("Subject", style="cyan")
        table.add_column("Category")
        table.add_column("Priority", justify="center")
        table.add_column("Multi", justify="center")
        table.add_column("Teacher")

        for s in catalog.subjects:
            teacher = next(
                (t.name for t in catalog.teachers if specialization_matches(s, t)),
                "[yellow]–[/yellow]",
            )
            table.add_row(
                s.name,
                s.category.value,
                s.nep_priority.value,
                "✓" if s.multidisciplinary else "",
                teacher,
            )
        console.print(table)
        console.print(catalog.summary())
