"""Catalog: one read-only snapshot of subjects, teachers and time slots + feasibility check."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.subject import Subject, SubjectCategory
from models.teacher import Teacher
from models.timeslot import TimeSlot
from models.timetable_entry import DAYS_PER_WEEK


class FeasibilityReport(BaseModel):
    """Result of the catalog feasibility check."""

    is_feasible: bool
    errors: list[str]      # generation would fail
    warnings: list[str]    # generation works but loses subjects or quality

    def print_rich(self) -> None:
        """Prints the report via Rich."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ FEASIBLE[/bold green]"
        else:
            status = "[bold red]✗ NOT FEASIBLE[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Errors:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnings:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]No problems found.[/dim]")

        console.print(Panel("\n".join(lines), title="Catalog check", border_style="cyan"))


class Catalog(BaseModel):
    """Subjects, teachers and time slots for one generation or scoring call.

    Stands in for the external record store: the core only ever reads it.
    """

    subjects: list[Subject]
    teachers: list[Teacher]
    time_slots: list[TimeSlot]
    created_at: Optional[datetime] = None
    data_version: str = "1.0"

    @property
    def regular_slots(self) -> list[TimeSlot]:
        return [s for s in self.time_slots if s.is_assignable]

    def subject_by_id(self) -> dict[str, Subject]:
        return {s.id: s for s in self.subjects}

    def teacher_by_id(self) -> dict[str, Teacher]:
        return {t.id: t for t in self.teachers}

    def slot_by_id(self) -> dict[str, TimeSlot]:
        return {s.id: s for s in self.time_slots}

    # ─── Overview ───

    def summary(self) -> str:
        """Short textual overview."""
        categories = sorted({s.category.value for s in self.subjects})
        trained = sum(1 for t in self.teachers if t.nep_trained)
        lines = [
            f"Subjects: {len(self.subjects)} ({', '.join(categories)})" if categories
            else "Subjects: 0",
            f"Teachers: {len(self.teachers)} ({trained} NEP-trained)",
            f"Time slots: {len(self.time_slots)} "
            f"({len(self.regular_slots)} regular)",
            f"Weekly capacity: {len(self.regular_slots) * DAYS_PER_WEEK} periods "
            f"({DAYS_PER_WEEK} days)",
        ]
        return "\n".join(lines)

    # ─── Feasibility check ───

    def validate_feasibility(self) -> FeasibilityReport:
        """Checks whether the heuristic can place every subject.

        Checks:
        1. Unique ids per record type
        2. At least one teacher (matching is impossible otherwise)
        3. Capacity: subjects ≤ regular slots × days
        4. Per subject: a specialized teacher exists (else positional pick)
        5. Rubric coverage: PE and value education present
        """
        from solver.matcher import specialization_matches

        errors: list[str] = []
        warnings: list[str] = []

        # ── 1. Unique ids ───────────────────────────────────────────────
        for label, items in (
            ("subject", self.subjects),
            ("teacher", self.teachers),
            ("time slot", self.time_slots),
        ):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    errors.append(f"Duplicate {label} id '{item.id}'.")
                seen.add(item.id)

        # ── 2. Teachers ─────────────────────────────────────────────────
        if self.subjects and not self.teachers:
            errors.append("No teachers in the catalog – no subject can be assigned.")

        # ── 3. Capacity ─────────────────────────────────────────────────
        capacity = len(self.regular_slots) * DAYS_PER_WEEK
        if self.subjects and capacity == 0:
            warnings.append("No regular time slots – every subject would be dropped.")
        elif len(self.subjects) > capacity:
            warnings.append(
                f"Capacity: {len(self.subjects)} subjects but only {capacity} periods "
                f"– {len(self.subjects) - capacity} low-priority subject(s) will be dropped."
            )

        # ── 4. Specialized teachers ─────────────────────────────────────
        if self.teachers:
            for subject in self.subjects:
                if not any(specialization_matches(subject, t) for t in self.teachers):
                    warnings.append(
                        f"Subject '{subject.name}': no specialized teacher – "
                        f"a teacher will be picked by position."
                    )

        # ── 5. Rubric coverage ──────────────────────────────────────────
        categories = {s.category for s in self.subjects}
        if self.subjects and SubjectCategory.PHYSICAL_EDUCATION not in categories:
            warnings.append("No physical education subject in the catalog.")
        if self.subjects and SubjectCategory.VALUE_EDUCATION not in categories:
            warnings.append("No value education subject in the catalog.")

        return FeasibilityReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistence ───────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Writes the catalog as a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        updated = self.model_copy(update={
            "created_at": self.created_at or datetime.now(timezone.utc),
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "Catalog":
        """Reads a catalog from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
