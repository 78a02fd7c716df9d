"""Structural validation of a finished timetable.

Checks entries against the catalog independent of how they were produced
(heuristic engine, remote generator or an externally supplied file).
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.catalog import Catalog
from models.timetable_entry import TimetableEntry


class ValidationViolation(BaseModel):
    """A single violation."""

    severity: Literal["error", "warning"]
    constraint: str      # e.g. "class_double_booking"
    description: str
    entity: str          # entry id / class id


class ValidationReport(BaseModel):
    """Result of the timetable validation."""

    violations: list[ValidationViolation]
    is_valid: bool       # True when there are no errors (warnings are fine)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    def print_rich(self) -> None:
        """Prints the report via Rich."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = self.errors
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALID[/bold green]"
            if self.is_valid
            else "[bold red]✗ VIOLATIONS FOUND[/bold red]"
        )
        lines = [status, f"Errors: {len(errors)} | Warnings: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Timetable validation", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Type", width=8)
        table.add_column("Constraint", width=26)
        table.add_column("Entity", width=14)
        table.add_column("Description")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class SolutionValidator:
    """Checks timetable entries against a catalog."""

    def validate(self, entries: list[TimetableEntry], catalog: Catalog) -> ValidationReport:
        """Runs all checks and returns a ValidationReport."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_references(entries, catalog))
        violations.extend(self._check_class_double_booking(entries))
        violations.extend(self._check_slot_types(entries, catalog))
        violations.extend(self._check_subject_coverage(entries, catalog))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Individual checks ─────────────────────────────────────────────────────

    def _check_references(
        self, entries: list[TimetableEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Subject, teacher and slot ids must exist in the catalog."""
        subject_ids = {s.id for s in catalog.subjects}
        teacher_ids = {t.id for t in catalog.teachers}
        slot_ids = {s.id for s in catalog.time_slots}
        violations: list[ValidationViolation] = []

        for e in entries:
            for kind, ref, known in (
                ("subject", e.subject_id, subject_ids),
                ("teacher", e.teacher_id, teacher_ids),
                ("time slot", e.time_slot_id, slot_ids),
            ):
                if ref not in known:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="unknown_reference",
                        entity=e.id,
                        description=f"Unknown {kind} id '{ref}'",
                    ))
        return violations

    def _check_class_double_booking(
        self, entries: list[TimetableEntry]
    ) -> list[ValidationViolation]:
        """A class holds at most one entry per (day, slot)."""
        seen: dict[tuple, list[str]] = defaultdict(list)
        for e in entries:
            seen[(e.class_id, e.day_of_week, e.time_slot_id)].append(e.subject_id)

        violations: list[ValidationViolation] = []
        for (class_id, day, slot_id), subjects in seen.items():
            if len(subjects) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="class_double_booking",
                    entity=class_id,
                    description=(
                        f"Day {day}, slot {slot_id}: {len(subjects)} subjects "
                        f"({', '.join(subjects)})"
                    ),
                ))
        return violations

    def _check_slot_types(
        self, entries: list[TimetableEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Only regular slots carry subjects."""
        slots = catalog.slot_by_id()
        violations: list[ValidationViolation] = []
        for e in entries:
            slot = slots.get(e.time_slot_id)
            if slot is not None and not slot.is_assignable:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="non_regular_slot",
                    entity=e.id,
                    description=(
                        f"Slot {slot.id} ({slot.slot_type.value}) is not assignable"
                    ),
                ))
        return violations

    def _check_subject_coverage(
        self, entries: list[TimetableEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Subjects of the catalog that never appear (warning only)."""
        placed = {e.subject_id for e in entries}
        return [
            ValidationViolation(
                severity="warning",
                constraint="subject_not_placed",
                entity=s.id,
                description=f"Subject '{s.name}' has no entry",
            )
            for s in catalog.subjects
            if s.id not in placed
        ]
