"""Tests for the calendar helpers, the terminal grid and the Excel export."""

from pathlib import Path

import pytest
from openpyxl import load_workbook
from rich.console import Console

from analysis.compliance import ComplianceScorer
from data.sample_data import SampleCatalogGenerator
from export.excel_export import ExcelExporter
from export.helpers import (
    COLORS, build_grid, calendar_order, format_entry, get_subject_color, grid_rows,
)
from export.tui_renderer import render_timetable
from models.catalog import Catalog
from models.generation_request import GenerationRequest
from models.subject import SubjectCategory
from solver.assignment import AssignmentEngine


@pytest.fixture(scope="module")
def sample_catalog() -> Catalog:
    return SampleCatalogGenerator(seed=42).generate()


@pytest.fixture(scope="module")
def sample_entries(sample_catalog):
    request = GenerationRequest(school_id="default-school", class_id="8A")
    return AssignmentEngine().assign(
        sample_catalog.subjects, sample_catalog.teachers, sample_catalog.time_slots, request
    ).entries


# ─── Helpers ──────────────────────────────────────────────────────────────────

class TestHelpers:

    def test_calendar_order(self, sample_entries, sample_catalog):
        """Sorted by day, then by chronological slot position."""
        ordered = calendar_order(list(reversed(sample_entries)), sample_catalog.time_slots)
        starts = {s.id: s.start_minutes for s in sample_catalog.time_slots}
        keys = [(e.day_of_week, starts[e.time_slot_id]) for e in ordered]
        assert keys == sorted(keys)
        assert len(ordered) == len(sample_entries)

    def test_build_grid(self, sample_entries):
        grid = build_grid(sample_entries)
        assert len(grid) == len(sample_entries)
        first = sample_entries[0]
        assert grid[(first.day_of_week, first.time_slot_id)] is first

    def test_format_entry_uses_names(self, sample_entries, sample_catalog):
        text = format_entry(sample_entries[0], sample_catalog)
        subject = sample_catalog.subject_by_id()[sample_entries[0].subject_id]
        assert text.splitlines()[0] == subject.name
        assert len(text.splitlines()) == 3

    def test_grid_rows_cover_all_slots(self, sample_entries, sample_catalog):
        rows = grid_rows(sample_entries, sample_catalog)
        assert len(rows) == len(sample_catalog.time_slots)
        assert all(len(cells) == 6 for _, cells in rows)
        placed = sum(1 for _, cells in rows for c in cells if c is not None)
        assert placed == len(sample_entries)

    def test_subject_color(self, sample_catalog):
        art = next(s for s in sample_catalog.subjects
                   if s.category == SubjectCategory.ART_EDUCATION)
        assert get_subject_color(art) == COLORS["art_education"]
        assert get_subject_color(None) == COLORS["other"]


# ─── Terminal grid ────────────────────────────────────────────────────────────

class TestTuiRenderer:

    def test_render_contains_days_and_subjects(self, sample_entries, sample_catalog):
        console = Console(record=True, width=200)
        table = render_timetable(sample_entries, sample_catalog, title="Class 8A",
                                 console=console)
        text = console.export_text()
        assert "Class 8A" in text
        for day in ("Mon", "Tue", "Sat"):
            assert day in text
        assert "Mathematics" in text
        assert "break" in text
        assert table.row_count == len(sample_catalog.time_slots)


# ─── Excel ────────────────────────────────────────────────────────────────────

class TestExcelExport:

    def test_workbook_sheets_and_cells(self, sample_entries, sample_catalog, tmp_path: Path):
        report = ComplianceScorer().score(
            sample_entries, sample_catalog.subjects, sample_catalog.time_slots)
        out = tmp_path / "out" / "timetable.xlsx"
        ExcelExporter(sample_entries, sample_catalog, school_name="Demo School").export(
            out, report=report)

        assert out.exists()
        wb = load_workbook(out)
        assert wb.sheetnames == ["Timetable", "Entries", "Compliance"]

        ws = wb["Timetable"]
        assert "Demo School" in ws["A1"].value
        assert "8A" in ws["A1"].value
        assert [ws.cell(row=4, column=c).value for c in range(1, 8)] == \
            ["Time", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        # Row 5 = assembly (first slot of the sample grid)
        assert ws.cell(row=5, column=2).value == "assembly"
        # Row 6 = first period; Monday holds the first placed subject
        first = sample_entries[0]
        subject = sample_catalog.subject_by_id()[first.subject_id]
        assert ws.cell(row=6, column=2).value.startswith(subject.name)

        entries_ws = wb["Entries"]
        assert entries_ws.max_row == len(sample_entries) + 1

        comp = wb["Compliance"]
        assert comp["B2"].value == report.overall_score

    def test_without_report_two_sheets(self, sample_entries, sample_catalog, tmp_path: Path):
        out = tmp_path / "plain.xlsx"
        ExcelExporter(sample_entries, sample_catalog).export(out)
        assert load_workbook(out).sheetnames == ["Timetable", "Entries"]

    def test_empty_timetable(self, sample_catalog, tmp_path: Path):
        out = tmp_path / "empty.xlsx"
        ExcelExporter([], sample_catalog).export(out)
        ws = load_workbook(out)["Timetable"]
        assert ws.cell(row=6, column=2).value in (None, "")


# ─── Sample data ──────────────────────────────────────────────────────────────

class TestSampleData:

    def test_seed_is_reproducible(self):
        a = SampleCatalogGenerator(seed=7).generate()
        b = SampleCatalogGenerator(seed=7).generate()
        assert [t.name for t in a.teachers] == [t.name for t in b.teachers]

    def test_all_categories_present(self, sample_catalog):
        assert {s.category for s in sample_catalog.subjects} == set(SubjectCategory)

    def test_feasible_with_music_warning(self, sample_catalog):
        report = sample_catalog.validate_feasibility()
        assert report.is_feasible
        assert any("Music" in w for w in report.warnings)

    def test_holistic_full_marks(self, sample_catalog, sample_entries):
        report = ComplianceScorer().score(
            sample_entries, sample_catalog.subjects, sample_catalog.time_slots)
        assert report.categories["holistic_development"] == 100
