"""Excel export of a class timetable (openpyxl)."""

from pathlib import Path
from typing import Optional

from export.helpers import (
    COLORS, calendar_order, format_entry, get_subject_color, grid_rows, today_str,
)
from models.catalog import Catalog
from models.compliance_report import COMPLIANCE_CATEGORIES, ComplianceReport
from models.timetable_entry import DAY_NAMES, TimetableEntry


class ExcelExporter:
    """Writes one class timetable to a workbook.

    Sheets: "Timetable" (slot × day grid), "Entries" (flat list in calendar
    order) and, when a report is given, "Compliance".
    """

    # Column widths (Excel units)
    COL_TIME_W = 15
    COL_DAY_W  = 24

    # Row heights (points)
    ROW_HEADER_H = 22
    ROW_LESSON_H = 52
    ROW_PAUSE_H  = 14

    def __init__(
        self,
        entries: list[TimetableEntry],
        catalog: Catalog,
        school_name: str = "",
        class_id: str = "",
    ):
        self.entries     = entries
        self.catalog     = catalog
        self.school_name = school_name
        self.class_id    = class_id or (entries[0].class_id if entries else "")

    # ─── Public API ───────────────────────────────────────────────────────────

    def export(self, output_path: Path, report: Optional[ComplianceReport] = None) -> None:
        """Creates the workbook with all sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # drop the empty default sheet

        self._sheet_timetable(wb)
        self._sheet_entries(wb)
        if report is not None:
            self._sheet_compliance(wb, report)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Timetable ─────────────────────────────────────────────────────

    def _sheet_timetable(self, wb) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Timetable")
        ws.cell(row=1, column=1,
                value=f"{self.school_name} – Class {self.class_id}".strip(" –")
                ).font = Font(bold=True, size=14)
        ws.cell(row=2, column=1, value=f"Created: {today_str()}")

        header_row = 4
        self._write_header(ws, header_row, ["Time"] + DAY_NAMES)
        ws.column_dimensions["A"].width = self.COL_TIME_W
        for col in range(2, 2 + len(DAY_NAMES)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        subjects = self.catalog.subject_by_id()
        border = self._thin_border()
        excel_row = header_row + 1

        for slot, cells in grid_rows(self.entries, self.catalog):
            c = ws.cell(row=excel_row, column=1, value=slot.label)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            if not slot.is_assignable:
                for col in range(2, 2 + len(DAY_NAMES)):
                    c = ws.cell(row=excel_row, column=col, value=slot.slot_type.value)
                    c.fill = self._fill(COLORS["pause"])
                    c.alignment = self._center_align(wrap=False)
                    c.border = border
                    c.font = Font(italic=True, size=8)
                ws.row_dimensions[excel_row].height = self.ROW_PAUSE_H
                excel_row += 1
                continue

            for col, entry in enumerate(cells, 2):
                if entry is None:
                    content, color = "", COLORS["free"]
                else:
                    content = format_entry(entry, self.catalog)
                    color = get_subject_color(subjects.get(entry.subject_id))
                c = ws.cell(row=excel_row, column=col, value=content)
                c.fill = self._fill(color)
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)
            ws.row_dimensions[excel_row].height = self.ROW_LESSON_H
            excel_row += 1

    # ─── Sheet: Entries ───────────────────────────────────────────────────────

    def _sheet_entries(self, wb) -> None:
        ws = wb.create_sheet(title="Entries")
        headers = ["Day", "Time", "Subject", "Teacher", "Room", "Confidence", "Note"]
        self._write_header(ws, 1, headers)

        subjects = self.catalog.subject_by_id()
        teachers = self.catalog.teacher_by_id()
        slots = self.catalog.slot_by_id()
        border = self._thin_border()

        row = 2
        for e in calendar_order(self.entries, self.catalog.time_slots):
            subject = subjects.get(e.subject_id)
            teacher = teachers.get(e.teacher_id)
            slot = slots.get(e.time_slot_id)
            values = [
                e.day_name,
                slot.label if slot else e.time_slot_id,
                subject.name if subject else e.subject_id,
                teacher.name if teacher else e.teacher_id,
                e.room_number or "",
                e.ai_confidence_score,
                e.compliance_note or "",
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value).border = border
            row += 1

        for letter, width in zip("ABCDEFG", (6, 14, 24, 24, 16, 11, 40)):
            ws.column_dimensions[letter].width = width

    # ─── Sheet: Compliance ────────────────────────────────────────────────────

    def _sheet_compliance(self, wb, report: ComplianceReport) -> None:
        from openpyxl.styles import Font

        ws = wb.create_sheet(title="Compliance")
        border = self._thin_border()
        ws.cell(row=1, column=1, value="NEP 2020 Compliance").font = Font(bold=True, size=13)
        ws.cell(row=2, column=1, value="Overall score")
        ws.cell(row=2, column=2, value=report.overall_score).font = Font(bold=True)

        row = 4
        self._write_header(ws, row, ["Category", "Score"])
        row += 1
        for name in COMPLIANCE_CATEGORIES:
            if name not in report.categories:
                continue
            score = report.categories[name]
            ws.cell(row=row, column=1, value=name.replace("_", " ").title()).border = border
            c = ws.cell(row=row, column=2, value=score)
            c.border = border
            if score < 80:
                c.fill = self._fill("FFCCCC")
            row += 1

        if report.recommendations:
            row += 1
            ws.cell(row=row, column=1, value="Recommendations").font = Font(bold=True)
            row += 1
            for text in report.recommendations:
                ws.cell(row=row, column=1, value=text)
                row += 1

        ws.column_dimensions["A"].width = 34
        ws.column_dimensions["B"].width = 10
