"""Export module: terminal grid (Rich) and Excel (openpyxl) for a class timetable."""

from export.excel_export import ExcelExporter
from export.tui_renderer import render_timetable

__all__ = ["ExcelExporter", "render_timetable"]
