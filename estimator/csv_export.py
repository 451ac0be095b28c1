"""
Spreadsheet exports — CSV and XLSX.

Both formats are built from the same section rows (estimate_rows()) so a
CSV and a workbook of one estimate never disagree. CSV quoting is left to
the csv module, which quotes any cell holding a comma, quote or newline.
"""

import csv
import io
from datetime import datetime
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .estimation_engine import format_currency, format_duration
from .schemas import AdjustedEstimate, ProjectEstimate

REPORT_TITLE = "IT Service Product Estimate"

NAVY = "2D3748"
header_fill = PatternFill(start_color=NAVY, end_color=NAVY, fill_type="solid")
header_font = Font(name="Calibri", size=10, bold=True, color="FFFFFF")
title_font = Font(name="Calibri", size=14, bold=True, color=NAVY)
section_font = Font(name="Calibri", size=11, bold=True, color=NAVY)
label_font = Font(name="Calibri", size=10, bold=True)

STAGE_COLUMNS = ["Stage", "Hours", "Weeks", "Rate", "Cost", "Personnel", "Experience", "Tools", "Reason"]


def _value(v) -> str:
    return str(getattr(v, "value", v))


def _upper(v) -> str:
    return _value(v).replace("-", " ").upper()


def estimate_rows(
    estimate: ProjectEstimate,
    adjusted: Optional[AdjustedEstimate] = None,
    created_at: Optional[datetime] = None,
) -> List[list]:
    """Every section of the report as a list of rows. Blank rows separate sections."""
    rows = [
        [REPORT_TITLE],
        ["Generated", (created_at or datetime.utcnow()).strftime("%Y-%m-%d")],
        [],
        ["Project Overview"],
        ["Project Name", estimate.project_name],
        ["Project Type", _upper(estimate.project_type)],
        ["Platform", ", ".join(_value(p) for p in (adjusted.platforms if adjusted else [estimate.platform]))],
        ["Complexity", _upper(estimate.complexity)],
        ["Team Experience", _value(adjusted.team_experience) if adjusted else "N/A"],
        ["Technologies", ", ".join(adjusted.technologies) if adjusted and adjusted.technologies else "N/A"],
        [],
        ["Summary"],
        ["Total Hours", f"{estimate.total_hours:g}"],
        ["Total Duration", format_duration(estimate.total_weeks)],
        ["Total Cost", format_currency(estimate.total_cost)],
        [],
        ["Stage Breakdown"],
        STAGE_COLUMNS,
    ]
    for stage in estimate.stages:
        rows.append([
            stage.label,
            f"{stage.hours:g}",
            f"{stage.weeks:g}",
            format_currency(stage.rate),
            format_currency(stage.cost),
            str(stage.personnel),
            stage.experience,
            "; ".join(stage.tools),
            stage.rationale,
        ])
    rows.append([])

    if estimate.custom_items:
        rows.append(["Custom Items"])
        rows.append(["Name", "Stage", "Complexity", "Hours", "Reason"])
        for item in estimate.custom_items:
            rows.append([item.name, _value(item.stage), _value(item.complexity), f"{item.hours:g}", item.reason])
        rows.append([])

    if adjusted:
        rows.append(["Adjustments"])
        rows.append(["Experience Multiplier", f"{adjusted.experience_multiplier:g}"])
        rows.append(["Platform Multiplier", f"{adjusted.platform_multiplier:g}"])
        rows.append(["Adjusted Hours", f"{adjusted.total_hours:g}"])
        rows.append(["Adjusted Duration", format_duration(adjusted.total_weeks)])
        rows.append(["Adjusted Cost", format_currency(adjusted.total_cost)])

    return rows


def generate_estimate_csv(
    estimate: ProjectEstimate,
    adjusted: Optional[AdjustedEstimate] = None,
    created_at: Optional[datetime] = None,
) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerows(estimate_rows(estimate, adjusted, created_at))
    return buffer.getvalue()


def generate_estimate_xlsx(
    estimate: ProjectEstimate,
    adjusted: Optional[AdjustedEstimate] = None,
    created_at: Optional[datetime] = None,
) -> bytes:
    """Workbook with a "Summary" sheet (full report) and a "Stages" sheet (one row per stage)."""
    wb = Workbook()

    ws = wb.active
    ws.title = "Summary"
    section_titles = {"Project Overview", "Summary", "Stage Breakdown", "Custom Items", "Adjustments"}
    for r, row in enumerate(estimate_rows(estimate, adjusted, created_at), start=1):
        for c, value in enumerate(row, start=1):
            cell = ws.cell(row=r, column=c, value=value)
            if r == 1:
                cell.font = title_font
            elif len(row) == 1 and value in section_titles:
                cell.font = section_font
            elif c == 1:
                cell.font = label_font
    ws.column_dimensions["A"].width = 28
    ws.column_dimensions["B"].width = 24

    stages_ws = wb.create_sheet("Stages")
    for c, label in enumerate(STAGE_COLUMNS, start=1):
        cell = stages_ws.cell(row=1, column=c, value=label)
        cell.fill = header_fill
        cell.font = header_font
    for r, stage in enumerate(estimate.stages, start=2):
        values = [stage.label, stage.hours, stage.weeks, stage.rate, stage.cost,
                  stage.personnel, stage.experience, "; ".join(stage.tools), stage.rationale]
        for c, value in enumerate(values, start=1):
            cell = stages_ws.cell(row=r, column=c, value=value)
            if c == len(values):
                cell.alignment = Alignment(wrap_text=True, vertical="top")
    total_row = len(estimate.stages) + 2
    stages_ws.cell(row=total_row, column=1, value="Total").font = label_font
    stages_ws.cell(row=total_row, column=2, value=estimate.total_hours).font = label_font
    stages_ws.cell(row=total_row, column=3, value=estimate.total_weeks).font = label_font
    stages_ws.cell(row=total_row, column=5, value=estimate.total_cost).font = label_font
    for c, width in enumerate([24, 10, 10, 10, 12, 10, 14, 40, 60], start=1):
        stages_ws.column_dimensions[get_column_letter(c)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
