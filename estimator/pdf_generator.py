"""
PDF Estimate Report.

Generates a printable estimate document from a ProjectEstimate.
Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Header
2. Project Overview
3. Summary (hours, duration, cost)
4. Stage Breakdown
5. Stage Rationale
6. Custom Items (when present)
7. Adjustments (when present)
"""

from datetime import datetime
from typing import Optional

from fpdf import FPDF

from .estimation_engine import format_currency, format_duration
from .schemas import AdjustedEstimate, ProjectEstimate

REPORT_TITLE = "IT Service Product Estimate"


def _fmt_hrs(hours) -> str:
    """Format hours as X.X"""
    try:
        return f"{float(hours):.1f}"
    except (ValueError, TypeError):
        return "0.0"


def _label(value) -> str:
    """Enum or string -> 'Web App' style label."""
    value = getattr(value, "value", value) or ""
    return str(value).replace("-", " ").replace("_", " ").title()


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("•", "-")    # bullet
        .replace("—", " - ")  # em dash
        .replace("–", "-")    # en dash
        .replace("“", '"')
        .replace("”", '"')
        .replace("‘", "'")
        .replace("’", "'")
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class EstimatePDF(FPDF):
    """Estimate report layout."""

    def __init__(self):
        super().__init__()
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # We handle headers manually per section

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for label, width in cols:
            align = "R" if label in ("Hours", "Weeks", "Cost", "Rate", "Staff") else "L"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, widths, aligns=None, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 8)
        aligns = aligns or ["L"] * len(widths)
        for val, width, align in zip(values, widths, aligns):
            self.cell(width, 5.5, _safe(str(val)), align=align)
        self.ln()

    def key_value(self, label, value):
        self.set_font("Helvetica", "B", 9)
        self.cell(50, 5.5, label)
        self.set_font("Helvetica", "", 9)
        self.cell(0, 5.5, _safe(str(value)), new_x="LMARGIN", new_y="NEXT")


def generate_estimate_pdf(
    estimate: ProjectEstimate,
    adjusted: Optional[AdjustedEstimate] = None,
    created_at: Optional[datetime] = None,
    notes: Optional[str] = None,
) -> bytes:
    """
    Render an estimate as a PDF document.

    Args:
        estimate: the calculated ProjectEstimate
        adjusted: optional second-pass AdjustedEstimate
        created_at: save time of a stored estimate; defaults to now
        notes: free-text notes saved with the estimate

    Returns:
        PDF bytes
    """
    pdf = EstimatePDF()
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 10, REPORT_TITLE, new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(100, 100, 100)
    date_str = (created_at or datetime.utcnow()).strftime("%B %d, %Y")
    pdf.cell(0, 5, f"Generated: {date_str}", new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(6)

    # ── SECTION 2: Project Overview ──
    pdf.section_header("PROJECT OVERVIEW")
    pdf.key_value("Project Name", estimate.project_name)
    pdf.key_value("Project Type", _label(estimate.project_type))
    platforms = adjusted.platforms if adjusted else [estimate.platform]
    pdf.key_value("Platform", ", ".join(_label(p) for p in platforms))
    pdf.key_value("Complexity", _label(estimate.complexity))
    if adjusted:
        pdf.key_value("Team Experience", _label(adjusted.team_experience))
        if adjusted.technologies:
            pdf.key_value("Technologies", ", ".join(adjusted.technologies))
    if notes:
        pdf.key_value("Notes", "")
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(pw, 4.5, _safe(notes))
    pdf.ln(4)

    # ── SECTION 3: Summary ──
    pdf.section_header("SUMMARY")
    pdf.set_font("Helvetica", "", 10)
    summary = [
        ("Total Hours", f"{estimate.total_hours:,.0f}"),
        ("Total Duration", format_duration(estimate.total_weeks)),
        ("Total Cost", format_currency(estimate.total_cost)),
    ]
    for label, value in summary:
        pdf.cell(130, 6, label)
        pdf.cell(60, 6, value, align="R")
        pdf.ln()
    pdf.ln(4)

    # ── SECTION 4: Stage Breakdown ──
    pdf.section_header("STAGE BREAKDOWN")
    cols = [("Stage", 48), ("Hours", 20), ("Weeks", 18), ("Rate", 22),
            ("Cost", 28), ("Staff", 14), ("Experience", 40)]
    widths = [c[1] for c in cols]
    aligns = ["L", "R", "R", "R", "R", "R", "L"]
    pdf.table_header(cols)
    for stage in estimate.stages:
        pdf.table_row(
            [stage.label, _fmt_hrs(stage.hours), f"{stage.weeks:g}", f"{format_currency(stage.rate)}/hr",
             format_currency(stage.cost), stage.personnel, stage.experience],
            widths, aligns,
        )
    pdf.set_draw_color(200, 200, 200)
    pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
    pdf.table_row(
        ["Total", _fmt_hrs(estimate.total_hours), f"{estimate.total_weeks:g}", "",
         format_currency(estimate.total_cost), "", ""],
        widths, aligns, bold=True,
    )
    pdf.ln(4)

    # ── SECTION 5: Rationale ──
    pdf.section_header("STAGE RATIONALE")
    for stage in estimate.stages:
        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(0, 5, _safe(stage.label), new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 8)
        pdf.multi_cell(pw, 4.5, _safe(stage.rationale))
        pdf.set_font("Helvetica", "I", 8)
        pdf.set_text_color(120, 120, 120)
        pdf.cell(0, 4.5, _safe(f"Tools: {', '.join(stage.tools)}"), new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(0, 0, 0)
        pdf.ln(2)

    # ── SECTION 6: Custom Items ──
    if estimate.custom_items:
        pdf.section_header("CUSTOM ITEMS")
        item_cols = [("Name", 60), ("Stage", 45), ("Complexity", 30), ("Hours", 20)]
        item_widths = [c[1] for c in item_cols]
        pdf.table_header(item_cols)
        for item in estimate.custom_items:
            pdf.table_row(
                [item.name[:40], _label(item.stage), _label(item.complexity), _fmt_hrs(item.hours)],
                item_widths, ["L", "L", "L", "R"],
            )
        pdf.ln(4)

    # ── SECTION 7: Adjustments ──
    if adjusted:
        pdf.section_header("ADJUSTED TOTALS")
        pdf.set_font("Helvetica", "", 10)
        rows = [
            ("Experience Multiplier", f"{adjusted.experience_multiplier:g}x"),
            ("Platform Multiplier", f"{adjusted.platform_multiplier:g}x"),
            ("Adjusted Hours", f"{adjusted.total_hours:,.0f}"),
            ("Adjusted Duration", format_duration(adjusted.total_weeks)),
        ]
        for label, value in rows:
            pdf.cell(130, 6, label)
            pdf.cell(60, 6, value, align="R")
            pdf.ln()
        pdf.ln(1)
        pdf.set_fill_color(45, 55, 72)
        pdf.set_text_color(255, 255, 255)
        pdf.set_font("Helvetica", "B", 13)
        pdf.cell(130, 10, "  ADJUSTED COST", fill=True)
        pdf.cell(60, 10, f"{format_currency(adjusted.total_cost)}  ", fill=True, align="R")
        pdf.set_text_color(0, 0, 0)
        pdf.ln(14)

    return bytes(pdf.output())
