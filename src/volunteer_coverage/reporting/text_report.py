from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from volunteer_coverage.models import RegionalLeadAssignment
from volunteer_coverage.wallclock import day_of_week

from .data_models import DayCoverage, WeeklyCoverageReport

OPEN = "OPEN"
A4_PORTRAIT = (8.27, 11.69)
LINES_PER_PAGE = 64


class ReportDocument:
    """
    PDF copy of a rendered digest.

    Text arrives line by line; a blank line ends a block (the header or one
    day). ``write`` packs whole blocks onto A4 pages, repeating the title on
    every page, and appends collected figures one per page.
    """

    def __init__(self, path: Path, title: str = "Weekly coverage digest") -> None:
        self.path = path
        self.title = title
        self.blocks: list[list[str]] = [[]]
        self.figures: list[plt.Figure] = []

    @property
    def lines(self) -> list[str]:
        return [line for block in self.blocks for line in block]

    def add_text(self, text: str) -> None:
        if text.strip():
            self.blocks[-1].append(text)
        elif self.blocks[-1]:
            self.blocks.append([])

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def pages(self) -> list[list[str]]:
        """Blocks packed into pages; a block longer than a page gets its own pages."""
        pages: list[list[str]] = []
        current: list[str] = []
        for block in filter(None, self.blocks):
            needed = len(block) + (1 if current else 0)
            if current and len(current) + needed > LINES_PER_PAGE:
                pages.append(current)
                current = []
            if current:
                current.append("")
            current.extend(block)
            while len(current) > LINES_PER_PAGE:
                pages.append(current[:LINES_PER_PAGE])
                current = current[LINES_PER_PAGE:]
        if current:
            pages.append(current)
        return pages

    def _text_page(self, pdf: PdfPages, body: str, footer: str) -> None:
        fig, ax = plt.subplots(figsize=A4_PORTRAIT)
        ax.axis("off")
        ax.set_title(self.title, loc="left", fontsize=11, fontweight="bold")
        ax.text(0.0, 0.98, body, ha="left", va="top", fontsize=8, family="monospace")
        ax.text(1.0, 0.0, footer, ha="right", va="bottom", fontsize=7, color="0.4")
        pdf.savefig(fig)
        plt.close(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        pages = self.pages()
        with PdfPages(self.path) as pdf:
            if not pages and not self.figures:
                self._text_page(pdf, "Digest contains no data.", "")
            for i, page in enumerate(pages, start=1):
                self._text_page(pdf, "\n".join(page), f"page {i}/{len(pages)}")
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


@contextmanager
def collecting_into(doc: ReportDocument) -> Iterator[ReportDocument]:
    """Mirror printed digest lines and rendered plots into ``doc`` while active."""
    global _ACTIVE_REPORT
    previous, _ACTIVE_REPORT = _ACTIVE_REPORT, doc
    try:
        yield doc
    finally:
        _ACTIVE_REPORT = previous


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(text: str) -> None:
    print(text)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(text)


def format_display_date(d: date) -> str:
    """e.g. 'Mon, Dec 15'."""
    return f"{day_of_week(d).short_name}, {d:%b} {d.day}"


def _regional_lead_text(lead: Optional[RegionalLeadAssignment]) -> str:
    if lead is None:
        return OPEN
    return lead.person_ref if lead.is_primary else f"{lead.person_ref} (Backup)"


def _day_lines(day: DayCoverage) -> list[str]:
    plural = "" if day.shift_count == 1 else "s"
    lines = [f"{format_display_date(day.local_date)} ({day.shift_count} shift{plural})"]
    lines.append(f"  Regional lead: {_regional_lead_text(day.regional_lead)}")
    for county, assignment in day.dispatchers_by_county.items():
        who = assignment.person_ref if assignment is not None else OPEN
        lines.append(f"  Dispatch {county}: {who}")
    total = len(day.zone_leads_by_zone)
    if total:
        open_zones = [z for z, a in day.zone_leads_by_zone.items() if a is None]
        line = f"  Zone leads: {day.covered_zones}/{total}"
        if open_zones:
            line += f" (open: {', '.join(open_zones)})"
        lines.append(line)
    return lines


def digest_title(report: WeeklyCoverageReport) -> str:
    first, last = report.days[0].local_date, report.days[-1].local_date
    return f"Weekly coverage: {format_display_date(first)} - {format_display_date(last)}"


def format_text_digest(report: WeeklyCoverageReport) -> str:
    """Plain-text weekly digest, one block per day."""
    needed = (
        f"{report.positions_needed}" if report.has_gaps else "All covered!"
    )
    lines = [
        digest_title(report),
        f"Total shifts: {report.total_shifts}",
        f"Positions needed: {needed}",
    ]
    for day in report.days:
        lines.append("")
        lines.extend(_day_lines(day))
    if report.issues:
        lines.append("")
        lines.append(f"Skipped {len(report.issues)} unreadable record(s):")
        for issue in report.issues:
            lines.append(f"  - {issue.kind} #{issue.index}: {issue.reason}")
    return "\n".join(lines)


def render_text_digest(report: WeeklyCoverageReport) -> None:
    """Print the digest (and mirror it into the active ReportDocument, if any)."""
    for line in format_text_digest(report).split("\n"):
        _log_print(line)
