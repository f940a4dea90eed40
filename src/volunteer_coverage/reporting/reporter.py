from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from volunteer_coverage.config import Config

from .adapters import PandasReportAdapter, ReportAdapter
from .data_models import WeeklyCoverageReport
from .plots import plot_coverage_grid, plot_open_positions
from .text_report import (
    ReportDocument,
    collecting_into,
    digest_title,
    render_text_digest,
)

logger = logging.getLogger(__name__)


class Reporter:
    """High-level orchestrator: renders a coverage report as text, CSV, plots and PDF."""

    def __init__(
        self,
        cfg: Config,
        adapter: ReportAdapter | None = None,
        enable_plots: Optional[bool] = None,
        write_files: bool = True,
    ) -> None:
        """
        cfg supplies OUTPUT_DIR and the ENABLE_PLOTS default.
        write_files=False keeps everything on stdout (no CSV/PDF).
        """
        self.cfg = cfg
        self.adapter: ReportAdapter = adapter or PandasReportAdapter()
        self.enable_plots = cfg.ENABLE_PLOTS if enable_plots is None else enable_plots
        self.write_files = write_files

    @property
    def out_dir(self) -> Path:
        return Path(self.cfg.OUTPUT_DIR)

    def render_text_report(self, report: WeeklyCoverageReport) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_digest(report)

    def export_csv(self, report: WeeklyCoverageReport) -> list[Path]:
        """Write per-slot and per-day tables; returns the written paths."""
        self.out_dir.mkdir(parents=True, exist_ok=True)
        slots_path = self.out_dir / "coverage_slots.csv"
        days_path = self.out_dir / "coverage_days.csv"
        self.adapter.df_slots(report).to_csv(slots_path, index=False)
        self.adapter.df_days(report).to_csv(days_path, index=False)
        return [slots_path, days_path]

    def post_build(self, report: WeeklyCoverageReport) -> None:
        """Render the digest (and optional plots) after a report is built."""
        if not self.write_files:
            self.render_text_report(report)
            return

        report_doc = ReportDocument(
            self.out_dir / "coverage_digest.pdf", title=digest_title(report)
        )
        try:
            with collecting_into(report_doc):
                self._render_all(report)
        finally:
            report_doc.write()

    def _render_all(self, report: WeeklyCoverageReport) -> None:
        self.render_text_report(report)
        paths = self.export_csv(report)
        logger.debug("Wrote %s", ", ".join(str(p) for p in paths))
        if not self.enable_plots:
            return
        plot_coverage_grid(report, self.adapter, out_dir=self.out_dir)
        plot_open_positions(report, self.adapter, out_dir=self.out_dir)
