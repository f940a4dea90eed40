from __future__ import annotations

from .adapters import PandasReportAdapter, ReportAdapter
from .aggregator import build_weekly_report
from .data_models import DayCoverage, RecordIssue, WeeklyCoverageReport
from .reporter import Reporter

__all__ = [
    "Reporter",
    "ReportAdapter",
    "PandasReportAdapter",
    "build_weekly_report",
    "DayCoverage",
    "RecordIssue",
    "WeeklyCoverageReport",
]
