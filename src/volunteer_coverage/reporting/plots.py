from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap
from matplotlib.patches import Patch
from matplotlib.ticker import MaxNLocator

from .adapters import PandasReportAdapter, ReportAdapter
from .data_models import WeeklyCoverageReport
from .text_report import get_active_report

COVERED_COLOR = "#34D399"
OPEN_COLOR = "#F87171"


def _save_and_show(fig: plt.Figure, filename: str, out_dir: Path = Path("outputs")) -> None:
    """Persist the plot under out_dir and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def _slot_label(scope: str, key: str) -> str:
    if scope == "regional_lead":
        return "Regional lead"
    if scope == "dispatcher":
        return f"Dispatch: {key}"
    return f"Zone: {key}"


def plot_coverage_grid(
    report: WeeklyCoverageReport,
    adapter: ReportAdapter | None = None,
    out_dir: Path = Path("outputs"),
    enable_plot: bool = True,
) -> None:
    """Render a slot x day grid, green where a slot is covered and red where open."""
    if not enable_plot:
        return

    df = (adapter or PandasReportAdapter()).df_slots(report)
    if df.empty:
        return

    slots = list(dict.fromkeys(zip(df["scope"], df["key"])))
    dates = list(dict.fromkeys(df["date"]))
    grid = np.zeros((len(slots), len(dates)), dtype=int)
    row_of = {slot: i for i, slot in enumerate(slots)}
    col_of = {d: j for j, d in enumerate(dates)}
    for scope, key, d, covered in zip(df["scope"], df["key"], df["date"], df["covered"]):
        grid[row_of[(scope, key)], col_of[d]] = int(bool(covered))

    height = max(2.5, 0.35 * len(slots) + 1.5)
    fig, ax = plt.subplots(figsize=(7.5, height), dpi=150)
    ax.set_title("Coverage by day", pad=25)
    ax.imshow(
        grid,
        cmap=ListedColormap([OPEN_COLOR, COVERED_COLOR]),
        vmin=0,
        vmax=1,
        aspect="auto",
    )
    weekdays = list(dict.fromkeys(zip(df["date"], df["weekday"])))
    ax.set_xticks(range(len(dates)))
    ax.set_xticklabels([f"{wd}\n{d:%m-%d}" for d, wd in weekdays])
    ax.set_yticks(range(len(slots)))
    ax.set_yticklabels([_slot_label(scope, key) for scope, key in slots])
    ax.set_xticks(np.arange(-0.5, len(dates), 1), minor=True)
    ax.set_yticks(np.arange(-0.5, len(slots), 1), minor=True)
    ax.grid(which="minor", color="white", linewidth=1.5)
    ax.tick_params(which="minor", length=0)
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.legend(
        handles=[
            Patch(color=COVERED_COLOR, label="Covered"),
            Patch(color=OPEN_COLOR, label="Open"),
        ],
        ncol=2,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.08),
        frameon=False,
    )
    fig.tight_layout()
    _save_and_show(fig, "coverage_grid.png", out_dir)
    doc = get_active_report()
    if doc is not None:
        doc.add_figure(fig)


def plot_open_positions(
    report: WeeklyCoverageReport,
    adapter: ReportAdapter | None = None,
    out_dir: Path = Path("outputs"),
    enable_plot: bool = True,
) -> None:
    """Bar chart of open positions per day with the shift count overlaid."""
    if not enable_plot:
        return

    days = (adapter or PandasReportAdapter()).df_days(report)
    if days.empty:
        return

    x = np.arange(len(days))
    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title(f"Open positions (total {report.positions_needed})", pad=20)
    ax.bar(x, days["open_positions"], color=OPEN_COLOR, width=0.7, label="Open positions")
    ax.plot(x, days["shifts"], color="black", linewidth=1, marker="o", label="Shifts")
    ax.set_xticks(x)
    ax.set_xticklabels(days["weekday"])
    ax.set_ylabel("Count")
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()
    _save_and_show(fig, "open_positions.png", out_dir)
    doc = get_active_report()
    if doc is not None:
        doc.add_figure(fig)
