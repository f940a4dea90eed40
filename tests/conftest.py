# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg", force=True)

from volunteer_coverage.config import Config  # noqa: E402

NEW_YORK = "America/New_York"


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Configuration
# -----------------------------
@pytest.fixture
def tz() -> str:
    return NEW_YORK


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    """Config writing any report output into a per-test directory."""
    return Config(TIMEZONE=NEW_YORK, OUTPUT_DIR=tmp_path / "outputs")


@pytest.fixture
def fixed_now() -> datetime:
    # Sunday 2025-12-14 18:30 in New York
    return datetime(2025, 12, 14, 23, 30, tzinfo=timezone.utc)
