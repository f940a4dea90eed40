from __future__ import annotations

from pathlib import Path

import pytest

from volunteer_coverage.config import Config
from volunteer_coverage.errors import InvalidTimeZoneId
from volunteer_coverage.wallclock import Weekday


def test_defaults():
    cfg = Config(TIMEZONE="America/Chicago")
    cfg.validate()
    assert cfg.anchor_weekday is Weekday.MONDAY
    assert cfg.DIGEST_SEND_HOUR == 18
    assert cfg.OUTPUT_DIR == Path("outputs")


def test_weekday_accepts_names_and_numbers():
    assert Config(TIMEZONE="UTC", WEEK_ANCHOR_WEEKDAY="sunday").anchor_weekday is Weekday.SUNDAY
    assert Config(TIMEZONE="UTC", WEEK_ANCHOR_WEEKDAY=3).anchor_weekday is Weekday.WEDNESDAY
    with pytest.raises(ValueError):
        Config(TIMEZONE="UTC", WEEK_ANCHOR_WEEKDAY="someday")


def test_validate_rejects_unknown_timezone():
    with pytest.raises(InvalidTimeZoneId):
        Config(TIMEZONE="America/Atlantis").validate()


@pytest.mark.parametrize("hour", [-1, 24, 18.0, True])
def test_validate_rejects_bad_send_hour(hour):
    with pytest.raises(ValueError):
        Config(TIMEZONE="UTC", DIGEST_SEND_HOUR=hour).validate()


def test_from_settings_reads_camel_case_keys():
    cfg = Config.from_settings(
        {
            "timezone": "Europe/Berlin",
            "weekAnchorWeekday": "Sun",
            "weeklyDigestEnabled": False,
            "weeklyDigestSendHour": 7,
            "outputDir": "reports",
            "unrelatedSetting": "ignored",
        }
    )
    assert cfg.TIMEZONE == "Europe/Berlin"
    assert cfg.anchor_weekday is Weekday.SUNDAY
    assert cfg.DIGEST_ENABLED is False
    assert cfg.DIGEST_SEND_HOUR == 7
    assert cfg.OUTPUT_DIR == Path("reports")


def test_from_settings_keeps_defaults_for_missing_values():
    cfg = Config.from_settings({"TIMEZONE": "UTC", "weeklyDigestSendHour": None})
    assert cfg.DIGEST_SEND_HOUR == 18


def test_from_settings_requires_timezone():
    with pytest.raises(ValueError):
        Config.from_settings({"weeklyDigestSendHour": 9})
