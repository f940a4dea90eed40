from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Union

from volunteer_coverage.wallclock import Weekday, resolve_timezone


@dataclass
class Config:

    # Organization timezone (IANA key); no default, it always comes from the
    # organization's settings
    TIMEZONE: str

    # First day of every weekly coverage window
    WEEK_ANCHOR_WEEKDAY: Union[Weekday, int, str] = Weekday.MONDAY

    ### WEEKLY DIGEST ###

    DIGEST_ENABLED: bool = True
    DIGEST_SEND_HOUR: int = 18  # local hour, 0-23

    ### REPORTING ###

    OUTPUT_DIR: Path = Path("outputs")
    ENABLE_PLOTS: bool = False

    def __post_init__(self) -> None:
        self.WEEK_ANCHOR_WEEKDAY = Weekday.parse(self.WEEK_ANCHOR_WEEKDAY)
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self) -> None:
        """
        Validate the Config object has sensible values before building digests.
        Raises InvalidTimeZoneId for an unknown TIMEZONE.
        """
        resolve_timezone(self.TIMEZONE)
        if isinstance(self.DIGEST_SEND_HOUR, bool) or not isinstance(
            self.DIGEST_SEND_HOUR, int
        ):
            raise ValueError("DIGEST_SEND_HOUR must be an int.")
        if not (0 <= self.DIGEST_SEND_HOUR <= 23):
            raise ValueError("DIGEST_SEND_HOUR must be within [0, 23].")

    @property
    def anchor_weekday(self) -> Weekday:
        return Weekday.parse(self.WEEK_ANCHOR_WEEKDAY)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "Config":
        """
        Build a Config from an organization-settings mapping.

        Keys may be given as field names (``TIMEZONE``) or in the settings
        store's camelCase (``timezone``, ``weekAnchorWeekday``,
        ``weeklyDigestEnabled``, ``weeklyDigestSendHour``). Missing optional
        settings keep their defaults; a missing timezone is an error.
        """
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in settings.items():
            name = _SETTINGS_ALIASES.get(key, key)
            if name in names and value is not None:
                kwargs[name] = value
        if "TIMEZONE" not in kwargs:
            raise ValueError("Organization settings do not define a timezone.")
        return cls(**kwargs)


_SETTINGS_ALIASES: dict[str, str] = {
    "timezone": "TIMEZONE",
    "weekAnchorWeekday": "WEEK_ANCHOR_WEEKDAY",
    "weeklyDigestEnabled": "DIGEST_ENABLED",
    "weeklyDigestSendHour": "DIGEST_SEND_HOUR",
    "outputDir": "OUTPUT_DIR",
}
