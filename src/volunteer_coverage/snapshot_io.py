from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Callable, TypeVar

from volunteer_coverage.models import (
    ConfirmedAssignment,
    CoverageSnapshot,
    DispatcherAssignment,
    RegionalLeadAssignment,
    RoleRequirement,
    ShiftSnapshot,
)

DEFAULT_SNAPSHOT_JSON = Path(__file__).resolve().parents[1] / "example_snapshot.json"

T = TypeVar("T")


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key; the settings store uses camelCase, Python callers snake_case."""
    for key in keys:
        if key in raw:
            return raw[key]
    return default


def _required(raw: Mapping[str, Any], *keys: str) -> Any:
    """Like _pick, but a missing or null value raises KeyError naming the first key."""
    value = _pick(raw, *keys)
    if value is None:
        raise KeyError(keys[0])
    return value


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _entries(raw: Any, what: str) -> list[Mapping[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, (str, bytes, bytearray)) or not isinstance(raw, Sequence):
        raise TypeError(f"'{what}' must be a list of objects.")
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise TypeError(f"Each '{what}' entry must be an object/dict.")
    return list(raw)


def _names(raw: Any, what: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        raise TypeError(f"'{what}' must be a list of names.")
    return tuple(str(v) for v in raw)


def _build(
    raw: Mapping[str, Any], what: str, factory: Callable[[Mapping[str, Any]], T]
) -> list[T]:
    return [factory(entry) for entry in _entries(raw.get(what), what)]


def _requirement(raw: Mapping[str, Any]) -> RoleRequirement:
    return RoleRequirement(
        role=str(raw["role"]),
        min_required=int(_pick(raw, "minRequired", "min_required", default=0)),
        max_allowed=_optional_int(_pick(raw, "maxAllowed", "max_allowed")),
    )


def _assignment(raw: Mapping[str, Any]) -> ConfirmedAssignment:
    return ConfirmedAssignment(
        person_ref=str(_required(raw, "personRef", "person_ref")),
        role=_pick(raw, "role"),
        is_lead=bool(_pick(raw, "isLead", "is_lead", default=False)),
    )


def _shift(raw: Mapping[str, Any]) -> ShiftSnapshot:
    return ShiftSnapshot(
        shift_id=str(_required(raw, "shiftId", "shift_id", "id")),
        zone=str(raw["zone"]),
        date=raw["date"],
        assignments=tuple(_build(raw, "assignments", _assignment)),
        requirements=tuple(_build(raw, "requirements", _requirement)),
        min_volunteers=int(_pick(raw, "minVolunteers", "min_volunteers", default=0)),
    )


def _dispatcher(raw: Mapping[str, Any]) -> DispatcherAssignment:
    return DispatcherAssignment(
        person_ref=str(_required(raw, "personRef", "person_ref")),
        county=str(raw["county"]),
        date=raw["date"],
        time_block=_pick(raw, "timeBlock", "time_block"),
        is_backup=bool(_pick(raw, "isBackup", "is_backup", default=False)),
    )


def _regional_lead(raw: Mapping[str, Any]) -> RegionalLeadAssignment:
    return RegionalLeadAssignment(
        person_ref=str(_required(raw, "personRef", "person_ref")),
        date=raw["date"],
        is_primary=bool(_pick(raw, "isPrimary", "is_primary", default=True)),
    )


def snapshot_from_mapping(data: Mapping[str, Any]) -> CoverageSnapshot:
    """
    Build a CoverageSnapshot from plain JSON-like data.

    Record dates are kept as given; a malformed date only surfaces later as a
    skipped record in the weekly report. Missing or null required fields
    (``personRef``, ``shiftId``, ``zone``, ``county``, ``date``, ``role``) raise
    KeyError, so a record without a person can never fill a slot.
    """
    if not isinstance(data, Mapping):
        raise TypeError("Snapshot data must be an object/dict.")
    dispatcher_key = (
        "dispatcherAssignments" if "dispatcherAssignments" in data else "dispatcher_assignments"
    )
    lead_key = (
        "regionalLeadAssignments"
        if "regionalLeadAssignments" in data
        else "regional_lead_assignments"
    )
    return CoverageSnapshot(
        counties=_names(data.get("counties"), "counties"),
        zones=_names(data.get("zones"), "zones"),
        shifts=tuple(_build(data, "shifts", _shift)),
        dispatcher_assignments=tuple(_build(data, dispatcher_key, _dispatcher)),
        regional_lead_assignments=tuple(_build(data, lead_key, _regional_lead)),
    )


def snapshot_from_json(path: str | Path | None = None) -> CoverageSnapshot:
    """
    Load a coverage snapshot from a JSON file on disk.

    If `path` is omitted, the loader reads from `src/example_snapshot.json`.
    The file holds one object with `counties`, `zones`, `shifts`,
    `dispatcherAssignments` and `regionalLeadAssignments` (snake_case keys are
    accepted too).
    """
    file_path = Path(path) if path is not None else DEFAULT_SNAPSHOT_JSON
    file_path = file_path.expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("snapshot_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Snapshot JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    return snapshot_from_mapping(data)
