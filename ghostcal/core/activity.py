"""Activity payload models and date-key normalization.

The loader emits JSON shaped like::

    {
      "byDate": {"2024-06-03": {"main": 2.0, "sub": 0.0}, ...},
      "mainHours": 120.5,
      "subagentHours": 48.0
    }

``main`` is the human track and ``sub`` the agent track. String keys are
parsed into :class:`datetime.date` values here and only turned back into
``YYYY-MM-DD`` strings for display, so nothing downstream depends on string
ordering.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, ValidationError, model_validator

from ghostcal.core.errors import InvalidActivityError

_DATE_KEY_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ][^\s]*)?\s*$")

_PAYLOAD_KEYS = {"byDate", "by_date", "mainHours", "main_hours", "subagentHours", "subagent_hours"}


class DayHours(BaseModel):
    """Hours recorded for one day on each track."""

    model_config = {"frozen": True}

    human: float = Field(default=0.0, validation_alias=AliasChoices("human", "main"))
    agent: float = Field(default=0.0, validation_alias=AliasChoices("agent", "sub"))


ZERO_HOURS = DayHours()

ActivityRecord = Dict[date, DayHours]


class ActivityPayload(BaseModel):
    """Raw activity as produced by an activity source."""

    by_date: Dict[str, DayHours] = Field(
        default_factory=dict, validation_alias=AliasChoices("byDate", "by_date")
    )
    main_hours: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("mainHours", "main_hours")
    )
    subagent_hours: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("subagentHours", "subagent_hours")
    )

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_mapping(cls, data: Any) -> Any:
        """Accept a bare ``{date: hours}`` mapping without the ``byDate`` wrapper."""
        if (
            isinstance(data, dict)
            and data
            and not _PAYLOAD_KEYS.intersection(data)
            and all(isinstance(value, dict) for value in data.values())
        ):
            return {"byDate": data}
        return data


def parse_activity_payload(data: Any) -> ActivityPayload:
    """Validate decoded JSON into an :class:`ActivityPayload`."""
    try:
        return ActivityPayload.model_validate(data)
    except ValidationError as exc:
        raise InvalidActivityError(f"Malformed activity payload: {exc}") from exc


def parse_date_key(key: Union[str, date]) -> date:
    """Parse a ``YYYY-MM-DD`` style key into a date.

    Non-padded components (``2024-6-3``) and ISO datetimes
    (``2024-06-03T10:15:00``) are accepted; the time part is ignored.
    """
    if isinstance(key, date):
        return key
    match = _DATE_KEY_RE.match(str(key))
    if not match:
        raise InvalidActivityError(f"Invalid activity date key: {key!r}", key)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidActivityError(f"Invalid activity date key: {key!r} ({exc})", key) from exc


def format_date_key(day: date) -> str:
    return day.isoformat()


def normalize_activity(raw: Mapping[Union[str, date], Any]) -> ActivityRecord:
    """Return a date-keyed record from a string-keyed mapping.

    Values may be :class:`DayHours` instances or plain dicts. Keys that
    normalize to the same date are merged by summing their hours.
    """
    record: ActivityRecord = {}
    for key, value in raw.items():
        day = parse_date_key(key)
        if isinstance(value, DayHours):
            hours = value
        else:
            try:
                hours = DayHours.model_validate(value)
            except ValidationError as exc:
                raise InvalidActivityError(f"Invalid hours for {key!r}: {exc}", key) from exc
        existing = record.get(day)
        if existing is not None:
            hours = DayHours(human=existing.human + hours.human, agent=existing.agent + hours.agent)
        record[day] = hours
    return record


__all__ = [
    "ActivityPayload",
    "ActivityRecord",
    "DayHours",
    "ZERO_HOURS",
    "format_date_key",
    "normalize_activity",
    "parse_activity_payload",
    "parse_date_key",
]
