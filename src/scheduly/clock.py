from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import InvalidTimeFormat

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Clock values before noon are "after midnight" when read against an evening anchor.
ROLLOVER_HOUR = 12

_CLOCK_RE = re.compile(r"^\s*([01]?\d|2[0-3]):([0-5]\d)\s*$")


def _split_clock_text(text: str) -> dict[str, int]:
    match = _CLOCK_RE.match(text)
    if match is None:
        raise InvalidTimeFormat(text)
    return {"hour": int(match.group(1)), "minute": int(match.group(2))}


class TimeOfDay(BaseModel):
    """Naive wall-clock time with no date or timezone attached."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @model_validator(mode="before")
    @classmethod
    def parse_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _split_clock_text(data)
        return data

    @classmethod
    def parse(cls, text: str) -> TimeOfDay:
        return cls(**_split_clock_text(text))

    @property
    def minute_of_day(self) -> int:
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class AnchoredTime(BaseModel):
    """A clock time plus an explicit day offset from the schedule's anchor day."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    time: TimeOfDay
    day_offset: int = 0

    @property
    def absolute_minutes(self) -> int:
        return self.day_offset * MINUTES_PER_DAY + self.time.minute_of_day

    @classmethod
    def from_absolute(cls, minutes: int) -> AnchoredTime:
        day_offset, minute_of_day = divmod(minutes, MINUTES_PER_DAY)
        hour, minute = divmod(minute_of_day, MINUTES_PER_HOUR)
        return cls(time=TimeOfDay(hour=hour, minute=minute), day_offset=day_offset)

    def __str__(self) -> str:
        return str(self.time)


ClockValue = TimeOfDay | AnchoredTime


def parse_time_of_day(text: str | None) -> TimeOfDay:
    """Parse ``HH:MM`` text, raising :class:`InvalidTimeFormat` on anything else."""
    if not text:
        raise InvalidTimeFormat(text)
    return TimeOfDay.parse(text)


def _absolute(value: ClockValue) -> int:
    if isinstance(value, AnchoredTime):
        return value.absolute_minutes
    return value.minute_of_day


def minutes_between(a: ClockValue, b: ClockValue, b_next_day: bool = False) -> int:
    """Signed minutes from ``a`` to ``b``.

    Anchored values carry their own day offsets. ``b_next_day`` shifts ``b``
    one extra day forward, which is how a bare ``TimeOfDay`` end-of-night
    boundary is compared against an evening start.
    """
    delta = _absolute(b) - _absolute(a)
    if b_next_day:
        delta += MINUTES_PER_DAY
    return delta


def add_minutes(t: ClockValue, n: int) -> AnchoredTime:
    """Move ``t`` by ``n`` minutes; crossing midnight changes ``day_offset``."""
    return AnchoredTime.from_absolute(_absolute(t) + n)


def anchor_night_boundary(t: TimeOfDay) -> AnchoredTime:
    """Anchor an end-of-night boundary (lights-off, wake-up) to tonight's evening."""
    day_offset = 1 if t.hour < ROLLOVER_HOUR else 0
    return AnchoredTime(time=t, day_offset=day_offset)


def later(a: AnchoredTime, b: AnchoredTime) -> AnchoredTime:
    return a if a.absolute_minutes >= b.absolute_minutes else b
