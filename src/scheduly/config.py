"""Policy constants for schedule generation.

All tunables live on one frozen model. Build a new instance (or load one
from JSON) to override defaults; nothing reads them from the environment.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .clock import MINUTES_PER_DAY, TimeOfDay, anchor_night_boundary
from .models import TimeWindow

logger = logging.getLogger(__name__)


def _clock(hour: int, minute: int) -> Callable[[], TimeOfDay]:
    return lambda: TimeOfDay(hour=hour, minute=minute)


def _default_review_caps() -> dict[TimeWindow, int]:
    return {
        TimeWindow.LONG: 30,
        TimeWindow.MEDIUM: 20,
        TimeWindow.SHORT: 15,
        TimeWindow.SLEEP_FIRST: 0,
    }


def _default_window_cutoffs() -> tuple[TimeOfDay, TimeOfDay, TimeOfDay]:
    return (
        TimeOfDay(hour=21, minute=30),
        TimeOfDay(hour=22, minute=30),
        TimeOfDay(hour=23, minute=15),
    )


class PolicyConstants(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Clock boundaries.
    lights_off: TimeOfDay = Field(default_factory=_clock(0, 30))
    wake_up_target: TimeOfDay = Field(default_factory=_clock(8, 0))
    study_block_start: TimeOfDay = Field(default_factory=_clock(8, 30))
    morning_study_end: TimeOfDay = Field(default_factory=_clock(9, 55))
    leave_home_time: TimeOfDay = Field(default_factory=_clock(10, 0))

    # Block lengths, in minutes.
    min_study_block_length: int = Field(default=25, ge=1)
    min_hygiene_block_length: int = Field(default=30, ge=1)
    wind_down_buffer: int = Field(default=15, ge=0)
    max_passive_listening: int = Field(default=20, ge=0)
    min_active_block: int = Field(default=25, ge=1)
    active_cycle_duration: int = Field(default=30, ge=1)
    wake_up_block_length: int = Field(default=15, ge=1)

    # Review sizing.
    review_minutes_per_card: float = Field(default=1.5, gt=0)
    review_caps: dict[TimeWindow, int] = Field(default_factory=_default_review_caps)
    max_review_cards: int = Field(default=200, ge=0)

    # C1 < C2 < C3 for the window classifier.
    window_cutoffs: tuple[TimeOfDay, TimeOfDay, TimeOfDay] = Field(
        default_factory=_default_window_cutoffs
    )

    @model_validator(mode="after")
    def validate_policy(self) -> PolicyConstants:
        c1, c2, c3 = (cutoff.minute_of_day for cutoff in self.window_cutoffs)
        if not c1 < c2 < c3:
            msg = "window_cutoffs must be strictly increasing"
            raise ValueError(msg)

        missing = [
            window.value for window in TimeWindow if window not in self.review_caps
        ]
        if missing:
            msg = f"review_caps is missing windows: {', '.join(missing)}"
            raise ValueError(msg)
        if any(cap < 0 for cap in self.review_caps.values()):
            msg = "review_caps must not be negative"
            raise ValueError(msg)

        if self.min_active_block > self.active_cycle_duration:
            msg = "min_active_block must not exceed active_cycle_duration"
            raise ValueError(msg)

        # Wake-up is always on the morning after the evening anchor.
        lights_off = anchor_night_boundary(self.lights_off).absolute_minutes
        if lights_off >= MINUTES_PER_DAY + self.wake_up_target.minute_of_day:
            msg = "lights_off must fall before the next-day wake_up_target"
            raise ValueError(msg)

        morning = [
            self.wake_up_target.minute_of_day + self.wake_up_block_length,
            self.study_block_start.minute_of_day,
            self.morning_study_end.minute_of_day,
            self.leave_home_time.minute_of_day,
        ]
        if morning[0] > morning[1] or not morning[1] < morning[2] < morning[3]:
            msg = (
                "morning boundaries must satisfy wake-up + wake_up_block_length <= "
                "study_block_start < morning_study_end < leave_home_time"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def from_json_file(cls, path: str | Path) -> PolicyConstants:
        """Load overrides from a JSON object; unspecified fields keep their defaults."""
        text = Path(path).read_text(encoding="utf-8")
        policy = cls.model_validate_json(text)
        logger.debug("Loaded policy overrides from %s", path)
        return policy


DEFAULT_POLICY = PolicyConstants()
