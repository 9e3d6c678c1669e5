from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .clock import AnchoredTime, TimeOfDay, minutes_between


class ActivityKind(str, Enum):
    REVIEW_DUE = "REVIEW_DUE"
    ACTIVE_LISTENING = "ACTIVE_LISTENING"
    PASSIVE_LISTENING = "PASSIVE_LISTENING"
    HYGIENE = "HYGIENE"
    SLEEP = "SLEEP"
    WAKE_UP = "WAKE_UP"
    PREP = "PREP"


class TimeWindow(str, Enum):
    """Evening category, declared from most to least available time."""

    LONG = "LONG"
    MEDIUM = "MEDIUM"
    SHORT = "SHORT"
    SLEEP_FIRST = "SLEEP_FIRST"

    @property
    def rank(self) -> int:
        """0 for LONG up to 3 for SLEEP_FIRST."""
        return list(TimeWindow).index(self)

    @property
    def label(self) -> str:
        return WINDOW_DESCRIPTIONS[self][0]

    @property
    def hint(self) -> str:
        return WINDOW_DESCRIPTIONS[self][1]


WINDOW_DESCRIPTIONS: dict[TimeWindow, tuple[str, str]] = {
    TimeWindow.LONG: ("Long Session", "2+ hours available"),
    TimeWindow.MEDIUM: ("Medium Session", "1-2 hours available"),
    TimeWindow.SHORT: ("Quick Session", "30-75 min available"),
    TimeWindow.SLEEP_FIRST: ("Sleep Priority", "Less than 30 min - rest up!"),
}


class SchedulePhase(str, Enum):
    MORNING = "MORNING"
    EVENING = "EVENING"
    SLEEP = "SLEEP"


class TimeBlock(BaseModel):
    """One labelled interval of a generated schedule."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1, max_length=120)
    name: str = Field(min_length=1, max_length=120)
    start: AnchoredTime
    end: AnchoredTime
    duration_minutes: int = Field(gt=0)
    activity: ActivityKind
    mandatory: bool = True
    completed: bool = False

    @model_validator(mode="after")
    def validate_duration(self) -> TimeBlock:
        span = minutes_between(self.start, self.end)
        if self.duration_minutes != span:
            msg = (
                f"duration_minutes ({self.duration_minutes}) must equal the "
                f"{span} minutes between {self.start} and {self.end}"
            )
            raise ValueError(msg)
        return self

    @property
    def is_optional(self) -> bool:
        return not self.mandatory


class ScheduleState(BaseModel):
    """Everything the presentation layer reads; replaced wholesale on each action."""

    model_config = ConfigDict(extra="forbid")

    phase: SchedulePhase = SchedulePhase.MORNING
    arrival_time_home: TimeOfDay | None = None
    time_window: TimeWindow | None = None
    blocks: list[TimeBlock] = Field(default_factory=list)
    review_cards_remaining: int = Field(default=0, ge=0)
    is_awake: bool = False
    last_updated: datetime = Field(default_factory=datetime.now)
