from .cli import main
from .clock import (
    AnchoredTime,
    TimeOfDay,
    add_minutes,
    minutes_between,
    parse_time_of_day,
)
from .config import DEFAULT_POLICY, PolicyConstants
from .engine import (
    ScheduleEngine,
    build_evening_schedule,
    build_morning_schedule,
    classify_window,
)
from .errors import InvalidTimeFormat, ReviewCountOutOfRange, SchedulyError
from .models import (
    ActivityKind,
    SchedulePhase,
    ScheduleState,
    TimeBlock,
    TimeWindow,
)
from .status import BlockProgress, BlockStatus, block_status, schedule_status
from .store import ScheduleStore

__all__ = [
    "DEFAULT_POLICY",
    "ActivityKind",
    "AnchoredTime",
    "BlockProgress",
    "BlockStatus",
    "InvalidTimeFormat",
    "PolicyConstants",
    "ReviewCountOutOfRange",
    "ScheduleEngine",
    "SchedulePhase",
    "ScheduleState",
    "ScheduleStore",
    "SchedulyError",
    "TimeBlock",
    "TimeOfDay",
    "TimeWindow",
    "add_minutes",
    "block_status",
    "build_evening_schedule",
    "build_morning_schedule",
    "classify_window",
    "main",
    "minutes_between",
    "parse_time_of_day",
    "schedule_status",
]
