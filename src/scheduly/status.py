"""Read-only runtime status of schedule blocks at a given wall-clock time."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from .clock import ROLLOVER_HOUR, AnchoredTime, TimeOfDay, minutes_between
from .models import TimeBlock


class BlockStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


class BlockProgress(BaseModel):
    model_config = ConfigDict(extra="forbid")

    block_id: str
    status: BlockStatus
    progress_percent: int = Field(ge=0, le=100)


def block_status(block: TimeBlock, now: AnchoredTime) -> BlockProgress:
    """Status of ``block`` at ``now``, both on the same anchored timeline.

    A block the user marked complete reports as completed regardless of time.
    """
    if block.completed or minutes_between(block.end, now) > 0:
        status, progress = BlockStatus.COMPLETED, 100
    elif minutes_between(block.start, now) < 0:
        status, progress = BlockStatus.UPCOMING, 0
    else:
        elapsed = minutes_between(block.start, now)
        status = BlockStatus.ACTIVE
        progress = round(elapsed * 100 / block.duration_minutes)
    return BlockProgress(block_id=block.id, status=status, progress_percent=progress)


def anchor_now(now: TimeOfDay, blocks: Sequence[TimeBlock]) -> AnchoredTime:
    """Anchor a wall-clock reading onto the timeline of ``blocks``.

    For a schedule that runs past midnight, a before-noon clock that would
    precede the first block on day 0 is read as day 1.
    """
    same_day = AnchoredTime(time=now)
    if not blocks or now.hour >= ROLLOVER_HOUR:
        return same_day
    crosses_midnight = any(block.end.day_offset > 0 for block in blocks)
    if crosses_midnight and minutes_between(same_day, blocks[0].start) > 0:
        return AnchoredTime(time=now, day_offset=1)
    return same_day


def schedule_status(
    blocks: Sequence[TimeBlock], now: TimeOfDay | datetime
) -> list[BlockProgress]:
    if isinstance(now, datetime):
        now = TimeOfDay(hour=now.hour, minute=now.minute)
    anchored = anchor_now(now, blocks)
    return [block_status(block, anchored) for block in blocks]
