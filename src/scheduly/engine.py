from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .clock import (
    AnchoredTime,
    TimeOfDay,
    add_minutes,
    anchor_night_boundary,
    later,
    minutes_between,
)
from .config import DEFAULT_POLICY, PolicyConstants
from .models import ActivityKind, TimeBlock, TimeWindow

logger = logging.getLogger(__name__)

SLEEP_CYCLE_MINUTES = 90


@dataclass
class _Timeline:
    """Running cursor plus the blocks emitted so far, in emission order."""

    cursor: AnchoredTime
    blocks: list[TimeBlock] = field(default_factory=list)

    def minutes_until(self, moment: AnchoredTime) -> int:
        return minutes_between(self.cursor, moment)

    def emit(
        self,
        block_id: str,
        name: str,
        activity: ActivityKind,
        minutes: int,
        mandatory: bool = True,
    ) -> None:
        end = add_minutes(self.cursor, minutes)
        self.place(block_id, name, activity, self.cursor, end, mandatory)

    def emit_until(
        self,
        block_id: str,
        name: str,
        activity: ActivityKind,
        end: AnchoredTime,
        mandatory: bool = True,
    ) -> None:
        self.place(block_id, name, activity, self.cursor, end, mandatory)

    def place(
        self,
        block_id: str,
        name: str,
        activity: ActivityKind,
        start: AnchoredTime,
        end: AnchoredTime,
        mandatory: bool = True,
    ) -> None:
        self.blocks.append(
            TimeBlock(
                id=block_id,
                name=name,
                start=start,
                end=end,
                duration_minutes=minutes_between(start, end),
                activity=activity,
                mandatory=mandatory,
            )
        )
        self.cursor = end


class ScheduleEngine:
    """Deterministic evening and morning block builders for one policy."""

    def __init__(self, policy: PolicyConstants = DEFAULT_POLICY) -> None:
        self.policy = policy

    def classify_window(self, arrival: TimeOfDay) -> TimeWindow:
        c1, c2, c3 = (cutoff.minute_of_day for cutoff in self.policy.window_cutoffs)
        minute = arrival.minute_of_day
        if minute <= c1:
            return TimeWindow.LONG
        if minute < c2:
            return TimeWindow.MEDIUM
        if minute < c3:
            return TimeWindow.SHORT
        return TimeWindow.SLEEP_FIRST

    def anchor_arrival(self, arrival: TimeOfDay) -> AnchoredTime:
        """Place the arrival on tonight's timeline.

        Small-hours arrivals that still leave room for hygiene before the
        wake-up target belong to the night already under way (day 1).
        """
        hygiene_end = arrival.minute_of_day + self.policy.min_hygiene_block_length
        if hygiene_end < self.policy.wake_up_target.minute_of_day:
            return AnchoredTime(time=arrival, day_offset=1)
        return AnchoredTime(time=arrival, day_offset=0)

    def lights_off(self) -> AnchoredTime:
        return anchor_night_boundary(self.policy.lights_off)

    def wake_up(self) -> AnchoredTime:
        return AnchoredTime(time=self.policy.wake_up_target, day_offset=1)

    def wind_down_start(self) -> AnchoredTime:
        return add_minutes(self.lights_off(), -self.policy.wind_down_buffer)

    def available_study_minutes(self, arrival: TimeOfDay) -> int:
        total = minutes_between(self.anchor_arrival(arrival), self.lights_off())
        policy = self.policy
        usable = total - policy.wind_down_buffer - policy.min_hygiene_block_length
        return max(0, usable)

    def review_minutes(self, window: TimeWindow, review_cards_remaining: int) -> int:
        if review_cards_remaining <= 0:
            return 0
        per_card = self.policy.review_minutes_per_card
        estimate = math.ceil(review_cards_remaining * per_card)
        return min(self.policy.review_caps[window], estimate)

    def build_evening_schedule(
        self, arrival: TimeOfDay, window: TimeWindow, review_cards_remaining: int
    ) -> list[TimeBlock]:
        policy = self.policy
        lights_off = self.lights_off()
        timeline = _Timeline(cursor=self.anchor_arrival(arrival))

        timeline.emit(
            "hygiene-evening",
            "Hygiene + Passive Listening",
            ActivityKind.HYGIENE,
            policy.min_hygiene_block_length,
        )

        available = self.available_study_minutes(arrival)
        too_short = available < policy.min_study_block_length
        if too_short or window is TimeWindow.SLEEP_FIRST:
            logger.debug(
                "Skipping study content: window=%s available_study=%d",
                window.value,
                available,
            )
        else:
            self._plan_study(timeline, window, review_cards_remaining)
            if timeline.minutes_until(lights_off) > 0:
                timeline.emit_until(
                    "winddown", "Wind-down / Device-free", ActivityKind.PREP, lights_off
                )

        sleep_start = later(lights_off, timeline.cursor)
        wake_up = self.wake_up()
        cycles = minutes_between(sleep_start, wake_up) // SLEEP_CYCLE_MINUTES
        timeline.place(
            "sleep",
            f"Sleep ({cycles} cycles)",
            ActivityKind.SLEEP,
            sleep_start,
            wake_up,
        )

        logger.debug(
            "Built evening schedule for %s (%s): %d blocks",
            arrival,
            window.value,
            len(timeline.blocks),
        )
        return timeline.blocks

    def build_morning_schedule(self) -> list[TimeBlock]:
        policy = self.policy
        timeline = _Timeline(cursor=AnchoredTime(time=policy.wake_up_target))

        timeline.emit(
            "wake-hydrate",
            "Wake + Hydrate",
            ActivityKind.WAKE_UP,
            policy.wake_up_block_length,
        )
        if timeline.minutes_until(self._morning(policy.study_block_start)) > 0:
            timeline.emit_until(
                "breakfast",
                "Breakfast + Passive Listening",
                ActivityKind.PASSIVE_LISTENING,
                self._morning(policy.study_block_start),
            )
        timeline.emit_until(
            "morning-study",
            "Morning Study Block",
            ActivityKind.REVIEW_DUE,
            self._morning(policy.morning_study_end),
        )
        timeline.emit_until(
            "prep-leave",
            "Prep & Leave",
            ActivityKind.PREP,
            self._morning(policy.leave_home_time),
        )
        return timeline.blocks

    def _plan_study(
        self, timeline: _Timeline, window: TimeWindow, review_cards_remaining: int
    ) -> None:
        policy = self.policy
        wind_down_start = self.wind_down_start()

        review = min(
            self.review_minutes(window, review_cards_remaining),
            timeline.minutes_until(wind_down_start),
        )
        if review > 0:
            timeline.emit(
                "review-evening", "Review Due Cards", ActivityKind.REVIEW_DUE, review
            )

        # Active listening stops early enough to leave a full passive slot.
        passive_start = add_minutes(wind_down_start, -policy.max_passive_listening)
        time_for_active = timeline.minutes_until(passive_start)

        if time_for_active < policy.min_active_block:
            remaining = timeline.minutes_until(wind_down_start)
            if remaining > 0:
                timeline.emit(
                    "passive-fallback",
                    "Passive Listening",
                    ActivityKind.PASSIVE_LISTENING,
                    remaining,
                    mandatory=False,
                )
            return

        cycles = time_for_active // policy.active_cycle_duration
        for index in range(1, cycles + 1):
            timeline.emit(
                f"active-{index}",
                f"Active Listening Cycle {index}",
                ActivityKind.ACTIVE_LISTENING,
                policy.active_cycle_duration,
            )

        leftover = timeline.minutes_until(passive_start)
        if leftover >= policy.min_active_block:
            timeline.emit(
                "active-final",
                "Active Listening Final Block",
                ActivityKind.ACTIVE_LISTENING,
                leftover,
            )

        remaining = timeline.minutes_until(wind_down_start)
        if remaining > 0:
            timeline.emit(
                "passive-evening",
                "Passive Listening",
                ActivityKind.PASSIVE_LISTENING,
                min(remaining, policy.max_passive_listening),
                mandatory=False,
            )

    def _morning(self, t: TimeOfDay) -> AnchoredTime:
        return AnchoredTime(time=t)


def classify_window(
    arrival: TimeOfDay, policy: PolicyConstants = DEFAULT_POLICY
) -> TimeWindow:
    return ScheduleEngine(policy).classify_window(arrival)


def build_evening_schedule(
    arrival: TimeOfDay,
    window: TimeWindow,
    review_cards_remaining: int,
    policy: PolicyConstants = DEFAULT_POLICY,
) -> list[TimeBlock]:
    engine = ScheduleEngine(policy)
    return engine.build_evening_schedule(arrival, window, review_cards_remaining)


def build_morning_schedule(policy: PolicyConstants = DEFAULT_POLICY) -> list[TimeBlock]:
    return ScheduleEngine(policy).build_morning_schedule()
