"""Stateful action surface over the schedule builders.

A ``ScheduleStore`` owns exactly one ``ScheduleState``. Every action builds
the new field values first and then swaps the whole state in one step, so
readers never observe a half-applied update.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from .clock import TimeOfDay, parse_time_of_day
from .config import DEFAULT_POLICY, PolicyConstants
from .engine import ScheduleEngine
from .errors import ReviewCountOutOfRange
from .models import SchedulePhase, ScheduleState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ScheduleStore:
    def __init__(
        self,
        policy: PolicyConstants = DEFAULT_POLICY,
        clock: Clock = datetime.now,
        state: ScheduleState | None = None,
    ) -> None:
        self.policy = policy
        self.engine = ScheduleEngine(policy)
        self._clock = clock
        if state is None:
            state = ScheduleState(last_updated=clock())
        self._state = state

    @property
    def state(self) -> ScheduleState:
        return self._state

    def _commit(self, **changes: Any) -> ScheduleState:
        changes["last_updated"] = self._clock()
        self._state = self._state.model_copy(update=changes)
        return self._state

    def set_arrival_time(self, arrival: TimeOfDay | str) -> ScheduleState:
        """Record the arrival home and rebuild tonight's plan from scratch."""
        if not isinstance(arrival, TimeOfDay):
            arrival = parse_time_of_day(arrival)
        window = self.engine.classify_window(arrival)
        blocks = self.engine.build_evening_schedule(
            arrival, window, self._state.review_cards_remaining
        )
        logger.info("Arrival %s classified as %s", arrival, window.value)
        return self._commit(
            arrival_time_home=arrival,
            time_window=window,
            phase=SchedulePhase.EVENING,
            blocks=blocks,
        )

    def set_review_cards(self, count: int) -> ScheduleState:
        """Store the due-card count; an active evening plan is rebuilt with it."""
        if count < 0 or count > self.policy.max_review_cards:
            raise ReviewCountOutOfRange(count, self.policy.max_review_cards)

        changes: dict[str, Any] = {"review_cards_remaining": count}
        state = self._state
        if state.phase is SchedulePhase.EVENING and state.arrival_time_home is not None:
            window = self.engine.classify_window(state.arrival_time_home)
            changes["time_window"] = window
            changes["blocks"] = self.engine.build_evening_schedule(
                state.arrival_time_home, window, count
            )
        return self._commit(**changes)

    def generate_evening_schedule(self) -> ScheduleState:
        state = self._state
        if state.arrival_time_home is None or state.time_window is None:
            logger.debug("No arrival time set; evening schedule not generated")
            return state
        blocks = self.engine.build_evening_schedule(
            state.arrival_time_home, state.time_window, state.review_cards_remaining
        )
        return self._commit(blocks=blocks)

    def generate_morning_schedule(self) -> ScheduleState:
        blocks = self.engine.build_morning_schedule()
        return self._commit(blocks=blocks, phase=SchedulePhase.MORNING, is_awake=True)

    def mark_block_complete(self, block_id: str) -> ScheduleState:
        if not any(block.id == block_id for block in self._state.blocks):
            logger.warning("No block with id %r in the current schedule", block_id)
            return self._state
        blocks = [
            block.model_copy(update={"completed": True})
            if block.id == block_id
            else block
            for block in self._state.blocks
        ]
        return self._commit(blocks=blocks)

    def reset_day(self) -> ScheduleState:
        self._state = ScheduleState(last_updated=self._clock())
        logger.info("Schedule state reset")
        return self._state

    def snapshot(self) -> dict[str, Any]:
        """Plain JSON-compatible copy of the current state."""
        return self._state.model_dump(mode="json")

    @classmethod
    def restore(
        cls,
        snapshot: dict[str, Any],
        policy: PolicyConstants = DEFAULT_POLICY,
        clock: Clock = datetime.now,
    ) -> ScheduleStore:
        state = ScheduleState.model_validate(snapshot)
        return cls(policy=policy, clock=clock, state=state)
