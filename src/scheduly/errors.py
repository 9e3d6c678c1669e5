from __future__ import annotations


class SchedulyError(Exception):
    """Base class for errors raised at the scheduly input boundary."""


class InvalidTimeFormat(SchedulyError, ValueError):
    """A clock value that is not a well-formed ``HH:MM`` string."""

    def __init__(self, text: object) -> None:
        super().__init__(f"Invalid time of day {text!r}, expected HH:MM")
        self.text = text


class ReviewCountOutOfRange(SchedulyError, ValueError):
    """A review-card count outside the accepted range."""

    def __init__(self, count: int, maximum: int) -> None:
        super().__init__(f"Review card count {count} is outside 0..{maximum}")
        self.count = count
        self.maximum = maximum
