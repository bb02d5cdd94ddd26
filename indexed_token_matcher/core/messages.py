"""Timestamped message collection for debugging and performance tuning."""

import time
from typing import List


class MessageCollector:
    """
    Collects log messages stamped with the seconds elapsed since creation.

    Pass one to a TokenMatcher to capture its build milestones without
    configuring logging.
    """

    def __init__(self) -> None:
        self._initial_time = time.monotonic()
        self._messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.log(message)

    def log(self, message: str) -> None:
        elapsed = time.monotonic() - self._initial_time
        self._messages.append(f"{elapsed:.3f} sec : {message}")

    def get_messages(self) -> List[str]:
        """Get a copy of the collected messages."""
        return self._messages.copy()

    def clear(self) -> None:
        self._messages.clear()
