"""Cursor blink state machine driven by Vim's blinkwait/blinkon/blinkoff timings."""

from __future__ import annotations

import copy
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class BlinkState(Enum):
    """Phase of the blink cycle."""

    WAITING = "waiting"
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class BlinkTiming:
    """Blink timings of a cursor in milliseconds; None means unset."""

    blinkwait: int | None = None
    blinkon: int | None = None
    blinkoff: int | None = None


@dataclass(frozen=True)
class RenderHint:
    """When the next frame has to be drawn."""

    kind: str
    deadline: float | None = None

    WAIT: ClassVar[RenderHint]
    IMMEDIATELY: ClassVar[RenderHint]

    @classmethod
    def at(cls, deadline: float) -> RenderHint:
        """Render once the monotonic clock reaches ``deadline`` seconds."""
        return cls("deadline", deadline)


RenderHint.WAIT = RenderHint("wait")
RenderHint.IMMEDIATELY = RenderHint("immediately")


def is_static(cursor: Any) -> bool:
    """True if any of the cursor's blink timings is zero or unset."""
    return any(
        value in (None, 0)
        for value in (cursor.blinkwait, cursor.blinkoff, cursor.blinkon)
    )


class BlinkStatus:
    """Tracks the blink phase of the cursor over time.

    Times are monotonic seconds; every method taking ``now`` defaults to
    :func:`time.monotonic`.
    """

    def __init__(self, now: float | None = None) -> None:
        self.state = BlinkState.WAITING
        self._transition_time = time.monotonic() if now is None else now
        self._cursor: Any = None

    def _delay(self) -> float:
        if self._cursor is None:
            return 0.0
        if self.state is BlinkState.WAITING:
            ms = self._cursor.blinkwait
        elif self.state is BlinkState.OFF:
            ms = self._cursor.blinkoff
        else:
            ms = self._cursor.blinkon
        return (ms or 0) / 1000.0

    def update_status(self, cursor: Any, now: float | None = None) -> RenderHint:
        """Feed the current cursor and say when the next redraw is due."""
        if now is None:
            now = time.monotonic()
        if self._cursor is None or cursor != self._cursor:
            self._cursor = copy.copy(cursor)
            if cursor.blinkwait not in (None, 0):
                self.state = BlinkState.WAITING
            else:
                self.state = BlinkState.ON
            self._transition_time = now + self._delay()

        if is_static(self._cursor):
            self.state = BlinkState.WAITING
            return RenderHint.WAIT

        if self._transition_time <= now:
            self.state = BlinkState.OFF if self.state is BlinkState.ON else BlinkState.ON
            self._transition_time += self._delay()
            # Badly lagging behind: restart the phase from now.
            if self._transition_time <= now:
                self._transition_time = now + self._delay()
            return RenderHint.IMMEDIATELY
        return RenderHint.at(self._transition_time)

    def opacity(self, now: float | None = None) -> float:
        """Opacity for smooth blinking: 0.0 transparent, 1.0 opaque."""
        if self.state is BlinkState.WAITING:
            return 1.0
        if now is None:
            now = time.monotonic()
        total = self._delay()
        remaining = max(self._transition_time - now, 0.0)
        ratio = remaining / total if total > 0 else math.nan
        if self.state is BlinkState.OFF:
            ratio = 1.0 - ratio
        return ratio if math.isnan(ratio) else min(max(ratio, 0.0), 1.0)

    def should_animate(self) -> bool:
        """Whether smooth blinking needs animation frames."""
        return self.state is not BlinkState.WAITING

    def should_render(self) -> bool:
        """Whether the cursor is visible when smooth blinking is off."""
        return self.state is not BlinkState.OFF