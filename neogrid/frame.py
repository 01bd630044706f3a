"""Window frame decoration options."""

from __future__ import annotations

import sys
from enum import Enum


class Frame(Enum):
    """Kinds of window frame decoration."""

    FULL = "full"
    TRANSPARENT = "transparent"
    BUTTONLESS = "buttonless"
    NONE = "none"

    @classmethod
    def default(cls) -> Frame:
        return cls.FULL

    def __str__(self) -> str:
        return self.value


def _is_macos(platform: str | None) -> bool:
    return (sys.platform if platform is None else platform) == "darwin"


def available_frames(platform: str | None = None) -> tuple[Frame, ...]:
    """Frames supported on ``platform`` (defaults to the running platform)."""
    if _is_macos(platform):
        return (Frame.FULL, Frame.TRANSPARENT, Frame.BUTTONLESS, Frame.NONE)
    return (Frame.FULL, Frame.NONE)


def parse_frame(value: str, platform: str | None = None) -> Frame:
    """Parse a frame name, raising ValueError if unknown or unsupported."""
    frames = available_frames(platform)
    for frame in frames:
        if frame.value == value:
            return frame
    allowed = ", ".join(frame.value for frame in frames)
    raise ValueError(f"invalid frame {value!r}; possible values: {allowed}")