"""Cursor shape and corner animation towards the cursor's destination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from neogrid.animation import Vec2, ease_out_expo, ease_point, lerp
from neogrid.blink import BlinkStatus
from neogrid.cursor_vfx import CursorSettings, VfxMode, new_cursor_vfx

F32_EPSILON = 1.1920929e-07

DEFAULT_CELL_PERCENTAGE = 1.0 / 8.0

STANDARD_CORNERS = ((-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5))


class CursorShape(Enum):
    """Shape of the cursor within its cell."""

    BLOCK = "block"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class EditorMode(Enum):
    """Editing mode the cursor is shown in."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    REPLACE = "replace"
    CMD_LINE = "cmdline"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CursorState:
    """What the editor reports about the cursor."""

    shape: CursorShape = CursorShape.BLOCK
    cell_percentage: float | None = None
    double_width: bool = False
    enabled: bool = True
    blinkwait: int | None = None
    blinkon: int | None = None
    blinkoff: int | None = None


def _fmin(a: float, b: float) -> float:
    """Minimum that ignores a NaN operand, like IEEE minNum."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _divide(a: float, b: float) -> float:
    """Float division that yields inf/NaN instead of raising on zero."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _log10_or_neg_inf(value: float) -> float:
    return math.log10(value) if value > 0.0 else -math.inf


@dataclass
class Corner:
    """One of the four animated corners of the cursor quad.

    ``relative_position`` is in cell units, centred on the cell.
    """

    start_position: Vec2 = field(default_factory=Vec2)
    current_position: Vec2 = field(default_factory=Vec2)
    relative_position: Vec2 = field(default_factory=Vec2)
    previous_destination: Vec2 = field(default_factory=lambda: Vec2(-1000.0, -1000.0))
    length_multiplier: float = 1.0
    t: float = 0.0

    def update(
        self,
        settings: CursorSettings,
        cursor_dimensions: Vec2,
        destination: Vec2,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Move towards ``destination`` (the cursor centre); True while animating."""
        if destination != self.previous_destination:
            self.t = 0.0
            self.start_position = self.current_position
            self.previous_destination = destination
            if settings.distance_length_adjust:
                distance = (destination - self.current_position).length()
                self.length_multiplier = max(_log10_or_neg_inf(distance), 0.0)
            else:
                self.length_multiplier = 1.0

        if abs(self.t - 1.0) < F32_EPSILON:
            return False

        relative_scaled = Vec2(
            self.relative_position.x * cursor_dimensions.x,
            self.relative_position.y * cursor_dimensions.y,
        )
        corner_destination = destination + relative_scaled

        if immediate_movement:
            self.t = 1.0
            self.current_position = corner_destination
            return True

        # Corners facing the direction of motion move faster than those behind.
        travel_direction = (destination - self.current_position).normalize()
        corner_direction = self.relative_position.normalize()
        direction_alignment = travel_direction.dot(corner_direction)

        corner_dt = dt * lerp(
            1.0,
            min(max(1.0 - settings.trail_size, 0.0), 1.0),
            -direction_alignment,
        )
        step = _divide(corner_dt, settings.animation_length * self.length_multiplier)
        self.t = _fmin(self.t + step, 1.0)

        self.current_position = ease_point(
            ease_out_expo, self.start_position, corner_destination, self.t
        )
        return True


class CursorAnimator:
    """Animates the cursor quad and its visual effects between positions."""

    def __init__(self) -> None:
        self.corners: list[Corner] = [Corner() for _ in STANDARD_CORNERS]
        self.cursor = CursorState()
        self.destination = Vec2(0.0, 0.0)
        self.blink_status = BlinkStatus()
        self.previous_cursor_shape: CursorShape | None = None
        self.previous_editor_mode = EditorMode.NORMAL
        self.cursor_vfx = None
        self.previous_vfx_mode = VfxMode()
        self.window_has_focus = True
        self.set_cursor_shape(CursorShape.BLOCK, DEFAULT_CELL_PERCENTAGE)

    def set_cursor_shape(self, shape: CursorShape, cell_percentage: float) -> None:
        """Reshape the corners for ``shape``; bars take ``cell_percentage`` of the cell."""
        for corner, (x, y) in zip(self.corners, STANDARD_CORNERS):
            if shape is CursorShape.VERTICAL:
                relative = Vec2((x + 0.5) * cell_percentage - 0.5, y)
            elif shape is CursorShape.HORIZONTAL:
                # Mirror of the vertical bar, placed at the bottom of the cell.
                relative = Vec2(x, -((-y + 0.5) * cell_percentage - 0.5))
            else:
                relative = Vec2(x, y)
            corner.relative_position = relative
            corner.t = 0.0
            corner.start_position = corner.current_position

    def set_focus(self, focused: bool) -> None:
        """Record whether the window has keyboard focus."""
        self.window_has_focus = focused

    def update_destination(self, position: Vec2) -> None:
        """Set the top-left pixel position of the cell the cursor moves to."""
        self.destination = position

    def animate(
        self,
        settings: CursorSettings,
        cursor: CursorState,
        current_mode: EditorMode,
        cell_size: Vec2,
        dt: float,
    ) -> bool:
        """Advance the animation by ``dt`` seconds; True while anything moves."""
        self.cursor = cursor

        if settings.vfx_mode != self.previous_vfx_mode:
            self.cursor_vfx = new_cursor_vfx(settings.vfx_mode)
            self.previous_vfx_mode = settings.vfx_mode

        cursor_width = cell_size.x
        if cursor.double_width and cursor.shape is CursorShape.BLOCK:
            cursor_width *= 2.0
        dimensions = Vec2(cursor_width, cell_size.y)

        in_insert_mode = current_mode is EditorMode.INSERT
        changed_to_from_cmdline = (
            self.previous_editor_mode is not EditorMode.CMD_LINE
        ) ^ (current_mode is EditorMode.CMD_LINE)

        center_destination = self.destination + dimensions * 0.5

        if self.previous_cursor_shape != cursor.shape:
            self.previous_cursor_shape = cursor.shape
            percentage = (
                cursor.cell_percentage
                if cursor.cell_percentage is not None
                else DEFAULT_CELL_PERCENTAGE
            )
            self.set_cursor_shape(cursor.shape, percentage)
            if self.cursor_vfx is not None:
                self.cursor_vfx.restart(center_destination)

        animating = False

        if center_destination != Vec2(0.0, 0.0):
            immediate_movement = (
                not settings.animate_in_insert_mode and in_insert_mode
            ) or (not settings.animate_command_line and not changed_to_from_cmdline)
            for corner in self.corners:
                if corner.update(
                    settings, dimensions, center_destination, dt, immediate_movement
                ):
                    animating = True

            if self.cursor_vfx is not None:
                if self.cursor_vfx.update(
                    settings, center_destination, dimensions, immediate_movement, dt
                ):
                    animating = True

        if settings.smooth_blink and self.blink_status.should_animate():
            animating = True

        if not animating:
            self.previous_editor_mode = current_mode
        return animating