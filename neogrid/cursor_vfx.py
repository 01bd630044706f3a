"""Cursor settings and visual effects: highlights and particle trails."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import Enum

from neogrid.animation import Vec2

_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
_MASK32 = 0xFFFF_FFFF


class HighlightMode(Enum):
    """Effects that flash around the cursor's new position."""

    SONIC_BOOM = "sonicboom"
    RIPPLE = "ripple"
    WIREFRAME = "wireframe"


class TrailMode(Enum):
    """Effects that leave particles along the cursor's path."""

    RAILGUN = "railgun"
    TORPEDO = "torpedo"
    PIXIE_DUST = "pixiedust"


@dataclass(frozen=True)
class VfxMode:
    """A highlight, a trail, or neither (disabled)."""

    highlight: HighlightMode | None = None
    trail: TrailMode | None = None

    def __post_init__(self) -> None:
        if self.highlight is not None and self.trail is not None:
            raise ValueError("a vfx mode is either a highlight or a trail")

    @property
    def disabled(self) -> bool:
        return self.highlight is None and self.trail is None


_VFX_NAMES = {
    **{mode.value: VfxMode(highlight=mode) for mode in HighlightMode},
    **{mode.value: VfxMode(trail=mode) for mode in TrailMode},
    "": VfxMode(),
}


def parse_vfx_mode(value: object) -> VfxMode:
    """Parse a vfx mode name; the empty string disables effects."""
    if not isinstance(value, str):
        raise TypeError(f"Expected a VfxMode string, but received {value!r}")
    try:
        return _VFX_NAMES[value]
    except KeyError:
        raise ValueError(f"Expected a VfxMode name, but received {value!r}") from None


def vfx_mode_name(mode: VfxMode) -> str:
    """The setting name of a vfx mode."""
    if mode.highlight is not None:
        return mode.highlight.value
    if mode.trail is not None:
        return mode.trail.value
    return ""


@dataclass
class CursorSettings:
    """User-configurable cursor behaviour."""

    antialiasing: bool = True
    animation_length: float = 0.06
    distance_length_adjust: bool = True
    animate_in_insert_mode: bool = True
    animate_command_line: bool = True
    trail_size: float = 0.7
    unfocused_outline_width: float = 1.0 / 8.0
    smooth_blink: bool = False
    vfx_mode: VfxMode = field(default_factory=VfxMode)
    vfx_opacity: float = 200.0
    vfx_particle_lifetime: float = 1.2
    vfx_particle_density: float = 7.0
    vfx_particle_speed: float = 10.0
    vfx_particle_phase: float = 1.5
    vfx_particle_curl: float = 1.0


def _to_f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class PcgRng:
    """Small deterministic PCG (XSH-RR 64/32) random number generator."""

    def __init__(self) -> None:
        self.state = 0x853C_49E6_748F_EA9B
        self.inc = ((0xDA3E_39CB_94B9_5BDB << 1) | 1) & _MASK64

    def next_u32(self) -> int:
        """Next 32-bit random integer."""
        old = self.state
        self.state = (old * 6_364_136_223_846_793_005 + self.inc) & _MASK64
        rot = old >> 59
        xsh = (((old >> 18) ^ old) >> 27) & _MASK32
        return ((xsh >> rot) | (xsh << ((32 - rot) & 31))) & _MASK32

    def next_f32(self) -> float:
        """Next random value in [0, 1], rounded to single precision."""
        return _to_f32(math.ldexp(self.next_u32(), -32))

    def rand_dir(self) -> Vec2:
        """Random vector with both components in [-1, 1); not normalized."""
        x = self.next_f32()
        y = self.next_f32()
        return Vec2(x * 2.0 - 1.0, y * 2.0 - 1.0)

    def rand_dir_normalized(self) -> Vec2:
        """Random unit vector."""
        return self.rand_dir().normalize()


def rotate_vec(v: Vec2, rot: float) -> Vec2:
    """Rotate ``v`` by ``rot`` radians."""
    sin = math.sin(rot)
    cos = math.cos(rot)
    return Vec2(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


@dataclass
class Particle:
    """One particle of a trail."""

    pos: Vec2
    speed: Vec2
    rotation_speed: float
    lifetime: float


class PointHighlight:
    """An expanding shape centred on where the cursor landed."""

    def __init__(self, mode: HighlightMode) -> None:
        self.t = 0.0
        self.center_position = Vec2(0.0, 0.0)
        self.mode = mode

    def update(
        self,
        settings: CursorSettings,
        destination: Vec2,
        dimensions: Vec2,
        immediate_movement: bool,
        dt: float,
    ) -> bool:
        """Advance the effect; True while it is still running."""
        self.t = min(self.t + dt * 5.0, 1.0)
        return self.t < 1.0

    def restart(self, position: Vec2) -> None:
        """Start again centred on ``position``."""
        self.t = 0.0
        self.center_position = position


class ParticleTrail:
    """Particles emitted along the path the cursor travelled.

    ``dimensions`` passed to :meth:`update` is the cursor size, with the
    width in ``x`` and the height in ``y``.
    """

    def __init__(self, trail_mode: TrailMode) -> None:
        self.particles: list[Particle] = []
        self.previous_cursor_dest = Vec2(0.0, 0.0)
        self.trail_mode = trail_mode
        self.rng = PcgRng()

    def _particle_speed(self, settings: CursorSettings, travel: Vec2, distance: float,
                        height: float, t: float) -> Vec2:
        if self.trail_mode is TrailMode.RAILGUN:
            phase = t / math.pi * settings.vfx_particle_phase * (distance / height)
            return Vec2(math.sin(phase), math.cos(phase)) * 2.0 * settings.vfx_particle_speed
        if self.trail_mode is TrailMode.TORPEDO:
            travel_dir = travel.normalize()
            particle_dir = self.rng.rand_dir_normalized() - travel_dir * 1.5
            return particle_dir.normalize() * settings.vfx_particle_speed
        base_dir = self.rng.rand_dir_normalized()
        direction = Vec2(base_dir.x * 0.5, 0.4 + abs(base_dir.y))
        return direction * 3.0 * settings.vfx_particle_speed

    def update(
        self,
        settings: CursorSettings,
        destination: Vec2,
        dimensions: Vec2,
        immediate_movement: bool,
        dt: float,
    ) -> bool:
        """Age, move and spawn particles; True while any are alive."""
        for particle in self.particles:
            particle.lifetime -= dt
        self.particles = [p for p in self.particles if p.lifetime > 0.0]

        for particle in self.particles:
            particle.pos = particle.pos + particle.speed * dt
            particle.speed = rotate_vec(particle.speed, dt * particle.rotation_speed)

        if destination != self.previous_cursor_dest:
            if not immediate_movement:
                self._spawn(settings, destination, dimensions.y)
            self.previous_cursor_dest = destination

        return bool(self.particles)

    def _spawn(self, settings: CursorSettings, destination: Vec2, height: float) -> None:
        prev = self.previous_cursor_dest
        travel = destination - prev
        distance = travel.length()
        # More particles the further the cursor travelled.
        count = int(
            (distance / height) ** 1.5 * settings.vfx_particle_density * 0.01
        )
        for i in range(count):
            t = i / count
            speed = self._particle_speed(settings, travel, distance, height, t)
            if self.trail_mode is TrailMode.RAILGUN:
                pos = prev + travel * t
                rotation_speed = math.pi * settings.vfx_particle_curl
            else:
                pos = prev + travel * self.rng.next_f32() + Vec2(0.0, height * 0.5)
                rotation_speed = (
                    (self.rng.next_f32() - 0.5) * (math.pi / 2) * settings.vfx_particle_curl
                )
            self.particles.append(
                Particle(pos, speed, rotation_speed, t * settings.vfx_particle_lifetime)
            )

    def restart(self, position: Vec2) -> None:
        """Trails ignore restarts."""


def new_cursor_vfx(mode: VfxMode) -> PointHighlight | ParticleTrail | None:
    """Create the effect for ``mode``, or None when effects are disabled."""
    if mode.highlight is not None:
        return PointHighlight(mode.highlight)
    if mode.trail is not None:
        return ParticleTrail(mode.trail)
    return None