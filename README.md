# neogrid

Building blocks for the user interface of a grid-based text editor, written with
the standard library only.

## Modules

- `neogrid.animation` has the easing functions `ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
  `ease_in_out_cubic`, `ease_in_expo` and `ease_out_expo`, along with `lerp`, `ease`
  and `ease_point`. They work on a small immutable `Vec2` type, which has `length`,
  `normalize` and `dot`. The module also has `CriticallyDampedSpringAnimation`. Its
  `update(dt, animation_length)` moves `position` back towards zero and returns
  `True` while the movement continues.
- `neogrid.frame` defines the `Frame` enum of window decorations. Those are `full`,
  `transparent`, `buttonless` and `none`. `available_frames(platform)` returns the
  frames a platform supports: all four on `"darwin"`, and only `full` and `none` on
  other platforms. `parse_frame(value, platform)` reads a frame name and raises
  `ValueError` when the name is unknown or the platform does not support it.
- `neogrid.font_options` parses a `guifont` string such as
  `"Fira Code Mono:h15.5:b:i:#h-slight:#e-alias"` with `parse_guifont` and returns a
  `FontOptions`. The rules are:
  - the family list is comma separated;
  - `_` in a family name becomes a space, and `\` escapes the character after it;
  - `hN` sets the size and `wN` the width, both converted from points to pixels;
  - `b` and `i` set bold and italic;
  - `#h-` sets hinting and `#e-` sets edging.

  `FontOptions.font_list(style)` and `possible_fonts()` work out which fallback
  fonts the bold and italic styles use. `FontDescription.as_family_and_font_style()`
  maps style names such as `SemiBold`, `Italic` or `W100` to a `FontStyle`. The
  module also has `parse_font_feature`, `parse_edging`, `parse_hinting`,
  `parse_font_name` and `points_to_pixels`.
- `neogrid.blink` has `BlinkStatus`, which follows a cursor's `blinkwait`, `blinkon`
  and `blinkoff` timings in milliseconds. `update_status(cursor, now)` returns a
  `RenderHint`, which says whether to wait, render immediately or render at a
  deadline. The class also has `opacity(now)`, `should_animate()` and
  `should_render()`. Times are monotonic seconds.
- `neogrid.cursor_vfx` holds `CursorSettings` and the cursor effects. There are two
  kinds:
  - `PointHighlight` covers the `sonicboom`, `ripple` and `wireframe` modes;
  - `ParticleTrail` covers the `railgun`, `torpedo` and `pixiedust` modes. It uses
    the deterministic `PcgRng`.

  `parse_vfx_mode` and `vfx_mode_name` convert between names and `VfxMode`.
  `new_cursor_vfx` creates the effect for a mode, or returns `None` when effects are
  disabled.
- `neogrid.cursor` has `CursorAnimator`, which moves the four `Corner`s of the
  cursor quad towards the cell set with `update_destination`. Corners that lead the
  motion move faster than the ones trailing behind. The quad takes the shape of a
  block, a vertical bar or a horizontal bar (`CursorShape`). Animation can be
  immediate in insert mode or on the command line, depending on `CursorSettings`.
- `neogrid.crash` has the crash reporting helpers:
  - `unwrap_or_explained` raises `ExplainedError` with an explanation;
  - `exit_code_from_int` wraps a code into the 0–255 range;
  - `format_crash_message`, `panic_message`, `stderr_message` and
    `panic_log_message` build the messages;
  - `log_panic_to_file` appends a report to `neogrid_backtraces.log`, or to a path
    you give it.

## Example

```python
from neogrid.font_options import parse_guifont
from neogrid.animation import ease, ease_in_out_cubic

options = parse_guifont("Fira Code Mono:h15.5:b")
print(options.primary_font())        # Fira Code Mono Bold
print(ease(ease_in_out_cubic, 1.0, 0.0, 0.25))   # 0.9375
```

An invalid guifont raises `FontOptionsError`:

```python
from neogrid.font_options import FontOptionsError, parse_guifont

try:
    parse_guifont("Fira Code Mono:#h-fool")
except FontOptionsError as err:
    print(err)                       # Invalid hinting
```

## What it does not do

The package computes state and nothing else. It does not:

- open windows;
- draw anything, neither the cursor, its effects nor text;
- load or shape fonts;
- talk to an editor process.

It has no command-line program. The callers supply the cursor positions, cell sizes
and timings, and they render the results themselves.

## Running the tests

```
pip install -e ".[test]"
pytest
```