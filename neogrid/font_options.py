"""Font descriptions and parsing of the ``guifont`` option string."""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator

log = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 14.0
FONT_OPTS_SEPARATOR = ":"
FONT_LIST_SEPARATOR = ","
FONT_HINTING_PREFIX = "#h-"
FONT_EDGING_PREFIX = "#e-"
FONT_HEIGHT_PREFIX = "h"
FONT_WIDTH_PREFIX = "w"
FONT_BOLD_OPT = "b"
FONT_ITALIC_OPT = "i"

INVALID_SIZE_ERR = "Invalid size"
INVALID_WIDTH_ERR = "Invalid width"
INVALID_EDGING_ERR = "Invalid edging"
INVALID_HINTING_ERR = "Invalid hinting"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U16_MAX = 0xFFFF


class FontOptionsError(ValueError):
    """Raised when a font option string cannot be parsed."""


class FontEdging(Enum):
    """How glyph edges are smoothed."""

    ANTI_ALIAS = "antialias"
    SUBPIXEL_ANTI_ALIAS = "subpixelantialias"
    ALIAS = "alias"


class FontHinting(Enum):
    """How strongly glyph outlines are fitted to the pixel grid."""

    FULL = "full"
    NORMAL = "normal"
    SLIGHT = "slight"
    NONE = "none"


class Slant(Enum):
    """Slant of a font face."""

    UPRIGHT = "upright"
    ITALIC = "italic"
    OBLIQUE = "oblique"


@dataclass(frozen=True)
class FontStyle:
    """Weight, width and slant used to match a font face."""

    THIN: ClassVar[int] = 100
    EXTRA_LIGHT: ClassVar[int] = 200
    LIGHT: ClassVar[int] = 300
    NORMAL: ClassVar[int] = 400
    MEDIUM: ClassVar[int] = 500
    SEMI_BOLD: ClassVar[int] = 600
    BOLD: ClassVar[int] = 700
    EXTRA_BOLD: ClassVar[int] = 800
    BLACK: ClassVar[int] = 900
    EXTRA_BLACK: ClassVar[int] = 1000
    WIDTH_NORMAL: ClassVar[int] = 5

    weight: int = 400
    width: int = 5
    slant: Slant = Slant.UPRIGHT

    @classmethod
    def normal(cls) -> FontStyle:
        return cls()

    @classmethod
    def bold(cls) -> FontStyle:
        return cls(weight=cls.BOLD)

    @classmethod
    def italic(cls) -> FontStyle:
        return cls(slant=Slant.ITALIC)

    @classmethod
    def bold_italic(cls) -> FontStyle:
        return cls(weight=cls.BOLD, slant=Slant.ITALIC)


_WEIGHT_NAMES = {
    "Thin": FontStyle.THIN,
    "ExtraLight": FontStyle.EXTRA_LIGHT,
    "Light": FontStyle.LIGHT,
    "Normal": FontStyle.NORMAL,
    "Medium": FontStyle.MEDIUM,
    "SemiBold": FontStyle.SEMI_BOLD,
    "Bold": FontStyle.BOLD,
    "ExtraBold": FontStyle.EXTRA_BOLD,
    "Black": FontStyle.BLACK,
    "ExtraBlack": FontStyle.EXTRA_BLACK,
}

_SLANT_NAMES = {
    "Italic": Slant.ITALIC,
    "Oblique": Slant.OBLIQUE,
}


@dataclass(frozen=True)
class FontDescription:
    """A font family with an optional style name, e.g. ``"Bold Italic"``."""

    family: str = ""
    style: str | None = None

    def as_family_and_font_style(self) -> tuple[str, FontStyle]:
        """Split into the family name and the style to match it with."""
        if self.style is None:
            return self.family, FontStyle()
        weight = FontStyle.NORMAL
        slant = Slant.UPRIGHT
        for part in self.style.split():
            if part in _WEIGHT_NAMES:
                weight = _WEIGHT_NAMES[part]
            elif part in _SLANT_NAMES:
                slant = _SLANT_NAMES[part]
            elif part.startswith("W") and _INTEGER.fullmatch(part[1:]):
                weight = int(part[1:])
        return self.family, FontStyle(weight, FontStyle.WIDTH_NORMAL, slant)

    def __str__(self) -> str:
        if self.style is None:
            return self.family
        return f"{self.family} {self.style}"


@dataclass(frozen=True)
class SecondaryFontDescription:
    """Description of a bold or italic font; a missing family reuses the normal ones."""

    family: str | None = None
    style: str | None = None

    def fallback(self, primary: list[FontDescription]) -> list[FontDescription]:
        """Resolve into concrete descriptions, borrowing families from ``primary``."""
        if self.family is not None:
            return [FontDescription(self.family, self.style)]
        return [FontDescription(font.family, self.style) for font in primary]


@dataclass(frozen=True)
class FontFeature:
    """An OpenType feature tag and its value."""

    name: str
    value: int


@dataclass(frozen=True)
class CoarseStyle:
    """Whether text is bold and/or italic."""

    bold: bool = False
    italic: bool = False

    def name(self) -> str | None:
        """Textual name of the style, or None for the regular style."""
        if self.bold and self.italic:
            return "Bold Italic"
        if self.bold:
            return "Bold"
        if self.italic:
            return "Italic"
        return None

    def font_style(self) -> FontStyle:
        """The font style used to match a face for this coarse style."""
        if self.bold and self.italic:
            return FontStyle.bold_italic()
        if self.bold:
            return FontStyle.bold()
        if self.italic:
            return FontStyle.italic()
        return FontStyle.normal()


def coarse_style_permutations() -> Iterator[CoarseStyle]:
    """Yield every combination of bold and italic."""
    for bold in (True, False):
        for italic in (True, False):
            yield CoarseStyle(bold=bold, italic=italic)


def points_to_pixels(value: float) -> float:
    """Convert a size in points to pixels (points equal pixels on macOS)."""
    if sys.platform == "darwin":
        pixels = value
    else:
        pixels_per_inch = 96.0
        points_per_inch = 72.0
        pixels = value * (pixels_per_inch / points_per_inch)
    log.info("point_to_pixels %s -> %s", value, pixels)
    return pixels


@dataclass(eq=False)
class FontOptions:
    """Everything configurable about the fonts in use."""

    normal: list[FontDescription] = field(default_factory=list)
    italic: list[SecondaryFontDescription] | None = None
    bold: list[SecondaryFontDescription] | None = None
    bold_italic: list[SecondaryFontDescription] | None = None
    features: dict[str, list[FontFeature]] = field(default_factory=dict)
    size: float = field(default_factory=lambda: points_to_pixels(DEFAULT_FONT_SIZE))
    width: float = 0.0
    hinting: FontHinting = FontHinting.FULL
    edging: FontEdging = FontEdging.ANTI_ALIAS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontOptions):
            return NotImplemented
        return (
            self.normal == other.normal
            and self.bold == other.bold
            and self.italic == other.italic
            and self.bold_italic == other.bold_italic
            and self.features == other.features
            and self.edging == other.edging
            and abs(self.size - other.size) < 1.1920929e-07
            and self.hinting == other.hinting
        )

    __hash__ = None  # type: ignore[assignment]

    def primary_font(self) -> FontDescription | None:
        """The first normal font, if any."""
        return self.normal[0] if self.normal else None

    def font_list(self, style: CoarseStyle) -> list[FontDescription]:
        """Fonts to try, in order, for text in ``style``."""
        if style.bold and style.italic:
            secondary = self.bold_italic
        elif style.bold:
            secondary = self.bold
        elif style.italic:
            secondary = self.italic
        else:
            secondary = None

        if secondary is None:
            fonts = list(self.normal)
        else:
            fonts = [desc for font in secondary for desc in font.fallback(self.normal)]

        style_name = style.name()
        return [
            FontDescription(font.family, font.style if font.style is not None else style_name)
            for font in fonts
        ]

    def possible_fonts(self) -> list[FontDescription]:
        """Every font that may be needed across all styles."""
        return [
            font
            for style in coarse_style_permutations()
            for font in self.font_list(style)
        ]


def parse_font_feature(feature: str) -> FontFeature:
    """Parse ``+name``, ``-name`` or ``name=value`` into a feature."""
    if feature.startswith("+"):
        return FontFeature(feature[1:].strip(), 1)
    if feature.startswith("-"):
        return FontFeature(feature[1:].strip(), 0)
    name, sep, value = feature.partition("=")
    if sep and _UNSIGNED.fullmatch(value) and int(value) <= _U16_MAX:
        return FontFeature(name, int(value))
    log.warning("Wrong feature format: %s", feature)
    raise FontOptionsError(feature)


def parse_edging(value: str) -> FontEdging:
    """Parse an edging name."""
    try:
        return FontEdging(value)
    except ValueError:
        raise FontOptionsError(INVALID_EDGING_ERR) from None


def parse_hinting(value: str) -> FontHinting:
    """Parse a hinting name."""
    try:
        return FontHinting(value)
    except ValueError:
        raise FontOptionsError(INVALID_HINTING_ERR) from None


def parse_font_name(font_name: str) -> str:
    """Turn ``_`` into spaces and resolve backslash escapes.

    A trailing lone backslash is dropped.
    """
    chars = iter(font_name)
    result = []
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                break
            result.append(escaped)
        elif ch == "_":
            result.append(" ")
        else:
            result.append(ch)
    return "".join(result)


def _parse_pixels(part: str, error: str) -> float:
    number = part[1:]
    if not number or "_" in number or number != number.strip():
        raise FontOptionsError(error)
    try:
        return points_to_pixels(float(number))
    except ValueError:
        raise FontOptionsError(error) from None


def parse_guifont(guifont_setting: str) -> FontOptions:
    """Parse a ``guifont`` string such as ``"Fira Code:h12:b"``."""
    options = FontOptions()
    parts = [part for part in guifont_setting.split(FONT_OPTS_SEPARATOR) if part]

    if parts:
        families = [
            parse_font_name(name)
            for name in parts[0].split(FONT_LIST_SEPARATOR)
            if name
        ]
        if families:
            options.normal = [FontDescription(family) for family in families]

    styles: set[str] = set()
    for part in parts[1:]:
        if part.startswith(FONT_HINTING_PREFIX):
            options.hinting = parse_hinting(part[len(FONT_HINTING_PREFIX):])
        elif part.startswith(FONT_EDGING_PREFIX):
            options.edging = parse_edging(part[len(FONT_EDGING_PREFIX):])
        elif part.startswith(FONT_HEIGHT_PREFIX) and len(part) > 1:
            options.size = _parse_pixels(part, INVALID_SIZE_ERR)
        elif part.startswith(FONT_WIDTH_PREFIX) and len(part) > 1:
            options.width = _parse_pixels(part, INVALID_WIDTH_ERR)
        elif part == FONT_BOLD_OPT:
            styles.add("Bold")
        elif part == FONT_ITALIC_OPT:
            styles.add("Italic")

    style = " ".join(sorted(styles)) if styles else None
    options.normal = [FontDescription(font.family, style) for font in options.normal]
    return options