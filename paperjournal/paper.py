# -*- coding: utf-8 -*-
"""Paper configuration value type and field validation for PaperJournal.

This module encapsulates the *stateless* description of a sheet of paper:
pattern, colors, line geometry and text styling. It does **not** draw
anything; see ``render`` for that.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from typing import Dict, List, Tuple

from PIL import ImageColor

# ---------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------

FONT_SIZE_MIN = 12
FONT_SIZE_MAX = 32

LINE_WIDTH_MIN = 0.5
LINE_WIDTH_MAX = 3.0
LINE_WIDTH_STEP = 0.5

LINE_SPACING_MIN = 20
LINE_SPACING_MAX = 50


class Pattern(str, Enum):
    """Background rule-drawing styles."""

    BLANK = "blank"
    LINED = "lined"
    DOTTED = "dotted"
    GRID = "grid"
    COLLEGE = "college"

    @property
    def label(self) -> str:
        return PATTERN_LABELS[self]


PATTERN_LABELS: Dict[Pattern, str] = {
    Pattern.BLANK: "Blank",
    Pattern.LINED: "Lined",
    Pattern.DOTTED: "Dotted",
    Pattern.GRID: "Grid",
    Pattern.COLLEGE: "College Ruled",
}

# (family, CSS font stack). Order is the order shown in the settings UI.
FONTS: List[Tuple[str, str]] = [
    ("Indie Flower", "'Indie Flower', cursive"),
    ("Caveat", "'Caveat', cursive"),
    ("Permanent Marker", "'Permanent Marker', cursive"),
    ("Shadows Into Light", "'Shadows Into Light', cursive"),
    ("Kalam", "'Kalam', cursive"),
    ("Patrick Hand", "'Patrick Hand', cursive"),
]

FONT_NAMES: Tuple[str, ...] = tuple(name for name, _ in FONTS)


# ---------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------

def normalize_color(value: str) -> str:
    """Return *value* as a lowercase ``#rrggbb`` string or raise ValueError."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Color required")
    try:
        rgb = ImageColor.getrgb(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid color: {value!r}") from exc
    r, g, b = rgb[:3]
    return f"#{r:02x}{g:02x}{b:02x}"


def validate_pattern(value) -> Pattern:
    try:
        return Pattern(value)
    except ValueError as exc:
        allowed = ", ".join(p.value for p in Pattern)
        raise ValueError(f"Unknown pattern {value!r} (expected one of: {allowed})") from exc


def validate_font(value: str) -> str:
    if value not in FONT_NAMES:
        raise ValueError(f"Unknown font {value!r}")
    return value


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be an integer")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc


def validate_font_size(value) -> int:
    size = _as_int(value, "Font size")
    if not FONT_SIZE_MIN <= size <= FONT_SIZE_MAX:
        raise ValueError(f"Font size must be between {FONT_SIZE_MIN} and {FONT_SIZE_MAX}")
    return size


def validate_line_spacing(value) -> int:
    spacing = _as_int(value, "Line spacing")
    if not LINE_SPACING_MIN <= spacing <= LINE_SPACING_MAX:
        raise ValueError(
            f"Line spacing must be between {LINE_SPACING_MIN} and {LINE_SPACING_MAX}"
        )
    return spacing


def validate_line_width(value) -> float:
    """Accept 0.5..3 in steps of 0.5."""
    if isinstance(value, bool):
        raise ValueError("Line width must be a number")
    try:
        width = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("Line width must be a number") from exc
    if not LINE_WIDTH_MIN <= width <= LINE_WIDTH_MAX:
        raise ValueError(f"Line width must be between {LINE_WIDTH_MIN} and {LINE_WIDTH_MAX}")
    if not (width / LINE_WIDTH_STEP).is_integer():
        raise ValueError(f"Line width must be a multiple of {LINE_WIDTH_STEP}")
    return width


# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class PaperConfig:
    """Visual parameters for one sheet: background pattern and text styling.

    Instances are immutable; editing produces a new instance via ``with_``.
    The constructor does not validate so that stale or odd values (for
    example a spacing carried over from another pattern) can be held and
    rendered harmlessly. Validation lives in the setters and ``from_dict``.
    """

    paper_color: str = "#fdfbf5"
    pattern: Pattern = Pattern.LINED
    line_color: str = "#d4c5b9"
    line_width: float = 1.0
    line_spacing: int = 32
    font: str = FONT_NAMES[0]
    font_size: int = 18
    text_color: str = "#2c2416"

    @property
    def font_stack(self) -> str:
        """CSS font-family stack for the configured font."""
        return dict(FONTS).get(self.font, "cursive")

    def with_(self, **changes) -> "PaperConfig":
        """Return a copy with *changes* applied (no validation)."""
        return replace(self, **changes)

    def copy(self) -> "PaperConfig":
        """Return a distinct but equal instance."""
        return replace(self)

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["pattern"] = self.pattern.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "PaperConfig":
        """Build a validated config from a plain dict; unknown keys ignored."""
        known = {f.name for f in fields(cls)}
        merged = PaperConfig().to_dict()
        merged.update({k: v for k, v in (data or {}).items() if k in known})
        return cls(
            paper_color=normalize_color(merged["paper_color"]),
            pattern=validate_pattern(merged["pattern"]),
            line_color=normalize_color(merged["line_color"]),
            line_width=validate_line_width(merged["line_width"]),
            line_spacing=validate_line_spacing(merged["line_spacing"]),
            font=validate_font(merged["font"]),
            font_size=validate_font_size(merged["font_size"]),
            text_color=normalize_color(merged["text_color"]),
        )


# Field name -> validator; the shell's setters are driven by this table.
FIELD_VALIDATORS = {
    "paper_color": normalize_color,
    "pattern": validate_pattern,
    "line_color": normalize_color,
    "line_width": validate_line_width,
    "line_spacing": validate_line_spacing,
    "font": validate_font,
    "font_size": validate_font_size,
    "text_color": normalize_color,
}
