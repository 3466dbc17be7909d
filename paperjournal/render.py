"""Paper pattern rendering: config -> drawing plan -> Pillow raster.

The renderer is deterministic and stateless. ``plan_pattern`` computes the
ordered primitives for a surface size; ``paint`` executes a plan onto an
image. ``PaperSurface`` owns one fixed-size image and repaints it in full
whenever the active config changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from loguru import logger
from PIL import Image, ImageDraw
from rich.style import Style
from rich.text import Text

from .paper import PaperConfig, Pattern

# -------------------------
# Geometry constants
# -------------------------
SURFACE_SIZE = (800, 1000)

RULED_LINE_LEFT = 60      # lined/college strokes start here
MARGIN_RULE_X = 50
MARGIN_RULE_COLOR = "#ff6b6b"
MARGIN_RULE_WIDTH = 2
INSET = 40                # left inset for dots/grid, right inset for everything
COLLEGE_SPACING = 24
DOT_RADIUS = 1.5

Point = Tuple[float, float]


# -------------------------
# Drawing primitives
# -------------------------
@dataclass(frozen=True)
class Fill:
    color: str


@dataclass(frozen=True)
class Stroke:
    start: Point
    end: Point
    color: str
    width: int

    @property
    def horizontal(self) -> bool:
        return self.start[1] == self.end[1]

    @property
    def vertical(self) -> bool:
        return self.start[0] == self.end[0]


@dataclass(frozen=True)
class Dot:
    center: Point
    radius: float
    color: str


Primitive = Union[Fill, Stroke, Dot]


def stroke_width(width: float) -> int:
    """Pillow widths are integral: round half up, at least 1px."""
    return max(1, int(width + 0.5))


def _steps(start: float, stop: float, step: float) -> List[float]:
    """start, start+step, ... while < stop. Empty for a non-positive step."""
    if step <= 0:
        return []
    out = []
    v = start
    while v < stop:
        out.append(v)
        v += step
    return out


def effective_spacing(config: PaperConfig) -> int:
    """Spacing actually used for drawing (college is fixed)."""
    if config.pattern == Pattern.COLLEGE:
        return COLLEGE_SPACING
    return config.line_spacing


# -------------------------
# Planning
# -------------------------
def _ruled(width: int, height: int, config: PaperConfig) -> List[Primitive]:
    spacing = effective_spacing(config)
    out: List[Primitive] = []
    if config.line_width > 0:
        w = stroke_width(config.line_width)
        for y in _steps(spacing, height, spacing):
            out.append(Stroke((RULED_LINE_LEFT, y), (width - INSET, y), config.line_color, w))
    # margin rule goes last so it sits on top of the horizontal lines
    out.append(Stroke((MARGIN_RULE_X, 0), (MARGIN_RULE_X, height), MARGIN_RULE_COLOR, MARGIN_RULE_WIDTH))
    return out


def _dotted(width: int, height: int, config: PaperConfig) -> List[Primitive]:
    spacing = config.line_spacing
    return [
        Dot((x, y), DOT_RADIUS, config.line_color)
        for y in _steps(spacing, height, spacing)
        for x in _steps(INSET, width - INSET, spacing)
    ]


def _grid(width: int, height: int, config: PaperConfig) -> List[Primitive]:
    spacing = config.line_spacing
    if config.line_width <= 0:
        return []
    w = stroke_width(config.line_width)
    out: List[Primitive] = []
    for y in _steps(0, height, spacing):
        out.append(Stroke((INSET, y), (width - INSET, y), config.line_color, w))
    for x in _steps(INSET, width - INSET, spacing):
        out.append(Stroke((x, 0), (x, height), config.line_color, w))
    return out


def plan_pattern(width: int, height: int, config: PaperConfig) -> List[Primitive]:
    """Return the ordered primitives that draw *config* on a width x height surface.

    The first primitive is always the background fill. Every loop is bounded
    by the supplied dimensions, and a non-positive spacing yields no
    repeating marks at all.
    """
    plan: List[Primitive] = [Fill(config.paper_color)]
    pattern = config.pattern
    if pattern in (Pattern.LINED, Pattern.COLLEGE):
        plan.extend(_ruled(width, height, config))
    elif pattern == Pattern.DOTTED:
        plan.extend(_dotted(width, height, config))
    elif pattern == Pattern.GRID:
        plan.extend(_grid(width, height, config))
    return plan


# -------------------------
# Painting
# -------------------------
def new_surface(width: int = SURFACE_SIZE[0], height: int = SURFACE_SIZE[1]) -> Image.Image:
    return Image.new("RGB", (width, height))


def paint(surface: Image.Image, config: PaperConfig) -> Image.Image:
    """Repaint *surface* in full for *config* and return it."""
    width, height = surface.size
    draw = ImageDraw.Draw(surface)
    for prim in plan_pattern(width, height, config):
        if isinstance(prim, Fill):
            draw.rectangle((0, 0, width, height), fill=prim.color)
        elif isinstance(prim, Stroke):
            draw.line([prim.start, prim.end], fill=prim.color, width=prim.width)
        else:
            x, y = prim.center
            r = prim.radius
            draw.ellipse((x - r, y - r, x + r, y + r), fill=prim.color)
    return surface


def render(width: int, height: int, config: PaperConfig) -> Image.Image:
    """Render *config* onto a fresh width x height RGB image."""
    return paint(new_surface(width, height), config)


class PaperSurface:
    """The one raster the editor paints on.

    Subscribe ``repaint`` to config changes; every call redraws the whole
    surface, there is no partial invalidation.
    """

    def __init__(self, width: int = SURFACE_SIZE[0], height: int = SURFACE_SIZE[1]) -> None:
        self.image = new_surface(width, height)
        self.config: Optional[PaperConfig] = None
        self.repaints = 0

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def repaint(self, config: PaperConfig) -> None:
        paint(self.image, config)
        self.config = config
        self.repaints += 1
        logger.debug(f"Repainted {self.size[0]}x{self.size[1]} surface ({config.pattern.value})")


# -------------------------
# Terminal preview
# -------------------------
HALF_BLOCK = "▀"


def terminal_preview(image: Image.Image, columns: int = 40) -> Text:
    """Downsample *image* into half-block cells for a terminal.

    Each cell shows two vertically stacked pixels: the upper one as the
    foreground color, the lower one as the background color.
    """
    width, height = image.size
    columns = max(1, min(columns, width))
    rows = max(1, round(height * columns / width / 2))
    small = image.convert("RGB").resize((columns, rows * 2), Image.Resampling.BOX)
    px = small.load()

    text = Text(no_wrap=True, overflow="crop")
    for row in range(rows):
        for col in range(columns):
            top = "#%02x%02x%02x" % px[col, row * 2]
            bottom = "#%02x%02x%02x" % px[col, row * 2 + 1]
            text.append(HALF_BLOCK, Style(color=top, bgcolor=bottom))
        if row < rows - 1:
            text.append("\n")
    return text
