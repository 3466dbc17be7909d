"""Text metrics that keep written lines on the drawn rules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .paper import PaperConfig, Pattern
from .render import COLLEGE_SPACING, INSET

RULED_TEXT_LEFT = 70


@dataclass(frozen=True)
class TextMetrics:
    """Padding and line height for the text area, in pixels."""

    left_padding: int
    top_padding: int
    line_height: int
    right_padding: int = INSET

    def to_cells(self, cell_width: int = 10, cell_height: int = 20) -> Tuple[int, int, int, int]:
        """Return (top, right, bottom, left) padding in terminal cells."""
        return (
            max(0, round(self.top_padding / cell_height)),
            max(0, round(self.right_padding / cell_width)),
            0,
            max(0, round(self.left_padding / cell_width)),
        )


def derive_text_metrics(config: PaperConfig) -> TextMetrics:
    ruled = config.pattern in (Pattern.LINED, Pattern.COLLEGE)
    # college ignores the configured spacing, like the renderer does
    rhythm = COLLEGE_SPACING if config.pattern == Pattern.COLLEGE else config.line_spacing
    return TextMetrics(
        left_padding=RULED_TEXT_LEFT if ruled else INSET,
        top_padding=rhythm,
        line_height=rhythm,
    )
