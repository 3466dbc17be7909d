"""Tests for paperjournal.render."""

from PIL import ImageColor

from paperjournal.paper import PaperConfig, Pattern
from paperjournal.render import (
    MARGIN_RULE_COLOR,
    Dot,
    Fill,
    PaperSurface,
    Stroke,
    plan_pattern,
    render,
    stroke_width,
    terminal_preview,
)

W, H = 800, 1000
LINE = PaperConfig().line_color
LINE_RGB = ImageColor.getrgb(LINE)
PAPER_RGB = ImageColor.getrgb(PaperConfig().paper_color)
ACCENT_RGB = ImageColor.getrgb(MARGIN_RULE_COLOR)


def _strokes(plan):
    return [p for p in plan if isinstance(p, Stroke)]


def _rules(plan):
    return [s for s in _strokes(plan) if s.horizontal and s.color == LINE]


class TestPlan:
    def test_background_fill_first(self):
        for pattern in Pattern:
            plan = plan_pattern(W, H, PaperConfig(pattern=pattern))
            assert plan[0] == Fill(PaperConfig().paper_color)

    def test_blank_has_only_fill(self):
        assert plan_pattern(W, H, PaperConfig(pattern=Pattern.BLANK)) == [Fill("#fdfbf5")]

    def test_lined_rule_count(self):
        for spacing in (20, 32, 37, 50):
            plan = plan_pattern(W, H, PaperConfig(pattern=Pattern.LINED, line_spacing=spacing))
            rules = _rules(plan)
            assert len(rules) == (H - 1) // spacing
            assert rules[0].start == (60, spacing)
            assert rules[0].end == (W - 40, spacing)

    def test_lined_margin_rule_drawn_last(self):
        for spacing in (20, 45):
            plan = plan_pattern(W, H, PaperConfig(pattern=Pattern.LINED, line_spacing=spacing))
            margin = plan[-1]
            assert margin == Stroke((50, 0), (50, H), MARGIN_RULE_COLOR, 2)

    def test_college_ignores_spacing(self):
        a = plan_pattern(W, H, PaperConfig(pattern=Pattern.COLLEGE, line_spacing=40))
        b = plan_pattern(W, H, PaperConfig(pattern=Pattern.COLLEGE, line_spacing=20))
        assert a == b
        assert len(_rules(a)) == (H - 1) // 24
        assert _rules(a)[1].start[1] == 48

    def test_dotted_grid_points(self):
        plan = plan_pattern(W, H, PaperConfig(pattern=Pattern.DOTTED, line_spacing=40))
        dots = [p for p in plan if isinstance(p, Dot)]
        assert len(dots) == len(range(40, H, 40)) * len(range(40, W - 40, 40))
        assert dots[0] == Dot((40, 40), 1.5, LINE)
        assert not _strokes(plan)

    def test_grid_axes_independent(self):
        plan = plan_pattern(W, H, PaperConfig(pattern=Pattern.GRID, line_spacing=32))
        horizontal = [s for s in _strokes(plan) if s.horizontal]
        vertical = [s for s in _strokes(plan) if s.vertical]
        assert [s.start[1] for s in horizontal] == list(range(0, H, 32))
        assert [s.start[0] for s in vertical] == list(range(40, W - 40, 32))
        assert all(s.start[0] == 40 and s.end[0] == W - 40 for s in horizontal)
        assert all(s.start[1] == 0 and s.end[1] == H for s in vertical)
        assert MARGIN_RULE_COLOR not in {s.color for s in _strokes(plan)}

    def test_non_positive_spacing_skips_pattern(self):
        for pattern in (Pattern.LINED, Pattern.DOTTED, Pattern.GRID):
            for spacing in (0, -5):
                plan = plan_pattern(W, H, PaperConfig(pattern=pattern, line_spacing=spacing))
                assert not _rules(plan)
                assert not [p for p in plan if isinstance(p, Dot)]

    def test_non_positive_width_skips_strokes(self):
        plan = plan_pattern(W, H, PaperConfig(pattern=Pattern.GRID, line_width=0))
        assert plan == [Fill("#fdfbf5")]
        lined = plan_pattern(W, H, PaperConfig(pattern=Pattern.LINED, line_width=-1))
        assert not _rules(lined)

    def test_blank_and_college_ignore_stale_fields(self):
        stale = PaperConfig(pattern=Pattern.BLANK, line_spacing=0, line_width=0)
        assert plan_pattern(W, H, stale) == plan_pattern(W, H, PaperConfig(pattern=Pattern.BLANK))

    def test_bounds_follow_surface_size(self):
        plan = plan_pattern(300, 100, PaperConfig(pattern=Pattern.LINED, line_spacing=25))
        rules = _rules(plan)
        assert [r.start[1] for r in rules] == [25, 50, 75]
        assert rules[0].end == (260, 25)

    def test_stroke_width_rounding(self):
        assert stroke_width(0.5) == 1
        assert stroke_width(1.5) == 2
        assert stroke_width(2.5) == 3
        assert stroke_width(3) == 3


class TestPixels:
    def test_blank_is_flat_fill(self):
        img = render(W, H, PaperConfig(pattern=Pattern.BLANK))
        assert img.size == (W, H)
        assert img.getcolors() == [(W * H, PAPER_RGB)]

    def test_lined_pixels(self):
        img = render(W, H, PaperConfig(pattern=Pattern.LINED, line_spacing=32))
        assert img.getpixel((400, 32)) == LINE_RGB
        assert img.getpixel((400, 33)) == PAPER_RGB
        assert img.getpixel((30, 32)) == PAPER_RGB
        assert any(img.getpixel((x, 500)) == ACCENT_RGB for x in range(48, 53))

    def test_dotted_pixels(self):
        img = render(W, H, PaperConfig(pattern=Pattern.DOTTED, line_spacing=40))
        assert img.getpixel((40, 40)) == LINE_RGB
        assert img.getpixel((60, 60)) == PAPER_RGB

    def test_grid_pixels(self):
        img = render(W, H, PaperConfig(pattern=Pattern.GRID, line_spacing=32))
        assert img.getpixel((400, 0)) == LINE_RGB
        assert img.getpixel((40, 500)) == LINE_RGB
        assert img.getpixel((41, 1)) == PAPER_RGB

    def test_render_is_idempotent(self):
        for pattern in Pattern:
            cfg = PaperConfig(pattern=pattern, line_width=2.5)
            assert render(W, H, cfg).tobytes() == render(W, H, cfg).tobytes()


class TestPaperSurface:
    def test_repaint_is_full(self):
        surface = PaperSurface(200, 300)
        grid = PaperConfig(pattern=Pattern.GRID)
        blank = PaperConfig(pattern=Pattern.BLANK)
        surface.repaint(grid)
        surface.repaint(blank)
        assert surface.image.tobytes() == render(200, 300, blank).tobytes()
        assert surface.config == blank
        assert surface.repaints == 2


class TestTerminalPreview:
    def test_dimensions(self):
        text = terminal_preview(render(W, H, PaperConfig()), columns=40)
        lines = text.plain.split("\n")
        assert len(lines) == 25
        assert all(len(line) == 40 for line in lines)

    def test_blank_preview_uses_paper_color(self):
        text = terminal_preview(render(80, 100, PaperConfig(pattern=Pattern.BLANK)), columns=8)
        styles = {str(span.style.bgcolor.triplet.hex) for span in text.spans}
        assert styles == {"#fdfbf5"}
