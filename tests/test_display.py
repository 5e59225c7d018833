"""
Unit tests for console display helpers.
"""

from rich.console import Console

from llm_session.cli.display import (
    MODEL_COLORS,
    color_for,
    display_cost_line,
    format_cost,
    wrap_text,
)


class TestFormatCost:
    """Test cent formatting."""

    def test_zero(self):
        assert format_cost(0.0) == "0¢"

    def test_tiny_cost_rounds_to_zero(self):
        assert format_cost(0.00275) == "0¢"

    def test_whole_cents(self):
        assert format_cost(0.25) == "25¢"
        assert format_cost(1.5) == "150¢"


class TestColors:
    def test_palette_order(self):
        assert color_for(0) == MODEL_COLORS[0]
        assert color_for(1) == MODEL_COLORS[1]

    def test_last_color_repeats(self):
        assert color_for(len(MODEL_COLORS) + 3) == MODEL_COLORS[-1]


class TestWrapText:
    """Test paragraph wrapping."""

    def test_short_text_unchanged(self):
        assert wrap_text("hello world", 80) == "hello world"

    def test_wraps_at_width(self):
        wrapped = wrap_text("one two three four five", 10)
        assert wrapped.split("\n") == ["one two", "three four", "five"]

    def test_keeps_paragraphs(self):
        assert wrap_text("first\n\nsecond", 80) == "first\n\nsecond"

    def test_keeps_indentation(self):
        wrapped = wrap_text("  - alpha beta gamma", 12)
        assert wrapped.split("\n") == ["  - alpha", "  beta gamma"]

    def test_long_word_not_broken(self):
        assert wrap_text("supercalifragilistic", 5) == "supercalifragilistic"


class TestCostLine:
    def test_renders_label_and_costs(self):
        console = Console(record=True, width=120)
        display_cost_line(console, "Claude(opus)", "cyan", 0.12, 1.0)
        assert "[Claude(opus)] Last: 12¢ | Total: 100¢" in console.export_text()
