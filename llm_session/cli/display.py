"""
Console display helpers for the interactive chat.

Colours, wrapping and cost formatting live here so the session layer never
deals with presentation.
"""

import textwrap
from typing import List

from rich.console import Console
from rich.markup import escape

# One colour per session, in the order sessions are opened.
MODEL_COLORS = ["cyan", "green", "magenta", "blue", "bright_cyan", "bright_green"]
COST_LABEL_COLOR = "yellow"


def color_for(index: int) -> str:
    """Colour for the session at ``index``; the last colour repeats."""
    return MODEL_COLORS[min(index, len(MODEL_COLORS) - 1)]


def format_cost(cost: float) -> str:
    """Format a USD cost as whole cents."""
    cents = round(cost * 100)
    return f"{cents}¢"


def _wrap_line(line: str, width: int) -> List[str]:
    content = line.lstrip()
    if not content:
        return [""]
    indent = line[:len(line) - len(content)]
    return textwrap.wrap(
        content,
        width=max(width, len(indent) + 1),
        initial_indent=indent,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [indent]


def wrap_text(text: str, width: int = 80) -> str:
    """Wrap every paragraph to ``width`` columns, keeping line indentation."""
    paragraphs = text.split("\n\n")
    wrapped = []
    for paragraph in paragraphs:
        lines = []
        for line in paragraph.split("\n"):
            lines.extend(_wrap_line(line, width))
        wrapped.append("\n".join(lines))
    return "\n\n".join(wrapped)


def display_response(console: Console, name: str, color: str, text: str, width: int = 80) -> None:
    """Print a labelled response block."""
    console.print(f"[{color}]\\[{escape(name)}][/]", soft_wrap=True)
    console.print(f"[{color}]{escape(wrap_text(text, width))}[/]", soft_wrap=True)
    console.print()


def display_error(console: Console, name: str, color: str, error: Exception) -> None:
    console.print(f"[{color}]\\[{escape(name)}] Error: {escape(str(error))}[/]", soft_wrap=True)
    console.print()


def display_cost_header(console: Console) -> None:
    console.print(f"[{COST_LABEL_COLOR}]Cost breakdown:[/]")


def display_cost_line(console: Console, name: str, color: str, latest: float, total: float) -> None:
    console.print(
        f"[{color}]\\[{escape(name)}] Last: {format_cost(latest)} | "
        f"Total: {format_cost(total)}[/]",
        soft_wrap=True,
    )


def display_cost_unavailable(console: Console, name: str, color: str) -> None:
    console.print(f"[{color}]\\[{escape(name)}] Cost calculation error[/]", soft_wrap=True)
