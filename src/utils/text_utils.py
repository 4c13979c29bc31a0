"""
Plinth — Text Utilities
========================
Terminal styling, wrapping, box tables and filename helpers for the report.
"""

import re

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

_CODES = {
    "reset": "0",
    "bold": "1",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
}


def style(text: str, *names: str) -> str:
    """Wrap text in ANSI codes, e.g. style("Done", "bold", "green")."""
    if not names:
        return text
    codes = ";".join(_CODES[n] for n in names)
    return f"\x1b[{codes}m{text}\x1b[0m"


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def wrap_text(text: str, width: int) -> str:
    """Greedy word wrap on single spaces. Overlong words get their own line."""
    lines = []
    current = ""

    for word in text.split(" "):
        if len(current + word) <= width:
            current += (" " if current else "") + word
        else:
            if current:
                lines.append(current)
            current = word

    if current:
        lines.append(current)

    return "\n".join(lines)


def slugify(name: str) -> str:
    """Lowercase, whitespace runs → hyphens. Nothing else is touched."""
    return re.sub(r"\s+", "-", name.lower())


def render_table(headers: list[str], rows: list[list[str]], border: str = "gray") -> str:
    """
    Box-drawn table. Rows wider than the header row get blank header cells
    so every column still lines up.
    """
    n_cols = max([len(headers)] + [len(r) for r in rows])
    head = list(headers) + [""] * (n_cols - len(headers))
    body = [list(r) + [""] * (n_cols - len(r)) for r in rows]

    widths = [
        max(len(str(line[i])) for line in [head] + body)
        for i in range(n_cols)
    ]

    def rule(left: str, mid: str, right: str) -> str:
        return style(left + mid.join("─" * (w + 2) for w in widths) + right, border)

    def line(cells: list[str], *cell_style: str) -> str:
        bar = style("│", border)
        parts = [f" {style(str(c).ljust(w), *cell_style)} " for c, w in zip(cells, widths)]
        return bar + bar.join(parts) + bar

    out = [rule("┌", "┬", "┐"), line(head, "bold"), rule("├", "┼", "┤")]
    out.extend(line(r) for r in body)
    out.append(rule("└", "┴", "┘"))
    return "\n".join(out)
