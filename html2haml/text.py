"""Plain text formatting for Haml output."""

from __future__ import annotations

INDENT = "  "

# Characters that start a structural line in Haml and must be escaped with a
# backslash when they open a line of plain text.
SPECIAL_CHARACTERS = frozenset("%.#/&=-!\\:~")


def tabulate(tabs: int) -> str:
    return INDENT * tabs


def parse_text(text: str, tabs: int) -> str:
    """Render a block of plain text at the given indentation level.

    The block is stripped, ``#{`` is escaped so Haml does not interpolate it,
    and every line gets its own indentation and a trailing newline. Empty
    input yields an empty string.
    """
    text = text.strip().replace("#{", "\\#{")
    if not text:
        return ""

    lines = []
    for line in text.split("\n"):
        line = line.strip()
        escape = "\\" if line[:1] in SPECIAL_CHARACTERS else ""
        lines.append(f"{tabulate(tabs)}{escape}{line}\n")
    return "".join(lines)
