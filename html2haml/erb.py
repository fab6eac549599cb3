"""ERB tag extraction.

Before parsing, ``<%= ... %>`` and ``<% ... %>`` tags are rewritten into
placeholder elements (``<html2haml-loud>`` and ``<html2haml-silent>``) so the
HTML or XML parser carries their content through as ordinary elements. The
serializer recognizes the placeholders by name and turns them back into
``=`` and ``-`` lines. Loud tags inside a start tag are written with entity
escaped brackets instead, so the parser sees them as attribute text. The
placeholder names are an internal protocol between this module,
:mod:`html2haml.parsing`, :mod:`html2haml.attributes` and
:mod:`html2haml.serializer`.
"""

from __future__ import annotations

import html
import re
from typing import Optional

from .text import tabulate

PLACEHOLDER_PREFIX = "html2haml-"
LOUD = "loud"
SILENT = "silent"

LOUD_TAG_RE = re.compile(r"<%=(.*?)-?%>", re.DOTALL)
SILENT_TAG_RE = re.compile(r"<%-?(.*?)-?%>", re.DOTALL)
LOUD_PLACEHOLDER_RE = re.compile(
    rf"<{PLACEHOLDER_PREFIX}{LOUD}>\s*(.+?)\s*</{PLACEHOLDER_PREFIX}{LOUD}>"
)
PLACEHOLDER_RE = re.compile(
    rf"<{PLACEHOLDER_PREFIX}({LOUD}|{SILENT})>(.*?)</{PLACEHOLDER_PREFIX}\1>", re.DOTALL
)
# A start tag whose quoted attribute values may contain ERB tags.
START_TAG_RE = re.compile(
    r"""<[A-Za-z][^\s/>]*"""
    r"""(?:"(?:[^"<]|<(?!%)|<%.*?%>)*"|'(?:[^'<]|<(?!%)|<%.*?%>)*'|<%.*?%>|[^<>"'])*>""",
    re.DOTALL,
)

_MARKUP_ESCAPES = {"<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#x27;"}


def placeholder_tag(kind: str) -> str:
    return f"{PLACEHOLDER_PREFIX}{kind}"


def placeholder_kind(tag_name: str) -> Optional[str]:
    """Return ``"loud"`` or ``"silent"`` for a placeholder tag name, else None."""
    if not tag_name.startswith(PLACEHOLDER_PREFIX):
        return None
    kind = tag_name[len(PLACEHOLDER_PREFIX):]
    if kind in (LOUD, SILENT):
        return kind
    return None


def escape_ampersands(text: str) -> str:
    return text.replace("&", "&amp;")


def unescape_ampersands(text: str) -> str:
    return text.replace("&amp;", "&")


def _escape_code(code: str) -> str:
    # ``code`` has been through escape_ampersands with the rest of the input.
    return escape_ampersands(html.escape(unescape_ampersands(code)))


def _escape_markup(text: str) -> str:
    return "".join(_MARKUP_ESCAPES.get(char, char) for char in text)


def _protect_attributes(match: re.Match[str]) -> str:
    tag = match.group(0)
    if "<%" not in tag:
        return tag
    start = _escape_markup(f"<{placeholder_tag(LOUD)}>")
    end = _escape_markup(f"</{placeholder_tag(LOUD)}>")
    tag = LOUD_TAG_RE.sub(lambda m: f"{start}{_escape_code(m.group(1))}{end}", tag)
    return SILENT_TAG_RE.sub(lambda m: _escape_markup(m.group(0)), tag)


def _wrap(pattern: re.Pattern[str], kind: str, text: str) -> str:
    tag = placeholder_tag(kind)
    return pattern.sub(lambda m: f"<{tag}>{_escape_code(m.group(1))}</{tag}>", text)


def extract_tags(text: str) -> str:
    """Rewrite ERB tags in raw markup into placeholder elements.

    Every ``&`` is escaped first. ERB inside start tags is handled next, then
    loud tags, so the silent pattern never sees them.
    """
    text = escape_ampersands(text)
    text = START_TAG_RE.sub(_protect_attributes, text)
    text = _wrap(LOUD_TAG_RE, LOUD, text)
    return _wrap(SILENT_TAG_RE, SILENT, text)


def restore_tags(text: str) -> str:
    """Turn placeholders left in raw text (scripts, comments) back into ERB."""

    def replace(match: re.Match[str]) -> str:
        opener = "<%=" if match.group(1) == LOUD else "<%"
        return f"{opener}{html.unescape(match.group(2))}%>"

    return PLACEHOLDER_RE.sub(replace, text)


def loud_line(code: str, tabs: int) -> str:
    code = re.sub(r"\n\s*", " ", code).strip()
    return f"{tabulate(tabs)}= {code}\n"


def silent_lines(code: str, tabs: int) -> str:
    return "".join(f"{tabulate(tabs)}- {line.strip()}\n" for line in code.strip().split("\n"))


def placeholder_lines(kind: str, content: str, tabs: int) -> str:
    """Render the unescaped content of a placeholder element as Haml script."""
    code = html.unescape(content)
    if kind == LOUD:
        return loud_line(code, tabs)
    return silent_lines(code, tabs)
