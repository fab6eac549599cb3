"""Attribute analysis and rendering for Haml elements."""

from __future__ import annotations

import html
import re
from typing import Collection, Dict, Mapping

from .erb import LOUD_PLACEHOLDER_RE
from .options import ConversionOptions

SYMBOL_KEY_RE = re.compile(r"\w+", re.ASCII)

_RUBY_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\v": "\\v",
    "\b": "\\b",
    "\a": "\\a",
    "\x1b": "\\e",
}


def ruby_inspect(value: str) -> str:
    """Quote ``value`` as a double-quoted Ruby string literal."""
    out = []
    for index, char in enumerate(value):
        if char in _RUBY_ESCAPES:
            out.append(_RUBY_ESCAPES[char])
        elif char == "#" and value[index + 1:index + 2] in ("{", "$", "@"):
            out.append("\\#")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{ord(char):04X}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def attribute_key(name: str) -> str:
    if SYMBOL_KEY_RE.fullmatch(name):
        return f":{name}"
    return ruby_inspect(name)


def dynamic_attributes(attrs: Mapping[str, str]) -> Dict[str, str]:
    """Ruby source for every attribute whose value embeds ERB output.

    A value that is exactly one ``<%= %>`` tag maps to the bare expression;
    a value that mixes text with tags maps to a string literal with ``#{}``
    interpolation. Values without tags are left out.
    """
    dynamic: Dict[str, str] = {}
    for name, value in attrs.items():
        if not value:
            continue

        full_match = False

        def replace(match: re.Match[str]) -> str:
            nonlocal full_match
            full_match = match.start() == 0 and match.end() == len(value)
            code = match.group(1)
            return html.unescape(code if full_match else "#{" + code + "}")

        ruby_value = LOUD_PLACEHOLDER_RE.sub(replace, value)
        if ruby_value == value:
            continue
        dynamic[name] = ruby_value if full_match else f'"{ruby_value}"'
    return dynamic


def is_dynamic(
    name: str, dynamic: Mapping[str, str], options: ConversionOptions
) -> bool:
    return options.erb and name in dynamic


def is_static(
    attrs: Mapping[str, str],
    name: str,
    dynamic: Mapping[str, str],
    options: ConversionOptions,
) -> bool:
    """True when ``name`` holds a non-empty value free of ERB output."""
    return bool(attrs.get(name)) and not is_dynamic(name, dynamic, options)


def classify(
    attrs: Mapping[str, str],
    options: ConversionOptions,
    consumed: Collection[str] = (),
) -> str:
    """Render ``attrs`` as a Haml attribute hash, skipping ``consumed`` names.

    Returns an empty string when nothing is left to render.
    """
    dynamic = dynamic_attributes(attrs) if options.erb else {}
    pairs = []
    for name, value in attrs.items():
        if name in consumed:
            continue
        if is_dynamic(name, dynamic, options):
            rendered = dynamic[name]
        else:
            rendered = ruby_inspect(value)
        pairs.append(f"{attribute_key(name)} => {rendered}")
    if not pairs:
        return ""
    return "{ " + ", ".join(pairs) + " }"
