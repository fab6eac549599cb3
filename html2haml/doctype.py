"""DOCTYPE declarations to Haml's ``!!!`` shorthand."""

from __future__ import annotations

import re
from typing import Optional

from .errors import HamlSyntaxError

DOCTYPE_MARKER = "!!!"
HTML5_DOCTYPE = f"{DOCTYPE_MARKER} 5"

DTD_RE = re.compile(r"DTD\s+([^\s]+)\s*([^\s]*)\s*([^\s]*)\s*//")
PUBLIC_ID_RE = re.compile(r"\bPUBLIC\s+([\"'])(.*?)\1", re.IGNORECASE | re.DOTALL)


def public_id_from_declaration(declaration: str) -> Optional[str]:
    """Extract the public identifier from the body of a ``<!DOCTYPE ...>``."""
    match = PUBLIC_ID_RE.search(declaration)
    if not match:
        return None
    return match.group(2)


def translate(public_id: str) -> str:
    """Translate a DOCTYPE public identifier into a Haml doctype line."""
    match = DTD_RE.search(public_id or "")
    if match is None:
        raise HamlSyntaxError("Invalid doctype")

    doc_type, version, strictness = (token.lower() for token in match.groups())
    if doc_type == "html":
        # HTML 4 identifiers don't follow the XHTML layout.
        version = "1.0"
        strictness = "transitional"

    parts = [DOCTYPE_MARKER]
    if version and version != "1.0":
        parts.append(version)
    if strictness and strictness != "transitional":
        parts.append(strictness[0].upper() + strictness[1:])
    return " ".join(parts)
