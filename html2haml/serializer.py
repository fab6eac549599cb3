"""Serialization of a document tree into Haml."""

from __future__ import annotations

from typing import Callable, Dict, List

from .attributes import classify, dynamic_attributes, is_static
from .doctype import HTML5_DOCTYPE, translate
from .dom_model import (
    CData,
    Comment,
    DocType,
    Document,
    Element,
    NODE_TYPES,
    Node,
    NodeKind,
    Text,
    XMLDecl,
    inner_text,
)
from .erb import placeholder_kind, placeholder_lines
from .errors import UnsupportedNodeError
from .options import ConversionOptions
from .text import parse_text, tabulate

DEFAULT_TAG = "div"


def serialize(node: Node, tabs: int, options: ConversionOptions) -> str:
    """Return the Haml for ``node`` rendered at indentation level ``tabs``."""
    if not isinstance(node, NODE_TYPES):
        raise UnsupportedNodeError(f"Cannot convert {type(node).__name__} to Haml")
    return _HANDLERS[node.kind](node, tabs, options)


def _document(node: Document, tabs: int, options: ConversionOptions) -> str:
    return "".join(serialize(child, 0, options) for child in node.children)


def _xml_decl(node: XMLDecl, tabs: int, options: ConversionOptions) -> str:
    return f"{tabulate(tabs)}!!! XML\n"


def _doctype(node: DocType, tabs: int, options: ConversionOptions) -> str:
    if node.public_id is None:
        return f"{tabulate(tabs)}{HTML5_DOCTYPE}\n"
    return f"{tabulate(tabs)}{translate(node.public_id)}\n"


def _cdata(node: CData, tabs: int, options: ConversionOptions) -> str:
    return f"{tabulate(tabs)}:cdata\n{parse_text(node.content, tabs + 1)}"


def _comment(node: Comment, tabs: int, options: ConversionOptions) -> str:
    return f"{tabulate(tabs)}/\n{parse_text(node.content, tabs + 1)}"


def _text(node: Text, tabs: int, options: ConversionOptions) -> str:
    return parse_text(node.content, tabs)


def _element(node: Element, tabs: int, options: ConversionOptions) -> str:
    output = tabulate(tabs)
    if options.erb:
        kind = placeholder_kind(node.name)
        if kind is not None:
            return placeholder_lines(kind, inner_text(node), tabs)

    attrs = node.attrs
    dynamic = dynamic_attributes(attrs) if options.erb else {}
    static_id = is_static(attrs, "id", dynamic, options)
    static_class = is_static(attrs, "class", dynamic, options)

    if not (node.name == DEFAULT_TAG and (static_id or static_class)):
        output += f"%{node.name}"

    consumed: List[str] = []
    if static_id:
        output += f"#{attrs['id']}"
        consumed.append("id")
    if static_class:
        output += "".join(f".{name}" for name in attrs["class"].split())
        consumed.append("class")
    output += classify(attrs, options, consumed)

    children = node.children
    if len(children) == 1 and isinstance(children[0], Text) and "\n" not in children[0].content:
        text = serialize(children[0], tabs + 1, options)
        if not text:
            return output + "\n"
        if "\n" not in text.rstrip("\n"):
            return f"{output} {text.lstrip()}"
        return f"{output}\n{text}"

    return output + "\n" + "".join(serialize(child, tabs + 1, options) for child in children)


_HANDLERS: Dict[NodeKind, Callable[..., str]] = {
    NodeKind.DOCUMENT: _document,
    NodeKind.ELEMENT: _element,
    NodeKind.TEXT: _text,
    NodeKind.COMMENT: _comment,
    NodeKind.CDATA: _cdata,
    NodeKind.DOCTYPE: _doctype,
    NodeKind.XML_DECL: _xml_decl,
}
