"""Document tree handed to the serializer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Union


class NodeKind(str, Enum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    CDATA = "cdata"
    DOCTYPE = "doctype"
    XML_DECL = "xml_decl"


@dataclass
class Document:
    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT
    children: List["Node"] = field(default_factory=list)


@dataclass
class Element:
    kind: ClassVar[NodeKind] = NodeKind.ELEMENT
    name: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)


@dataclass
class Text:
    kind: ClassVar[NodeKind] = NodeKind.TEXT
    content: str


@dataclass
class Comment:
    kind: ClassVar[NodeKind] = NodeKind.COMMENT
    content: str


@dataclass
class CData:
    kind: ClassVar[NodeKind] = NodeKind.CDATA
    content: str


@dataclass
class DocType:
    """A ``<!DOCTYPE>`` declaration; ``public_id`` is None when absent."""

    kind: ClassVar[NodeKind] = NodeKind.DOCTYPE
    public_id: Optional[str] = None


@dataclass
class XMLDecl:
    kind: ClassVar[NodeKind] = NodeKind.XML_DECL
    content: str = ""


Node = Union[Document, Element, Text, Comment, CData, DocType, XMLDecl]

NODE_TYPES = (Document, Element, Text, Comment, CData, DocType, XMLDecl)


def inner_text(node: Node) -> str:
    """Concatenated character data below ``node``."""
    if isinstance(node, (Text, CData)):
        return node.content
    if isinstance(node, (Document, Element)):
        return "".join(inner_text(child) for child in node.children)
    return ""


__all__ = [
    "CData",
    "Comment",
    "DocType",
    "Document",
    "Element",
    "NODE_TYPES",
    "Node",
    "NodeKind",
    "Text",
    "XMLDecl",
    "inner_text",
]
