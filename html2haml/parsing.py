"""Parse markup and adapt the result to :mod:`dom_model`.

Lenient HTML goes through BeautifulSoup; strict XHTML goes through
``lxml.etree`` with recovery off, so malformed documents raise
``lxml.etree.XMLSyntaxError``.

Raw text has every ``&`` escaped once before parsing (see
:func:`html2haml.converter.prepare_markup`). Parsers decode that level in
text and attribute values, but not in comments or in ``script``/``style``
bodies, so :func:`_raw_text` undoes it there. CDATA sections are carried
through the parse as ``<html2haml-cdata>`` elements holding the escaped
content, because neither backend reports them as their own nodes.
"""

from __future__ import annotations

import html
import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import (
    CData as SoupCData,
    Comment as SoupComment,
    Declaration,
    Doctype as SoupDoctype,
    PageElement,
    ProcessingInstruction,
)
from lxml import etree

from .doctype import public_id_from_declaration
from .dom_model import CData, Comment, DocType, Document, Element, Node, Text, XMLDecl
from .erb import restore_tags, unescape_ampersands
from .errors import UnsupportedNodeError
from .options import ConversionOptions

HTML_FEATURES = "html.parser"

CDATA_PLACEHOLDER = "html2haml-cdata"
CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
CDATA_PLACEHOLDER_RE = re.compile(rf"<{CDATA_PLACEHOLDER}>(.*?)</{CDATA_PLACEHOLDER}>", re.DOTALL)
XML_DECL_RE = re.compile(r"\s*<\?xml\b[^>]*\?>")

# Elements whose body html.parser passes through without decoding entities.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def protect_cdata(markup: str) -> str:
    """Replace ``<![CDATA[...]]>`` sections with placeholder elements."""
    return CDATA_RE.sub(
        lambda m: f"<{CDATA_PLACEHOLDER}>{html.escape(m.group(1), quote=False)}</{CDATA_PLACEHOLDER}>",
        markup,
    )


def _restore_cdata(text: str) -> str:
    return CDATA_PLACEHOLDER_RE.sub(lambda m: f"<![CDATA[{html.unescape(m.group(1))}]]>", text)


def _raw_text(text: str) -> str:
    """Content of a region the parser left undecoded, as originally written."""
    return restore_tags(_restore_cdata(unescape_ampersands(text)))


def parse_markup(markup: str, options: ConversionOptions) -> Document:
    """Parse prepared markup in lenient HTML mode, or as XML when ``xhtml`` is set."""
    if options.xhtml:
        return _parse_xml(markup)
    # Keep ``class`` as the raw attribute string rather than a token list.
    soup = BeautifulSoup(markup, HTML_FEATURES, multi_valued_attributes=None)
    return tree_from_soup(soup, escaped=True)


def tree_from_soup(soup: Tag, escaped: bool = False) -> Document:
    """Convert a parsed BeautifulSoup tree (or a single tag) into a Document.

    ``escaped`` marks a tree parsed from markup prepared by this package.
    """
    if isinstance(soup, BeautifulSoup):
        return Document(children=_convert_children(soup, escaped))
    return Document(children=[_convert(soup, escaped)])


def _convert_children(tag: Tag, escaped: bool) -> list[Node]:
    return [_convert(child, escaped) for child in tag.contents]


def _tag_name(tag: Tag) -> str:
    if tag.prefix and ":" not in tag.name:
        return f"{tag.prefix}:{tag.name}"
    return tag.name


def _attribute_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _convert(element: PageElement, escaped: bool) -> Node:
    if isinstance(element, Tag):
        name = _tag_name(element)
        if name == CDATA_PLACEHOLDER:
            return CData(html.unescape(element.get_text()))
        return Element(
            name=name,
            attrs={str(key): _attribute_value(value) for key, value in element.attrs.items()},
            children=_convert_children(element, escaped),
        )
    if isinstance(element, SoupDoctype):
        return DocType(public_id=public_id_from_declaration(str(element)))
    if isinstance(element, SoupComment):
        return Comment(_raw_text(str(element)) if escaped else str(element))
    if isinstance(element, SoupCData):
        return CData(_raw_text(str(element)) if escaped else str(element))
    if isinstance(element, ProcessingInstruction):
        content = str(element)
        if content == "xml" or content.startswith("xml "):
            return XMLDecl(content)
        raise UnsupportedNodeError(f"Unsupported processing instruction: <?{content.rstrip('?')}?>")
    if isinstance(element, Declaration):
        raise UnsupportedNodeError(f"Unsupported declaration: <!{element}>")
    if isinstance(element, NavigableString):
        content = str(element)
        if escaped:
            parent = element.parent
            if parent is not None and parent.name in RAW_TEXT_ELEMENTS:
                content = _raw_text(content)
            else:
                content = restore_tags(content)
        return Text(content)
    raise UnsupportedNodeError(f"Unsupported node type: {type(element).__name__}")


def _parse_xml(markup: str) -> Document:
    children: list[Node] = []
    declaration = XML_DECL_RE.match(markup)
    if declaration:
        # lxml refuses str input that carries an encoding declaration.
        children.append(XMLDecl(declaration.group(0).strip()[2:-2]))
        markup = markup[declaration.end():]

    parser = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)
    root = etree.fromstring(markup, parser)

    docinfo = root.getroottree().docinfo
    if docinfo.doctype:
        children.append(DocType(public_id=docinfo.public_id or None))
    for sibling in reversed(list(root.itersiblings(preceding=True))):
        children.append(_convert_xml(sibling))
    children.append(_convert_xml(root))
    for sibling in root.itersiblings():
        children.append(_convert_xml(sibling))
    return Document(children=children)


def _xml_name(qualified: str, nsmap: dict) -> str:
    qname = etree.QName(qualified)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _xml_attributes(element: etree._Element) -> dict[str, str]:
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    attrs: dict[str, str] = {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            attrs["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri
    for key, value in element.attrib.items():
        attrs[_xml_name(key, element.nsmap)] = value
    return attrs


def _convert_xml(node: etree._Element) -> Node:
    if node.tag is etree.Comment:
        return Comment(_raw_text(node.text or ""))
    if node.tag is etree.ProcessingInstruction:
        raise UnsupportedNodeError(f"Unsupported processing instruction: <?{node.target}?>")
    if not isinstance(node.tag, str):
        raise UnsupportedNodeError(f"Unsupported node type: {type(node).__name__}")

    name = _xml_name(node.tag, node.nsmap)
    if name == CDATA_PLACEHOLDER:
        return CData(html.unescape(node.text or ""))

    children: list[Node] = []
    _append_text(children, node.text)
    for child in node:
        children.append(_convert_xml(child))
        _append_text(children, child.tail)
    return Element(name=name, attrs=_xml_attributes(node), children=children)


def _append_text(children: list[Node], text: Optional[str]) -> None:
    if text:
        children.append(Text(text))
