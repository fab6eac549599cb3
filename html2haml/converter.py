"""Public entry points for converting HTML into Haml."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from bs4 import Tag

from .dom_model import NODE_TYPES, Node
from .erb import escape_ampersands, extract_tags
from .errors import EncodingError
from .options import OPTION_ALIASES, ConversionOptions
from .parsing import parse_markup, protect_cdata, tree_from_soup
from .serializer import serialize

OptionsLike = Union[ConversionOptions, Mapping[str, Any], None]

BOM = "\ufeff"


def check_encoding(data: bytes, encoding: str = "utf-8") -> str:
    """Decode ``data``, reporting the line of the first undecodable byte."""
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        line = data[: exc.start].count(b"\n") + 1
        bad = data[exc.start : exc.end]
        raise EncodingError(f"Invalid {encoding} character {bad!r}", line) from exc
    if text.startswith(BOM):
        text = text[len(BOM):]
    return text


def prepare_markup(markup: str, options: ConversionOptions) -> str:
    """Protect CDATA sections, then escape every ``&`` and extract ERB tags if enabled."""
    markup = protect_cdata(markup)
    if options.erb:
        return extract_tags(markup)
    return escape_ampersands(markup)


def build_tree(template: Any, options: ConversionOptions) -> Node:
    """Turn any supported template input into a document tree."""
    if isinstance(template, NODE_TYPES):
        return template
    if isinstance(template, Tag):
        return tree_from_soup(template)
    if hasattr(template, "read"):
        template = template.read()
    if isinstance(template, (bytes, bytearray)):
        template = check_encoding(bytes(template))
    if not isinstance(template, str):
        raise TypeError(f"Cannot convert {type(template).__name__} to Haml")
    return parse_markup(prepare_markup(template, options), options)


class HTML:
    """Converts an HTML document into a Haml template.

    ``template`` may be markup text (``str`` or ``bytes``), a readable file
    object, a BeautifulSoup tree or a :mod:`html2haml.dom_model` node. It is
    parsed once, on construction.

    Example::

        HTML('<a href="http://google.com">Blat</a>').render()
        # '%a{ :href => "http://google.com" } Blat\\n'
    """

    def __init__(self, template: Any, options: OptionsLike = None) -> None:
        self.options = ConversionOptions.coerce(options)
        self.template: Node = build_tree(template, self.options)

    def render(self) -> str:
        return serialize(self.template, 0, self.options)

    to_haml = render


def render(template: Any, options: OptionsLike = None, **kwargs: Any) -> str:
    """Convert ``template`` into Haml.

    Options may be given as a :class:`ConversionOptions`, a mapping, or as
    keyword arguments (``erb=True``, ``xhtml=True``).
    """
    merged: Optional[OptionsLike] = options
    if kwargs:
        base = ConversionOptions.coerce(options).model_dump()
        for name, value in kwargs.items():
            base[OPTION_ALIASES.get(name, name)] = value
        merged = base
    return HTML(template, merged).render()


__all__ = ["HTML", "build_tree", "check_encoding", "prepare_markup", "render"]
