"""Convert HTML documents into Haml templates."""

from .converter import HTML, check_encoding, render
from .dom_model import CData, Comment, DocType, Document, Element, Text, XMLDecl
from .errors import (
    ConfigError,
    EncodingError,
    HamlError,
    HamlSyntaxError,
    UnsupportedNodeError,
)
from .options import ConversionOptions, load_options
from .serializer import serialize

__all__ = [
    "CData",
    "Comment",
    "ConfigError",
    "ConversionOptions",
    "DocType",
    "Document",
    "Element",
    "EncodingError",
    "HTML",
    "HamlError",
    "HamlSyntaxError",
    "Text",
    "UnsupportedNodeError",
    "XMLDecl",
    "check_encoding",
    "load_options",
    "render",
    "serialize",
]
