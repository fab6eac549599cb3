import pytest

from html2haml.dom_model import CData, Comment, DocType, Document, Element, Text, XMLDecl
from html2haml.errors import HamlSyntaxError, UnsupportedNodeError
from html2haml.options import ConversionOptions
from html2haml.serializer import serialize

PLAIN = ConversionOptions()
ERB = ConversionOptions(erb=True)


def test_div_with_static_id_omits_tag() -> None:
    assert serialize(Element("div", {"id": "x"}), 0, PLAIN) == "#x\n"


def test_other_tags_keep_their_marker() -> None:
    assert serialize(Element("span", {"id": "x"}), 0, PLAIN) == "%span#x\n"
    assert serialize(Element("div"), 0, PLAIN) == "%div\n"
    assert serialize(Element("div", {"title": "t"}), 0, PLAIN) == '%div{ :title => "t" }\n'


def test_id_then_classes_then_attribute_hash() -> None:
    node = Element("div", {"title": "t", "class": "a  b", "id": "main"}, [Text("hi")])
    assert serialize(node, 0, PLAIN) == '#main.a.b{ :title => "t" } hi\n'


def test_serialize_does_not_mutate_attributes() -> None:
    attrs = {"id": "main", "class": "box"}
    node = Element("p", attrs)
    assert serialize(node, 0, PLAIN) == serialize(node, 0, PLAIN) == "%p#main.box\n"
    assert node.attrs == {"id": "main", "class": "box"}


def test_single_line_text_collapses_onto_element() -> None:
    assert serialize(Element("p", children=[Text("hello")]), 0, PLAIN) == "%p hello\n"


def test_multi_line_text_forces_block_form() -> None:
    node = Element("p", children=[Text("hello\nworld")])
    assert serialize(node, 1, PLAIN) == "  %p\n    hello\n    world\n"


def test_whitespace_only_child_renders_bare_element() -> None:
    assert serialize(Element("p", children=[Text("   ")]), 0, PLAIN) == "%p\n"


def test_nested_children_are_indented() -> None:
    node = Element(
        "ul",
        {"class": "nav"},
        [Text("\n"), Element("li", children=[Text("one")]), Element("li", children=[Text("two")])],
    )
    assert serialize(node, 0, PLAIN) == "%ul.nav\n  %li one\n  %li two\n"


def test_comment_cdata_and_declarations() -> None:
    assert serialize(Comment(" note "), 1, PLAIN) == "  /\n    note\n"
    assert serialize(CData("a < b"), 0, PLAIN) == ":cdata\n  a < b\n"
    assert serialize(XMLDecl('xml version="1.0"'), 2, PLAIN) == "    !!! XML\n"
    assert serialize(DocType("-//W3C//DTD XHTML 1.0 Strict//EN"), 0, PLAIN) == "!!! Strict\n"
    assert serialize(DocType(None), 0, PLAIN) == "!!! 5\n"


def test_invalid_doctype_propagates() -> None:
    with pytest.raises(HamlSyntaxError):
        serialize(Document([DocType("nonsense")]), 0, PLAIN)


def test_document_children_start_at_column_zero() -> None:
    doc = Document([XMLDecl(), Element("html", children=[Element("body")])])
    assert serialize(doc, 3, PLAIN) == "!!! XML\n%html\n  %body\n"


def test_placeholders_render_as_script_lines_in_erb_mode() -> None:
    loud = Element("html2haml-loud", children=[Text(" user.name ")])
    silent = Element("html2haml-silent", children=[Text(" if x ")])
    assert serialize(Element("p", children=[loud]), 0, ERB) == "%p\n  = user.name\n"
    assert serialize(silent, 1, ERB) == "  - if x\n"
    assert serialize(loud, 0, PLAIN) == "%html2haml-loud user.name\n"


def test_dynamic_id_stays_in_attribute_hash() -> None:
    node = Element("div", {"id": "<html2haml-loud> dom_id(post) </html2haml-loud>"}, [Text("z")])
    assert serialize(node, 0, ERB) == "%div{ :id => dom_id(post) } z\n"


def test_unknown_node_kind_is_rejected() -> None:
    with pytest.raises(UnsupportedNodeError):
        serialize(object(), 0, PLAIN)
