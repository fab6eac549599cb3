from html2haml.attributes import (
    attribute_key,
    classify,
    dynamic_attributes,
    is_static,
    ruby_inspect,
)
from html2haml.options import ConversionOptions

ERB = ConversionOptions(erb=True)
PLAIN = ConversionOptions()


def test_ruby_inspect_escapes_quotes_and_interpolation() -> None:
    assert ruby_inspect("plain") == '"plain"'
    assert ruby_inspect('say "hi"') == '"say \\"hi\\""'
    assert ruby_inspect("#{x}") == '"\\#{x}"'
    assert ruby_inspect("a\\b\n") == '"a\\\\b\\n"'


def test_attribute_keys() -> None:
    assert attribute_key("href") == ":href"
    assert attribute_key("data-role") == '"data-role"'
    assert attribute_key("xml:lang") == '"xml:lang"'


def test_dynamic_attributes() -> None:
    attrs = {
        "href": "<html2haml-loud> url </html2haml-loud>",
        "title": "Hello <html2haml-loud> name </html2haml-loud>!",
        "alt": "plain",
        "rel": "",
    }
    assert dynamic_attributes(attrs) == {
        "href": "url",
        "title": '"Hello #{name}!"',
    }


def test_dynamic_id_is_not_static_in_erb_mode() -> None:
    attrs = {"id": "<html2haml-loud> dom_id </html2haml-loud>", "class": "box"}
    dynamic = dynamic_attributes(attrs)
    assert not is_static(attrs, "id", dynamic, ERB)
    assert is_static(attrs, "class", dynamic, ERB)
    assert not is_static({"id": ""}, "id", {}, PLAIN)


def test_classify_keeps_document_order_and_skips_consumed() -> None:
    attrs = {"id": "main", "b": "1", "a": "2", "data-x": "y"}
    assert classify(attrs, PLAIN, consumed=["id"]) == '{ :b => "1", :a => "2", "data-x" => "y" }'
    assert classify({"id": "main"}, PLAIN, consumed=["id"]) == ""


def test_classify_renders_dynamic_values_only_in_erb_mode() -> None:
    attrs = {"href": "<html2haml-loud> url </html2haml-loud>"}
    assert classify(attrs, ERB) == "{ :href => url }"
    assert classify(attrs, PLAIN) == '{ :href => "<html2haml-loud> url </html2haml-loud>" }'
