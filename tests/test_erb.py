from html2haml.erb import (
    extract_tags,
    restore_tags,
    loud_line,
    placeholder_kind,
    placeholder_lines,
    silent_lines,
)


def test_loud_and_silent_tags_become_placeholders() -> None:
    text = "<% if user %><b><%= user.name -%></b><% end -%>"
    assert extract_tags(text) == (
        "<html2haml-silent> if user </html2haml-silent>"
        "<b><html2haml-loud> user.name </html2haml-loud></b>"
        "<html2haml-silent> end </html2haml-silent>"
    )


def test_placeholder_content_is_html_escaped() -> None:
    # One level for the parser to decode, one for the serializer.
    assert extract_tags("<%= a < b && c %>") == (
        "<html2haml-loud> a &amp;lt; b &amp;amp;&amp;amp; c </html2haml-loud>"
    )


def test_ampersands_outside_tags_are_escaped_once() -> None:
    assert extract_tags("fish & chips") == "fish &amp; chips"


def test_tags_inside_attribute_values_stay_attribute_text() -> None:
    assert extract_tags('<a href="<%= url_for "x" %>">x</a>') == (
        '<a href="&lt;html2haml-loud&gt; url_for &amp;quot;x&amp;quot; &lt;/html2haml-loud&gt;">x</a>'
    )
    assert extract_tags('<b class="<% if x %>on<% end %>">') == (
        '<b class="&lt;% if x %&gt;on&lt;% end %&gt;">'
    )


def test_tags_may_span_lines() -> None:
    assert extract_tags("<%= link_to(\n  name) %>") == "<html2haml-loud> link_to(\n  name) </html2haml-loud>"


def test_unmatched_tags_are_left_alone() -> None:
    assert extract_tags("<p><%= oops</p>") == "<p><%= oops</p>"


def test_placeholder_kind() -> None:
    assert placeholder_kind("html2haml-loud") == "loud"
    assert placeholder_kind("html2haml-silent") == "silent"
    assert placeholder_kind("html2haml-other") is None
    assert placeholder_kind("div") is None


def test_script_lines() -> None:
    assert loud_line(" foo(\n    bar) ", 1) == "  = foo( bar)\n"
    assert silent_lines(" if a\n   b ", 2) == "    - if a\n    - b\n"
    assert placeholder_lines("loud", " a &amp;&amp; b ", 0) == "= a && b\n"


def test_restore_tags_rebuilds_erb_source() -> None:
    text = "var x = <html2haml-loud> a &lt; b </html2haml-loud>; <html2haml-silent> end </html2haml-silent>"
    assert restore_tags(text) == "var x = <%= a < b %>; <% end %>"
