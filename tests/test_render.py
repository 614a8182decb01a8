import re

import pytest
from markupsafe import Markup

from domgen.dom_model import Leaf, Rendered, Sequence
from domgen.errors import StructuralNestingError, StructuralTypeError, StructureError
from domgen.join import RenderMode, set_mode
from domgen.render import Renderer, render, render_leaf, render_tree, render_void


@pytest.fixture(autouse=True)
def restore_mode():
    yield
    set_mode(RenderMode.COMPACT)


def _strip_entities(markup: str) -> str:
    return re.sub(r"&(amp|lt|gt|#34|#39);", "", markup)


@pytest.mark.parametrize("text", ["plain text", "", "unicode ことば", "tab\tand\nnewline"])
def test_plain_text_renders_unchanged(text: str):
    rendered = render_leaf(text)

    assert rendered.markup == text
    assert rendered.mounted == ""


@pytest.mark.parametrize(
    "text",
    ['a & <b> "c"', "<script>alert(1)</script>", "&amp; already", "x > y < z"],
)
def test_special_characters_never_leak(text: str):
    markup = _strip_entities(render_leaf(text).markup)

    for char in "&<>\"":
        assert char not in markup


def test_leaf_escaping():
    assert render_leaf('a & <b> "c"').markup == "a &amp; &lt;b&gt; &#34;c&#34;"


def test_pre_escaped_leaf_is_verbatim():
    assert render_leaf(Markup("<b>x</b>")).markup == "<b>x</b>"
    assert render(Leaf("<b>", pre_escaped=True)).markup == "<b>"
    assert render(Leaf("<b>")).markup == "&lt;b&gt;"


def test_leaf_with_tag_and_attributes():
    rendered = render_leaf("hi", "p", class_="note", data_id=3, hidden=None)
    assert rendered.markup == '<p class="note" data-id="3">hi</p>'


def test_leaf_converts_ansi_after_escaping():
    rendered = render_leaf("\x1b[31mred\x1b[0m <b>", "pre")
    assert rendered.markup == '<pre><span class="red">red</span> &lt;b&gt;</pre>'


def test_leaf_without_tag_keeps_ansi_codes():
    assert render_leaf("\x1b[31mx").markup == "\x1b[31mx"


@pytest.mark.parametrize("tag", ["script", "style"])
def test_code_tags_are_not_escaped(tag: str):
    assert render_leaf("a < b && c", tag).markup == f"<{tag}>a < b && c</{tag}>"


def test_leaf_transform():
    assert render_leaf("hi", "b", transform=str.upper).markup == "<b>HI</b>"


def test_void_elements():
    assert render_void("br").markup == "<br />"
    assert (
        render_void("input", type="checkbox", checked=True).markup
        == '<input type="checkbox" checked="" />'
    )


def test_compact_tree():
    assert render_tree(["a", "b"], "p").markup == "<p>ab</p>"


def test_tree_without_tags_flattens():
    assert render_tree(["a", ["b", ("c", ["d"])]]).markup == "abcd"


def test_tree_escapes_children():
    assert render_tree(["<x>"], "p").markup == "<p>&lt;x&gt;</p>"
    assert render_tree(["a > b {}"], "style").markup == "<style>a > b {}</style>"


def test_none_children_render_empty():
    assert render_tree(["a", None, "b"], "p").markup == "<p>ab</p>"


def test_tag_path_is_innermost_first():
    rendered = render_tree(["x", "y"], "li", "ul", class_="menu")
    assert rendered.markup == '<ul class="menu"><li>x</li><li>y</li></ul>'


def test_inner_lists_become_one_element_each():
    assert render_tree([["x", "y"], ["z"]], "li", "ul").markup == "<ul><li>xy</li><li>z</li></ul>"


def test_three_level_path():
    rendered = render_tree([["a", "b"], ["c"]], "td", "tr", "table")
    assert rendered.markup == "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>"


def test_none_under_a_tag_is_a_void_element():
    assert render_tree(["a", None], "td", "tr").markup == "<tr><td>a</td><td /></tr>"


def test_transform_reaches_the_leaves():
    rendered = render_tree(["a", "b"], "li", "ul", transform=str.upper)
    assert rendered.markup == "<ul><li>A</li><li>B</li></ul>"

    assert render_tree(["a", "b"], "p", transform=lambda s: s * 2).markup == "<p>aabb</p>"


def test_transform_maps_nested_leaves_and_skips_none():
    assert render_tree([["a", "b"], "c"], "p", transform=str.upper).markup == "<p>ABC</p>"
    assert render_tree(["a", None], "p", transform=str.upper).markup == "<p>A</p>"
    assert render_tree([["a", None], ["b"]], "td", "tr", transform=str.upper).markup == (
        "<tr><td>A</td><td>B</td></tr>"
    )
    assert render_tree(["a", None], "td", "tr", transform=str.upper).markup == (
        "<tr><td>A</td><td /></tr>"
    )


def test_none_leaf_with_a_tag_matches_the_tree_path():
    assert render_leaf(None, "td").markup == "<td />"
    assert render_tree([None], "td", "tr").markup == "<tr><td /></tr>"
    assert render_leaf(None, "td", class_="gap", mounted="m").document == '<td class="gap" />m'
    assert render_leaf(None).markup == ""


def test_transform_may_return_rendered_markup():
    rendered = render_tree(["a"], "p", transform=lambda s: render_leaf(s, "b"))
    assert rendered.markup == "<p><b>a</b></p>"


def test_rendered_children_are_not_escaped_again():
    rendered = render_tree([render_leaf("x", "b"), "&"], "p")
    assert rendered.markup == "<p><b>x</b>&amp;</p>"


def test_scalar_element_is_a_type_error():
    with pytest.raises(StructuralTypeError) as exc_info:
        render_tree(["a", 5], "p")

    assert exc_info.value.value == 5
    assert "int:5" in str(exc_info.value)
    assert isinstance(exc_info.value, TypeError)
    assert isinstance(exc_info.value, StructureError)


@pytest.mark.parametrize("value", [True, 1.5, b"bytes", {"a": 1}])
def test_other_scalars_are_rejected(value):
    with pytest.raises(StructuralTypeError):
        render_tree(["a", value], "li", "ul")


def test_non_list_sibling_is_a_nesting_error():
    with pytest.raises(StructuralNestingError) as exc_info:
        render_tree([["x", "y"], "z"], "li", "ul", "div")

    assert exc_info.value.tag == "li"
    assert exc_info.value.value == "z"
    assert "`li'" in str(exc_info.value)


def test_errors_deep_in_the_tree_abort_the_render():
    with pytest.raises(StructuralTypeError):
        render_tree([["x", 3]], "li", "ul", "div")


def test_explicit_renderer_modes():
    assert Renderer(mode="nested").tree(["a", "b"], "p").markup == "<p>\n  a\n  b\n</p>"
    assert Renderer(RenderMode.NESTED).tree(["x", "y"], "li", "ul").markup == (
        "<ul>\n  <li>x</li>\n  <li>y</li>\n</ul>"
    )
    assert Renderer("pre").tree(["a"], "p").markup == "<p><!--\n  -->a<!--\n--></p>"


def test_default_renderer_follows_global_mode():
    set_mode("pre")

    assert render_tree(["a"], "p").markup == "<p><!--\n  -->a<!--\n--></p>"
    assert Renderer("compact").tree(["a"], "p").markup == "<p>a</p>"
    assert Renderer().active_mode is RenderMode.PRE


def test_render_sequence_node():
    node = Sequence(("a", "b"), ("li", "ul"), {"id": "m"}, "<script>x()</script>")
    rendered = render(node)

    assert rendered.markup == '<ul id="m"><li>a</li><li>b</li></ul>'
    assert rendered.mounted == "<script>x()</script>"


def test_sequence_nodes_nest_inside_lists():
    rendered = render_tree([Sequence(("x",), ("b",)), "y"], "p")
    assert rendered.markup == "<p><b>x</b>y</p>"


def test_render_plain_data():
    assert render(["a", ["<b>"]]).markup == "a&lt;b&gt;"
    assert render(None).markup == ""
    with pytest.raises(StructuralTypeError):
        render(42)


def test_rendered_value_protocols():
    rendered = Rendered("<b>x</b>", "<script></script>")

    assert str(rendered) == "<b>x</b>"
    assert rendered.__html__() == "<b>x</b>"
    assert rendered.document == "<b>x</b><script></script>"
    assert render(rendered) is rendered
