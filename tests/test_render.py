"""Tests for odometer.render."""

from rich.text import Text

from odometer.matrix import Role, RotatingColumn, StaticColumn
from odometer.render import TextRenderer, column_hints


def test_column_hints():
    assert column_hints(RotatingColumn(("1", "2"), role=Role.INTEGER, magnitude=2)) == ("reel", "integer", "_1e2")
    assert column_hints(StaticColumn("5", Role.DECIMAL, -1)) == ("reel", "decimal", "_1e-1")
    assert column_hints(StaticColumn(",", Role.RADIX)) == ("radix-mark",)
    assert column_hints(StaticColumn(".", Role.DECIMAL_MARK)) == ("decimal-mark",)


def _tree(renderer, *columns):
    container = renderer.create_container("reels")
    renderer.attach(None, container)
    nodes = []
    for column in columns:
        node = renderer.create_symbol_node(column, column_hints(column))
        renderer.attach(container, node)
        nodes.append(node)
    return nodes


def test_display_text_follows_offsets():
    r = TextRenderer()
    _, reel = _tree(r, StaticColumn("1"), RotatingColumn(tuple("2345")))
    assert r.display_text() == "12"
    r.set_offset(reel, 2)
    assert r.display_text() == "14"
    r.set_offset(reel, 2.6)
    assert r.display_text() == "15"


def test_currency_position():
    r = TextRenderer()
    cur = r.create_symbol_node(StaticColumn("$"), ("currency",))
    r.attach(None, cur)
    _tree(r, StaticColumn("7"))
    assert r.display_text() == "$7"
    r.set_currency_position("end")
    assert r.display_text() == "7$"


def test_remove_is_idempotent():
    r = TextRenderer()
    (node,) = _tree(r, StaticColumn("9"))
    r.remove(node)
    r.remove(node)
    assert r.display_text() == ""
    assert node.removed is True


def test_clear_detaches_everything():
    r = TextRenderer()
    nodes = _tree(r, StaticColumn("1"), StaticColumn("2"))
    r.clear()
    assert r.display_text() == ""
    assert all(n.removed for n in nodes)
    r.set_offset(nodes[0], 3)
    assert nodes[0].offset == 0


def test_show_error_replaces_content():
    r = TextRenderer()
    _tree(r, StaticColumn("1"))
    r.show_error("Unsupported radixMark: 'x'")
    assert r.display_text() == "Unsupported radixMark: 'x'"
    assert r.reel_nodes() == []


def test_set_text_relabels_marks():
    r = TextRenderer()
    _, mark, _ = _tree(r, StaticColumn("1"), StaticColumn(",", Role.RADIX), StaticColumn("0"))
    r.set_text(mark, "'")
    assert r.display_text() == "1'0"


def test_on_change_fires_on_mutation():
    calls = []
    r = TextRenderer(on_change=lambda: calls.append(1))
    (node,) = _tree(r, RotatingColumn(tuple("01")))
    before = len(calls)
    r.set_offset(node, 1)
    r.mark_exiting(node)
    assert len(calls) == before + 2


def test_render_returns_rich_text():
    r = TextRenderer()
    (node,) = _tree(r, RotatingColumn(tuple("012")))
    text = r.render()
    assert isinstance(text, Text)
    assert text.plain == "0"
    r.mark_exiting(node)
    assert r.render().plain == "0"
