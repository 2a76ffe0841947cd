import pytest

from dwmkit.flextile import (
    LayoutAxis,
    SplitLayout,
    deck_symbols,
    flextile,
    inc_nstack,
    mirror_layout,
    monocle_symbols,
    rotate_layout_axis,
    set_flex_symbols,
    split,
)
from dwmkit.layout import Client, Monitor
from dwmkit.tilers import TileArrangement


def make_monitor(count, **kwargs):
    return Monitor(clients=[Client(name=str(i)) for i in range(count)], **kwargs)


@pytest.mark.parametrize("value, symbol", [(1, "|"), (0, " ")])
def test_split_layout_symbol(value, symbol):
    assert SplitLayout(value).symbol == symbol


def test_monocle_symbols():
    m = make_monitor(0)
    monocle_symbols(m, 3)
    assert m.ltsymbol == "[3]"
    monocle_symbols(m, 0)
    assert m.ltsymbol == "[M]"


def test_deck_symbols():
    m = make_monitor(0, nmaster=1)
    deck_symbols(m, 4)
    assert m.ltsymbol == "[]4"
    deck_symbols(m, 1)
    assert m.ltsymbol == "[D]"


def test_default_flex_symbols():
    m = make_monitor(3)
    set_flex_symbols(m, 0)
    assert m.ltsymbol == "=|="


def test_mirrored_flex_symbols_swap_sides():
    m = make_monitor(3, ltaxis=[-1, 0, 1, 0])
    set_flex_symbols(m, 3)
    assert m.ltsymbol == "||="


def test_master_monocle_uses_monocle_symbols():
    m = make_monitor(3, ltaxis=[0, int(TileArrangement.MONOCLE), 0, 0])
    set_flex_symbols(m, 0)
    assert m.ltsymbol == "[3]"


def test_stack_monocle_uses_deck_symbols():
    m = make_monitor(3, ltaxis=[1, 0, int(TileArrangement.MONOCLE), 0])
    set_flex_symbols(m, 3)
    assert m.ltsymbol == "[]3"


def test_vertical_split_places_master_left_of_stack():
    m = make_monitor(2)
    flextile(m)
    master, stack = m.clients
    assert master.x == m.wx
    assert master.x + master.outer_width() <= stack.x
    assert stack.x + stack.outer_width() <= m.wx + m.ww
    assert master.h == m.wh
    assert stack.h == m.wh


def test_mirror_layout_moves_stack_to_the_left():
    m = make_monitor(2)
    mirror_layout(m)
    master, stack = m.clients
    assert m.ltaxis[LayoutAxis.LAYOUT] == -1
    assert stack.x == m.wx
    assert stack.x + stack.outer_width() <= master.x


def test_flextile_without_clients_only_sets_symbol():
    m = make_monitor(0)
    flextile(m)
    assert m.ltsymbol == "=|="
    assert m.clients == []


@pytest.mark.parametrize("layout", list(SplitLayout))
@pytest.mark.parametrize("mirror", [1, -1])
def test_every_split_keeps_clients_inside_area(layout, mirror):
    m = make_monitor(5)
    m.ltaxis = [int(layout) * mirror, 0, 0, 0]
    split(layout, m, m.wx, m.wy, m.wh, m.ww, 0, 0, 5)
    for c in m.clients:
        assert m.wx <= c.x
        assert c.x + c.outer_width() <= m.wx + m.ww
        assert m.wy <= c.y
        assert c.y + c.outer_height() <= m.wy + m.wh


def test_split_rejects_unknown_layout():
    m = make_monitor(1)
    with pytest.raises(ValueError):
        split(99, m, 0, 0, 100, 100, 0, 0, 1)


def test_rotate_layout_axis_wraps_forward_and_back():
    m = make_monitor(2)
    m.ltaxis[LayoutAxis.LAYOUT] = len(SplitLayout) - 1
    rotate_layout_axis(m, 1)
    assert m.ltaxis[LayoutAxis.LAYOUT] == 0
    rotate_layout_axis(m, -1)
    assert m.ltaxis[LayoutAxis.LAYOUT] == len(SplitLayout) - 1


def test_rotate_mirrored_layout_axis_wraps_to_zero():
    m = make_monitor(2)
    m.ltaxis[LayoutAxis.LAYOUT] = -(len(SplitLayout) - 1)
    rotate_layout_axis(m, 1)
    assert m.ltaxis[LayoutAxis.LAYOUT] == 0


def test_rotate_master_axis_wraps():
    m = make_monitor(2)
    m.ltaxis[LayoutAxis.MASTER] = int(TileArrangement.TATAMI)
    rotate_layout_axis(m, 2)
    assert m.ltaxis[LayoutAxis.MASTER] == int(TileArrangement.TOP_TO_BOTTOM)
    rotate_layout_axis(m, -2)
    assert m.ltaxis[LayoutAxis.MASTER] == int(TileArrangement.TATAMI)


def test_rotate_rejects_unknown_axis():
    m = make_monitor(1)
    with pytest.raises(ValueError):
        rotate_layout_axis(m, 0)


def test_inc_nstack_never_negative():
    m = make_monitor(3)
    assert inc_nstack(m, -1) == 0
    assert inc_nstack(m, 2) == 2
    assert m.nstack == 2