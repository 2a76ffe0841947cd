import pytest

from dwmkit.layout import Client
from dwmkit.tags import (
    PREVSEL,
    inc,
    reorganize_tags,
    shift_tags,
    stack_position,
    swap_tags,
    tag_icon,
)


def visible(_client):
    return True


def test_shift_round_trip_restores_tagset():
    for t in range(9):
        assert shift_tags(shift_tags(1 << t, 3, 0, 9), -3, 0, 9) == 1 << t


def test_shift_wraps_last_tag_to_first():
    assert shift_tags(1 << 8, 1, 0, 9) == 1


def test_shift_preserves_number_of_tags():
    tagset = (1 << 2) | (1 << 7)
    result = shift_tags(tagset, 4, 0, 9)
    assert bin(result).count("1") == bin(tagset).count("1")
    assert result < 1 << 9


def test_shift_skips_to_occupied_tag():
    assert shift_tags(1, 1, 1 << 5, 9) == 1 << 5


def test_shift_unreachable_occupied_raises():
    with pytest.raises(ValueError):
        shift_tags(1, 3, 1 << 1, 9)


def test_swap_tags_exchanges_clients():
    a, b, c = Client(tags=1), Client(tags=1 << 4), Client(tags=1 << 2)
    result = swap_tags([a, b, c], 1, 1 << 4, 0x1FF)
    assert result == 1 << 4
    assert a.tags == 1 << 4
    assert b.tags == 1
    assert c.tags == 1 << 2


def test_swap_tags_ignores_multi_tag_view():
    a = Client(tags=1)
    assert swap_tags([a], 0b11, 1 << 4, 0x1FF) is None
    assert a.tags == 1


def test_swap_tags_same_tag_does_nothing():
    a = Client(tags=1 << 3)
    assert swap_tags([a], 1 << 3, 1 << 3, 0x1FF) is None
    assert a.tags == 1 << 3


def test_reorganize_compacts_tags_in_order():
    clients = [
        Client(tags=1 << 3),
        Client(tags=1 << 7),
        Client(tags=1 << 3),
        Client(tags=(1 << 7) | (1 << 8)),
    ]
    mapping = reorganize_tags(clients, 9)
    assert set(mapping) == {3, 7}
    assert {c.tags for c in clients} == {1 << k for k in range(2)}
    assert clients[0].tags < clients[1].tags
    assert clients[0].tags == clients[2].tags
    assert clients[3].tags == clients[1].tags


def test_tag_icon_wraps_for_later_monitors():
    icons = [str(i) for i in range(9)]
    assert tag_icon(icons, 1, 2, 9) == icons[2]
    assert tag_icon(icons, 0, 4, 9) == icons[4]


def test_stack_position_relative_moves():
    clients = [Client(name=n) for n in "abcd"]
    a, b, c, d = clients
    assert stack_position(clients, clients, b, inc(1), visible) == clients.index(c)
    assert stack_position(clients, clients, b, inc(-2), visible) == clients.index(d)


def test_stack_position_skips_invisible():
    clients = [Client(name=n) for n in "abcd"]
    a, b, c, d = clients
    shown = [b, c, d]
    result = stack_position(clients, clients, b, inc(-1), lambda cl: cl is not a)
    assert result == shown.index(d)


def test_stack_position_previous_selection():
    clients = [Client(name=n) for n in "abcd"]
    a, b, c, d = clients
    assert stack_position(clients, [b, c, a, d], b, PREVSEL, visible) == clients.index(c)
    assert stack_position([b], [b], b, PREVSEL, visible) is None


def test_stack_position_absolute_and_from_end():
    clients = [Client(name=n) for n in "abcd"]
    assert stack_position(clients, clients, clients[0], -1, visible) == len(clients) - 1
    assert stack_position(clients, clients, clients[0], -10, visible) == 0
    assert stack_position(clients, clients, clients[0], 2, visible) == 2


def test_stack_position_empty_list():
    assert stack_position([], [], None, inc(1), visible) is None