import pytest

from dwmkit.status import (
    TERM_COLORS,
    Command,
    TextRun,
    click_status_signal,
    parse_status2d,
    status2d_width,
    strip_control_chars,
)


def test_strip_control_chars():
    assert strip_control_chars("a\x01b\x1fc") == "abc"
    assert strip_control_chars("caf\u00e9") == "caf\u00e9"


def test_parse_plain_text():
    assert parse_status2d("hello") == [TextRun("hello")]


def test_parse_color_command():
    assert parse_status2d("hi^c#ff0000^there") == [
        TextRun("hi"),
        Command("c", ("#ff0000",)),
        TextRun("there"),
    ]


def test_parse_truncated_color_stops_everything():
    assert parse_status2d("a^c#ff^b") == [TextRun("a")]


def test_parse_rectangle_clamps_origin():
    assert parse_status2d("^r-1,2,3,4^") == [Command("r", (0, 2, 3, 4))]


def test_parse_simple_commands_and_forward():
    items = parse_status2d("^d^x^w^^v^^t^^f10^y")
    assert items == [
        Command("d"),
        TextRun("x"),
        Command("w"),
        Command("v"),
        Command("t"),
        Command("f", (10,)),
        TextRun("y"),
    ]


def test_parse_terminal_color_index():
    (cmd,) = parse_status2d("^C3^")
    assert cmd == Command("C", (3,))
    assert 0 <= cmd.args[0] < len(TERM_COLORS)


def test_parse_ignores_control_chars():
    assert parse_status2d("\x01ab\x02cd") == parse_status2d("abcd")


def test_parse_malformed_rectangle_raises():
    with pytest.raises(ValueError):
        parse_status2d("^r1,2^")


def test_width_skips_commands():
    assert status2d_width("ab^c#000000^cd", len) == len("abcd")


def test_width_adds_forward_moves():
    assert status2d_width("^f10^", len) == 10
    assert status2d_width("ab^f10^cd", len) == len("abcd") + 10


def test_width_ignores_unterminated_code():
    assert status2d_width("ab^c", len) == len("ab")


def test_click_picks_block_under_pointer():
    text = "\x01aa\x02bbb"
    assert click_status_signal(text, 1, len) == ord("\x01")
    assert click_status_signal(text, 5, len) == ord("\x02")


def test_click_without_blocks_is_zero():
    assert click_status_signal("plain", 2, len) == 0