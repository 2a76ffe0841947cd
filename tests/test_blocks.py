import pytest

from dwmkit.blocks import (
    CMDLENGTH,
    DEFAULT_BLOCKS,
    Block,
    StatusBar,
    compose_status,
    main,
    trim_output,
)


def test_shell_command_wraps_in_echo():
    assert Block("date", 1, 2).shell_command() == 'echo "$(date)"'


def test_default_blocks_from_config():
    assert len(DEFAULT_BLOCKS) == 17
    assert DEFAULT_BLOCKS[1].command.endswith("d_memory")
    assert (DEFAULT_BLOCKS[1].interval, DEFAULT_BLOCKS[1].signal) == (5, 20)


def test_trim_output_first_line_only():
    assert trim_output(b"hello world\nsecond\n") == "hello world"


def test_trim_output_strips_trailing_spaces():
    assert trim_output(b"abc   \n") == "abc"


def test_trim_output_limits_characters():
    assert trim_output(b"a" * 100 + b"\n", CMDLENGTH) == "a" * CMDLENGTH


def test_trim_output_counts_utf8_characters():
    text = "\u00e9" * 70 + "\n"
    assert trim_output(text.encode(), 60) == "\u00e9" * 60


def test_trim_output_empty():
    assert trim_output(b"") == ""


def test_compose_status_skips_empty_outputs():
    assert compose_status(["a", "", "b"], " ", False) == "a b"
    assert compose_status(["", "a"], " ", False) == "a"


def test_compose_status_leading_delimiter():
    assert compose_status(["a", "", "b"], "|", True) == "|a|b"


def _bar(blocks, out=None):
    return StatusBar(blocks, writer=(out.append if out is not None else lambda s: None))


def test_due_blocks_zero_runs_all():
    bar = _bar([Block("a", 0), Block("b", 5), Block("c", 20)])
    assert bar.due_blocks(0) == [0, 1, 2]


def test_due_blocks_by_interval():
    bar = _bar([Block("a", 0), Block("b", 5), Block("c", 20)])
    assert bar.due_blocks(20) == [1, 2]
    assert bar.due_blocks(3) == []


def test_timer_stays_in_range_and_reaches_every_interval():
    bar = _bar([Block("a", 10), Block("b", 15), Block("c", 0)])
    assert bar.advance_timer() == [0, 1, 2]
    seen = set()
    for _ in range(12):
        seen.update(bar.advance_timer())
        assert 1 <= bar.timer <= bar.max_interval
    assert {0, 1} <= seen
    assert 2 not in seen


def test_timer_without_intervals():
    bar = _bar([Block("a", 0)])
    assert bar.timer_tick == 0
    assert bar.advance_timer() == [0]
    assert bar.due_blocks(bar.timer) == []


def test_update_prefixes_signal_when_clickable():
    bar = _bar([Block("x", 0, 5)])
    assert bar.update(0, b"hi\n") == "\x05hi"
    assert bar.outputs == ["\x05hi"]


def test_update_no_prefix_for_short_output_or_no_signal():
    bar = _bar([Block("x", 0, 5), Block("y", 0, 0)])
    assert bar.update(0, b"\n") == ""
    assert bar.update(1, b"hi\n") == "hi"


def test_update_not_clickable():
    bar = StatusBar([Block("x", 0, 5)], writer=lambda s: None, clickable=False)
    assert bar.update(0, b"hi\n") == "hi"


def test_refresh_writes_only_on_change():
    out = []
    bar = _bar([Block("a"), Block("b")], out)
    bar.update(0, b"one\n")
    bar.update(1, b"two\n")
    assert bar.refresh() is True
    assert bar.refresh() is False
    assert out == ["one two"]
    assert bar.status() == "one two"


def test_main_without_display_fails(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    assert main(["-d"]) == 1
    assert "Failed to open display" in capsys.readouterr().err


@pytest.mark.parametrize("data", [b"x" * 500, "\u20ac".encode() * 200])
def test_trim_output_never_exceeds_limit(data):
    assert len(trim_output(data, 10)) <= 10