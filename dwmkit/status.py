"""Status text with inline drawing commands and clickable block signals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

TERM_COLORS = (
    "#000000", "#ff0000", "#33ff00", "#ff0099",
    "#0066ff", "#cc00ff", "#00ffff", "#d0d0d0",
    "#808080", "#ff0000", "#33ff00", "#ff0099",
    "#0066ff", "#cc00ff", "#00ffff", "#ffffff",
)

TextWidth = Callable[[str], int]


@dataclass(frozen=True)
class TextRun:
    """Plain text to draw."""

    text: str


@dataclass(frozen=True)
class Command:
    """A drawing command from a ``^...^`` block.

    Kinds: ``c``/``b`` set foreground/background to a colour string,
    ``C``/``B`` to a terminal colour index, ``d`` resets colours, ``w`` swaps
    them, ``v`` saves and ``t`` restores them, ``r`` draws a rectangle
    ``(x, y, w, h)`` and ``f`` moves forward by a number of pixels.
    """

    kind: str
    args: tuple = ()


StatusItem = Union[TextRun, Command]


def strip_control_chars(text: str) -> str:
    """Remove characters below the space character."""
    return "".join(ch for ch in text if ord(ch) >= 0x20)


def _atoi(text: str, pos: int) -> int:
    """Parse a leading integer like C's atoi, returning 0 when there is none."""
    end = len(text)
    while pos < end and text[pos] in " \t\n\v\f\r":
        pos += 1
    start = pos
    if pos < end and text[pos] in "+-":
        pos += 1
    digits = pos
    while pos < end and text[pos].isdigit() and text[pos].isascii():
        pos += 1
    if pos == digits:
        return 0
    return int(text[start:pos])


def _next_comma(text: str, pos: int) -> int:
    found = text.find(",", pos + 1)
    if found < 0:
        raise ValueError("malformed rectangle command")
    return found


def parse_status2d(text: str) -> list[StatusItem]:
    """Split status text into text runs and drawing commands."""
    text = strip_control_chars(text)
    length = len(text)
    items: list[StatusItem] = []
    pos = 0
    while pos < length:
        start = text.find("^", pos)
        if start < 0:
            items.append(TextRun(text[pos:]))
            break
        if start > pos:
            items.append(TextRun(text[pos:start]))

        i = start + 1
        while i < length and text[i] != "^":
            ch = text[i]
            if ch in "cb":
                if i + 7 >= length:
                    return items
                items.append(Command(ch, (text[i + 1:i + 8],)))
                i += 7
            elif ch in "CB":
                i += 1
                items.append(Command(ch, (_atoi(text, i) % 16,)))
            elif ch in "dwvt":
                items.append(Command(ch))
            elif ch == "r":
                i += 1
                rx = _atoi(text, i)
                i = _next_comma(text, i) + 1
                ry = _atoi(text, i)
                i = _next_comma(text, i) + 1
                rw = _atoi(text, i)
                i = _next_comma(text, i) + 1
                rh = _atoi(text, i)
                items.append(Command("r", (max(rx, 0), max(ry, 0), rw, rh)))
            elif ch == "f":
                i += 1
                items.append(Command("f", (_atoi(text, i),)))
            i += 1
        if i >= length:
            break
        pos = i + 1
    return items


def _measure(text_width: TextWidth, text: str) -> int:
    return text_width(text) if text else 0


def status2d_width(text: str, text_width: TextWidth) -> int:
    """Width of status text, counting text runs and forward moves only."""
    text = strip_control_chars(text)
    length = len(text)
    width = 0
    seg = 0
    in_code = False
    i = 0
    while i < length:
        if text[i] == "^":
            if not in_code:
                in_code = True
                width += _measure(text_width, text[seg:i])
                i += 1
                if i < length and text[i] == "f":
                    i += 1
                    width += _atoi(text, i)
            else:
                in_code = False
                seg = i + 1
        i += 1
    if not in_code:
        width += _measure(text_width, text[seg:])
    return width


def click_status_signal(text: str, rel_x: int, text_width: TextWidth) -> int:
    """Return the block signal under ``rel_x``, or 0 when there is none.

    Blocks are introduced by a control character whose code is the signal.
    """
    signal = -1
    x = 0
    seg = 0
    for i, ch in enumerate(text):
        if ord(ch) < 0x20:
            x += status2d_width(text[seg:i], text_width)
            seg = i + 1
            if x >= rel_x and signal != -1:
                break
            signal = ord(ch)
    return max(signal, 0)