"""Flexible tiling: split layouts that divide the screen into master and stack areas."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

from dwmkit.layout import Monitor, get_gaps
from dwmkit.tilers import TileArrangement, arrange_tiles

_LTSYMBOL_MAX = 15


class LayoutAxis(IntEnum):
    """Positions in a monitor's ``ltaxis`` list."""

    LAYOUT = 0
    MASTER = 1
    STACK = 2
    STACK2 = 3


class SplitLayout(IntEnum):
    """How the monitor area is split between master and stack areas."""

    NO_SPLIT = 0
    SPLIT_VERTICAL = 1
    SPLIT_HORIZONTAL = 2
    SPLIT_CENTERED_VERTICAL = 3
    SPLIT_CENTERED_HORIZONTAL = 4
    SPLIT_VERTICAL_DUAL_STACK = 5
    SPLIT_HORIZONTAL_DUAL_STACK = 6
    FLOATING_MASTER = 7
    SPLIT_VERTICAL_FIXED = 8
    SPLIT_HORIZONTAL_FIXED = 9
    SPLIT_CENTERED_VERTICAL_FIXED = 10
    SPLIT_CENTERED_HORIZONTAL_FIXED = 11
    SPLIT_VERTICAL_DUAL_STACK_FIXED = 12
    SPLIT_HORIZONTAL_DUAL_STACK_FIXED = 13
    FLOATING_MASTER_FIXED = 14

    @property
    def symbol(self) -> str:
        """Single character used in the middle of the layout symbol."""
        return " |=^~:;+|=^~:;+"[self.value]


LAYOUT_LAST = len(SplitLayout)
AXIS_LAST = len(TileArrangement)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _arrange(m: Monitor, axis: LayoutAxis, x, y, h, w, ih, iv, n, an, ai) -> None:
    arrange_tiles(m.ltaxis[axis], m, x, y, h, w, ih, iv, n, an, ai)


def _stack_count(m: Monitor, n: int) -> int:
    if m.nstack:
        return m.nstack
    rest = n - m.nmaster
    return rest // 2 + (1 if rest % 2 > 0 else 0)


def _mirrored(m: Monitor) -> bool:
    return m.ltaxis[LayoutAxis.LAYOUT] < 0


def _no_split(m, x, y, h, w, ih, iv, n):
    axis = LayoutAxis.MASTER if m.nmaster >= n else LayoutAxis.STACK
    _arrange(m, axis, x, y, h, w, ih, iv, n, n, 0)


def _split_vertical(m, x, y, h, w, ih, iv, n):
    if m.nmaster and n > m.nmaster:
        _split_vertical_fixed(m, x, y, h, w, ih, iv, n)
    else:
        _no_split(m, x, y, h, w, ih, iv, n)


def _split_vertical_fixed(m, x, y, h, w, ih, iv, n):
    sw = int((w - iv) * (1 - m.mfact))
    w = int((w - iv) * m.mfact)
    if _mirrored(m):
        sx = x
        x += sw + iv
    else:
        sx = x + w + iv
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, sx, y, h, sw, ih, iv, n, n - m.nmaster, m.nmaster)


def _split_vertical_dual_stack(m, x, y, h, w, ih, iv, n):
    if not m.nmaster or n <= m.nmaster:
        _no_split(m, x, y, h, w, ih, iv, n)
    elif n <= m.nmaster + (m.nstack or 1):
        _split_vertical(m, x, y, h, w, ih, iv, n)
    else:
        _split_vertical_dual_stack_fixed(m, x, y, h, w, ih, iv, n)


def _split_vertical_dual_stack_fixed(m, x, y, h, w, ih, iv, n):
    sc = _stack_count(m, n)
    sw = int((w - iv) * (1 - m.mfact))
    sh = _cdiv(h - ih, 2)
    w = int((w - iv) * m.mfact)
    oy = y + sh + ih
    if _mirrored(m):
        sx = x
        x += sw + iv
    else:
        sx = x + w + iv
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, sx, y, sh, sw, ih, iv, n, sc, m.nmaster)
    _arrange(m, LayoutAxis.STACK2, sx, oy, sh, sw, ih, iv, n,
             n - m.nmaster - sc, m.nmaster + sc)


def _split_horizontal(m, x, y, h, w, ih, iv, n):
    if m.nmaster and n > m.nmaster:
        _split_horizontal_fixed(m, x, y, h, w, ih, iv, n)
    else:
        _no_split(m, x, y, h, w, ih, iv, n)


def _split_horizontal_fixed(m, x, y, h, w, ih, iv, n):
    sh = int((h - ih) * (1 - m.mfact))
    h = int((h - ih) * m.mfact)
    if _mirrored(m):
        sy = y
        y += sh + ih
    else:
        sy = y + h + ih
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, x, sy, sh, w, ih, iv, n, n - m.nmaster, m.nmaster)


def _split_horizontal_dual_stack(m, x, y, h, w, ih, iv, n):
    if not m.nmaster or n <= m.nmaster:
        _no_split(m, x, y, h, w, ih, iv, n)
    elif n <= m.nmaster + (m.nstack or 1):
        _split_horizontal(m, x, y, h, w, ih, iv, n)
    else:
        _split_horizontal_dual_stack_fixed(m, x, y, h, w, ih, iv, n)


def _split_horizontal_dual_stack_fixed(m, x, y, h, w, ih, iv, n):
    sc = _stack_count(m, n)
    sh = int((h - ih) * (1 - m.mfact))
    h = int((h - ih) * m.mfact)
    sw = _cdiv(w - iv, 2)
    ox = x + sw + iv
    if _mirrored(m):
        sy = y
        y += sh + ih
    else:
        sy = y + h + ih
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, x, sy, sh, sw, ih, iv, n, sc, m.nmaster)
    _arrange(m, LayoutAxis.STACK2, ox, sy, sh, sw, ih, iv, n,
             n - m.nmaster - sc, m.nmaster + sc)


def _split_centered_vertical(m, x, y, h, w, ih, iv, n):
    if not m.nmaster or n <= m.nmaster:
        _no_split(m, x, y, h, w, ih, iv, n)
    elif n <= m.nmaster + (m.nstack or 1):
        _split_vertical(m, x, y, h, w, ih, iv, n)
    else:
        _split_centered_vertical_fixed(m, x, y, h, w, ih, iv, n)


def _split_centered_vertical_fixed(m, x, y, h, w, ih, iv, n):
    sc = _stack_count(m, n)
    sw = int((w - 2 * iv) * (1 - m.mfact) / 2)
    w = int((w - 2 * iv) * m.mfact)
    if _mirrored(m):
        sx = x
        x += sw + iv
        ox = x + w + iv
    else:
        ox = x
        x += sw + iv
        sx = x + w + iv
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, sx, y, h, sw, ih, iv, n, sc, m.nmaster)
    _arrange(m, LayoutAxis.STACK2, ox, y, h, sw, ih, iv, n,
             n - m.nmaster - sc, m.nmaster + sc)


def _split_centered_horizontal(m, x, y, h, w, ih, iv, n):
    if not m.nmaster or n <= m.nmaster:
        _no_split(m, x, y, h, w, ih, iv, n)
    elif n <= m.nmaster + (m.nstack or 1):
        _split_horizontal(m, x, y, h, w, ih, iv, n)
    else:
        _split_centered_horizontal_fixed(m, x, y, h, w, ih, iv, n)


def _split_centered_horizontal_fixed(m, x, y, h, w, ih, iv, n):
    sc = _stack_count(m, n)
    sh = int((h - 2 * ih) * (1 - m.mfact) / 2)
    h = int((h - 2 * ih) * m.mfact)
    if _mirrored(m):
        sy = y
        y += sh + ih
        oy = y + h + ih
    else:
        oy = y
        y += sh + ih
        sy = y + h + ih
    _arrange(m, LayoutAxis.MASTER, x, y, h, w, ih, iv, n, m.nmaster, 0)
    _arrange(m, LayoutAxis.STACK, x, sy, sh, w, ih, iv, n, sc, m.nmaster)
    _arrange(m, LayoutAxis.STACK2, x, oy, sh, w, ih, iv, n,
             n - m.nmaster - sc, m.nmaster + sc)


def _floating_master(m, x, y, h, w, ih, iv, n):
    if not m.nmaster or n <= m.nmaster:
        _no_split(m, x, y, h, w, ih, iv, n)
    else:
        _floating_master_fixed(m, x, y, h, w, ih, iv, n)


def _floating_master_fixed(m, x, y, h, w, ih, iv, n):
    # The stack is drawn first so the master ends up on top of it.
    _arrange(m, LayoutAxis.STACK, x, y, h, w, ih, iv, n, n - m.nmaster, m.nmaster)
    if w > h:
        mw = int(w * m.mfact)
        mh = int(h * 0.9)
    else:
        mw = int(w * 0.9)
        mh = int(h * m.mfact)
    x += _cdiv(w - mw, 2)
    y += _cdiv(h - mh, 2)
    _arrange(m, LayoutAxis.MASTER, x, y, mh, mw, ih, iv, n, m.nmaster, 0)


_SPLITS: dict[SplitLayout, Callable[..., None]] = {
    SplitLayout.NO_SPLIT: _no_split,
    SplitLayout.SPLIT_VERTICAL: _split_vertical,
    SplitLayout.SPLIT_HORIZONTAL: _split_horizontal,
    SplitLayout.SPLIT_CENTERED_VERTICAL: _split_centered_vertical,
    SplitLayout.SPLIT_CENTERED_HORIZONTAL: _split_centered_horizontal,
    SplitLayout.SPLIT_VERTICAL_DUAL_STACK: _split_vertical_dual_stack,
    SplitLayout.SPLIT_HORIZONTAL_DUAL_STACK: _split_horizontal_dual_stack,
    SplitLayout.FLOATING_MASTER: _floating_master,
    SplitLayout.SPLIT_VERTICAL_FIXED: _split_vertical_fixed,
    SplitLayout.SPLIT_HORIZONTAL_FIXED: _split_horizontal_fixed,
    SplitLayout.SPLIT_CENTERED_VERTICAL_FIXED: _split_centered_vertical_fixed,
    SplitLayout.SPLIT_CENTERED_HORIZONTAL_FIXED: _split_centered_horizontal_fixed,
    SplitLayout.SPLIT_VERTICAL_DUAL_STACK_FIXED: _split_vertical_dual_stack_fixed,
    SplitLayout.SPLIT_HORIZONTAL_DUAL_STACK_FIXED: _split_horizontal_dual_stack_fixed,
    SplitLayout.FLOATING_MASTER_FIXED: _floating_master_fixed,
}


def split(layout, monitor, x, y, h, w, ih, iv, n):
    """Arrange ``n`` tiled clients in the given area using a split layout."""
    _SPLITS[SplitLayout(layout)](monitor, x, y, h, w, ih, iv, n)


def flextile(monitor: Monitor) -> None:
    """Refresh the layout symbol and arrange the monitor's tiled clients."""
    gaps = get_gaps(monitor)
    n = gaps.n
    oh, ov, ih, iv = gaps.oh, gaps.ov, gaps.ih, gaps.iv

    set_flex_symbols(monitor, n)
    if n == 0:
        return

    layout = abs(monitor.ltaxis[LayoutAxis.LAYOUT])
    if abs(monitor.ltaxis[LayoutAxis.MASTER]) == TileArrangement.MONOCLE and (
        layout == SplitLayout.NO_SPLIT or n <= monitor.nmaster
    ):
        oh = ov = 0

    split(layout, monitor, monitor.wx + ov, monitor.wy + oh,
          monitor.wh - 2 * oh, monitor.ww - 2 * ov, ih, iv, n)


def _set_symbol(monitor: Monitor, text: str) -> None:
    monitor.ltsymbol = text[:_LTSYMBOL_MAX]


def set_flex_symbols(monitor: Monitor, n: int) -> None:
    """Compose the three-character layout symbol from the current axes."""
    if n == 0:
        n = sum(1 for _ in monitor.tiled())

    axes = monitor.ltaxis
    layout = abs(axes[LayoutAxis.LAYOUT])
    if axes[LayoutAxis.MASTER] == TileArrangement.MONOCLE and (
        layout == SplitLayout.NO_SPLIT or not monitor.nmaster or n <= monitor.nmaster
    ):
        monocle_symbols(monitor, n)
        return

    if axes[LayoutAxis.STACK] == TileArrangement.MONOCLE and layout in (
        SplitLayout.SPLIT_VERTICAL,
        SplitLayout.SPLIT_HORIZONTAL_FIXED,
    ):
        deck_symbols(monitor, n)
        return

    master = TileArrangement(axes[LayoutAxis.MASTER]).symbol
    if layout == SplitLayout.NO_SPLIT or not monitor.nmaster:
        sym1 = sym2 = sym3 = master
    else:
        stack = TileArrangement(axes[LayoutAxis.STACK]).symbol
        sym2 = SplitLayout(layout).symbol
        if axes[LayoutAxis.LAYOUT] < 0:
            sym1, sym3 = stack, master
        else:
            sym1, sym3 = master, stack

    _set_symbol(monitor, f"{sym1}{sym2}{sym3}")


def monocle_symbols(monitor: Monitor, n: int) -> None:
    """Show the client count in monocle mode, or ``[M]`` when empty."""
    _set_symbol(monitor, f"[{n}]" if n > 0 else "[M]")


def deck_symbols(monitor: Monitor, n: int) -> None:
    """Show the deck symbol with the client count when the stack is used."""
    _set_symbol(monitor, f"[]{n}" if n > monitor.nmaster else "[D]")


def mirror_layout(monitor: Monitor) -> None:
    """Swap the sides of master and stack areas and rearrange."""
    monitor.ltaxis[LayoutAxis.LAYOUT] *= -1
    flextile(monitor)


def rotate_layout_axis(monitor: Monitor, arg: int) -> None:
    """Cycle one axis: ``abs(arg) - 1`` selects it, the sign the direction."""
    incr = 1 if arg > 0 else -1
    axis = abs(arg) - 1
    if axis not in tuple(LayoutAxis):
        raise ValueError(f"no layout axis for argument {arg}")

    axes = monitor.ltaxis
    if axis == LayoutAxis.LAYOUT:
        if axes[axis] >= 0:
            axes[axis] += incr
            if axes[axis] >= LAYOUT_LAST:
                axes[axis] = 0
            elif axes[axis] < 0:
                axes[axis] = LAYOUT_LAST - 1
        else:
            axes[axis] -= incr
            if axes[axis] <= -LAYOUT_LAST:
                axes[axis] = 0
            elif axes[axis] > 0:
                axes[axis] = -LAYOUT_LAST + 1
    else:
        axes[axis] += incr
        if axes[axis] >= AXIS_LAST:
            axes[axis] = 0
        elif axes[axis] < 0:
            axes[axis] = AXIS_LAST - 1

    flextile(monitor)
    set_flex_symbols(monitor, 0)


def inc_nstack(monitor: Monitor, delta: int) -> int:
    """Change the number of clients in the primary stack, never below zero."""
    monitor.nstack = max(monitor.nstack + delta, 0)
    flextile(monitor)
    return monitor.nstack