"""Tile arrangements that place a range of tiled clients inside an area."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

from dwmkit.layout import Client, Monitor

_UINT_MASK = 0xFFFFFFFF


class TileArrangement(IntEnum):
    """How the clients of one area are laid out."""

    TOP_TO_BOTTOM = 0
    LEFT_TO_RIGHT = 1
    MONOCLE = 2
    GAPPLESSGRID = 3
    GAPPLESSGRID_ALT1 = 4
    GAPPLESSGRID_ALT2 = 5
    GRIDMODE = 6
    HORIZGRID = 7
    DWINDLE = 8
    SPIRAL = 9
    TATAMI = 10

    @property
    def symbol(self) -> str:
        """Single character used in the layout symbol."""
        return "=|DG12#~\\@T"[self.value]


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _bar_height(monitor: Monitor) -> int:
    return getattr(monitor, "bh", 0)


def _in_range(monitor: Monitor, an: int, ai: int) -> list[tuple[int, Client]]:
    """Tiled clients whose position lies in [ai, ai + an), with their positions."""
    return [(i, c) for i, c in enumerate(list(monitor.tiled())) if ai <= i < ai + an]


def facts_for_range(monitor: Monitor, an: int, ai: int, size: int) -> tuple[int, float]:
    """Return the leftover pixels and the summed factors of a client range."""
    chosen = [c for _, c in _in_range(monitor, an, ai)]
    facts = sum(c.cfact for c in chosen)
    total = 0
    for c in chosen:
        total = int(total + size * (c.cfact / facts))
    return size - total, facts


def arrange_left_to_right(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Place clients side by side, widths split by client factors."""
    if ai + an > n:
        an = n - ai
    w -= iv * (an - 1)
    rest, facts = facts_for_range(monitor, an, ai, w)
    for i, c in _in_range(monitor, an, ai):
        extra = 1 if (i - ai) < rest else 0
        c.resize(x, y, int(w * (c.cfact / facts) + extra - 2 * c.bw), h - 2 * c.bw)
        x += c.outer_width() + iv


def arrange_top_to_bottom(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Stack clients vertically, heights split by client factors."""
    if ai + an > n:
        an = n - ai
    h -= ih * (an - 1)
    rest, facts = facts_for_range(monitor, an, ai, h)
    for i, c in _in_range(monitor, an, ai):
        extra = 1 if (i - ai) < rest else 0
        c.resize(x, y, w - 2 * c.bw, int(h * (c.cfact / facts) + extra - 2 * c.bw))
        y += c.outer_height() + ih


def arrange_monocle(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Give every client in the range the whole area."""
    for _, c in _in_range(monitor, an, ai):
        c.resize(x, y, w - 2 * c.bw, h - 2 * c.bw)


def arrange_gridmode(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Place clients in a grid, filling columns first."""
    rows = 0
    while rows <= an // 2 and rows * rows < an:
        rows += 1
    cols = rows - 1 if rows and (rows - 1) * rows >= an else rows

    ch = _cdiv(h - ih * (rows - 1), rows or 1)
    cw = _cdiv(w - iv * (cols - 1), cols or 1)
    chrest = h - ih * (rows - 1) - ch * rows
    cwrest = w - iv * (cols - 1) - cw * cols
    for i, c in _in_range(monitor, an, ai):
        cc = (i - ai) // rows
        cr = (i - ai) % rows
        cx = x + cc * (cw + iv) + min(cc, cwrest)
        cy = y + cr * (ch + ih) + min(cr, chrest)
        c.resize(
            cx,
            cy,
            cw + (1 if cc < cwrest else 0) - 2 * c.bw,
            ch + (1 if cr < chrest else 0) - 2 * c.bw,
        )


def arrange_horizgrid(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Place clients in two rows; a single client gets the whole area."""
    if an == 1:
        arrange_monocle(monitor, x, y, h, w, ih, iv, n, an, ai)
        return
    ntop = an // 2
    nbottom = an - ntop
    rh = _cdiv(h - ih, 2)
    rest = h - ih - rh * 2
    arrange_left_to_right(monitor, x, y, rh + rest, w, ih, iv, n, ntop, ai)
    arrange_left_to_right(monitor, x, y + rh + ih + rest, rh, w, ih, iv, n, nbottom, ai + ntop)


def arrange_gapplessgrid(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Place clients in a grid without gaps, extra clients go to the last columns."""
    if an <= 0:
        return
    cols = 1
    while cols <= an // 2 and cols * cols < an:
        cols += 1
    if an == 5:
        cols = 2
    rows = an // cols
    cn = rn = cc = 0

    ch = _cdiv(h - ih * (rows - 1), rows)
    rrest = (h - ih * (rows - 1)) - ch * rows
    cw = _cdiv(w - iv * (cols - 1), cols)
    crest = (w - iv * (cols - 1)) - cw * cols

    for _, c in _in_range(monitor, an, ai):
        if cc // rows + 1 > cols - an % cols:
            rows = an // cols + 1
            ch = _cdiv(h - ih * (rows - 1), rows)
            rrest = (h - ih * (rows - 1)) - ch * rows
        c.resize(
            x,
            y + rn * (ch + ih) + min(rn, rrest),
            cw + (1 if cn < crest else 0) - 2 * c.bw,
            ch + (1 if rn < rrest else 0) - 2 * c.bw,
        )
        rn += 1
        cc += 1
        if rn >= rows:
            rn = 0
            x += cw + ih + (1 if cn < crest else 0)
            cn += 1


def arrange_gapplessgrid_alt1(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Gapless grid that fills rows first."""
    cols = 1
    while cols <= an // 2 and cols * cols < an:
        cols += 1
    rows = cols - 1 if cols and (cols - 1) * cols >= an else cols
    ch = _cdiv(h - ih * (rows - 1), rows or 1)
    rest = (h - ih * (rows - 1)) - ch * rows

    for i in range(rows):
        extra = 1 if i < rest else 0
        arrange_left_to_right(
            monitor, x, y, ch + extra, w, ih, iv, n, min(cols, an - i * cols), ai + i * cols
        )
        y += ch + extra + ih


def arrange_gapplessgrid_alt2(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Gapless grid that fills columns first."""
    rows = 0
    while rows <= an // 2 and rows * rows < an:
        rows += 1
    cols = rows - 1 if rows and (rows - 1) * rows >= an else rows
    cw = _cdiv(w - iv * (cols - 1), cols or 1)
    rest = (w - iv * (cols - 1)) - cw * cols

    for i in range(cols):
        extra = 1 if i < rest else 0
        arrange_top_to_bottom(
            monitor, x, y, h, cw + extra, ih, iv, n, min(rows, an - i * rows), ai + i * rows
        )
        x += cw + extra + iv


def _arrange_fibonacci(monitor, x, y, h, w, ih, iv, n, an, ai, s):
    nx, ny, nw, nh = x, y, w, h
    hrest = wrest = 0
    r = True
    i = 0
    bh = _bar_height(monitor)

    for _, c in _in_range(monitor, an, ai):
        if r:
            if (i % 2 and _cdiv(nh - ih, 2) <= bh + 2 * c.bw) or (
                not i % 2 and _cdiv(nw - iv, 2) <= bh + 2 * c.bw
            ):
                r = False
            if r and i < an - 1:
                if i % 2:
                    nv = _cdiv(nh - ih, 2)
                    hrest = nh - 2 * nv - ih
                    nh = nv
                else:
                    nv = _cdiv(nw - iv, 2)
                    wrest = nw - 2 * nv - iv
                    nw = nv
                if i % 4 == 2 and not s:
                    nx += nw + iv
                elif i % 4 == 3 and not s:
                    ny += nh + ih

            quarter = i % 4
            if quarter == 0:
                if s:
                    ny += nh + ih
                    nh += hrest
                else:
                    nh -= hrest
                    ny -= nh + ih
            elif quarter == 1:
                nx += nw + iv
                nw += wrest
            elif quarter == 2:
                ny += nh + ih
                nh += hrest
                if i < n - 1:
                    nw += wrest
            else:
                if s:
                    nx += nw + iv
                    nw -= wrest
                else:
                    nw -= wrest
                    nx -= nw + iv
                    nh += hrest

            if i == 0:
                if an != 1:
                    nw = int((w - iv) - (w - iv) * (1 - monitor.mfact))
                    wrest = 0
                ny = y
            elif i == 1:
                nw = w - nw - iv
            i += 1

        c.resize(nx, ny, nw - 2 * c.bw, nh - 2 * c.bw)


def arrange_dwindle(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Fibonacci arrangement where each split moves right and down."""
    _arrange_fibonacci(monitor, x, y, h, w, ih, iv, n, an, ai, True)


def arrange_spiral(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Fibonacci arrangement that spirals inward."""
    _arrange_fibonacci(monitor, x, y, h, w, ih, iv, n, an, ai, False)


def arrange_tatami(monitor, x, y, h, w, ih, iv, n, an, ai):
    """Arrange clients as tatami mats of five, with leftovers on top."""
    if an <= 0:
        return
    nx, ny, nw = x, y, w
    mats, cats = divmod(an, 5)
    hrest = wrest = 0

    areas = mats + (1 if cats else 0)
    nh = (h - ih * (areas - 1)) // areas
    nhrest = (h - ih * (areas - 1)) % areas

    i = 0
    for j, c in _in_range(monitor, an, ai):
        tnx, tny, tnw, tnh = nx, ny, nw, nh

        if j < ai + cats:
            slot = i % 5
            if cats == 2:
                if slot == 0:
                    tnh = (nh - ih) // 2 + (nh - ih) % 2
                elif slot == 1:
                    tny += (nh - ih) // 2 + (nh - ih) % 2 + ih
                    tnh = (nh - ih) // 2
            elif cats == 3:
                if slot == 0:
                    tnw = (nw - iv) // 2 + (nw - iv) % 2
                    tnh = (nh - ih) * 2 // 3 + (nh - ih) * 2 % 3
                elif slot == 1:
                    tnx += (nw - iv) // 2 + (nw - iv) % 2 + iv
                    tnw = (nw - iv) // 2
                    tnh = (nh - ih) * 2 // 3 + (nh - ih) * 2 % 3
                elif slot == 2:
                    tnh = (nh - ih) // 3
                    tny += (nh - ih) * 2 // 3 + (nh - ih) * 2 % 3 + ih
            elif cats == 4:
                if slot == 0:
                    hrest = (nh - 2 * ih) % 4
                    tnh = (nh - 2 * ih) // 4 + (1 if hrest else 0)
                elif slot == 1:
                    tnw = (nw - iv) // 2 + (nw - iv) % 2
                    tny += (nh - 2 * ih) // 4 + (1 if hrest else 0) + ih
                    tnh = (nh - 2 * ih) * 2 // 4 + (1 if hrest > 1 else 0)
                elif slot == 2:
                    tnx += (nw - iv) // 2 + (nw - iv) % 2 + iv
                    tnw = (nw - iv) // 2
                    tny += (nh - 2 * ih) // 4 + (1 if hrest else 0) + ih
                    tnh = (nh - 2 * ih) * 2 // 4 + (1 if hrest > 1 else 0)
                elif slot == 3:
                    tny += (
                        (nh - 2 * ih) // 4
                        + (1 if hrest else 0)
                        + (nh - 2 * ih) * 2 // 4
                        + (1 if hrest > 1 else 0)
                        + 2 * ih
                    )
                    tnh = (nh - 2 * ih) // 4 + (1 if hrest > 2 else 0)
        else:
            slot = (i - cats) % 5
            if slot == 0 and (cats > 0 or (i - cats) >= 5):
                ny = ny + nh + (1 if nhrest > 0 else 0) + ih
                tny = ny
                nhrest = (nhrest - 1) & _UINT_MASK

            if slot == 0:
                wrest = (nw - 2 * iv) % 3
                hrest = (nh - 2 * ih) % 3
                tnw = (nw - 2 * iv) // 3 + (1 if wrest else 0)
                tnh = (nh - 2 * ih) * 2 // 3 + hrest + iv
            elif slot == 1:
                tnx += (nw - 2 * iv) // 3 + (1 if wrest else 0) + iv
                tnw = (nw - 2 * iv) * 2 // 3 + (1 if wrest > 1 else 0) + iv
                tnh = (nh - 2 * ih) // 3 + (1 if hrest else 0)
            elif slot == 2:
                tnx += (nw - 2 * iv) // 3 + (1 if wrest else 0) + iv
                tnw = (nw - 2 * iv) // 3 + (1 if wrest > 1 else 0)
                tny += (nh - 2 * ih) // 3 + (1 if hrest else 0) + ih
                tnh = (nh - 2 * ih) // 3 + (1 if hrest > 1 else 0)
            elif slot == 3:
                tnx += (nw - 2 * iv) * 2 // 3 + wrest + 2 * iv
                tnw = (nw - 2 * iv) // 3
                tny += (nh - 2 * ih) // 3 + (1 if hrest else 0) + ih
                tnh = (nh - 2 * ih) * 2 // 3 + hrest + iv
            else:
                tnw = (nw - 2 * iv) * 2 // 3 + wrest + iv
                tny += (nh - 2 * ih) * 2 // 3 + hrest + 2 * iv
                tnh = (nh - 2 * ih) // 3

        c.resize(tnx, tny, tnw - 2 * c.bw, tnh - 2 * c.bw)
        i += 1


_ARRANGERS: dict[TileArrangement, Callable[..., None]] = {
    TileArrangement.TOP_TO_BOTTOM: arrange_top_to_bottom,
    TileArrangement.LEFT_TO_RIGHT: arrange_left_to_right,
    TileArrangement.MONOCLE: arrange_monocle,
    TileArrangement.GAPPLESSGRID: arrange_gapplessgrid,
    TileArrangement.GAPPLESSGRID_ALT1: arrange_gapplessgrid_alt1,
    TileArrangement.GAPPLESSGRID_ALT2: arrange_gapplessgrid_alt2,
    TileArrangement.GRIDMODE: arrange_gridmode,
    TileArrangement.HORIZGRID: arrange_horizgrid,
    TileArrangement.DWINDLE: arrange_dwindle,
    TileArrangement.SPIRAL: arrange_spiral,
    TileArrangement.TATAMI: arrange_tatami,
}


def arrange_tiles(kind, monitor, x, y, h, w, ih, iv, n, an, ai):
    """Run the arrangement named by ``kind`` on a range of tiled clients."""
    _ARRANGERS[TileArrangement(kind)](monitor, x, y, h, w, ih, iv, n, an, ai)