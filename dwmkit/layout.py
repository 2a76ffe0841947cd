"""Client and monitor model with the tile and monocle layouts, gaps and client factors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

MIN_CFACT = 0.25
MAX_CFACT = 4.0


@dataclass(eq=False)
class Client:
    """A managed window with its geometry and layout properties."""

    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1
    bw: int = 0
    cfact: float = 1.0
    tags: int = 1
    idx: int = 0
    isfloating: bool = False
    issticky: bool = False

    def outer_width(self) -> int:
        """Width including both borders."""
        return self.w + 2 * self.bw

    def outer_height(self) -> int:
        """Height including both borders."""
        return self.h + 2 * self.bw

    def resize(self, x: int, y: int, w: int, h: int) -> None:
        """Move and resize the client; width and height are kept at least 1."""
        self.x = int(x)
        self.y = int(y)
        self.w = max(1, int(w))
        self.h = max(1, int(h))


@dataclass(eq=False)
class Monitor:
    """A screen area holding an ordered list of clients."""

    wx: int = 0
    wy: int = 0
    ww: int = 1920
    wh: int = 1080
    num: int = 0
    nmaster: int = 1
    nstack: int = 0
    mfact: float = 0.55
    tagset: int = 1
    gappoh: int = 0
    gappov: int = 0
    gappih: int = 0
    gappiv: int = 0
    enable_gaps: bool = True
    smartgaps_fact: int = 1
    ltsymbol: str = ""
    ltaxis: list[int] = field(default_factory=lambda: [1, 0, 0, 0])
    clients: list[Client] = field(default_factory=list)

    def is_visible(self, client: Client) -> bool:
        return bool(client.issticky or client.tags & self.tagset)

    def tiled(self) -> Iterator[Client]:
        """Yield the visible, non-floating clients in list order."""
        return (c for c in self.clients if not c.isfloating and self.is_visible(c))


@dataclass(frozen=True)
class Gaps:
    """Effective gaps of a monitor and its number of tiled clients."""

    oh: int
    ov: int
    ih: int
    iv: int
    n: int


@dataclass(frozen=True)
class Facts:
    """Total client factors of the master and stack areas and leftover pixels."""

    mfacts: float
    sfacts: float
    mrest: int
    srest: int


def get_gaps(monitor: Monitor) -> Gaps:
    """Return the gaps in effect for the monitor's current tiled clients."""
    n = sum(1 for _ in monitor.tiled())
    outer = inner = 1 if monitor.enable_gaps else 0
    if n == 1:
        outer *= monitor.smartgaps_fact
    return Gaps(
        oh=monitor.gappoh * outer,
        ov=monitor.gappov * outer,
        ih=monitor.gappih * inner,
        iv=monitor.gappiv * inner,
        n=n,
    )


def set_gaps(monitor: Monitor, oh: int, ov: int, ih: int, iv: int) -> None:
    """Set the monitor's gaps, clamping negative values to zero."""
    monitor.gappoh = max(oh, 0)
    monitor.gappov = max(ov, 0)
    monitor.gappih = max(ih, 0)
    monitor.gappiv = max(iv, 0)


def get_facts(monitor: Monitor, msize: int, ssize: int) -> Facts:
    """Sum the client factors per area and the pixels left after splitting."""
    tiled = list(monitor.tiled())
    masters = tiled[: monitor.nmaster] if monitor.nmaster > 0 else []
    stack = tiled[len(masters):]
    mfacts = sum(c.cfact for c in masters)
    sfacts = sum(c.cfact for c in stack)

    mtotal = 0
    for c in masters:
        mtotal = int(mtotal + msize * (c.cfact / mfacts))
    stotal = 0
    for c in stack:
        stotal = int(stotal + ssize * (c.cfact / sfacts))

    return Facts(mfacts=mfacts, sfacts=sfacts, mrest=msize - mtotal, srest=ssize - stotal)


def adjust_cfact(client: Client, value: float) -> float:
    """Change a client's factor and return the new value.

    Zero resets to 1.0, values above 4.0 set the factor absolutely (minus 4.0),
    anything else is added; the result is kept within [0.25, 4.0].
    """
    if not value:
        f = 1.0
    elif value > MAX_CFACT:
        f = value - MAX_CFACT
    else:
        f = value + client.cfact
    f = min(max(f, MIN_CFACT), MAX_CFACT)
    client.cfact = f
    return f


def tile(monitor: Monitor) -> None:
    """Arrange tiled clients in a master column and a stack column."""
    gaps = get_gaps(monitor)
    n = gaps.n
    if n == 0:
        return
    oh, ov, ih, iv = gaps.oh, gaps.ov, gaps.ih, gaps.iv

    sx = mx = monitor.wx + ov
    sy = my = monitor.wy + oh
    mh = monitor.wh - 2 * oh - ih * (min(n, monitor.nmaster) - 1)
    sh = monitor.wh - 2 * oh - ih * (n - monitor.nmaster - 1)
    sw = mw = monitor.ww - 2 * ov

    if monitor.nmaster and n > monitor.nmaster:
        sw = int((mw - iv) * (1 - monitor.mfact))
        mw = int((mw - iv) * monitor.mfact)
        sx = mx + mw + iv

    facts = get_facts(monitor, mh, sh)

    for i, c in enumerate(list(monitor.tiled())):
        if i < monitor.nmaster:
            extra = 1 if i < facts.mrest else 0
            c.resize(mx, my, mw - 2 * c.bw,
                     int((mh / facts.mfacts) * c.cfact + extra - 2 * c.bw))
            my += c.outer_height() + ih
        else:
            extra = 1 if (i - monitor.nmaster) < facts.srest else 0
            c.resize(sx, sy, sw - 2 * c.bw,
                     int((sh / facts.sfacts) * c.cfact + extra - 2 * c.bw))
            sy += c.outer_height() + ih


def monocle(monitor: Monitor) -> None:
    """Give every tiled client the whole window area."""
    for c in list(monitor.tiled()):
        c.resize(monitor.wx, monitor.wy, monitor.ww - 2 * c.bw, monitor.wh - 2 * c.bw)


def attach_at_index(monitor: Monitor, client: Client) -> None:
    """Insert a client at the position given by its index, or at the head."""
    clients = monitor.clients
    if client.idx > 0:
        for pos, at in enumerate(clients):
            if client.idx < at.idx:
                clients.insert(0, client)
                return
            nxt = clients[pos + 1] if pos + 1 < len(clients) else None
            if at.idx <= client.idx and (nxt is None or client.idx <= nxt.idx):
                clients.insert(pos + 1, client)
                return
    clients.insert(0, client)