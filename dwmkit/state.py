"""Bit-packed monitor and client state kept in window properties across restarts."""

from __future__ import annotations

from dataclasses import dataclass

_UINT32 = 0xFFFFFFFF


@dataclass(frozen=True)
class MonitorFields:
    """Per-tag workspace settings of a monitor.

    ``ltaxis`` holds the flextile layout (negative when mirrored), master,
    stack and secondary stack arrangements.
    """

    nmaster: int = 0
    nstack: int = 0
    layout: int = 0
    ltaxis: tuple[int, int, int, int] = (0, 0, 0, 0)
    showbar: bool = False

    def pack(self) -> int:
        """Encode the fields into a 32-bit value."""
        split, master, stack, stack2 = self.ltaxis
        value = (
            (self.nmaster & 0x7)
            | (self.nstack & 0x7) << 3
            | (self.layout & 0xF) << 6
            | (abs(split) & 0xF) << 10
            | (master & 0xF) << 14
            | (stack & 0xF) << 18
            | (stack2 & 0xF) << 22
            | (1 if split < 0 else 0) << 24
            | (1 if self.showbar else 0) << 31
        )
        return value & _UINT32

    @classmethod
    def unpack(cls, value: int) -> "MonitorFields":
        """Decode a value produced by :meth:`pack`."""
        split = (value >> 10) & 0xF
        if value >> 24 & 0x1:
            split = -split
        return cls(
            nmaster=value & 0x7,
            nstack=(value >> 3) & 0x7,
            layout=(value >> 6) & 0xF,
            ltaxis=(split, (value >> 14) & 0xF, (value >> 18) & 0xF, (value >> 22) & 0xF),
            showbar=bool((value >> 31) & 0x1),
        )


@dataclass(frozen=True)
class ClientFields:
    """Client flags, position in the client list and owning monitor."""

    monitor: int = 0
    idx: int = 0
    isfloating: bool = False
    isterminal: bool = False
    noswallow: bool = False
    issticky: bool = False
    scratchkey: int = 0

    def pack(self) -> int:
        """Encode the fields into a 32-bit value."""
        value = (
            (self.monitor & 0x7)
            | (self.idx & 0xFF) << 3
            | (int(self.isfloating) & 0x1) << 11
            | (int(self.isterminal) & 0x1) << 13
            | (int(self.noswallow) & 0x1) << 14
            | (int(self.issticky) & 0x1) << 16
            | (self.scratchkey & 0xFF) << 24
        )
        return value & _UINT32

    @classmethod
    def unpack(cls, value: int) -> "ClientFields":
        """Decode a value produced by :meth:`pack`."""
        return cls(
            monitor=value & 0x7,
            idx=(value >> 3) & 0xFF,
            isfloating=bool((value >> 11) & 0x1),
            isterminal=bool((value >> 13) & 0x1),
            noswallow=bool((value >> 14) & 0x1),
            issticky=bool((value >> 16) & 0x1),
            scratchkey=(value >> 24) & 0xFF,
        )


def pack_float_position(x: int, y: int, mx: int, my: int) -> int:
    """Encode a floating position relative to the monitor origin."""
    return (max(x - mx, 0) & 0xFFFF) | (max(y - my, 0) & 0xFFFF) << 16


def unpack_float_position(value: int, mx: int, my: int) -> tuple[int, int]:
    """Decode a floating position back to absolute coordinates."""
    return mx + (value & 0xFFFF), my + ((value >> 16) & 0xFFFF)


def pack_float_size(w: int, h: int) -> int:
    """Encode a floating size."""
    return (w & 0xFFFF) | (h & 0xFFFF) << 16


def unpack_float_size(value: int) -> tuple[int, int]:
    """Decode a floating size; raises ValueError if either side is zero."""
    w = value & 0xFFFF
    h = (value >> 16) & 0xFFFF
    if w <= 0 or h <= 0:
        raise ValueError(f"bad float size w = {w}, h = {h}")
    return w, h