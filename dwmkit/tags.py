"""Tag bitmask operations: shifting views, swapping and compacting tags, stack positions."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

NUMTAGS = 9
INC_OFFSET = 2000
PREVSEL = 3000


def _tag_mask(numtags: int) -> int:
    return (1 << numtags) - 1


def _rotate(tags: int, step: int, numtags: int) -> int:
    mask = _tag_mask(numtags)
    step %= numtags
    tags &= mask
    return ((tags << step) | (tags >> (numtags - step))) & mask


def shift_tags(tagset: int, step: int, occupied: int = 0, numtags: int = NUMTAGS) -> int:
    """Rotate a tagset by ``step`` tags; positive shifts left.

    When ``occupied`` is non-zero the rotation is repeated until the result
    shares a tag with it. Raises ValueError if that can never happen.
    """
    shifted = tagset & _tag_mask(numtags)
    occupied &= _tag_mask(numtags)
    for _ in range(numtags):
        shifted = _rotate(shifted, step, numtags)
        if not occupied or shifted & occupied:
            return shifted
    raise ValueError("shifting never reaches an occupied tag")


def swap_tags(clients: Iterable, current: int, target: int, tagmask: int) -> Optional[int]:
    """Exchange the clients of the single selected tag with those of ``target``.

    Returns the tag to view afterwards, or None when nothing was swapped.
    """
    newtag = target & tagmask
    if newtag == current or not current or current & (current - 1):
        return None
    for client in clients:
        if client.tags & newtag or client.tags & current:
            client.tags ^= current ^ newtag
        if not client.tags:
            client.tags = newtag
    return newtag


def _lowest_tag(tags: int) -> int:
    return (tags & -tags).bit_length() - 1


def reorganize_tags(clients: Sequence, numtags: int = NUMTAGS) -> dict[int, int]:
    """Move every client to a single tag so that occupied tags become contiguous.

    Each client keeps only its lowest tag, renumbered in order from the first
    tag. Clients without tags are left alone. Returns the old-to-new tag index map.
    """
    tagged = [c for c in clients if c.tags]
    occ = 0
    for client in tagged:
        occ |= 1 << _lowest_tag(client.tags)

    dest: dict[int, int] = {}
    unocc = 0
    for i in range(numtags):
        while unocc < i and occ & (1 << unocc):
            unocc += 1
        if occ & (1 << i):
            dest[i] = unocc
            occ &= ~(1 << i)
            occ |= 1 << unocc

    for client in tagged:
        client.tags = 1 << dest[_lowest_tag(client.tags)]
    return dest


def tag_icon(icons: Sequence[str], monitor_num: int, tag: int, numtags: int = NUMTAGS) -> str:
    """Return the icon of a tag, with later monitors continuing the icon list."""
    index = tag + numtags * monitor_num
    if index >= len(icons):
        index %= len(icons)
    return icons[index]


def inc(delta: int) -> int:
    """Encode a relative stack movement for :func:`stack_position`."""
    return delta + INC_OFFSET


def _is_inc(arg: int) -> bool:
    return 1000 < arg < 3000


def stack_position(
    clients: Sequence,
    stack: Sequence,
    selected,
    arg: int,
    is_visible: Callable[[object], bool],
) -> Optional[int]:
    """Resolve a stack argument to a position among the visible clients.

    ``arg`` is PREVSEL for the previously focused client, a value from
    :func:`inc` for a relative move from ``selected``, a negative number to
    count from the end, or an absolute position. Returns None if there is none.
    """
    if not clients:
        return None

    if arg == PREVSEL:
        previous = next((c for c in stack if is_visible(c) and c is not selected), None)
        if previous is None:
            return None
        pos = next(i for i, c in enumerate(clients) if c is previous)
        return sum(1 for c in clients[:pos] if is_visible(c))

    if _is_inc(arg):
        if selected is None:
            return None
        pos = next((i for i, c in enumerate(clients) if c is selected), None)
        if pos is None:
            raise ValueError("selected client is not in the client list")
        before = sum(1 for c in clients[:pos] if is_visible(c))
        total = before + sum(1 for c in clients[pos:] if is_visible(c))
        if total == 0:
            return None
        return (before + arg - INC_OFFSET) % total

    if arg < 0:
        return max(sum(1 for c in clients if is_visible(c)) + arg, 0)
    return arg