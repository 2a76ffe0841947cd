"""Colour settings read from the X resource database."""

from __future__ import annotations

from typing import Mapping, Optional

_SCHEME_RESOURCES = (
    "normfgcolor", "normbgcolor", "normbordercolor", "normfloatcolor",
    "selfgcolor", "selbgcolor", "selbordercolor", "selfloatcolor",
    "titlenormfgcolor", "titlenormbgcolor", "titlenormbordercolor", "titlenormfloatcolor",
    "titleselfgcolor", "titleselbgcolor", "titleselbordercolor", "titleselfloatcolor",
    "tagsnormfgcolor", "tagsnormbgcolor", "tagsnormbordercolor", "tagsnormfloatcolor",
    "tagsselfgcolor", "tagsselbgcolor", "tagsselbordercolor", "tagsselfloatcolor",
    "hidnormfgcolor", "hidnormbgcolor", "hidselfgcolor", "hidselbgcolor",
    "urgfgcolor", "urgbgcolor", "urgbordercolor", "urgfloatcolor",
    "scratchselfgcolor", "scratchselbgcolor", "scratchselbordercolor", "scratchselfloatcolor",
    "scratchnormfgcolor", "scratchnormbgcolor", "scratchnormbordercolor", "scratchnormfloatcolor",
)

RESOURCE_NAMES = tuple(f"dwm.{name}" for name in _SCHEME_RESOURCES) + tuple(
    f"color{i}" for i in range(16)
)

_HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")


def is_valid_color(value: Optional[str]) -> bool:
    """True for a ``#rrggbb`` colour: a hash followed by exactly six hex digits."""
    return (
        isinstance(value, str)
        and len(value) == 7
        and value[0] == "#"
        and all(ch in _HEX_DIGITS for ch in value[1:])
    )


def parse_resources(text: str) -> dict[str, str]:
    """Parse resource manager text of ``name: value`` lines into a mapping.

    Comment lines (``!``), directive lines (``#``) and lines without a colon
    are skipped; later entries override earlier ones.
    """
    resources: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.lstrip()
        if not stripped or stripped[0] in "!#":
            continue
        name, sep, value = stripped.partition(":")
        if not sep:
            continue
        name = name.strip()
        if not name:
            continue
        resources[name] = value.lstrip(" \t").rstrip("\r")
    return resources


def _candidates(name: str) -> list[str]:
    names = [name, "*" + name, "*." + name]
    if "." in name:
        last = name.rsplit(".", 1)[1]
        names += ["*" + last, "*." + last]
    return names


def _lookup(resources: Mapping[str, str], name: str) -> Optional[str]:
    for candidate in _candidates(name):
        if candidate in resources:
            return resources[candidate]
    return None


def load_colors(resources: Mapping[str, str], defaults: Mapping[str, str]) -> dict[str, str]:
    """Return ``defaults`` with every entry replaced by a valid resource colour.

    Resources that are missing or not of the form ``#rrggbb`` leave the
    default in place.
    """
    colors = dict(defaults)
    for name in defaults:
        value = _lookup(resources, name)
        if is_valid_color(value):
            colors[name] = value
    return colors