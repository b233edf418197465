"""Material type classification — ordered, first match wins.

Keywords overlap heavily in supplier names ("JOIST HANGER", "POST STIRRUP",
"DECK SCREW"), so rules are evaluated top-to-bottom and the most specific
rule sits above the generic one it would otherwise lose to.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from pricedin.extraction.schema import MaterialType

Guard = Callable[[dict[str, Any]], bool]


def _always(_: dict[str, Any]) -> bool:
    return True


def _graded(attrs: dict[str, Any]) -> bool:
    return bool(attrs.get("grade"))


def _dimensioned_and_treated(attrs: dict[str, Any]) -> bool:
    return bool(attrs.get("width") and attrs.get("depth") and attrs.get("treatment"))


# (type, pattern, guard); pattern is None when only the guard decides
_TYPE_RULES: list[tuple[MaterialType, re.Pattern[str] | None, Guard]] = [
    # Connectors before the members they connect
    (MaterialType.STIRRUP, re.compile(r"\bstirrups?\b", re.I), _always),
    (MaterialType.HANGER, re.compile(r"\bhangers?\b", re.I), _always),
    (MaterialType.BRACKET, re.compile(r"\bbrackets?\b|\bangles?\b", re.I), _always),
    (MaterialType.ANCHOR, re.compile(r"\banchors?\b", re.I), _always),
    # In-ground members, specific before generic
    (MaterialType.PILE, re.compile(r"\bpiles?\b", re.I), _always),
    (MaterialType.FENCE_POST, re.compile(r"\bfence\s*posts?\b", re.I), _always),
    (MaterialType.POST, re.compile(r"\bposts?\b", re.I), _always),
    # Fasteners before "deck" so "DECK SCREW" stays a screw
    (MaterialType.BOLT, re.compile(r"\bbolts?\b|\bcoach\s*screws?\b", re.I), _always),
    (MaterialType.SCREW, re.compile(r"\bscrews?\b", re.I), _always),
    (MaterialType.NAIL, re.compile(r"\bnails?\b", re.I), _always),
    (MaterialType.DECKING, re.compile(r"\bdeck(?:ing)?\b", re.I), _always),
    (MaterialType.WEATHERBOARD, re.compile(r"\bweatherboards?\b|\bbevel\s*back\b", re.I), _always),
    # Sheets
    (MaterialType.GIB, re.compile(r"\bgib\b|\bplasterboard\b", re.I), _always),
    (MaterialType.CEMENT_BOARD, re.compile(r"\bcement\s*board\b|\btile.*underlay\b", re.I), _always),
    (MaterialType.PLYWOOD, re.compile(r"\bplywood\b|\bply\b", re.I), _always),
    (MaterialType.PARTICLEBOARD, re.compile(r"\bparticle\s*board\b|\bfloor.*board\b", re.I), _always),
    (MaterialType.MDF, re.compile(r"\bmdf\b", re.I), _always),
    # Building materials
    (MaterialType.INSULATION, re.compile(r"\binsulation\b|\bbatts?\b|\bR\d\.\d", re.I), _always),
    (MaterialType.MEMBRANE, re.compile(r"\bwrap\b|\bmembrane\b|\bunderlay\b", re.I), _always),
    (MaterialType.FLASHING, re.compile(r"\bflashing\b", re.I), _always),
    (MaterialType.CONCRETE, re.compile(r"\bconcrete\b|\bcement\b", re.I), _always),
    # Timber members
    (MaterialType.FRAMING, None, _graded),
    (MaterialType.FRAMING, re.compile(r"\bframing\b|\bstress\s*graded\b", re.I), _always),
    (MaterialType.BEARER, re.compile(r"\bbearers?\b", re.I), _always),
    (MaterialType.JOIST, re.compile(r"\bjoists?\b", re.I), _always),
    (MaterialType.RAFTER, re.compile(r"\brafters?\b", re.I), _always),
    (MaterialType.PURLIN, re.compile(r"\bpurlins?\b", re.I), _always),
    (MaterialType.BATTEN, re.compile(r"\bbattens?\b", re.I), _always),
    # Everything else
    (MaterialType.ADHESIVE, re.compile(r"\badhesive\b|\bglue\b|\bsealant\b", re.I), _always),
    (MaterialType.HARDWARE, re.compile(r"\bhinges?\b|\blocks?\b|\bhandles?\b", re.I), _always),
    (MaterialType.FRAMING, None, _dimensioned_and_treated),
]


def classify_type(name: str, attrs: dict[str, Any] | None = None) -> MaterialType:
    """Return the material type for *name*.

    *attrs* carries already-extracted values (``grade``, ``width``,
    ``depth``, ``treatment``) for the rules that depend on them.
    """
    attrs = attrs or {}
    for material_type, pattern, guard in _TYPE_RULES:
        if pattern is not None and not pattern.search(name):
            continue
        if guard(attrs):
            return material_type
    return MaterialType.OTHER
