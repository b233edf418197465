"""Property extraction — dimensions, length, treatment, vocabularies, fixings, sheets."""

from __future__ import annotations

import re
from typing import Any

from pricedin.config import TREATMENT_CODES

# ---------------------------------------------------------------------------
# Timber cross-section
# ---------------------------------------------------------------------------

# "140 X 45", "90x45", "190×52MM" — never the 4-digit pairs used for sheets
_SECTION_RE = re.compile(r"\b(\d{2,3})\s*[xX×*]\s*(\d{2,3})(?!\d)(?!\s*[xX×]\s*\d{3,4})")

_SECTION_MIN_MM = 20
_SECTION_MAX_MM = 300


def extract_cross_section(name: str) -> tuple[int, int] | None:
    """Return ``(width, depth)`` with width the larger figure, or *None*.

    Suppliers quote the wide face first by convention only, so the pair is
    ordered by magnitude.
    """
    m = _SECTION_RE.search(name)
    if not m:
        return None
    a, b = int(m.group(1)), int(m.group(2))
    width, depth = max(a, b), min(a, b)
    if depth < _SECTION_MIN_MM or width > _SECTION_MAX_MM:
        return None
    return width, depth


# ---------------------------------------------------------------------------
# Sheet dimensions
# ---------------------------------------------------------------------------

_SHEET_RE = re.compile(r"(?<!\d)(\d{3,4})\s*[xX×]\s*(\d{3,4})(?:\s*[xX×]\s*(\d{1,2}))?(?!\d)")
_THICKNESS_RE = re.compile(r"\b(\d{1,2}(?:\.\d)?)\s*mm\b", re.I)
_MAX_SHEET_THICKNESS_MM = 50


def extract_sheet_dimensions(name: str) -> dict[str, int]:
    """Return ``sheet_width``, ``sheet_height`` and ``thickness`` where present.

    A pair only counts as a sheet size when one side is at least 1000 mm.
    """
    dims: dict[str, int] = {}
    for m in _SHEET_RE.finditer(name):
        a, b = int(m.group(1)), int(m.group(2))
        if max(a, b) < 1000:
            continue
        dims["sheet_width"] = min(a, b)
        dims["sheet_height"] = max(a, b)
        if m.group(3):
            dims["thickness"] = int(m.group(3))
        break

    if "thickness" not in dims:
        t = _THICKNESS_RE.search(name)
        if t and float(t.group(1)) <= _MAX_SHEET_THICKNESS_MM:
            dims["thickness"] = round(float(t.group(1)))
    return dims


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------

_EMS_RE = re.compile(r"\bEMS\b")
_LENGTH_M_RE = re.compile(r"(?<![\d.])(\d+(?:\.\d+)?)\s*M\b(?!\s*M)", re.I)
_LENGTH_MM_RE = re.compile(r"(?<![\d.])(\d{3,4})\s*MM\b", re.I)

_MAX_LENGTH_M = 12.0
_MIN_LENGTH_MM = 300
_MAX_LENGTH_MM = 12000


def extract_length(name: str) -> dict[str, Any]:
    """Return ``length`` (mm), ``length_display`` and ``variable_length``.

    EMS (estimated mill size) stock has no fixed length and is flagged
    instead of given a number.
    """
    if _EMS_RE.search(name):
        return {"length": None, "length_display": "EMS", "variable_length": True}

    m = _LENGTH_M_RE.search(name)
    if m:
        metres = float(m.group(1))
        if 0 < metres <= _MAX_LENGTH_M:
            display = f"{metres:.1f}m" if metres.is_integer() else f"{metres:g}m"
            return {"length": round(metres * 1000), "length_display": display}

    m = _LENGTH_MM_RE.search(name)
    if m:
        mm = int(m.group(1))
        if _MIN_LENGTH_MM <= mm <= _MAX_LENGTH_MM:
            return {"length": mm, "length_display": f"{mm / 1000:.1f}m"}

    return {}


# ---------------------------------------------------------------------------
# Treatment
# ---------------------------------------------------------------------------

_TREATMENT_RE = re.compile(r"\bH(\d)\.?(\d)?\b", re.I)


def extract_treatment(name: str) -> str | None:
    """Return the NZ hazard-class treatment code, or *None*.

    Only the first H-code in the name is considered; one outside the valid
    set (``H7``, ``H4.5``) yields *None* rather than a guess.
    """
    m = _TREATMENT_RE.search(name)
    if not m:
        return None
    major, minor = m.group(1), m.group(2)
    code = f"H{major}.{minor}" if minor else f"H{major}"
    return code if code in TREATMENT_CODES else None


# ---------------------------------------------------------------------------
# Closed vocabularies — first match wins
# ---------------------------------------------------------------------------

_GRADES: list[tuple[str, re.Pattern[str]]] = [
    ("SG8", re.compile(r"\bSG8\b", re.I)),
    ("SG6", re.compile(r"\bSG6\b", re.I)),
    ("SG10", re.compile(r"\bSG10\b", re.I)),
    ("MSG8", re.compile(r"\bMSG8\b", re.I)),
    ("MSG6", re.compile(r"\bMSG6\b", re.I)),
    ("MGP10", re.compile(r"\bMGP10\b", re.I)),
    ("MGP12", re.compile(r"\bMGP12\b", re.I)),
]

_SPECIES: list[tuple[str, re.Pattern[str]]] = [
    ("Radiata", re.compile(r"\bRAD(?:IATA)?\b", re.I)),
    ("Kwila", re.compile(r"\bkwila\b", re.I)),
    ("Vitex", re.compile(r"\bvitex\b", re.I)),
    ("Cedar", re.compile(r"\bcedar\b", re.I)),
    ("Macrocarpa", re.compile(r"\bmacrocarpa\b", re.I)),
    ("Douglas Fir", re.compile(r"\bdouglas\s*fir\b", re.I)),
    ("Hardwood", re.compile(r"\bhardwood\b", re.I)),
]

_FINISHES: list[tuple[str, re.Pattern[str]]] = [
    ("KD", re.compile(r"\bKD\b")),
    ("GRN", re.compile(r"\b(?:GRN|green)\b", re.I)),
    ("Primed", re.compile(r"\bprimed\b", re.I)),
    ("Oiled", re.compile(r"\boiled\b", re.I)),
    ("DAR", re.compile(r"\bDAR\b", re.I)),
]

_FIXING_MATERIALS: list[tuple[str, re.Pattern[str]]] = [
    ("Stainless 316", re.compile(r"\b(?:SS)?316\b", re.I)),
    ("Stainless 304", re.compile(r"\b(?:SS)?304\b|\bstainless\b", re.I)),
    ("Galvanised", re.compile(r"\bgalv", re.I)),
    ("Zinc", re.compile(r"\bzinc\b", re.I)),
    ("Brass", re.compile(r"\bbrass\b", re.I)),
]

_LINING_TYPES: list[tuple[str, re.Pattern[str]]] = [
    ("Aqualine", re.compile(r"\baqua\s*line\b", re.I)),
    ("Fyreline", re.compile(r"\bfyre\s*line\b", re.I)),
    ("Braceline", re.compile(r"\bbrace\s*line\b", re.I)),
    ("Noiseline", re.compile(r"\bnoise\s*line\b", re.I)),
    ("Ultraline", re.compile(r"\bultra\s*line\b", re.I)),
    ("Standard", re.compile(r"\bstandard\b", re.I)),
]


def _first_match(name: str, vocabulary: list[tuple[str, re.Pattern[str]]]) -> str | None:
    for label, pattern in vocabulary:
        if pattern.search(name):
            return label
    return None


def extract_grade(name: str) -> str | None:
    return _first_match(name, _GRADES)


def extract_species(name: str) -> str | None:
    return _first_match(name, _SPECIES)


def extract_finish(name: str) -> str | None:
    return _first_match(name, _FINISHES)


def extract_lining_type(name: str) -> str | None:
    return _first_match(name, _LINING_TYPES)


# ---------------------------------------------------------------------------
# Fixings
# ---------------------------------------------------------------------------

_FIXING_KINDS: list[tuple[str, re.Pattern[str]]] = [
    ("bolt", re.compile(r"\bbolts?\b|\bcoach\s*screws?\b", re.I)),
    ("screw", re.compile(r"\bscrews?\b", re.I)),
    ("nail", re.compile(r"\bnails?\b", re.I)),
    ("hanger", re.compile(r"\bhangers?\b", re.I)),
    ("bracket", re.compile(r"\bbrackets?\b", re.I)),
    ("stirrup", re.compile(r"\bstirrups?\b", re.I)),
    ("anchor", re.compile(r"\banchors?\b", re.I)),
]

# Fasteners have a shank length; connectors (hangers, brackets) do not
_FASTENERS = frozenset({"bolt", "screw", "nail", "anchor"})

_METRIC_DIA_RE = re.compile(r"\bM(\d{1,2})\b")
_GAUGE_RE = re.compile(r"\b(\d{1,2})[gG]\b")
_FIXING_LENGTH_X_RE = re.compile(r"[xX×]\s*(\d{2,3})\s*(?:mm)?(?:\s|$)", re.I)
_FIXING_LENGTH_MM_RE = re.compile(r"\b(\d{2,3})\s*mm\b", re.I)

_PACK_RES = [
    re.compile(r"\b(?:box|bx)\s*(?:of\s*)?(\d+)", re.I),
    re.compile(r"\b(?:pack|pkt)\s*(?:of\s*)?(\d+)", re.I),
    re.compile(r"\bpk\s*(\d+)\b", re.I),
    re.compile(r"\b(\d+)\s*(?:pk|pkt|box|bx)\b", re.I),
]
_BARE_QTY_RE = re.compile(r"(?<![\d.xX×])\b(\d{3,5})\b(?!\s*[xX×mM])")
_BARE_QTY_RANGE = (100, 10000)


def extract_fixing(name: str) -> dict[str, Any]:
    """Return fixing sub-attributes for a fixing product name."""
    fixing: dict[str, Any] = {}

    kind = _first_match(name, _FIXING_KINDS)
    if kind:
        fixing["fixing_type"] = kind

    material = _first_match(name, _FIXING_MATERIALS)
    if material:
        fixing["fixing_material"] = material

    m = _METRIC_DIA_RE.search(name)
    if m:
        fixing["diameter"] = f"M{m.group(1)}"
    else:
        g = _GAUGE_RE.search(name)
        if g:
            fixing["diameter"] = f"{g.group(1)}g"

    if kind in _FASTENERS:
        m = _FIXING_LENGTH_X_RE.search(name) or _FIXING_LENGTH_MM_RE.search(name)
        if m:
            fixing["fixing_length"] = int(m.group(1))

    for pattern in _PACK_RES:
        m = pattern.search(name)
        if m:
            fixing["pack_size"] = int(m.group(1))
            break
    else:
        if kind in ("screw", "nail"):
            m = _BARE_QTY_RE.search(name)
            lo, hi = _BARE_QTY_RANGE
            if m and lo <= int(m.group(1)) <= hi:
                fixing["pack_size"] = int(m.group(1))

    return fixing


# ---------------------------------------------------------------------------
# Insulation
# ---------------------------------------------------------------------------

_R_VALUE_RE = re.compile(r"\bR(\d+(?:\.\d+)?)\b", re.I)


def extract_r_value(name: str) -> str | None:
    m = _R_VALUE_RE.search(name)
    return f"R{m.group(1)}" if m else None
