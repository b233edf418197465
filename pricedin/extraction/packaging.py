"""Packaging inference — supplier unit strings and pack sizes.

Supplier feeds spell units a dozen ways ("LGTH", "Lin M", "SHT", "PKT").
:func:`normalise_unit` maps them onto :class:`SellUnit`;
:func:`infer_packaging` decides how a product is bought from its name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from pricedin.config import (
    DEFAULT_ADHESIVE_TUBE_ML,
    DEFAULT_CONCRETE_BAG_KG,
    DEFAULT_FIXING_BOX,
    DEFAULT_PAINT_TIN_L,
)
from pricedin.models.catalog import Packaging, SellUnit

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Unit normalisation
# ---------------------------------------------------------------------------

# (substrings, unit) — checked in order, first hit wins
_UNIT_ALIASES: list[tuple[tuple[str, ...], SellUnit]] = [
    (("lgth", "length"), SellUnit.LENGTH),
    (("lm", "lineal", "linear", "mtr"), SellUnit.LINEAL_METRE),
    (("m²", "m2", "sqm", "sq m", "square"), SellUnit.SQUARE_METRE),
    (("m³", "m3", "cbm", "cubic"), SellUnit.CUBIC_METRE),
    (("ea", "each"), SellUnit.EACH),
    (("box", "bx"), SellUnit.BOX),
    (("pack", "pk"), SellUnit.PACK),
    (("bag",), SellUnit.BAG),
    (("kg",), SellUnit.KILOGRAM),
    (("roll",), SellUnit.ROLL),
    (("sht", "sheet"), SellUnit.SHEET),
    (("tube",), SellUnit.TUBE),
    (("litre", "ltr"), SellUnit.LITRE),
    (("set",), SellUnit.SET),
    (("pair", "pr"), SellUnit.PAIR),
]


def normalise_unit(raw_unit: str | None) -> SellUnit:
    """Map a supplier unit string onto :class:`SellUnit`.

    Empty and unrecognised units default to ``each``.
    """
    u = (raw_unit or "").strip().lower()
    if not u:
        return SellUnit.EACH
    if u == "l":
        return SellUnit.LITRE
    for aliases, unit in _UNIT_ALIASES:
        if any(a in u for a in aliases):
            return unit
    logger.debug("Unrecognised supplier unit %r, defaulting to each", raw_unit)
    return SellUnit.EACH


# ---------------------------------------------------------------------------
# Packaging rules
# ---------------------------------------------------------------------------

def _per_metre(unit: str) -> bool:
    return unit.strip().upper() in ("MTR", "LM")


def _first_number(pattern: str, name: str, default: float) -> float:
    m = re.search(pattern, name, re.I)
    return float(m.group(1)) if m else default


def _fixing_box(name: str, unit: str) -> float:
    return _first_number(r"(?:box|pkt|pk|pack)\s*(\d+)", name, DEFAULT_FIXING_BOX)


def _paint_tin(name: str, unit: str) -> float:
    return _first_number(r"(\d+(?:\.\d+)?)\s*(?:l|lt|ltr|litre)\b", name, DEFAULT_PAINT_TIN_L)


def _concrete_bag(name: str, unit: str) -> float:
    return _first_number(r"(\d+)\s*kg", name, DEFAULT_CONCRETE_BAG_KG)


def _adhesive_tube(name: str, unit: str) -> float:
    return _first_number(r"(\d+)\s*ml", name, DEFAULT_ADHESIVE_TUBE_ML)


def _timber_length(name: str, unit: str) -> float:
    if _per_metre(unit):
        return 1
    return _first_number(r"(\d+(?:\.\d+)?)\s*m(?:\s|$)", name, 1)


def _insulation_pack(name: str, unit: str) -> float:
    return _first_number(r"(\d+)\s*(?:pack|pk)", name, 1)


def _membrane_roll(name: str, unit: str) -> float:
    return _first_number(r"(\d+)\s*(?:m2|sqm|m²)", name, 1)


def _single(name: str, unit: str) -> float:
    return 1


@dataclass(frozen=True)
class _PackagingRule:
    pattern: re.Pattern[str]
    detect: Callable[[str, str], float]
    unit_type: str
    sell_unit: SellUnit
    per_metre_unit_type: str | None = None
    per_metre_sell_unit: SellUnit | None = None

    def apply(self, name: str, unit: str) -> Packaging:
        units = self.detect(name, unit)
        unit_type, sell_unit = self.unit_type, self.sell_unit
        if self.per_metre_unit_type and _per_metre(unit):
            unit_type = self.per_metre_unit_type
            sell_unit = self.per_metre_sell_unit or sell_unit
        return Packaging(
            unit_type=unit_type,
            units_per_package=units if units >= 1 else 1,
            sell_unit=sell_unit,
        )


# Ordered: fixings and consumables before the timber section pattern
_PACKAGING_RULES: list[_PackagingRule] = [
    _PackagingRule(re.compile(r"screw|nail|staple", re.I), _fixing_box, "box", SellUnit.BOX),
    _PackagingRule(
        re.compile(r"paint|stain|finish|varnish|sealer|primer|enamel|lacquer", re.I),
        _paint_tin, "tin", SellUnit.EACH,
    ),
    _PackagingRule(re.compile(r"concrete|cement|mortar|grout", re.I), _concrete_bag, "bag", SellUnit.BAG),
    _PackagingRule(
        re.compile(r"adhesive|sealant|silicone|sikaflex|liquid nail|caulk|mastic", re.I),
        _adhesive_tube, "tube", SellUnit.EACH,
    ),
    _PackagingRule(re.compile(r"gib|plasterboard|fyreline|aqualine|braceline", re.I), _single, "sheet", SellUnit.SHEET),
    _PackagingRule(re.compile(r"plywood|ply\s|mdf|particle\s*board|shadowclad", re.I), _single, "sheet", SellUnit.SHEET),
    _PackagingRule(
        re.compile(r"\d+\s*x\s*\d+.*(?:rad|radiata|sg8|msg8|h[1-5])", re.I),
        _timber_length, "length", SellUnit.LENGTH,
        per_metre_unit_type="meter", per_metre_sell_unit=SellUnit.LINEAL_METRE,
    ),
    _PackagingRule(re.compile(r"decking", re.I), _single, "meter", SellUnit.LINEAL_METRE),
    _PackagingRule(re.compile(r"batts|insulation|earthwool", re.I), _insulation_pack, "pack", SellUnit.PACK),
    _PackagingRule(
        re.compile(r"wrap|membrane|polythene|dpc|building\s*paper", re.I),
        _membrane_roll, "roll", SellUnit.ROLL,
    ),
    _PackagingRule(
        re.compile(r"bracket|hanger|stirrup|l/lok|bowmac|connector", re.I),
        _single, "each", SellUnit.EACH,
    ),
]


def infer_packaging(name: str | None, unit: str | None = None) -> Packaging:
    """Return the :class:`Packaging` for a product name and supplier unit.

    Rules are evaluated in order; the first whose pattern matches *name*
    wins.  Anything unmatched is sold each, one per package.
    """
    name = name or ""
    unit = unit or ""
    for rule in _PACKAGING_RULES:
        if rule.pattern.search(name):
            return rule.apply(name, unit)
    return Packaging()
