"""Per-line sanity checks shared by the resolver and the validator.

Each check returns ``(code, message)`` pairs; callers decide whether to
attach them to a resolved line or turn them into findings.
"""

from __future__ import annotations

import re

from pricedin.config import DEFAULT_THRESHOLDS, SanityThresholds

_BOX_UNITS = frozenset({"box", "pack", "pk", "pkt"})
_PAINT_RE = re.compile(r"paint|stain|coating|varnish|primer|sealer|enamel", re.I)
_BAG_RE = re.compile(r"concrete|cement|mortar", re.I)


def line_sanity_checks(
    name: str,
    unit_type: str,
    quantity: float,
    price: float,
    thresholds: SanityThresholds = DEFAULT_THRESHOLDS,
) -> list[tuple[str, str]]:
    """Return advisory ``(code, message)`` pairs for one quote line."""
    checks: list[tuple[str, str]] = []
    unit = (unit_type or "").strip().lower()

    if unit in _BOX_UNITS and quantity > thresholds.box_qty:
        checks.append((
            "sanity.box_quantity",
            f"{name}: {quantity:g} boxes seems very high. Verify calculation.",
        ))

    if (unit == "tin" or _PAINT_RE.search(name)) and quantity > thresholds.paint_qty:
        checks.append((
            "sanity.paint_quantity",
            f"{name}: {quantity:g} tins seems high. Check coverage area.",
        ))

    if (unit == "bag" or _BAG_RE.search(name)) and quantity > thresholds.bag_qty:
        checks.append((
            "sanity.bag_quantity",
            f"{name}: {quantity:g} bags seems high. Verify concrete volume.",
        ))

    value = quantity * price
    if value > thresholds.line_value:
        checks.append((
            "sanity.line_value",
            f"High value: ${value:,.0f} for {name}. Double-check qty {quantity:g}.",
        ))

    return checks
