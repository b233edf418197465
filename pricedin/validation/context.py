"""Quote context — the normalised view every rule checks.

Line items arrive either as :class:`ResolvedLineItem` objects or as plain
mappings edited in a UI (``{"name": ..., "qty": ..., "price": ...}``).
Both are read into immutable :class:`QuoteLine` values; the caller's
objects are never touched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pricedin.config import DEFAULT_THRESHOLDS, SanityThresholds
from pricedin.extraction import extract
from pricedin.extraction.schema import MaterialType, ParsedAttributes
from pricedin.models.quote import LabourItem, ResolvedLineItem

logger = logging.getLogger(__name__)

_DATE = TypeAdapter(date)
_QTY_KEYS = ("qty", "quantity", "qtyToOrder", "qty_to_order")


@dataclass(frozen=True)
class QuoteLine:
    """One material line as the rules see it."""

    index: int
    name: str
    quantity: float
    price: float = 0.0
    unit_type: str = ""
    category: str = ""
    attributes: ParsedAttributes = field(default_factory=ParsedAttributes)
    price_updated: date | None = None
    matched: bool = True

    @property
    def line_value(self) -> float:
        return self.quantity * self.price

    @property
    def text(self) -> str:
        """Upper-case display name, for keyword tests."""
        return self.name.upper()

    @property
    def member(self) -> MaterialType:
        """Material type, with generic framing resolved to bearer / joist by name."""
        material_type = self.attributes.type
        if material_type is MaterialType.FRAMING:
            if "JOIST" in self.text:
                return MaterialType.JOIST
            if "BEARER" in self.text:
                return MaterialType.BEARER
        return material_type


def _quantity(raw: Mapping[str, Any]) -> float:
    for key in _QTY_KEYS:
        if key in raw:
            value = raw[key]
            break
    else:
        return 1.0
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _price_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        value = value[:10]
    try:
        return _DATE.validate_python(value)
    except ValidationError:
        logger.debug("Unparseable price date %r, ignoring", value)
        return None


def _from_mapping(index: int, raw: Mapping[str, Any]) -> QuoteLine:
    name = str(raw.get("name") or "")
    packaging = raw.get("packaging") or {}
    if isinstance(packaging, Mapping):
        unit_type = packaging.get("unit_type") or packaging.get("unitType")
    else:
        unit_type = getattr(packaging, "unit_type", None)
    unit_type = unit_type or raw.get("unit") or ""

    attributes = raw.get("attributes")
    if attributes is None:
        attributes = extract(name)
    elif not isinstance(attributes, ParsedAttributes):
        attributes = ParsedAttributes.model_validate(attributes)

    return QuoteLine(
        index=index,
        name=name,
        quantity=_quantity(raw),
        price=float(raw.get("price") or 0.0),
        unit_type=str(unit_type),
        category=str(raw.get("category") or ""),
        attributes=attributes,
        price_updated=_price_date(raw.get("price_updated", raw.get("priceUpdated"))),
        matched=True,
    )


def _from_resolved(index: int, item: ResolvedLineItem) -> QuoteLine:
    record = item.record
    if record is None:
        return QuoteLine(
            index=index,
            name=item.name,
            quantity=item.quantity,
            attributes=extract(item.name),
            matched=False,
        )
    return QuoteLine(
        index=index,
        name=record.name,
        quantity=item.quantity,
        price=record.price,
        unit_type=record.packaging.unit_type,
        category=record.category,
        attributes=record.attributes,
        price_updated=record.price_updated,
    )


def to_quote_line(index: int, item: ResolvedLineItem | Mapping[str, Any]) -> QuoteLine:
    """Normalise one line item; unsupported objects raise ``TypeError``."""
    if isinstance(item, ResolvedLineItem):
        return _from_resolved(index, item)
    if isinstance(item, Mapping):
        return _from_mapping(index, item)
    raise TypeError(
        f"Line item {index} must be a ResolvedLineItem or a mapping, "
        f"not {type(item).__name__}"
    )


def to_labour_item(item: LabourItem | Mapping[str, Any]) -> LabourItem:
    if isinstance(item, LabourItem):
        return item
    if isinstance(item, Mapping):
        return LabourItem.model_validate(item)
    raise TypeError(f"Labour item must be a LabourItem or a mapping, not {type(item).__name__}")


@dataclass(frozen=True)
class QuoteContext:
    """Everything the rules need, read once per :meth:`Validator.validate` call."""

    lines: tuple[QuoteLine, ...]
    job_type: str = ""
    labour: tuple[LabourItem, ...] = ()
    grand_total: float | None = None
    as_of: date = field(default_factory=date.today)
    thresholds: SanityThresholds = DEFAULT_THRESHOLDS

    @classmethod
    def build(
        cls,
        line_items: Sequence[ResolvedLineItem | Mapping[str, Any]],
        job_type: str | None = None,
        labour: Iterable[LabourItem | Mapping[str, Any]] = (),
        grand_total: float | None = None,
        as_of: date | None = None,
        thresholds: SanityThresholds | None = None,
    ) -> QuoteContext:
        return cls(
            lines=tuple(to_quote_line(i, item) for i, item in enumerate(line_items)),
            job_type=(job_type or "").strip().lower(),
            labour=tuple(to_labour_item(item) for item in labour),
            grand_total=grand_total,
            as_of=as_of or date.today(),
            thresholds=thresholds or DEFAULT_THRESHOLDS,
        )

    @property
    def materials_total(self) -> float:
        return sum(line.line_value for line in self.lines)

    @property
    def labour_total(self) -> float:
        return sum(item.cost for item in self.labour)

    @property
    def total(self) -> float:
        """Caller-supplied grand total, else materials plus labour."""
        if self.grand_total is not None:
            return self.grand_total
        return self.materials_total + self.labour_total

    @property
    def has_labour(self) -> bool:
        return len(self.labour) > 0
