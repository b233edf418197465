"""CatalogRecord — one supplier product, enriched with parsed attributes.

Records are built once at ingestion time (:meth:`CatalogRecord.from_raw`)
and are immutable thereafter.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pricedin.extraction.schema import ParsedAttributes


class SellUnit(str, Enum):
    """Purchasable packaging granularity of a catalog item."""

    EACH = "each"
    BOX = "box"
    PACK = "pack"
    BAG = "bag"
    SHEET = "sheet"
    ROLL = "roll"
    TUBE = "tube"
    LINEAL_METRE = "lineal-metre"
    SQUARE_METRE = "square-metre"
    CUBIC_METRE = "cubic-metre"
    KILOGRAM = "kilogram"
    LITRE = "litre"
    SET = "set"
    PAIR = "pair"
    LENGTH = "length"
    """Timber sold per cut length ("per LGTH")."""


class Packaging(BaseModel):
    """How a product is bought versus how it is consumed."""

    model_config = ConfigDict(frozen=True)

    unit_type: str = "each"
    """Physical package: box, tin, bag, tube, sheet, length, meter, pack, roll, each."""

    units_per_package: float = Field(default=1, ge=1)
    """Consumable units in one package (screws per box, litres per tin, ...)."""

    sell_unit: SellUnit = SellUnit.EACH


def _slug(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "-", value.lower())
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug[:50]


class CatalogRecord(BaseModel):
    """A single sellable catalog SKU."""

    model_config = ConfigDict(frozen=True)

    id: str
    supplier: str = "Unknown"
    name: str
    code: str = ""
    price: float = Field(default=0.0, ge=0)
    unit: SellUnit = SellUnit.EACH
    category: str = ""
    subcategory: str = ""
    attributes: ParsedAttributes = Field(default_factory=ParsedAttributes)
    packaging: Packaging = Field(default_factory=Packaging)
    price_updated: date | None = None
    """Date of the last supplier price refresh, if known."""

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> CatalogRecord:
        """Build a record from a raw supplier row.

        *raw* carries ``name``, ``price``, ``unit``, ``code``, ``supplier``,
        ``category`` and ``subcategory``; optional ``id`` and
        ``price_updated`` / ``priceUpdated``.  The extractor runs once here.
        A row without a name or with a negative price raises pydantic
        ``ValidationError``.
        """
        from pricedin.extraction import extract
        from pricedin.extraction.packaging import infer_packaging, normalise_unit

        name = (raw.get("name") or "").strip()
        code = str(raw.get("code") or "").strip()
        raw_unit = raw.get("unit") or ""

        return cls.model_validate({
            "id": raw.get("id") or _slug(code or name),
            "supplier": raw.get("supplier") or "Unknown",
            "name": name or None,
            "code": code,
            "price": raw.get("price") if raw.get("price") is not None else 0.0,
            "unit": normalise_unit(raw_unit),
            "category": raw.get("category") or "",
            "subcategory": raw.get("subcategory") or "",
            "attributes": extract(name),
            "packaging": infer_packaging(name, raw_unit),
            "price_updated": raw.get("price_updated") or raw.get("priceUpdated"),
        })

    def describe(self) -> str:
        """Attribute description with the display name as fallback."""
        return self.attributes.describe() or self.name
