"""Shared fixtures — a small synthetic NZ building-supplies catalog."""

from __future__ import annotations

import pytest

from pricedin.catalog import CatalogIndex, Resolver, load_records
from pricedin.models.catalog import CatalogRecord

CATALOG_ROWS = [
    {"name": "140 X 45 RADIATA SG8 H3.2 KD 4.8M", "price": 38.50, "unit": "LGTH", "code": "F1404548", "supplier": "ITM", "category": "Timber"},
    {"name": "190 X 45 RADIATA SG8 H3.2 KD 4.8M", "price": 52.00, "unit": "LGTH", "code": "F1904548", "supplier": "ITM", "category": "Timber"},
    {"name": "90 X 45 RADIATA SG8 H1.2 KD 2.4M", "price": 12.00, "unit": "LGTH", "code": "F904524", "supplier": "ITM", "category": "Timber"},
    {"name": "L/LOK 140 X 45 JOIST HANGER GALV", "price": 4.20, "unit": "EA", "code": "LL14045", "supplier": "ITM", "category": "Hardware"},
    {"name": "125 X 125 H5 PILE 2.4M", "price": 45.00, "unit": "EA", "code": "P12512524", "supplier": "ITM", "category": "Timber"},
    {"name": "GIB AQUALINE 2400X1200X10MM", "price": 48.00, "unit": "SHT", "code": "GAQ2412", "supplier": "ITM", "category": "Linings"},
    {"name": "GIB STANDARD 2400X1200X10MM", "price": 28.00, "unit": "SHT", "code": "GST2412", "supplier": "ITM", "category": "Linings"},
    {"name": "DECK SCREW 10G X 65MM SS316 BOX 500", "price": 95.00, "unit": "BOX", "code": "DS1065", "supplier": "ITM", "category": "Fixings"},
    {"name": "PINE DECKING 140X32 H3.2 5.4M", "price": 30.00, "unit": "LGTH", "code": "DK1403254", "supplier": "ITM", "category": "Decking"},
]


@pytest.fixture
def records() -> list[CatalogRecord]:
    return load_records(CATALOG_ROWS)


@pytest.fixture
def index(records: list[CatalogRecord]) -> CatalogIndex:
    return CatalogIndex.build(records)


@pytest.fixture
def resolver(index: CatalogIndex) -> Resolver:
    return Resolver(index)
