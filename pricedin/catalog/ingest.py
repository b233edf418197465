"""Catalog ingestion — raw supplier rows to :class:`CatalogRecord` values."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from pricedin.models.catalog import CatalogRecord

logger = logging.getLogger(__name__)


def load_records(rows: Iterable[Mapping[str, Any]], strict: bool = True) -> list[CatalogRecord]:
    """Enrich raw supplier rows, running the extractor once per row.

    With ``strict=True`` a malformed row raises pydantic ``ValidationError``;
    otherwise it is logged and left out.  Duplicate ids keep the first row.
    """
    records: list[CatalogRecord] = []
    seen: set[str] = set()
    for i, row in enumerate(rows):
        try:
            record = CatalogRecord.from_raw(dict(row))
        except ValidationError:
            if strict:
                raise
            logger.warning("Skipping catalog row %d: %r", i, row.get("name"))
            continue
        if record.id in seen:
            logger.debug("Duplicate catalog id %s at row %d", record.id, i)
            continue
        seen.add(record.id)
        records.append(record)
    logger.info("Loaded %d catalog records", len(records))
    return records
