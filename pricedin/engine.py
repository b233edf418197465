"""QuoteEngine — the single entry point for catalog-backed quoting.

Usage::

    from pricedin import QuoteEngine

    engine = QuoteEngine(records)
    engine.resolve([{"searchTerm": "140X45 H3.2 SG8", "qtyToOrder": 12}])
    engine.size_deck({"length": 6, "width": 4, "height": 600})
    engine.validate(line_items, "deck", labour=[...])
    draft = engine.quote_from_ai(ai_text, "deck")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pricedin.catalog.ai import parse_ai_labour, parse_ai_response
from pricedin.catalog.index import CatalogIndex
from pricedin.catalog.resolver import Request, Resolver
from pricedin.config import SanityThresholds, load_thresholds
from pricedin.models.catalog import CatalogRecord
from pricedin.models.quote import LabourItem, ResolvedLineItem
from pricedin.structural.calculator import DeckGeometry, SpanResult, size_deck
from pricedin.validation.report import ValidationReport
from pricedin.validation.validator import Validator

logger = logging.getLogger(__name__)


@dataclass
class QuoteDraft:
    """Resolved lines, labour and the validation report for one AI estimate."""

    items: list[ResolvedLineItem] = field(default_factory=list)
    labour: list[LabourItem] = field(default_factory=list)
    report: ValidationReport = field(default_factory=ValidationReport)

    @property
    def resolved(self) -> list[ResolvedLineItem]:
        return [item for item in self.items if item.matched]

    @property
    def unmatched(self) -> list[ResolvedLineItem]:
        return [item for item in self.items if not item.matched]

    @property
    def materials_total(self) -> float:
        return sum(item.line_value for item in self.items)

    @property
    def can_finalize(self) -> bool:
        return self.report.can_finalize


class QuoteEngine:
    """Catalog index, resolver, sizing calculator and validator behind one object.

    The index is built once here and never mutated, so one engine can
    serve concurrent quote sessions.  No quote state is kept between calls.

    Parameters
    ----------
    records:
        Catalog records, or an already-built :class:`CatalogIndex`.
    thresholds:
        Sanity thresholds; defaults to :func:`~pricedin.config.load_thresholds`.
    """

    def __init__(
        self,
        records: Iterable[CatalogRecord] | CatalogIndex,
        thresholds: SanityThresholds | None = None,
    ) -> None:
        self.thresholds = thresholds or load_thresholds()
        self.index = records if isinstance(records, CatalogIndex) else CatalogIndex.build(records)
        self.resolver = Resolver(self.index, self.thresholds)
        self.validator = Validator(self.thresholds)

    def resolve(self, suggestions: Iterable[Request]) -> list[ResolvedLineItem]:
        """Resolve and merge a batch of requests."""
        return self.resolver.resolve_all(suggestions)

    def validate(
        self,
        line_items: Sequence[ResolvedLineItem | Mapping[str, Any]],
        job_type: str | None = None,
        labour: Iterable[LabourItem | Mapping[str, Any]] = (),
        grand_total: float | None = None,
        as_of: date | None = None,
    ) -> ValidationReport:
        return self.validator.validate(
            line_items, job_type, labour=labour, grand_total=grand_total, as_of=as_of,
        )

    def size_deck(self, geometry: DeckGeometry | Mapping[str, Any]) -> SpanResult:
        return size_deck(geometry)

    def quote_from_ai(
        self,
        text: str,
        job_type: str | None = None,
        labour: Iterable[LabourItem | Mapping[str, Any]] | None = None,
        as_of: date | None = None,
    ) -> QuoteDraft:
        """Parse an AI answer, resolve its materials and validate the result.

        When *labour* is *None* the AI's own builder-hours estimate is used,
        if it gave one.
        """
        suggestions = parse_ai_response(text)
        items = self.resolver.resolve_all(suggestions)

        if labour is None:
            ai_labour = parse_ai_labour(text)
            labour_items = [ai_labour] if ai_labour is not None else []
        else:
            labour_items = [
                item if isinstance(item, LabourItem) else LabourItem.model_validate(item)
                for item in labour
            ]

        report = self.validator.validate(items, job_type, labour=labour_items, as_of=as_of)
        logger.info(
            "AI quote: %d suggestion(s) -> %d line(s), %d error(s), %d warning(s)",
            len(suggestions), len(items), len(report.errors), len(report.warnings),
        )
        return QuoteDraft(items=items, labour=labour_items, report=report)
