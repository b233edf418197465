"""Resolver — map free-text line-item requests onto catalog records.

Usage::

    from pricedin.catalog import CatalogIndex, Resolver

    resolver = Resolver(CatalogIndex.build(records))
    item = resolver.resolve({"searchTerm": "140X45 H3.2 SG8", "qtyToOrder": 12})
    item.record.name, item.quantity
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pricedin.catalog.index import CatalogIndex, tokenize
from pricedin.catalog.suggestions import search_suggestions
from pricedin.config import FALLBACK_NARROWING_TOKENS, KEY_TOKENS, SanityThresholds, load_thresholds
from pricedin.models.catalog import CatalogRecord
from pricedin.models.quote import AISuggestion, ResolvedLineItem
from pricedin.validation.sanity import line_sanity_checks

logger = logging.getLogger(__name__)

REASON_NO_TOKENS = "No search term"
REASON_NO_MATCH = "No match in catalog"

Request = AISuggestion | Mapping[str, Any]


@dataclass
class _Match:
    """Intermediate resolution result, before sanity warnings are attached."""

    request: AISuggestion
    quantity: int
    record: CatalogRecord | None = None
    confidence: float = 0.0
    notes: list[str] = field(default_factory=list)
    reason: str = ""


def _as_suggestion(request: Request) -> AISuggestion:
    if isinstance(request, AISuggestion):
        return request
    if isinstance(request, Mapping):
        return AISuggestion.model_validate(dict(request))
    raise TypeError(f"Request must be an AISuggestion or a mapping, not {type(request).__name__}")


def _requested_quantity(request: AISuggestion) -> int | None:
    qty = request.qty_to_order
    if qty is None or qty <= 0:
        return None
    return math.ceil(qty)


class Resolver:
    """Resolves requests against a shared, read-only :class:`CatalogIndex`."""

    def __init__(self, index: CatalogIndex, thresholds: SanityThresholds | None = None) -> None:
        self.index = index
        self.thresholds = thresholds or load_thresholds()

    # ------------------------------------------------------------------
    # Candidate search
    # ------------------------------------------------------------------

    def candidates(self, tokens: list[str]) -> list[int]:
        """Record positions surviving key-token (or leading-token) narrowing.

        A narrowing token absent from the index yields no candidates.
        """
        keys = [t for t in tokens if t in KEY_TOKENS]
        narrowing = keys or tokens[:FALLBACK_NARROWING_TOKENS]

        survivors: set[int] | None = None
        for token in narrowing:
            positions = self.index.positions(token)
            if not positions:
                return []
            survivors = set(positions) if survivors is None else survivors & set(positions)
            if not survivors:
                return []
        return sorted(survivors or ())

    def best_match(self, tokens: list[str]) -> tuple[int, int] | None:
        """Return ``(position, score)`` of the best candidate, or *None*.

        Score counts request tokens present in the record; ties go to the
        lowest catalog position.
        """
        wanted = set(tokens)
        best: tuple[int, int] | None = None
        for position in self.candidates(tokens):
            score = len(wanted & self.index.tokens_of(position))
            if best is None or score > best[1]:
                best = (position, score)
        return best

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _quantity(self, request: AISuggestion, record: CatalogRecord) -> tuple[int, list[str]]:
        """Sellable quantity for *record*, with any recalculation note."""
        notes: list[str] = []
        qty = _requested_quantity(request)
        total = request.total_needed

        if total is not None and total > 0:
            expected = max(1, math.ceil(total / record.packaging.units_per_package))
            if qty is None:
                qty = expected
            elif qty > expected * self.thresholds.recalc_factor:
                notes.append(
                    f"Quantity {qty} recalculated to {expected} "
                    f"({total:g} needed at {record.packaging.units_per_package:g} "
                    f"per {record.packaging.unit_type})"
                )
                logger.debug("Recalculated %r: %d -> %d", request.query, qty, expected)
                qty = expected

        return max(1, qty or 1), notes

    def _match(self, request: Request) -> _Match:
        suggestion = _as_suggestion(request)
        tokens = tokenize(suggestion.query)

        if not tokens:
            return _Match(
                request=suggestion,
                quantity=_requested_quantity(suggestion) or 1,
                reason=REASON_NO_TOKENS,
            )

        best = self.best_match(tokens)
        if best is None:
            logger.debug("Unmatched request %r", suggestion.query)
            return _Match(
                request=suggestion,
                quantity=_requested_quantity(suggestion) or 1,
                reason=REASON_NO_MATCH,
            )

        position, score = best
        record = self.index.record(position)
        quantity, notes = self._quantity(suggestion, record)
        return _Match(
            request=suggestion,
            quantity=quantity,
            record=record,
            confidence=round(score / len(tokens), 2),
            notes=notes,
        )

    def _finish(self, match: _Match, calculation: str | None = None) -> ResolvedLineItem:
        request = match.request
        calculation = request.calculation if calculation is None else calculation

        if match.record is None:
            name = request.name or request.query or "Unknown item"
            return ResolvedLineItem(
                quantity=match.quantity,
                calculation=calculation,
                name=name,
                search_term=request.search_term or "",
                reason=match.reason,
                suggestions=search_suggestions(name, request.search_term),
            )

        record = match.record
        warnings = list(match.notes)
        warnings.extend(
            message
            for _, message in line_sanity_checks(
                record.name,
                record.packaging.unit_type,
                match.quantity,
                record.price,
                self.thresholds,
            )
        )
        return ResolvedLineItem(
            record=record,
            quantity=match.quantity,
            calculation=calculation,
            warnings=warnings,
            name=request.name or record.name,
            search_term=request.search_term or "",
            confidence=match.confidence,
        )

    def resolve(self, request: Request) -> ResolvedLineItem:
        """Resolve one request; always returns exactly one line item.

        Parameters
        ----------
        request:
            An :class:`AISuggestion` or a mapping with ``searchTerm`` /
            ``name`` and ``qtyToOrder`` (or ``qty``), optionally
            ``totalNeeded`` and ``packageSize``.

        Returns
        -------
        ResolvedLineItem
            Matched (``record`` set) or unmatched with suggestions.
        """
        return self._finish(self._match(request))

    def resolve_all(self, requests: Iterable[Request]) -> list[ResolvedLineItem]:
        """Resolve every request, merging lines that match the same record.

        Merged lines sum their quantities and keep the position of the
        first occurrence.  Unmatched requests are never merged or dropped.
        """
        slots: list[_Match] = []
        calculations: list[list[str]] = []
        by_record: dict[str, int] = {}

        for request in requests:
            match = self._match(request)
            record = match.record
            if record is not None and record.id in by_record:
                slot = by_record[record.id]
                merged = slots[slot]
                merged.quantity += match.quantity
                merged.notes.extend(match.notes)
                merged.confidence = max(merged.confidence, match.confidence)
                if match.request.calculation:
                    calculations[slot].append(match.request.calculation)
                continue
            if record is not None:
                by_record[record.id] = len(slots)
            slots.append(match)
            calculations.append([match.request.calculation] if match.request.calculation else [])

        items = [
            self._finish(match, "; ".join(calc))
            for match, calc in zip(slots, calculations)
        ]
        unmatched = sum(1 for item in items if not item.matched)
        logger.debug("Resolved %d line(s), %d unmatched", len(items), unmatched)
        return items
