"""Sanity-threshold rules — advisory warnings, never blocking."""

from __future__ import annotations

from pricedin.extraction.schema import MaterialType
from pricedin.validation.context import QuoteContext
from pricedin.validation.rules.base import ValidationFinding, ValidationRule
from pricedin.validation.sanity import line_sanity_checks

_NEEDS_FIXINGS = frozenset({MaterialType.DECKING, MaterialType.JOIST, MaterialType.BEARER})
_FIXINGS = frozenset({MaterialType.SCREW, MaterialType.NAIL})


class LineQuantities(ValidationRule):
    """Box, tin, bag and line-value magnitudes per line."""

    severity = "warning"

    @property
    def name(self) -> str:
        return "sanity.line"

    @property
    def description(self) -> str:
        return "Per-line quantities and values above the sanity thresholds."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for line in context.lines:
            for code, message in line_sanity_checks(
                line.name, line.unit_type, line.quantity, line.price, context.thresholds,
            ):
                findings.append(ValidationFinding(
                    severity=self.severity,
                    code=code,
                    message=message,
                    suggestion="Check for unit confusion (items vs boxes, m² vs tins, kg vs bags).",
                    item=line.index,
                    item_name=line.name,
                ))
        return findings


class LowTotal(ValidationRule):
    severity = "warning"

    @property
    def name(self) -> str:
        return "sanity.low_total"

    @property
    def description(self) -> str:
        return "Non-zero quote total below the floor."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        total = context.total
        if 0 < total < context.thresholds.total_floor:
            return [self.finding(
                f"Total ${total:,.0f} seems low - verify quantities.",
            )]
        return []


class HighTotal(ValidationRule):
    severity = "warning"

    @property
    def name(self) -> str:
        return "sanity.high_total"

    @property
    def description(self) -> str:
        return "Quote total above the ceiling for a small number of lines."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        total = context.total
        count = len(context.lines)
        t = context.thresholds
        if count < t.small_quote_items and total > t.total_ceiling:
            return [self.finding(
                f"Total ${total:,.0f} seems high for {count} items - verify quantities.",
            )]
        return []


class MissingFixings(ValidationRule):
    """Decking and deck framing need screws or nails somewhere in the quote."""

    severity = "warning"

    @property
    def name(self) -> str:
        return "sanity.missing_fixings"

    @property
    def description(self) -> str:
        return "Structural timber quoted without any fixings."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        needs = any(line.member in _NEEDS_FIXINGS for line in context.lines)
        if not needs:
            return []
        has_fixings = any(
            line.member in _FIXINGS or "SCREW" in line.text or "NAIL" in line.text
            for line in context.lines
        )
        if has_fixings:
            return []
        return [self.finding(
            "Quote has timber but no screws/nails - add fixings.",
            suggestion="Add deck screws or framing nails sized for the members quoted.",
        )]


class StalePrices(ValidationRule):
    """Supplier prices that have not been refreshed recently."""

    severity = "warning"

    @property
    def name(self) -> str:
        return "sanity.stale_prices"

    @property
    def description(self) -> str:
        return "Catalog prices older than the staleness threshold."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        limit = context.thresholds.stale_price_days
        for line in context.lines:
            if line.price_updated is None:
                continue
            age = (context.as_of - line.price_updated).days
            if age > limit:
                findings.append(self.finding(
                    f"{line.name}: price last updated {line.price_updated.isoformat()} "
                    f"({age} days ago).",
                    suggestion="Confirm the current price with the supplier.",
                    item=line.index,
                    item_name=line.name,
                ))
        return findings


class SanityRules:
    """Collection of sanity-threshold rules."""

    @staticmethod
    def all_rules() -> list[ValidationRule]:
        return [LineQuantities(), LowTotal(), HighTotal(), MissingFixings(), StalePrices()]
