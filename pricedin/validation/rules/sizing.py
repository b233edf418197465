"""Member sizing rules — deck joists against the span table."""

from __future__ import annotations

from pricedin.extraction.schema import MaterialType
from pricedin.structural.span_tables import JOIST_SPANS, joist_table_summary
from pricedin.validation.context import QuoteContext
from pricedin.validation.jobs import is_deck_job
from pricedin.validation.rules.base import ValidationFinding, ValidationRule


def _smallest_joist() -> tuple[str, int]:
    size = JOIST_SPANS[0][1]
    return size, int(size.split("x")[0])


class UndersizedJoist(ValidationRule):
    """Deck joists must be at least the smallest tabulated section."""

    @property
    def name(self) -> str:
        return "sizing.undersized_joist"

    @property
    def description(self) -> str:
        return "Deck joists below the minimum tabulated cross-section."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        if not is_deck_job(context.job_type):
            return findings

        min_size, min_width = _smallest_joist()
        for line in context.lines:
            width = line.attributes.width
            if line.member is not MaterialType.JOIST or width is None or width >= min_width:
                continue
            findings.append(self.finding(
                f"UNDERSIZED DECK JOISTS: {line.attributes.cross_section} is below the "
                f"minimum {min_size} deck joist ({line.name}).",
                suggestion=f"Size joists from the span table: {joist_table_summary()}.",
                item=line.index,
                item_name=line.name,
            ))
        return findings


class SizingRules:
    """Collection of member sizing rules."""

    @staticmethod
    def all_rules() -> list[ValidationRule]:
        return [UndersizedJoist()]
