"""Quote-completeness rules — empty quotes, zero quantities, missing labour."""

from __future__ import annotations

import re

from pricedin.extraction.schema import MaterialType
from pricedin.validation.context import QuoteContext, QuoteLine
from pricedin.validation.rules.base import ValidationFinding, ValidationRule

_FRAMING_MEMBERS = frozenset({
    MaterialType.FRAMING,
    MaterialType.BEARER,
    MaterialType.JOIST,
    MaterialType.RAFTER,
    MaterialType.PURLIN,
})
_FRAMING_WORDS = re.compile(r"\b(?:STUDS?|TIMBER)\b")


def is_framing_timber(line: QuoteLine) -> bool:
    """True for framing / structural timber that needs a builder to install."""
    return line.member in _FRAMING_MEMBERS or bool(_FRAMING_WORDS.search(line.text))


class EmptyQuote(ValidationRule):
    """A quote needs at least one material line."""

    @property
    def name(self) -> str:
        return "completeness.empty"

    @property
    def description(self) -> str:
        return "Quote has no line items."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        if context.lines:
            return []
        return [self.finding(
            "Quote is empty - add materials before finalising.",
            suggestion="Add materials from the catalog or an AI estimate.",
        )]


class NonPositiveQuantity(ValidationRule):
    """Every line needs a positive quantity."""

    @property
    def name(self) -> str:
        return "completeness.quantity"

    @property
    def description(self) -> str:
        return "Line items with zero, negative or missing quantity."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        return [
            self.finding(
                f"{line.name or 'Line ' + str(line.index + 1)}: quantity is zero or missing.",
                suggestion="Enter a quantity of at least 1 or remove the line.",
                item=line.index,
                item_name=line.name,
            )
            for line in context.lines
            if line.quantity <= 0
        ]


class MissingLabour(ValidationRule):
    """Framing timber without any labour line."""

    @property
    def name(self) -> str:
        return "completeness.labour"

    @property
    def description(self) -> str:
        return "Quote has framing timber but no labour."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        if context.has_labour:
            return []
        framing = [line for line in context.lines if is_framing_timber(line)]
        if not framing:
            return []
        return [self.finding(
            f"Quote has framing materials ({len(framing)} line(s)) but no labour.",
            suggestion="Add builder hours before finalising.",
        )]


class CompletenessRules:
    """Collection of quote-completeness rules."""

    @staticmethod
    def all_rules() -> list[ValidationRule]:
        return [EmptyQuote(), NonPositiveQuantity(), MissingLabour()]
