"""Validator — main entry point for quote compliance and sanity checks.

Usage::

    from pricedin.validation import Validator

    v = Validator()
    report = v.validate(line_items, "deck", labour=[{"role": "Builder", "hours": 16}])
    report.can_finalize
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from pricedin.config import SanityThresholds, load_thresholds
from pricedin.models.quote import LabourItem, ResolvedLineItem
from pricedin.validation.context import QuoteContext
from pricedin.validation.report import ValidationReport
from pricedin.validation.rules.base import ValidationFinding, ValidationRule
from pricedin.validation.rules.completeness import CompletenessRules
from pricedin.validation.rules.lining import LiningRules
from pricedin.validation.rules.sanity import SanityRules
from pricedin.validation.rules.sizing import SizingRules
from pricedin.validation.rules.treatment import TreatmentRules

logger = logging.getLogger(__name__)


class Validator:
    """Central validation engine with pluggable rule registry.

    Loads default rules on init.  Additional rules can be registered
    via :meth:`add_rule`; they run after the built-in rules.
    """

    def __init__(self, thresholds: SanityThresholds | None = None) -> None:
        self.thresholds = thresholds or load_thresholds()
        self.rules: list[ValidationRule] = []
        self._load_default_rules()

    def _load_default_rules(self) -> None:
        """Register all built-in rules."""
        self.rules.extend(TreatmentRules.all_rules())
        self.rules.extend(SizingRules.all_rules())
        self.rules.extend(LiningRules.all_rules())
        self.rules.extend(CompletenessRules.all_rules())
        self.rules.extend(SanityRules.all_rules())

    def add_rule(self, rule: ValidationRule) -> None:
        """Register an additional validation rule."""
        self.rules.append(rule)

    def validate(
        self,
        line_items: Sequence[ResolvedLineItem | Mapping[str, Any]],
        job_type: str | None = None,
        labour: Iterable[LabourItem | Mapping[str, Any]] = (),
        grand_total: float | None = None,
        as_of: date | None = None,
    ) -> ValidationReport:
        """Validate a quote against all registered rules.

        Parameters
        ----------
        line_items:
            Resolved line items or plain mappings with ``name``, ``qty``,
            ``price`` and optional ``unit`` / ``packaging`` /
            ``priceUpdated``.  Never modified.
        job_type:
            Free-text job label ("deck", "bathroom reno", ...).
        labour:
            Labour lines; none means the quote has no labour.
        grand_total:
            Quote total to test against the total thresholds.  Defaults to
            materials plus labour.
        as_of:
            Reference date for price staleness.  Defaults to today.

        Returns
        -------
        ValidationReport
        """
        context = QuoteContext.build(
            line_items,
            job_type=job_type,
            labour=labour,
            grand_total=grand_total,
            as_of=as_of,
            thresholds=self.thresholds,
        )

        findings: list[ValidationFinding] = []
        for rule in self.rules:
            found = rule.check(context)
            if found:
                logger.debug("Rule %s raised %d finding(s)", rule.name, len(found))
            findings.extend(found)

        return ValidationReport(
            job_type=context.job_type,
            findings=findings,
            item_count=len(context.lines),
        )
