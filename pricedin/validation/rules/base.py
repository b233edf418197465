"""Abstract ValidationRule interface and the ValidationFinding it produces."""

from __future__ import annotations

import abc
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from pricedin.validation.context import QuoteContext

Severity = Literal["error", "warning"]


class ValidationFinding(BaseModel):
    """A single finding raised by a rule.

    Errors block finalisation; warnings are shown for review only.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str
    """Machine-stable dotted code, e.g. ``treatment.in_ground``."""

    message: str
    suggestion: str = ""
    item: int | None = None
    """Index into the validated line-item list, if the finding is about one line."""

    item_name: str = ""

    @property
    def blocking(self) -> bool:
        return self.severity == "error"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class ValidationRule(abc.ABC):
    """Base class for all quote validation rules."""

    severity: Severity = "error"

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short rule identifier, used as the finding code."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description."""

    @abc.abstractmethod
    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        """Run this rule against a quote.

        Parameters
        ----------
        context:
            Normalised quote lines, labour, job type and thresholds.

        Returns list of findings (empty if passing).
        """

    def finding(
        self,
        message: str,
        suggestion: str = "",
        item: int | None = None,
        item_name: str = "",
    ) -> ValidationFinding:
        """Build a finding carrying this rule's code and severity."""
        return ValidationFinding(
            severity=self.severity,
            code=self.name,
            message=message,
            suggestion=suggestion,
            item=item,
            item_name=item_name,
        )
