"""ValidationReport — findings partitioned into blocking and advisory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pricedin.validation.rules.base import ValidationFinding


class ValidationReport:
    """Complete validation report for one quote."""

    def __init__(
        self,
        job_type: str = "",
        findings: list[ValidationFinding] | None = None,
        item_count: int = 0,
        validated_at: datetime | str | None = None,
    ) -> None:
        self.job_type = job_type
        self.findings = list(findings or [])
        self.item_count = item_count
        if validated_at is None:
            self.validated_at = datetime.now(timezone.utc)
        elif isinstance(validated_at, str):
            self.validated_at = datetime.fromisoformat(validated_at)
        else:
            self.validated_at = validated_at

    @property
    def errors(self) -> list[ValidationFinding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> list[ValidationFinding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def blocking(self) -> bool:
        return bool(self.errors)

    @property
    def can_finalize(self) -> bool:
        return not self.blocking

    @property
    def status(self) -> str:
        if self.errors:
            return "error"
        if self.warnings:
            return "warning"
        return "ok"

    def summary(self) -> dict[str, str]:
        """Status plus a one-line headline for display."""
        errors, warnings = self.errors, self.warnings
        if errors:
            return {"status": "error", "message": errors[0].message}
        if warnings:
            return {
                "status": "warning",
                "message": f"{len(warnings)} warning(s) - review before finalising",
            }
        return {"status": "ok", "message": "Quote ready to finalise"}

    def to_markdown(self) -> str:
        """Render the report as a Markdown document."""
        lines: list[str] = []

        lines.append(f"# Quote Validation — {self.job_type or 'General'}")
        lines.append("")
        lines.append(f"**Status:** {self.status.upper()}")
        lines.append(f"**Line items:** {self.item_count}")
        lines.append(f"**Validated:** {self.validated_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")
        lines.append(f"**Summary:** {len(self.errors)} errors, {len(self.warnings)} warnings")
        lines.append("")

        if self.findings:
            lines.append("## Findings")
            lines.append("")
            lines.append("| Severity | Code | Item | Message | Suggestion |")
            lines.append("|----------|------|------|---------|------------|")
            for f in self.findings:
                item = "" if f.item is None else str(f.item + 1)
                msg = f.message.replace("|", "\\|")
                sug = f.suggestion.replace("|", "\\|")
                lines.append(f"| {f.severity.upper()} | {f.code} | {item} | {msg} | {sug} |")
            lines.append("")
        else:
            lines.append("No issues found. Quote passes all checks.")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_dict(self) -> dict[str, Any]:
        """Return dict representation."""
        return {
            "job_type": self.job_type,
            "status": self.status,
            "can_finalize": self.can_finalize,
            "item_count": self.item_count,
            "validated_at": self.validated_at.isoformat(),
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
        }
