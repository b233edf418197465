"""AI response parsing — pull the materials payload out of free assistant text.

The assistant is asked for JSON but answers in prose around it, sometimes
in a fenced block, sometimes inline, sometimes with a stray ``{`` in the
prose before the real object.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from pricedin.config import DEFAULT_BUILDER_RATE
from pricedin.models.quote import AISuggestion, LabourItem

logger = logging.getLogger(__name__)

_FENCED_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.S)


def _balanced_object(text: str, start: int) -> str | None:
    """Return the ``{...}`` starting at *start*, honouring JSON strings."""
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if escape:
            escape = False
            continue
        if ch == "\\" and in_string:
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def _load(candidate: str) -> dict[str, Any] | None:
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("materials"), list):
        return payload
    return None


def extract_payload(text: str | None) -> dict[str, Any] | None:
    """Return the first JSON object in *text* carrying a ``materials`` list.

    Fenced code blocks are tried first, then every ``{`` in order with
    balanced-brace scanning.  Malformed candidates are skipped.
    """
    if not text:
        return None

    for m in _FENCED_RE.finditer(text):
        payload = _load(m.group(1))
        if payload is not None:
            return payload

    start = text.find("{")
    while start != -1:
        candidate = _balanced_object(text, start)
        if candidate is not None:
            payload = _load(candidate)
            if payload is not None:
                return payload
        start = text.find("{", start + 1)
    return None


def parse_ai_response(text: str | None) -> list[AISuggestion]:
    """Return the material suggestions in an AI response; ``[]`` if none."""
    payload = extract_payload(text)
    if payload is None:
        logger.debug("No materials payload found in AI response")
        return []

    suggestions: list[AISuggestion] = []
    for i, raw in enumerate(payload["materials"]):
        if not isinstance(raw, dict):
            logger.warning("Skipping AI material %d: not an object", i)
            continue
        try:
            suggestions.append(AISuggestion.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping AI material %d: %s", i, exc.errors()[0]["msg"])
    return suggestions


def parse_ai_labour(text: str | None, rate: float = DEFAULT_BUILDER_RATE) -> LabourItem | None:
    """Return the builder labour estimate in an AI response, if it has one."""
    payload = extract_payload(text)
    labour = (payload or {}).get("labour")
    if not isinstance(labour, dict):
        return None
    try:
        hours = float(labour.get("totalHours") or 0)
    except (TypeError, ValueError):
        return None
    if hours <= 0:
        return None
    return LabourItem(
        role="Builder",
        hours=hours,
        rate=rate,
        description=str(labour.get("description") or "Builder labour"),
    )
