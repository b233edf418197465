"""CatalogIndex — inverted token index over catalog records.

Built once from an immutable catalog snapshot and read-only afterwards, so
one index can be shared by any number of concurrent resolver calls.

Usage::

    from pricedin.catalog import CatalogIndex

    index = CatalogIndex.build(records)
    index.positions("H3.2")  # (0, 4, 17, ...)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from pricedin.config import MIN_TOKEN_LENGTH
from pricedin.models.catalog import CatalogRecord

logger = logging.getLogger(__name__)

# "140 x 45" / "140×45" -> "140X45" so sections survive as one token
_RE_SECTION = re.compile(r"(\d+)\s*[X×*]\s*(\d+)")
_RE_NON_TOKEN = re.compile(r"[^A-Z0-9.]+")


def normalize_text(text: str | None) -> str:
    """Upper-case *text*, join dimension pairs, blank out everything but ``[A-Z0-9.]``."""
    if not text:
        return ""
    normalized = _RE_SECTION.sub(r"\1X\2", text.upper())
    return _RE_NON_TOKEN.sub(" ", normalized).strip()


def tokenize(text: str | None) -> list[str]:
    """Return the distinct tokens of *text* in first-seen order.

    Tokens shorter than :data:`~pricedin.config.MIN_TOKEN_LENGTH` are
    dropped as noise, as are stray sentence dots ("H3.2." -> "H3.2").
    """
    tokens: list[str] = []
    seen: set[str] = set()
    for raw in normalize_text(text).split():
        token = raw.strip(".")
        if len(token) < MIN_TOKEN_LENGTH or token in seen:
            continue
        seen.add(token)
        tokens.append(token)
    return tokens


class CatalogIndex:
    """Inverted map from normalised token to ordered record positions."""

    def __init__(
        self,
        records: Sequence[CatalogRecord],
        postings: dict[str, tuple[int, ...]],
        record_tokens: Sequence[frozenset[str]],
    ) -> None:
        self._records = tuple(records)
        self._postings = dict(postings)
        self._record_tokens = tuple(record_tokens)

    @classmethod
    def build(cls, records: Iterable[CatalogRecord]) -> CatalogIndex:
        """Tokenise every record name once and build the inverted index."""
        snapshot = tuple(records)
        postings: dict[str, list[int]] = {}
        record_tokens: list[frozenset[str]] = []

        for position, record in enumerate(snapshot):
            tokens = tokenize(record.name)
            record_tokens.append(frozenset(tokens))
            for token in tokens:
                postings.setdefault(token, []).append(position)

        logger.info(
            "Catalog index built: %d records, %d distinct tokens",
            len(snapshot), len(postings),
        )
        return cls(
            snapshot,
            {token: tuple(positions) for token, positions in postings.items()},
            record_tokens,
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, token: object) -> bool:
        return token in self._postings

    @property
    def records(self) -> tuple[CatalogRecord, ...]:
        return self._records

    def record(self, position: int) -> CatalogRecord:
        return self._records[position]

    def positions(self, token: str) -> tuple[int, ...]:
        """Record positions whose name contains *token*, ascending; ``()`` if unknown."""
        return self._postings.get(token, ())

    def tokens_of(self, position: int) -> frozenset[str]:
        return self._record_tokens[position]

    def get(self, record_id: str) -> CatalogRecord | None:
        """Look a record up by id (linear scan)."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None
