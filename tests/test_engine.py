"""End-to-end tests for QuoteEngine: AI text in, validated draft out."""

from __future__ import annotations

import logging

import pytest

from pricedin import QuoteEngine
from pricedin.catalog import CatalogIndex

AI_ANSWER = """
Here's what you'll need for the 6 x 4 m deck:

```json
{
  "materials": [
    {"name": "Joist hangers", "searchTerm": "JOIST HANGER 140X45", "qtyToOrder": 12,
     "calculation": "2 per joist x 6 joists"},
    {"name": "Joists", "searchTerm": "190x45 H3.2 SG8", "qtyToOrder": 10},
    {"name": "Piles", "searchTerm": "125x125 H5 pile", "qtyToOrder": 9},
    {"name": "Deck screws", "searchTerm": "DECK SCREW 10G SS316", "qtyToOrder": 2, "totalNeeded": 900},
    {"name": "Nuralock jacks", "searchTerm": "NURALOCK JACK", "qtyToOrder": 9}
  ],
  "labour": {"totalHours": 16, "description": "Frame and deck"}
}
```
"""


@pytest.fixture
def engine(records) -> QuoteEngine:
    return QuoteEngine(records)


class TestQuoteFromAI:

    def test_draft(self, engine: QuoteEngine) -> None:
        draft = engine.quote_from_ai(AI_ANSWER, "deck")
        assert len(draft.items) == 5
        assert len(draft.resolved) == 4
        [missing] = draft.unmatched
        assert missing.name == "Nuralock jacks"
        assert missing.suggestions

        names = [item.record.name for item in draft.resolved]
        assert names == [
            "L/LOK 140 X 45 JOIST HANGER GALV",
            "190 X 45 RADIATA SG8 H3.2 KD 4.8M",
            "125 X 125 H5 PILE 2.4M",
            "DECK SCREW 10G X 65MM SS316 BOX 500",
        ]
        assert draft.materials_total == pytest.approx(12 * 4.2 + 10 * 52 + 9 * 45 + 2 * 95)
        assert draft.items[0].calculation == "2 per joist x 6 joists"

    def test_ai_labour_used_by_default(self, engine: QuoteEngine) -> None:
        draft = engine.quote_from_ai(AI_ANSWER, "deck")
        [labour] = draft.labour
        assert labour.hours == 16
        assert labour.cost == pytest.approx(16 * 95)
        assert draft.report.errors == []
        assert draft.can_finalize

    def test_explicit_empty_labour(self, engine: QuoteEngine) -> None:
        draft = engine.quote_from_ai(AI_ANSWER, "deck", labour=[])
        assert draft.labour == []
        assert [f.code for f in draft.report.errors] == ["completeness.labour"]
        assert not draft.can_finalize

    def test_no_payload(self, engine: QuoteEngine) -> None:
        draft = engine.quote_from_ai("I need more details about the deck.", "deck")
        assert draft.items == []
        assert [f.code for f in draft.report.errors] == ["completeness.empty"]

    def test_logs_summary(self, engine: QuoteEngine, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="pricedin"):
            engine.quote_from_ai(AI_ANSWER, "deck")
        assert any("AI quote" in r.getMessage() for r in caplog.records)


class TestEngineOperations:

    def test_accepts_prebuilt_index(self, index: CatalogIndex) -> None:
        engine = QuoteEngine(index)
        assert engine.index is index

    def test_unmatched_post_still_validated(self, engine: QuoteEngine) -> None:
        items = engine.resolve([{"name": "100x100 H4 Post", "qty": 6}])
        assert not items[0].matched
        report = engine.validate(items, "deck")
        assert [f.code for f in report.errors] == ["treatment.in_ground"]

    def test_size_deck(self, engine: QuoteEngine) -> None:
        result = engine.size_deck({"length": 6, "width": 4, "height": 600})
        assert result.joist_size == "240x45"
        assert result.bearer_size == "140x45"
