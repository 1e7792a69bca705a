"""Card text: fills summary cards after positions are final.

Text is optional: a summarizer that fails, returns nothing, or returns only
preamble removes its card; it never affects note positions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from thoughtlands.engine.collaborators import Summarizer
from thoughtlands.engine.context import Card, CardKind, LayoutItem, LayoutResult
from thoughtlands.llm.prompts import build_prompt
from thoughtlands.llm.summary_formatter import clean_summary, note_excerpt

logger = logging.getLogger(__name__)


def source_texts(card: Card, items: Sequence[LayoutItem]) -> list[str]:
    """Excerpts of the card's source notes that have any text."""
    by_id = {item.id: item for item in items}
    texts: list[str] = []
    for item_id in card.source_ids:
        item = by_id.get(item_id)
        if item is None or not item.text.strip():
            continue
        texts.append(note_excerpt(item.text))
    return texts


async def fill_card_text(
    result: LayoutResult,
    items: Sequence[LayoutItem],
    summarizer: Summarizer | None,
    concept_text: str = "",
) -> LayoutResult:
    """Set concept and summary card text in place; drop summary cards left without text.

    Summaries are requested one card at a time.
    """
    kept: list[Card] = []
    for card in result.cards:
        if card.kind == CardKind.CONCEPT:
            if not card.text:
                card.text = concept_text or None
            kept.append(card)
            continue

        if not card.needs_summary or card.text:
            kept.append(card)
            continue

        text = await _summarize_card(card, items, summarizer, concept_text)
        if text:
            card.text = text
            kept.append(card)
        else:
            logger.info("Dropping %s card (%d sources): no summary", card.kind.value,
                        len(card.source_ids))

    result.cards = kept
    return result


async def _summarize_card(
    card: Card,
    items: Sequence[LayoutItem],
    summarizer: Summarizer | None,
    concept_text: str,
) -> str:
    if summarizer is None:
        return ""
    texts = source_texts(card, items)
    if not texts:
        return ""
    prompt = build_prompt(card.kind.value, texts, concept=concept_text)
    try:
        raw = await summarizer.summarize(prompt, texts)
    except Exception as e:
        label = f"cluster {card.cluster_id}" if card.cluster_id is not None else card.kind.value
        logger.warning("Failed to generate summary for %s: %s", label, e)
        return ""
    return clean_summary(raw)
