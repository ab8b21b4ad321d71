# Recovers the plain text a user typed from a Slack message's rich-text blocks

import logging
from typing import Iterable, Iterator

from acronym_bot.models.slack_event import RICH_TEXT, TEXT_ELEMENT, Block

logger = logging.getLogger(__name__)


def iter_text_fragments(blocks: Iterable[Block]) -> Iterator[str]:
    """Yields the non-empty text of every text element one level below each
    top-level element of every rich_text block, in message order.

    Slack nests typed text inside a section element, e.g. a rich_text block
    holding a rich_text_section whose children are a user mention and a text
    run. Deeper levels (quotes, lists of sections) are not visited.
    """
    for block in blocks:
        if block.type != RICH_TEXT:
            continue
        for element in block.elements:
            for child in element.elements:
                if child.type == TEXT_ELEMENT and child.text:
                    yield child.text


def extract_text(blocks: Iterable[Block]) -> str:
    fragments = list(iter_text_fragments(blocks))
    logger.debug(f"Extracted text fragments: {fragments}")
    return " ".join(fragments).strip()
