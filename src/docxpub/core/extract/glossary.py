"""Two-column glossary table extraction"""

import string
from typing import Sequence

import structlog

from docxpub.core.blocks import BlockNode
from docxpub.core.models import GlossaryEntry


logger = structlog.get_logger(__name__)

LETTERS = tuple(string.ascii_uppercase)


def _first_table(blocks: Sequence[BlockNode]) -> BlockNode | None:
    for block in blocks:
        if block.kind == 'table':
            return block
        nested = block.find('table')
        if nested is not None:
            return nested
    return None


def extract_glossary(blocks: Sequence[BlockNode]) -> list[GlossaryEntry]:
    """Read term/definition rows from the first table; the header row is skipped."""
    table = _first_table(blocks)
    if table is None:
        logger.info("glossary.no_table")
        return []

    entries = []
    rows = table.find_all('tr')
    for row in rows[1:]:
        cells = row.find_all('td')
        if len(cells) != 2:
            continue
        term = cells[0].text
        definition = cells[1].inner_markup
        if term and definition:
            entries.append(GlossaryEntry(term=term, definition=definition))

    logger.info("glossary.extracted", rows=max(len(rows) - 1, 0), entries=len(entries))
    return entries


def group_by_letter(entries: Sequence[GlossaryEntry]) -> dict[str, list[GlossaryEntry]]:
    """Bucket entries by upper-cased first character, keeping insertion order."""
    groups: dict[str, list[GlossaryEntry]] = {}
    for entry in entries:
        term = entry.term.strip()
        if not term:
            continue
        groups.setdefault(term[0].upper(), []).append(entry)
    return groups
