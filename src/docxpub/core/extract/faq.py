"""Question/answer pairing over an FAQ window"""

import re
from typing import Sequence

import structlog

from docxpub.core.blocks import BlockNode
from docxpub.core.extract.sections import Window
from docxpub.core.models import QAPair


logger = structlog.get_logger(__name__)

ORDINAL_PREFIX_RE = re.compile(r'^\d+\.\s+')
LEADING_ORDINAL_RE = re.compile(r'^\d+\.\s*')
Q_MARKER_RE = re.compile(r'^Q:\s*', re.IGNORECASE)
WHITESPACE_RE = re.compile(r'\s+')
INLINE_ANSWER_RE = re.compile(r'^(\d+\.\s+.*?\?)(.*)$', re.DOTALL)
BOLD_MARKERS = ('<strong>', '<b>')
MAX_PLAIN_QUESTION_CHARS = 200


def clean_question(text: str) -> str:
    """Strip a leading ordinal and 'Q:' marker, collapse whitespace, trim."""
    if not text:
        return ""
    cleaned = LEADING_ORDINAL_RE.sub('', text)
    cleaned = Q_MARKER_RE.sub('', cleaned)
    return WHITESPACE_RE.sub(' ', cleaned).strip()


def is_question(block: BlockNode) -> bool:
    """Numbered, bold-and-ends-with-?, or a short plain line ending with ?."""
    text = block.text
    if not text:
        return False
    if ORDINAL_PREFIX_RE.match(text):
        return True
    if text.endswith('?'):
        markup = block.inner_markup
        return any(m in markup for m in BOLD_MARKERS) or len(text) < MAX_PLAIN_QUESTION_CHARS
    return False


class _Pairing:
    """Pending question/answer; emits a pair only when both halves exist."""

    def __init__(self):
        self.pairs: list[QAPair] = []
        self.question = ""
        self.answer = ""
        self.collecting = False

    def flush(self) -> None:
        if self.question and self.answer:
            self.pairs.append(QAPair(question=clean_question(self.question), answer=self.answer.strip()))
        self.question = ""
        self.answer = ""
        self.collecting = False

    def start(self, text: str) -> None:
        self.flush()
        m = INLINE_ANSWER_RE.match(text)
        if m and m.group(2).strip():
            self.question, self.answer = m.group(1), m.group(2).strip()
        else:
            self.question, self.answer = text, ""
        self.collecting = True

    def append(self, markup: str) -> None:
        self.answer = f"{self.answer} {markup}" if self.answer else markup


def extract_faq(blocks: Sequence[BlockNode], window: Window) -> list[QAPair]:
    """Pair questions with the answer blocks that follow them.

    The window's first block is the FAQ heading and is skipped. When the block
    after an answer block is itself a question the pair is flushed right away;
    the following question then finds nothing pending, so no pair is emitted twice.
    """
    if window.empty:
        return []
    pending = _Pairing()
    end = window.end

    for i in range(window.start + 1, end):
        block = blocks[i]
        if not block.text:
            continue
        if is_question(block):
            pending.start(block.text)
        elif pending.collecting:
            pending.append(block.outer_markup)
            if i + 1 < end and is_question(blocks[i + 1]):
                pending.flush()

    pending.flush()
    logger.debug("faq.extracted", pairs=len(pending.pairs), start=window.start, end=end)
    return pending.pairs
