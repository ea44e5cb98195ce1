"""Lexical section boundaries (Overview, Objectives, Syllabus, FAQ) in a block sequence"""

import re
from dataclasses import dataclass, replace
from typing import Callable, Sequence

import structlog

from docxpub.core.blocks import BlockNode, is_heading


logger = structlog.get_logger(__name__)

Predicate = Callable[[BlockNode], bool]

OBJECTIVES_KEYWORDS = ("course objectives", "learning objectives")
OBJECTIVES_END_KEYWORDS = ("syllabus", "course content", "faq", "frequently asked")
SYLLABUS_KEYWORDS = ("course content", "syllabus", "lessons", "modules")
FAQ_KEYWORDS = ("faq", "frequently asked questions")
FAQ_END_MARKER = "For Online Course Page:"

NUMBERED_OBJECTIVES_RE = re.compile(r'^\d+\.\d*\s*.*objectives', re.IGNORECASE)
NUMBERED_COURSE_OBJECTIVES_RE = re.compile(r'^\d+\.\d*\s*.*course\s*objectives', re.IGNORECASE)


@dataclass(frozen=True)
class Window:
    """Half-open block range [start, end); start is the marker block when found."""
    start: int
    end: int
    found: bool = True

    @property
    def empty(self) -> bool:
        return self.end <= self.start

    def body(self, blocks: Sequence[BlockNode], skip_marker: bool = False) -> list[BlockNode]:
        if self.empty:
            return []
        return list(blocks[self.start + 1 if skip_marker else self.start:self.end])


MISSING = Window(0, 0, found=False)


@dataclass(frozen=True)
class CourseSections:
    overview: Window
    objectives: Window
    syllabus: Window
    faq: Window
    syllabus_scan: Window = MISSING     # range the syllabus builder scans for markers

    def in_priority_order(self) -> list[Window]:
        return [self.overview, self.objectives, self.syllabus, self.faq]


def _lower(block: BlockNode) -> str:
    return block.text.lower()


def _contains(*keywords: str) -> Predicate:
    return lambda b: any(k in _lower(b) for k in keywords)


def find_first(blocks: Sequence[BlockNode], predicate: Predicate, start: int = 0) -> int:
    """Index of the earliest block at or after start matching predicate, else -1."""
    for i in range(max(start, 0), len(blocks)):
        if predicate(blocks[i]):
            return i
    return -1


# --- marker predicates ---

def is_objectives_marker(block: BlockNode) -> bool:
    text = _lower(block)
    return (
        any(k in text for k in OBJECTIVES_KEYWORDS)
        or ("objectives" in text and is_heading(block))
        or bool(NUMBERED_OBJECTIVES_RE.match(text))
    )


def is_objectives_end(block: BlockNode) -> bool:
    text = _lower(block)
    return (
        any(k in text for k in OBJECTIVES_END_KEYWORDS)
        or text.startswith("1.3")
        or (is_heading(block, 3) and "objectives" not in text)
    )


def is_syllabus_marker(block: BlockNode) -> bool:
    text = _lower(block)
    return any(k in text for k in SYLLABUS_KEYWORDS) and "course objectives" not in text


def is_faq_heading(block: BlockNode) -> bool:
    return is_heading(block) and any(k in _lower(block) for k in FAQ_KEYWORDS)


def _is_course_objectives_heading(block: BlockNode) -> bool:
    text = _lower(block)
    return ("course objectives" in text or "1.2" in text) and (
        is_heading(block) or bool(NUMBERED_COURSE_OBJECTIVES_RE.match(text))
    )


# --- per-section locators ---

def locate_overview(blocks: Sequence[BlockNode]) -> Window:
    start = find_first(blocks, _contains("overview"))
    if start == -1:
        return MISSING
    end = find_first(blocks, _contains("course objectives", "1.2"), start + 1)
    if end == -1:
        end = find_first(blocks, _contains("syllabus"), start + 1)
    return Window(start, end if end != -1 else len(blocks))


def locate_objectives(blocks: Sequence[BlockNode]) -> Window:
    start = find_first(blocks, is_objectives_marker)
    if start == -1:
        return MISSING
    end = find_first(blocks, is_objectives_end, start + 1)
    return Window(start, end if end != -1 else len(blocks))


def syllabus_search_start(blocks: Sequence[BlockNode]) -> int:
    """Index after the course objectives region, or 0 when there is none."""
    heading = find_first(blocks, _is_course_objectives_heading)
    if heading == -1:
        return 0
    region_end = find_first(blocks, _contains("syllabus", "1.3", "course content"), heading + 1)
    return region_end if region_end != -1 else 0


def locate_syllabus(blocks: Sequence[BlockNode]) -> Window:
    """Locate the syllabus heading, searching from the end of the objectives region."""
    start = find_first(blocks, is_syllabus_marker, syllabus_search_start(blocks))
    if start == -1:
        return MISSING
    return Window(start, len(blocks))


def locate_syllabus_scan(blocks: Sequence[BlockNode], syllabus: Window, faq: Window) -> Window:
    """Range scanned for module and lesson markers.

    This is the syllabus window when a heading was found. Otherwise it runs from
    the end of the objectives region up to the FAQ heading and stays flagged not
    found, so markers are still honoured but the flat fallback is skipped.
    """
    if syllabus.found:
        return syllabus
    start = syllabus_search_start(blocks)
    end = faq.start if faq.found and faq.start >= start else len(blocks)
    return Window(start, end, found=False)


def locate_faq(blocks: Sequence[BlockNode]) -> Window:
    start = find_first(blocks, is_faq_heading)
    if start == -1:
        return MISSING
    end = len(blocks)
    for i in range(start + 1, len(blocks)):
        block = blocks[i]
        if FAQ_END_MARKER in block.text or (
            is_heading(block) and "faq" not in _lower(block) and i > start + 3
        ):
            end = i
            break
    return Window(start, end)


def _clamp(windows: list[Window]) -> list[Window]:
    """End each window at the start of any later-priority window located after it."""
    clamped = []
    for i, window in enumerate(windows):
        end = window.end
        for later in windows[i + 1:]:
            if later.found and later.start > window.start:
                end = min(end, later.start)
        clamped.append(replace(window, end=end))
    return clamped


def locate_sections(blocks: Sequence[BlockNode]) -> CourseSections:
    """Locate all course sections; missing sections come back as MISSING windows."""
    overview, objectives, syllabus, faq = _clamp([
        locate_overview(blocks),
        locate_objectives(blocks),
        locate_syllabus(blocks),
        locate_faq(blocks),
    ])
    sections = CourseSections(
        overview, objectives, syllabus, faq,
        syllabus_scan=locate_syllabus_scan(blocks, syllabus, faq),
    )
    logger.debug(
        "sections.located",
        blocks=len(blocks),
        overview=(sections.overview.start, sections.overview.end, sections.overview.found),
        objectives=(sections.objectives.start, sections.objectives.end, sections.objectives.found),
        syllabus=(sections.syllabus.start, sections.syllabus.end, sections.syllabus.found),
        faq=(sections.faq.start, sections.faq.end, sections.faq.found),
        scan=(sections.syllabus_scan.start, sections.syllabus_scan.end),
    )
    return sections
