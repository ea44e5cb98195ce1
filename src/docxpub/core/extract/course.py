"""Assemble a CourseDocument from a block sequence"""

from typing import Sequence

import structlog

from docxpub.core.blocks import BlockNode, is_heading
from docxpub.core.extract.faq import extract_faq
from docxpub.core.extract.sections import Window, locate_sections
from docxpub.core.extract.syllabus import build_syllabus
from docxpub.core.models import CourseDocument


logger = structlog.get_logger(__name__)

MIN_INTRO_CHARS = 20


def extract_overview(blocks: Sequence[BlockNode], window: Window) -> str:
    """Outer markup of every block after the overview marker."""
    return "".join(b.outer_markup for b in window.body(blocks, skip_marker=True))


def extract_objectives(blocks: Sequence[BlockNode], window: Window) -> tuple[str, list[str]]:
    """Return (intro markup, objective item markups) from the objectives window."""
    intro = ""
    items: list[str] = []
    for block in window.body(blocks):
        text = block.text
        if not text:
            continue
        if "objectives" in text.lower() and is_heading(block):
            continue

        if block.kind == 'p' and not intro and len(text) > MIN_INTRO_CHARS:
            intro = block.inner_markup
            continue

        if block.kind in ('ul', 'ol'):
            items.extend(li.inner_markup for li in block.find_all('li') if li.inner_markup)
        elif block.kind == 'li' and block.inner_markup:
            items.append(block.inner_markup)
    return intro, items


def extract_course(blocks: Sequence[BlockNode], title: str = "") -> CourseDocument:
    """Run every course extractor over one document; nothing is shared between calls."""
    sections = locate_sections(blocks)
    intro, objectives = extract_objectives(blocks, sections.objectives)
    course = CourseDocument(
        title=title,
        overview_markup=extract_overview(blocks, sections.overview),
        objectives_intro=intro,
        objectives=objectives,
        modules=build_syllabus(blocks, sections.syllabus_scan, title),
        faq=extract_faq(blocks, sections.faq),
    )
    logger.info(
        "course.extracted",
        title=title,
        overview=bool(course.overview_markup),
        objectives=len(course.objectives),
        modules=len(course.modules),
        faq=len(course.faq),
    )
    return course
