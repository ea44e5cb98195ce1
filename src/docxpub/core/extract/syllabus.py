"""Syllabus window to Module -> Lesson -> item hierarchy via an ordered rule table

Each block is offered to the rules in order; the first rule whose predicate
matches applies its action, which either moves on to the next block or stops
the scan. Builder state is an explicit tag (no module / in module / in lesson)
over an arena of completed modules.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

import structlog

from docxpub.core.blocks import BlockNode, heading_level, is_heading
from docxpub.core.extract.sections import SYLLABUS_KEYWORDS, NUMBERED_COURSE_OBJECTIVES_RE, Window
from docxpub.core.models import Lesson, Module
from docxpub.core.utils.ordinal import lesson_number, module_number, sort_by_ordinal


logger = structlog.get_logger(__name__)

MODULE_MARKER_RE = re.compile(r'^module\s*\d+:', re.IGNORECASE)
MODULE_UPPER_RE = re.compile(r'^MODULE\s*\d+')
LESSON_MARKER_RE = re.compile(r'^lesson\s*\d+:', re.IGNORECASE)
LESSON_UPPER_RE = re.compile(r'^LESSON\s*\d+')
LESSON_ANYWHERE_RE = re.compile(r'lesson\s*\d+:', re.IGNORECASE)
LESSON_SEGMENT_RE = re.compile(r'(lesson\s*\d+:[\s\S]*?)(?=lesson\s*\d+:|\Z)', re.IGNORECASE)
NUMBERED_TEXT_RE = re.compile(r'\d+\.')

TERMINATION_KEYWORDS = ("final examination", "faq", "frequently asked questions")
DESCRIPTION_LOOKAHEAD = 2
SYNTHETIC_TITLE_CHARS = 50


class BuilderState(Enum):
    NO_MODULE = "no_module"
    IN_MODULE = "in_module"
    IN_LESSON = "in_lesson"


class Step(Enum):
    NEXT = "next"
    STOP = "stop"


def is_module_marker(text: str) -> bool:
    return bool(MODULE_MARKER_RE.match(text) or MODULE_UPPER_RE.match(text))


def is_lesson_marker(text: str) -> bool:
    return bool(LESSON_MARKER_RE.match(text) or LESSON_UPPER_RE.match(text))


def split_lesson_segments(text: str) -> list[str]:
    """Split 'Lesson 1: A Lesson 2: B' into ['Lesson 1: A', 'Lesson 2: B']."""
    if not text:
        return []
    return [m.group(1).strip() for m in LESSON_SEGMENT_RE.finditer(text)]


def list_items(block: Optional[BlockNode]) -> list[str]:
    """Non-empty inner markup of every li under block, skipping lesson markers."""
    if block is None:
        return []
    items = []
    for li in block.find_all('li'):
        markup = li.inner_markup
        if markup and not LESSON_MARKER_RE.match(markup):
            items.append(markup)
    return items


def default_module_title(course_title: str) -> str:
    return f"{course_title or 'Course'} Content"


class SyllabusBuilder:
    """Accumulates modules and lessons; the open lesson joins its module only on flush."""

    def __init__(self, course_title: str = ""):
        self.course_title = course_title
        self.modules: list[Module] = []
        self._module: Optional[Module] = None
        self._lesson: Optional[Lesson] = None

    @property
    def state(self) -> BuilderState:
        if self._lesson is not None:
            return BuilderState.IN_LESSON
        if self._module is not None:
            return BuilderState.IN_MODULE
        return BuilderState.NO_MODULE

    @property
    def module(self) -> Optional[Module]:
        return self._module

    @property
    def lesson(self) -> Optional[Lesson]:
        return self._lesson

    def flush_lesson(self) -> None:
        if self._lesson is None:
            return
        self.ensure_module()
        self._module.lessons.append(self._lesson)
        self._lesson = None

    def flush_module(self) -> None:
        self.flush_lesson()
        if self._module is not None:
            self.modules.append(self._module)
            self._module = None

    def ensure_module(self) -> Module:
        if self._module is None:
            self._module = Module(title=default_module_title(self.course_title))
        return self._module

    def open_module(self, title: str, description: str = "") -> Module:
        self.flush_module()
        self._module = Module(title=title, description=description)
        return self._module

    def open_lesson(self, title: str, items: Optional[list[str]] = None) -> Lesson:
        self.flush_lesson()
        self.ensure_module()
        self._lesson = Lesson(title=title, items=list(items or []))
        return self._lesson

    def add_lesson(self, lesson: Lesson) -> None:
        """Append a completed lesson straight to the open module."""
        self.ensure_module().lessons.append(lesson)

    def add_item(self, markup: str) -> None:
        self._lesson.items.append(markup)

    def finish(self) -> list[Module]:
        self.flush_module()
        return self.modules


@dataclass
class Scan:
    """Per-block view handed to rule predicates and actions."""
    blocks: Sequence[BlockNode]
    window: Window
    builder: SyllabusBuilder
    index: int = 0
    in_section: bool = False          # used by the flat fallback pass only

    @property
    def block(self) -> BlockNode:
        return self.blocks[self.index]

    @property
    def text(self) -> str:
        return self.block.text

    @property
    def lower(self) -> str:
        return self.block.text.lower()


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[Scan], bool]
    apply: Callable[[Scan], Step] = lambda s: Step.NEXT


def run_rules(rules: Sequence[Rule], scan: Scan) -> None:
    """Offer each block in the window to the first matching rule."""
    for index in range(scan.window.start, scan.window.end):
        scan.index = index
        for rule in rules:
            if rule.matches(scan):
                if rule.apply(scan) is Step.STOP:
                    logger.debug("syllabus.stopped", rule=rule.name, index=index)
                    return
                break


# --- shared predicates ---

def _empty(s: Scan) -> bool:
    return not s.text


def _objectives_text(s: Scan) -> bool:
    return "course objectives" in s.lower or bool(NUMBERED_COURSE_OBJECTIVES_RE.match(s.lower))


def _syllabus_heading_text(s: Scan) -> bool:
    return any(k in s.lower for k in SYLLABUS_KEYWORDS)


def _terminates(s: Scan) -> bool:
    return any(k in s.lower for k in TERMINATION_KEYWORDS) or (
        is_heading(s.block, 3) and s.index > s.window.start + 2
    )


def _stop(s: Scan) -> Step:
    return Step.STOP


# --- structured pass ---

def _start_module(s: Scan) -> Step:
    module = s.builder.open_module(s.text)
    end = min(s.index + 1 + DESCRIPTION_LOOKAHEAD, s.window.end)
    for j in range(s.index + 1, end):
        nxt = s.blocks[j]
        text = nxt.text
        if "final examination" in text.lower():
            break
        if nxt.kind == 'p' and text and not is_module_marker(text) and not is_lesson_marker(text):
            module.description = text
            break
    return Step.NEXT


def _start_lessons(s: Scan) -> Step:
    segments = split_lesson_segments(s.text)
    s.builder.open_lesson(segments[0] if segments else s.text, list_items(s.block.find('ul')))
    for segment in segments[1:]:
        s.builder.add_lesson(Lesson(title=segment))
    return Step.NEXT


def _extend_lesson(s: Scan) -> Step:
    for item in list_items(s.block):
        s.builder.add_item(item)
    return Step.NEXT


def _standalone_item(s: Scan) -> Step:
    builder = s.builder
    if builder.state is BuilderState.IN_LESSON:
        builder.add_item(s.block.inner_markup)
    elif builder.state is BuilderState.IN_MODULE and len(s.text) > 10:
        number = len(builder.module.lessons) + 1
        builder.open_lesson(
            f"Lesson {number}: {s.text[:SYNTHETIC_TITLE_CHARS]}...",
            [s.block.inner_markup],
        )
    return Step.NEXT


def _needs_description(s: Scan) -> bool:
    return (
        s.block.kind == 'p'
        and s.builder.module is not None
        and not s.builder.module.description
    )


def _describe_module(s: Scan) -> Step:
    if len(s.text) > 20 and not MODULE_MARKER_RE.match(s.text) and not LESSON_MARKER_RE.match(s.text):
        s.builder.module.description = s.text
    return Step.NEXT


SYLLABUS_RULES: tuple[Rule, ...] = (
    Rule("empty", _empty),
    Rule("objectives_heading", _objectives_text),
    Rule("syllabus_heading", _syllabus_heading_text),
    Rule("termination", _terminates, _stop),
    Rule("module", lambda s: is_module_marker(s.text), _start_module),
    Rule("lesson", lambda s: bool(LESSON_ANYWHERE_RE.search(s.text)), _start_lessons),
    Rule("lesson_list", lambda s: s.block.kind == 'ul' and s.builder.state is BuilderState.IN_LESSON, _extend_lesson),
    Rule("list_item", lambda s: s.block.kind == 'li' and not LESSON_MARKER_RE.match(s.text), _standalone_item),
    Rule("description", _needs_description, _describe_module),
)


# --- flat fallback pass ---

def _enters_section(s: Scan) -> bool:
    return not s.in_section and any(k in s.lower for k in ("course content", "syllabus", "lessons"))


def _enter_section(s: Scan) -> Step:
    s.in_section = True
    return Step.NEXT


def _flat_terminates(s: Scan) -> bool:
    return s.in_section and (
        "final examination" in s.lower
        or "faq" in s.lower
        or (is_heading(s.block, 3) and s.index > s.window.start + 3 and "lesson" not in s.lower)
    )


def _flat_lesson_title(s: Scan) -> bool:
    level = heading_level(s.block)
    return (
        is_lesson_marker(s.text)
        or (s.block.kind == 'p' and bool(NUMBERED_TEXT_RE.search(s.text)))
        or (level in (3, 4) and len(s.text) < 100)
    )


def _flat_open_lesson(s: Scan) -> Step:
    s.builder.open_lesson(s.text, list_items(s.block.find('ul')))
    return Step.NEXT


def _append_item(s: Scan) -> Step:
    s.builder.add_item(s.block.inner_markup)
    return Step.NEXT


FLAT_RULES: tuple[Rule, ...] = (
    Rule("empty", _empty),
    Rule("objectives_heading", _objectives_text),
    Rule("enter_section", _enters_section, _enter_section),
    Rule("termination", _flat_terminates, _stop),
    Rule("outside_section", lambda s: not s.in_section),
    Rule("lesson", _flat_lesson_title, _flat_open_lesson),
    Rule("lesson_list", lambda s: s.block.kind == 'ul' and s.builder.state is BuilderState.IN_LESSON, _extend_lesson),
    Rule(
        "list_item",
        lambda s: s.block.kind == 'li' and s.builder.state is BuilderState.IN_LESSON and not LESSON_MARKER_RE.match(s.text),
        _append_item,
    ),
)


def extract_flat(blocks: Sequence[BlockNode], window: Window, course_title: str = "") -> list[Module]:
    """Lenient pass: every lesson goes into a single synthetic module."""
    builder = SyllabusBuilder(course_title)
    builder.open_module(default_module_title(course_title))
    run_rules(FLAT_RULES, Scan(blocks, window, builder))
    return [m for m in builder.finish() if m.lessons]


def sort_modules(modules: list[Module]) -> list[Module]:
    """Order lessons inside each module, then the modules themselves, by ordinal."""
    for module in modules:
        module.lessons = sort_by_ordinal(module.lessons, lambda lesson: lesson_number(lesson.title))
    return sort_by_ordinal(modules, lambda module: module_number(module.title))


def build_syllabus(blocks: Sequence[BlockNode], window: Window, course_title: str = "") -> list[Module]:
    """Build the sorted module hierarchy from the syllabus scan range.

    The flat fallback only runs when the range comes from a located syllabus heading.
    """
    if window.empty:
        return []
    builder = SyllabusBuilder(course_title)
    run_rules(SYLLABUS_RULES, Scan(blocks, window, builder))
    modules = builder.finish()

    if not modules and window.found:
        logger.info("syllabus.fallback", start=window.start, end=window.end)
        modules = extract_flat(blocks, window, course_title)

    logger.debug("syllabus.built", modules=len(modules), lessons=sum(len(m.lessons) for m in modules))
    return sort_modules(modules)
