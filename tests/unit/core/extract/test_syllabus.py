"""Unit tests for core/extract/syllabus.py"""

import pytest

from docxpub.core.blocks import parse_blocks
from docxpub.core.extract.sections import MISSING, locate_sections
from docxpub.core.extract.syllabus import (
    BuilderState,
    SyllabusBuilder,
    build_syllabus,
    is_lesson_marker,
    is_module_marker,
    list_items,
    split_lesson_segments,
)


def _build(markup: str, title: str = "Safety"):
    seq = parse_blocks(markup)
    return build_syllabus(seq, locate_sections(seq).syllabus_scan, title)


# --- markers ---

@pytest.mark.parametrize("text,expected", [
    ("Module 1: Intro", True),
    ("module 12: Advanced", True),
    ("MODULE 2 Overview", True),
    ("Module 3 intro", False),
    ("Modules", False),
])
def test_is_module_marker(text, expected):
    """Modules need 'Module N:' or an upper-case 'MODULE N'."""
    assert is_module_marker(text) is expected


@pytest.mark.parametrize("text,expected", [
    ("Lesson 1: Basics", True),
    ("LESSON 4", True),
    ("lesson 4 basics", False),
    ("See Lesson 1: Basics", False),
])
def test_is_lesson_marker(text, expected):
    """Lesson markers must start the text."""
    assert is_lesson_marker(text) is expected


def test_split_lesson_segments():
    """Several lesson markers in one paragraph split into separate titles."""
    assert split_lesson_segments("Lesson 1: Alpha Lesson 2: Beta") == ["Lesson 1: Alpha", "Lesson 2: Beta"]
    assert split_lesson_segments("") == []


def test_list_items_skip_lesson_markers():
    """Bullets that are lesson markers are not lesson content."""
    ul = parse_blocks("<ul><li>Point one</li><li>Lesson 2: Next</li><li></li></ul>")[0]
    assert list_items(ul) == ["Point one"]
    assert list_items(None) == []


# --- builder ---

def test_builder_states():
    """State follows the open module/lesson and lessons join modules on flush."""
    builder = SyllabusBuilder("Safety")
    assert builder.state is BuilderState.NO_MODULE

    builder.open_lesson("Lesson 1: Basics")
    assert builder.state is BuilderState.IN_LESSON
    assert builder.module.title == "Safety Content"
    assert builder.module.lessons == []

    builder.flush_lesson()
    assert builder.state is BuilderState.IN_MODULE
    assert [l.title for l in builder.module.lessons] == ["Lesson 1: Basics"]

    modules = builder.finish()
    assert builder.state is BuilderState.NO_MODULE
    assert len(modules) == 1


def test_default_title_without_course_title():
    """An untitled course gets 'Course Content' for its implicit module."""
    builder = SyllabusBuilder()
    assert builder.ensure_module().title == "Course Content"


# --- build_syllabus ---

def test_sample_syllabus_sorted(course_blocks):
    """Modules and lessons come out in ordinal order with descriptions and items."""
    sections = locate_sections(course_blocks)
    modules = build_syllabus(course_blocks, sections.syllabus, "Workplace Safety")

    assert [m.title for m in modules] == ["Module 1: Foundations", "Module 2: Practice"]
    first, second = modules
    assert first.description == "The basic vocabulary of workplace safety."
    assert [l.title for l in first.lessons] == ["Lesson 1: Hazards", "Lesson 2: Equipment"]
    assert first.lessons[0].items == ["Slips and trips"]
    assert [l.title for l in second.lessons] == ["Lesson 3: Reporting", "Lesson 4: Drills"]
    assert second.lessons[1].items == ["Fire drill", "Evacuation"]
    assert second.lessons[0].items == []


def test_empty_window_yields_no_modules(course_blocks):
    """An empty syllabus window returns an empty list."""
    assert build_syllabus(course_blocks, MISSING) == []


def test_multi_lesson_paragraph():
    """A paragraph holding two lesson markers produces two lessons."""
    modules = _build("<h2>Syllabus</h2><p>Module 1: Intro</p><p>Lesson 1: Alpha Lesson 2: Beta</p>")
    assert len(modules) == 1
    assert [l.title for l in modules[0].lessons] == ["Lesson 1: Alpha", "Lesson 2: Beta"]


def test_lesson_without_module_gets_implicit_module():
    """Lessons before any module marker land in '<title> Content'."""
    modules = _build("<h2>Syllabus</h2><p>Lesson 1: Basics</p><ul><li>Read the manual</li></ul>")
    assert [m.title for m in modules] == ["Safety Content"]
    assert modules[0].lessons[0].items == ["Read the manual"]


def test_standalone_item_synthesizes_lesson():
    """A loose bullet inside a module becomes a numbered placeholder lesson."""
    modules = _build("<h2>Syllabus</h2><p>Module 1: Intro</p><li>Understand the site layout</li>")
    lesson = modules[0].lessons[0]
    assert lesson.title == "Lesson 1: Understand the site layout..."
    assert lesson.items == ["Understand the site layout"]


def test_termination_stops_scan():
    """'Final Examination' ends the syllabus."""
    modules = _build(
        "<h2>Syllabus</h2><p>Module 1: Intro</p><p>Lesson 1: A</p>"
        "<p>Final Examination</p><p>Lesson 2: B</p>"
    )
    assert [l.title for l in modules[0].lessons] == ["Lesson 1: A"]


def test_module_description_lookahead_skips_markers():
    """A lesson marker right after the module is not taken as its description."""
    modules = _build(
        "<h2>Syllabus</h2><p>Module 1: Intro</p><p>Lesson 1: A</p><ul><li>x</li></ul><p>Short</p>"
    )
    assert modules[0].description == ""


def test_flat_fallback():
    """With no module or lesson markers, h3 headings become lessons of one module."""
    modules = _build("<h2>Course Content</h2><h3>Getting started</h3><ul><li>Install</li></ul>")
    assert [m.title for m in modules] == ["Safety Content"]
    assert modules[0].lessons[0].title == "Getting started"
    assert modules[0].lessons[0].items == ["Install"]


def test_markers_without_syllabus_heading():
    """Module markers are still honored when no syllabus heading exists."""
    modules = _build("<p>Module 1: Intro</p><p>Lesson 1: Basics</p>")
    assert [m.title for m in modules] == ["Module 1: Intro"]
    assert [l.title for l in modules[0].lessons] == ["Lesson 1: Basics"]


def test_no_markers_without_heading_is_empty():
    """No heading and no markers means no syllabus and no fallback."""
    assert _build("<p>Just some text here</p><h3>Topic</h3>") == []
