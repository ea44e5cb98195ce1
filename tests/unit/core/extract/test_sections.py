"""Unit tests for core/extract/sections.py"""

import pytest

from docxpub.core.extract.sections import (
    MISSING,
    Window,
    find_first,
    is_objectives_marker,
    locate_faq,
    locate_objectives,
    locate_overview,
    locate_sections,
    locate_syllabus,
)


def test_locate_sections_sample(course_blocks):
    """Each section window starts at its marker block and ends at the next section."""
    sections = locate_sections(course_blocks)
    assert (sections.overview.start, sections.overview.end) == (1, 4)
    assert (sections.objectives.start, sections.objectives.end) == (4, 7)
    assert (sections.syllabus.start, sections.syllabus.end) == (7, 19)
    assert (sections.faq.start, sections.faq.end) == (19, len(course_blocks))


def _assert_disjoint(sections):
    windows = sections.in_priority_order()
    for i, a in enumerate(windows):
        for b in windows[i + 1:]:
            assert a.end <= b.start or b.end <= a.start, (a, b)


def test_windows_never_overlap(course_blocks):
    """No two section windows share a block."""
    _assert_disjoint(locate_sections(course_blocks))


def test_windows_never_overlap_without_syllabus_heading(blocks):
    """Module markers with no syllabus heading stay out of the section windows."""
    seq = blocks(
        "<p>Course Overview</p><p>Intro text.</p><p>Module 1: Basics</p><p>Lesson 1: Start</p>"
    )
    sections = locate_sections(seq)
    _assert_disjoint(sections)
    assert sections.syllabus == MISSING
    assert (sections.syllabus_scan.start, sections.syllabus_scan.end) == (0, 4)
    assert not sections.syllabus_scan.found


def test_windows_never_overlap_when_syllabus_precedes_objectives_end(blocks):
    """A late objectives end is clamped to the syllabus start."""
    seq = blocks(
        "<h2>Learning Objectives</h2><p>Modules are listed below in order.</p>"
        "<p>Module 1: Intro</p><h2>FAQ</h2><p>1. Why?</p><p>Because.</p>"
    )
    sections = locate_sections(seq)
    assert sections.objectives.end <= sections.syllabus.start
    assert sections.syllabus.end <= sections.faq.start


def test_empty_sequence_has_no_sections():
    """An empty document yields empty, not-found windows rather than errors."""
    sections = locate_sections([])
    assert all(w.empty for w in sections.in_priority_order())
    assert not sections.faq.found


def test_earliest_match_wins(blocks):
    """The first block mentioning 'overview' starts the overview window."""
    seq = blocks("<p>Intro</p><p>Overview</p><p>Body</p><p>Second overview</p>")
    assert locate_overview(seq).start == 1


def test_overview_ends_at_syllabus_without_objectives(blocks):
    """With no objectives marker the overview runs to the syllabus heading."""
    seq = blocks("<p>Overview</p><p>Body</p><p>Syllabus</p><p>Module 1: A</p>")
    window = locate_overview(seq)
    assert (window.start, window.end) == (0, 2)
    assert [b.text for b in window.body(seq, skip_marker=True)] == ["Body"]


def test_missing_overview(blocks):
    """No overview keyword returns the MISSING window."""
    assert locate_overview(blocks("<p>Nothing here</p>")) == MISSING


@pytest.mark.parametrize("markup,expected", [
    ("<p>Course Objectives</p>", True),
    ("<p>Learning objectives for this unit</p>", True),
    ("<h3>Objectives</h3>", True),
    ("<p>Objectives</p>", False),
    ("<p>1.2 Key objectives</p>", True),
])
def test_objectives_marker(blocks, markup, expected):
    """Objectives are found by phrase, by heading keyword, or by section number."""
    assert is_objectives_marker(blocks(markup)[0]) is expected


def test_objectives_end_at_unrelated_heading(blocks):
    """A non-objectives h1-h3 heading closes the objectives window."""
    seq = blocks("<h2>Course Objectives</h2><ul><li>A</li></ul><h3>Prerequisites</h3><p>x</p>")
    assert locate_objectives(seq) == Window(0, 2)


def test_syllabus_search_starts_at_document_start_without_objectives(blocks):
    """Without objectives the syllabus is searched for from block 0."""
    seq = blocks("<h2>Course Content</h2><p>Module 1: A</p>")
    window = locate_syllabus(seq)
    assert window.found
    assert window.start == 0


def test_syllabus_not_found_is_empty(blocks):
    """A missing syllabus heading gives the empty MISSING window."""
    seq = blocks("<p>Module 1: Intro</p><p>Lesson 1: Basics</p>")
    assert locate_syllabus(seq) == MISSING


def test_syllabus_scan_without_heading_stops_at_faq(blocks):
    """Without a heading the marker scan runs from the objectives region to the FAQ."""
    seq = blocks(
        "<h2>Course Objectives</h2><p>1.3 Outline</p><p>Module 1: Intro</p>"
        "<h2>FAQ</h2><p>1. Why?</p><p>Because.</p>"
    )
    sections = locate_sections(seq)
    assert sections.syllabus == MISSING
    assert (sections.syllabus_scan.start, sections.syllabus_scan.end) == (1, 3)


def test_syllabus_scan_matches_found_window(course_blocks):
    sections = locate_sections(course_blocks)
    assert sections.syllabus_scan == sections.syllabus


def test_syllabus_skips_objectives_heading(blocks):
    """The syllabus search begins after the course objectives region."""
    seq = blocks(
        "<h2>Course Objectives</h2><p>Covers all modules in depth.</p>"
        "<h2>1.3 Syllabus</h2><p>Module 1: A</p>"
    )
    assert locate_syllabus(seq).start == 2


def test_faq_requires_heading(blocks):
    """A paragraph mentioning FAQ does not open the FAQ window."""
    assert locate_faq(blocks("<p>See the FAQ below</p>")) == MISSING
    assert locate_faq(blocks("<h2>Frequently Asked Questions</h2><p>1. Q?</p>")).start == 0


def test_faq_ends_at_online_course_marker(blocks):
    """'For Online Course Page:' terminates the FAQ window."""
    seq = blocks("<h2>FAQ</h2><p>1. Q?</p><p>A.</p><p>For Online Course Page: x</p><p>tail</p>")
    assert locate_faq(seq) == Window(0, 3)


def test_faq_ends_at_later_heading(blocks):
    """A non-FAQ heading more than three blocks after the FAQ heading ends it."""
    seq = blocks(
        "<h2>FAQ</h2><h3>Early heading</h3><p>1. Q?</p><p>A.</p><p>more</p><h3>Resources</h3><p>x</p>"
    )
    assert locate_faq(seq) == Window(0, 5)


def test_find_first_returns_minus_one(blocks):
    """find_first signals a miss with -1."""
    assert find_first(blocks("<p>a</p>"), lambda b: False) == -1
