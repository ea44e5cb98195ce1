"""Shared fixtures for core unit tests"""

import pytest

from docxpub.core.blocks import parse_blocks


SAMPLE_COURSE_HTML = """\
<h1>Workplace Safety</h1>
<h2>1.1 Course Overview</h2>
<p>This course introduces <a href="https://example.com">safety practice</a>.</p>
<ul class="fancy"><li>Short, practical lessons</li></ul>
<h2>Course Objectives</h2>
<p>After this course, learners will be able to do the following:</p>
<ul><li>Identify hazards</li><li>Report <strong>incidents</strong></li></ul>
<h2>Course Syllabus</h2>
<p>Module 2: Practice</p>
<p>Putting the foundations to work on the floor.</p>
<p>Lesson 4: Drills</p>
<ul><li>Fire drill</li><li>Evacuation</li></ul>
<p>Lesson 3: Reporting</p>
<p>Module 1: Foundations</p>
<p>The basic vocabulary of workplace safety.</p>
<p>Lesson 2: Equipment</p>
<ul><li>Helmets</li></ul>
<p>Lesson 1: Hazards</p>
<ul><li>Slips and trips</li></ul>
<h2>FAQ</h2>
<p>1. Who is this for? Anyone working on site.</p>
<p>2. How long does it take?</p>
<p>About two hours.</p>
<p><strong>Is there a test?</strong></p>
<p>Yes, a short quiz.</p>
<p>It is graded automatically.</p>
"""


@pytest.fixture(name="course_html")
def course_html_fixture():
    return SAMPLE_COURSE_HTML


@pytest.fixture(name="course_blocks")
def course_blocks_fixture():
    return parse_blocks(SAMPLE_COURSE_HTML)


@pytest.fixture(name="blocks")
def blocks_fixture():
    """Factory turning literal markup into a block sequence."""
    return parse_blocks
