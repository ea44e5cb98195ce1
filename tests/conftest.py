"""Root test configuration: .docx builders shared by pipeline and CLI tests"""

import io
from pathlib import Path

import pytest
import structlog
from docx import Document


def build_docx(paragraphs: list[tuple[str, str]] = (), table: list[tuple[str, str]] = None) -> bytes:
    """Return .docx bytes for (style, text) paragraphs, optionally followed by a table.

    Styles: 'h1'..'h3' map to Word headings, anything else is a plain paragraph.
    """
    doc = Document()
    for style, text in paragraphs:
        if style.startswith('h') and style[1:].isdigit():
            doc.add_heading(text, level=int(style[1:]))
        else:
            doc.add_paragraph(text)
    if table:
        grid = doc.add_table(rows=0, cols=2)
        for term, definition in table:
            cells = grid.add_row().cells
            cells[0].text = term
            cells[1].text = definition
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


COURSE_PARAGRAPHS = [
    ("p", "Course Overview"),
    ("p", "This course teaches the fundamentals of workplace safety."),
    ("p", "Course Syllabus"),
    ("p", "Module 1: Foundations"),
    ("p", "Lesson 1: Hazard awareness"),
    ("p", "Module 2: Practice"),
    ("p", "Lesson 2: Reporting incidents"),
]

GLOSSARY_ROWS = [
    ("Term", "Definition"),
    ("Apple", "A fruit."),
    ("Banana", "Another fruit."),
    ("Cherry", "A small fruit."),
]


@pytest.fixture(name="course_docx")
def course_docx_fixture(tmp_path) -> Path:
    path = tmp_path / "safety-course.docx"
    path.write_bytes(build_docx(COURSE_PARAGRAPHS))
    return path


@pytest.fixture(name="glossary_docx")
def glossary_docx_fixture(tmp_path) -> Path:
    path = tmp_path / "fruit-glossary.docx"
    path.write_bytes(build_docx([("p", "Fruit glossary")], table=GLOSSARY_ROWS))
    return path


@pytest.fixture(name="blog_docx")
def blog_docx_fixture(tmp_path) -> Path:
    path = tmp_path / "my-post.docx"
    path.write_bytes(build_docx([
        ("p", "Ten tips for safer warehouses"),
        ("p", "Warehouses are busy places and accidents happen quickly."),
        ("p", "Keep aisles clear at all times."),
        ("p", "Meta Description: tips for warehouse safety"),
        ("p", "This line is dropped with the metadata."),
    ]))
    return path


@pytest.fixture(name="make_docx")
def make_docx_fixture():
    """Factory returning .docx bytes; see build_docx."""
    return build_docx


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog configuration a test (or CLI command) applied."""
    yield
    structlog.reset_defaults()
