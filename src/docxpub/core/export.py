"""Markup generators: render extracted models back into publishable HTML

Every function here is pure and deterministic. Sections that produced no
content render an explicit "not found" marker instead of an empty string.
"""

import html
import math
from typing import Optional, Sequence

from docxpub.core.blocks import make_soup
from docxpub.core.extract.glossary import LETTERS, group_by_letter
from docxpub.core.models import (
    BlogDocument,
    CourseDocument,
    FeaturedImage,
    GlossaryEntry,
    HeadingUnit,
    ImageUnit,
    ListUnit,
    ParagraphUnit,
    QAPair,
)


NO_OVERVIEW = "<p>No overview content found.</p>"
NO_OBJECTIVES_ITEM = "<li>No course objectives found in the document.</li>"
NO_SYLLABUS = "<p>No syllabus content found.</p>"
NO_FAQ = "<!-- No FAQs found in the FAQ section -->"
DEFAULT_OBJECTIVES_INTRO = "After completing this course, the learner will be able to:"
DEFAULT_IMAGE_URL = "#"

VIDEO_EMBED = (
    '<!-- <div class="col-md-5 col-sm-12 elementor-col-40 elementor-column ml-md-3 p-0 pb-0 pt-0 '
    'verified-field-container" style="float:right"><div class="demo-video"><iframe title="{title}" '
    'src="https://player.vimeo.com/video/680313019?h=6c9335ab94" width="560" height="200" frameborder="0" '
    'allow="autoplay; fullscreen; picture-in-picture" allowfullscreen data-ready="true"></iframe>'
    '<img src="" class="w-100 ps-3" alt="{alt}"></div></div> -->'
)

BLOG_FOOTER = (
    '<div class="fancy-line"></div><style>.fancy-line{width:60%;margin:20px auto;border-top:2px solid #116466;'
    'text-align:center;position:relative}.fancy-line::after{content:"✦ ✦ ✦";position:absolute;'
    'top:-12px;left:50%;transform:translateX(-50%);background:white;padding:0 10px;color:red}</style>'
)

GLOSSARY_TEMPLATE = """
<style>
    .active.glossaryBtn,
    .glossaryBtn:hover {{
        background: black !important;
        transform: translateY(-4px) scale(1);
        transition: 0.2s;
        color: #ffbf00!important
    }}
</style>
<div class="custom-glossary">
    <script>
        function openItem(glossaryItem, evt) {{
            var items = document.getElementsByClassName("result-container");
            for (var i = 0; i < items.length; i++) {{
                items[i].style.display = "none";
            }}
            document.getElementById(glossaryItem).style.display = "block";

            var btns = document.getElementsByClassName("glossaryBtn");
            for (var j = 0; j < btns.length; j++) {{
                btns[j].classList.remove("active");
            }}
            evt.target.classList.add("active");
        }}
    </script>
    <div class="container">
        <div class="glossaryBtnMain alphabet-buttons mb-3">
{buttons}
        </div>
{sections}
    </div>
</div>"""


def escape(value: Optional[str]) -> str:
    return html.escape(value or "", quote=True)


# --- course ---

def render_overview(course: CourseDocument) -> str:
    """Video embed stub followed by the overview with normalized headings, lists, and links."""
    video = VIDEO_EMBED.format(
        title=escape(course.title or "Course Video"),
        alt=escape(course.title or "Course Name"),
    )
    if not course.overview_markup.strip():
        return video + NO_OVERVIEW

    soup = make_soup(course.overview_markup)
    for heading in soup.find_all(['h1', 'h2', 'h3', 'h4', 'h5', 'h6']):
        heading.name = 'h2'
        heading.attrs = {'class': 'fs-4 text-warning'}
    for lst in soup.find_all(['ul', 'ol']):
        lst.attrs.pop('class', None)
    for link in soup.find_all('a'):
        link['target'] = '_blank'
    return video + str(soup)


def render_objectives(course: CourseDocument) -> str:
    if course.objectives:
        items = "\n".join(f"<li>{item}</li>" for item in course.objectives)
    else:
        items = NO_OBJECTIVES_ITEM
    intro = course.objectives_intro or DEFAULT_OBJECTIVES_INTRO
    return (
        '<h2 class="h3">Course Objectives</h2>'
        f'<p class="m-0"><strong>{intro}</strong></p>'
        f'<ul>{items}</ul>'
    )


def render_syllabus(course: CourseDocument) -> str:
    """One collapsible accordion card per module, lessons and items as nested lists."""
    if not course.modules:
        return NO_SYLLABUS

    cards = []
    for index, module in enumerate(course.modules, start=1):
        collapse_id, heading_id = f"collapse{index}", f"heading{index}"
        lines = [
            '<div class="card mb-2">',
            f'  <div class="card-header" id="{heading_id}">',
            '    <h5 class="mb-0">',
            '      <button class="btn btn-link w-100 text-start text-decoration-none text-dark fw-bold collapsed" '
            f'data-bs-toggle="collapse" data-bs-target="#{collapse_id}" aria-expanded="false" '
            f'aria-controls="{collapse_id}">',
            f'        {module.title}',
            '      </button>',
            '    </h5>',
            '  </div>',
            '',
            f'  <div id="{collapse_id}" class="collapse" aria-labelledby="{heading_id}" data-parent="#accordionSyllabus">',
            '    <div class="card-body">',
        ]
        if module.description:
            lines.append(f'      <p>{module.description}</p>')
        if module.lessons:
            lines.append('      <ul>')
            for lesson in module.lessons:
                lines.append(f'        <li>{lesson.title}')
                if lesson.items:
                    lines.append('          <ul>')
                    lines.extend(f'            <li>{item}</li>' for item in lesson.items)
                    lines.append('          </ul>')
                lines.append('        </li>')
            lines.append('      </ul>')
        lines += ['    </div>', '  </div>', '</div>']
        cards.append("\n".join(lines) + "\n")

    return f'<div id="accordionSyllabus" class="accordion">\n{"".join(cards)}</div>'


def split_columns(pairs: Sequence[QAPair]) -> tuple[list[QAPair], list[QAPair]]:
    """First column takes ceil(n/2) pairs, the second the rest."""
    mid = math.ceil(len(pairs) / 2)
    return list(pairs[:mid]), list(pairs[mid:])


def _faq_column(entries: list[str]) -> str:
    return '  <div class="col-md-6">\n' + "".join(entries) + '  </div>\n'


def render_faq(pairs: Sequence[QAPair]) -> str:
    if not pairs:
        return NO_FAQ

    def entry(faq: QAPair) -> str:
        return (
            '    <div class="mb-3">\n'
            f'      <h5 class="h6 fw-bold">{faq.question}</h5>\n'
            f'      <p>{faq.answer}</p>\n'
            '    </div>\n'
        )

    left, right = split_columns(pairs)
    return (
        '<h2 class="h3 mb-4">Frequently Asked Questions</h2>\n<div class="row">\n'
        + _faq_column([entry(f) for f in left])
        + _faq_column([entry(f) for f in right])
        + '</div>'
    )


# --- blog ---

def render_blog_faq(pairs: Sequence[QAPair]) -> str:
    """Blog FAQ variant: escaped questions, leading 'A:' dropped from answers."""
    if not pairs:
        return NO_FAQ

    def entries(column: list[QAPair]) -> list[str]:
        out = []
        for faq in column:
            answer = faq.answer.strip()
            if answer[:2].lower() == 'a:':
                answer = answer[2:].strip()
            if faq.question and answer:
                out.append(
                    '    <div class="mb-3">\n'
                    f'      <h5 class="h6 fw-bold">{escape(faq.question)}</h5>\n'
                    f'      <div class="faq-answer">{answer}</div>\n'
                    '    </div>\n'
                )
        return out

    left, right = split_columns(pairs)
    return (
        '<div class="faq-section">\n<h2 class="h3 mb-4">Frequently Asked Questions</h2>\n<div class="row">\n'
        + _faq_column(entries(left))
        + _faq_column(entries(right))
        + '</div>\n</div>'
    )


def render_blog(
    blog: BlogDocument,
    featured: Optional[FeaturedImage] = None,
    image_urls: Sequence[str] = (),
    placeholder_url: str = DEFAULT_IMAGE_URL,
    ) -> str:
    """Title, optional featured image, content units in order, decorative footer.

    Image units consume image_urls by running index; once exhausted they fall
    back to placeholder_url.
    """
    parts = []
    if blog.title:
        parts.append(f'<h1 class="text-center fs-1">{escape(blog.title)}</h1><hr>\n\n')

    if featured is not None and featured.url:
        tag = f'<img src="{escape(featured.url)}"'
        if featured.alt:
            tag += f' alt="{escape(featured.alt)}"'
        if featured.title:
            tag += f' title="{escape(featured.title)}"'
        parts.append(tag + ' class="w-100 mb-3">\n\n')

    image_index = 0
    for unit in blog.content:
        if isinstance(unit, HeadingUnit):
            css = f"fs-{unit.level}"
            if unit.level == 1:
                parts.append(f'<h1 class="text-center {css}">{unit.markup}</h1>\n\n')
            else:
                parts.append(f'<h{unit.level} class="{css}">{unit.markup}</h{unit.level}>\n\n')
        elif isinstance(unit, ParagraphUnit):
            parts.append(f'<p>{unit.markup.strip()}</p>\n\n')
        elif isinstance(unit, ListUnit):
            tag = 'ol' if unit.ordered else 'ul'
            items = "".join(f'  <li>{item}</li>\n' for item in unit.items if item.strip())
            parts.append(f'<{tag}>\n{items}</{tag}>\n\n')
        elif isinstance(unit, ImageUnit):
            url = image_urls[image_index] if image_index < len(image_urls) else placeholder_url
            parts.append(f'<img src="{escape(url)}" alt="{escape(unit.alt)}" class="w-100 mb-3">\n\n')
            image_index += 1

    parts.append(BLOG_FOOTER)
    return "".join(parts)


# --- glossary ---

def render_glossary(entries: Sequence[GlossaryEntry]) -> str:
    """A-Z buttons plus one section per letter; only 'A' is shown initially."""
    groups = group_by_letter(entries)
    buttons, sections = [], []
    for letter in LETTERS:
        active = 'active' if letter == 'A' else ''
        display = 'block' if letter == 'A' else 'none'
        buttons.append(
            f'<button class="glossaryBtn btn btn-outline-primary m-1 {active}" '
            f'onclick="openItem(\'{letter}\', event)">{letter}</button>'
        )
        body = "".join(
            f'<h2>{entry.term.strip()}</h2>\n<div>{entry.definition.strip()}</div>\n'
            for entry in groups.get(letter, [])
        ) or f'<h2>{letter}</h2><p>No terms found</p>\n'
        sections.append(
            f'<div id="{letter}" class="result-container glosary-item" style="display:{display};">\n'
            f'{body}</div>'
        )
    return GLOSSARY_TEMPLATE.format(buttons="\n".join(buttons), sections="\n".join(sections))
