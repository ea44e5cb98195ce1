"""Blog markup cleanup, title resolution, and content-unit classification

Cleanup never touches the caller's markup: every entry point parses a fresh
tree, transforms that tree, and hands back the result.
"""

import re

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag

from docxpub.core.blocks import SoupBlock, heading_level, make_soup
from docxpub.core.extract.faq import extract_faq
from docxpub.core.extract.sections import locate_faq
from docxpub.core.models import (
    BlogDocument,
    BlogResult,
    ContentUnit,
    HeadingUnit,
    ImageUnit,
    ListUnit,
    ParagraphUnit,
    QAPair,
)


logger = structlog.get_logger(__name__)

META_MARKERS = ("meta description", "meta title", "slug", "category", "relevant courses")
LINE_MARKERS = ("link:", "alt-text", "alt text:", "title text:")
FAQ_KEYWORDS = ("faq", "frequently asked questions")
PRESENTATION_ATTRS = ("style", "class")
WRAPPER_TAGS = ("span", "div")
KEEP_WHEN_EMPTY = ("img",)
TAG_RE = re.compile(r'<[^>]*>')


def _starts_with_any(text: str, markers: tuple[str, ...]) -> bool:
    lower = text.strip().lower()
    return any(lower.startswith(m) for m in markers)


def _is_faq_text(text: str) -> bool:
    lower = text.lower()
    return any(k in lower for k in FAQ_KEYWORDS)


def strip_tags(markup: str) -> str:
    return TAG_RE.sub('', markup or '')


# --- cleanup passes (each mutates the tree it is given) ---

def drop_marker_lines(soup: BeautifulSoup) -> None:
    """Remove line-marker elements; cut everything from the first metadata marker on."""
    elements = soup.find_all(True)
    for i, el in enumerate(elements):
        text = el.get_text().strip()
        if not text:
            continue
        if _starts_with_any(text, META_MARKERS):
            for node in elements[i:]:
                node.extract()
            logger.debug("blog.metadata_truncated", marker=text[:40])
            return
        if _starts_with_any(text, LINE_MARKERS):
            el.extract()


def _collapse_breaks(soup: BeautifulSoup) -> None:
    for br in soup.find_all('br'):
        prev = br.previous_sibling
        while isinstance(prev, NavigableString) and not prev.strip():
            prev = prev.previous_sibling
        if isinstance(prev, Tag) and prev.name == 'br':
            br.decompose()


def strip_presentation(soup: BeautifulSoup) -> None:
    """Drop style/class, unwrap span/div, collapse repeated breaks, remove empty elements."""
    for el in soup.find_all(True):
        for attr in PRESENTATION_ATTRS:
            el.attrs.pop(attr, None)

    for wrapper in soup.find_all(WRAPPER_TAGS):
        wrapper.unwrap()

    _collapse_breaks(soup)

    # innermost first, so a parent emptied by this pass goes too
    for el in reversed(soup.find_all(True)):
        if el.name in KEEP_WHEN_EMPTY:
            continue
        if not el.get_text().strip() and el.find(True) is None:
            el.decompose()


def normalize_lists(soup: BeautifulSoup) -> None:
    """Drop stray '>' from list items, then empty items, then emptied lists."""
    for lst in soup.find_all(['ul', 'ol']):
        for li in lst.find_all('li'):
            for s in li.find_all(string=True):
                if '>' in s:
                    s.replace_with(s.replace('>', ''))
            if not li.get_text().strip() and li.find(True) is None:
                li.decompose()
        if lst.find(True, recursive=False) is None:
            lst.decompose()


def clean_blog_markup(html: str) -> BeautifulSoup:
    """Full blog cleanup over a freshly parsed tree."""
    soup = make_soup(html)
    drop_marker_lines(soup)
    strip_presentation(soup)
    normalize_lists(soup)
    return soup


# --- title resolution ---

def resolve_title(soup: BeautifulSoup) -> str:
    """First non-FAQ h1 (removed), else a title-sized paragraph (removed), else a
    leading sentence fragment of any element (left in place)."""
    for h1 in soup.find_all('h1'):
        text = h1.get_text().strip()
        if text and not _is_faq_text(text):
            h1.decompose()
            return text

    for p in soup.find_all('p'):
        text = p.get_text().strip()
        if 10 < len(text) < 200 and not _is_faq_text(text):
            p.decompose()
            return text

    for el in soup.find_all(True):
        text = el.get_text().strip()
        if len(text) > 5 and not _is_faq_text(text):
            candidate = text.split('.')[0]
            if len(candidate) > 5:
                return candidate
    return ""


# --- body classification ---

def classify_content(soup: BeautifulSoup) -> tuple[list[ContentUnit], int]:
    """Depth-first walk producing content units; stops at the FAQ or metadata."""
    units: list[ContentUnit] = []
    images = 0

    for tag in soup.find_all(True):
        block = SoupBlock(tag)
        text = block.text
        if not text and block.kind != 'img':
            continue
        if _starts_with_any(text, META_MARKERS):
            break

        level = heading_level(block)
        if level is not None:
            if _is_faq_text(text):
                break
            units.append(HeadingUnit(level=level, markup=block.inner_markup))
        elif block.kind == 'p':
            markup = block.inner_markup
            if markup and strip_tags(markup).strip():
                units.append(ParagraphUnit(markup=markup))
        elif block.kind in ('ul', 'ol'):
            items = [li.inner_markup for li in block.find_all('li') if li.inner_markup]
            if items:
                units.append(ListUnit(ordered=block.kind == 'ol', items=items))
        elif block.kind == 'img':
            images += 1
            units.append(ImageUnit(alt=block.attr('alt') or f"Blog image {images}", index=images))

    return units, images


def extract_blog_body(html: str) -> BlogDocument:
    soup = clean_blog_markup(html)
    title = resolve_title(soup)
    content, images = classify_content(soup)
    return BlogDocument(title=title, content=content, image_count=images)


def extract_blog_faq(html: str) -> list[QAPair]:
    """FAQ pairs from the blog's own FAQ section; markers are not stripped here."""
    soup = make_soup(html)
    strip_presentation(soup)
    blocks = [SoupBlock(t) for t in soup.find_all(True, recursive=False)]
    return extract_faq(blocks, locate_faq(blocks))


def extract_blog(html: str) -> BlogResult:
    result = BlogResult(blog=extract_blog_body(html), faq=extract_blog_faq(html))
    logger.info(
        "blog.extracted",
        title=result.blog.title,
        units=len(result.blog.content),
        images=result.blog.image_count,
        faq=len(result.faq),
    )
    return result
