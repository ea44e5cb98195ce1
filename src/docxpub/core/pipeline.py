"""Pipeline step functions: read -> convert -> extract per document, and output writing"""

from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import BaseModel

from docxpub.core.blocks import parse_blocks
from docxpub.core.export import (
    render_blog,
    render_blog_faq,
    render_faq,
    render_glossary,
    render_objectives,
    render_overview,
    render_syllabus,
)
from docxpub.core.extract.blog import extract_blog
from docxpub.core.extract.course import extract_course
from docxpub.core.extract.glossary import extract_glossary
from docxpub.core.models import BlogResult, CourseDocument, FeaturedImage, GlossaryEntry
from docxpub.core.parse import Source, discover_files, load_html
from docxpub.core.utils.slug import slugify


logger = structlog.get_logger(__name__)


class GlossaryDocument(BaseModel):
    """Sidecar wrapper so the glossary serializes like the other models."""
    entries: list[GlossaryEntry] = []


def process_course_file(source: Source, course_name: Optional[str] = None) -> CourseDocument:
    """Read and convert one course document, then extract it into a fresh CourseDocument."""
    html = load_html(source)
    return extract_course(parse_blocks(html), course_name or "Course Name")


def process_blog_file(source: Source) -> BlogResult:
    return extract_blog(load_html(source))


def process_glossary_file(source: Source) -> list[GlossaryEntry]:
    return extract_glossary(parse_blocks(load_html(source)))


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding='utf-8')
    return path


def _write_json(path: Path, model: BaseModel, enabled: bool) -> list[Path]:
    if not enabled:
        return []
    return [_write(path, model.model_dump_json(indent=2))]


def write_course(course: CourseDocument, output_dir: Path, stem: str, write_json: bool = True) -> list[Path]:
    """Write one HTML fragment per course section plus the sidecar JSON."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = [
        _write(output_dir / f"{stem}.overview.html", render_overview(course)),
        _write(output_dir / f"{stem}.objectives.html", render_objectives(course)),
        _write(output_dir / f"{stem}.syllabus.html", render_syllabus(course)),
        _write(output_dir / f"{stem}.faq.html", render_faq(course.faq)),
    ]
    return written + _write_json(output_dir / f"{stem}.json", course, write_json)


def write_blog(
    result: BlogResult,
    output_dir: Path,
    stem: str,
    featured: Optional[FeaturedImage] = None,
    image_urls: Sequence[str] = (),
    placeholder_url: str = "#",
    write_json: bool = True,
    ) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = [
        _write(output_dir / f"{stem}.html", render_blog(result.blog, featured, image_urls, placeholder_url)),
        _write(output_dir / f"{stem}.faq.html", render_blog_faq(result.faq)),
    ]
    return written + _write_json(output_dir / f"{stem}.json", result, write_json)


def write_glossary(entries: list[GlossaryEntry], output_dir: Path, stem: str, write_json: bool = True) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = [_write(output_dir / f"{stem}.html", render_glossary(entries))]
    return written + _write_json(output_dir / f"{stem}.json", GlossaryDocument(entries=entries), write_json)


def output_stem(path: Path, root: Path) -> str:
    """Slug of the file's path under root, so same-named files in different folders stay apart."""
    relative = path.relative_to(root) if root.is_dir() else Path(path.name)
    return slugify("-".join(relative.with_suffix('').parts))


def _sources(path: str) -> list[tuple[Path, str]]:
    root = Path(path)
    files = discover_files(root)
    if not files:
        raise FileNotFoundError(f"No .docx files found at {path}")
    sources, seen = [], {}
    for p in files:
        stem = output_stem(p, root)
        if stem in seen:
            logger.warning("pipeline.duplicate_stem", stem=stem, source=str(p), previous=str(seen[stem]))
        seen[stem] = p
        sources.append((p, stem))
    return sources


def run_course(
    path: str,
    output_dir: Path,
    title: Optional[str] = None,
    write_json: bool = True,
    ) -> list[tuple[Path, CourseDocument]]:
    """Process every course document under path, one after another."""
    results = []
    for p, stem in _sources(path):
        logger.info("pipeline.course", source=str(p))
        course = process_course_file(p, title)
        write_course(course, output_dir, stem, write_json)
        results.append((p, course))
    return results


def run_blog(
    path: str,
    output_dir: Path,
    featured: Optional[FeaturedImage] = None,
    image_urls: Sequence[str] = (),
    placeholder_url: str = "#",
    write_json: bool = True,
    ) -> list[tuple[Path, BlogResult]]:
    results = []
    for p, stem in _sources(path):
        logger.info("pipeline.blog", source=str(p))
        result = process_blog_file(p)
        write_blog(result, output_dir, stem, featured, image_urls, placeholder_url, write_json)
        results.append((p, result))
    return results


def run_glossary(path: str, output_dir: Path, write_json: bool = True) -> list[tuple[Path, list[GlossaryEntry]]]:
    results = []
    for p, stem in _sources(path):
        logger.info("pipeline.glossary", source=str(p))
        entries = process_glossary_file(p)
        write_glossary(entries, output_dir, stem, write_json)
        results.append((p, entries))
    return results
