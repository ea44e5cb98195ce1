"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from docxpub.config import Settings, load_config
from docxpub.core.models import FeaturedImage
from docxpub.core.parse import DocumentReadError
from docxpub.core.pipeline import run_blog, run_course, run_glossary
from docxpub.logs import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _echo_written(results: list, output_dir: Path, kind: str) -> None:
    for src, _ in results:
        typer.echo(f"  {src} -> {output_dir}/")
    typer.echo(f"Generated {kind} markup for {len(results)} document(s) in {output_dir}/")


def course_cmd(
    path: Annotated[str, typer.Argument(help="Course .docx file or directory")],
    title: Annotated[Optional[str], typer.Option("--title", help="Course display title")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Extract overview, objectives, syllabus, and FAQ, then render each as HTML."""
    settings = _settings(overrides={"output_dir": out, "course_title": title, "log_level": log_level})
    output_dir = Path(settings.output_dir)
    try:
        results = run_course(path, output_dir, settings.course_title, settings.write_json)
    except (DocumentReadError, FileNotFoundError) as e:
        _fail(str(e), e.__cause__)
    except Exception as e:
        _fail("Course conversion failed", e)

    for src, course in results:
        typer.echo(
            f"  {src}: {len(course.modules)} module(s), "
            f"{len(course.objectives)} objective(s), {len(course.faq)} FAQ(s)"
        )
    _echo_written(results, output_dir, "course")


def blog_cmd(
    path: Annotated[str, typer.Argument(help="Blog .docx file or directory")],
    image_urls: Annotated[Optional[list[str]], typer.Option("--image-url", help="URL for the next body image; repeatable")] = None,
    featured_url: Annotated[Optional[str], typer.Option("--featured-url", help="Featured image URL")] = None,
    featured_alt: Annotated[Optional[str], typer.Option("--featured-alt", help="Featured image alt text")] = None,
    featured_title: Annotated[Optional[str], typer.Option("--featured-title", help="Featured image title")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Classify blog content into headings, paragraphs, lists, and images, then render HTML."""
    settings = _settings(overrides={"output_dir": out, "log_level": log_level})
    output_dir = Path(settings.output_dir)
    featured = FeaturedImage(url=featured_url, alt=featured_alt, title=featured_title)
    try:
        results = run_blog(
            path, output_dir, featured, image_urls or [],
            settings.image_placeholder, settings.write_json,
        )
    except (DocumentReadError, FileNotFoundError) as e:
        _fail(str(e), e.__cause__)
    except Exception as e:
        _fail("Blog conversion failed", e)

    for src, result in results:
        typer.echo(f"  {src}: '{result.blog.title}', {result.blog.image_count} image(s), {len(result.faq)} FAQ(s)")
    _echo_written(results, output_dir, "blog")


def glossary_cmd(
    path: Annotated[str, typer.Argument(help="Glossary .docx file or directory")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Read the first two-column table into an A-Z glossary."""
    settings = _settings(overrides={"output_dir": out, "log_level": log_level})
    output_dir = Path(settings.output_dir)
    try:
        results = run_glossary(path, output_dir, settings.write_json)
    except (DocumentReadError, FileNotFoundError) as e:
        _fail(str(e), e.__cause__)
    except Exception as e:
        _fail("Glossary conversion failed", e)

    for src, entries in results:
        typer.echo(f"  {src}: {len(entries)} term(s)")
    _echo_written(results, output_dir, "glossary")
