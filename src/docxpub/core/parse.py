"""File discovery, whole-file reads, and docx-to-markup conversion"""

import io
from pathlib import Path
from typing import Union

import mammoth
import structlog

from docxpub.core.blocks import SoupBlock, parse_blocks


logger = structlog.get_logger(__name__)

DOCX_EXTENSIONS = {'.docx'}

Source = Union[str, Path, bytes]


class DocumentReadError(RuntimeError):
    """The input document could not be read."""


def discover_files(path: Path) -> list[Path]:
    """Return sorted .docx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in DOCX_EXTENSIONS else []
    if not path.is_dir():
        return []
    return sorted(
        p for p in path.rglob('*')
        if p.suffix.lower() in DOCX_EXTENSIONS and not p.name.startswith('~$')
    )


def read_source(source: Source) -> bytes:
    """Read the whole binary document in one call."""
    if isinstance(source, bytes):
        return source
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise DocumentReadError("Error reading file") from e


def convert_to_html(data: bytes) -> str:
    """Convert docx bytes to markup; converter errors propagate unchanged."""
    result = mammoth.convert_to_html(io.BytesIO(data))
    for message in result.messages:
        logger.debug("provider.converter_message", type=message.type, message=message.message)
    logger.debug("provider.converted", chars=len(result.value))
    return result.value


def load_html(source: Source) -> str:
    return convert_to_html(read_source(source))


def load_blocks(source: Source) -> list[SoupBlock]:
    """Read, convert, and split a document into its top-level blocks."""
    return parse_blocks(load_html(source))
