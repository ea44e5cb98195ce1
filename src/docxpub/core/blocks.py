"""Block-element capability interface and its BeautifulSoup implementation"""

import re
from typing import Optional, Protocol

from bs4 import BeautifulSoup, Tag


HEADING_RE = re.compile(r'^h([1-6])$')


class BlockNode(Protocol):
    """Read-only view of one markup element, as the extractors see it."""

    @property
    def kind(self) -> str: ...          # lower-case tag name

    @property
    def text(self) -> str: ...          # plain text, trimmed

    @property
    def inner_markup(self) -> str: ...

    @property
    def outer_markup(self) -> str: ...

    @property
    def children(self) -> list["BlockNode"]: ...

    def find(self, kind: str) -> Optional["BlockNode"]: ...

    def find_all(self, kind: str) -> list["BlockNode"]: ...

    def attr(self, name: str) -> Optional[str]: ...


class SoupBlock:
    """BlockNode backed by a bs4 Tag."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    def __repr__(self) -> str:
        return f"SoupBlock({self.outer_markup[:60]!r})"

    @property
    def kind(self) -> str:
        return self.tag.name.lower()

    @property
    def text(self) -> str:
        return self.tag.get_text().strip()

    @property
    def inner_markup(self) -> str:
        return self.tag.decode_contents().strip()

    @property
    def outer_markup(self) -> str:
        return str(self.tag)

    @property
    def children(self) -> list["SoupBlock"]:
        return [SoupBlock(c) for c in self.tag.find_all(True, recursive=False)]

    def find(self, kind: str) -> Optional["SoupBlock"]:
        found = self.tag.find(kind)
        return SoupBlock(found) if found is not None else None

    def find_all(self, kind: str) -> list["SoupBlock"]:
        return [SoupBlock(t) for t in self.tag.find_all(kind)]

    def attr(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value


def heading_level(block: BlockNode) -> int | None:
    """Return the heading level (1-6) for h1..h6 blocks, else None."""
    m = HEADING_RE.match(block.kind)
    return int(m.group(1)) if m else None


def is_heading(block: BlockNode, max_level: int = 6) -> bool:
    level = heading_level(block)
    return level is not None and level <= max_level


def make_soup(html: str) -> BeautifulSoup:
    """Parse a markup fragment with the stdlib-backed html.parser."""
    return BeautifulSoup(html or "", "html.parser")


def parse_blocks(html: str) -> list[SoupBlock]:
    """Return the top-level elements of a markup fragment, in document order."""
    soup = make_soup(html)
    return [SoupBlock(t) for t in soup.find_all(True, recursive=False)]
