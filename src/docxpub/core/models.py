"""Structured content models produced by the extract pipeline"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Lesson(BaseModel):
    """A syllabus lesson; items are list-item markup."""
    title: str
    items: list[str] = []


class Module(BaseModel):
    """A syllabus module grouping lessons."""
    title: str
    description: str = ""
    lessons: list[Lesson] = []


class QAPair(BaseModel):
    question: str                   # plain text
    answer: str                     # markup, possibly several blocks


class CourseDocument(BaseModel):
    """Everything extracted from a course document."""
    title: str
    overview_markup: str = ""
    objectives_intro: str = ""
    objectives: list[str] = []      # list-item markup
    modules: list[Module] = []
    faq: list[QAPair] = []


class HeadingUnit(BaseModel):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    markup: str


class ParagraphUnit(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    markup: str


class ListUnit(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    items: list[str] = []


class ImageUnit(BaseModel):
    type: Literal["image"] = "image"
    alt: str
    index: int                      # 1-based, matches the "[Image N]" label

    @property
    def placeholder(self) -> str:
        return f"[Image {self.index}]"


ContentUnit = Annotated[
    Union[HeadingUnit, ParagraphUnit, ListUnit, ImageUnit],
    Field(discriminator="type"),
]


class BlogDocument(BaseModel):
    title: str = ""
    content: list[ContentUnit] = []
    image_count: int = 0


class BlogResult(BaseModel):
    """Blog body plus the FAQ section extracted alongside it."""
    blog: BlogDocument
    faq: list[QAPair] = []


class FeaturedImage(BaseModel):
    url: Optional[str] = None
    alt: Optional[str] = None
    title: Optional[str] = None


class GlossaryEntry(BaseModel):
    term: str
    definition: str                 # markup
