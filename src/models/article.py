"""Pydantic models for article data structures."""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.config import DEFAULT_DATE_FORMATS

RECOGNIZED_FIELDS = ("title", "description", "pubDate", "heroImage")


def parse_pub_date(value: Any, date_formats: list[str]) -> datetime.date:
    """Coerce a front-matter pubDate value into a calendar date.

    Args:
        value: Value as loaded from YAML (date, datetime or string).
        date_formats: strptime formats tried in order for strings.

    Returns:
        Parsed date.

    Raises:
        ValueError: If the value cannot be interpreted as a date.
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("pubDate must not be empty")
        for fmt in date_formats:
            try:
                return datetime.datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        try:
            return datetime.datetime.fromisoformat(text).date()
        except ValueError:
            pass
        raise ValueError(f"pubDate {text!r} does not match any of: {', '.join(date_formats)}")
    raise ValueError(f"pubDate must be a date or string, got {type(value).__name__}")


class ArticleFrontmatter(BaseModel):
    """Parsed frontmatter from markdown article."""

    title: str = Field(..., description="Article title")
    description: str | None = Field(None, description="Short article description")
    pub_date: datetime.date = Field(..., alias="pubDate", description="Publication date")
    hero_image: str | None = Field(None, alias="heroImage", description="Hero image path or URL")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("pub_date", mode="before")
    @classmethod
    def _coerce_pub_date(cls, value: Any, info: ValidationInfo) -> datetime.date:
        date_formats = DEFAULT_DATE_FORMATS
        if isinstance(info.context, dict) and info.context.get("date_formats"):
            date_formats = info.context["date_formats"]
        return parse_pub_date(value, date_formats)


class Heading(BaseModel):
    """Markdown heading found in an article body."""

    level: int = Field(..., ge=1, le=6)
    text: str
    line: int = Field(..., description="1-based line in the body")

    model_config = ConfigDict(frozen=True)


class CodeBlock(BaseModel):
    """Code sample embedded in an article body."""

    language: str | None = Field(None, description="Language from the fence info string")
    content: str
    line: int = Field(..., description="1-based line in the body where the block starts")
    fenced: bool = True
    closed: bool = True

    model_config = ConfigDict(frozen=True)


class Article(BaseModel):
    """Parsed markdown article with frontmatter and body."""

    filename: str = Field(..., description="Source filename")
    slug: str = Field(..., description="Slug derived from the filename")
    frontmatter: ArticleFrontmatter
    metadata: dict[str, Any] = Field(..., description="Raw frontmatter mapping in file order")
    body: str = Field(..., description="Markdown body")
    headings: list[Heading] = Field(default_factory=list)
    paragraphs: list[str] = Field(default_factory=list, description="Plain-text body paragraphs")
    code_blocks: list[CodeBlock] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, description="Image sources in the body")
    word_count: int = Field(0, ge=0, description="Prose words, code excluded")
    reading_time: int = Field(1, ge=1, description="Estimated reading time in minutes")

    model_config = ConfigDict(frozen=True)

    @property
    def title(self) -> str:
        return self.frontmatter.title

    @property
    def pub_date(self) -> datetime.date:
        return self.frontmatter.pub_date

    @property
    def extra_fields(self) -> list[str]:
        """Frontmatter keys outside the recognized fields."""
        return [key for key in self.metadata if key not in RECOGNIZED_FIELDS]

    @property
    def code_languages(self) -> list[str]:
        """Sorted distinct languages used by code blocks."""
        return sorted({block.language for block in self.code_blocks if block.language})
