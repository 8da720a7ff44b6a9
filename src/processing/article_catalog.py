"""Compiler for the article catalog manifest."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.config import CatalogConfig
from src.models.article import Article
from src.util.fs_util import FSUtil

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    """One article in the catalog."""

    slug: str
    title: str
    description: str
    pub_date: str = Field(..., serialization_alias="pubDate")
    hero_image: str | None = Field(None, serialization_alias="heroImage")
    reading_time: int = Field(..., serialization_alias="readingTime")
    code_languages: list[str] = Field(default_factory=list, serialization_alias="codeLanguages")

    model_config = ConfigDict(frozen=True)


class ArticleCatalogCompiler:
    """Compile parsed articles into a catalog listing."""

    def __init__(self, config: CatalogConfig) -> None:
        """Initialize compiler with configuration."""
        self.config = config

    def compile(self, articles: list[Article]) -> dict[str, Any]:
        """Compile articles into the catalog structure.

        Sorts by date (newest first, ties by title), validates the count, and
        transforms each article into a catalog entry.
        """
        # Stable sort on title first so equal dates keep alphabetical order
        by_title = sorted(articles, key=lambda a: a.title.casefold())
        sorted_articles = sorted(by_title, key=lambda a: a.pub_date, reverse=True)

        if len(sorted_articles) < self.config.min_articles:
            raise ValueError(f"Need {self.config.min_articles} articles, found {len(sorted_articles)}")

        entries = [self._to_entry(a).model_dump(by_alias=True) for a in sorted_articles]
        return {"count": len(entries), "articles": entries}

    def write(self, catalog: dict[str, Any], path: Path) -> None:
        """Write the catalog as JSON."""
        FSUtil.write_text_file(path, json.dumps(catalog, indent=2, ensure_ascii=False) + "\n", create_parents=True)
        logger.info(f"Wrote catalog with {catalog['count']} articles to {path}")

    def _to_entry(self, a: Article) -> CatalogEntry:
        """Convert to catalog entry format."""
        description = a.frontmatter.description
        if not description or not description.strip():
            description = self._excerpt(a)

        return CatalogEntry(
            slug=a.slug,
            title=a.title,
            description=description.strip(),
            pub_date=a.pub_date.isoformat(),
            hero_image=a.frontmatter.hero_image,
            reading_time=a.reading_time,
            code_languages=a.code_languages,
        )

    def _excerpt(self, a: Article) -> str:
        """Build an excerpt from the first paragraph."""
        if not a.paragraphs:
            return ""
        words = a.paragraphs[0].split()
        if len(words) <= self.config.excerpt_words:
            return " ".join(words)
        return " ".join(words[: self.config.excerpt_words]) + "…"
