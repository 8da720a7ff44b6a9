"""Data models for blog articles."""

from src.models.article import (
    RECOGNIZED_FIELDS,
    Article,
    ArticleFrontmatter,
    CodeBlock,
    Heading,
    parse_pub_date,
)

__all__ = [
    "RECOGNIZED_FIELDS",
    "Article",
    "ArticleFrontmatter",
    "CodeBlock",
    "Heading",
    "parse_pub_date",
]
