"""Processing of markdown article files."""

from src.processing.article_catalog import ArticleCatalogCompiler, CatalogEntry
from src.processing.article_parser import ArticleParseError, ArticleParser
from src.processing.article_serializer import ArticleSerializer
from src.processing.article_validator import ArticleValidator, ValidationIssue, ValidationReport

__all__ = [
    "ArticleCatalogCompiler",
    "ArticleParseError",
    "ArticleParser",
    "ArticleSerializer",
    "ArticleValidator",
    "CatalogEntry",
    "ValidationIssue",
    "ValidationReport",
]
