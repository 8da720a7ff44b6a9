"""Serializer for writing articles back to markdown with frontmatter."""

import logging
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from src.models.article import RECOGNIZED_FIELDS, Article
from src.util.fs_util import FSUtil

logger = logging.getLogger(__name__)


class NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated values in full instead of as anchors."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


class ArticleSerializer:
    """Turn Article objects back into markdown text."""

    def dumps(self, article: Article) -> str:
        """Serialize an article exactly as parsed.

        Frontmatter keys keep their original order and raw values, so parsing
        the result yields the same metadata and body.
        """
        return self._render(article.metadata, article.body)

    def normalize(self, article: Article) -> str:
        """Serialize an article in canonical form.

        Recognized fields come first in a fixed order, followed by any other
        keys in their original order. pubDate is written as an ISO date and the
        body is trimmed.
        """
        metadata: dict[str, Any] = {}
        for key in RECOGNIZED_FIELDS:
            if key in article.metadata:
                metadata[key] = article.metadata[key]
        metadata["pubDate"] = article.pub_date
        for key in article.extra_fields:
            metadata[key] = article.metadata[key]

        return self._render(metadata, article.body.strip())

    def write(self, article: Article, path: Path, normalized: bool = False) -> None:
        """Write an article to disk."""
        text = self.normalize(article) if normalized else self.dumps(article)
        FSUtil.write_text_file(path, text, create_parents=True)
        logger.info(f"Wrote {path}")

    def _render(self, metadata: dict[str, Any], body: str) -> str:
        post = frontmatter.Post(body)
        post.metadata.update(metadata)
        # frontmatter.dumps strips the trailing newline
        return frontmatter.dumps(post, Dumper=NoAliasDumper, sort_keys=False) + "\n"
