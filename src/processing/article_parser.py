"""Parser for markdown article files."""

import logging
import math
import re
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token
from pydantic import ValidationError

from src.config import ArticleConfig
from src.models.article import Article, ArticleFrontmatter, CodeBlock, Heading
from src.util.fs_util import FSUtil

logger = logging.getLogger(__name__)


class ArticleParseError(ValueError):
    """Raised when an article file cannot be turned into an Article."""

    def __init__(self, filename: str, reason: str, code: str = "parse-error") -> None:
        """Initialize the exception.

        Args:
            filename: Name of the offending file.
            reason: Human readable message, already mentioning the file.
            code: Short identifier of the failure kind.
        """
        self.filename = filename
        self.reason = reason
        self.code = code
        super().__init__(reason)


def format_validation_errors(e: ValidationError) -> str:
    """Flatten a pydantic ValidationError into 'loc: msg' pairs."""
    return "; ".join(f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors())


def body_line_offset(text: str, body: str) -> int:
    """Count the file lines that precede the first line of the body."""
    core = body.strip()
    if not core:
        return 0
    index = text.rfind(core)
    if index < 0:
        return 0
    leading = len(body) - len(body.lstrip("\n"))
    return max(0, text[:index].count("\n") - leading)


def is_closing_fence(line: str, markup: str) -> bool:
    """Check whether a line closes a fence opened with the given marker."""
    # Fences inside blockquotes carry the quote markers on every line
    stripped = re.sub(r"^[\s>]*", "", line).rstrip()
    return len(stripped) >= len(markup) and set(stripped) == {markup[0]}


class ArticleParser:
    """Parse markdown articles into Article objects."""

    def __init__(self, config: ArticleConfig) -> None:
        """Initialize the parser with configuration.

        Args:
            config: Article reading configuration.
        """
        self.config = config
        self.md = MarkdownIt("commonmark")

    def load_post(self, text: str, filename: str) -> frontmatter.Post:
        """Split raw text into frontmatter metadata and body.

        Args:
            text: Full file content.
            filename: File name used in error messages.

        Returns:
            Loaded frontmatter Post.

        Raises:
            ArticleParseError: If there is no frontmatter block or its YAML is invalid.
        """
        if not frontmatter.checks(text):
            raise ArticleParseError(filename, f"Missing frontmatter block in {filename}", code="missing-frontmatter")

        try:
            return frontmatter.loads(text)
        except (yaml.YAMLError, ValueError) as e:
            raise ArticleParseError(filename, f"Invalid YAML in {filename}: {e}", code="invalid-yaml") from e

    def validate_frontmatter(self, metadata: dict[str, Any]) -> ArticleFrontmatter:
        """Validate frontmatter metadata against the article model.

        Raises:
            ValidationError: If recognized fields are missing or invalid.
        """
        return ArticleFrontmatter.model_validate(metadata, context={"date_formats": self.config.date_formats})

    def parse_text(self, text: str, filename: str) -> Article:
        """Parse article text into an Article.

        Args:
            text: Full file content including frontmatter.
            filename: Source file name; its stem becomes the slug.

        Returns:
            Parsed Article instance.

        Raises:
            ArticleParseError: If the frontmatter is missing or invalid.
        """
        post = self.load_post(text, filename)

        try:
            article_frontmatter = self.validate_frontmatter(post.metadata)
        except ValidationError as e:
            reason = f"Invalid frontmatter in {filename}: {format_validation_errors(e)}"
            raise ArticleParseError(filename, reason, code="invalid-field") from e

        return self.build_article(post, article_frontmatter, filename, body_line_offset(text, post.content))

    def build_article(
        self,
        post: frontmatter.Post,
        article_frontmatter: ArticleFrontmatter,
        filename: str,
        line_offset: int = 0,
    ) -> Article:
        """Assemble an Article from a loaded post and its validated frontmatter.

        Args:
            post: Loaded frontmatter post.
            article_frontmatter: Validated frontmatter model.
            filename: Source file name.
            line_offset: File lines before the body, added to reported line numbers.
        """
        body = post.content
        tokens = self.md.parse(body)

        headings = self._extract_headings(tokens, line_offset)
        paragraphs = self._extract_paragraphs(tokens)
        code_blocks = self._extract_code_blocks(tokens, body.splitlines(), line_offset)
        images = self._extract_images(tokens)
        word_count = sum(len(paragraph.split()) for paragraph in paragraphs)
        word_count += sum(len(heading.text.split()) for heading in headings)

        return Article(
            filename=filename,
            slug=Path(filename).stem,
            frontmatter=article_frontmatter,
            metadata=dict(post.metadata),
            body=body,
            headings=headings,
            paragraphs=paragraphs,
            code_blocks=code_blocks,
            images=images,
            word_count=word_count,
            reading_time=max(1, math.ceil(word_count / self.config.words_per_minute)),
        )

    def parse_file(self, file_path: Path) -> Article:
        """Parse single markdown file into Article.

        Args:
            file_path: Path to markdown file.

        Returns:
            Parsed Article instance.

        Raises:
            ArticleParseError: If file cannot be read or parsed.
        """
        try:
            text = FSUtil.read_text_file(file_path)
        except (OSError, ValueError) as e:
            raise ArticleParseError(file_path.name, f"Failed to load file {file_path.name}: {e}", code="unreadable-file") from e

        return self.parse_text(text, file_path.name)

    def parse_directory(self, directory: Path) -> list[Article]:
        """Parse all article files in directory.

        Args:
            directory: Directory containing markdown files.

        Returns:
            List of successfully parsed Article instances, ordered by file name.
        """
        articles: list[Article] = []

        markdown_files = FSUtil.find_files_by_extensions(directory, self.config.file_extensions, recursive=False)
        logger.info(f"Found {len(markdown_files)} markdown files in {directory}")

        for md_file in markdown_files:
            try:
                article = self.parse_file(md_file)
                articles.append(article)
                logger.debug(f"Successfully parsed: {md_file.name}")
            except ArticleParseError as e:
                logger.warning(f"Skipping {md_file.name}: {e}")
                continue

        logger.info(f"Successfully parsed {len(articles)}/{len(markdown_files)} articles")
        return articles

    def _extract_headings(self, tokens: list[Token], line_offset: int) -> list[Heading]:
        """Extract headings with their level and plain text."""
        headings: list[Heading] = []
        for i, token in enumerate(tokens):
            if token.type != "heading_open" or i + 1 >= len(tokens):
                continue
            line = (token.map[0] if token.map else 0) + 1 + line_offset
            headings.append(Heading(level=int(token.tag[1:]), text=self._plain_text(tokens[i + 1]), line=line))
        return headings

    def _extract_paragraphs(self, tokens: list[Token]) -> list[str]:
        """Extract clean text paragraphs from markdown."""
        paragraphs: list[str] = []
        for i, token in enumerate(tokens):
            # Next token after paragraph_open is the inline content
            if token.type == "paragraph_open" and i + 1 < len(tokens) and tokens[i + 1].type == "inline":
                text = self._plain_text(tokens[i + 1])
                if text:
                    paragraphs.append(text)
        return paragraphs

    def _extract_code_blocks(self, tokens: list[Token], lines: list[str], line_offset: int) -> list[CodeBlock]:
        """Extract fenced and indented code blocks.

        markdown-it lets an unclosed fence run to the end of the document, so
        closure is decided by looking at the last line the fence covers.
        """
        blocks: list[CodeBlock] = []
        for token in tokens:
            if token.type not in ("fence", "code_block"):
                continue
            start, end = token.map if token.map else (0, 0)
            if token.type == "code_block":
                blocks.append(CodeBlock(language=None, content=token.content, line=start + 1 + line_offset, fenced=False))
                continue

            info = token.info.strip()
            language = info.split()[0] if info else None
            closed = end - 1 > start and end - 1 < len(lines) and is_closing_fence(lines[end - 1], token.markup)
            blocks.append(CodeBlock(language=language, content=token.content, line=start + 1 + line_offset, closed=closed))
        return blocks

    def _extract_images(self, tokens: list[Token]) -> list[str]:
        """Extract image sources from inline tokens."""
        images: list[str] = []
        for token in tokens:
            if token.type != "inline" or not token.children:
                continue
            for child in token.children:
                src = child.attrGet("src") if child.type == "image" else None
                if src:
                    images.append(str(src))
        return images

    def _plain_text(self, inline: Token) -> str:
        """Render an inline token to plain text, dropping markdown markup."""
        if not inline.children:
            return inline.content.strip()
        parts: list[str] = []
        for child in inline.children:
            if child.type in ("text", "code_inline"):
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append(" ")
        return "".join(parts).strip()
