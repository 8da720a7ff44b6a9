"""Validation of article frontmatter and markdown bodies."""

import datetime
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.config import ArticleConfig, ValidationConfig
from src.models.article import RECOGNIZED_FIELDS, Article
from src.processing.article_parser import ArticleParseError, ArticleParser, body_line_offset
from src.processing.article_serializer import ArticleSerializer
from src.util.fs_util import FSUtil

logger = logging.getLogger(__name__)

Severity = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    """Single problem found in an article."""

    code: str = Field(..., description="Stable identifier of the rule")
    severity: Severity
    message: str
    field: str | None = Field(None, description="Frontmatter field the issue refers to")
    line: int | None = Field(None, description="1-based line in the file")

    model_config = ConfigDict(frozen=True)

    def format(self, filename: str) -> str:
        """Render as 'file:line: severity [code] message'."""
        location = f"{filename}:{self.line}" if self.line else filename
        return f"{location}: {self.severity} [{self.code}] {self.message}"


class ValidationReport(BaseModel):
    """All issues found in one article file."""

    filename: str
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def is_clean(self, strict: bool) -> bool:
        """Check the report passes, treating warnings as failures when strict."""
        return not self.issues if strict else self.is_valid


class ArticleValidator:
    """Check articles against the frontmatter and body rules."""

    def __init__(
        self,
        article_config: ArticleConfig,
        validation_config: ValidationConfig,
        public_dir: Path | None = None,
        today: datetime.date | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            article_config: Article reading configuration.
            validation_config: Rules to apply.
            public_dir: Static asset directory used to resolve site-relative heroImage paths.
            today: Reference date for the future-date rule; defaults to the current date.
        """
        self.config = validation_config
        self.parser = ArticleParser(article_config)
        self.serializer = ArticleSerializer()
        self.public_dir = public_dir
        self.today = today

    def validate_text(self, text: str, filename: str) -> ValidationReport:
        """Validate raw article text.

        Args:
            text: Full file content.
            filename: Name used in the report.

        Returns:
            ValidationReport listing every issue found.
        """
        report = ValidationReport(filename=filename)

        try:
            post = self.parser.load_post(text, filename)
        except ArticleParseError as e:
            report.issues.append(ValidationIssue(code=e.code, severity="error", message=e.reason, line=1))
            return report

        metadata = post.metadata
        report.issues.extend(self._check_unknown_fields(list(metadata)))
        report.issues.extend(self._check_recommended_fields(metadata))

        try:
            article_frontmatter = self.parser.validate_frontmatter(metadata)
        except ValidationError as e:
            for err in e.errors():
                field = ".".join(str(loc) for loc in err["loc"])
                report.issues.append(
                    ValidationIssue(code="invalid-field", severity="error", message=f"{field}: {err['msg']}", field=field)
                )
            return report

        article = self.parser.build_article(post, article_frontmatter, filename, body_line_offset(text, post.content))
        report.issues.extend(self._check_dates(article))
        report.issues.extend(self._check_hero_image(article))
        report.issues.extend(self._check_body(article))
        if self.config.check_round_trip:
            report.issues.extend(self._check_round_trip(article))

        return report

    def validate_file(self, file_path: Path) -> ValidationReport:
        """Validate a single article file."""
        try:
            text = FSUtil.read_text_file(file_path)
        except (OSError, ValueError) as e:
            issue = ValidationIssue(code="unreadable-file", severity="error", message=f"Failed to load file {file_path.name}: {e}")
            return ValidationReport(filename=file_path.name, issues=[issue])

        report = self.validate_text(text, file_path.name)
        logger.debug(f"{file_path.name}: {len(report.errors)} errors, {len(report.warnings)} warnings")
        return report

    def validate_directory(self, directory: Path) -> list[ValidationReport]:
        """Validate every article file in a directory, ordered by file name."""
        files = FSUtil.find_files_by_extensions(directory, self.parser.config.file_extensions, recursive=False)
        logger.info(f"Validating {len(files)} articles in {directory}")
        return [self.validate_file(path) for path in files]

    def _check_unknown_fields(self, keys: list[str]) -> list[ValidationIssue]:
        if self.config.unknown_fields == "ignore":
            return []
        severity: Severity = "error" if self.config.unknown_fields == "error" else "warning"
        return [
            ValidationIssue(
                code="unknown-field",
                severity=severity,
                message=f"Unrecognized frontmatter field '{key}' (expected one of: {', '.join(RECOGNIZED_FIELDS)})",
                field=key,
            )
            for key in keys
            if key not in RECOGNIZED_FIELDS
        ]

    def _check_recommended_fields(self, metadata: dict[str, object]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for key in self.config.recommended_fields:
            value = metadata.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                issues.append(
                    ValidationIssue(
                        code="missing-recommended-field",
                        severity="warning",
                        message=f"Recommended field '{key}' is missing or empty",
                        field=key,
                    )
                )
        return issues

    def _check_dates(self, article: Article) -> list[ValidationIssue]:
        if self.config.allow_future_dates:
            return []
        today = self.today or datetime.date.today()
        if article.pub_date <= today:
            return []
        return [
            ValidationIssue(
                code="future-date",
                severity="warning",
                message=f"pubDate {article.pub_date.isoformat()} is in the future",
                field="pubDate",
            )
        ]

    def _check_hero_image(self, article: Article) -> list[ValidationIssue]:
        hero = article.frontmatter.hero_image
        if not self.config.check_hero_image_exists or not hero or self.public_dir is None:
            return []
        # Only site-relative paths map onto the public directory
        if not hero.startswith("/") or hero.startswith("//"):
            return []
        if (self.public_dir / hero.lstrip("/")).is_file():
            return []
        return [
            ValidationIssue(
                code="missing-hero-image",
                severity="error",
                message=f"heroImage '{hero}' not found under {self.public_dir}",
                field="heroImage",
            )
        ]

    def _check_body(self, article: Article) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if not article.body.strip():
            issues.append(ValidationIssue(code="empty-body", severity="warning", message="Article body is empty"))
            return issues

        for block in article.code_blocks:
            if not block.fenced:
                continue
            if not block.closed:
                issues.append(
                    ValidationIssue(
                        code="unclosed-code-fence",
                        severity="error",
                        message="Code fence is never closed",
                        line=block.line,
                    )
                )
            if self.config.require_code_language and not block.language:
                issues.append(
                    ValidationIssue(
                        code="missing-code-language",
                        severity="warning",
                        message="Code fence has no language",
                        line=block.line,
                    )
                )
            if not block.content.strip():
                issues.append(
                    ValidationIssue(code="empty-code-block", severity="warning", message="Code block is empty", line=block.line)
                )
        return issues

    def _check_round_trip(self, article: Article) -> list[ValidationIssue]:
        try:
            reparsed = self.parser.parse_text(self.serializer.dumps(article), article.filename)
        except ArticleParseError as e:
            return [ValidationIssue(code="round-trip-mismatch", severity="error", message=f"Re-serialized article fails to parse: {e}")]

        changed = [key for key in article.metadata if reparsed.metadata.get(key) != article.metadata[key]]
        changed += [key for key in reparsed.metadata if key not in article.metadata]
        issues = [
            ValidationIssue(
                code="round-trip-mismatch",
                severity="error",
                message=f"Field '{key}' changes when the article is re-serialized",
                field=key,
            )
            for key in changed
        ]
        if reparsed.body.strip() != article.body.strip():
            issues.append(
                ValidationIssue(code="round-trip-mismatch", severity="error", message="Body changes when the article is re-serialized")
            )
        return issues
