"""Blog Articles - command line entry point.

Usage:
    uv run python -m src.main validate
    uv run python -m src.main validate content/blog/solid-srp.md --strict
    uv run python -m src.main normalize --check
    uv run python -m src.main catalog --output data/output/articles.json
    uv run python -m src.main show content/blog/solid-srp.md
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from src.config import Config
from src.processing.article_catalog import ArticleCatalogCompiler
from src.processing.article_parser import ArticleParseError, ArticleParser
from src.processing.article_serializer import ArticleSerializer
from src.processing.article_validator import ArticleValidator
from src.util.fs_util import FSUtil

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"


def collect_article_files(paths: list[Path], config: Config) -> list[Path]:
    """Expand command line paths into article files.

    Directories are searched (non-recursively) for configured extensions; with
    no paths the configured articles directory is used.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    extensions = config.get_article_config().file_extensions
    if not paths:
        paths = [config.getArticlesDir()]

    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(FSUtil.find_files_by_extensions(path, extensions, recursive=False))
        elif path.is_file():
            files.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return files


def run_validate(config: Config, paths: list[Path], strict: bool) -> int:
    """Validate articles and print one line per issue.

    Returns:
        Process exit code.
    """
    validator = ArticleValidator(
        config.get_article_config(),
        config.get_validation_config(),
        public_dir=config.getPublicDir(),
    )
    files = collect_article_files(paths, config)
    if not files:
        print("No article files found")
        return 1

    failed = 0
    total_errors = 0
    total_warnings = 0
    for file_path in files:
        report = validator.validate_file(file_path)
        for issue in report.issues:
            print(issue.format(str(file_path)))
        total_errors += len(report.errors)
        total_warnings += len(report.warnings)
        if not report.is_clean(strict):
            failed += 1

    print(f"\n{'=' * 60}")
    print(f"SUMMARY: {len(files)} articles, {total_errors} errors, {total_warnings} warnings")
    return 1 if failed else 0


def run_normalize(config: Config, paths: list[Path], check: bool) -> int:
    """Rewrite articles in canonical form, or list the ones that would change.

    Returns:
        Process exit code.
    """
    parser = ArticleParser(config.get_article_config())
    serializer = ArticleSerializer()
    files = collect_article_files(paths, config)

    changed: list[Path] = []
    failures = 0
    for file_path in files:
        try:
            article = parser.parse_file(file_path)
        except ArticleParseError as e:
            logger.error(str(e))
            failures += 1
            continue

        normalized = serializer.normalize(article)
        if normalized == FSUtil.read_text_file(file_path):
            continue
        changed.append(file_path)
        if check:
            print(f"would reformat {file_path}")
        else:
            FSUtil.write_text_file(file_path, normalized, create_parents=False)
            print(f"reformatted {file_path}")

    print(f"{len(changed)} of {len(files)} articles {'need' if check else 'were'} reformatting")
    if failures:
        return 1
    return 1 if check and changed else 0


def run_catalog(config: Config, output: Path | None) -> int:
    """Parse the articles directory and write the catalog JSON.

    Returns:
        Process exit code.
    """
    catalog_config = config.get_catalog_config()
    parser = ArticleParser(config.get_article_config())
    articles = parser.parse_directory(config.getArticlesDir())

    compiler = ArticleCatalogCompiler(catalog_config)
    try:
        catalog = compiler.compile(articles)
    except ValueError as e:
        logger.error(f"Catalog compilation failed: {e}")
        return 1

    output_path = output if output is not None else config.getCatalogOutputFile()
    compiler.write(catalog, output_path)
    print(f"Wrote {catalog['count']} articles to {output_path}")
    return 0


def run_show(config: Config, file_path: Path) -> int:
    """Print a JSON summary of one article.

    Returns:
        Process exit code.
    """
    parser = ArticleParser(config.get_article_config())
    try:
        article = parser.parse_file(file_path)
    except ArticleParseError as e:
        logger.error(str(e))
        return 1

    summary = {
        "slug": article.slug,
        "frontmatter": article.frontmatter.model_dump(mode="json", by_alias=True),
        "extraFields": article.extra_fields,
        "headings": [f"{'#' * h.level} {h.text}" for h in article.headings],
        "codeBlocks": [{"language": b.language, "line": b.line, "closed": b.closed} for b in article.code_blocks],
        "images": article.images,
        "wordCount": article.word_count,
        "readingTime": article.reading_time,
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def build_argument_parser() -> argparse.ArgumentParser:
    """Build the command line interface."""
    parser = argparse.ArgumentParser(prog="blog-articles", description="Check and maintain blog article files.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate frontmatter and markdown bodies")
    validate.add_argument("paths", nargs="*", type=Path, help="Article files or directories")
    validate.add_argument("--strict", action="store_true", help="Treat warnings as failures")

    normalize = subparsers.add_parser("normalize", help="Rewrite articles in canonical form")
    normalize.add_argument("paths", nargs="*", type=Path, help="Article files or directories")
    normalize.add_argument("--check", action="store_true", help="Only report files that would change")

    catalog = subparsers.add_parser("catalog", help="Write the article catalog JSON")
    catalog.add_argument("--output", type=Path, default=None, help="Override the configured output file")

    show = subparsers.add_parser("show", help="Print a summary of one article")
    show.add_argument("file", type=Path, help="Article file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code.
    """
    args = build_argument_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    try:
        config = Config(args.config)
    except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Configuration error: {e}")
        return 1
    logger.debug(f"Loaded configuration from {config.getConfigPath()}")

    try:
        if args.command == "validate":
            return run_validate(config, args.paths, args.strict)
        if args.command == "normalize":
            return run_normalize(config, args.paths, args.check)
        if args.command == "catalog":
            return run_catalog(config, args.output)
        return run_show(config, args.file)
    except (FileNotFoundError, NotADirectoryError, KeyError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
