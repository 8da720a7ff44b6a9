#!/usr/bin/env python3
"""Validate that the articles directory exists and contains markdown files.

This script reads the path from config.yaml and validates the directory,
so CI fails early when the content checkout is missing.

Exit codes:
    0: Articles directory exists and contains markdown files
    1: Error (directory doesn't exist or no markdown files found)
"""

import sys
from pathlib import Path

from src.config import Config
from src.util.fs_util import FSUtil


def check_articles_dir(articles_dir: Path, extensions: list[str]) -> str | None:
    """Return an error message, or None when the directory holds articles."""
    if not articles_dir.is_dir():
        return f"Articles directory does not exist: {articles_dir}"

    if not FSUtil.find_files_by_extensions(articles_dir, extensions, recursive=False):
        return f"No markdown articles found in {articles_dir}"

    return None


def main() -> None:
    """Validate articles directory from config."""
    project_root = Path(__file__).parent.parent
    config = Config(config_path=project_root / "config" / "config.yaml")

    articles_dir = config.getArticlesDir()
    if not articles_dir.is_absolute():
        articles_dir = project_root / articles_dir

    error = check_articles_dir(articles_dir, config.get_article_config().file_extensions)
    if error:
        print(f"✗ Error: {error}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
