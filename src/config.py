"""Configuration loader for the blog article tooling."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_DATE_FORMATS = ["%Y-%m-%d", "%b %d %Y", "%B %d %Y", "%b %d, %Y", "%B %d, %Y"]


class PathsConfig(BaseModel):
    """Configuration for project directory paths."""

    articles_dir: str = Field(..., description="Directory holding the markdown articles", min_length=1)
    public_dir: str = Field(..., description="Static asset directory served by the site generator", min_length=1)
    output_dir: str = Field(..., description="Directory for generated files", min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ArticleConfig(BaseModel):
    """Configuration for reading articles."""

    file_extensions: list[str] = Field(default_factory=lambda: [".md"], min_length=1, description="Article file extensions")
    date_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DATE_FORMATS),
        min_length=1,
        description="strptime formats accepted for string pubDate values",
    )
    words_per_minute: int = Field(200, gt=0, description="Reading speed used for reading time")

    model_config = ConfigDict(frozen=True, extra="forbid")


class ValidationConfig(BaseModel):
    """Configuration for article validation rules."""

    recommended_fields: list[str] = Field(default_factory=lambda: ["description"], description="Fields reported when blank")
    unknown_fields: Literal["warn", "error", "ignore"] = Field("warn", description="How to report unrecognized fields")
    require_code_language: bool = Field(True, description="Fenced code blocks must name a language")
    allow_future_dates: bool = Field(False, description="Allow pubDate after today")
    check_hero_image_exists: bool = Field(False, description="Site-relative heroImage must exist under public_dir")
    check_round_trip: bool = Field(True, description="Serialize and re-parse every article")

    model_config = ConfigDict(frozen=True, extra="forbid")


class CatalogConfig(BaseModel):
    """Configuration for the article catalog."""

    output_file: str | None = Field(None, description="Catalog JSON path; defaults to articles.json in output_dir", min_length=1)
    min_articles: int = Field(1, ge=0, description="Minimum articles required")
    excerpt_words: int = Field(40, gt=0, description="Words in the fallback excerpt")

    model_config = ConfigDict(frozen=True, extra="forbid")


def _format_errors(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors())


class Config:
    """Configuration class that loads and provides access to config.yaml."""

    def __init__(self, config_path: str | Path) -> None:
        """Initialize the Config by loading the YAML file.

        Args:
            config_path: Path to the config.yaml file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            yaml.YAMLError: If the YAML file is invalid.
            KeyError: If required keys are missing from the config.
            ValueError: If a section is invalid or missing required fields.
        """
        self.config_path = Path(config_path)
        self._load(config_path)

        self._paths = self._validate_paths()
        self._articles = self._validate_section("articles", ArticleConfig, required=False)
        self._validation = self._validate_section("article_validation", ValidationConfig, required=False)

    def _load(self, config_path: str | Path) -> None:
        """Load the configuration from a YAML file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            yaml.YAMLError: If the YAML file is invalid.
            KeyError: If the file is empty.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, encoding="utf-8") as f:
            self._data = yaml.safe_load(f)

        # Handle empty or None YAML files
        if self._data is None:
            raise KeyError("Missing required key 'paths' in config file")
        if not isinstance(self._data, dict):
            raise ValueError("Config file must contain a mapping at the top level")

    def _validate_paths(self) -> PathsConfig:
        """Validate paths configuration.

        Raises:
            KeyError: If paths section is missing.
            ValueError: If paths configuration is invalid or contains empty paths.
        """
        if "paths" not in self._data:
            raise KeyError("Missing required key 'paths' in config file")

        try:
            return PathsConfig.model_validate(self._data["paths"])
        except ValidationError as e:
            raise ValueError(f"Paths configuration validation failed: {_format_errors(e)}") from e

    def _validate_section(self, key: str, model: type[Any], required: bool) -> Any:
        """Validate a section; optional sections fall back to model defaults when absent."""
        if key not in self._data:
            if required:
                raise KeyError(f"Missing required key '{key}' in config file")
            return model()

        section = self._data[key]
        if section is None:
            section = {}

        try:
            return model.model_validate(section)
        except ValidationError as e:
            label = key.replace("_", " ").capitalize()
            raise ValueError(f"{label} configuration validation failed: {_format_errors(e)}") from e

    def get_article_config(self) -> ArticleConfig:
        """Get article reading configuration."""
        return self._articles  # type: ignore[no-any-return]

    def get_validation_config(self) -> ValidationConfig:
        """Get article validation configuration."""
        return self._validation  # type: ignore[no-any-return]

    def get_catalog_config(self) -> CatalogConfig:
        """Get article catalog configuration.

        Returns:
            CatalogConfig instance.

        Raises:
            KeyError: If article_catalog section is missing from config.
            ValueError: If the section is invalid.
        """
        return self._validate_section("article_catalog", CatalogConfig, required=True)  # type: ignore[no-any-return]

    def getConfigPath(self) -> Path:
        """Get the path to config.yaml."""
        return self.config_path

    def getArticlesDir(self) -> Path:
        """Get the articles directory path.

        Relative paths resolve against the current working directory.
        """
        return Path(self._paths.articles_dir)

    def getPublicDir(self) -> Path:
        """Get the static asset directory path."""
        return Path(self._paths.public_dir)

    def getOutputDir(self) -> Path:
        """Get the output directory path."""
        return Path(self._paths.output_dir)

    def getCatalogOutputFile(self) -> Path:
        """Get the catalog JSON path, defaulting to articles.json in the output directory.

        Raises:
            KeyError: If article_catalog section is missing from config.
        """
        output_file = self.get_catalog_config().output_file
        if output_file is None:
            return self.getOutputDir() / "articles.json"
        return Path(output_file)
