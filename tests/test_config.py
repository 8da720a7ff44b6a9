"""Unit tests for the Config class and its section models."""

from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from src.config import DEFAULT_DATE_FORMATS, ArticleConfig, CatalogConfig, Config, PathsConfig, ValidationConfig

PROJECT_CONFIG = Path(__file__).parent.parent / "config" / "config.yaml"

VALID_PATHS = {"articles_dir": "content/blog", "public_dir": "public", "output_dir": "data/output"}


def _write_config(tmp_path: Path, data: Any) -> Path:
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return config_path


class TestSectionModels:
    """Test cases for the pydantic section models."""

    def test_paths_require_all_fields(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PathsConfig.model_validate({"articles_dir": "content"})
        error_fields = {error["loc"][0] for error in exc_info.value.errors()}
        assert error_fields == {"public_dir", "output_dir"}

    def test_paths_reject_empty(self) -> None:
        with pytest.raises(ValidationError):
            PathsConfig.model_validate({**VALID_PATHS, "articles_dir": ""})

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ValidationConfig.model_validate({"unknown_option": True})
        assert any("unknown_option" in str(error) for error in exc_info.value.errors())

    def test_article_defaults(self) -> None:
        config = ArticleConfig()
        assert config.file_extensions == [".md"]
        assert config.date_formats == DEFAULT_DATE_FORMATS
        assert config.words_per_minute == 200

    def test_unknown_fields_policy_values(self) -> None:
        with pytest.raises(ValidationError):
            ValidationConfig.model_validate({"unknown_fields": "explode"})

    def test_catalog_output_file_optional(self) -> None:
        assert CatalogConfig.model_validate({"min_articles": 1}).output_file is None
        with pytest.raises(ValidationError):
            CatalogConfig.model_validate({"output_file": ""})

    def test_models_are_frozen(self) -> None:
        config = ValidationConfig()
        with pytest.raises(ValidationError):
            config.allow_future_dates = True  # type: ignore[misc]


class TestConfig:
    """Test cases for the Config loader."""

    def test_project_config_loads(self) -> None:
        config = Config(PROJECT_CONFIG)

        assert config.getArticlesDir() == Path("content/blog")
        assert config.getConfigPath() == PROJECT_CONFIG
        assert ".md" in config.get_article_config().file_extensions
        assert config.get_validation_config().check_round_trip is True
        assert config.get_catalog_config().output_file is None
        assert config.getCatalogOutputFile() == Path("data/output/articles.json")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("", encoding="utf-8")
        with pytest.raises(KeyError, match="paths"):
            Config(config_path)

    def test_missing_paths(self, tmp_path: Path) -> None:
        with pytest.raises(KeyError, match="paths"):
            Config(_write_config(tmp_path, {"articles": {}}))

    def test_invalid_paths(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Paths configuration validation failed"):
            Config(_write_config(tmp_path, {"paths": {"articles_dir": "x"}}))

    def test_optional_sections_default(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS}))

        assert config.get_article_config() == ArticleConfig()
        assert config.get_validation_config() == ValidationConfig()

    def test_empty_optional_section_defaults(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS, "article_validation": None}))

        assert config.get_validation_config() == ValidationConfig()

    def test_invalid_validation_section(self, tmp_path: Path) -> None:
        data = {"paths": VALID_PATHS, "article_validation": {"unknown_fields": "loud"}}
        with pytest.raises(ValueError, match="Article validation configuration validation failed: unknown_fields"):
            Config(_write_config(tmp_path, data))

    def test_catalog_section_required_on_access(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS}))
        with pytest.raises(KeyError, match="article_catalog"):
            config.get_catalog_config()

    def test_path_getters(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS}))

        assert config.getPublicDir() == Path("public")
        assert config.getOutputDir() == Path("data/output")

    def test_catalog_output_defaults_to_output_dir(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS, "article_catalog": {}}))

        assert config.getCatalogOutputFile() == Path("data/output/articles.json")

    def test_catalog_output_file_overrides_output_dir(self, tmp_path: Path) -> None:
        data = {"paths": VALID_PATHS, "article_catalog": {"output_file": "site/catalog.json"}}
        config = Config(_write_config(tmp_path, data))

        assert config.getCatalogOutputFile() == Path("site/catalog.json")

    def test_catalog_output_requires_catalog_section(self, tmp_path: Path) -> None:
        config = Config(_write_config(tmp_path, {"paths": VALID_PATHS}))
        with pytest.raises(KeyError, match="article_catalog"):
            config.getCatalogOutputFile()
