"""Tests for configuration loading."""

from pathlib import Path

import pytest

from ynab_query.config import (
    Config,
    ConfigurationError,
    apply_environment,
    load_config,
    load_settings,
)


class TestConfig:
    """Tests for Config."""

    def test_resolve_requested_budget(self) -> None:
        """Test that a requested budget wins over the default."""
        config = Config(budget_id="default")
        assert config.resolve_budget_id("requested") == "requested"
        assert config.resolve_budget_id(None) == "default"

    def test_resolve_without_budget_raises(self) -> None:
        """Test that no budget at all raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="No budget ID provided"):
            Config().resolve_budget_id("")

    def test_token_hidden_from_repr(self) -> None:
        """Test that the API token does not leak through repr."""
        assert "s3cret" not in repr(Config(api_token="s3cret"))


class TestLoadConfig:
    """Tests for settings file and environment loading."""

    def test_defaults_without_settings_file(self, tmp_path: Path) -> None:
        """Test that a missing default settings file yields defaults."""
        config = load_config(config_dir=tmp_path, environ={})

        assert config.budget_id is None
        assert config.listing.default_limit == 100
        assert config.listing.max_limit == 500
        assert config.search.default_page_size == 50
        assert config.search.max_page_size == 100

    def test_settings_file(self, tmp_path: Path) -> None:
        """Test values read from settings.yaml."""
        (tmp_path / "settings.yaml").write_text(
            "budget_id: from-file\n"
            "listing:\n"
            "  default_limit: 25\n"
            "  default_lookback_days: 7\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  file: out.log\n",
            encoding="utf-8",
        )
        config = load_config(config_dir=tmp_path, environ={})

        assert config.budget_id == "from-file"
        assert config.listing.default_limit == 25
        assert config.listing.max_limit == 500
        assert config.listing.default_lookback_days == 7
        assert config.logging.level == "DEBUG"
        assert config.logging.file == "out.log"

    def test_environment_overrides(self, tmp_path: Path) -> None:
        """Test that environment variables override the settings file."""
        settings = tmp_path / "settings.yaml"
        settings.write_text("budget_id: from-file\n", encoding="utf-8")

        config = load_config(
            settings_path=settings,
            environ={"YNAB_API_TOKEN": "tok", "YNAB_BUDGET_ID": "from-env"},
        )
        assert config.api_token == "tok"
        assert config.budget_id == "from-env"

    def test_apply_environment_ignores_empty(self) -> None:
        """Test that empty environment values do not clear settings."""
        config = apply_environment(Config(budget_id="keep"), {"YNAB_BUDGET_ID": ""})
        assert config.budget_id == "keep"

    def test_explicit_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that an explicitly named but missing file is an error."""
        with pytest.raises(FileNotFoundError):
            load_config(settings_path=tmp_path / "nope.yaml", environ={})

    def test_invalid_section_type(self, tmp_path: Path) -> None:
        """Test that a non-mapping section raises ConfigurationError."""
        settings = tmp_path / "settings.yaml"
        settings.write_text("listing:\n  - 1\n  - 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="'listing' must be a mapping"):
            load_settings(settings)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that malformed YAML raises ConfigurationError."""
        settings = tmp_path / "settings.yaml"
        settings.write_text("listing: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings(settings)

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty settings file yields defaults."""
        settings = tmp_path / "settings.yaml"
        settings.write_text("", encoding="utf-8")
        assert load_settings(settings).listing.default_limit == 100
