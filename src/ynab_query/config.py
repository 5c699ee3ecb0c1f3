"""Configuration loading and validation for the YNAB query tools."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml

from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)

# Environment variables consulted for process-wide defaults
API_TOKEN_ENV = "YNAB_API_TOKEN"
BUDGET_ID_ENV = "YNAB_BUDGET_ID"

MISSING_BUDGET_MESSAGE = (
    "No budget ID provided. Please provide a budget ID or set the "
    f"{BUDGET_ID_ENV} environment variable."
)


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""

    pass


@dataclass
class ListingConfig:
    """Configuration for the listing pipeline.

    Attributes:
        default_limit: Page size when the caller gives none.
        max_limit: Upper bound a requested page size is clamped to.
        default_lookback_days: Days before today to list from when neither
            a month nor a since-date is given.
    """

    default_limit: int = 100
    max_limit: int = 500
    default_lookback_days: int = 30

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ListingConfig":
        """Create from dictionary."""
        return cls(
            default_limit=int(data.get("default_limit", 100)),  # type: ignore[arg-type]
            max_limit=int(data.get("max_limit", 500)),  # type: ignore[arg-type]
            default_lookback_days=int(data.get("default_lookback_days", 30)),  # type: ignore[arg-type]
        )


@dataclass
class SearchConfig:
    """Configuration for the search pipeline.

    Attributes:
        default_page_size: Results per page when the caller gives none.
        max_page_size: Largest page size accepted.
    """

    default_page_size: int = 50
    max_page_size: int = 100

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "SearchConfig":
        """Create from dictionary."""
        return cls(
            default_page_size=int(data.get("default_page_size", 50)),  # type: ignore[arg-type]
            max_page_size=int(data.get("max_page_size", 100)),  # type: ignore[arg-type]
        )


@dataclass
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Path to log file, or None for console only.
    """

    level: str = "WARNING"
    file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LoggingConfig":
        """Create from dictionary."""
        log_file = data.get("file")
        return cls(
            level=str(data.get("level", "WARNING")),
            file=str(log_file) if log_file else None,
        )


@dataclass
class Config:
    """Main configuration container.

    Attributes:
        budget_id: Default budget used when a request names none.
        api_token: Personal access token for the budgeting API.
        listing: Listing pipeline configuration.
        search: Search pipeline configuration.
        logging: Logging configuration.
    """

    budget_id: str | None = None
    api_token: str | None = field(default=None, repr=False)
    listing: ListingConfig = field(default_factory=ListingConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def resolve_budget_id(self, requested: Optional[str] = None) -> str:
        """Pick the budget for a request.

        Args:
            requested: Budget ID given by the caller, if any.

        Returns:
            The requested budget ID, or the configured default.

        Raises:
            ConfigurationError: If neither is available.
        """
        budget_id = requested or self.budget_id
        if not budget_id:
            raise ConfigurationError(MISSING_BUDGET_MESSAGE)
        return budget_id


def load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ConfigurationError: If the file is not valid YAML or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not content:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            f"{path} must contain a mapping, got {type(content).__name__}"
        )
    return content


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def load_settings(path: Path) -> Config:
    """Load settings from settings.yaml.

    Args:
        path: Path to settings.yaml.

    Returns:
        Config populated from the file (environment not yet applied).
    """
    data = load_yaml_file(path)

    budget_id = data.get("budget_id")
    return Config(
        budget_id=str(budget_id) if budget_id else None,
        listing=ListingConfig.from_dict(_section(data, "listing")),
        search=SearchConfig.from_dict(_section(data, "search")),
        logging=LoggingConfig.from_dict(_section(data, "logging")),
    )


def apply_environment(config: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Apply environment overrides for the credential and default budget.

    Args:
        config: Config to update in place.
        environ: Environment mapping (default: os.environ).

    Returns:
        The same Config.
    """
    if environ is None:
        environ = os.environ

    token = environ.get(API_TOKEN_ENV)
    if token:
        config.api_token = token

    budget_id = environ.get(BUDGET_ID_ENV)
    if budget_id:
        config.budget_id = budget_id

    return config


def load_config(
    settings_path: Optional[Path] = None,
    config_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Load complete configuration from settings file and environment.

    Args:
        settings_path: Path to settings.yaml (or None to use default).
        config_dir: Base config directory (default: ./config).
        environ: Environment mapping (default: os.environ).

    Returns:
        Complete Config object.

    Raises:
        FileNotFoundError: If an explicitly given settings file is missing.
        ConfigurationError: If the settings file is malformed.
    """
    if settings_path is not None:
        config = load_settings(settings_path)
        logger.info(f"Loaded settings from {settings_path}")
    else:
        if config_dir is None:
            config_dir = Path("config")
        default_path = config_dir / "settings.yaml"
        if default_path.exists():
            config = load_settings(default_path)
            logger.info(f"Loaded settings from {default_path}")
        else:
            logger.debug(f"Settings file not found: {default_path}, using defaults")
            config = Config()

    apply_environment(config, environ)

    if not config.api_token:
        logger.warning(f"{API_TOKEN_ENV} is not set; API requests will fail")

    return config
