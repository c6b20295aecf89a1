"""cgi_helper configuration system.

Configuration is YAML-based. Scripts normally call the library with
explicit arguments; the config file supplies defaults for the CLI and for
TemplateRenderer instances built from it.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.cgi_helper/config.yaml
3. ./cgi_helper.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cgi_helper.doctypes import normalize_key
from cgi_helper.utils.logging import LEVEL_NAMES, LogMode

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class HeaderConfig:
    """Response header defaults.

    Attributes:
        content_type: MIME type written in the Content-type line
        doctype: Default doctype identifier
    """

    content_type: str = "text/html"
    doctype: str = "html5"

    def __post_init__(self) -> None:
        """Validate header configuration."""
        if not self.content_type or not self.content_type.strip():
            raise ValueError("Header content_type must not be empty")

        # Raises UnknownDoctypeError for identifiers outside the table
        self.doctype = normalize_key(self.doctype).value


@dataclass
class RenderConfig:
    """Template renderer settings.

    Attributes:
        strict_undefined: Raise on names missing from the context
        keep_trailing_newline: Keep the final newline of the template
    """

    strict_undefined: bool = True
    keep_trailing_newline: bool = True


@dataclass
class LoggingConfig:
    """Logging settings.

    Attributes:
        mode: Output mode (human, verbose, json)
        level: Minimum level name (debug, info, warning, error)
    """

    mode: str = "human"
    level: str = "warning"

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        valid_modes = {mode.value for mode in LogMode}
        if self.mode not in valid_modes:
            raise ValueError(f"Invalid logging mode: {self.mode}. Valid: {valid_modes}")

        self.level = self.level.lower()
        if self.level not in LEVEL_NAMES:
            raise ValueError(
                f"Invalid logging level: {self.level}. Valid: {set(LEVEL_NAMES)}"
            )


@dataclass
class HelperConfig:
    """Top-level cgi_helper configuration.

    Attributes:
        header: Response header defaults
        render: Template renderer settings
        logging: Logging settings
    """

    header: HeaderConfig = field(default_factory=HeaderConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax. Example: ${CGI_CONTENT_TYPE} -> its value.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.cgi_helper/config.yaml
    2. ./cgi_helper.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".cgi_helper" / "config.yaml",
        start_path / "cgi_helper.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> HelperConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        HelperConfig instance

    Raises:
        ValueError: If a value fails validation
        UnknownDoctypeError: If header.doctype is not a known identifier
    """
    data = substitute_env_vars(data)

    config = HelperConfig()

    if "header" in data:
        header_data = data["header"] or {}
        config.header = HeaderConfig(
            content_type=header_data.get("content_type", config.header.content_type),
            doctype=header_data.get("doctype", config.header.doctype),
        )

    if "render" in data:
        render_data = data["render"] or {}
        config.render = RenderConfig(
            strict_undefined=render_data.get("strict_undefined", True),
            keep_trailing_newline=render_data.get("keep_trailing_newline", True),
        )

    if "logging" in data:
        logging_data = data["logging"] or {}
        config.logging = LoggingConfig(
            mode=logging_data.get("mode", config.logging.mode),
            level=logging_data.get("level", config.logging.level),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> HelperConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        HelperConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = HelperConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# cgi_helper configuration

# Response header defaults
header:
  content_type: "text/html"
  doctype: "html5"   # html5, xhtml_strict, xhtml_transitional, html4str, ...

# Template rendering
render:
  strict_undefined: true       # unknown names raise instead of rendering empty
  keep_trailing_newline: true

# Diagnostics go to stderr; stdout carries the response
logging:
  mode: "human"    # human, verbose, json
  level: "warning"
'''
