"""User configuration for discovery and removal.

Settings are read from ``~/.config/rmapp/config.toml``. Every key is
optional; a missing file yields the defaults. The matching heuristics
(token-run search, domain-hint pruning) are exposed here because they
trade false positives against false negatives and users may want to
tune them per machine.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rmapp.core.paths import get_config_path

logger = logging.getLogger(__name__)

SizeModeName = Literal["physical", "logical"]
TokenRunPolicyName = Literal["receipts", "everywhere", "off"]


class RmappConfig(BaseModel):
    """Validated rmapp settings.

    Attributes:
        size_mode: Report allocated ("physical") or apparent ("logical") sizes.
        domain_hint_pruning: Skip shallow vendor directories that share the
            bundle identifier's domain but do not match the app.
        token_runs: Where multi-token app names may match as a token run
            inside longer file names.
        standard_depth: Maximum descent depth for ordinary roots.
        preferences_depth: Maximum descent depth for ~/Library/Preferences.
        extra_roots: Additional directories to scan recursively.
    """

    model_config = ConfigDict(extra="forbid")

    size_mode: Annotated[
        SizeModeName,
        Field(description="Disk usage measurement"),
    ] = "physical"
    domain_hint_pruning: Annotated[
        bool,
        Field(description="Prune unrelated vendor directories"),
    ] = True
    token_runs: Annotated[
        TokenRunPolicyName,
        Field(description="Token-run matching scope"),
    ] = "receipts"
    standard_depth: Annotated[
        int,
        Field(ge=1, le=5, description="Max depth for ordinary roots (1-5)"),
    ] = 1
    preferences_depth: Annotated[
        int,
        Field(ge=1, le=5, description="Max depth for the preferences root (1-5)"),
    ] = 2
    extra_roots: Annotated[
        list[Path],
        Field(description="Additional recursive scan roots"),
    ] = []

    @field_validator("extra_roots")
    @classmethod
    def expand_roots(cls, roots: list[Path]) -> list[Path]:
        """Expand ``~`` and require absolute paths."""
        expanded = [root.expanduser() for root in roots]
        for root in expanded:
            if not root.is_absolute():
                msg = f"extra root must be an absolute path: {root}"
                raise ValueError(msg)
        return expanded


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""


def load_config(path: Path | None = None) -> RmappConfig:
    """Load settings from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated RmappConfig. Defaults when the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return RmappConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return RmappConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
