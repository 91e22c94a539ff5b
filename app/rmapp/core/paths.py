"""XDG-compliant path management for rmapp.

rmapp only persists user configuration, which lives under
``~/.config/rmapp/`` (or ``$XDG_CONFIG_HOME/rmapp/``).
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "rmapp"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/rmapp/ (or XDG_CONFIG_HOME/rmapp/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the scan/removal settings file path.

    Returns:
        Path to ~/.config/rmapp/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/rmapp/theme.toml.
    """
    return get_config_dir() / "theme.toml"
