"""rmapp - remove macOS applications and the files they leave behind."""

__version__ = "0.1.0"
