"""Configuration loading."""

from docintel.infrastructure.config.settings_loader import load_settings

__all__ = ["load_settings"]
