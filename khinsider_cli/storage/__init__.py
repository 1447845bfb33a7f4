"""
Storage Layer.

This package handles persistence of the configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
