"""Core: config, logging, environment check, and application bootstrap.

Single place for settings and startup wiring.
"""

from rabbitforms.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
