"""
Configuration management for mockup-kit.
"""

from .builder_config import DEFAULT_MAX_DEPTH, BuilderConfig

__all__ = ["DEFAULT_MAX_DEPTH", "BuilderConfig"]
