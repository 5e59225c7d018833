"""
Configuration loading for LLM Session.
"""

from .loader import AppConfig, DisplayConfig, load_config, parse_config

__all__ = ["AppConfig", "DisplayConfig", "load_config", "parse_config"]
