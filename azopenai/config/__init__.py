"""
Configuration management for azopenai.

Uses Pydantic BaseSettings for type-safe, validated configuration
from environment variables and .env files.

Date: 2026-10-18
"""

from azopenai.config.settings import AzOpenAISettings, get_settings

__all__ = [
    "AzOpenAISettings",
    "get_settings",
]
