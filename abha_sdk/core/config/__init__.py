"""Configuration management module."""

from .settings import ABHASettings, get_settings

__all__ = [
    "ABHASettings",
    "get_settings",
]
