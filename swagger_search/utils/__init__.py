"""Utility functions and classes for the API search project."""

from .cache import BaseCache, TTLCache

__all__ = ["BaseCache", "TTLCache"]
