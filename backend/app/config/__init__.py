"""Configuration package for the Gringotts dashboard service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
