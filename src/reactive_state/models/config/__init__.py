"""Configuration models."""

from .app_settings import AppSettings

__all__ = ['AppSettings']
