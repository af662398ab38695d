"""Serialization - loading and saving application settings."""

from .settings_manager import SettingsManager

__all__ = ['SettingsManager']
