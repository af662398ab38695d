"""
Settings Manager - loads and saves application settings.

Settings are stored as JSON (UTF-8, indented).
"""

import json
import logging
import os
from typing import Optional

from ...models.config.app_settings import AppSettings

logger = logging.getLogger(__name__)


class SettingsManager:
    """Reads and writes AppSettings to a JSON file."""

    def __init__(self, config_path: str = "config.json"):
        self.config_path = config_path

    def load_settings(self) -> Optional[AppSettings]:
        """Load settings from file; None if missing or unreadable."""
        if not os.path.exists(self.config_path):
            return None

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return AppSettings.from_dict(data)

        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Error loading settings from %s: %s", self.config_path, e)
            return None

    def save_settings(self, settings: AppSettings) -> bool:
        """Save settings to file."""
        try:
            data = settings.to_dict()
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
            return True

        except (OSError, TypeError) as e:
            logger.warning("Error saving settings to %s: %s", self.config_path, e)
            return False
