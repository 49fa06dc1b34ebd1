"""
Stashify: User Settings

Language and high contrast, stored as JSON next to the profile.
A missing or unreadable file just means defaults.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from .constants import DATA_DIR, SETTINGS_FILE
from .i18n import LANGUAGES

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    language: str = "en"
    high_contrast: bool = False


class SettingsStore:
    """Loads and saves Settings in the data dir"""

    def __init__(self, data_dir: Optional[Path] = None):
        self.path = (Path(data_dir) if data_dir else DATA_DIR) / SETTINGS_FILE
        self.settings = Settings()

    def load(self) -> Settings:
        if not self.path.exists():
            return self.settings
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file: %s", e)
            return self.settings
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file that is not a JSON object")
            return self.settings

        loaded = Settings()
        if data.get("language") in LANGUAGES:
            loaded.language = data["language"]
        if isinstance(data.get("high_contrast"), bool):
            loaded.high_contrast = data["high_contrast"]
        self.settings = loaded
        return self.settings

    def update(self, **changes) -> Settings:
        """Change some settings and save them"""
        for key, value in changes.items():
            if not hasattr(self.settings, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self.settings, key, value)
        self.save()
        return self.settings

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(asdict(self.settings), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save settings: %s", e)
