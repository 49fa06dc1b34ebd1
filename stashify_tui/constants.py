"""
Stashify - Shared Constants

Central location for constants and environment overrides used across the app.
"""

import os
from pathlib import Path

# =============================================================================
# STORAGE
# =============================================================================

# Where profile and settings live. Override with STASHIFY_HOME.
DATA_DIR = Path(os.environ.get("STASHIFY_HOME", str(Path.home() / ".stashify")))

PROFILE_FILE = "profile.json"
SETTINGS_FILE = "settings.json"
LOG_FILE = "stashify.log"


def is_dev_mode() -> bool:
    """Dev mode makes navigation contract violations fatal."""
    return bool(os.environ.get("STASHIFY_DEV"))


def log_level() -> str:
    return os.environ.get("STASHIFY_LOG_LEVEL", "WARNING").upper()


# =============================================================================
# ICONS
# =============================================================================

# Nerd Font icons (https://www.nerdfonts.com/cheat-sheet)
ICON_HOME = "󰋜"             # nf-md-home
ICON_GRID = "󰕰"             # nf-md-view_grid
ICON_HEART = "󰋑"            # nf-md-heart
ICON_USERS = "󰡉"            # nf-md-account_group
ICON_USER = "󰀄"             # nf-md-account
ICON_PLUS = "󰐕"             # nf-md-plus
ICON_MIC = "󰍬"              # nf-md-microphone
ICON_TROPHY = "󰔸"           # nf-md-trophy

# Tab labels: (icon, i18n key, function key)
TAB_INFO = {
    "HomeTab": (ICON_HOME, "home", "F1"),
    "GamesTab": (ICON_GRID, "games", "F2"),
    "MomentsTab": (ICON_HEART, "moments", "F3"),
    "FamilyTab": (ICON_USERS, "family", "F4"),
    "ProfileTab": (ICON_USER, "profile", "F5"),
}
