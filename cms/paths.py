"""
cms/paths.py -- Platform directories for settings and uploaded media.

Uses platformdirs so that settings and the media store land in the
platform-appropriate per-user locations when nothing else is configured.
"""

from __future__ import annotations

import os

from platformdirs import user_config_dir, user_data_dir

_APP_NAME = "ContentEngine"
_APP_AUTHOR = "ContentEngine"

SETTINGS_FILE_NAME = "cms-settings.json"


def get_config_dir() -> str:
    """Return the platform-appropriate user config directory."""
    return user_config_dir(_APP_NAME, _APP_AUTHOR)


def get_settings_path() -> str:
    """Return the default location of the settings document.

    ``CMS_SETTINGS`` in the environment overrides the platform default.
    """
    override = os.environ.get("CMS_SETTINGS")
    if override:
        return override
    return os.path.join(get_config_dir(), SETTINGS_FILE_NAME)


def get_media_root() -> str:
    """Return the default directory uploaded media files are stored under."""
    return os.path.join(user_data_dir(_APP_NAME, _APP_AUTHOR), "media")
