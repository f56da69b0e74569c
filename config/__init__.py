"""
Settings entry point. `MODE` (or `APP_ENV`) picks the settings class;
anything unrecognised falls back to local development settings.

    from config import settings
"""
from __future__ import annotations

import os

from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .test import TestSettings

MODE = (os.environ.get("MODE") or os.environ.get("APP_ENV") or "local").lower()

_MAPPING = {
    "local": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestSettings,
}

SettingsClass = _MAPPING.get(MODE, LocalSettings)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE"]
