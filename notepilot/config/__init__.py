# -*- coding: utf-8 -*-
from .config import CONNECTION_KEYS, DEFAULT_HOTKEYS, Settings
from .store import (
    get_settings_path,
    load_settings,
    mask_api_key,
    masked_view,
    save_settings,
    update_settings,
)

__all__ = [
    "CONNECTION_KEYS",
    "DEFAULT_HOTKEYS",
    "Settings",
    "get_settings_path",
    "load_settings",
    "mask_api_key",
    "masked_view",
    "save_settings",
    "update_settings",
]
