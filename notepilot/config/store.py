# -*- coding: utf-8 -*-
"""Reading and writing the persisted settings (settings.json)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..constant import SETTINGS_FILE, WORKING_DIR
from .config import Settings, coerce_settings, normalize_keys

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# JSON file path
# ---------------------------------------------------------------------------


def get_settings_path() -> Path:
    """Return the default settings.json path."""
    return WORKING_DIR / SETTINGS_FILE


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_raw(path: Path) -> Dict[str, Any]:
    """Read the JSON object at *path*; ``{}`` if missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (json.JSONDecodeError, OSError, ValueError):
        logger.warning("Ignoring unreadable settings file %s", path)
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring non-object settings file %s", path)
        return {}
    return raw


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings.json merged over defaults, repairing as needed."""
    if path is None:
        path = get_settings_path()
    return coerce_settings(_read_raw(path))


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Write settings to settings.json."""
    if path is None:
        path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(settings.to_store(), fh, indent=2, ensure_ascii=False)


def update_settings(
    patch: Dict[str, Any],
    path: Optional[Path] = None,
) -> Settings:
    """Apply a partial patch (persisted keys or field names) and save.

    Returns the updated full state.
    """
    current = load_settings(path)
    merged = {**current.model_dump(), **normalize_keys(patch)}
    settings = coerce_settings(merged)
    save_settings(settings, path)
    return settings


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-****hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"


def masked_view(settings: Settings) -> Dict[str, Any]:
    """Persisted-key view of *settings* with the API key masked."""
    data = settings.to_store()
    data["API_Key"] = mask_api_key(settings.api_key)
    return data
