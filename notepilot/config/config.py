# -*- coding: utf-8 -*-
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# Keys whose change invalidates a previous verification.
CONNECTION_KEYS = ("provider", "api_endpoint", "api_key")

DEFAULT_HOTKEYS = {
    "hotkey_default": "ctrl+shift+h",
    "hotkey_1": "ctrl+shift+j",
    "hotkey_2": "ctrl+shift+k",
    "hotkey_3": "ctrl+shift+l",
}


class Settings(BaseModel):
    """Plugin settings (settings.json / host settings store).

    Persisted under the host's key names (the aliases); Python code uses
    the field names.
    """

    model_config = {"populate_by_name": True}

    provider: str = Field(
        default="",
        alias="Provider",
        description="Provider id; inferred from endpoint/model when empty",
    )
    api_endpoint: str = Field(default="", alias="API_Endpoint")
    api_key: str = Field(default="", alias="API_Key", repr=False)
    model: str = Field(default="", alias="Model")
    temperature: float = Field(default=0.7, alias="Temperature")
    max_tokens: int = Field(default=1000, alias="Max_Tokens")
    custom_prompt_1: str = Field(default="", alias="Custom_Prompt_1")
    custom_prompt_2: str = Field(default="", alias="Custom_Prompt_2")
    custom_prompt_3: str = Field(default="", alias="Custom_Prompt_3")
    is_verified: bool = Field(default=False, alias="isVerified")
    # Settings UI "button": flipping it on requests a verification.
    verify_key: bool = Field(default=False, alias="Verify_Key")
    hotkey_default: str = DEFAULT_HOTKEYS["hotkey_default"]
    hotkey_1: str = DEFAULT_HOTKEYS["hotkey_1"]
    hotkey_2: str = DEFAULT_HOTKEYS["hotkey_2"]
    hotkey_3: str = DEFAULT_HOTKEYS["hotkey_3"]

    @classmethod
    def from_store(cls, raw: Optional[Dict[str, Any]]) -> "Settings":
        """Merge a persisted record (alias or field keys) over defaults."""
        return cls.model_validate(raw or {})

    def to_store(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def custom_prompt(self, slot: int) -> str:
        """Return Custom_Prompt_<slot> (1-based)."""
        return getattr(self, f"custom_prompt_{slot}", "") or ""

    def hotkey(self, slot: int) -> str:
        """Hotkey for slot 0 (default command) or 1..3 (custom prompts)."""
        if slot == 0:
            return self.hotkey_default
        return getattr(self, f"hotkey_{slot}", "")


def field_alias(name: str) -> str:
    """Persisted key for a Settings field name."""
    info = Settings.model_fields[name]
    return info.alias or name


def to_patch(values: Dict[str, Any]) -> Dict[str, Any]:
    """Turn ``{field_name: value}`` into a persisted-key patch."""
    return {field_alias(k): v for k, v in values.items()}


def normalize_keys(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map persisted keys (or field names) to field names.

    Unknown keys are dropped.
    """
    by_alias = {
        (info.alias or name): name
        for name, info in Settings.model_fields.items()
    }
    out: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in Settings.model_fields:
            out[key] = value
        elif key in by_alias:
            out[by_alias[key]] = value
    return out


def coerce_settings(values: Dict[str, Any]) -> Settings:
    """Validate *values*, falling back to defaults for invalid fields."""
    values = normalize_keys(values)
    try:
        return Settings.model_validate(values)
    except ValidationError as e:
        # error locations may be reported by alias
        locs = {err["loc"][0]: None for err in e.errors() if err.get("loc")}
        bad = set(normalize_keys(locs))
        logger.warning("Resetting invalid settings: %s", sorted(bad))
        return Settings.model_validate(
            {k: v for k, v in values.items() if k not in bad},
        )
