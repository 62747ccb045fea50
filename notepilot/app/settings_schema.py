# -*- coding: utf-8 -*-
"""Settings UI schema, derived from the current settings.

``build_settings_schema`` is pure: the same settings and provider always
yield the same schema. The settings manager calls it after every accepted
change and hands the result to the host.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from ..config.config import Settings
from ..constant import CUSTOM_PROMPT_SLOTS
from ..providers.models import ProviderDefinition

SchemaType = Literal["heading", "string", "number", "boolean", "enum"]


class SchemaItem(BaseModel):
    """One entry of the host's settings schema."""

    model_config = {"populate_by_name": True}

    key: str
    type: SchemaType
    title: str
    description: str = ""
    default: Any = None
    enum_choices: Optional[List[str]] = Field(
        default=None,
        alias="enumChoices",
    )
    enum_picker: Optional[str] = Field(default=None, alias="enumPicker")


def model_choices(
    settings: Settings,
    provider: Optional[ProviderDefinition],
) -> List[str]:
    """Selectable model ids, or ``[]`` when the model is free text.

    Fixed catalogs are always selectable; discovered catalogs only once
    the connection is verified.
    """
    if provider is None or not provider.models:
        return []
    if provider.discover_models and not settings.is_verified:
        return []
    return provider.model_ids


def _connection_items(
    settings: Settings,
    provider: Optional[ProviderDefinition],
    provider_ids: Sequence[str],
) -> List[SchemaItem]:
    name = provider.name if provider else "OpenAI-compatible"
    base_url = provider.default_base_url if provider else ""
    example = base_url or "https://api.example.com/v1"
    status = (
        "✅ Connection verified"
        if settings.is_verified
        else "Connection not verified yet"
    )
    return [
        SchemaItem(
            key="endpoint_section",
            type="heading",
            title="🔌 API Configuration",
            description=f"Configure your {name} API endpoint. {status}",
        ),
        SchemaItem(
            key="Provider",
            type="enum",
            title="Provider",
            description="Leave empty to detect it from the endpoint",
            default="",
            enum_choices=list(provider_ids),
            enum_picker="select",
        ),
        SchemaItem(
            key="API_Endpoint",
            type="string",
            title="API Endpoint",
            description=f"Enter your API endpoint (e.g., {example})",
            default=base_url,
        ),
        SchemaItem(
            key="API_Key",
            type="string",
            title="API Key",
            description="Enter your API key",
            default="",
        ),
    ]


def _model_item(
    settings: Settings,
    provider: Optional[ProviderDefinition],
) -> SchemaItem:
    default_model = provider.default_model if provider else ""
    choices = model_choices(settings, provider)
    if choices:
        return SchemaItem(
            key="Model",
            type="enum",
            title="Model",
            description="Select the model to use",
            default=default_model if default_model in choices else choices[0],
            enum_choices=choices,
            enum_picker="select",
        )
    if provider is not None and provider.discover_models:
        hint = "Verify the connection to load the available models"
    else:
        hint = "Enter the model name (e.g., gpt-3.5-turbo, yi-34b-chat, etc.)"
    return SchemaItem(
        key="Model",
        type="string",
        title="Model Name",
        description=hint,
        default=default_model,
    )


def _custom_prompt_items(settings: Settings) -> List[SchemaItem]:
    ordinals = {1: "first", 2: "second", 3: "third"}
    items = []
    for slot in range(1, CUSTOM_PROMPT_SLOTS + 1):
        hotkey = settings.hotkey(slot)
        items.append(
            SchemaItem(
                key=f"Custom_Prompt_{slot}",
                type="string",
                title=f"Custom Prompt No.{slot}",
                description=(
                    f"Your {ordinals.get(slot, f'#{slot}')} custom system "
                    f"prompt (trigger with /copilot{slot} or {hotkey})"
                ),
                default="",
            ),
        )
    return items


def _hotkeys_description(settings: Settings) -> str:
    lines = [f"Default Copilot:    {settings.hotkey(0)}"]
    for slot in range(1, CUSTOM_PROMPT_SLOTS + 1):
        lines.append(f"Custom Prompt {slot}:   {settings.hotkey(slot)}")
    lines.append(
        "These shortcuts can be customized in Settings > Shortcuts",
    )
    return "\n\n".join(lines)


def build_settings_schema(
    settings: Settings,
    provider: Optional[ProviderDefinition],
    provider_ids: Sequence[str],
) -> List[Dict[str, Any]]:
    """Return the settings schema for *settings* as host-ready dicts."""
    items: List[SchemaItem] = _connection_items(
        settings,
        provider,
        provider_ids,
    )
    items.append(_model_item(settings, provider))
    items.append(
        SchemaItem(
            key="Verify_Key",
            type="boolean",
            title="Verify Connection",
            description="Click to verify your API connection",
            default=False,
        ),
    )
    items.extend(
        [
            SchemaItem(
                key="model_section",
                type="heading",
                title="⚙️ Model Settings",
            ),
            SchemaItem(
                key="Temperature",
                type="number",
                title="Temperature",
                description="Controls randomness (0-1). "
                "Lower values make responses more focused",
                default=0.7,
            ),
            SchemaItem(
                key="Max_Tokens",
                type="number",
                title="Max Tokens",
                description="Maximum length of the response",
                default=1000,
            ),
        ],
    )
    items.extend(_custom_prompt_items(settings))
    items.append(
        SchemaItem(
            key="hotkeys_section",
            type="heading",
            title="⌨️ Default Hotkeys",
            description=_hotkeys_description(settings),
        ),
    )
    return [
        item.model_dump(by_alias=True, exclude_none=True) for item in items
    ]
