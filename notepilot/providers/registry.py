# -*- coding: utf-8 -*-
"""Built-in provider definitions and registry."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import ApiFamily, ModelInfo, ProviderDefinition

OPENAI_COMPATIBLE = "openai-compatible"
ANTHROPIC = "anthropic"
GEMINI = "gemini"
LINGYIWANWU = "lingyiwanwu"
CUSTOM = "custom"

DEFAULT_PROVIDER_ID = OPENAI_COMPATIBLE

# ---------------------------------------------------------------------------
# Built-in LLM model lists
# ---------------------------------------------------------------------------

OPENAI_MODELS: List[ModelInfo] = [
    ModelInfo(id="gpt-3.5-turbo", name="GPT-3.5 Turbo"),
    ModelInfo(id="gpt-4", name="GPT-4"),
    ModelInfo(id="gpt-4o", name="GPT-4o"),
    ModelInfo(id="gpt-4o-mini", name="GPT-4o mini"),
]

ANTHROPIC_MODELS: List[ModelInfo] = [
    ModelInfo(id="claude-2.1", name="Claude 2.1"),
    ModelInfo(id="claude-2.0", name="Claude 2.0"),
    ModelInfo(id="claude-instant-1.2", name="Claude Instant 1.2"),
]

GEMINI_MODELS: List[ModelInfo] = [
    ModelInfo(id="gemini-pro", name="Gemini Pro"),
    ModelInfo(id="gemini-1.5-pro", name="Gemini 1.5 Pro"),
    ModelInfo(id="gemini-1.5-flash", name="Gemini 1.5 Flash"),
]

# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

PROVIDER_OPENAI_COMPATIBLE = ProviderDefinition(
    id=OPENAI_COMPATIBLE,
    name="OpenAI Compatible",
    family="openai",
    default_base_url="https://api.openai.com/v1",
    default_model="gpt-3.5-turbo",
    models=OPENAI_MODELS,
)

PROVIDER_ANTHROPIC = ProviderDefinition(
    id=ANTHROPIC,
    name="Anthropic",
    family="anthropic",
    default_base_url="https://api.anthropic.com/v1",
    default_model="claude-2.1",
    models=ANTHROPIC_MODELS,
)

PROVIDER_GEMINI = ProviderDefinition(
    id=GEMINI,
    name="Google Gemini",
    family="gemini",
    default_base_url="https://generativelanguage.googleapis.com/v1beta",
    default_model="gemini-pro",
    models=GEMINI_MODELS,
)

PROVIDER_LINGYIWANWU = ProviderDefinition(
    id=LINGYIWANWU,
    name="Lingyiwanwu (01.AI)",
    family="openai",
    default_base_url="https://api.lingyiwanwu.com/v1",
    default_model="yi-lightning",
    models=[],
    discover_models=True,
)

PROVIDER_CUSTOM = ProviderDefinition(
    id=CUSTOM,
    name="Custom",
    family="openai",
    default_base_url="",
    default_model="",
    models=[],
    discover_models=True,
    require_model_for_verify=True,
)

# Registry: provider_id -> ProviderDefinition
PROVIDERS: Dict[str, ProviderDefinition] = {
    PROVIDER_OPENAI_COMPATIBLE.id: PROVIDER_OPENAI_COMPATIBLE,
    PROVIDER_ANTHROPIC.id: PROVIDER_ANTHROPIC,
    PROVIDER_GEMINI.id: PROVIDER_GEMINI,
    PROVIDER_LINGYIWANWU.id: PROVIDER_LINGYIWANWU,
    PROVIDER_CUSTOM.id: PROVIDER_CUSTOM,
}

# Substring markers used by infer_provider_id().
_GOOGLE_HOST_MARKER = "googleapis.com"
_GEMINI_MODEL_MARKER = "gemini"
_ANTHROPIC_HOST_MARKER = "anthropic.com"


def get_provider(provider_id: str) -> Optional[ProviderDefinition]:
    """Return a provider definition by id, or None if not found."""
    return PROVIDERS.get(provider_id)


def list_providers() -> List[ProviderDefinition]:
    """Return all registered provider definitions."""
    return list(PROVIDERS.values())


def family_of(provider_id: str) -> ApiFamily:
    """Return the wire family of *provider_id*.

    Unknown ids speak the OpenAI-compatible schema.
    """
    defn = PROVIDERS.get(provider_id)
    return defn.family if defn is not None else "openai"


def build_registry() -> Dict[str, ProviderDefinition]:
    """Return a private, deep-copied registry.

    Catalog discovery mutates ``models``; owners of a copy never touch the
    module-level definitions.
    """
    return {pid: defn.model_copy(deep=True) for pid, defn in PROVIDERS.items()}


def set_catalog(
    defn: ProviderDefinition,
    model_ids: Sequence[str],
) -> None:
    """Replace *defn*'s model list, keeping catalog order."""
    defn.models = [ModelInfo(id=mid, name=mid) for mid in model_ids]


def infer_provider_id(endpoint: str, model: str) -> str:
    """Guess the provider from endpoint and model name.

    Priority: Google host or Gemini model, then Anthropic host, then the
    OpenAI-compatible default. Plain substring matching; custom endpoints
    containing a marker are classified by it.
    """
    endpoint = endpoint or ""
    model = model or ""
    if _GOOGLE_HOST_MARKER in endpoint or _GEMINI_MODEL_MARKER in model:
        return GEMINI
    if _ANTHROPIC_HOST_MARKER in endpoint:
        return ANTHROPIC
    return OPENAI_COMPATIBLE
