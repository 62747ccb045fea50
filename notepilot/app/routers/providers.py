# -*- coding: utf-8 -*-
"""API routes for LLM providers and their model catalogs."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Path, Request

from ...providers import ProviderDefinition, ProviderInfo
from ..settings_manager import SettingsManager

router = APIRouter(prefix="/providers", tags=["providers"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _manager(request: Request) -> SettingsManager:
    return request.app.state.runner.manager


def _build_provider_info(
    provider: ProviderDefinition,
    manager: SettingsManager,
) -> ProviderInfo:
    """Build a ProviderInfo from a definition and the current settings."""
    return ProviderInfo(
        id=provider.id,
        name=provider.name,
        family=provider.family,
        default_base_url=provider.default_base_url,
        default_model=provider.default_model,
        models=provider.models,
        discover_models=provider.discover_models,
        active=provider.id == manager.provider_id(),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[ProviderInfo],
    summary="List all providers",
    description="Return all available providers with their model catalogs.",
)
async def list_all_providers(request: Request) -> List[ProviderInfo]:
    """List all registered providers."""
    manager = _manager(request)
    return [
        _build_provider_info(p, manager) for p in manager.providers.values()
    ]


@router.get(
    "/{provider_id}",
    response_model=ProviderInfo,
    summary="Get one provider",
)
async def get_one_provider(
    request: Request,
    provider_id: str = Path(..., description="Provider identifier"),
) -> ProviderInfo:
    manager = _manager(request)
    provider = manager.providers.get(provider_id)
    if provider is None:
        raise HTTPException(
            status_code=404,
            detail=f"Provider '{provider_id}' not found",
        )
    return _build_provider_info(provider, manager)
