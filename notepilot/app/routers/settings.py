# -*- coding: utf-8 -*-
"""API routes for settings, verification and completions.

Hosts that cannot embed Python drive the core through these routes; each
response carries the notifications the core emitted while handling it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Request
from pydantic import BaseModel, Field

from ...config.store import masked_view
from ...providers.models import CompletionResult
from ..runner import CopilotRunner

router = APIRouter(prefix="/settings", tags=["settings"])


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class Notification(BaseModel):
    status: str
    message: str


class SettingsResponse(BaseModel):
    settings: Dict[str, Any] = Field(
        ...,
        description="Current settings (API key masked)",
    )
    state: str = Field(..., description="Verification state")
    messages: List[Notification] = Field(default_factory=list)


class VerifyResponse(BaseModel):
    verified: bool
    state: str
    model_ids: List[str] = Field(default_factory=list)
    messages: List[Notification] = Field(default_factory=list)


class CompletionBody(BaseModel):
    prompt: str = Field(..., description="User prompt (note text)")
    system_prompt: Optional[str] = Field(
        default=None,
        description="Optional system instruction",
    )


class CompletionResponse(CompletionResult):
    messages: List[Notification] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _runner(request: Request) -> CopilotRunner:
    return request.app.state.runner


def _drain(request: Request) -> List[Notification]:
    host = request.app.state.host
    return [Notification(**m) for m in host.drain_messages()]


def _settings_response(request: Request) -> SettingsResponse:
    runner = _runner(request)
    return SettingsResponse(
        settings=masked_view(runner.settings),
        state=runner.manager.state.value,
        messages=_drain(request),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("", response_model=SettingsResponse, summary="Get settings")
async def get_settings(request: Request) -> SettingsResponse:
    return _settings_response(request)


@router.put(
    "",
    response_model=SettingsResponse,
    summary="Update settings",
    description="Apply a partial settings patch (persisted key names). "
    "Changing provider, endpoint or key resets verification.",
)
async def put_settings(
    request: Request,
    patch: Dict[str, Any] = Body(..., description="Partial settings"),
) -> SettingsResponse:
    runner = _runner(request)
    previous = runner.settings.to_store()
    await runner.on_settings_changed(previous, {**previous, **patch})
    await request.app.state.host.update_settings(runner.settings.to_store())
    return _settings_response(request)


@router.post(
    "/verify",
    response_model=VerifyResponse,
    summary="Verify the API connection",
)
async def verify_settings(request: Request) -> VerifyResponse:
    runner = _runner(request)
    verified = await runner.verify()
    return VerifyResponse(
        verified=verified,
        state=runner.manager.state.value,
        model_ids=runner.manager.model_ids(),
        messages=_drain(request),
    )


@router.get(
    "/schema",
    summary="Settings UI schema derived from the current settings",
)
async def get_schema(request: Request) -> List[Dict[str, Any]]:
    return _runner(request).manager.schema()


@router.post(
    "/complete",
    response_model=CompletionResponse,
    summary="Run one completion with the current settings",
)
async def complete(
    request: Request,
    body: CompletionBody = Body(...),
) -> CompletionResponse:
    result = await _runner(request).run_completion(
        body.prompt,
        body.system_prompt,
    )
    return CompletionResponse(
        **result.model_dump(),
        messages=_drain(request),
    )
