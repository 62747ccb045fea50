# -*- coding: utf-8 -*-
"""Core entry points used by the command dispatcher and hosts."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from ..config.config import Settings
from ..config.store import load_settings
from ..providers.client import CompletionClient
from ..providers.errors import CopilotError, PreconditionError
from ..providers.models import CompletionRequest, CompletionResult
from .host import Host
from .settings_manager import SettingsManager

logger = logging.getLogger(__name__)

MISSING_CONFIG_MESSAGE = "Please configure API endpoint and key first"
MISSING_MODEL_MESSAGE = "Please enter a model name first"


class CopilotRunner:
    """Owns the settings manager and runs completions against it.

    Every call snapshots the settings at its start; a settings change that
    lands while a request is in flight only affects later calls.
    """

    def __init__(
        self,
        host: Host,
        settings: Optional[Settings] = None,
        client: Optional[CompletionClient] = None,
    ) -> None:
        self._host = host
        self._client = client or CompletionClient()
        self.manager = SettingsManager(
            host,
            settings if settings is not None else Settings(),
            self._client,
        )

    @classmethod
    def from_store(
        cls,
        host: Host,
        path: Optional[Path] = None,
        client: Optional[CompletionClient] = None,
    ) -> "CopilotRunner":
        """Create from persisted settings merged with defaults."""
        return cls(host, load_settings(path), client=client)

    @property
    def settings(self) -> Settings:
        return self.manager.settings

    def start(self) -> None:
        """Register the settings schema with the host."""
        logger.info(
            "NotePilot started (provider=%s)",
            self.settings.provider or "(auto)",
        )
        self.manager.publish_schema()

    # ── requests ────────────────────────────────────────────────────

    def build_request(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> CompletionRequest:
        """Snapshot the current settings into a request.

        Raises:
            PreconditionError: endpoint, key or model missing.
        """
        s = self.manager.snapshot()
        if not s.api_key or not s.api_endpoint:
            raise PreconditionError(MISSING_CONFIG_MESSAGE)
        provider_id = self.manager.provider_id()
        model = s.model or self.manager.get_provider(provider_id).default_model
        if not model:
            raise PreconditionError(MISSING_MODEL_MESSAGE)
        return CompletionRequest(
            prompt=prompt,
            system_prompt=system_prompt or None,
            provider=provider_id,
            api_endpoint=s.api_endpoint,
            api_key=s.api_key,
            model=model,
            temperature=s.temperature,
            max_tokens=s.max_tokens,
            is_verified=s.is_verified,
        )

    def report(self, error: CopilotError) -> CompletionResult:
        """Log *error*, notify the user once, return the failure."""
        if error.kind in ("transport", "format"):
            logger.warning("API call failed: %s", error.message)
            message = f"API call failed: {error.message}"
        else:
            logger.info("Completion not attempted: %s", error.message)
            message = error.message
        self._host.show_msg(message, error.status)
        return CompletionResult.failure(error.kind, error.message)

    async def run_completion(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> CompletionResult:
        """Run one completion; failures are reported, never raised."""
        try:
            await self.manager.ensure_provider()
            request = self.build_request(prompt, system_prompt)
            text = await self._client.complete(request)
        except CopilotError as e:
            return self.report(e)
        return CompletionResult.success(text)

    # ── settings ────────────────────────────────────────────────────

    async def verify(self) -> bool:
        return await self.manager.verify()

    async def on_settings_changed(
        self,
        previous: Optional[Mapping[str, Any]],
        new: Mapping[str, Any],
    ) -> None:
        await self.manager.on_settings_changed(previous, new)
