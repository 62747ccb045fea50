# -*- coding: utf-8 -*-
"""Settings reconciliation and API-key verification.

The manager owns the Settings object and a private copy of the provider
registry. Verification state is derived:

    unconfigured -> configured -> verifying -> verified | failed

Changing provider, endpoint or key resets ``is_verified`` synchronously,
before the handler first awaits, so no request built afterwards can carry
a stale verification.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config.config import (
    CONNECTION_KEYS,
    Settings,
    coerce_settings,
    normalize_keys,
    to_patch,
)
from ..providers.client import CompletionClient
from ..providers.errors import CopilotError
from ..providers.models import ProviderDefinition
from ..providers.registry import (
    DEFAULT_PROVIDER_ID,
    build_registry,
    infer_provider_id,
    set_catalog,
)
from .host import Host
from .settings_schema import build_settings_schema

logger = logging.getLogger(__name__)

MISSING_CONNECTION_MESSAGE = (
    "Please enter API endpoint, key and model name first"
)
VERIFIED_MESSAGE = "API connection verified successfully!"
STALE_VERIFICATION_MESSAGE = (
    "Settings changed during verification; verify again"
)

# Owned by the manager; values coming from the host are ignored.
_MANAGED_KEYS = ("is_verified",)


class VerificationState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    FAILED = "failed"


class SettingsManager:
    def __init__(
        self,
        host: Host,
        settings: Settings,
        client: CompletionClient,
        providers: Optional[Dict[str, ProviderDefinition]] = None,
    ) -> None:
        self._host = host
        self._settings = settings
        self._client = client
        self._providers = providers if providers is not None else (
            build_registry()
        )
        # number of catalog calls in flight
        self._verifying = 0
        self._last_error: Optional[str] = None

    # ── read side ───────────────────────────────────────────────────

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def providers(self) -> Dict[str, ProviderDefinition]:
        return self._providers

    @property
    def state(self) -> VerificationState:
        s = self._settings
        if self._verifying > 0:
            return VerificationState.VERIFYING
        if not s.api_key or not s.api_endpoint:
            return VerificationState.UNCONFIGURED
        if s.is_verified:
            return VerificationState.VERIFIED
        if self._last_error is not None:
            return VerificationState.FAILED
        return VerificationState.CONFIGURED

    def snapshot(self) -> Settings:
        """By-value copy of the current settings."""
        return self._settings.model_copy()

    def provider_id(self) -> str:
        """Configured provider id, or the inferred one (not written back)."""
        s = self._settings
        return s.provider or infer_provider_id(s.api_endpoint, s.model)

    def get_provider(
        self,
        provider_id: Optional[str] = None,
    ) -> ProviderDefinition:
        """Definition for *provider_id*; unknown ids use the default."""
        pid = provider_id or self.provider_id()
        defn = self._providers.get(pid)
        if defn is None:
            defn = self._providers[DEFAULT_PROVIDER_ID]
        return defn

    def model_ids(self) -> List[str]:
        """Known models of the active provider, in catalog order."""
        return self.get_provider().model_ids

    def schema(self) -> List[Dict[str, Any]]:
        return build_settings_schema(
            self._settings,
            self.get_provider(),
            list(self._providers),
        )

    def publish_schema(self) -> None:
        self._host.use_settings_schema(self.schema())

    # ── write side ──────────────────────────────────────────────────

    async def ensure_provider(self) -> str:
        """Return the provider id, inferring and caching it when unset."""
        if self._settings.provider:
            return self._settings.provider
        inferred = infer_provider_id(
            self._settings.api_endpoint,
            self._settings.model,
        )
        logger.info("Provider not set, inferred %r", inferred)
        self._settings.provider = inferred
        await self._host.update_settings(to_patch({"provider": inferred}))
        return inferred

    def _connection(self) -> Tuple[str, ...]:
        return tuple(getattr(self._settings, k) for k in CONNECTION_KEYS)

    def _reset_verification(self) -> None:
        self._settings.is_verified = False
        self._last_error = None

    def _provider_defaults(
        self,
        old_provider: str,
        changes: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Endpoint/model to fill after a provider switch.

        Only values the user left blank or at the old provider's defaults
        are replaced.
        """
        old = self._providers.get(old_provider)
        new = self._providers.get(self._settings.provider)
        if new is None:
            return {}
        filled: Dict[str, Any] = {}
        s = self._settings
        if "api_endpoint" not in changes and new.default_base_url:
            if not s.api_endpoint or (
                old is not None and s.api_endpoint == old.default_base_url
            ):
                filled["api_endpoint"] = new.default_base_url
        if "model" not in changes and new.default_model:
            stale = old is not None and (
                s.model == old.default_model or s.model in old.model_ids
            )
            if not s.model or stale:
                filled["model"] = new.default_model
        return filled

    def apply_changes(self, changes: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply field changes synchronously.

        Returns the patch to persist beyond *changes* (verification reset,
        provider defaults). Empty when no connection key changed.
        """
        changes = {
            k: v for k, v in changes.items() if k not in _MANAGED_KEYS
        }
        before = self._connection()
        old_provider = self._settings.provider
        merged = {**self._settings.model_dump(), **changes}
        self._settings = coerce_settings(
            {**merged, "is_verified": self._settings.is_verified},
        )
        if self._connection() == before:
            return {}

        self._reset_verification()
        extra: Dict[str, Any] = {"is_verified": False}
        if self._settings.provider != old_provider:
            filled = self._provider_defaults(old_provider, changes)
            for key, value in filled.items():
                setattr(self._settings, key, value)
            extra.update(filled)
        logger.info(
            "Connection settings changed (provider=%s, endpoint=%s); "
            "verification reset",
            self._settings.provider or "(auto)",
            self._settings.api_endpoint,
        )
        return extra

    async def on_settings_changed(
        self,
        previous: Optional[Mapping[str, Any]],
        new: Mapping[str, Any],
    ) -> None:
        """Reconcile a host-side settings change.

        *previous* and *new* are full or partial settings records, keyed by
        persisted names or field names.
        """
        prev = normalize_keys(dict(previous or {}))
        nxt = normalize_keys(dict(new))
        verify_requested = bool(nxt.get("verify_key")) and not prev.get(
            "verify_key",
        )
        was_verified = self._settings.is_verified

        extra = self.apply_changes(nxt)

        if extra:
            await self._host.update_settings(to_patch(extra))
        if extra or self._settings.is_verified != was_verified:
            self.publish_schema()

        if verify_requested:
            await self.verify()
            self._settings.verify_key = False
            await self._host.update_settings(to_patch({"verify_key": False}))

    # ── verification ────────────────────────────────────────────────

    async def verify(self) -> bool:
        """Verify the stored connection. Safe to call repeatedly."""
        s = self.snapshot()
        defn = self.get_provider()
        model_missing = defn.require_model_for_verify and not s.model
        if not s.api_key or not s.api_endpoint or model_missing:
            self._host.show_msg(MISSING_CONNECTION_MESSAGE, "warning")
            return False
        provider_id = await self.ensure_provider()

        patch: Dict[str, Any] = {}
        if defn.discover_models:
            started = self._connection()
            self._verifying += 1
            try:
                ids = await self._client.list_models(
                    provider_id,
                    s.api_endpoint,
                    s.api_key,
                )
            except CopilotError as e:
                if self._connection() != started:
                    self._discard_stale()
                    return False
                await self._verification_failed(e)
                return False
            finally:
                self._verifying -= 1

            if self._connection() != started:
                self._discard_stale()
                return False
            set_catalog(defn, ids)
            logger.info(
                "Loaded %d models from %s",
                len(ids),
                defn.name,
            )
            if ids and not self._settings.model:
                self._settings.model = ids[0]
                patch["model"] = ids[0]

        self._settings.is_verified = True
        self._last_error = None
        patch["is_verified"] = True
        await self._host.update_settings(to_patch(patch))
        self._host.show_msg(VERIFIED_MESSAGE, "success")
        self.publish_schema()
        return True

    def _discard_stale(self) -> None:
        logger.info("Discarding verification result: settings changed")
        self._host.show_msg(STALE_VERIFICATION_MESSAGE, "info")

    async def _verification_failed(self, error: CopilotError) -> None:
        logger.warning("API verification failed: %s", error.message)
        self._settings.is_verified = False
        self._last_error = error.message
        await self._host.update_settings(to_patch({"is_verified": False}))
        self._host.show_msg(
            f"API verification failed: {error.message}",
            "error",
        )
        self.publish_schema()
