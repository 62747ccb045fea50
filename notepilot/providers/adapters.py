# -*- coding: utf-8 -*-
"""Per-family request/response adapters.

Each wire family (OpenAI-compatible chat completions, Anthropic
completions, Gemini generateContent) has one adapter implementing the same
four pure operations:

- ``format_request``: prompt + settings -> JSON payload
- ``resolve_endpoint``: base endpoint + model -> request URL
- ``build_headers``: api key -> HTTP headers
- ``extract_text``: response body -> reply text, or ``None``

The adapter is selected by provider id through the registry; unknown ids
fall back to the OpenAI-compatible adapter. No adapter touches the network
or any settings state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from .models import ApiFamily
from .registry import family_of

PathSegment = Union[str, int]


def _dig(body: Any, path: Sequence[PathSegment]) -> Any:
    """Follow *path* through nested dicts/lists; ``None`` when it breaks."""
    node = body
    for seg in path:
        if isinstance(seg, int):
            if not isinstance(node, list) or len(node) <= seg:
                return None
            node = node[seg]
        else:
            if not isinstance(node, dict) or seg not in node:
                return None
            node = node[seg]
    return node


def _extract_trimmed(body: Any, path: Sequence[PathSegment]) -> Optional[str]:
    if not body:
        return None
    value = _dig(body, path)
    if not isinstance(value, str):
        return None
    return value.strip()


def _join_url(base_endpoint: str, suffix: str) -> str:
    return f"{(base_endpoint or '').rstrip('/')}/{suffix}"


class ProviderAdapter(ABC):
    """Capability set for one wire family."""

    family: ApiFamily

    @abstractmethod
    def format_request(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        """Build the provider-shaped JSON payload."""

    @abstractmethod
    def resolve_endpoint(self, base_endpoint: str, model: str) -> str:
        """Return the fully-qualified request URL."""

    @abstractmethod
    def build_headers(self, api_key: str) -> Dict[str, str]:
        """Return the HTTP headers carrying the credentials."""

    @abstractmethod
    def extract_text(self, body: Any) -> Optional[str]:
        """Return the trimmed reply text, or ``None`` on a schema mismatch."""


class OpenAIAdapter(ProviderAdapter):
    """OpenAI-compatible ``/chat/completions``."""

    family: ApiFamily = "openai"

    def format_request(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    def resolve_endpoint(self, base_endpoint: str, model: str) -> str:
        return _join_url(base_endpoint, "chat/completions")

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def extract_text(self, body: Any) -> Optional[str]:
        return _extract_trimmed(body, ("choices", 0, "message", "content"))


class AnthropicAdapter(ProviderAdapter):
    """Anthropic text completions (``/complete``)."""

    family: ApiFamily = "anthropic"

    def format_request(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        instructions = (
            f"Instructions: {system_prompt}\nTask: " if system_prompt else ""
        )
        return {
            "model": model,
            "prompt": f"\n\nHuman: {instructions}{prompt}\n\nAssistant:",
            "max_tokens_to_sample": max_tokens,
            "temperature": temperature,
        }

    def resolve_endpoint(self, base_endpoint: str, model: str) -> str:
        return _join_url(base_endpoint, "complete")

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "content-type": "application/json",
        }

    def extract_text(self, body: Any) -> Optional[str]:
        return _extract_trimmed(body, ("completion",))


class GeminiAdapter(ProviderAdapter):
    """Google Gemini ``models/{model}:generateContent``."""

    family: ApiFamily = "gemini"

    def format_request(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        text = (
            f"Instructions: {system_prompt}\nTask: {prompt}"
            if system_prompt
            else prompt
        )
        return {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

    def resolve_endpoint(self, base_endpoint: str, model: str) -> str:
        return _join_url(base_endpoint, f"models/{model}:generateContent")

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }

    def extract_text(self, body: Any) -> Optional[str]:
        return _extract_trimmed(
            body,
            ("candidates", 0, "content", "parts", 0, "text"),
        )


# family -> adapter; closed set, one per wire schema
_ADAPTERS: Dict[ApiFamily, ProviderAdapter] = {
    "openai": OpenAIAdapter(),
    "anthropic": AnthropicAdapter(),
    "gemini": GeminiAdapter(),
}


def get_adapter(provider_id: str) -> ProviderAdapter:
    """Return the adapter for *provider_id* (OpenAI-compatible if unknown)."""
    return _ADAPTERS[family_of(provider_id)]


# ---------------------------------------------------------------------------
# Functional entry points
# ---------------------------------------------------------------------------


def format_request(
    provider_id: str,
    prompt: str,
    system_prompt: Optional[str] = None,
    model: str = "",
    temperature: float = 0.7,
    max_tokens: int = 1000,
) -> Dict[str, Any]:
    return get_adapter(provider_id).format_request(
        prompt,
        system_prompt,
        model,
        temperature,
        max_tokens,
    )


def resolve_endpoint(provider_id: str, base_endpoint: str, model: str) -> str:
    return get_adapter(provider_id).resolve_endpoint(base_endpoint, model)


def build_headers(provider_id: str, api_key: str) -> Dict[str, str]:
    return get_adapter(provider_id).build_headers(api_key)


def extract_text(provider_id: str, body: Any) -> Optional[str]:
    return get_adapter(provider_id).extract_text(body)


# ---------------------------------------------------------------------------
# Catalog and error bodies (shared by all families)
# ---------------------------------------------------------------------------


def models_url(base_endpoint: str) -> str:
    """Catalog listing URL for discovery providers."""
    return _join_url(base_endpoint, "models")


def parse_model_catalog(body: Any) -> Optional[List[str]]:
    """Return model ids from an OpenAI-style ``{"data": [{"id": ...}]}``.

    Order is preserved. ``None`` when the body has no ``data`` list.
    """
    data = _dig(body, ("data",))
    if not isinstance(data, list):
        return None
    ids: List[str] = []
    for item in data:
        mid = _dig(item, ("id",))
        if isinstance(mid, str) and mid:
            ids.append(mid)
    return ids


def extract_error_message(body: Any) -> Optional[str]:
    """Pull a human-readable message out of a provider error body.

    Tries ``error.message`` then ``message``; ``error`` may itself be a
    plain string.
    """
    nested = _dig(body, ("error", "message"))
    if isinstance(nested, str) and nested:
        return nested
    error = _dig(body, ("error",))
    if isinstance(error, str) and error:
        return error
    top = _dig(body, ("message",))
    if isinstance(top, str) and top:
        return top
    return None
