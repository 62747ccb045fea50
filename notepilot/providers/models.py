# -*- coding: utf-8 -*-
"""Pydantic data models for providers, models and completion exchanges."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Wire schema family spoken by a provider.
ApiFamily = Literal["openai", "anthropic", "gemini"]

ErrorKind = Literal["precondition", "transport", "format", "state"]


class ModelInfo(BaseModel):
    """A single model offered by a provider."""

    id: str = Field(..., description="Model identifier used in API calls")
    name: str = Field(..., description="Human-readable model name")


class ProviderDefinition(BaseModel):
    """Definition of a provider (built-in or custom).

    ``models`` is the provider's catalog. For providers with
    ``discover_models`` it starts empty and is replaced, in catalog order,
    after a successful verification.
    """

    id: str = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    family: ApiFamily = Field(
        default="openai",
        description="Request/response schema family",
    )
    default_base_url: str = Field(
        default="",
        description="Default API base URL",
    )
    default_model: str = Field(
        default="",
        description="Model selected when none is configured",
    )
    models: List[ModelInfo] = Field(
        default_factory=list,
        description="Known models, in catalog order",
    )
    discover_models: bool = Field(
        default=False,
        description="Whether the model list is fetched from the provider",
    )
    require_model_for_verify: bool = Field(
        default=False,
        description="Whether verification needs a model name up front",
    )

    @property
    def model_ids(self) -> List[str]:
        return [m.id for m in self.models]


class ProviderInfo(BaseModel):
    """Provider info returned by API (definition + current state)."""

    id: str
    name: str
    family: ApiFamily
    default_base_url: str
    default_model: str
    models: List[ModelInfo]
    discover_models: bool = False
    active: bool = Field(
        default=False,
        description="Whether this is the provider in use",
    )


class CompletionRequest(BaseModel):
    """One prompt-in/text-out exchange, snapshotted from the settings.

    Built fresh for every invocation and never reused.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str
    system_prompt: Optional[str] = None
    provider: str
    api_endpoint: str
    api_key: str = Field(default="", repr=False)
    model: str = ""
    temperature: float = 0.7
    max_tokens: int = 1000
    is_verified: bool = False


class CompletionResult(BaseModel):
    """Plain-text reply, or a classified failure."""

    ok: bool
    text: str = ""
    error_kind: Optional[ErrorKind] = None
    error: str = ""

    @classmethod
    def success(cls, text: str) -> "CompletionResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CompletionResult":
        return cls(ok=False, error_kind=kind, error=message)
