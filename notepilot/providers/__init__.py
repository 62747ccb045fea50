# -*- coding: utf-8 -*-
"""Provider management: models, registry, wire adapters and the HTTP client."""

from .adapters import (
    build_headers,
    extract_text,
    format_request,
    get_adapter,
    resolve_endpoint,
)
from .client import CompletionClient
from .errors import (
    CopilotError,
    FormatError,
    PreconditionError,
    StateError,
    TransportError,
)
from .models import (
    CompletionRequest,
    CompletionResult,
    ModelInfo,
    ProviderDefinition,
    ProviderInfo,
)
from .registry import (
    PROVIDERS,
    build_registry,
    get_provider,
    infer_provider_id,
    list_providers,
)

__all__ = [
    # adapters
    "build_headers",
    "extract_text",
    "format_request",
    "get_adapter",
    "resolve_endpoint",
    # client
    "CompletionClient",
    # errors
    "CopilotError",
    "FormatError",
    "PreconditionError",
    "StateError",
    "TransportError",
    # models
    "CompletionRequest",
    "CompletionResult",
    "ModelInfo",
    "ProviderDefinition",
    "ProviderInfo",
    # registry
    "PROVIDERS",
    "build_registry",
    "get_provider",
    "infer_provider_id",
    "list_providers",
]
