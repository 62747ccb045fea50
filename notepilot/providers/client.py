# -*- coding: utf-8 -*-
"""Single-attempt HTTP calls to LLM providers."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from ..constant import REQUEST_TIMEOUT, VERIFY_TIMEOUT
from .adapters import (
    build_headers,
    extract_error_message,
    extract_text,
    format_request,
    models_url,
    parse_model_catalog,
    resolve_endpoint,
)
from .errors import FormatError, PreconditionError, TransportError
from .models import CompletionRequest

logger = logging.getLogger(__name__)

INVALID_ENDPOINT_MESSAGE = "Invalid API endpoint: {}"
INVALID_KEY_MESSAGE = "API key contains characters that cannot be sent"


def _error_from_response(exc: httpx.HTTPStatusError) -> TransportError:
    """Build a TransportError, preferring the provider's own message."""
    response = exc.response
    message: Optional[str] = None
    try:
        message = extract_error_message(response.json())
    except ValueError:
        message = None
    if not message:
        message = str(exc)
    return TransportError(message, status_code=response.status_code)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise FormatError() from e


class CompletionClient:
    """Thin httpx wrapper: one request per call, no retries.

    Pass ``transport`` (e.g. ``httpx.MockTransport``) to route requests
    elsewhere; timeouts are enforced by httpx.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = REQUEST_TIMEOUT,
        verify_timeout: float = VERIFY_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._timeout = timeout
        self._verify_timeout = verify_timeout

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=timeout)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict,
        timeout: float,
        json: Optional[dict] = None,
    ) -> Any:
        try:
            async with self._client(timeout) as c:
                r = await c.request(method, url, headers=headers, json=json)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise _error_from_response(e) from e
        except httpx.InvalidURL as e:
            raise PreconditionError(INVALID_ENDPOINT_MESSAGE.format(e)) from e
        except UnicodeEncodeError as e:
            # header values must be ASCII
            raise PreconditionError(INVALID_KEY_MESSAGE) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        return _decode_json(r)

    async def complete(self, request: CompletionRequest) -> str:
        """Run one completion and return the trimmed reply.

        Raises:
            TransportError: connection failure or non-2xx response.
            FormatError: body present but not in the provider's schema.
            PreconditionError: endpoint or key cannot form a request.
        """
        url = resolve_endpoint(
            request.provider,
            request.api_endpoint,
            request.model,
        )
        payload = format_request(
            request.provider,
            request.prompt,
            request.system_prompt,
            model=request.model,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        logger.debug(
            "POST %s (provider=%s, model=%s)",
            url,
            request.provider,
            request.model,
        )
        body = await self._send(
            "POST",
            url,
            headers=build_headers(request.provider, request.api_key),
            timeout=self._timeout,
            json=payload,
        )
        text = extract_text(request.provider, body)
        if text is None:
            raise FormatError()
        return text

    async def list_models(
        self,
        provider_id: str,
        api_endpoint: str,
        api_key: str,
    ) -> List[str]:
        """Fetch the provider's model catalog, in catalog order."""
        url = models_url(api_endpoint)
        logger.debug("GET %s (provider=%s)", url, provider_id)
        body = await self._send(
            "GET",
            url,
            headers=build_headers(provider_id, api_key),
            timeout=self._verify_timeout,
        )
        ids = parse_model_catalog(body)
        if ids is None:
            raise FormatError()
        return ids
