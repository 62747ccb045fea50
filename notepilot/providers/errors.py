# -*- coding: utf-8 -*-
"""Error types surfaced by the completion and verification flows."""

from __future__ import annotations

from typing import Optional

from .models import ErrorKind

UNEXPECTED_FORMAT_MESSAGE = "Unexpected API response format"


class CopilotError(Exception):
    """Base error with a stable kind and a notification severity."""

    kind: ErrorKind = "transport"
    status: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PreconditionError(CopilotError):
    """Key, endpoint, model or prompt missing before a call."""

    kind: ErrorKind = "precondition"
    status = "warning"


class TransportError(CopilotError):
    """Connection failure or non-2xx response."""

    kind: ErrorKind = "transport"
    status = "error"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class FormatError(CopilotError):
    """Response body does not match the provider's schema."""

    kind: ErrorKind = "format"
    status = "error"

    def __init__(self, message: str = UNEXPECTED_FORMAT_MESSAGE) -> None:
        super().__init__(message)


class StateError(CopilotError):
    """No anchor (selected block) for the action."""

    kind: ErrorKind = "state"
    status = "warning"
