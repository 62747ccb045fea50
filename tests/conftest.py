"""Shared fixtures: a recording host, settings files and mock transports."""

import json
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

from notepilot.app.host import RecordingHost
from notepilot.app.runner import CopilotRunner
from notepilot.config.config import Settings
from notepilot.providers.client import CompletionClient


class TransportRecorder:
    """httpx.MockTransport that records requests and replays a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def json_response(status_code: int, payload) -> Callable:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def host(settings_path: Path) -> RecordingHost:
    return RecordingHost(block_text="Summarize X", settings_path=settings_path)


@pytest.fixture
def make_runner(host: RecordingHost):
    """Build a runner whose HTTP calls go to *handler*."""

    def _make(handler=None, **settings) -> tuple:
        recorder = TransportRecorder(handler or json_response(200, {}))
        runner = CopilotRunner(
            host,
            Settings(**settings),
            client=CompletionClient(transport=recorder.transport),
        )
        return runner, recorder

    return _make
