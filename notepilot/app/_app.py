# -*- coding: utf-8 -*-
"""FastAPI application exposing the core to out-of-process hosts."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from ..providers.client import CompletionClient
from .host import RecordingHost
from .routers import router
from .runner import CopilotRunner

logger = logging.getLogger(__name__)


def create_app(
    settings_path: Optional[Path] = None,
    client: Optional[CompletionClient] = None,
) -> FastAPI:
    """Build the app; settings are loaded once from *settings_path*."""
    host = RecordingHost(settings_path=settings_path)
    runner = CopilotRunner.from_store(host, settings_path, client=client)
    runner.start()

    app = FastAPI(title="NotePilot", version="0.1.0")
    app.state.host = host
    app.state.runner = runner
    app.include_router(router)
    logger.debug("API app created (settings=%s)", settings_path or "default")
    return app
