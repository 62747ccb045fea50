# -*- coding: utf-8 -*-
"""Serve the HTTP API for out-of-process hosts."""
from __future__ import annotations

import click

from ..constant import DEFAULT_API_HOST, DEFAULT_API_PORT
from .utils import settings_path


@click.command("app")
@click.option("--host", default=DEFAULT_API_HOST, show_default=True)
@click.option("--port", default=DEFAULT_API_PORT, show_default=True, type=int)
@click.pass_context
def app_cmd(ctx: click.Context, host: str, port: int) -> None:
    """Start the NotePilot API server."""
    import uvicorn

    from ..app._app import create_app

    app = create_app(settings_path(ctx))
    level = (ctx.obj or {}).get("log_level", "info")
    uvicorn.run(app, host=host, port=port, log_level=level)
