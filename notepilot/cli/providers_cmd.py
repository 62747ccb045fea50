# -*- coding: utf-8 -*-
"""CLI commands for LLM providers."""
from __future__ import annotations

import click

from ..config.store import load_settings
from ..providers import list_providers
from ..providers.registry import infer_provider_id
from .utils import echo_kv, settings_path


@click.group("providers")
def providers_group() -> None:
    """Inspect the built-in LLM providers."""


@providers_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all providers, their defaults and model catalogs."""
    settings = load_settings(settings_path(ctx))
    active = settings.provider or infer_provider_id(
        settings.api_endpoint,
        settings.model,
    )

    click.echo("\n=== Providers ===")
    for defn in list_providers():
        mark = " (active)" if defn.id == active else ""
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {defn.name} ({defn.id}){mark}")
        click.echo(f"{'─' * 44}")
        echo_kv("api family", defn.family)
        echo_kv("base_url", defn.default_base_url or "(user supplied)")
        echo_kv("default model", defn.default_model or "(user supplied)")
        if defn.discover_models:
            echo_kv("models", "(fetched on verification)")
        else:
            echo_kv("models", ", ".join(defn.model_ids))
    click.echo()
