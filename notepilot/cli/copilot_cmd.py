# -*- coding: utf-8 -*-
"""CLI commands: configure, verify and run the copilot locally."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..app.commands import CopilotCommands, command_name
from ..app.host import ConsoleHost
from ..app.runner import CopilotRunner
from ..config.store import mask_api_key, save_settings
from ..constant import CUSTOM_PROMPT_SLOTS
from ..providers import list_providers
from .utils import echo_error, echo_kv, prompt_choice, run_async, settings_path


def _runner(
    ctx: click.Context,
    host: Optional[ConsoleHost] = None,
) -> CopilotRunner:
    path = settings_path(ctx)
    host = host or ConsoleHost(settings_path=path)
    return CopilotRunner.from_store(host, path)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


def _select_provider(current: str) -> str:
    providers = list_providers()
    labels = [f"{d.name} ({d.id})" for d in providers]
    ids = [d.id for d in providers]
    default = labels[ids.index(current)] if current in ids else None
    chosen = prompt_choice("Select provider:", options=labels, default=default)
    return ids[labels.index(chosen)]


def _select_model(runner: CopilotRunner, provider_id: str) -> str:
    defn = runner.manager.get_provider(provider_id)
    current = runner.settings.model
    if defn.models:
        ids = defn.model_ids
        default = current if current in ids else defn.default_model
        return prompt_choice(
            "Select model:",
            options=ids,
            default=default if default in ids else None,
        )
    return click.prompt(
        "Model name",
        default=current or defn.default_model or "",
    ).strip()


@click.command("config")
@click.pass_context
def config_cmd(ctx: click.Context) -> None:
    """Interactively configure provider, endpoint, key and model."""
    runner = _runner(ctx)
    previous = runner.settings.to_store()

    provider_id = _select_provider(runner.manager.provider_id())
    defn = runner.manager.get_provider(provider_id)
    current_url = runner.settings.api_endpoint
    if runner.settings.provider != provider_id:
        current_url = current_url or defn.default_base_url
    endpoint = click.prompt(
        "API endpoint",
        default=current_url or defn.default_base_url or "",
    ).strip()
    if not endpoint:
        echo_error("API endpoint is required.")
        raise SystemExit(1)

    current_key = runner.settings.api_key
    api_key = click.prompt(
        "API key",
        default=current_key or "",
        hide_input=True,
        show_default=False,
        prompt_suffix=f" [{'set' if current_key else 'not set'}]: ",
    )

    run_async(
        runner.on_settings_changed(
            previous,
            {
                **previous,
                "Provider": provider_id,
                "API_Endpoint": endpoint,
                "API_Key": api_key,
            },
        ),
    )
    model = _select_model(runner, provider_id)
    runner.manager.apply_changes({"model": model})
    save_settings(runner.settings, settings_path(ctx))

    click.echo(
        f"✓ {defn.name} — API Key: {mask_api_key(api_key) or '(not set)'}, "
        f"Endpoint: {endpoint}, Model: {model or '(not set)'}",
    )
    if click.confirm("Verify the connection now?", default=True):
        run_async(runner.verify())


# ---------------------------------------------------------------------------
# verify
# ---------------------------------------------------------------------------


@click.command("verify")
@click.pass_context
def verify_cmd(ctx: click.Context) -> None:
    """Verify the configured API connection."""
    runner = _runner(ctx)
    verified = run_async(runner.verify())
    s = runner.settings
    echo_kv("provider", s.provider or "(auto)")
    echo_kv("endpoint", s.api_endpoint or "(not set)")
    echo_kv("api_key", mask_api_key(s.api_key) or "(not set)")
    echo_kv("state", runner.manager.state.value)
    models = runner.manager.model_ids()
    if models:
        echo_kv("models", ", ".join(models))
    if not verified:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# ask
# ---------------------------------------------------------------------------


@click.command("ask")
@click.argument("prompt", required=False, default=None)
@click.option(
    "--slot",
    type=click.IntRange(0, CUSTOM_PROMPT_SLOTS),
    default=0,
    show_default=True,
    help="0 = plain /copilot, 1-3 = use Custom_Prompt_N as system prompt",
)
@click.option(
    "--pages-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory of <page>.md files used to resolve [[page]] prompts",
)
@click.pass_context
def ask_cmd(
    ctx: click.Context,
    prompt: Optional[str],
    slot: int,
    pages_dir: Optional[Path],
) -> None:
    """Send PROMPT (or stdin) to the model and print the reply."""
    if prompt is None:
        prompt = sys.stdin.read()
    host = ConsoleHost(
        block_text=prompt.strip(),
        pages_dir=pages_dir,
        settings_path=settings_path(ctx),
    )
    runner = _runner(ctx, host)
    CopilotCommands(host, runner).register()
    run_async(host.slash_commands[command_name(slot)]())
    if not host.inserted:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# schema
# ---------------------------------------------------------------------------


@click.command("schema")
@click.pass_context
def schema_cmd(ctx: click.Context) -> None:
    """Print the settings UI schema for the current settings."""
    runner = _runner(ctx)
    click.echo(
        json.dumps(runner.manager.schema(), ensure_ascii=False, indent=2),
    )
