# -*- coding: utf-8 -*-
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, List, Optional, TypeVar

import click

T = TypeVar("T")


def prompt_choice(
    prompt_text: str,
    *,
    options: List[str],
    default: Optional[str] = None,
) -> str:
    """Numbered single choice. Returns the chosen option label."""
    click.echo(prompt_text)
    for i, label in enumerate(options, start=1):
        click.echo(f"  {i}. {label}")
    default_index = options.index(default) + 1 if default in options else 1
    index = click.prompt(
        "Choice",
        type=click.IntRange(1, len(options)),
        default=default_index,
    )
    return options[index - 1]


def settings_path(ctx: click.Context) -> Optional[Path]:
    """--settings from the root group, if given."""
    return (ctx.obj or {}).get("settings_path")


def run_async(coro: Awaitable[T]) -> T:
    return asyncio.run(coro)  # type: ignore[arg-type]


def echo_error(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)


def echo_kv(key: str, value: Any) -> None:
    click.echo(f"  {key:16s}: {value}")
