# -*- coding: utf-8 -*-
"""
Host interface: what the core needs from the note-taking application.

A host provides:
- notifications (show_msg) and the settings store (update_settings)
- the settings UI schema (use_settings_schema)
- editor access: current block, page text, block insertion
- command registration: slash commands and hotkeys

ConsoleHost implements it for the command line: the "current block" is the
prompt given on the command line, pages are Markdown files in a directory
and inserted blocks are printed.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Literal,
    Optional,
    Protocol,
    runtime_checkable,
)

import click
from pydantic import BaseModel

from ..config.store import update_settings as store_update_settings

logger = logging.getLogger(__name__)

MsgStatus = Literal["info", "warning", "error", "success"]

CommandHandler = Callable[[], Awaitable[None]]


class Block(BaseModel):
    """An editor block (one note)."""

    uuid: str
    content: str = ""
    page: Optional[str] = None


class Hotkey(BaseModel):
    key: str
    binding: str
    label: str = ""


@runtime_checkable
class Host(Protocol):
    """Narrow view of the host application used by the core."""

    def show_msg(self, message: str, status: MsgStatus = "info") -> None:
        """Fire-and-forget user notification."""

    async def update_settings(self, patch: Dict[str, Any]) -> None:
        """Persist a partial settings patch (persisted key names)."""

    def use_settings_schema(self, schema: List[Dict[str, Any]]) -> None:
        """Replace the settings UI schema."""

    async def get_current_block(self) -> Optional[Block]:
        """Return the focused block, or None when nothing is selected."""

    async def get_page_text(self, name: str) -> Optional[str]:
        """Return the full text of page *name*, or None if unknown."""

    async def insert_block(self, target_uuid: str, content: str) -> None:
        """Insert *content* as a new block after *target_uuid*."""

    def register_slash_command(
        self,
        name: str,
        handler: CommandHandler,
    ) -> None:
        """Register an editor slash command."""

    def register_hotkey(
        self,
        hotkey: Hotkey,
        handler: CommandHandler,
    ) -> None:
        """Register a keyboard shortcut."""


# click colours per notification status
_STATUS_COLORS: Dict[str, Optional[str]] = {
    "info": None,
    "warning": "yellow",
    "error": "red",
    "success": "green",
}


class ConsoleHost:
    """Host backed by the terminal and settings.json."""

    def __init__(
        self,
        *,
        block_text: Optional[str] = None,
        pages_dir: Optional[Path] = None,
        settings_path: Optional[Path] = None,
    ) -> None:
        self._block_text = block_text
        self._pages_dir = pages_dir
        self._settings_path = settings_path
        self.schema: List[Dict[str, Any]] = []
        self.inserted: List[Block] = []
        self.slash_commands: Dict[str, CommandHandler] = {}
        self.hotkeys: Dict[str, CommandHandler] = {}

    def show_msg(self, message: str, status: MsgStatus = "info") -> None:
        color = _STATUS_COLORS.get(status)
        text = f"[{status}] {message}"
        click.echo(click.style(text, fg=color) if color else text, err=True)

    async def update_settings(self, patch: Dict[str, Any]) -> None:
        store_update_settings(patch, self._settings_path)

    def use_settings_schema(self, schema: List[Dict[str, Any]]) -> None:
        self.schema = schema

    async def get_current_block(self) -> Optional[Block]:
        if not self._block_text:
            return None
        return Block(uuid="console", content=self._block_text)

    async def get_page_text(self, name: str) -> Optional[str]:
        if self._pages_dir is None:
            return None
        page = self._pages_dir / f"{name}.md"
        if not page.is_file():
            logger.debug("Page not found: %s", page)
            return None
        return page.read_text(encoding="utf-8")

    async def insert_block(self, target_uuid: str, content: str) -> None:
        self.inserted.append(
            Block(
                uuid=f"{target_uuid}-{len(self.inserted) + 1}",
                content=content,
            ),
        )
        click.echo(content)

    def register_slash_command(
        self,
        name: str,
        handler: CommandHandler,
    ) -> None:
        self.slash_commands[name] = handler

    def register_hotkey(
        self,
        hotkey: Hotkey,
        handler: CommandHandler,
    ) -> None:
        self.hotkeys[hotkey.binding] = handler


class RecordingHost(ConsoleHost):
    """ConsoleHost that keeps notifications instead of printing them.

    Used by the HTTP API, where messages are returned to the caller.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.messages: List[Dict[str, str]] = []

    def show_msg(self, message: str, status: MsgStatus = "info") -> None:
        logger.info("[%s] %s", status, message)
        self.messages.append({"status": status, "message": message})

    def drain_messages(self) -> List[Dict[str, str]]:
        out, self.messages = self.messages, []
        return out
