# -*- coding: utf-8 -*-
"""Editor commands: /copilot, /copilot1..3 and their hotkeys."""
from __future__ import annotations

import logging
import re
from typing import Optional

from ..constant import CUSTOM_PROMPT_SLOTS
from ..providers.errors import PreconditionError, StateError
from .host import Host, Hotkey
from .runner import CopilotRunner

logger = logging.getLogger(__name__)

NO_BLOCK_MESSAGE = "Please select a block first"
EMPTY_REPLY_MESSAGE = "The model returned an empty reply"

# A block whose whole content is one page reference, e.g. "[[Meeting notes]]"
_PAGE_REF = re.compile(r"^\s*\[\[([^\[\]]+)\]\]\s*$")


def command_name(slot: int) -> str:
    return "copilot" if slot == 0 else f"copilot{slot}"


def page_reference(content: str) -> Optional[str]:
    """Page name when *content* is exactly one ``[[page]]`` reference."""
    match = _PAGE_REF.match(content or "")
    return match.group(1).strip() if match else None


class CopilotCommands:
    def __init__(self, host: Host, runner: CopilotRunner) -> None:
        self._host = host
        self._runner = runner

    def register(self) -> None:
        """Register slash commands and hotkeys for every slot."""
        settings = self._runner.settings
        for slot in range(CUSTOM_PROMPT_SLOTS + 1):
            name = command_name(slot)
            handler = self._handler(slot)
            self._host.register_slash_command(name, handler)
            binding = settings.hotkey(slot)
            if binding:
                self._host.register_hotkey(
                    Hotkey(key=name, binding=binding, label=f"Run /{name}"),
                    handler,
                )
        logger.debug("Registered %d commands", CUSTOM_PROMPT_SLOTS + 1)

    def _handler(self, slot: int):
        async def handler() -> None:
            await self.run(slot)

        return handler

    async def _resolve_prompt(self, content: str) -> str:
        name = page_reference(content)
        if name is None:
            return content
        text = await self._host.get_page_text(name)
        if not text:
            logger.debug("Page %r has no text, using block content", name)
            return content
        return text

    async def run(self, slot: int = 0) -> bool:
        """Run the command for *slot*; True when a reply was inserted."""
        block = await self._host.get_current_block()
        if block is None:
            self._runner.report(StateError(NO_BLOCK_MESSAGE))
            return False

        system_prompt: Optional[str] = None
        if slot:
            system_prompt = self._runner.settings.custom_prompt(slot)
            if not system_prompt:
                self._runner.report(
                    PreconditionError(
                        f"Custom Prompt No.{slot} is empty. "
                        "Set it in the plugin settings first",
                    ),
                )
                return False

        prompt = await self._resolve_prompt(block.content)
        result = await self._runner.run_completion(prompt, system_prompt)
        if not result.ok:
            return False
        if not result.text:
            self._host.show_msg(EMPTY_REPLY_MESSAGE, "warning")
            return False
        await self._host.insert_block(block.uuid, result.text)
        return True
