# -*- coding: utf-8 -*-
from ._app import create_app
from .commands import CopilotCommands
from .host import Block, ConsoleHost, Host, Hotkey, RecordingHost
from .runner import CopilotRunner
from .settings_manager import SettingsManager, VerificationState
from .settings_schema import build_settings_schema

__all__ = [
    "Block",
    "ConsoleHost",
    "CopilotCommands",
    "CopilotRunner",
    "Host",
    "Hotkey",
    "RecordingHost",
    "SettingsManager",
    "VerificationState",
    "build_settings_schema",
    "create_app",
]
