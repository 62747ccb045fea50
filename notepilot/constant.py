# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("NOTEPILOT_WORKING_DIR", "~/.notepilot"))
    .expanduser()
    .resolve()
)

SETTINGS_FILE = os.environ.get("NOTEPILOT_SETTINGS_FILE", "settings.json")

# Env key for app log level (used by CLI and the API server).
LOG_LEVEL_ENV = "NOTEPILOT_LOG_LEVEL"

# Seconds; enforced by the HTTP transport, the core never retries.
REQUEST_TIMEOUT = float(
    os.environ.get("NOTEPILOT_REQUEST_TIMEOUT", "60"),
)

# Catalog listing is cheap, keep it short.
VERIFY_TIMEOUT = float(
    os.environ.get("NOTEPILOT_VERIFY_TIMEOUT", "15"),
)

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = int(os.environ.get("NOTEPILOT_API_PORT", "8089"))

# Number of user-defined system prompts (Custom_Prompt_1..N).
CUSTOM_PROMPT_SLOTS = 3
