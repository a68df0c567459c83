"""Constants used across the specan-remote package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "specan-remote"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 8080
DEFAULT_PAGE_TITLE = "Spec An LED Control"

DEFAULT_GAIN = "50"
DEFAULT_BRIGHTNESS = "0.5"

DEFAULT_SINK_TYPE = "process"
DEFAULT_SINK_COMMAND = "python3 sendCmds.py"
DEFAULT_DISPLAY_HOST = "127.0.0.1"
DEFAULT_DISPLAY_PORT = 9000
