"""Constants used across the wifi-direct package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "wifi-direct"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_INTERFACE_NAME = "wlan0"

# Pending commands per actor before submitters suspend.
DEFAULT_COMMAND_QUEUE_CAPACITY = 32
# Unread events each subscriber may hold before the oldest are skipped.
DEFAULT_EVENT_CAPACITY = 64

DEFAULT_HEALTH_HOST = "127.0.0.1"
