from __future__ import annotations
import sys
import os
from pathlib import Path

APP_NAME = "RoutineNotify"
NOTIFICATIONS_FILE = "notifications.json"
TODOS_FILE = "todos.json"
CUSTOM_ICONS_DIR = "custom-icons"
LOG_FILE = "routine-notify.log"


def data_dir(app_name: str = APP_NAME) -> Path:
    # Per-user app data dir
    # Windows: %APPDATA%\RoutineNotify
    # macOS: ~/Library/Application Support/RoutineNotify
    # Linux/other: ~/.config/RoutineNotify
    home = Path.home()
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(home / "AppData" / "Roaming")))
    elif sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        base = home / ".config"
    return base / app_name


def ensure_data_dir(base: Path) -> Path:
    """Create the data dir and its icon subdirectory if absent."""
    base.mkdir(parents=True, exist_ok=True)
    (base / CUSTOM_ICONS_DIR).mkdir(parents=True, exist_ok=True)
    return base
