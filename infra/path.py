# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "FlowDashboard"
DATA_DIR_ENV = "FLOW_DATA_DIR"


def user_data_dir() -> Path:
    """
    Per-user data directory holding the database, logs and exports.

    ``FLOW_DATA_DIR`` wins when set. Otherwise:

    Windows:
        %APPDATA%\\FlowDashboard

    macOS:
        ~/Library/Application Support/FlowDashboard

    Linux:
        $XDG_DATA_HOME/FlowDashboard (default ~/.local/share/FlowDashboard)
    """
    override = (os.getenv(DATA_DIR_ENV) or "").strip()
    if override:
        path = Path(override).expanduser()
    elif sys.platform.startswith("win"):
        path = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    elif sys.platform == "darwin":
        path = Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        path = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")) / APP_NAME

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Last-resort fallback: use home directory
        path = Path.home() / f".{APP_NAME.lower()}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_db_path() -> Path:
    return user_data_dir() / "flow.db"


def exports_dir() -> Path:
    path = user_data_dir() / "exports"
    path.mkdir(parents=True, exist_ok=True)
    return path
