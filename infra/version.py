from __future__ import annotations

import os
from importlib import metadata

_DEFAULT_APP_VERSION = "0.1.0"
_DISTRIBUTION = "flow-dashboard"


def _installed_version() -> str | None:
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    env_override = (os.getenv("FLOW_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    installed = _installed_version()
    if installed:
        return installed

    return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
