from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str | None = None) -> str:
    raw = uuid4().hex
    return f"{prefix}-{raw[:12]}" if prefix else raw


__all__ = ["generate_id"]
