"""ID helpers."""

from __future__ import annotations

import uuid


def new_id(prefix: str | None = None) -> str:
    """Generate a random UUID4 string with optional prefix."""
    base = str(uuid.uuid4())
    return f"{prefix}_{base}" if prefix else base


def stable_id(namespace: str, *parts: object) -> str:
    """Derive a deterministic UUID5 from a namespace string and parts."""
    name = ":".join(str(part) for part in parts)
    return str(uuid.uuid5(uuid.uuid5(uuid.NAMESPACE_URL, namespace), name))
