"""Memory collection names scoped to a chat.

A chat's collections are named ``{chat_id}-{purpose}``. Ownership is decided
by a case-insensitive prefix match on the chat id, so every place that builds,
matches or rewrites such a name goes through this module.
"""

from __future__ import annotations

import re


def collection_name(chat_id: str, purpose: str) -> str:
    return f"{chat_id}-{purpose}"


def belongs_to_chat(name: str, chat_id: str) -> bool:
    if not chat_id:
        return False
    return name.casefold().startswith(chat_id.casefold())


def rekey_collection(name: str, old_chat_id: str, new_chat_id: str) -> str:
    """Replace every case-insensitive occurrence of ``old_chat_id`` in ``name``."""
    if not old_chat_id:
        raise ValueError("old_chat_id must not be empty")
    pattern = re.compile(re.escape(old_chat_id), re.IGNORECASE)
    return pattern.sub(lambda _: new_chat_id, name)


__all__ = ["collection_name", "belongs_to_chat", "rekey_collection"]
