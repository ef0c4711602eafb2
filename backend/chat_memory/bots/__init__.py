"""Bot export/import components."""

from .compat import is_bot_compatible
from .naming import belongs_to_chat, collection_name, rekey_collection
from .service import BotService, ImportSummary

__all__ = [
    "BotService",
    "ImportSummary",
    "is_bot_compatible",
    "belongs_to_chat",
    "collection_name",
    "rekey_collection",
]
