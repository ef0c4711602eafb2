"""Local embedding model for chat memories.

Hashed model ids name their vector size, e.g. ``hashed-384``. The size is parsed from
the id so the configured model and the vectors it produces cannot disagree.
"""

from __future__ import annotations

import hashlib
import math
import re
from typing import ClassVar

_TOKEN_RE = re.compile(r"\w+")
_HASHED_MODEL_RE = re.compile(r"^hashed-(\d+)$", re.IGNORECASE)
DEFAULT_DIM = 384


def dim_for_model(model_id: str) -> int:
    """Vector size encoded in a model id, or ``DEFAULT_DIM`` when absent."""
    match = _HASHED_MODEL_RE.match(model_id)
    if match is None:
        return DEFAULT_DIM
    dim = int(match.group(1))
    if dim < 1:
        raise ValueError(f"Model id {model_id!r} names an empty vector size")
    return dim


class EmbeddingModel:
    """Hashed bag-of-words embeddings, deterministic per model id."""

    _instances: ClassVar[dict[str, "EmbeddingModel"]] = {}

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        self.dim = dim_for_model(model_id)

    @classmethod
    def get(cls, model_id: str) -> "EmbeddingModel":
        if model_id not in cls._instances:
            cls._instances[model_id] = cls(model_id)
        return cls._instances[model_id]

    def embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dim
        for token in _TOKEN_RE.findall(text.lower()):
            digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
            vector[int.from_bytes(digest, "big") % self.dim] += 1.0
        norm = math.sqrt(sum(value * value for value in vector))
        if norm == 0:
            return vector
        return [value / norm for value in vector]


__all__ = ["EmbeddingModel", "DEFAULT_DIM", "dim_for_model"]
