"""
Hashing text embedder.
Bag-of-words vectors with one hashed bucket per word; no model needed.
"""

import numpy as np

from .base import BaseEmbedder, register_embedder
import config


def word_hash(word: str) -> int:
    """32-bit signed string hash (h * 31 + UTF-16 code unit, wrapping)."""
    data = word.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h


@register_embedder("hashing")
class HashingEmbedder(BaseEmbedder):
    """
    Deterministic text embedder for search-by-text.

    Each lower-cased word longer than one character adds 1 to bucket
    ``|hash(word)| % dimension``; the result is L2-normalized. Texts with
    no usable words embed to the zero vector.
    """

    def __init__(self, dimension: int = config.SYNTHETIC_DIMENSION):
        super().__init__(dimension)

    def _embed_text(self, text: str) -> np.ndarray:
        vector = np.zeros(self.dimension, dtype=np.float64)
        for word in text.lower().split():
            if len(word) > 1:
                vector[abs(word_hash(word)) % self.dimension] += 1
        return vector
