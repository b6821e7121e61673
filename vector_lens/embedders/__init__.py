"""
Query embedders for Vector-Lens.
"""

from .base import BaseEmbedder, get_embedder, list_embedders, register_embedder
from .hashing import HashingEmbedder

__all__ = [
    "BaseEmbedder",
    "HashingEmbedder",
    "get_embedder",
    "list_embedders",
    "register_embedder",
]
