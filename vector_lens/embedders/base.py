"""
Query embedders turn search text into a vector of the collection's dimension.
"""

from abc import ABC, abstractmethod

import numpy as np


class BaseEmbedder(ABC):
    """
    A text embedder sized to one collection.

    Subclasses build one raw (unnormalized) vector per text in
    ``_embed_text``; ``embed`` stacks and L2-normalizes them so the
    result can be scored against the store's cosine matrix.
    """

    # Set by @register_embedder
    key: str = "embedder"

    def __init__(self, dimension: int):
        if dimension <= 0:
            raise ValueError(f"Dimension must be positive, got {dimension}")
        self._dimension = int(dimension)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def name(self) -> str:
        """Registry key plus dimension, e.g. ``hashing_384``."""
        return f"{self.key}_{self._dimension}"

    @abstractmethod
    def _embed_text(self, text: str) -> np.ndarray:
        """Raw vector of shape (dimension,) for one text."""
        pass

    def embed(self, texts: list[str]) -> np.ndarray:
        """
        Embed several texts.

        Returns:
            Array of shape (len(texts), dimension); all-zero rows stay zero
        """
        if not texts:
            return np.zeros((0, self._dimension))
        return self.normalize(np.vstack([self._embed_text(t) for t in texts]))

    def embed_single(self, text: str) -> np.ndarray:
        """Embed one text; returns shape (dimension,)."""
        return self.embed([text])[0]

    @staticmethod
    def normalize(vectors: np.ndarray) -> np.ndarray:
        """Scale each row to unit length, leaving zero rows untouched."""
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        return vectors / np.where(norms == 0, 1, norms)


_EMBEDDER_REGISTRY: dict[str, type[BaseEmbedder]] = {}


def register_embedder(name: str):
    """
    Class decorator adding an embedder under ``name``.

    Raises:
        TypeError: If the class is not a BaseEmbedder
        ValueError: If the name is taken
    """
    def decorator(cls: type[BaseEmbedder]):
        if not issubclass(cls, BaseEmbedder):
            raise TypeError(f"{cls.__name__} must inherit from BaseEmbedder")
        if name in _EMBEDDER_REGISTRY:
            raise ValueError(
                f"Embedder '{name}' already registered by {_EMBEDDER_REGISTRY[name].__name__}"
            )
        cls.key = name
        _EMBEDDER_REGISTRY[name] = cls
        return cls
    return decorator


def get_embedder(name: str, dimension: int) -> BaseEmbedder:
    """
    Build the embedder registered as ``name`` for a collection dimension.

    Raises:
        ValueError: If no embedder has that name
    """
    if name not in _EMBEDDER_REGISTRY:
        raise ValueError(f"Unknown embedder '{name}'. Available: {list_embedders()}")
    return _EMBEDDER_REGISTRY[name](dimension=dimension)


def list_embedders() -> list[str]:
    return list(_EMBEDDER_REGISTRY)
