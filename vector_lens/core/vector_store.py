"""
VectorStore: in-memory vector collection for Vector-Lens.
Loads records, answers similarity searches and embeds text queries.
"""

import logging
import numbers
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

import numpy as np
import pandas as pd

from vector_lens.core.types import SearchResult, VectorRecord
from vector_lens.embedders import BaseEmbedder, get_embedder
from vector_lens.loaders.base import BaseVectorLoader
import config

logger = logging.getLogger(__name__)

METRICS = ("cosine", "dot")


class VectorStore:
    """
    Brute-force similarity search over one loaded collection.

    Responsibilities:
    - Load records via a loader
    - Keep a normalized matrix for cosine scoring
    - Embed text queries with the collection's dimension
    - Look up and delete records by id
    """

    def __init__(
        self,
        loader: BaseVectorLoader,
        embedder: Optional[BaseEmbedder] = None,
        metric: str = "cosine"
    ):
        """
        Initialize the VectorStore.

        Args:
            loader: Source of VectorRecords
            embedder: Text embedder (defaults to config.DEFAULT_EMBEDDER at the
                collection's dimension)
            metric: "cosine" or "dot"
        """
        if metric not in METRICS:
            raise ValueError(f"Unknown metric '{metric}'. Available: {list(METRICS)}")
        self.loader = loader
        self.metric = metric
        self._embedder = embedder

        self.records: list[VectorRecord] = []
        self._matrix: Optional[np.ndarray] = None
        self._id_to_idx: dict[int, int] = {}
        self._initialized = False

    @property
    def name(self) -> str:
        return self.loader.name

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, progress_callback: Optional[Callable[[str], None]] = None) -> None:
        """
        Load records and build the search matrix.

        Args:
            progress_callback: Optional callable(message: str) for progress updates
        """
        if self._initialized:
            return

        def log(msg: str):
            if progress_callback:
                progress_callback(msg)
            logger.info(msg)

        log(f"Loading {self.loader.name}...")
        self.records = self.loader.load()
        self._rebuild()
        self._initialized = True
        log(f"Ready! {len(self.records)} vectors loaded.")

    def _rebuild(self) -> None:
        """Rebuild the matrix and the id index from ``records``."""
        self._id_to_idx = {r.id: idx for idx, r in enumerate(self.records)}
        if not self.records:
            self._matrix = None
            return
        matrix = np.array([r.vector for r in self.records], dtype=np.float64)
        if self.metric == "cosine":
            matrix = BaseEmbedder.normalize(matrix)
        self._matrix = matrix

    # -------------------------------------------------------------------------
    # Search and retrieval
    # -------------------------------------------------------------------------

    def search(
        self,
        query: Sequence[float],
        k: int = config.DEFAULT_K_NEIGHBORS
    ) -> list[SearchResult]:
        """
        Find the k records most similar to a query vector.

        Args:
            query: Query vector of the collection's dimension
            k: Number of results to return

        Returns:
            SearchResults ordered by descending score

        Raises:
            ValueError: If the query length does not match the collection
        """
        if self._matrix is None:
            return []

        query_vec = np.asarray(query, dtype=np.float64)
        if query_vec.shape != (self._matrix.shape[1],):
            raise ValueError(
                f"Query has dimension {query_vec.size}, collection has {self._matrix.shape[1]}"
            )
        if self.metric == "cosine":
            query_vec = BaseEmbedder.normalize(query_vec.reshape(1, -1))[0]

        scores = self._matrix @ query_vec
        k_actual = min(k, len(scores))
        # Stable sort keeps insertion order among equal scores
        top = np.argsort(-scores, kind="stable")[:k_actual]

        return [
            SearchResult(
                id=self.records[i].id,
                score=float(scores[i]),
                vector=self.records[i].vector,
                metadata=self.records[i].metadata,
            )
            for i in top
        ]

    def search_text(
        self,
        text: str,
        k: int = config.DEFAULT_K_NEIGHBORS
    ) -> tuple[list[SearchResult], np.ndarray]:
        """
        Embed text and search with it.

        Returns:
            Tuple of (results, query vector)
        """
        query_vec = self.embedder.embed_single(text)
        return self.search(query_vec, k=k), query_vec

    def get_record(self, record_id: int) -> VectorRecord:
        """
        Get a single record by id.

        Raises:
            ValueError: If record not found
        """
        if record_id not in self._id_to_idx:
            raise ValueError(f"Record not found: {record_id}")
        return self.records[self._id_to_idx[record_id]]

    def delete_record(self, record_id: int) -> VectorRecord:
        """
        Remove a record from the collection.

        Raises:
            ValueError: If record not found
        """
        record = self.get_record(record_id)
        self.records = [r for r in self.records if r.id != record_id]
        self._rebuild()
        logger.info(f"Deleted vector {record_id}")
        return record

    def insert_record(
        self,
        vector: Sequence[float],
        metadata: Optional[dict[str, Any]] = None
    ) -> VectorRecord:
        """
        Add a vector to the collection under the next free id.

        Args:
            vector: Numeric values; must match the collection's dimension
            metadata: Optional metadata dict

        Returns:
            The stored VectorRecord

        Raises:
            ValueError: If the vector is empty, non-numeric or the wrong length
        """
        values = list(vector)
        if not values or not all(
            isinstance(x, numbers.Real) and not isinstance(x, bool) for x in values
        ):
            raise ValueError("Vector must be a non-empty array of numbers")
        if self.records and len(values) != self.dimension:
            raise ValueError(
                f"Vector has dimension {len(values)}, collection has {self.dimension}"
            )
        if metadata is not None and not isinstance(metadata, dict):
            raise ValueError("Metadata must be a JSON object")

        new_id = max((r.id for r in self.records), default=0) + 1
        record = VectorRecord(
            id=new_id,
            vector=tuple(float(x) for x in values),
            metadata=metadata,
            created_at=datetime.now(timezone.utc),
        )
        self.records = self.records + [record]
        self._rebuild()
        if self._embedder is not None and self._embedder.dimension != self.dimension:
            self._embedder = None
        logger.info(f"Inserted vector {new_id}")
        return record

    def random_query(self, seed: Optional[int] = None) -> np.ndarray:
        """A uniform random query vector in [-1, 1), rounded to 3 places."""
        rng = np.random.default_rng(seed)
        return np.round(rng.uniform(-1.0, 1.0, size=self.dimension), 3)

    # -------------------------------------------------------------------------
    # Utility methods
    # -------------------------------------------------------------------------

    @property
    def embedder(self) -> BaseEmbedder:
        if self._embedder is None:
            self._embedder = get_embedder(config.DEFAULT_EMBEDDER, dimension=self.dimension)
        return self._embedder

    @property
    def dimension(self) -> int:
        """Dimension of the stored vectors (0 when empty)."""
        if self._matrix is not None:
            return self._matrix.shape[1]
        return getattr(self.loader, "dimension", None) or 0

    @property
    def n_records(self) -> int:
        return len(self.records)

    def get_sample(self, limit: Optional[int] = config.DEFAULT_SAMPLE_LIMIT) -> list[VectorRecord]:
        """First ``limit`` records, the batch handed to the explorer."""
        return self.records if limit is None else self.records[:limit]

    def to_frame(self, results: Sequence[SearchResult]) -> pd.DataFrame:
        """Tabulate search results for display."""
        return pd.DataFrame([
            {
                "id": r.id,
                "score": r.score,
                "preview": _metadata_preview(r.metadata),
            }
            for r in results
        ], columns=["id", "score", "preview"])


def _metadata_preview(metadata: Optional[dict]) -> str:
    if not metadata:
        return ""
    if "text_preview" in metadata:
        return str(metadata["text_preview"])[:80]
    return ", ".join(f"{k}={v}" for k, v in list(metadata.items())[:3])
