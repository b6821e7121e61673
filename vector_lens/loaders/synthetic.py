"""
Synthetic clustered vectors for demos and tests.
"""

from datetime import datetime, timezone
from typing import Optional

import numpy as np
import pandas as pd

from vector_lens.core.types import VectorRecord
from .base import BaseVectorLoader, register_loader
import config


@register_loader("synthetic")
class SyntheticClusterLoader(BaseVectorLoader):
    """
    Gaussian clusters around random unit centres.

    Each record's metadata names its cluster, so highlighted search
    results can be checked against the cluster of the query.
    """

    def __init__(
        self,
        dimension: int = config.SYNTHETIC_DIMENSION,
        n_clusters: int = config.SYNTHETIC_CLUSTERS,
        per_cluster: int = config.SYNTHETIC_PER_CLUSTER,
        spread: float = 0.15,
        seed: Optional[int] = 42
    ):
        """
        Initialize the synthetic loader.

        Args:
            dimension: Vector dimension
            n_clusters: Number of clusters
            per_cluster: Records per cluster
            spread: Standard deviation of the noise around each centre
            seed: Random seed (None for a fresh dataset each load)
        """
        self.dimension = dimension
        self.n_clusters = n_clusters
        self.per_cluster = per_cluster
        self.spread = spread
        self.seed = seed

    @property
    def name(self) -> str:
        return f"synthetic_{self.n_clusters}x{self.per_cluster}_{self.dimension}d"

    def load(self) -> list[VectorRecord]:
        rng = np.random.default_rng(self.seed)
        centres = rng.normal(size=(self.n_clusters, self.dimension))
        centres /= np.linalg.norm(centres, axis=1, keepdims=True)

        now = datetime.now(timezone.utc)
        rows = []
        for cluster, centre in enumerate(centres):
            noise = rng.normal(scale=self.spread, size=(self.per_cluster, self.dimension))
            for i, vector in enumerate(centre + noise):
                rows.append({
                    "id": cluster * self.per_cluster + i + 1,
                    "vector": vector.tolist(),
                    "metadata": {
                        "source": config.SOURCE_SYNTHETIC,
                        "cluster": cluster,
                        "text_preview": f"cluster {cluster} item {i}",
                    },
                    "created_at": now,
                })

        if not rows:
            return []
        return self.to_records(pd.DataFrame(rows))
