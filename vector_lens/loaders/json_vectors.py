"""
JSON / JSONL loader for exported vector collections.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from vector_lens.core.exceptions import LoaderError
from vector_lens.core.types import VectorRecord
from .base import BaseVectorLoader, register_loader
import config

logger = logging.getLogger(__name__)


@register_loader("json")
class JsonVectorLoader(BaseVectorLoader):
    """
    Loader for vectors exported as JSON.

    Accepted layouts:
    - A list of records: [{"id": 1, "vector": [...], "metadata": {...}}, ...]
    - A page object: {"vectors": [...], "total": N, ...}
    - JSON Lines (.jsonl): one record object per line

    ``created_at`` may be epoch seconds or an ISO timestamp.
    """

    def __init__(self, path: Optional[Path] = None, limit: Optional[int] = None):
        """
        Initialize the JSON loader.

        Args:
            path: File to read (defaults to data/vectors.json, then data/vectors.jsonl)
            limit: Keep only the first N records
        """
        if path is None:
            path = config.VECTORS_JSON_PATH if config.VECTORS_JSON_PATH.exists() else config.VECTORS_JSONL_PATH
        self.path = Path(path)
        self.limit = limit

    @property
    def name(self) -> str:
        return f"json_{self.path.stem}"

    def load(self) -> list[VectorRecord]:
        if not self.path.exists():
            raise LoaderError(f"Vector file not found: {self.path}", path=str(self.path))

        rows = self._read_rows()
        if self.limit is not None:
            rows = rows[:self.limit]
        logger.info(f"Read {len(rows)} records from {self.path.name}")

        if not rows:
            return []
        return self.to_records(pd.DataFrame(rows))

    def _read_rows(self) -> list[dict]:
        try:
            with open(self.path, encoding="utf-8") as f:
                if self.path.suffix == ".jsonl":
                    return [json.loads(line) for line in f if line.strip()]
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise LoaderError(f"Invalid JSON in {self.path}: {e}", path=str(self.path)) from e

        if isinstance(data, dict) and "vectors" in data:
            data = data["vectors"]
        if not isinstance(data, list):
            raise LoaderError(
                f"Expected a list of records or an object with 'vectors' in {self.path}",
                path=str(self.path),
            )
        return data
