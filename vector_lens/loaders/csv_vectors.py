"""
CSV loader for vector collections.
Vectors are either one JSON column or one numeric column per dimension.
"""

import json
import re
from pathlib import Path
from typing import Optional

import pandas as pd

from vector_lens.core.exceptions import LoaderError
from vector_lens.core.types import VectorRecord
from .base import BaseVectorLoader, register_loader
import config

DIMENSION_COLUMN = re.compile(r"^(?:v|dim_?|x)(\d+)$", re.IGNORECASE)


@register_loader("csv")
class CsvVectorLoader(BaseVectorLoader):
    """
    Loader for vectors stored in CSV.

    Expected CSV format:
    - id: Integer identifier (row number if absent)
    - vector: JSON array, OR columns v0..vN / dim_0..dim_N
    - created_at: Optional timestamp
    - metadata: Optional JSON object

    Any other column is folded into metadata.
    """

    # Candidate names for the id and vector columns
    COLUMN_PRESETS = {
        "default": {
            "id": ["id", "ID", "vector_id", "doc_id"],
            "vector": ["vector", "embedding", "embeddings", "values"],
        }
    }

    def __init__(self, csv_path: Optional[Path] = None, limit: Optional[int] = None):
        """
        Initialize the CSV loader.

        Args:
            csv_path: Path to the CSV file (defaults to config.VECTORS_CSV_PATH)
            limit: Keep only the first N rows
        """
        self.csv_path = Path(csv_path) if csv_path else config.VECTORS_CSV_PATH
        self.limit = limit

    @property
    def name(self) -> str:
        return f"csv_{self.csv_path.stem}"

    def load(self) -> list[VectorRecord]:
        if not self.csv_path.exists():
            raise LoaderError(f"Vector file not found: {self.csv_path}", path=str(self.csv_path))

        df = pd.read_csv(self.csv_path, nrows=self.limit)
        if df.empty:
            return []

        return self.to_records(self._normalize_columns(df))

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Produce the id / vector / metadata / created_at layout."""
        mapping = self._auto_detect_columns(list(df.columns))
        out = pd.DataFrame(index=df.index)

        id_col = mapping.get("id")
        out["id"] = df[id_col] if id_col else range(len(df))

        vector_col = mapping.get("vector")
        if vector_col:
            out["vector"] = df[vector_col].apply(_parse_vector)
            used = {vector_col}
        else:
            dim_cols = sorted(
                (c for c in df.columns if DIMENSION_COLUMN.match(str(c))),
                key=lambda c: int(DIMENSION_COLUMN.match(str(c)).group(1)),
            )
            if not dim_cols:
                raise ValueError(
                    "CSV must have a 'vector' column or per-dimension columns (v0, v1, ...). "
                    f"Available columns: {list(df.columns)}"
                )
            # One list per row; a bare list of lists would be read as 2-D
            out["vector"] = pd.Series(df[dim_cols].astype(float).values.tolist(), index=df.index)
            used = set(dim_cols)

        used.update(c for c in (id_col, "created_at", "metadata") if c)
        if "created_at" in df.columns:
            out["created_at"] = df["created_at"]

        extra_cols = [c for c in df.columns if c not in used]
        out["metadata"] = [
            _build_metadata(row, extra_cols) for _, row in df.iterrows()
        ]
        return out

    def _auto_detect_columns(self, columns: list[str]) -> dict[str, str]:
        """Map target names to actual columns using COLUMN_PRESETS."""
        mapping = {}
        columns_lower = {c.lower(): c for c in columns}

        for preset in self.COLUMN_PRESETS.values():
            for target, candidates in preset.items():
                if target in mapping:
                    continue
                for candidate in candidates:
                    if candidate in columns:
                        mapping[target] = candidate
                        break
                    elif candidate.lower() in columns_lower:
                        mapping[target] = columns_lower[candidate.lower()]
                        break

        return mapping


def _parse_vector(value) -> Optional[list[float]]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, list):
        return None
    try:
        return [float(x) for x in parsed]
    except (TypeError, ValueError):
        # Nested or non-numeric entries; validate() drops the row
        return None


def _build_metadata(row: pd.Series, extra_cols: list[str]) -> Optional[dict]:
    metadata = {}
    raw = row.get("metadata")
    if isinstance(raw, str) and raw.strip():
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = {"metadata": raw}
        if isinstance(parsed, dict):
            metadata.update(parsed)
    for col in extra_cols:
        if pd.notna(row[col]):
            metadata[col] = row[col].item() if hasattr(row[col], "item") else row[col]
    return metadata or None
