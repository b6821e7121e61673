"""
Base class for vector dataset loaders.
Defines the interface all loaders must implement.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

from vector_lens.core.types import VectorRecord

logger = logging.getLogger(__name__)


class BaseVectorLoader(ABC):
    """
    Abstract base class for vector dataset loaders.

    Loaders read a source into a DataFrame with these columns:
    - id: Integer identifier, unique within the dataset
    - vector: List of floats, the same length on every row
    - metadata: Optional dict (or None)
    - created_at: Optional timestamp

    and hand it to ``to_records`` for validation and conversion.
    """

    @abstractmethod
    def load(self) -> list[VectorRecord]:
        """
        Load and return the dataset as records.

        Returns:
            List of VectorRecords, all of one dimension
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique name for this dataset.

        Returns:
            String identifier for the dataset
        """
        pass

    def validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate that DataFrame has required columns and one dimension.

        Args:
            df: DataFrame to validate

        Returns:
            Validated DataFrame

        Raises:
            ValueError: If required columns are missing, ids repeat, or
                vector lengths differ
        """
        required_columns = {"id", "vector"}
        missing = required_columns - set(df.columns)

        if missing:
            raise ValueError(f"Dataset missing required columns: {missing}")

        # Remove rows without a vector and log how many were dropped
        original_count = len(df)
        has_vector = df["vector"].apply(lambda v: isinstance(v, (list, tuple)) and len(v) > 0)
        df = df[has_vector]
        dropped_count = original_count - len(df)

        if dropped_count > 0:
            logger.warning(
                f"Dropped {dropped_count} rows with empty/missing vectors "
                f"({dropped_count / original_count * 100:.1f}% of {original_count} total)"
            )

        df = df.copy()
        df["id"] = df["id"].astype(int)

        if df["id"].duplicated().any():
            dupes = df.loc[df["id"].duplicated(), "id"].tolist()[:5]
            raise ValueError(f"Dataset has duplicate ids: {dupes}")

        lengths = df["vector"].apply(len).unique()
        if len(lengths) > 1:
            raise ValueError(f"Dataset mixes vector dimensions: {sorted(int(n) for n in lengths)}")

        logger.info(f"Validated dataset: {len(df)} rows (from {original_count} original)")

        return df.reset_index(drop=True)

    def to_records(self, df: pd.DataFrame) -> list[VectorRecord]:
        """Validate a DataFrame and convert its rows to VectorRecords."""
        df = self.validate(df)
        records = []
        for row in df.itertuples(index=False):
            metadata = getattr(row, "metadata", None)
            records.append(VectorRecord(
                id=int(row.id),
                vector=tuple(float(x) for x in row.vector),
                metadata=metadata if isinstance(metadata, dict) else None,
                created_at=_parse_timestamp(getattr(row, "created_at", None)),
            ))
        return records


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept datetimes, epoch seconds or ISO strings."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, numbers.Real):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return pd.Timestamp(value).to_pydatetime()


# Registry for available loaders
_LOADER_REGISTRY: dict[str, type[BaseVectorLoader]] = {}


def register_loader(name: str):
    """
    Decorator to register a loader class.

    Usage:
        @register_loader("json")
        class JsonVectorLoader(BaseVectorLoader):
            ...

    Raises:
        TypeError: If class doesn't inherit from BaseVectorLoader
        ValueError: If name is already registered
    """
    def decorator(cls: type[BaseVectorLoader]):
        if not issubclass(cls, BaseVectorLoader):
            raise TypeError(f"{cls.__name__} must inherit from BaseVectorLoader")
        if name in _LOADER_REGISTRY:
            raise ValueError(
                f"Loader '{name}' already registered by {_LOADER_REGISTRY[name].__name__}"
            )
        _LOADER_REGISTRY[name] = cls
        return cls
    return decorator


def get_loader(name: str, **kwargs) -> BaseVectorLoader:
    """
    Get a loader instance by name.

    Args:
        name: Registered loader name
        **kwargs: Arguments passed to loader constructor

    Returns:
        Loader instance

    Raises:
        ValueError: If loader name not found
    """
    if name not in _LOADER_REGISTRY:
        available = list(_LOADER_REGISTRY.keys())
        raise ValueError(f"Unknown loader '{name}'. Available: {available}")

    return _LOADER_REGISTRY[name](**kwargs)


def list_loaders() -> list[str]:
    """Return list of registered loader names."""
    return list(_LOADER_REGISTRY.keys())
