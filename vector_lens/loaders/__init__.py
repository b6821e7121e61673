"""
Vector dataset loaders for Vector-Lens.
"""

from .base import BaseVectorLoader, get_loader, list_loaders, register_loader
from .json_vectors import JsonVectorLoader
from .csv_vectors import CsvVectorLoader
from .synthetic import SyntheticClusterLoader

__all__ = [
    "BaseVectorLoader",
    "get_loader",
    "list_loaders",
    "register_loader",
    "JsonVectorLoader",
    "CsvVectorLoader",
    "SyntheticClusterLoader",
]
