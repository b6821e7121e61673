"""
Vector-Lens Configuration
Central configuration for paths, defaults, and settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = Path(os.getenv("VECTOR_LENS_DATA_DIR", PROJECT_ROOT / "data"))

# Default dataset paths
VECTORS_JSON_PATH = DATA_DIR / "vectors.json"
VECTORS_JSONL_PATH = DATA_DIR / "vectors.jsonl"
VECTORS_CSV_PATH = DATA_DIR / "vectors.csv"

# Logging
LOG_LEVEL = os.getenv("VECTOR_LENS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Projection settings
POWER_ITERATIONS = 50
NORM_EPSILON = 1e-10
INIT_LOW = -0.5  # Range of the random starting direction
INIT_HIGH = 0.5
_seed = os.getenv("VECTOR_LENS_SEED")
PROJECTION_SEED = int(_seed) if _seed else None  # None means fresh randomness per run

# View transform settings
VIEW_PADDING = 40.0
GRID_DIVISIONS = 10

# Interaction settings
ZOOM_MIN = 0.2
ZOOM_MAX = 5.0
WHEEL_ZOOM_OUT = 0.9  # Wheel down
WHEEL_ZOOM_IN = 1.1   # Wheel up
BUTTON_ZOOM_STEP = 1.2
HIT_RADIUS = 20.0     # Scaled by zoom
PAN_STEP = 50.0       # Pan buttons, device units

# Visualization settings
PLOT_HEIGHT = 500
PLOT_WIDTH = 800

# Render palette
COLORS = {
    "background": "#1f2937",
    "grid": "#374151",
    "vector": "#60a5fa",
    "match": "#22c55e",
    "match_halo": "rgba(34, 197, 94, 0.3)",
    "query": "#f59e0b",
    "outline": "#ffffff",
    "label": "#ffffff",
    "panel": "rgba(0, 0, 0, 0.8)",
    "legend_text": "#9ca3af",
    "empty_text": "#6b7280",
}

# Marker sizes, multiplied by zoom
POINT_RADIUS = 4.0
MATCH_RADIUS = 5.0
MATCH_HALO_RADIUS = 8.0
QUERY_SIZE = 8.0
HOVER_RING_RADIUS = 10.0

# Hover panel
INFO_PANEL_WIDTH = 170.0
INFO_PANEL_HEIGHT = 55.0
METADATA_PREVIEW_CHARS = 20

# Search settings
DEFAULT_K_NEIGHBORS = 10
DEFAULT_EMBEDDER = "hashing"  # Registered name used for text queries
DEFAULT_SAMPLE_LIMIT = 100  # Vectors fetched per collection for display

# Synthetic dataset settings
SYNTHETIC_DIMENSION = 384
SYNTHETIC_CLUSTERS = 5
SYNTHETIC_PER_CLUSTER = 20

# Source identifiers for loaders
SOURCE_JSON = "json"
SOURCE_CSV = "csv"
SOURCE_SYNTHETIC = "synthetic"

# Dataset registry
AVAILABLE_DATASETS = {
    "synthetic": {
        "loader": "synthetic",
        "label": "🧪 Synthetic clusters",
        "description": "Gaussian clusters generated on the fly",
        "data_check": lambda: True,
    },
    "json": {
        "loader": "json",
        "label": "📄 JSON vectors",
        "description": "Records from data/vectors.json or data/vectors.jsonl",
        "data_check": lambda: VECTORS_JSON_PATH.exists() or VECTORS_JSONL_PATH.exists(),
    },
    "csv": {
        "loader": "csv",
        "label": "📊 CSV vectors",
        "description": "Records from data/vectors.csv (one column per dimension)",
        "data_check": lambda: VECTORS_CSV_PATH.exists(),
    },
}

DEFAULT_DATASET = "synthetic"
