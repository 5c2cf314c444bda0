"""
Configuration for the graph metrics engine.

Values may be overridden through environment variables of the same name.
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Vertices processed between cancellation checks / progress reports
VERTICES_PER_PROGRESS_REPORT = int(os.getenv("VERTICES_PER_PROGRESS_REPORT", "100"))

# Metric toggles (mirrors the user's graph metric settings)
CALCULATE_CLUSTERING_COEFFICIENT = _env_flag("CALCULATE_CLUSTERING_COEFFICIENT", "true")

# Column presentation hints handed to the result assembler
CLUSTERING_COEFFICIENT_NUMERIC_FORMAT = os.getenv(
    "CLUSTERING_COEFFICIENT_NUMERIC_FORMAT", "0.000"
)

# Seconds to wait for a background calculation to finish
WORKER_JOIN_TIMEOUT = float(os.getenv("WORKER_JOIN_TIMEOUT", "30.0"))

# Edge table columns
EDGE_VERTEX1_COLUMN = os.getenv("EDGE_VERTEX1_COLUMN", "vertex1")
EDGE_VERTEX2_COLUMN = os.getenv("EDGE_VERTEX2_COLUMN", "vertex2")
