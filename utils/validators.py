"""
Edge table validation.

Ensures an edge table has the endpoint columns the graph builder needs.

Time Complexity: O(n) where n = number of rows
Memory: O(1) additional beyond the DataFrame
"""

from typing import Any, Optional

from app.config import EDGE_VERTEX1_COLUMN, EDGE_VERTEX2_COLUMN

REQUIRED_COLUMNS = [
    EDGE_VERTEX1_COLUMN,
    EDGE_VERTEX2_COLUMN,
]


def validate_edge_frame(df: Any) -> Optional[str]:
    """
    Validate edge table structure. Returns error message if invalid, None if valid.

    Checks:
        1. All required columns present
        2. No null values in the endpoint columns

    An empty table is valid: it describes a graph with no edges.
    """
    if df is None or not hasattr(df, "columns"):
        return "Edge table must be a pandas DataFrame."

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        return f"Missing required columns: {', '.join(missing)}"

    null_cols = [col for col in REQUIRED_COLUMNS if df[col].isnull().any()]
    if null_cols:
        return f"Null values found in columns: {', '.join(null_cols)}"

    return None
