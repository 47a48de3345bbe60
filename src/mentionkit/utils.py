"""
Utility functions for mentionkit.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/mentionkit).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def parse_optional_float(raw: str | None) -> float | None:
    """
    Parse an optional float from an environment value.

    Empty strings and ``None`` map to ``None``.

    Raises:
        ValueError: If the value is not a number
    """
    if raw is None or not raw.strip():
        return None
    return float(raw)
