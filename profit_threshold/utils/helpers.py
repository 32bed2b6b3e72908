# profit_threshold/utils/helpers.py
"""
Utility functions and helpers
"""

import hashlib
import json
import time
from typing import Any, List, Sequence


def calculate_hash(data: Any) -> str:
    """
    Calculate SHA256 hash of data

    Args:
        data: Data to hash (will be JSON serialized if not string)

    Returns:
        SHA256 hash string
    """
    if not isinstance(data, str):
        data = json.dumps(data, sort_keys=True, default=str)

    return hashlib.sha256(data.encode('utf-8')).hexdigest()


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safe division that handles division by zero

    Args:
        numerator: Numerator
        denominator: Denominator
        default: Default value if denominator is zero

    Returns:
        Division result or default value
    """
    return numerator / denominator if denominator != 0 else default


def create_batches(items: Sequence[Any], batch_size: int) -> List[List[Any]]:
    """
    Split items into batches

    Args:
        items: Items to split
        batch_size: Size of each batch

    Returns:
        List of batches, in input order
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


class Timer:
    """Context manager for timing operations"""

    def __init__(self, description: str = ""):
        self.description = description
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        return False

    @property
    def duration(self) -> float:
        """Get elapsed time"""
        if self.start_time is None:
            return 0.0
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time


__all__ = [
    "calculate_hash",
    "safe_divide",
    "create_batches",
    "Timer"
]
