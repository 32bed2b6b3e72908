"""Classifier rate derivation from scored evaluation sets."""
from .rates import (
    default_threshold_grid,
    build_rate_table,
    max_f1_threshold
)

__all__ = [
    'default_threshold_grid',
    'build_rate_table',
    'max_f1_threshold'
]
