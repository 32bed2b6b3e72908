# profit_threshold/data/loaders.py
"""
File loaders for rate tables, scored customers and cost overrides.
"""
from pathlib import Path
from typing import Dict, Hashable, List, Union

import pandas as pd

from .customers import CostBenefit, CostPolicy, Customer, build_population
from .rate_table import RateTable
from ..utils.exceptions import ValidationError
from ..utils.logging import logger

log = logger.getChild("data.loaders")


def load_table(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load a CSV or parquet file.

    Args:
        path: File path

    Returns:
        Loaded dataframe
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    if filepath.suffix == '.parquet':
        df = pd.read_parquet(filepath)
    else:
        df = pd.read_csv(filepath)

    log.info(f"Loaded {len(df)} records with {df.shape[1]} columns from {filepath}")
    return df


def load_rate_table(path: Union[str, Path]) -> RateTable:
    return RateTable.from_frame(load_table(path))


def load_cost_overrides(path: Union[str, Path], id_col: str = "id") -> Dict[Hashable, CostBenefit]:
    """
    Load per-customer cost/benefit overrides.

    Expects ``cb_tp`` and ``cb_fp`` columns; ``cb_tn`` and ``cb_fn`` are optional.
    """
    df = load_table(path)
    required = [id_col, "cb_tp", "cb_fp"]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValidationError(
            "Cost override table is missing required columns",
            details={"missing_columns": missing}
        )

    overrides = {}
    for row in df.to_dict(orient="records"):
        overrides[row[id_col]] = CostBenefit(
            tp=float(row["cb_tp"]),
            fp=float(row["cb_fp"]),
            tn=float(row.get("cb_tn", 0.0)),
            fn=float(row.get("cb_fn", 0.0)),
        )
    return overrides


def load_population(
    path: Union[str, Path],
    policy: CostPolicy,
    id_col: str = "id",
    p1_col: str = "p1"
) -> List[Customer]:
    return build_population(load_table(path), policy, id_col=id_col, p1_col=p1_col)


__all__ = [
    "load_table",
    "load_rate_table",
    "load_cost_overrides",
    "load_population",
]
