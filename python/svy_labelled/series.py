# python/svy_labelled/series.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import polars as pl

from .errors import DomainError
from .labelled import Labelled, _is_numeric_scalar
from .labelled_spss import LabelledSPSS, labelled_spss
from .metadata import UserMissing, value_label_sets
from .tagged_na import is_native_na


# -------------------- label key normalisation --------------------


def _numeric_label_keys(labels: Optional[Dict[Any, str]]) -> Optional[Dict[Any, str]]:
    """Readers hand out label codes as strings ("1", "8.5"); numeric columns need numbers."""
    if not labels:
        return labels
    converted: Dict[Any, str] = {}
    for k, v in labels.items():
        if _is_numeric_scalar(k):
            converted[k] = v
            continue
        try:
            num_key = float(k)
        except (TypeError, ValueError):
            converted[k] = v
            continue
        converted[int(num_key) if num_key.is_integer() else num_key] = v
    return converted


# -------------------- Series <-> LabelledSPSS --------------------


def from_series(
    s: pl.Series,
    labels: Optional[Dict[Any, str]] = None,
    *,
    na_values: Optional[List[Any]] = None,
    na_range: Optional[Tuple[float, float]] = None,
    label: Optional[str] = None,
) -> LabelledSPSS:
    """Wrap a Polars column (nulls become None) as a LabelledSPSS."""
    if s.dtype.is_numeric():
        labels = _numeric_label_keys(labels)
    return labelled_spss(
        s.to_list(), labels=labels, na_values=na_values, na_range=na_range, label=label
    )


def to_series(x: Labelled, name: str = "", *, user_na: bool = True) -> pl.Series:
    """
    Strip a labelled vector down to a Polars Series.

    Native missing values become null. With ``user_na=False`` the
    user-defined missing values of a LabelledSPSS become null as well.
    """
    drop = [False] * len(x)
    if not user_na and isinstance(x, LabelledSPSS):
        drop = x.is_user_na()

    kind = x.kind
    values: List[Any] = []
    for v, d in zip(x.data, drop):
        if d or is_native_na(v):
            values.append(None)
        elif kind == "double":
            values.append(float(v))
        else:
            values.append(v)

    dtype = {"integer": pl.Int64, "double": pl.Float64}.get(kind, pl.Utf8)
    return pl.Series(name, values, dtype=dtype)


# -------------------- vectorised missing mask --------------------


def user_missing_mask(
    s: pl.Series,
    na_values: Optional[Sequence[Any]] = None,
    na_range: Optional[Tuple[float, float]] = None,
) -> pl.Series:
    """
    Boolean Series: True where `s` is null/NaN, in `na_values`, or inside the
    inclusive `na_range`.
    """
    col = pl.col("__value")
    numeric = s.dtype.is_numeric()

    cond = col.is_null()
    if s.dtype.is_float():
        cond = cond | col.is_nan()

    if na_values:
        if numeric:
            cond = cond | col.cast(pl.Float64).is_in([float(v) for v in na_values])
        elif s.dtype == pl.Utf8:
            cond = cond | col.is_in([str(v) for v in na_values])
        else:
            cond = cond | col.is_in(list(na_values))

    if na_range is not None:
        if not numeric:
            raise DomainError("`na_range` is only applicable for numeric columns")
        lo, hi = na_range
        as_float = col.cast(pl.Float64)
        cond = cond | ((as_float >= pl.lit(float(lo))) & (as_float <= pl.lit(float(hi))))

    frame = s.rename("__value").to_frame()
    return frame.select(cond.fill_null(False).alias("mask")).to_series().rename(s.name)


# -------------------- frame-level hydration --------------------


def labelled_columns(df: pl.DataFrame, meta: Dict[str, Any]) -> Dict[str, LabelledSPSS]:
    """
    Build a LabelledSPSS for every column whose meta entry declares user
    missing values, pulling value labels through the column's ``label_set``.
    """
    label_sets = value_label_sets(meta)
    out: Dict[str, LabelledSPSS] = {}

    for var in meta.get("vars", []):
        col_name = var["name"]
        if col_name not in df.columns:
            continue
        spec = UserMissing.from_meta(var)
        if spec.is_empty:
            continue

        label_set = var.get("label_set")
        out[col_name] = from_series(
            df[col_name],
            labels=label_sets.get(label_set) if label_set else None,
            label=var.get("label"),
            **spec.as_kwargs(),
        )
    return out
