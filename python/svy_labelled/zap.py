# python/svy_labelled/zap.py
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import polars as pl

from .labelled import Labelled, Value
from .labelled_spss import LabelledSPSS
from .series import user_missing_mask


# ───────────────────────── zap_missing (user missings → NA) ─────────────────────────


def zap_missing(
    x: Any,
    *,
    na_values: Optional[Sequence[Any]] = None,
    na_range: Optional[Tuple[float, float]] = None,
):
    """
    Convert user-defined missing values to native missing values.

    - LabelledSPSS: returns a plain Labelled where every user-missing position
      is None; labels and variable label are kept.
    - Labelled: returned unchanged (it has no user missings).
    - pl.Series: positions matching `na_values`/`na_range` become null;
      NaN in float columns becomes null too.
    """
    if isinstance(x, LabelledSPSS):
        user = x.is_user_na()
        data = [None if u else v for v, u in zip(x.data, user)]
        return Labelled(data=data, labels=x.labels, label=x.label)

    if isinstance(x, Labelled):
        return x

    if isinstance(x, pl.Series):
        mask = user_missing_mask(x, na_values=na_values, na_range=na_range)
        frame = pl.DataFrame({"value": x, "mask": mask})
        out = frame.select(
            pl.when(pl.col("mask")).then(None).otherwise(pl.col("value")).alias("value")
        )
        return out.to_series().rename(x.name)

    raise TypeError("zap_missing(x): x must be a labelled vector or a polars.Series")


# ───────────────────────── zap_labels (value labels) ─────────────────────────


def zap_labels(x: Any, *, user_na: bool = False) -> List[Value]:
    """
    Drop value labels, returning the bare values.

    For LabelledSPSS, user-defined missing values are turned into None first
    unless ``user_na=True``.
    """
    if isinstance(x, LabelledSPSS) and not user_na:
        x = zap_missing(x)
    if isinstance(x, Labelled):
        return x.as_list()
    if isinstance(x, (list, tuple)):
        return list(x)
    raise TypeError("zap_labels(x): x must be a labelled vector or a sequence")


# ───────────────────────── zap_label (variable label) ─────────────────────────


def zap_label(x: Any):
    """Remove the variable label; every other piece of metadata is kept."""
    if isinstance(x, LabelledSPSS):
        return LabelledSPSS(
            data=x.data,
            labels=x.labels,
            na_values=x.na_values,
            na_range=x.na_range,
        )
    if isinstance(x, Labelled):
        return Labelled(data=x.data, labels=x.labels)
    if isinstance(x, (list, tuple)):
        return list(x)
    raise TypeError("zap_label(x): x must be a labelled vector or a sequence")
