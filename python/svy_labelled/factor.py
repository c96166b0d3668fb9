# python/svy_labelled/factor.py
from __future__ import annotations

from typing import Any, Dict, Optional, Union

import polars as pl

from .display import format_value
from .labelled import Labelled
from .series import to_series

LEVELS = ("default", "labels", "values", "both")


def as_factor(
    x: Union[Labelled, pl.Series],
    labels: Optional[Dict[Any, str]] = None,
    *,
    levels: str = "default",  # "default" | "labels" | "values" | "both"
    name: Optional[str] = None,
) -> pl.Series:
    """
    Convert a labelled vector to a categorical Series using a haven-like policy.

    `x` is a Labelled/LabelledSPSS (its own labels are used) or a plain
    ``pl.Series`` together with `labels`. Mapping keys may be raw-typed
    (e.g. 1, 5) or strings ("1", "5"). User-defined missing values of a
    LabelledSPSS keep their labels, as haven does.
    """
    levels = levels.lower()
    if levels not in LEVELS:
        raise ValueError("levels must be one of: default, labels, values, both")

    if isinstance(x, Labelled):
        mapping = x.labels if labels is None else labels
        s = to_series(x, name or "")
    elif isinstance(x, pl.Series):
        mapping = labels or {}
        s = x if name is None else x.rename(name)
    else:
        raise TypeError("as_factor(x): x must be a labelled vector or a polars.Series")

    # tolerant lookup: exact match first, else try the printed value
    def _lookup(val: Any) -> Optional[str]:
        if val in mapping:
            return mapping[val]
        return mapping.get(format_value(val))

    def _convert(val: Any) -> Optional[str]:
        if val is None:
            return None
        if levels == "values":
            return format_value(val)
        lab = _lookup(val)
        if levels == "labels":
            return lab
        if levels == "both":
            return f"[{format_value(val)}] {lab}" if lab is not None else format_value(val)
        return lab if lab is not None else format_value(val)

    out = pl.Series(s.name, [_convert(v) for v in s.to_list()], dtype=pl.Utf8)
    return out.cast(pl.Categorical)
