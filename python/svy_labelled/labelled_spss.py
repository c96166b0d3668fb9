# python/svy_labelled/labelled_spss.py
from __future__ import annotations

import math
import warnings

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .display import format_value
from .errors import DomainError, LossyCastError, ShapeError, TypeMismatchError
from .labelled import (
    CHARACTER,
    NUMERIC,
    Labelled,
    Value,
    _ensure_seq,
    _ensure_values,
    _is_char_scalar,
    _is_numeric_scalar,
    _value_kind,
)
from .tagged_na import is_native_na


# ---------- helpers ----------


def _combine_labels(
    x_labels: Dict[Any, str],
    y_labels: Dict[Any, str],
    x_arg: str = "",
) -> Dict[Any, str]:
    """Combine label sets, preferring LHS and warning on conflicts"""
    if not y_labels:
        return x_labels
    if not x_labels:
        return y_labels

    conflicts = [code for code, text in x_labels.items() if y_labels.get(code, text) != text]
    if conflicts:
        if len(conflicts) <= 3:
            conflict_str = ", ".join(str(c) for c in conflicts)
        else:
            conflict_str = f"{conflicts[0]}, {conflicts[1]}, ... ({len(conflicts)} total)"

        warnings.warn(
            f"Conflicting labels for values: {conflict_str}. "
            f"Using labels from '{x_arg or 'left'}' argument.",
            UserWarning,
        )

    return x_labels


def _in_range(v: Any, na_range: Optional[Tuple[float, float]]) -> bool:
    if na_range is None or is_native_na(v) or not _is_numeric_scalar(v):
        return False
    lo, hi = na_range
    return lo <= v <= hi


def _is_user_missing(
    v: Any, na_values: Optional[Sequence[Value]], na_range: Optional[Tuple[float, float]]
) -> bool:
    if is_native_na(v):
        return False
    if na_values and v in na_values:
        return True
    return _in_range(v, na_range)


# ---------- core class ----------


@dataclass(frozen=True, eq=False)
class LabelledSPSS(Labelled):
    """
    SPSS-specific labelled vector with user-defined missing values.

    Extends Labelled with:
    - na_values: values that should also be treated as missing
      (SPSS allows up to three)
    - na_range: (lo, hi) inclusive range of missing values, numeric data only;
      use -inf / inf for an open-ended range
    """

    na_values: Optional[Tuple[Value, ...]] = None
    na_range: Optional[Tuple[float, float]] = None

    _header = "Labelled SPSS"

    def __post_init__(self):
        # normalised before the base class runs: it may infer the kind from na_values
        object.__setattr__(self, "na_values", _ensure_values(self.na_values))
        super().__post_init__()
        object.__setattr__(self, "na_values", self._check_na_values(self.na_values))
        object.__setattr__(self, "na_range", self._check_na_range(self.na_range))

    def _fallback_kind(self) -> Optional[str]:
        # an empty vector takes its type from na_values when nothing else tells it
        if self.na_values is None:
            return None
        return _value_kind(self.na_values, what="na_values")

    def _check_na_values(
        self, na_values: Optional[Tuple[Value, ...]]
    ) -> Optional[Tuple[Value, ...]]:
        if na_values is None:
            return None
        if any(is_native_na(v) for v in na_values):
            raise ValueError("`na_values` cannot contain missing values")

        if self.is_numeric:
            if not all(_is_numeric_scalar(v) for v in na_values):
                raise TypeMismatchError("`x` and `na_values` must be same type (numeric)")
        elif not all(_is_char_scalar(v) for v in na_values):
            raise TypeMismatchError("`x` and `na_values` must be same type (character)")
        return na_values

    def _check_na_range(self, na_range: Any) -> Optional[Tuple[float, float]]:
        if na_range is None:
            return None
        if not self.is_numeric:
            raise DomainError("`na_range` is only applicable for labelled numeric vectors")
        if not isinstance(na_range, Sequence) or isinstance(na_range, (str, bytes)):
            raise ShapeError("`na_range` must be a numeric vector of length two")
        if len(na_range) != 2:
            raise ShapeError("`na_range` must be a numeric vector of length two")

        lo, hi = na_range
        if not (_is_numeric_scalar(lo) and _is_numeric_scalar(hi)):
            raise ShapeError("`na_range` must be a numeric vector of length two")
        if math.isnan(lo) or math.isnan(hi):
            raise ShapeError("`na_range` cannot contain missing values")
        if lo > hi:
            raise ShapeError("`na_range` must be in ascending order")
        return (lo, hi)

    # ---------- missingness ----------
    def is_na(self) -> List[bool]:
        """Native missing values plus values in `na_values` or inside `na_range`."""
        miss = super().is_na()

        if self.na_values is not None:
            miss = [m or v in self.na_values for m, v in zip(miss, self.data)]

        if self.na_range is not None:
            miss = [m or _in_range(v, self.na_range) for m, v in zip(miss, self.data)]

        return miss

    def is_user_na(self) -> List[bool]:
        """Only the user-defined missing values (native missing values are False)."""
        return [_is_user_missing(v, self.na_values, self.na_range) for v in self.data]

    # ---------- equality ----------
    def __eq__(self, other):
        if not isinstance(other, LabelledSPSS):
            return False
        return (
            super().__eq__(other)
            and self.na_values == other.na_values
            and self.na_range == other.na_range
        )

    # ---------- subsetting ----------
    def _rewrap(self, data: Sequence[Value]) -> LabelledSPSS:
        # every piece of metadata has to be carried over by hand
        return LabelledSPSS(
            data=data,
            labels=self.labels,
            label=self.label,
            na_values=self.na_values,
            na_range=self.na_range,
        )

    # ---------- printing ----------
    def _missing_lines(self) -> List[str]:
        lines = []
        if self.na_values:
            lines.append("Missing values: " + ", ".join(format_value(v) for v in self.na_values))
        if self.na_range is not None:
            lo, hi = self.na_range
            lines.append(f"Missing range:  [{format_value(lo)}, {format_value(hi)}]")
        return lines

    def _repr_parts(self) -> List[str]:
        parts = super()._repr_parts()
        extra = []
        if self.na_values:
            extra.append(f"na_values={self.na_values}")
        if self.na_range:
            extra.append(f"na_range={self.na_range}")
        # keep the variable label last
        if self.label:
            return parts[:-1] + extra + parts[-1:]
        return parts + extra

    # ---------- combining ----------
    @classmethod
    def concat(cls, vectors: List[Union[LabelledSPSS, List[Value]]]) -> Labelled:
        """
        Concatenate LabelledSPSS vectors (plain lists are accepted too).

        Returns LabelledSPSS if all labelled inputs share the same missing
        specification, otherwise downgrades to a regular Labelled.
        """
        if not vectors:
            return cls()

        all_data: List[Value] = []
        for v in vectors:
            if isinstance(v, LabelledSPSS):
                all_data.extend(v.data)
            elif isinstance(v, (list, tuple)):
                all_data.extend(v)
            else:
                raise TypeError(f"Cannot concatenate {type(v).__name__}")

        spss = [v for v in vectors if isinstance(v, LabelledSPSS)]
        if not spss:
            return cls(data=all_data)
        first = spss[0]

        combined_labels = first.labels or {}
        for v in spss[1:]:
            combined_labels = _combine_labels(combined_labels, v.labels, x_arg="left")

        same_missing = all(
            v.na_values == first.na_values and v.na_range == first.na_range for v in spss
        )
        if not same_missing:
            return Labelled(data=all_data, labels=combined_labels, label=first.label)

        return cls(
            data=all_data,
            labels=combined_labels,
            na_values=first.na_values,
            na_range=first.na_range,
            label=first.label,
        )

    # ---------- casting ----------
    @classmethod
    def from_values(cls, values: List[Value], like: LabelledSPSS) -> LabelledSPSS:
        """Create a LabelledSPSS from values, using metadata from 'like'"""
        kind = _value_kind(_ensure_seq(values))
        if kind is not None:
            if like.is_numeric and kind != NUMERIC:
                raise TypeMismatchError("Can't cast character values to labelled<numeric>")
            if not like.is_numeric and kind != CHARACTER:
                raise TypeMismatchError("Can't cast numeric values to labelled<character>")

        return cls(
            data=values,
            labels=like.labels,
            na_values=like.na_values,
            na_range=like.na_range,
            label=like.label,
        )

    def cast(self, values: List[Value]) -> LabelledSPSS:
        """Cast values to this labelled type"""
        return self.from_values(values, like=self)

    def cast_to(self, template: LabelledSPSS) -> LabelledSPSS:
        """
        Re-label this vector with the metadata of `template`.

        Raises LossyCastError when a label used by the data would be dropped,
        or when a value that is user-missing here would stop being missing.
        """
        if self.is_numeric != template.is_numeric:
            raise TypeMismatchError("Can't cast between numeric and character labelled vectors")

        removed = set(self.labels) - set(template.labels)
        for val in self.data:
            if val in removed:
                raise LossyCastError(
                    f"Lossy cast: value {val} is labelled in source but not in target"
                )

        for val in self.data:
            source_missing = _is_user_missing(val, self.na_values, self.na_range)
            target_missing = _is_user_missing(val, template.na_values, template.na_range)
            if source_missing and not target_missing:
                raise LossyCastError(
                    f"Lossy cast: value {val} is user-missing in source but not in target"
                )

        return LabelledSPSS(
            data=list(self.data),
            labels=template.labels,
            na_values=template.na_values,
            na_range=template.na_range,
            label=self.label or template.label,
        )


# ---- convenience factories / predicates ----


def labelled_spss(
    x: Any = None,
    labels: Optional[Dict[Any, str]] = None,
    *,
    na_values: Any = None,
    na_range: Optional[Tuple[float, float]] = None,
    label: Optional[str] = None,
) -> LabelledSPSS:
    """
    Labelled vector carrying SPSS user-defined missing values.

    >>> x = labelled_spss(list(range(1, 11)), {1: "Good", 8: "Bad"}, na_values=[9, 10])
    >>> x.is_na()[-3:]
    [False, True, True]
    """
    return LabelledSPSS(data=x, labels=labels, label=label, na_values=na_values, na_range=na_range)


def is_labelled_spss(x: Any) -> bool:
    return isinstance(x, LabelledSPSS)
