# python/svy_labelled/labelled.py
from __future__ import annotations

import numbers
import sys
import warnings

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple, Union

from .display import cat_line, format_labels, format_value, format_values
from .errors import TypeMismatchError
from .tagged_na import TaggedNA, is_native_na


Value = Union[int, float, str, TaggedNA, None]

NUMERIC = "numeric"
CHARACTER = "character"


# ---------- helpers: typing & validation ----------


def _is_bool(x: Any) -> bool:
    # In Python, bool is a subclass of int; exclude explicitly.
    return isinstance(x, bool)


def _is_numeric_scalar(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not _is_bool(x)


def _is_char_scalar(x: Any) -> bool:
    return isinstance(x, str)


def _value_kind(values: Sequence[Any], what: str = "x") -> Optional[str]:
    """
    Storage kind of a sequence: NUMERIC, CHARACTER, or None when it holds
    nothing but native missing values (so the kind can't be told).
    """
    kind = None
    for v in values:
        if v is None:
            continue
        if isinstance(v, TaggedNA) or _is_numeric_scalar(v):
            this = NUMERIC
        elif _is_char_scalar(v):
            this = CHARACTER
        else:
            # rejects bools, bytes, nested containers
            raise TypeMismatchError(f"`{what}` must be a numeric or a character vector.")
        if kind is None:
            kind = this
        elif kind != this:
            raise TypeMismatchError(f"`{what}` must be a numeric or a character vector.")
    return kind


def _ensure_seq(x: Any) -> List[Value]:
    if x is None:
        return []
    if isinstance(x, (list, tuple, range)):
        return list(x)
    # allow a scalar (e.g. 1 -> [1])
    return [x]


def _ensure_values(x: Any) -> Optional[Tuple[Value, ...]]:
    """Codes given as a list, set, generator, Series or a single scalar, as a tuple."""
    if x is None:
        return None
    if isinstance(x, (str, bytes)) or not isinstance(x, Iterable):
        return (x,)
    if isinstance(x, (set, frozenset)):
        # sets have no order; sort so printing and equality are stable
        try:
            return tuple(sorted(x))
        except TypeError:
            # mixed types: validation rejects them later
            return tuple(sorted(x, key=repr))
    return tuple(x)


def _normalize_labels(
    labels: Optional[Union[Dict[Any, str], Sequence[Tuple[Any, str]]]],
) -> Dict[Any, str]:
    if labels is None:
        return {}

    # Accept a mapping or sequence of (code, label) pairs
    if isinstance(labels, Mapping):
        items = list(labels.items())
    elif isinstance(labels, Sequence) and not isinstance(labels, (str, bytes)):
        items = list(labels)
        for pair in items:
            if not (isinstance(pair, tuple) and len(pair) == 2):
                raise TypeError(
                    "`labels` must be dict[value->str] or sequence of (value, str) pairs"
                )
    else:
        raise TypeError("`labels` must be dict[value->str] or sequence of (value, str) pairs")

    if not all(isinstance(text, str) for _, text in items):
        raise TypeError("`labels` must map each code to a string")

    codes = [k for k, _ in items]
    if any(is_native_na(k) for k in codes):
        raise ValueError("`labels` codes cannot be missing values")
    if len(set(codes)) != len(codes):
        raise ValueError("`labels` must be unique")

    names = [text for _, text in items]
    if len(set(names)) != len(names):
        warnings.warn("duplicate label strings detected; proceeding (haven allows this)")

    return dict(items)


def _validate_label(label: Optional[str]):
    if label is None:
        return
    if not isinstance(label, str):
        raise TypeError("`label` must be a character vector of length one")


def _take(data: Sequence[Value], idx: Sequence[Any]) -> List[Value]:
    """Positional selection by a sequence of ints (negative allowed) or a boolean mask."""
    idx = list(idx)
    if idx and all(_is_bool(i) for i in idx):
        if len(idx) != len(data):
            raise IndexError(
                f"boolean index has length {len(idx)}, expected {len(data)}"
            )
        return [v for v, keep in zip(data, idx) if keep]
    if all(isinstance(i, numbers.Integral) and not _is_bool(i) for i in idx):
        return [data[i] for i in idx]
    raise TypeError("index must be an int, a slice, or a sequence of ints or bools")


# ---------- core class ----------


@dataclass(frozen=True, eq=False)
class Labelled:
    """
    Lightweight haven-like labelled vector.

    data:   sequence of numbers or strings (None allowed for missing)
    labels: mapping from *value* -> *label string* (e.g., {1: "Good"})
    label:  optional variable label string

    Instances are read-only: `data` is stored as a tuple and `labels` as a
    read-only mapping view.
    """

    data: Any = field(default_factory=list)
    labels: Optional[Dict[Any, str]] = None
    label: Optional[str] = None
    _kind: str = field(default=NUMERIC, init=False, repr=False)

    _header = "Labelled"

    # ---------- validation ----------
    def __post_init__(self):
        data = _ensure_seq(self.data)
        labels = _normalize_labels(self.labels)
        _validate_label(self.label)

        data_kind = _value_kind(data)
        labels_kind = _value_kind(list(labels), what="labels")
        if data_kind is not None and labels_kind is not None and data_kind != labels_kind:
            raise TypeMismatchError(f"`labels` must be the same type as `x` ({data_kind})")

        # frozen: attributes are set once here and never again
        object.__setattr__(self, "data", tuple(data))
        object.__setattr__(self, "labels", MappingProxyType(labels))
        object.__setattr__(
            self, "_kind", data_kind or labels_kind or self._fallback_kind() or NUMERIC
        )

    def _fallback_kind(self) -> Optional[str]:
        return None

    # ---------- storage ----------
    @property
    def is_numeric(self) -> bool:
        return self._kind == NUMERIC

    @property
    def kind(self) -> str:
        """R-style storage type: "integer", "double" or "character"."""
        if not self.is_numeric:
            return CHARACTER
        present = [v for v in self.data if v is not None]
        if present and all(isinstance(v, numbers.Integral) for v in present):
            return "integer"
        return "double"

    # ---------- basic API ----------
    def as_list(self) -> List[Value]:
        return list(self.data)

    def as_character(self) -> List[Optional[str]]:
        return [None if is_native_na(v) else format_value(v) for v in self.data]

    def is_na(self) -> List[bool]:
        """Native missingness: None, NaN or tagged NA."""
        return [is_native_na(v) for v in self.data]

    def levels(self):
        # parity with haven: levels.haven_labelled() -> NULL
        return None

    # ---------- conversions ----------
    def to_int(self) -> List[int]:
        """Convert to integer list"""
        if not self.is_numeric:
            raise TypeError("Can't convert labelled<character> to int")
        if any(is_native_na(v) for v in self.data):
            raise ValueError("Can't convert missing values to int")
        return [int(v) for v in self.data]  # type: ignore[arg-type]

    def to_float(self) -> List[float]:
        """Convert to float list; missing values become NaN"""
        if not self.is_numeric:
            raise TypeError("Can't convert labelled<character> to float")
        return [float("nan") if is_native_na(v) else float(v) for v in self.data]  # type: ignore[arg-type]

    def to_str(self) -> List[Optional[str]]:
        """Convert to string list"""
        if self.is_numeric:
            raise TypeError("Can't convert labelled<numeric> to str")
        return list(self.data)

    # ---------- equality ----------
    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        return (
            self.data == other.data and self.labels == other.labels and self.label == other.label
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    # ---------- python sequence protocol ----------
    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def _rewrap(self, data: Sequence[Value]) -> Labelled:
        return Labelled(data=data, labels=self.labels, label=self.label)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return self._rewrap(self.data[idx])
        if isinstance(idx, numbers.Integral) and not _is_bool(idx):
            return self.data[idx]
        if isinstance(idx, Sequence) and not isinstance(idx, (str, bytes)):
            return self._rewrap(_take(self.data, idx))
        raise TypeError("index must be an int, a slice, or a sequence of ints or bools")

    # ---------- printing ----------
    def _missing_lines(self) -> List[str]:
        return []

    def format(self, max_print: Optional[int] = None) -> str:
        labeltext = f": {self.label}" if self.label is not None else ""
        lines = [f"<{self._header} {self.kind}>{labeltext}"]
        if self.data:
            lines.append(format_values(self.data, max_print=max_print))
        else:
            lines.append(f"{self.kind}(0)")
        lines.extend(self._missing_lines())
        lines.extend(format_labels(self.labels))
        return "".join(cat_line(line) for line in lines)

    def print(self, file: Optional[TextIO] = None, max_print: Optional[int] = None) -> None:
        """Write the values and their metadata to `file` (stdout by default)."""
        out = sys.stdout if file is None else file
        out.write(self.format(max_print=max_print))

    def __str__(self) -> str:
        return self.format()

    def _repr_parts(self) -> List[str]:
        data_repr = repr(list(self.data[:10]))
        if len(self.data) > 10:
            data_repr = data_repr[:-1] + ", ...]"

        parts = [f"data={data_repr}"]
        if self.labels:
            parts.append(f"labels={dict(self.labels)}")
        if self.label:
            parts.append(f"label={self.label!r}")
        return parts

    def __repr__(self):
        return f"{self.__class__.__name__}({', '.join(self._repr_parts())})"


# ---- convenience factories / predicates ----


def labelled(
    x: Any = None,
    labels: Optional[Dict[Any, str]] = None,
    label: Optional[str] = None,
) -> Labelled:
    return Labelled(data=x, labels=labels, label=label)


def is_labelled(x: Any) -> bool:
    return isinstance(x, Labelled)
