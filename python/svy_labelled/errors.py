# python/svy_labelled/errors.py
from __future__ import annotations


class SvyLabelledError(Exception):
    """Base class for errors raised by svy_labelled."""


class TypeMismatchError(SvyLabelledError, TypeError):
    """Metadata (labels, na_values) is not the same type as the data."""


class DomainError(SvyLabelledError, ValueError):
    """An option was given for data it does not apply to (e.g. na_range on strings)."""


class ShapeError(SvyLabelledError, ValueError):
    """A structured argument has the wrong shape (e.g. na_range not a (lo, hi) pair)."""


class LossyCastError(SvyLabelledError, ValueError):
    """Casting would drop a used label or a used user-missing specification."""
