from .errors import DomainError, LossyCastError, ShapeError, SvyLabelledError, TypeMismatchError
from .factor import as_factor
from .labelled import Labelled, is_labelled, labelled
from .labelled_spss import LabelledSPSS, is_labelled_spss, labelled_spss
from .metadata import UserMissing
from .series import from_series, labelled_columns, to_series, user_missing_mask
from .tagged_na import TaggedNA, is_native_na, is_tagged_na, na_tag, tagged_na
from .zap import zap_label, zap_labels, zap_missing


__all__ = [
    "as_factor",
    "DomainError",
    "from_series",
    "is_labelled",
    "is_labelled_spss",
    "is_native_na",
    "is_tagged_na",
    "Labelled",
    "labelled",
    "labelled_columns",
    "LabelledSPSS",
    "labelled_spss",
    "LossyCastError",
    "na_tag",
    "ShapeError",
    "SvyLabelledError",
    "tagged_na",
    "TaggedNA",
    "to_series",
    "TypeMismatchError",
    "user_missing_mask",
    "UserMissing",
    "zap_label",
    "zap_labels",
    "zap_missing",
]

__version__ = "0.1.0"
