# python/svy_labelled/tagged_na.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

Scalar = Union[int, float, str, None]


@dataclass(frozen=True, slots=True)
class TaggedNA:
    """
    A native missing value carrying a short tag, like haven's ``tagged_na("a")``.

    Tagged NAs only live in numeric data. They always count as missing,
    whatever user-defined missing values are declared.
    """

    tag: str

    def __post_init__(self):
        if not isinstance(self.tag, str) or len(self.tag) != 1:
            raise ValueError("tag must be a single character")

    def __repr__(self) -> str:
        return f"NA({self.tag})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TaggedNA) and self.tag == other.tag

    def __hash__(self) -> int:
        return hash(("TaggedNA", self.tag))


def tagged_na(tag: Union[str, Sequence[str]]) -> Union[TaggedNA, List[TaggedNA]]:
    """Create one tagged NA, or a list of them from a sequence of tags."""
    if isinstance(tag, str):
        return TaggedNA(tag)
    return [TaggedNA(t) for t in tag]


def is_tagged_na(
    x: Union[Scalar, TaggedNA, Sequence[Any]], tag: Optional[str] = None
) -> Union[bool, List[bool]]:
    """Test if value(s) are TaggedNA, optionally with a specific tag."""
    if isinstance(x, (list, tuple)):
        if tag is None:
            return [isinstance(v, TaggedNA) for v in x]
        return [isinstance(v, TaggedNA) and v.tag == tag for v in x]

    if not isinstance(x, TaggedNA):
        return False
    return tag is None or x.tag == tag


def na_tag(
    x: Union[Scalar, TaggedNA, Sequence[Any]],
) -> Union[Optional[str], List[Optional[str]]]:
    """Return the tag of a TaggedNA, or None for anything else."""
    if isinstance(x, (list, tuple)):
        return [v.tag if isinstance(v, TaggedNA) else None for v in x]

    return x.tag if isinstance(x, TaggedNA) else None


def is_native_na(v: Any) -> bool:
    # None, float NaN and tagged NA are all "absent" before any user-missing rules
    if v is None or isinstance(v, TaggedNA):
        return True
    return isinstance(v, float) and math.isnan(v)
