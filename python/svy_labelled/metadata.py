from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class UserMissing:
    """
    User-defined missing specification of one variable, as delivered by readers.

    Readers put it under ``var_meta["user_missing"]`` as
    ``{"values": [...], "range": [lo, hi]}``; the ``na_values``/``na_range``
    spelling used by the zap helpers is accepted too.
    """

    values: Optional[List[Any]] = None
    range: Optional[Tuple[Any, Any]] = None

    @classmethod
    def from_meta(cls, var_meta: Optional[Dict[str, Any]]) -> "UserMissing":
        if not var_meta:
            return cls()
        spec = var_meta.get("user_missing", var_meta)
        if not spec:
            return cls()

        values = spec.get("values", spec.get("na_values"))
        rng = spec.get("range", spec.get("na_range"))
        return cls(
            values=list(values) if values else None,
            range=tuple(rng) if rng is not None else None,  # type: ignore[arg-type]
        )

    @property
    def is_empty(self) -> bool:
        return not self.values and self.range is None

    def as_kwargs(self) -> Dict[str, Any]:
        return {"na_values": self.values, "na_range": self.range}


def value_label_sets(meta: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """``{set_name: mapping}`` from the reader's ``meta["value_labels"]`` list."""
    return {vl["set_name"]: vl["mapping"] for vl in meta.get("value_labels", []) or []}
