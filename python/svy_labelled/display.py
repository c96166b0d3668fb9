# python/svy_labelled/display.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from .tagged_na import TaggedNA


# ───────────────────────── text helpers ─────────────────────────


def cat_line(*parts: Any) -> str:
    """Concatenate parts and append a single newline."""
    return "".join(str(p) for p in parts) + "\n"


def format_value(v: Any) -> str:
    """
    Render one scalar the way R prints it.

    None/NaN -> "NA", tagged NA -> "NA(t)", infinities -> "Inf"/"-Inf",
    integral floats lose their ".0".
    """
    if isinstance(v, TaggedNA):
        return f"NA({v.tag})"
    if v is None:
        return "NA"
    if isinstance(v, float):
        if math.isnan(v):
            return "NA"
        if math.isinf(v):
            return "Inf" if v > 0 else "-Inf"
        if v.is_integer():
            return str(int(v))
    return str(v)


def format_values(values: Sequence[Any], max_print: Optional[int] = None) -> str:
    """Space-separated, right-aligned values; all of them unless `max_print` is given."""
    shown = list(values) if max_print is None else list(values[:max_print])
    cells = [format_value(v) for v in shown]
    width = max((len(c) for c in cells), default=0)
    out = " ".join(c.rjust(width) for c in cells)
    if len(values) > len(shown):
        out = f"{out} ..." if out else "..."
    return out


def format_labels(labels: Dict[Any, str]) -> List[str]:
    """
    Lines of the label table, in definition order.

    Empty mapping -> no lines at all.
    """
    if not labels:
        return []

    codes = [format_value(k) for k in labels]
    texts = list(labels.values())
    code_w = max([len("value")] + [len(c) for c in codes])
    text_w = max([len("label")] + [len(t) for t in texts])

    out = ["", "Labels:", f" {'value'.rjust(code_w)} {'label'.rjust(text_w)}"]
    for code, text in zip(codes, texts):
        out.append(f" {code.rjust(code_w)} {text.rjust(text_w)}")
    return out
