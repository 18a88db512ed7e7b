from __future__ import annotations

import re
from typing import Optional

from geo_browser.core.format_detection import ScoreKind

_KIND_SUFFIX = {
    ScoreKind.BOOLEAN_PAIR: "Yes/No",
    ScoreKind.NUMERIC_BOUNDED: "1-10",
}


def display_name(filename: str, kind: Optional[ScoreKind] = None) -> str:
    """
    Readable label for a dataset file: "tree_health-survey.csv" ->
    "Tree Health Survey (Yes/No)". Without a kind no suffix is added.
    """
    stem = filename[:-4] if filename.lower().endswith(".csv") else filename
    words = [w for w in re.split(r"[-_]", stem) if w]
    label = " ".join(w[:1].upper() + w[1:].lower() for w in words)

    if kind is None:
        return label
    suffix = _KIND_SUFFIX.get(kind, kind.value)
    return f"{label} ({suffix})"
