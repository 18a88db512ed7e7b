from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

import pandas as pd

from geo_browser.core.dataset import Dataset

DELIMITER = ","


def _split_lines(text: str) -> List[str]:
    lines = [line.rstrip("\r") for line in text.strip().split("\n")]
    return [line for line in lines if line.strip() != ""]


def parse_csv(text: str, name: str = "", source: Optional[str] = None) -> Dataset:
    """
    Parse delimited text into a Dataset.

    Plain delimiter splitting: the first line is the header, header cells and
    values are trimmed, missing trailing fields become "" and surplus fields
    are dropped. Quotes are not interpreted.
    """
    lines = _split_lines(text or "")
    if not lines:
        return Dataset.empty(name)

    headers = [h.strip() for h in lines[0].split(DELIMITER)]
    columns = list(dict.fromkeys(headers))
    rows: List[dict] = []
    for line in lines[1:]:
        values = line.split(DELIMITER)
        # Duplicate header names keep the last cell.
        rows.append({h: (values[i].strip() if i < len(values) else "") for i, h in enumerate(headers)})

    frame = pd.DataFrame(rows, columns=columns, dtype=object)
    return Dataset(name=name, frame=frame, source=source)


def _quote(value: Any) -> str:
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    return "" if value is None else str(value)


def to_csv_text(records: Sequence[Mapping[str, Any]], columns: Optional[Sequence[str]] = None) -> str:
    """
    Serialise records for export.

    The header comes from `columns` or the first record's keys. String
    values are double-quoted with embedded quotes doubled. Empty input
    gives "".
    """
    if not records:
        return ""
    headers = list(columns) if columns is not None else list(records[0].keys())
    lines = [DELIMITER.join(headers)]
    for record in records:
        lines.append(DELIMITER.join(_quote(record.get(h)) for h in headers))
    return "\n".join(lines)
