"""Normalization pipeline.

Pipeline shape:
- parse lines -> entities (unknown tags dropped, any field order accepted)
- render entities -> lines (ascending tag order)

One pass reaches a fixed point: normalizing already normalized output gives
the same bytes back.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Type

from .schema import HasRobtopFormat, to_dict


def normalize_record(kind: Type[HasRobtopFormat], text: str, duplicates: str = "last") -> str:
    """Decode `text` as `kind` and encode it again.

    Raises:
        RecordError
    """
    return kind.from_robtop_str(text, duplicates=duplicates).to_robtop_string()


def _records(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        raw = line.rstrip("\r\n")
        if raw:
            yield raw


def normalize_lines(lines: Iterable[str], kind: Type[HasRobtopFormat], duplicates: str = "last") -> list[str]:
    """Normalize one record per line. Blank lines are skipped.

    Raises:
        RecordError
    """
    return [normalize_record(kind, raw, duplicates) for raw in _records(lines)]


def decode_lines(lines: Iterable[str], kind: Type[HasRobtopFormat], duplicates: str = "last") -> list[Dict[str, Any]]:
    """Decode one record per line into plain data, thunks included.

    Raises:
        DashError
    """
    return [to_dict(kind.from_robtop_str(raw, duplicates=duplicates)) for raw in _records(lines)]
