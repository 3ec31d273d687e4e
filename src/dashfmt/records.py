"""Index-tagged record scanning and rendering.

A record is a flat list of fields joined by a separator:
    keyed:       <tag>:<value>:<tag>:<value>...     e.g. 1:stardust1971:2:2073761
    tilde-pipe:  <tag>~|~<value>~|~<tag>~|~<value>  e.g. songs
    positional:  <value>:<value>:<value>            e.g. 4170784:Serponge:119741

Design notes:
- Scanning never copies field text: each field is a RawField view
  (start/end offsets) into the caller's string. The caller keeps that string
  alive for as long as it uses unprocessed fields.
- Values are never unescaped here. Escaping is a per-field concern handled
  by processors.
- A tag that occurs twice is resolved by the `duplicates` policy:
  "last" (default) keeps the last occurrence, "first" the first one,
  "error" raises DuplicateTag.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .errors import DanglingTag, DuplicateTag, TagMalformed

LOG = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("first", "last", "error")

_TAG_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, eq=False)
class RawField:
    """Borrowed slice source[start:end] of a scanned record."""
    source: str = field(repr=False)
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class RecordFormat:
    separator: str
    keyed: bool = True


COLON = RecordFormat(":")
TILDE_PIPE = RecordFormat("~|~")
POSITIONAL = RecordFormat(":", keyed=False)


def split_fields(text: str, separator: str) -> Iterator[RawField]:
    """Yield a RawField for every separator-delimited piece of `text`."""
    if not text:
        return
    start = 0
    while True:
        end = text.find(separator, start)
        if end == -1:
            yield RawField(text, start, len(text))
            return
        yield RawField(text, start, end)
        start = end + len(separator)


def _parse_tag(raw: RawField) -> int:
    text = raw.text
    if not _TAG_RE.fullmatch(text):
        raise TagMalformed(text)
    return int(text)


class IndexedRecord(Mapping[int, RawField]):
    """Mapping of field tag -> RawField for one scanned record."""

    def __init__(self, source: str, fields: Dict[int, RawField]) -> None:
        self.source = source
        self._fields = fields

    @classmethod
    def scan(cls, text: str, fmt: RecordFormat = COLON, duplicates: str = "last") -> "IndexedRecord":
        """Scan `text` into its fields.

        Raises:
            TagMalformed: a tag is not a non-negative integer.
            DanglingTag: the last tag of a keyed record has no value.
            DuplicateTag: a tag repeats and duplicates="error".
        """
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(f"unknown duplicate tag policy: {duplicates!r}")

        fields: Dict[int, RawField] = {}
        pieces = split_fields(text, fmt.separator)

        if not fmt.keyed:
            for position, piece in enumerate(pieces):
                fields[position] = piece
            return cls(text, fields)

        for tag_piece in pieces:
            tag = _parse_tag(tag_piece)
            value = next(pieces, None)
            if value is None:
                raise DanglingTag(tag)
            if tag in fields:
                if duplicates == "error":
                    raise DuplicateTag(tag)
                LOG.debug("tag %d repeated, keeping the %s occurrence", tag, duplicates)
                if duplicates == "first":
                    continue
            fields[tag] = value
        return cls(text, fields)

    def __getitem__(self, tag: int) -> RawField:
        return self._fields[tag]

    def __iter__(self) -> Iterator[int]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def text(self, tag: int) -> Optional[str]:
        raw = self._fields.get(tag)
        return None if raw is None else raw.text

    def __repr__(self) -> str:
        inner = ", ".join(f"{tag}: {raw.text!r}" for tag, raw in self._fields.items())
        return f"IndexedRecord({{{inner}}})"


def render_record(pairs: Iterable[Tuple[int, str]], fmt: RecordFormat = COLON) -> str:
    """Render (tag, text) pairs back to record form, in the order given.

    Positional formats drop the tags; they must then count up from 0.
    """
    sep = fmt.separator
    if fmt.keyed:
        return sep.join(f"{tag}{sep}{text}" for tag, text in pairs)

    values = []
    for position, (tag, text) in enumerate(pairs):
        if tag != position:
            raise ValueError(f"positional record expects tag {position}, got {tag}")
        values.append(text)
    return sep.join(values)
