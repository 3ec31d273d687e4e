"""Lazily processed field values.

A Thunk is either
- unprocessed: it holds the raw field text (usually a RawField view into the
  record it was scanned from), or
- processed: it holds the value its processor decoded.

Decoding happens only on an explicit process() call, at most once per
instance. A failed decode leaves the thunk unprocessed, so its raw text can
still be written back untouched. Writing (as_unprocessed) never decodes: an
unprocessed thunk returns its raw text, a processed one is re-encoded.

Equality is like-for-like. Two unprocessed thunks compare raw text, two
processed thunks compare values, and an unprocessed thunk never equals a
processed one even when they describe the same content.

A thunk is not safe to process from several threads at once. Processors are.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from .errors import ThunkStateError
from .processors import Processor

T = TypeVar("T")

_UNSET = object()


class Thunk(Generic[T]):
    __slots__ = ("processor", "_raw", "_value")

    def __init__(self, processor: Processor, raw: Any = _UNSET, value: Any = _UNSET) -> None:
        if (raw is _UNSET) == (value is _UNSET):
            raise ThunkStateError("a thunk holds exactly one of raw text or a processed value")
        self.processor = processor
        self._raw = raw
        self._value = value

    @classmethod
    def unprocessed(cls, processor: Processor, raw: Any) -> "Thunk[T]":
        """Wrap raw field text (a str or a RawField)."""
        return cls(processor, raw=raw)

    @classmethod
    def processed(cls, processor: Processor, value: T) -> "Thunk[T]":
        return cls(processor, value=value)

    @property
    def is_processed(self) -> bool:
        return self._value is not _UNSET

    @property
    def raw(self) -> str:
        if self.is_processed:
            raise ThunkStateError("thunk is already processed; use as_unprocessed()")
        return str(self._raw)

    @property
    def value(self) -> T:
        if not self.is_processed:
            raise ThunkStateError("thunk is not processed; call process() first")
        return self._value

    def process(self) -> T:
        """Decode the raw text if necessary and return the value.

        Raises:
            ProcessError: the thunk stays unprocessed.
        """
        if not self.is_processed:
            value = self.processor.decode(str(self._raw))
            self._value = value
            self._raw = _UNSET
        return self._value

    def into_processed(self) -> T:
        """Return the decoded value without storing it in this thunk.

        Meant for callers that are done with the thunk and only want an
        owned value.

        Raises:
            ProcessError
        """
        if self.is_processed:
            return self._value
        return self.processor.decode(str(self._raw))

    def as_unprocessed(self) -> str:
        """Raw text for writing. Re-encodes processed values, never decodes.

        Raises:
            ProcessError: if a processed value cannot be encoded.
        """
        if self.is_processed:
            return self.processor.encode(self._value)
        return str(self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Thunk):
            return NotImplemented
        if type(self.processor) is not type(other.processor):
            return False
        if self.is_processed and other.is_processed:
            return self._value == other._value
        if not self.is_processed and not other.is_processed:
            return str(self._raw) == str(other._raw)
        return False

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_processed:
            return f"Thunk.processed({self.processor!r}, {self._value!r})"
        return f"Thunk.unprocessed({self.processor!r}, {str(self._raw)!r})"
