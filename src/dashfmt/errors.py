"""Errors raised while decoding and encoding robtop records.

Two families:
- ProcessError: a single field value could not be decoded or encoded
- RecordError: the record structure itself is broken, or a field is missing
"""

from __future__ import annotations

from typing import Optional


class DashError(Exception):
    """Base error for this package."""


class ProcessError(DashError):
    """Raised when a field value cannot be processed."""


class Utf8Invalid(ProcessError):
    """Raised when decoded bytes are not valid UTF-8."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class Base64Invalid(ProcessError):
    """Raised on a bad URL-safe base64 alphabet or padding."""


class IntegerSyntaxInvalid(ProcessError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid integer: {value!r}")
        self.value = value


class FloatSyntaxInvalid(ProcessError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid float: {value!r}")
        self.value = value


class CompressionInvalid(ProcessError):
    """Raised when level data does not decompress."""


class RecordError(DashError):
    """Raised when a record cannot be mapped onto a schema."""


class TagMalformed(RecordError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"field tag is not an integer: {tag!r}")
        self.tag = tag


class DanglingTag(RecordError):
    def __init__(self, tag: int) -> None:
        super().__init__(f"tag {tag} has no value")
        self.tag = tag


class DuplicateTag(RecordError):
    def __init__(self, tag: int) -> None:
        super().__init__(f"tag {tag} occurs more than once")
        self.tag = tag


class FieldMissing(RecordError):
    def __init__(self, tag: int, name: str) -> None:
        super().__init__(f"required field {name!r} (tag {tag}) is missing")
        self.tag = tag
        self.name = name


class FieldValueInvalid(RecordError):
    """Raised when a field is present but its value does not parse.

    The underlying ProcessError is chained as ``__cause__``.
    """

    def __init__(self, tag: int, name: str, reason: str) -> None:
        super().__init__(f"field {name!r} (tag {tag}): {reason}")
        self.tag = tag
        self.name = name


class ThunkStateError(RuntimeError):
    """Raised when a thunk is accessed in the wrong state. Always a caller bug."""
