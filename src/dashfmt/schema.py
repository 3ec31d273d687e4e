"""Declarative field schemas for robtop records.

An entity declares which tag each of its attributes lives at and how the
field text is converted:

    @dataclass
    class Creator(HasRobtopFormat):
        user_id: int
        name: str
        account_id: Optional[int]

        __robtop_schema__ = Schema((
            Field("user_id", 0, INT),
            Field("name", 1, TEXT),
            Field("account_id", 2, INT, optional=True, none_value="0"),
        ), fmt=POSITIONAL)

Reading consumes fields by tag, whatever order they come in, and drops tags
the schema does not know. Writing always emits ascending tag order. So
read -> write normalizes a record, and a second pass changes nothing.

Optional fields read as None when absent, empty, or equal to their
none_value, and are written as none_value (or left out with skip_if_none).
"""

from __future__ import annotations

import dataclasses
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Mapping, Tuple

from .errors import (
    FieldMissing,
    FieldValueInvalid,
    FloatSyntaxInvalid,
    IntegerSyntaxInvalid,
    ProcessError,
)
from .processors import Processor
from .records import COLON, IndexedRecord, RawField, RecordFormat, render_record
from .thunk import Thunk
from .variants import Rgb, Unknown

LOG = logging.getLogger(__name__)

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


class Codec:
    """Converts between field text and an attribute value."""

    def parse(self, raw: RawField) -> Any:
        raise NotImplementedError

    def render(self, value: Any) -> str:
        raise NotImplementedError


class Int(Codec):
    def parse(self, raw: RawField) -> int:
        text = raw.text
        if not _INT_RE.fullmatch(text):
            raise IntegerSyntaxInvalid(text)
        return int(text)

    def render(self, value: int) -> str:
        return str(value)


class Float(Codec):
    def parse(self, raw: RawField) -> float:
        text = raw.text
        if not _FLOAT_RE.fullmatch(text):
            raise FloatSyntaxInvalid(text)
        result = float(text)
        # overflowing literals would be written back as "inf"
        if not math.isfinite(result):
            raise FloatSyntaxInvalid(text)
        return result

    def render(self, value: float) -> str:
        return repr(float(value))


class Text(Codec):
    """Plain text, kept exactly as it appears in the record."""

    def parse(self, raw: RawField) -> str:
        return raw.text

    def render(self, value: str) -> str:
        return value


class Boolean(Codec):
    """'' and '0' are false, anything else is true. True is written as true_text."""

    def __init__(self, true_text: str = "1") -> None:
        self.true_text = true_text

    def parse(self, raw: RawField) -> bool:
        return raw.text not in ("", "0")

    def render(self, value: bool) -> str:
        return self.true_text if value else "0"


class Coded(Codec):
    """Integer code looked up in a CodedEnum subclass or a Palette."""

    def __init__(self, domain: Any) -> None:
        self.domain = domain

    def parse(self, raw: RawField) -> Any:
        return self.domain.from_code(INT.parse(raw))

    def render(self, value: Any) -> str:
        return str(self.domain.to_code(value))


class Thunked(Codec):
    """Field whose decoding is deferred to a Thunk with `processor`."""

    def __init__(self, processor: Processor) -> None:
        self.processor = processor

    def parse(self, raw: RawField) -> Thunk:
        return Thunk.unprocessed(self.processor, raw)

    def render(self, value: Thunk) -> str:
        return value.as_unprocessed()


INT = Int()
FLOAT = Float()
TEXT = Text()
BOOL = Boolean()


@dataclass(frozen=True)
class Field:
    name: str
    tag: int
    codec: Codec
    optional: bool = False
    none_value: str = ""
    skip_if_none: bool = False

    def parse(self, record: IndexedRecord) -> Any:
        """Read this field out of a scanned record.

        Raises:
            FieldMissing, FieldValueInvalid
        """
        raw = record.get(self.tag)
        if raw is None:
            if self.optional:
                return None
            raise FieldMissing(self.tag, self.name)
        if self.optional and raw.text in ("", self.none_value):
            return None
        try:
            return self.codec.parse(raw)
        except ProcessError as exc:
            raise FieldValueInvalid(self.tag, self.name, str(exc)) from exc

    def render(self, value: Any) -> str:
        if value is None:
            if not self.optional:
                raise FieldMissing(self.tag, self.name)
            return self.none_value
        try:
            return self.codec.render(value)
        except ProcessError as exc:
            raise FieldValueInvalid(self.tag, self.name, str(exc)) from exc


class Schema:
    """Ordered set of fields plus the record format they are written in."""

    def __init__(self, fields: Iterable[Field], fmt: RecordFormat = COLON) -> None:
        self.fields: Tuple[Field, ...] = tuple(sorted(fields, key=lambda f: f.tag))
        self.fmt = fmt
        tags = [f.tag for f in self.fields]
        if len(set(tags)) != len(tags):
            raise ValueError(f"schema declares a tag twice: {tags}")
        self._tags = frozenset(tags)

    def decode(self, text: str, duplicates: str = "last") -> Dict[str, Any]:
        """Scan `text` and parse every schema field.

        Raises:
            RecordError
        """
        record = IndexedRecord.scan(text, self.fmt, duplicates=duplicates)
        for tag in record:
            if tag not in self._tags:
                LOG.debug("discarding unknown tag %d", tag)
        return {f.name: f.parse(record) for f in self.fields}

    def encode(self, values: Mapping[str, Any]) -> str:
        pairs = []
        for f in self.fields:
            value = values[f.name]
            if value is None and f.skip_if_none:
                continue
            pairs.append((f.tag, f.render(value)))
        return render_record(pairs, self.fmt)


class HasRobtopFormat:
    """Mixin for dataclasses that carry a `__robtop_schema__`."""

    __robtop_schema__: ClassVar[Schema]

    @classmethod
    def from_robtop_str(cls, text: str, duplicates: str = "last"):
        """Decode one record. Thunk fields stay unprocessed.

        Raises:
            RecordError
        """
        return cls(**cls.__robtop_schema__.decode(text, duplicates=duplicates))

    def to_robtop_string(self) -> str:
        """Encode back to record form, fields in ascending tag order.

        Raises:
            RecordError: a required field is None, or a processed thunk
                does not encode.
        """
        schema = self.__robtop_schema__
        return schema.encode({f.name: getattr(self, f.name) for f in schema.fields})


def jsonable(value: Any) -> Any:
    """Plain JSON-friendly form of an attribute value. Thunks are decoded."""
    if isinstance(value, Thunk):
        return jsonable(value.into_processed())
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, Rgb):
        return list(value.as_tuple())
    if isinstance(value, Unknown):
        return {"unknown": value.code}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    return value


def to_dict(entity: HasRobtopFormat) -> Dict[str, Any]:
    """Decode every field of `entity` into plain data.

    Raises:
        ProcessError: a thunk does not decode.
    """
    return {f.name: jsonable(getattr(entity, f.name)) for f in entity.__robtop_schema__.fields}
