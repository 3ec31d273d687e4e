"""Field processors: secondary decoding of raw field text.

A processor is a stateless pair of functions:
    decode(raw text) -> value
    encode(value)    -> raw text

Processors are attached to thunks (see thunk.py) and only ever run when the
caller asks for the decoded value or re-encodes a decoded one. The module
level instances (PERCENT, BASE64, LEVEL_DATA, PASSWORD) are shared freely.

Malformed input always surfaces as a ProcessError subclass; errors from the
standard library codecs are translated here and chained.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import re
import zlib
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import unquote_to_bytes

from .errors import Base64Invalid, CompressionInvalid, IntegerSyntaxInvalid, Utf8Invalid


# Bytes the remote service escapes. Deliberately narrower than "everything
# but alphanumerics": control characters, space, ':', '/', '?', '~' and any
# byte outside ASCII.
ESCAPED_ASCII = frozenset(b" :/?~")

_BASE64_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_PASSWORD_RE = re.compile(r"1([0-9]+)")

PASSWORD_KEY = b"26364"


def _utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Utf8Invalid(f"invalid utf-8 at byte {exc.start}", position=exc.start) from exc


def _utf8_bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise Utf8Invalid(f"unencodable character at index {exc.start}", position=exc.start) from exc


def b64decode(raw: str) -> bytes:
    """Strict URL-safe base64 decoding.

    Missing '=' padding is tolerated; anything outside the URL-safe alphabet
    is not.

    Raises:
        Base64Invalid
    """
    if not _BASE64_RE.fullmatch(raw):
        raise Base64Invalid(f"invalid url-safe base64 alphabet: {raw[:32]!r}")
    body = raw.rstrip("=")
    if len(body) % 4 == 1:
        raise Base64Invalid(f"invalid base64 length {len(body)}")
    try:
        return base64.urlsafe_b64decode(body + "=" * (-len(body) % 4))
    except binascii.Error as exc:
        raise Base64Invalid(str(exc)) from exc


def b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


def percent_encode(text: str) -> str:
    out = []
    for byte in _utf8_bytes(text):
        if byte < 0x20 or byte >= 0x7F or byte in ESCAPED_ASCII:
            out.append(f"%{byte:02X}")
        else:
            out.append(chr(byte))
    return "".join(out)


def xor_cycle(data: bytes, key: bytes) -> bytes:
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(data))


class Processor:
    """Base class for field processors.

    Subclasses override decode and encode. They must not keep state between
    calls: the same raw text always decodes to an equal value.
    """

    def decode(self, raw: str) -> Any:
        raise NotImplementedError

    def encode(self, value: Any) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PercentProcessor(Processor):
    """Percent-encoded UTF-8 text, e.g. song download links."""

    def decode(self, raw: str) -> str:
        return _utf8(unquote_to_bytes(_utf8_bytes(raw)))

    def encode(self, value: str) -> str:
        return percent_encode(value)


class Base64Processor(Processor):
    """URL-safe base64 encoded UTF-8 text, e.g. level descriptions.

    Encoding always emits canonical padding, so a raw value that omitted its
    padding will not come back byte-identical.
    """

    def decode(self, raw: str) -> str:
        return _utf8(b64decode(raw))

    def encode(self, value: str) -> str:
        return b64encode(_utf8_bytes(value))


class LevelDataProcessor(Processor):
    """Compressed level string: URL-safe base64 over gzip (or zlib) data.

    The output is the decompressed level string. Its objects are not parsed.
    """

    def decode(self, raw: str) -> str:
        data = b64decode(raw)
        try:
            # 32 + MAX_WBITS: accept both gzip and zlib headers
            inflated = zlib.decompress(data, 32 + zlib.MAX_WBITS)
        except zlib.error as exc:
            raise CompressionInvalid(str(exc)) from exc
        return _utf8(inflated)

    def encode(self, value: str) -> str:
        return b64encode(gzip.compress(_utf8_bytes(value), mtime=0))


@dataclass(frozen=True)
class Password:
    """Copy protection of a level.

    copyable=False: the level cannot be copied.
    copyable=True, code=None: free copy.
    copyable=True, code=n: copying requires password n.
    """
    copyable: bool
    code: Optional[int] = None

    @classmethod
    def copy(cls, code: int) -> "Password":
        return cls(copyable=True, code=code)


NO_COPY = Password(copyable=False)
FREE_COPY = Password(copyable=True)


class PasswordProcessor(Processor):
    """Level passwords: XOR with a fixed key, then URL-safe base64.

    The plain text is "1" for a free copy, or "1" followed by the zero padded
    password. A raw "0" (not encrypted) means the level is not copyable.
    """

    def decode(self, raw: str) -> Password:
        if raw in ("", "0"):
            return NO_COPY
        plain = _utf8(xor_cycle(b64decode(raw), PASSWORD_KEY))
        if plain == "0":
            return NO_COPY
        if plain == "1":
            return FREE_COPY
        match = _PASSWORD_RE.fullmatch(plain)
        if match is None:
            raise IntegerSyntaxInvalid(plain)
        return Password.copy(int(match.group(1)))

    def encode(self, value: Password) -> str:
        if not value.copyable:
            return "0"
        plain = "1" if value.code is None else f"1{value.code:06d}"
        return b64encode(xor_cycle(plain.encode("ascii"), PASSWORD_KEY))


PERCENT = PercentProcessor()
BASE64 = Base64Processor()
LEVEL_DATA = LevelDataProcessor()
PASSWORD = PasswordProcessor()
