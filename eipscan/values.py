"""Composite CIP values: revisions and length-prefixed strings."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .codec import Reader


@dataclass(frozen=True)
class CipRevision:
    """A major.minor revision, one byte each."""

    major: int = 0
    minor: int = 0

    def __post_init__(self):
        for name in ("major", "minor"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} revision out of range: {value}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def pack(self) -> bytes:
        return bytes((self.major, self.minor))


class _CipBaseString:
    """Character string with a length prefix of fixed width."""

    __slots__ = ("data",)
    _LENGTH_FORMAT = "<B"

    def __init__(self, value=b""):
        data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        limit = 1 << (8 * struct.calcsize(self._LENGTH_FORMAT))
        if len(data) >= limit:
            raise ValueError(
                f"{type(self).__name__} holds at most {limit - 1} bytes, got {len(data)}"
            )
        self.data = data

    @property
    def length(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.data == other.data

    def __hash__(self):
        return hash((type(self), self.data))

    def pack(self) -> bytes:
        return struct.pack(self._LENGTH_FORMAT, len(self.data)) + self.data


class CipShortString(_CipBaseString):
    """SHORT_STRING: one length byte followed by the characters."""

    __slots__ = ()
    _LENGTH_FORMAT = "<B"

    def __str__(self) -> str:
        return super().__str__()

    def pack(self) -> bytes:
        return super().pack()


class CipString(_CipBaseString):
    """STRING: a two-byte length followed by the characters."""

    __slots__ = ()
    _LENGTH_FORMAT = "<H"

    def __str__(self) -> str:
        return super().__str__()

    def pack(self) -> bytes:
        return super().pack()


def read_revision(reader: Reader) -> CipRevision:
    major = reader.uint8()
    minor = reader.uint8()
    return CipRevision(major, minor)


def read_short_string(reader: Reader) -> CipShortString:
    return CipShortString(reader.take(reader.uint8()))


def read_string(reader: Reader) -> CipString:
    return CipString(reader.take(reader.uint16()))