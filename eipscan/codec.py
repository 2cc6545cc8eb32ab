"""Little-endian primitives of the CIP wire format."""

from __future__ import annotations

import enum
import struct


class CipDataTypes(enum.IntEnum):
    """Type codes of the CIP elementary and structured data types."""

    ANY = 0x00
    BOOL = 0xC1
    SINT = 0xC2
    INT = 0xC3
    DINT = 0xC4
    LINT = 0xC5
    USINT = 0xC6
    UINT = 0xC7
    UDINT = 0xC8
    ULINT = 0xC9
    REAL = 0xCA
    LREAL = 0xCB
    STIME = 0xCC
    DATE = 0xCD
    DATE_OF_DAY = 0xCE
    DATE_AND_TIME = 0xCF
    STRING = 0xD0
    BYTE = 0xD1
    WORD = 0xD2
    DWORD = 0xD3
    LWORD = 0xD4
    STRING2 = 0xD5
    FTIME = 0xD6
    LTIME = 0xD7
    ITIME = 0xD8
    STRINGN = 0xD9
    SHORT_STRING = 0xDA
    TIME = 0xDB
    EPATH = 0xDC
    ENG_UNIT = 0xDD
    USINT_USINT = 0xA0
    USINT6 = 0xA2
    MEMBER_LIST = 0xA3
    BYTE_ARRAY = 0xA4


class DecodeError(ValueError):
    """Raised when data ends before a value is complete."""


_FORMATS: dict[CipDataTypes, str] = {
    CipDataTypes.BOOL: "<B",
    CipDataTypes.SINT: "<b",
    CipDataTypes.INT: "<h",
    CipDataTypes.DINT: "<i",
    CipDataTypes.LINT: "<q",
    CipDataTypes.USINT: "<B",
    CipDataTypes.UINT: "<H",
    CipDataTypes.UDINT: "<I",
    CipDataTypes.ULINT: "<Q",
    CipDataTypes.REAL: "<f",
    CipDataTypes.LREAL: "<d",
    CipDataTypes.STIME: "<i",
    CipDataTypes.BYTE: "<B",
    CipDataTypes.WORD: "<H",
    CipDataTypes.DWORD: "<I",
    CipDataTypes.LWORD: "<Q",
    CipDataTypes.FTIME: "<i",
    CipDataTypes.LTIME: "<q",
    CipDataTypes.ITIME: "<h",
    CipDataTypes.TIME: "<i",
}

_FLOAT_FORMATS = frozenset({"<f", "<d"})


class Reader:
    """Sequential little-endian reader over a bytes-like object."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data=b""):
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    def take(self, size: int) -> bytes:
        """Consume and return exactly ``size`` bytes."""
        if size < 0:
            raise ValueError(f"cannot take a negative number of bytes: {size}")
        end = self._pos + size
        if end > len(self._data):
            raise DecodeError(
                f"need {size} bytes at offset {self._pos}, "
                f"only {self.remaining()} left"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def rest(self) -> bytes:
        """Consume and return everything not read yet."""
        chunk = self._data[self._pos:]
        self._pos = len(self._data)
        return chunk

    def remaining(self) -> int:
        """Number of bytes not read yet."""
        return len(self._data) - self._pos

    def _unpack(self, fmt: str):
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))[0]

    def uint8(self) -> int:
        return self._unpack("<B")

    def uint16(self) -> int:
        return self._unpack("<H")

    def int16(self) -> int:
        return self._unpack("<h")

    def uint32(self) -> int:
        return self._unpack("<I")


def _format_for(data_type) -> str:
    try:
        kind = CipDataTypes(data_type)
    except ValueError:
        raise ValueError(f"unknown CIP data type 0x{int(data_type):02X}") from None
    try:
        return _FORMATS[kind]
    except KeyError:
        raise ValueError(f"{kind.name} has no fixed-size encoding") from None


def unpack_value(data, data_type):
    """Decode the leading value of ``data`` as ``data_type``; extra bytes are ignored."""
    fmt = _format_for(data_type)
    size = struct.calcsize(fmt)
    data = bytes(data)
    if len(data) < size:
        raise DecodeError(
            f"{CipDataTypes(data_type).name} needs {size} bytes, got {len(data)}"
        )
    return struct.unpack_from(fmt, data)[0]


def pack_value(value, data_type) -> bytes:
    """Encode ``value`` as ``data_type``; integer types truncate toward zero."""
    fmt = _format_for(data_type)
    if fmt not in _FLOAT_FORMATS:
        value = int(value)
    try:
        return struct.pack(fmt, value)
    except (struct.error, OverflowError) as exc:
        raise ValueError(
            f"{value!r} does not fit {CipDataTypes(data_type).name}"
        ) from exc