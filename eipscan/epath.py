"""CIP logical paths addressing a class, instance and attribute."""

from __future__ import annotations

import enum
import struct

from .codec import DecodeError, Reader

_MAX_ID = 0xFFFF


class _Segment(enum.IntEnum):
    CLASS_8_BITS = 0x20
    CLASS_16_BITS = 0x21
    INSTANCE_8_BITS = 0x24
    INSTANCE_16_BITS = 0x25
    ATTRIBUTE_8_BITS = 0x30
    ATTRIBUTE_16_BITS = 0x31


_NARROW = (_Segment.CLASS_8_BITS, _Segment.INSTANCE_8_BITS, _Segment.ATTRIBUTE_8_BITS)
_WIDE = (_Segment.CLASS_16_BITS, _Segment.INSTANCE_16_BITS, _Segment.ATTRIBUTE_16_BITS)

# segment -> (position in the path, whether it carries a 16-bit id)
_LAYOUT = {
    **{segment: (index, False) for index, segment in enumerate(_NARROW)},
    **{segment: (index, True) for index, segment in enumerate(_WIDE)},
}


def _check_id(value: int) -> int:
    if not 0 <= value <= _MAX_ID:
        raise ValueError(f"EPath id out of range: {value}")
    return value


class EPath:
    """A padded logical path of up to three segments."""

    __slots__ = ("_class_id", "_object_id", "_attribute_id", "_size")

    def __init__(self, class_id=None, object_id=None, attribute_id=None):
        given = (class_id, object_id, attribute_id)
        size = 0
        for value in given:
            if value is None:
                break
            size += 1
        if any(value is not None for value in given[size:]):
            raise ValueError("an EPath id may only be given after the ids before it")
        ids = [0 if value is None else _check_id(value) for value in given]
        self._class_id, self._object_id, self._attribute_id = ids
        self._size = size

    @classmethod
    def _build(cls, ids, size):
        path = cls.__new__(cls)
        path._class_id, path._object_id, path._attribute_id = ids
        path._size = size
        return path

    @property
    def class_id(self) -> int:
        return self._class_id

    @property
    def object_id(self) -> int:
        return self._object_id

    @property
    def attribute_id(self) -> int:
        return self._attribute_id

    @property
    def size(self) -> int:
        """Number of segments in the path."""
        return self._size

    def _ids(self):
        return (self._class_id, self._object_id, self._attribute_id)

    def pack(self, use_8_bit_path_segments=False) -> bytes:
        """Encode the path; the class segment is always written."""
        count = max(self._size, 1)
        ids = self._ids()[:count]
        if use_8_bit_path_segments:
            return b"".join(
                bytes((segment, value & 0xFF)) for segment, value in zip(_NARROW, ids)
            )
        return b"".join(
            struct.pack("<HH", segment, value) for segment, value in zip(_WIDE, ids)
        )

    def size_in_words(self, use_8_bit_path_segments=False) -> int:
        return self._size if use_8_bit_path_segments else self._size * 2

    @classmethod
    def from_padded(cls, data) -> "EPath":
        """Decode a padded path; unknown segments raise ValueError."""
        reader = Reader(data)
        ids = [0, 0, 0]
        try:
            while reader.remaining():
                code = reader.uint8()
                try:
                    segment = _Segment(code)
                except ValueError:
                    raise ValueError(f"Unknown EPATH segment ={code}") from None
                index, wide = _LAYOUT[segment]
                if wide:
                    reader.uint8()
                    ids[index] = reader.uint16()
                else:
                    ids[index] = reader.uint8()
        except DecodeError as exc:
            raise DecodeError("Wrong EPATH format") from exc

        size = 0
        if ids[0] > 0:
            size = 1
            if ids[1] > 0:
                size = 2
                if ids[2] > 0:
                    size = 3
        return cls._build(ids, size)

    def __str__(self) -> str:
        text = f"[classId={self._class_id}"
        if self._size > 1:
            text += f" objectId={self._object_id}"
            if self._size > 2:
                text += f" attributeId={self._attribute_id}"
        return text + "]"

    def __repr__(self) -> str:
        args = ", ".join(str(value) for value in self._ids()[: self._size])
        return f"EPath({args})"

    def __eq__(self, other):
        if not isinstance(other, EPath):
            return NotImplemented
        return self._size == other._size and self._ids() == other._ids()

    def __hash__(self):
        return hash((self._size, self._ids()))