"""Parameters of an implicit connection and their bit-field encodings."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_UDINT_MASK = 0xFFFFFFFF


@dataclass
class ConnectionParameters:
    """Everything a Forward Open request carries."""

    priority_time_tick: int = 0
    timeout_ticks: int = 0
    o2t_network_connection_id: int = 0
    t2o_network_connection_id: int = 0
    connection_serial_number: int = 0
    originator_vendor_id: int = 0
    originator_serial_number: int = 0
    connection_timeout_multiplier: int = 0
    o2t_rpi: int = 0
    o2t_network_connection_params: int = 0
    t2o_rpi: int = 0
    t2o_network_connection_params: int = 0
    transport_type_trigger: int = 0
    connection_path_size: int = 0
    o2t_real_time_format: bool = False
    t2o_real_time_format: bool = False
    connection_path: bytes = b""

    def __post_init__(self):
        self.connection_path = bytes(self.connection_path)


class NetworkConnectionParams(enum.IntEnum):
    """Bits of the 16-bit network connection parameters and the transport trigger."""

    REDUNDANT = 1 << 15
    OWNED = 0
    TYPE0 = 0
    MULTICAST = 1 << 13
    P2P = 2 << 13
    LOW_PRIORITY = 0
    HIGH_PRIORITY = 1 << 10
    SCHEDULED_PRIORITY = 2 << 10
    URGENT = 3 << 10
    FIXED = 0
    VARIABLE = 1 << 9
    TRIG_CYCLIC = 0
    TRIG_CHANGE = 1 << 4
    TRIG_APP = 2 << 4
    CLASS0 = 0
    CLASS1 = 1
    CLASS2 = 2
    CLASS3 = 3
    TRANSP_SERVER = 0x80


class RedundantOwner(enum.IntEnum):
    EXCLUSIVE = 0
    REDUNDANT = 1


class ConnectionType(enum.IntEnum):
    NULL_TYPE = 0
    MULTICAST = 1
    P2P = 2
    RESERVED = 3


class Priority(enum.IntEnum):
    LOW_PRIORITY = 0
    HIGH_PRIORITY = 1
    SCHEDULED = 2
    URGENT = 3


class SizeType(enum.IntEnum):
    FIXED = 0
    VARIABLE = 1


# field -> (shift in a normal open, shift in a large open, width mask)
_FIELDS = {
    "redundant_owner": (15, 31, 0x1),
    "connection_type": (13, 29, 0x3),
    "priority": (10, 26, 0x3),
    "type": (9, 25, 0x1),
}


class NetworkConnectionParametersBuilder:
    """Composes and decodes network connection parameters.

    ``large`` selects the 32-bit layout of a Large Forward Open.
    """

    __slots__ = ("_value", "_large")

    def __init__(self, value=0, large=False):
        if not 0 <= value <= _UDINT_MASK:
            raise ValueError(f"network connection parameters out of range: {value}")
        self._value = int(value)
        self._large = bool(large)

    def _shift(self, name: str) -> int:
        normal, large, _ = _FIELDS[name]
        return large if self._large else normal

    def _set(self, name: str, value: int) -> "NetworkConnectionParametersBuilder":
        self._value = (self._value | (int(value) << self._shift(name))) & _UDINT_MASK
        return self

    def _get(self, name: str) -> int:
        return (self._value >> self._shift(name)) & _FIELDS[name][2]

    @property
    def _size_mask(self) -> int:
        return 0xFFFF if self._large else 0x1FF

    def set_redundant_owner(self, value):
        return self._set("redundant_owner", RedundantOwner(value))

    def set_connection_type(self, value):
        return self._set("connection_type", ConnectionType(value))

    def set_priority(self, value):
        return self._set("priority", Priority(value))

    def set_type(self, value):
        return self._set("type", SizeType(value))

    def set_connection_size(self, value):
        self._value |= (int(value) & 0xFFFF) & self._size_mask
        return self

    def build(self) -> int:
        return self._value

    @property
    def redundant_owner(self) -> RedundantOwner:
        return RedundantOwner(self._get("redundant_owner"))

    @property
    def connection_type(self) -> ConnectionType:
        return ConnectionType(self._get("connection_type"))

    @property
    def priority(self) -> Priority:
        return Priority(self._get("priority"))

    @property
    def type(self) -> SizeType:
        return SizeType(self._get("type"))

    @property
    def connection_size(self) -> int:
        return self._value & self._size_mask