"""Connection Manager requests: Forward Open, Large Forward Open, Forward Close."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .codec import Reader
from .connection_params import ConnectionParameters

# Header of a Forward Open: everything up to and including the path size.
_FORWARD_OPEN_HEADER = "<BBIIHHIB3xIHIHBB"
_LARGE_FORWARD_OPEN_HEADER = "<BBIIHHIB3xIIIIBB"
_FORWARD_CLOSE_HEADER = "<BBHHIBB"


def _pack_open(params: ConnectionParameters, header: str, ncp_mask: int) -> bytes:
    try:
        packed = struct.pack(
            header,
            params.priority_time_tick,
            params.timeout_ticks,
            params.o2t_network_connection_id,
            params.t2o_network_connection_id,
            params.connection_serial_number,
            params.originator_vendor_id,
            params.originator_serial_number,
            params.connection_timeout_multiplier,
            params.o2t_rpi,
            params.o2t_network_connection_params & ncp_mask,
            params.t2o_rpi,
            params.t2o_network_connection_params & ncp_mask,
            params.transport_type_trigger,
            params.connection_path_size,
        )
    except struct.error as exc:
        raise ValueError(f"connection parameter out of range: {exc}") from exc
    return packed + bytes(params.connection_path)


@dataclass(frozen=True)
class ForwardOpenRequest:
    """Forward Open with 16-bit network connection parameters."""

    parameters: ConnectionParameters

    HEADER_SIZE = struct.calcsize(_FORWARD_OPEN_HEADER)

    def pack(self) -> bytes:
        """Encode the request; the parameters are truncated to 16 bits."""
        return _pack_open(self.parameters, _FORWARD_OPEN_HEADER, 0xFFFF)


@dataclass(frozen=True)
class LargeForwardOpenRequest:
    """Large Forward Open with 32-bit network connection parameters."""

    parameters: ConnectionParameters

    HEADER_SIZE = struct.calcsize(_LARGE_FORWARD_OPEN_HEADER)

    def pack(self) -> bytes:
        return _pack_open(self.parameters, _LARGE_FORWARD_OPEN_HEADER, 0xFFFFFFFF)


@dataclass
class ForwardCloseRequest:
    """Forward Close identifying a connection by its triad and path."""

    connection_serial_number: int = 0
    originator_vendor_id: int = 0
    originator_serial_number: int = 0
    connection_path: bytes = b""

    def __post_init__(self):
        self.connection_path = bytes(self.connection_path)

    def pack(self) -> bytes:
        path = bytes(self.connection_path)
        try:
            header = struct.pack(
                _FORWARD_CLOSE_HEADER,
                0,  # time tick
                0,  # timeout ticks
                self.connection_serial_number,
                self.originator_vendor_id,
                self.originator_serial_number,
                len(path) // 2,
                0,  # reserved
            )
        except struct.error as exc:
            raise ValueError(f"forward close field out of range: {exc}") from exc
        return header + path


@dataclass(frozen=True)
class ForwardOpenResponse:
    """The decoded reply to a successful Forward Open."""

    o2t_network_connection_id: int = 0
    t2o_network_connection_id: int = 0
    connection_serial_number: int = 0
    originator_vendor_id: int = 0
    originator_serial_number: int = 0
    o2t_api: int = 0
    t2o_api: int = 0
    application_reply: bytes = b""

    @property
    def application_reply_size(self) -> int:
        """Size of the application reply in 16-bit words."""
        return len(self.application_reply) // 2

    @classmethod
    def from_bytes(cls, data) -> "ForwardOpenResponse":
        """Decode a reply; truncated data raises DecodeError."""
        reader = Reader(data)
        o2t_id = reader.uint32()
        t2o_id = reader.uint32()
        serial = reader.uint16()
        vendor = reader.uint16()
        originator_serial = reader.uint32()
        o2t_api = reader.uint32()
        t2o_api = reader.uint32()
        reply_size = reader.uint8()
        reader.uint8()  # reserved
        reply = reader.take(reply_size * 2)
        return cls(
            o2t_network_connection_id=o2t_id,
            t2o_network_connection_id=t2o_id,
            connection_serial_number=serial,
            originator_vendor_id=vendor,
            originator_serial_number=originator_serial,
            o2t_api=o2t_api,
            t2o_api=t2o_api,
            application_reply=reply,
        )