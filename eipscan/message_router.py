"""Explicit messaging: Message Router requests, responses and status codes."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from .codec import Reader
from .epath import EPath

logger = logging.getLogger(__name__)


class GeneralStatusCodes(enum.IntEnum):
    """General status codes of a Message Router response."""

    SUCCESS = 0x00
    CONNECTION_FAILURE = 0x01
    RESOURCE_UNAVAILABLE = 0x02
    INVALID_PARAMETER_VALUE = 0x03
    PATH_SEGMENT_ERROR = 0x04
    PATH_DESTINATION_UNKNOWN = 0x05
    PARTIAL_TRANSFER = 0x06
    CONNECTION_LOST = 0x07
    SERVICE_NOT_SUPPORTED = 0x08
    INVALID_ATTRIBUTE_VALUE = 0x09
    ATTRIBUTE_LIST_ERROR = 0x0A
    ALREADY_IN_REQUESTED_MODE_OR_STATE = 0x0B
    OBJECT_STATE_CONFLICT = 0x0C
    OBJECT_ALREADY_EXISTS = 0x0D
    ATTRIBUTE_NOT_SETTABLE = 0x0E
    PRIVILEGE_VIOLATION = 0x0F
    DEVICE_STATE_CONFLICT = 0x10
    REPLY_DATA_TOO_LARGE = 0x11
    FRAGMENTATION_OF_PRIMITIVE_VALUE = 0x12
    NOT_ENOUGH_DATA = 0x13
    ATTRIBUTE_NOT_SUPPORTED = 0x14
    TOO_MUCH_DATA = 0x15
    OBJECT_DOES_NOT_EXIST = 0x16
    SVCFRAG_SEQNC_NOT_IN_PROGRESS = 0x17
    NO_STORED_ATTRIBUTE_DATA = 0x18
    STORE_OPERATION_FAILURE = 0x19
    ROUTING_FAILURE_REQUEST_SIZE = 0x1A
    ROUTING_FAILURE_RESPONSE_SIZE = 0x1B
    MISSING_ATTRIBUTE_LIST_ENTRY = 0x1C
    INVALID_ATTRIBUTE_LIST = 0x1D
    EMBEDDED_SERVICE_ERROR = 0x1E
    VENDOR_SPECIFIC = 0x1F
    INVALID_PARAMETER = 0x20
    WRITE_ONCE_WRITTEN = 0x21
    INVALID_REPLY_RECEIVED = 0x22
    KEY_FAILURE_IN_PATH = 0x25
    PATH_SIZE_INVALID = 0x26
    UNEXPECTED_ATTRIBUTE = 0x27
    INVALID_MEMBER_ID = 0x28
    MEMBER_NOT_SETTABLE = 0x29


class ServiceCodes(enum.IntEnum):
    """Common CIP service codes."""

    NONE = 0x00
    GET_ATTRIBUTE_ALL = 0x01
    SET_ATTRIBUTE_ALL = 0x02
    GET_ATTRIBUTE_LIST = 0x03
    SET_ATTRIBUTE_LIST = 0x04
    RESET = 0x05
    START = 0x06
    STOP = 0x07
    CREATE_OBJECT_INSTANCE = 0x08
    DELETE_OBJECT_INSTANCE = 0x09
    MULTIPLE_SERVICE_PACKET = 0x0A
    APPLY_ATTRIBUTES = 0x0D
    GET_ATTRIBUTE_SINGLE = 0x0E
    SET_ATTRIBUTE_SINGLE = 0x10
    FIND_NEXT_OBJECT_INSTANCE = 0x11
    ERROR_RESPONSE = 0x14
    RESTORE = 0x15
    SAVE = 0x16
    NO_OPERATION = 0x17
    GET_MEMBER = 0x18
    SET_MEMBER = 0x19
    INSERT_MEMBER = 0x1A
    REMOVE_MEMBER = 0x1B
    GROUP_SYNC = 0x1C


def _as_enum(enum_type, value: int):
    try:
        return enum_type(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class MessageRouterRequest:
    """A service call addressed to an object by a logical path."""

    service_code: int
    path: EPath
    data: bytes = b""
    use_8_bit_path_segments: bool = False

    def pack(self) -> bytes:
        words = self.path.size_in_words(self.use_8_bit_path_segments)
        return (
            bytes((int(self.service_code) & 0xFF, words & 0xFF))
            + self.path.pack(self.use_8_bit_path_segments)
            + bytes(self.data)
        )


@dataclass
class MessageRouterResponse:
    """The decoded reply of the Message Router."""

    service_code: int = ServiceCodes.GET_ATTRIBUTE_ALL
    general_status_code: int = GeneralStatusCodes.SUCCESS
    additional_status: tuple = ()
    data: bytes = b""
    additional_packet_items: tuple = field(default_factory=tuple)

    @classmethod
    def from_bytes(cls, data) -> "MessageRouterResponse":
        """Decode a reply; malformed replies raise ValueError."""
        data = bytes(data)
        if len(data) < 4:
            raise ValueError("Message Router response must have at least 4 bytes")

        reader = Reader(data)
        service_code = reader.uint8()
        reader.uint8()  # reserved
        general_status = reader.uint8()
        additional_size = reader.uint8()

        if additional_size * 2 > len(data) - 4:
            raise ValueError("Additional status has wrong size")

        additional = tuple(reader.uint16() for _ in range(additional_size))
        return cls(
            service_code=_as_enum(ServiceCodes, service_code),
            general_status_code=_as_enum(GeneralStatusCodes, general_status),
            additional_status=additional,
            data=reader.rest(),
        )


class Router:
    """Sends explicit requests through a session.

    The session object must provide ``send_unconnected(payload)`` that
    delivers an encoded Message Router request and returns the encoded reply.
    """

    USE_8_BIT_PATH_SEGMENTS = True

    def __init__(self, use_8_bit_path_segments: bool = False):
        self.use_8_bit_path_segments = use_8_bit_path_segments

    def send_request(self, si, service, path, data=b"") -> MessageRouterResponse:
        if si is None:
            raise ValueError("a session is required to send a request")
        logger.info("Send request: service=0x%x epath=%s", int(service), path)
        request = MessageRouterRequest(
            int(service), path, bytes(data), self.use_8_bit_path_segments
        )
        reply = si.send_unconnected(request.pack())
        return MessageRouterResponse.from_bytes(reply)


def log_general_and_additional_status(response: MessageRouterResponse) -> None:
    """Log the general and additional statuses of a failed response."""
    statuses = "".join(f"[0x{status:x}]" for status in response.additional_status)
    logger.error(
        "Message Router error=0x%x additional statuses %s",
        int(response.general_status_code),
        statuses,
    )