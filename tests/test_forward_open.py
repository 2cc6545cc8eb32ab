import struct

import pytest

from eipscan.codec import DecodeError, Reader
from eipscan.connection_params import ConnectionParameters
from eipscan.forward_open import (
    ForwardCloseRequest,
    ForwardOpenRequest,
    ForwardOpenResponse,
    LargeForwardOpenRequest,
)

PATH = bytes([0x20, 0x04, 0x24, 151, 0x2C, 150, 0x2C, 100])


def _params(**overrides):
    values = dict(
        priority_time_tick=3,
        timeout_ticks=7,
        o2t_network_connection_id=0x11223344,
        t2o_network_connection_id=0x55667788,
        connection_serial_number=42,
        originator_vendor_id=342,
        originator_serial_number=0x12345,
        connection_timeout_multiplier=2,
        o2t_rpi=1000000,
        o2t_network_connection_params=0x4820,
        t2o_rpi=500000,
        t2o_network_connection_params=0x4820,
        transport_type_trigger=1,
        connection_path_size=4,
        connection_path=PATH,
    )
    values.update(overrides)
    return ConnectionParameters(**values)


def _read_header(reader, ncp_reader):
    fields = [
        reader.uint8(),
        reader.uint8(),
        reader.uint32(),
        reader.uint32(),
        reader.uint16(),
        reader.uint16(),
        reader.uint32(),
        reader.uint8(),
    ]
    assert reader.take(3) == b"\x00\x00\x00"
    fields += [
        reader.uint32(),
        ncp_reader(),
        reader.uint32(),
        ncp_reader(),
        reader.uint8(),
        reader.uint8(),
    ]
    return fields


def _expected_fields(params, mask):
    return [
        params.priority_time_tick,
        params.timeout_ticks,
        params.o2t_network_connection_id,
        params.t2o_network_connection_id,
        params.connection_serial_number,
        params.originator_vendor_id,
        params.originator_serial_number,
        params.connection_timeout_multiplier,
        params.o2t_rpi,
        params.o2t_network_connection_params & mask,
        params.t2o_rpi,
        params.t2o_network_connection_params & mask,
        params.transport_type_trigger,
        params.connection_path_size,
    ]


def test_forward_open_layout():
    params = _params()
    packed = ForwardOpenRequest(params).pack()
    assert len(packed) == 36 + len(PATH)
    reader = Reader(packed)
    assert _read_header(reader, reader.uint16) == _expected_fields(params, 0xFFFF)
    assert reader.rest() == PATH


def test_forward_open_truncates_network_params_to_16_bits():
    params = _params(o2t_network_connection_params=0x12344820,
                     t2o_network_connection_params=0xABCD0042)
    reader = Reader(ForwardOpenRequest(params).pack())
    fields = _read_header(reader, reader.uint16)
    assert fields[9] == 0x4820
    assert fields[11] == 0x0042


def test_large_forward_open_layout():
    params = _params(o2t_network_connection_params=0x12344820)
    packed = LargeForwardOpenRequest(params).pack()
    assert len(packed) == 40 + len(PATH)
    reader = Reader(packed)
    fields = _read_header(reader, reader.uint32)
    assert fields == _expected_fields(params, 0xFFFFFFFF)
    assert fields[9] == 0x12344820
    assert reader.rest() == PATH


def test_header_sizes():
    without_path = _params(connection_path=b"", connection_path_size=0)
    assert len(ForwardOpenRequest(without_path).pack()) == ForwardOpenRequest.HEADER_SIZE == 36
    assert (
        len(LargeForwardOpenRequest(without_path).pack())
        == LargeForwardOpenRequest.HEADER_SIZE
        == 40
    )


def test_empty_parameters_pack_to_zero_header():
    assert ForwardOpenRequest(ConnectionParameters()).pack() == bytes(36)
    assert LargeForwardOpenRequest(ConnectionParameters()).pack() == bytes(40)


def test_forward_open_out_of_range_raises():
    with pytest.raises(ValueError):
        ForwardOpenRequest(_params(priority_time_tick=256)).pack()


def test_forward_close_layout():
    request = ForwardCloseRequest(
        connection_serial_number=42,
        originator_vendor_id=342,
        originator_serial_number=0x12345,
        connection_path=PATH,
    )
    reader = Reader(request.pack())
    assert reader.uint8() == 0
    assert reader.uint8() == 0
    assert reader.uint16() == 42
    assert reader.uint16() == 342
    assert reader.uint32() == 0x12345
    assert reader.uint8() == len(PATH) // 2
    assert reader.uint8() == 0
    assert reader.rest() == PATH


def test_forward_close_default_is_empty_header():
    assert ForwardCloseRequest().pack() == bytes(12)


def test_forward_close_odd_path_size_rounds_down():
    packed = ForwardCloseRequest(connection_path=b"\x20\x04\x24").pack()
    assert packed[10] == 1
    assert packed.endswith(b"\x20\x04\x24")


def _response_bytes(reply=b""):
    return struct.pack(
        "<IIHHIIIBB", 0x11, 0x22, 42, 342, 0x12345, 10000, 20000, len(reply) // 2, 0
    ) + reply


def test_forward_open_response_decodes_fields():
    response = ForwardOpenResponse.from_bytes(_response_bytes(b"\x01\x02\x03\x04"))
    assert response.o2t_network_connection_id == 0x11
    assert response.t2o_network_connection_id == 0x22
    assert response.connection_serial_number == 42
    assert response.originator_vendor_id == 342
    assert response.originator_serial_number == 0x12345
    assert response.o2t_api == 10000
    assert response.t2o_api == 20000
    assert response.application_reply == b"\x01\x02\x03\x04"
    assert response.application_reply_size == 2


def test_forward_open_response_without_reply():
    response = ForwardOpenResponse.from_bytes(_response_bytes())
    assert response.application_reply == b""
    assert response.application_reply_size == 0


def test_forward_open_response_truncated_raises():
    with pytest.raises(DecodeError):
        ForwardOpenResponse.from_bytes(_response_bytes()[:10])


def test_forward_open_response_short_reply_raises():
    data = _response_bytes(b"\x01\x02\x03\x04")[:-1]
    with pytest.raises(DecodeError):
        ForwardOpenResponse.from_bytes(data)