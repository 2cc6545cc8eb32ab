import struct

import pytest

from eipscan.codec import DecodeError
from eipscan.epath import EPath
from eipscan.message_router import (
    GeneralStatusCodes,
    MessageRouterResponse,
    Router,
    ServiceCodes,
)
from eipscan.objects import BaseObject, IdentityObject
from eipscan.values import CipRevision, CipShortString


def _identity_data(name="Sample Device"):
    return (
        struct.pack("<HHH", 342, 12, 0x2A)
        + CipRevision(2, 3).pack()
        + struct.pack("<HI", 0x0030, 0xDEADBEEF)
        + CipShortString(name).pack()
    )


class FakeRouter:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def send_request(self, si, service, path, data=b""):
        self.calls.append((si, service, path, bytes(data)))
        return self.response


class FakeSession:
    def __init__(self, reply):
        self.reply = reply
        self.sent = []

    def send_unconnected(self, payload):
        self.sent.append(payload)
        return self.reply


def test_base_object_ids():
    obj = BaseObject(0x37, 5)
    assert obj.class_id == 0x37
    assert obj.instance_id == 5


def test_identity_object_defaults():
    identity = IdentityObject(3)
    assert identity.class_id == IdentityObject.CLASS_ID == 0x01
    assert identity.instance_id == 3
    assert identity.vendor_id == 0
    assert identity.device_type == 0
    assert identity.product_code == 0
    assert identity.revision == CipRevision(0, 0)
    assert identity.status == 0
    assert identity.serial_number == 0
    assert identity.product_name == ""


def test_identity_object_attributes_are_settable():
    identity = IdentityObject(1)
    identity.vendor_id = 342
    identity.product_name = "Pump"
    identity.revision = CipRevision(1, 4)
    assert identity.vendor_id == 342
    assert identity.product_name == "Pump"
    assert str(identity.revision) == "1.4"


def test_identity_product_name_too_long_raises():
    identity = IdentityObject(1)
    identity.product_name = "x" * 255
    assert identity.product_name == "x" * 255
    with pytest.raises(ValueError):
        identity.product_name = "y" * 256
    assert identity.product_name == "x" * 255


def test_identity_read_decodes_all_attributes():
    router = FakeRouter(MessageRouterResponse(data=_identity_data()))
    session = object()
    identity = IdentityObject.read(7, session, router)

    assert identity.instance_id == 7
    assert identity.vendor_id == 342
    assert identity.device_type == 12
    assert identity.product_code == 0x2A
    assert identity.revision == CipRevision(2, 3)
    assert identity.status == 0x0030
    assert identity.serial_number == 0xDEADBEEF
    assert identity.product_name == "Sample Device"

    [(si, service, path, data)] = router.calls
    assert si is session
    assert service == ServiceCodes.GET_ATTRIBUTE_ALL
    assert path == EPath(IdentityObject.CLASS_ID, 1)
    assert data == b""


def test_identity_read_failure_raises():
    response = MessageRouterResponse(
        general_status_code=GeneralStatusCodes.SERVICE_NOT_SUPPORTED,
        additional_status=(0x0001,),
    )
    with pytest.raises(RuntimeError, match="Failed to read all attributes"):
        IdentityObject.read(1, object(), FakeRouter(response))


def test_identity_read_short_data_raises():
    response = MessageRouterResponse(data=_identity_data()[:7])
    with pytest.raises(DecodeError, match="Not enough data"):
        IdentityObject.read(1, object(), FakeRouter(response))


def test_identity_read_through_router_and_session():
    reply = bytes((0x81, 0, 0, 0)) + _identity_data("Valve")
    session = FakeSession(reply)
    identity = IdentityObject.read(1, session, Router())
    assert identity.product_name == "Valve"
    assert identity.vendor_id == 342
    [payload] = session.sent
    assert payload[0] == ServiceCodes.GET_ATTRIBUTE_ALL
    assert payload[2:] == EPath(IdentityObject.CLASS_ID, 1).pack()