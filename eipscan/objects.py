"""CIP objects: the common base and the Identity Object (0x01)."""

from __future__ import annotations

from .codec import DecodeError, Reader
from .epath import EPath
from .message_router import (
    GeneralStatusCodes,
    Router,
    ServiceCodes,
    log_general_and_additional_status,
)
from .values import CipRevision, CipShortString, read_revision, read_short_string


class BaseObject:
    """An instance of a CIP class."""

    def __init__(self, class_id: int, instance_id: int):
        self._class_id = class_id
        self._instance_id = instance_id

    @property
    def class_id(self) -> int:
        return self._class_id

    @property
    def instance_id(self) -> int:
        return self._instance_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(class_id={self._class_id}, instance_id={self._instance_id})"


class IdentityObject(BaseObject):
    """Identity Object holding the device's identification attributes."""

    CLASS_ID = 0x01

    def __init__(self, instance_id: int):
        super().__init__(self.CLASS_ID, instance_id)
        self.vendor_id = 0
        self.device_type = 0
        self.product_code = 0
        self.revision = CipRevision(0, 0)
        self.status = 0
        self.serial_number = 0
        self._product_name = CipShortString("")

    @property
    def product_name(self) -> str:
        return str(self._product_name)

    @product_name.setter
    def product_name(self, value: str) -> None:
        self._product_name = CipShortString(value)

    @classmethod
    def read(cls, instance_id, si, message_router=None) -> "IdentityObject":
        """Create an instance and read all its attributes from the device."""
        router = message_router if message_router is not None else Router()
        response = router.send_request(
            si, ServiceCodes.GET_ATTRIBUTE_ALL, EPath(cls.CLASS_ID, 1)
        )
        if response.general_status_code != GeneralStatusCodes.SUCCESS:
            log_general_and_additional_status(response)
            raise RuntimeError("Failed to read all attributes")

        identity = cls(instance_id)
        reader = Reader(response.data)
        try:
            identity.vendor_id = reader.uint16()
            identity.device_type = reader.uint16()
            identity.product_code = reader.uint16()
            identity.revision = read_revision(reader)
            identity.status = reader.uint16()
            identity.serial_number = reader.uint32()
            identity._product_name = read_short_string(reader)
        except DecodeError as exc:
            raise DecodeError("Not enough data in the response") from exc
        return identity