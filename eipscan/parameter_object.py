"""Parameter Object (0x0F): a device parameter with optional scaling."""

from __future__ import annotations

import enum
import logging

from .codec import CipDataTypes, DecodeError, Reader, pack_value, unpack_value
from .epath import EPath
from .message_router import (
    GeneralStatusCodes,
    Router,
    ServiceCodes,
    log_general_and_additional_status,
)
from .objects import BaseObject
from .values import read_short_string

logger = logging.getLogger(__name__)


class _Attribute(enum.IntEnum):
    VALUE = 1
    LINK_PATH_SIZE = 2
    DESCRIPTOR = 4
    DATA_TYPE = 5
    DATA_SIZE = 6
    NAME_STRING = 7
    UNIT_STRING = 8
    HELP_STRING = 9
    MIN_VALUE = 10
    MAX_VALUE = 11
    DEFAULT_VALUE = 12
    SCALING_MULTIPLIER = 13
    SCALING_DIVISOR = 14
    SCALING_BASE = 15
    SCALING_OFFSET = 16


_SUPPORTS_SCALING = 1 << 2
_READ_ONLY = 1 << 4

# Scaling attributes (13..16) plus the link and reserved attributes that
# precede the precision in a full Get_Attribute_All reply.
_SKIPPED_BEFORE_PRECISION = 16


def _as_data_type(code: int):
    try:
        return CipDataTypes(code)
    except ValueError:
        return code


class ParameterObject(BaseObject):
    """A parameter instance; values are kept as raw bytes and decoded on demand."""

    CLASS_ID = 0x0F

    def __init__(self, instance_id, full_attributes, type_size):
        super().__init__(self.CLASS_ID, instance_id)
        self._has_full_attributes = bool(full_attributes)
        self.is_scalable = False
        self.is_read_only = False
        self._parameter = 0
        self._value = bytes(type_size)
        self.type = CipDataTypes.ANY
        self.name = ""
        self.units = ""
        self.help = ""
        self._min_value = bytes(type_size)
        self._max_value = bytes(type_size)
        self._default_value = bytes(type_size)
        self.scaling_multiplier = 1
        self.scaling_divisor = 1
        self.scaling_base = 1
        self.scaling_offset = 0
        self.precision = 0
        self._message_router = Router()

    @classmethod
    def read(cls, instance_id, full_attributes, si, message_router=None) -> "ParameterObject":
        """Create an instance and read its attributes from the device."""
        router = message_router if message_router is not None else Router()
        logger.debug("Read data from parameter ID=%s", instance_id)

        response = router.send_request(
            si,
            ServiceCodes.GET_ATTRIBUTE_SINGLE,
            EPath(cls.CLASS_ID, instance_id, _Attribute.DATA_SIZE),
        )
        if response.general_status_code != GeneralStatusCodes.SUCCESS:
            log_general_and_additional_status(response)
            raise RuntimeError("Failed to read data size of the parameter")
        try:
            data_size = Reader(response.data).uint8()
        except DecodeError as exc:
            raise DecodeError("Not enough data in the response") from exc

        parameter = cls(instance_id, full_attributes, data_size)
        parameter._message_router = router

        response = router.send_request(
            si, ServiceCodes.GET_ATTRIBUTE_ALL, EPath(cls.CLASS_ID, instance_id)
        )
        if response.general_status_code != GeneralStatusCodes.SUCCESS:
            log_general_and_additional_status(response)
            raise RuntimeError("Failed to read all attributes")

        reader = Reader(response.data)
        try:
            parameter._value = reader.take(data_size)
            reader.take(reader.uint8())  # link path
            descriptor = reader.uint16()
            parameter.type = _as_data_type(reader.uint8())

            parameter._parameter = instance_id
            parameter.is_scalable = bool(descriptor & _SUPPORTS_SCALING)
            parameter.is_read_only = bool(descriptor & _READ_ONLY)
            logger.debug(
                "Parameter object ID=%s has descriptor=0x%x scalable=%s readonly=%s",
                instance_id,
                descriptor,
                parameter.is_scalable,
                parameter.is_read_only,
            )

            if parameter._has_full_attributes:
                reader.take(1)  # data size, already known
                parameter.name = str(read_short_string(reader))
                parameter.units = str(read_short_string(reader))
                parameter.help = str(read_short_string(reader))
                parameter._min_value = reader.take(data_size)
                parameter._max_value = reader.take(data_size)
                parameter._default_value = reader.take(data_size)

                if parameter.is_scalable:
                    # The scaling attributes are read one by one below.
                    reader.take(_SKIPPED_BEFORE_PRECISION)
                    parameter.precision = reader.uint8()
                    parameter._read_scaling(si)
        except DecodeError as exc:
            raise DecodeError("Not enough data in the response") from exc

        logger.debug(
            "Read Parameter Object ID=%s ValueSize=%d ValueType=0x%x Name=%s",
            instance_id,
            len(parameter._value),
            int(parameter.type),
            parameter.name,
        )
        return parameter

    def _read_scaling(self, si) -> None:
        chunks = []
        for attribute in (
            _Attribute.SCALING_MULTIPLIER,
            _Attribute.SCALING_DIVISOR,
            _Attribute.SCALING_BASE,
            _Attribute.SCALING_OFFSET,
        ):
            response = self._message_router.send_request(
                si,
                ServiceCodes.GET_ATTRIBUTE_SINGLE,
                EPath(self.CLASS_ID, self.instance_id, attribute),
            )
            if response.general_status_code != GeneralStatusCodes.SUCCESS:
                log_general_and_additional_status(response)
                raise RuntimeError(f"Failed to read value of attribute={int(attribute)}")
            chunks.append(response.data)

        reader = Reader(b"".join(chunks))
        self.scaling_multiplier = reader.uint16()
        self.scaling_divisor = reader.uint16()
        self.scaling_base = reader.uint16()
        self.scaling_offset = reader.int16()

    def update_value(self, si) -> None:
        """Read the current value of the parameter from the device."""
        response = self._message_router.send_request(
            si,
            ServiceCodes.GET_ATTRIBUTE_SINGLE,
            EPath(self.CLASS_ID, self.instance_id, _Attribute.VALUE),
        )
        if response.general_status_code != GeneralStatusCodes.SUCCESS:
            log_general_and_additional_status(response)
            raise RuntimeError("Failed to read value")
        try:
            self._value = Reader(response.data).take(len(self._value))
        except DecodeError as exc:
            raise DecodeError("Not enough data in the response") from exc

    @property
    def has_full_attributes(self) -> bool:
        return self._has_full_attributes

    @property
    def parameter(self) -> int:
        """The parameter number (instance id) once read from the device."""
        return self._parameter

    @property
    def value(self) -> bytes:
        return self._value

    @property
    def min_value(self) -> bytes:
        return self._min_value

    @property
    def max_value(self) -> bytes:
        return self._max_value

    @property
    def default_value(self) -> bytes:
        return self._default_value

    def actual_to_eng_value(self, actual_value) -> float:
        """Scale an actual value to engineering units if the parameter is scalable."""
        if not self.is_scalable:
            return actual_value
        return (
            (actual_value + self.scaling_offset) * self.scaling_multiplier * self.scaling_base
        ) / (self.scaling_divisor * 10.0 ** self.precision)

    def eng_to_actual_value(self, eng_value) -> float:
        """Convert a value in engineering units back to an actual value."""
        if not self.is_scalable:
            return eng_value
        return (eng_value * self.scaling_divisor * 10.0 ** self.precision) / (
            self.scaling_multiplier * self.scaling_base
        ) - self.scaling_offset

    def get_actual_value(self, data_type):
        return unpack_value(self._value, data_type)

    def get_eng_value(self, data_type) -> float:
        return self.actual_to_eng_value(float(unpack_value(self._value, data_type)))

    def get_min_value(self, data_type):
        return unpack_value(self._min_value, data_type)

    def get_eng_min_value(self, data_type) -> float:
        return self.actual_to_eng_value(float(unpack_value(self._min_value, data_type)))

    def set_eng_min_value(self, value, data_type) -> None:
        self._min_value = pack_value(self.eng_to_actual_value(value), data_type)

    def get_max_value(self, data_type):
        return unpack_value(self._max_value, data_type)

    def get_eng_max_value(self, data_type) -> float:
        return self.actual_to_eng_value(float(unpack_value(self._max_value, data_type)))

    def set_eng_max_value(self, value, data_type) -> None:
        self._max_value = pack_value(self.eng_to_actual_value(value), data_type)

    def get_default_value(self, data_type):
        return unpack_value(self._default_value, data_type)

    def get_eng_default_value(self, data_type) -> float:
        return self.actual_to_eng_value(float(unpack_value(self._default_value, data_type)))

    def set_eng_default_value(self, value, data_type) -> None:
        self._default_value = pack_value(self.eng_to_actual_value(value), data_type)