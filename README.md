# eipscan

Building blocks for an EtherNet/IP scanner. The package has encoders and
decoders for the Common Industrial Protocol (CIP) messages that a scanner
exchanges with an adapter, and models of two standard CIP objects. It has no
dependencies outside the standard library.

## Modules

- `eipscan.codec`
  - `Reader`, a sequential little-endian reader. It has `uint8()`,
    `uint16()`, `int16()`, `uint32()`, `take(size)`, `rest()`,
    `remaining()` and the `position` property.
  - `DecodeError`, a `ValueError` raised when data ends before a value is
    complete.
  - `CipDataTypes`, the CIP data type codes.
  - `pack_value(value, data_type)` and `unpack_value(data, data_type)` for the
    fixed-size types. A type with no fixed-size encoding, such as `STRING`,
    raises `ValueError`.
- `eipscan.values`
  - `CipRevision(major, minor)`, which prints as `"major.minor"`.
  - `CipShortString`, with a one-byte length prefix, and `CipString`, with a
    two-byte length prefix. Both have `pack()`.
  - `read_revision`, `read_short_string` and `read_string`, which decode these
    values from a `Reader`.
- `eipscan.epath`
  - `EPath(class_id, object_id, attribute_id)`, a logical path of one to three
    segments.
  - `pack(use_8_bit_path_segments)` encodes the path in 16-bit segments (the
    default) or in 8-bit segments.
  - `size_in_words()` gives the encoded size.
  - `EPath.from_padded(data)` decodes a padded path.
- `eipscan.message_router`
  - `ServiceCodes` and `GeneralStatusCodes`.
  - `MessageRouterRequest` and `MessageRouterResponse`.
    `MessageRouterResponse.from_bytes` raises `ValueError` for a reply that is
    shorter than 4 bytes or that has a wrong additional status size.
  - `Router`, which packs a request and hands it to a session.
  - `log_general_and_additional_status(response)`.
- `eipscan.connection_params`
  - `ConnectionParameters`, `NetworkConnectionParams` and the field enums
    `RedundantOwner`, `ConnectionType`, `Priority` and `SizeType`.
  - `NetworkConnectionParametersBuilder(value, large)`, which composes and
    decodes the network connection parameters. It uses the 16-bit layout by
    default and the 32-bit layout when `large=True`.
- `eipscan.forward_open`
  - `ForwardOpenRequest`, `LargeForwardOpenRequest` and `ForwardCloseRequest`,
    each with `pack()`.
  - `ForwardOpenResponse.from_bytes`.
- `eipscan.objects`
  - `BaseObject`.
  - `IdentityObject` (class 0x01). `IdentityObject.read(instance_id, si,
    message_router)` reads all of its attributes.
- `eipscan.parameter_object`
  - `ParameterObject` (class 0x0F). `ParameterObject.read(instance_id,
    full_attributes, si, message_router)` reads a parameter, and
    `update_value(si)` reads its value again.
  - Accessors for the actual, minimum, maximum and default values, each typed
    by a `CipDataTypes` code, together with their engineering-unit
    counterparts.

## Examples

Building a request to read the vendor ID of a device:

```python
from eipscan.epath import EPath
from eipscan.message_router import MessageRouterRequest, ServiceCodes

request = MessageRouterRequest(ServiceCodes.GET_ATTRIBUTE_SINGLE, EPath(0x01, 1, 1))
payload = request.pack()
```

Decoding a reply:

```python
from eipscan.message_router import GeneralStatusCodes, MessageRouterResponse

response = MessageRouterResponse.from_bytes(raw_bytes)
if response.general_status_code == GeneralStatusCodes.SUCCESS:
    print(response.data)
```

Composing network connection parameters:

```python
from eipscan.connection_params import (
    ConnectionType, NetworkConnectionParametersBuilder, Priority,
)

value = (
    NetworkConnectionParametersBuilder()
    .set_connection_type(ConnectionType.P2P)
    .set_priority(Priority.SCHEDULED)
    .set_connection_size(32)
    .build()
)
```

Scaling a parameter value. The engineering value is computed as
`((actual + offset) * multiplier * base) / (divisor * 10**precision)`, and
only when `is_scalable` is set:

```python
from eipscan.codec import CipDataTypes
from eipscan.parameter_object import ParameterObject

parameter = ParameterObject(1, True, 2)
parameter.is_scalable = True
parameter.precision = 1
parameter.actual_to_eng_value(2040)   # 204.0
parameter.set_eng_max_value(50.0, CipDataTypes.UINT)
parameter.get_max_value(CipDataTypes.UINT)   # 500
```

## Sessions

`Router.send_request(si, service, path, data)` does not open any connection
itself. The session `si` is any object with a method
`send_unconnected(payload)`. That method takes the packed Message Router
request as `bytes` and returns the Message Router reply as `bytes`.
`IdentityObject.read` and `ParameterObject.read` send their requests in the
same way.

## What this package does not do

The package has no network code and no command-line program. It does not:

- register EtherNet/IP sessions or build encapsulation packets;
- open or run implicit I/O connections;
- discover devices on a network;
- transfer files from a device.

It provides the message and object encodings that such code needs, and
expects the caller to supply the transport.

## Tests

```
pip install -e .[test]
pytest
```