# rosserial

A pure-Python client for the rosserial protocol, with no dependencies outside the
standard library. It gives you:

- message classes that serialize to, and parse from, the little-endian rosserial wire
  format;
- request/response pairs for a handful of services;
- a `NodeHandle` that frames outgoing messages, runs the incoming-frame state machine,
  negotiates topics with the host, keeps its clock in step with the host and sends log
  messages;
- a `TcpHardware` transport that talks to a rosserial server over TCP (127.0.0.1, port
  11411 by default).

## Installation

```
pip install .
```

## Messages

Every message is a dataclass deriving from `rosserial.message.Message`, with the class
attributes `type_name` and `md5` and the methods:

- `serialize()` – the wire bytes;
- `Message.deserialize(data, offset=0)` – reads a message starting at `offset` in a
  longer buffer and returns `(message, end_offset)`;
- `Message.from_bytes(data)` – reads a message that fills `data` exactly, raising
  `ValueError` on trailing bytes.

A buffer that is too short, or a value that does not fit its wire type, raises
`ValueError`. Times and durations are `rosserial.message.RosTime(sec, nsec)` values;
`RosTime.normalized()` folds whole seconds out of `nsec`.

```python
from rosserial.std_msgs import Int16
from rosserial.geometry_msgs import Point32

raw = Int16(data=-2).serialize()          # b"\xfe\xff"
assert Int16.from_bytes(raw).data == -2

point = Point32(x=1.0, y=2.0, z=3.0)
assert Point32.from_bytes(point.serialize()) == point
```

The message types available:

| Module | Classes |
| --- | --- |
| `rosserial.std_msgs` | `Byte`, `ColorRGBA`, `Int16`, `Time`, `UInt64` |
| `rosserial.rosserial_msgs` | `Log`, `TopicInfo`, and the enums `LogLevel`, `TopicId` |
| `rosserial.geometry_msgs` | `Point32` |
| `rosserial.sensor_msgs` | `RegionOfInterest` |
| `rosserial.visualization_msgs` | `MenuEntry`, and the enum `MenuCommandType` |
| `rosserial.actionlib` | `TestRequestFeedback`, `TestRequestResult`, `TwoIntsResult` |
| `rosserial.misc_msgs` | `KeyValue`, `StrParameter`, `GetMapGoal`, `LookupTransformFeedback` |
| `rosserial.trajectory_msgs` | `JointTrajectoryPoint` |

`rosserial.services` holds the services `AddDiagnostics`, `NodeletUnload`, `FrameGraph`,
`DemuxAdd`, `DemuxSelect` and `MuxDelete`. Each is a `Service` subclass whose `Request`
and `Response` attributes are message classes (for example `DemuxSelect.Request` is
`DemuxSelectRequest`), and whose `type_name` both messages share.

## Frames

`rosserial.node_handle.encode_frame(topic_id, payload)` wraps serialized bytes in a
protocol frame: `0xff`, the protocol version byte `0xfe`, the payload length (low byte,
high byte), the length checksum, the topic id (low, high), the payload and the checksum
over topic id and payload. Payloads over 65535 bytes raise `ValueError`.

## A node over TCP

```python
from rosserial.node_handle import NodeHandle, Publisher, Subscriber
from rosserial.std_msgs import Byte
from rosserial.tcp_hardware import TcpHardware

hardware = TcpHardware()
hardware.set_connection("127.0.0.1", 11411)

nh = NodeHandle(hardware)
nh.init_node()

chatter = Publisher("chatter", Byte)
nh.advertise(chatter)
nh.subscribe(Subscriber("toggle", Byte, lambda msg: print("got", msg.data)))

while True:
    chatter.publish(Byte(data=1))
    nh.loginfo("tick")
    nh.spin_once()
```

`NodeHandle(hardware, *, max_subscribers=25, max_publishers=25, input_size=512,
output_size=512)` accepts any object with `init(*args)`, `read()` (next byte, or -1 when
none is waiting), `write(data)` and `time()` (milliseconds as an unsigned 32-bit counter).

- `advertise(publisher)` and `subscribe(subscriber)` return `False` when every slot is
  taken. Subscribers get ids from 100; publishers from 100 plus `max_subscribers`.
- `spin_once()` reads every waiting byte and returns a `SpinResult`: `OK`, `ERR` after
  answering the host's topic request, or `TIMEOUT` when the limit set with
  `set_spin_timeout(ms)` is exceeded or no frame start is seen for five seconds.
- `connected()` tells whether topic negotiation with the host has finished.
- `publish(topic_id, msg)` returns the frame length, 0 when a user topic is sent before
  the link is connected, or -1 (after logging an error) when the frame would not fit
  `output_size`. `Publisher.publish(msg)` does the same for its own topic and raises
  `RuntimeError` if the publisher was never advertised.
- `now()` and `set_now(time)` give and set the clock, which incoming time messages keep
  in step with the host; `request_sync_time()` asks the host for its time.
- `logdebug`, `loginfo`, `logwarn`, `logerror` and `logfatal` send a `Log` message.

`TcpHardware(server="127.0.0.1", port=11411, *, timeout=0.2)` connects on `init()`,
raising `OSError` if the host cannot be reached; `read()` returns -1 when no byte arrives
within the timeout. It is a context manager and `close()` closes the connection.

## What this package does not do

- The node handle stores the host's answer to a parameter request but offers no call
  to fetch parameters.
- There are no service server or service client helpers; services are available only as
  request/response message pairs.
- Only the message types listed above exist; there are none with headers, poses or
  other nested standard types.
- There is no command-line program and no serial-port transport; TCP is the only link
  provided.

## Tests

```
pip install .[test]
pytest
```