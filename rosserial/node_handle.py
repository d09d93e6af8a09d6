"""Node handle: frames messages onto a byte link and dispatches incoming frames.

The hardware object handed to :class:`NodeHandle` provides ``init(*args)``,
``read()`` returning the next byte (0-255) or -1 when none is waiting,
``write(data)`` and ``time()`` returning milliseconds as an unsigned
32-bit counter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Optional, Protocol

from .message import Message, RosTime
from .rosserial_msgs import Log, LogLevel, TopicId, TopicInfo
from .std_msgs import Time

SYNC_SECONDS = 5
PROTOCOL_VER1 = 0xFF
PROTOCOL_VER2 = 0xFE
PROTOCOL_VER = PROTOCOL_VER2
SERIAL_MSG_TIMEOUT = 20
FIRST_USER_TOPIC = 100

_MASK = 0xFFFFFFFF
_NSEC_PER_SEC = 1_000_000_000
_NSEC_PER_MSEC = 1_000_000
_FRAME_OVERHEAD = 8
_DROPPED_MESSAGE = "Message from device dropped: message larger than buffer."


class Hardware(Protocol):
    """The byte link a node handle talks over."""

    def init(self, *args: Any) -> None: ...

    def read(self) -> int: ...

    def write(self, data: bytes) -> None: ...

    def time(self) -> int: ...


class SpinResult(IntEnum):
    """Outcome of one call to :meth:`NodeHandle.spin_once`."""

    OK = 0
    ERR = -1
    TIMEOUT = -2


class _Mode(IntEnum):
    FIRST_FF = 0
    PROTOCOL_VER = 1
    SIZE_L = 2
    SIZE_H = 3
    SIZE_CHECKSUM = 4
    TOPIC_L = 5
    TOPIC_H = 6
    MESSAGE = 7
    MSG_CHECKSUM = 8


def encode_frame(topic_id: int, payload: bytes) -> bytes:
    """Wrap a serialized message in a protocol frame with both checksums."""
    payload = bytes(payload)
    length = len(payload)
    if length > 0xFFFF:
        raise ValueError(f"payload of {length} bytes does not fit a frame")
    size_lo, size_hi = length & 0xFF, length >> 8
    topic = topic_id & 0xFFFF
    body = bytes((topic & 0xFF, topic >> 8)) + payload
    header = bytes((0xFF, PROTOCOL_VER, size_lo, size_hi, 255 - (size_lo + size_hi) % 256))
    return header + body + bytes((255 - sum(body) % 256,))


@dataclass(eq=False)
class Publisher:
    """A topic this node sends messages of ``message_type`` on."""

    topic: str
    message_type: type[Message]
    endpoint: int = TopicId.PUBLISHER
    id: int = field(default=0, init=False)
    node_handle: Optional["NodeHandle"] = field(default=None, init=False, repr=False)

    def publish(self, msg: Message) -> int:
        """Send ``msg``; returns the frame length, 0 if not connected, -1 if dropped."""
        if self.node_handle is None:
            raise RuntimeError(f"publisher for {self.topic!r} has not been advertised")
        return self.node_handle.publish(self.id, msg)


@dataclass(eq=False)
class Subscriber:
    """A topic this node receives messages of ``message_type`` from."""

    topic: str
    message_type: type[Message]
    callback: Callable[[Message], Any]
    endpoint: int = TopicId.SUBSCRIBER
    id: int = field(default=0, init=False)

    def handle(self, data: bytes) -> None:
        """Decode an incoming payload and pass the message to the callback."""
        msg, _ = self.message_type.deserialize(data, 0)
        self.callback(msg)


class NodeHandle:
    """Registers topics, frames outgoing messages and parses incoming ones."""

    def __init__(
        self,
        hardware: Hardware,
        *,
        max_subscribers: int = 25,
        max_publishers: int = 25,
        input_size: int = 512,
        output_size: int = 512,
    ) -> None:
        self._hardware = hardware
        self._max_subscribers = max_subscribers
        self._input_size = input_size
        self._output_size = output_size
        self._publishers: list[Optional[Publisher]] = [None] * max_publishers
        self._subscribers: list[Optional[Subscriber]] = [None] * max_subscribers

        self._rt_time = 0
        self._sec_offset = 0
        self._nsec_offset = 0
        self._spin_timeout = 0

        self._mode = _Mode.FIRST_FF
        self._remaining = 0
        self._topic = 0
        self._checksum = 0
        self._message = bytearray()
        self._configured = False

        self._last_sync_time = 0
        self._last_sync_receive_time = 0
        self._last_msg_timeout_time = 0

        self._param_received = False
        self._param_response = b""
        self._reporting_drop = False

    @property
    def hardware(self) -> Hardware:
        return self._hardware

    def _reset_parser(self) -> None:
        self._mode = _Mode.FIRST_FF
        self._remaining = 0
        self._topic = 0
        self._message = bytearray()

    def init_node(self, port_name: Optional[str] = None) -> None:
        """Start the hardware link, optionally on a named port, and reset parsing."""
        if port_name is None:
            self._hardware.init()
        else:
            self._hardware.init(port_name)
        self._reset_parser()

    def set_spin_timeout(self, timeout: int) -> None:
        """Limit how many milliseconds one :meth:`spin_once` may work; 0 means no limit."""
        self._spin_timeout = timeout

    def spin_once(self) -> SpinResult:
        """Read all waiting bytes, handling every complete frame."""
        c_time = self._hardware.time()
        if (c_time - self._last_sync_receive_time) & _MASK > SYNC_SECONDS * 2200:
            self._configured = False

        if self._mode is not _Mode.FIRST_FF and c_time > self._last_msg_timeout_time:
            self._mode = _Mode.FIRST_FF

        while True:
            if self._spin_timeout > 0:
                if (self._hardware.time() - c_time) & _MASK > self._spin_timeout:
                    return SpinResult.TIMEOUT
            data = self._hardware.read()
            if data < 0:
                break
            result = self._consume(data, c_time)
            if result is not None:
                return result

        if self._configured and (c_time - self._last_sync_time) & _MASK > SYNC_SECONDS * 500:
            self.request_sync_time()
            self._last_sync_time = c_time

        return SpinResult.OK

    def _consume(self, data: int, c_time: int) -> Optional[SpinResult]:
        self._checksum += data
        mode = self._mode
        if mode is _Mode.MESSAGE:
            self._message.append(data)
            self._remaining -= 1
            if len(self._message) > self._input_size:
                self._mode = _Mode.FIRST_FF
            elif self._remaining == 0:
                self._mode = _Mode.MSG_CHECKSUM
        elif mode is _Mode.FIRST_FF:
            if data == 0xFF:
                self._mode = _Mode.PROTOCOL_VER
                self._last_msg_timeout_time = c_time + SERIAL_MSG_TIMEOUT
            elif (self._hardware.time() - c_time) & _MASK > SYNC_SECONDS * 1000:
                self._configured = False
                return SpinResult.TIMEOUT
        elif mode is _Mode.PROTOCOL_VER:
            if data == PROTOCOL_VER:
                self._mode = _Mode.SIZE_L
            else:
                self._mode = _Mode.FIRST_FF
                if not self._configured:
                    self.request_sync_time()
        elif mode is _Mode.SIZE_L:
            self._remaining = data
            self._message = bytearray()
            self._mode = _Mode.SIZE_H
            self._checksum = data
        elif mode is _Mode.SIZE_H:
            self._remaining += data << 8
            self._mode = _Mode.SIZE_CHECKSUM
        elif mode is _Mode.SIZE_CHECKSUM:
            ok = self._checksum % 256 == 255
            self._mode = _Mode.TOPIC_L if ok else _Mode.FIRST_FF
        elif mode is _Mode.TOPIC_L:
            self._topic = data
            self._mode = _Mode.TOPIC_H
            self._checksum = data
        elif mode is _Mode.TOPIC_H:
            self._topic += data << 8
            self._mode = _Mode.MESSAGE if self._remaining else _Mode.MSG_CHECKSUM
        elif mode is _Mode.MSG_CHECKSUM:
            self._mode = _Mode.FIRST_FF
            if self._checksum % 256 == 255:
                return self._dispatch(c_time)
        return None

    def _dispatch(self, c_time: int) -> Optional[SpinResult]:
        topic = self._topic
        payload = bytes(self._message)
        if topic == TopicId.PUBLISHER:
            self.request_sync_time()
            self.negotiate_topics()
            self._last_sync_time = c_time
            self._last_sync_receive_time = c_time
            return SpinResult.ERR
        if topic == TopicId.TIME:
            self.sync_time(payload)
        elif topic == TopicId.PARAMETER_REQUEST:
            self._param_response = payload
            self._param_received = True
        elif topic == TopicId.TX_STOP:
            self._configured = False
        else:
            index = topic - FIRST_USER_TOPIC
            if 0 <= index < len(self._subscribers):
                subscriber = self._subscribers[index]
                if subscriber is not None:
                    subscriber.handle(payload)
        return None

    def connected(self) -> bool:
        """Whether topics have been negotiated with the host."""
        return self._configured

    def request_sync_time(self) -> None:
        """Ask the host for the current time."""
        self.publish(TopicId.TIME, Time())
        self._rt_time = self._hardware.time()

    def sync_time(self, data: bytes) -> None:
        """Adopt the host time in ``data``, corrected for the round trip."""
        msg, _ = Time.deserialize(data, 0)
        offset = (self._hardware.time() - self._rt_time) & _MASK
        sec = (msg.data.sec + offset // 1000) & _MASK
        nsec = (msg.data.nsec + (offset % 1000) * _NSEC_PER_MSEC) & _MASK
        self.set_now(RosTime(sec, nsec))
        self._last_sync_receive_time = self._hardware.time()

    def now(self) -> RosTime:
        """The current time as synchronised with the host."""
        ms = self._hardware.time()
        sec = (ms // 1000 + self._sec_offset) & _MASK
        nsec = ((ms % 1000) * _NSEC_PER_MSEC + self._nsec_offset) & _MASK
        return RosTime(sec, nsec).normalized()

    def set_now(self, new_now: RosTime) -> None:
        """Set the clock so that :meth:`now` returns ``new_now`` at this instant."""
        ms = self._hardware.time()
        sec = (new_now.sec - ms // 1000 - 1) & _MASK
        nsec = (new_now.nsec - (ms % 1000) * _NSEC_PER_MSEC + _NSEC_PER_SEC) & _MASK
        offset = RosTime(sec, nsec).normalized()
        self._sec_offset, self._nsec_offset = offset.sec, offset.nsec

    def advertise(self, publisher: Publisher) -> bool:
        """Register a publisher; False when every slot is taken."""
        for index, slot in enumerate(self._publishers):
            if slot is None:
                self._publishers[index] = publisher
                publisher.id = index + FIRST_USER_TOPIC + self._max_subscribers
                publisher.node_handle = self
                return True
        return False

    def subscribe(self, subscriber: Subscriber) -> bool:
        """Register a subscriber; False when every slot is taken."""
        for index, slot in enumerate(self._subscribers):
            if slot is None:
                self._subscribers[index] = subscriber
                subscriber.id = index + FIRST_USER_TOPIC
                return True
        return False

    def negotiate_topics(self) -> None:
        """Describe every registered topic to the host and mark the link configured."""
        for publisher in filter(None, self._publishers):
            info = TopicInfo(
                topic_id=publisher.id,
                topic_name=publisher.topic,
                message_type=publisher.message_type.type_name,
                md5sum=publisher.message_type.md5,
                buffer_size=self._output_size,
            )
            self.publish(publisher.endpoint, info)
        for subscriber in filter(None, self._subscribers):
            info = TopicInfo(
                topic_id=subscriber.id,
                topic_name=subscriber.topic,
                message_type=subscriber.message_type.type_name,
                md5sum=subscriber.message_type.md5,
                buffer_size=self._input_size,
            )
            self.publish(subscriber.endpoint, info)
        self._configured = True

    def publish(self, topic_id: int, msg: Message) -> int:
        """Frame and send ``msg``.

        Returns the frame length; 0 when a user topic is sent before the link
        is configured; -1 when the frame exceeds the output buffer.
        """
        if topic_id >= FIRST_USER_TOPIC and not self._configured:
            return 0
        payload = msg.serialize()
        if len(payload) + _FRAME_OVERHEAD > self._output_size:
            if not self._reporting_drop:
                self._reporting_drop = True
                try:
                    self.logerror(_DROPPED_MESSAGE)
                finally:
                    self._reporting_drop = False
            return -1
        frame = encode_frame(topic_id, payload)
        self._hardware.write(frame)
        return len(frame)

    def _log(self, level: LogLevel, msg: str) -> None:
        self.publish(TopicId.LOG, Log(level=int(level), msg=msg))

    def logdebug(self, msg: str) -> None:
        self._log(LogLevel.ROSDEBUG, msg)

    def loginfo(self, msg: str) -> None:
        self._log(LogLevel.INFO, msg)

    def logwarn(self, msg: str) -> None:
        self._log(LogLevel.WARN, msg)

    def logerror(self, msg: str) -> None:
        self._log(LogLevel.ERROR, msg)

    def logfatal(self, msg: str) -> None:
        self._log(LogLevel.FATAL, msg)