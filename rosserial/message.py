"""Binary wire format shared by all message types.

A message is a dataclass deriving from :class:`Message` that declares its
wire layout in the class attribute ``_layout``: a tuple of
``(field_name, kind)`` pairs in wire order.  A kind is one of

* a scalar name: ``"int8"``, ``"uint8"``, ``"int16"``, ``"uint16"``,
  ``"int32"``, ``"uint32"``, ``"int64"``, ``"uint64"``, ``"float32"``,
  ``"float64"``, ``"bool"``;
* ``"string"`` (32-bit length prefix followed by UTF-8 bytes);
* ``"time"`` (unsigned seconds and nanoseconds) or ``"duration"`` (signed);
* a :class:`Message` subclass, encoded inline;
* ``(kind, None)`` for a variable-length array with a 32-bit count prefix;
* ``(kind, n)`` for a fixed-length array of exactly ``n`` items.

All integers are little-endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

_NSEC_PER_SEC = 1_000_000_000
_U32 = struct.Struct("<I")
_TIME = struct.Struct("<II")
_DURATION = struct.Struct("<ii")
_SCALARS = {
    name: struct.Struct(fmt)
    for name, fmt in {
        "int8": "<b",
        "uint8": "<B",
        "int16": "<h",
        "uint16": "<H",
        "int32": "<i",
        "uint32": "<I",
        "int64": "<q",
        "uint64": "<Q",
        "float32": "<f",
        "float64": "<d",
        "bool": "<?",
    }.items()
}

M = TypeVar("M", bound="Message")


@dataclass(frozen=True)
class RosTime:
    """A point in time (or a span) as whole seconds plus nanoseconds."""

    sec: int = 0
    nsec: int = 0

    def normalized(self) -> RosTime:
        """Fold whole seconds out of ``nsec``; seconds wrap at 32 bits."""
        carry, nsec = divmod(self.nsec, _NSEC_PER_SEC)
        return RosTime((self.sec + carry) & 0xFFFFFFFF, nsec)


def _need(data: Any, offset: int, size: int) -> None:
    if offset < 0 or offset + size > len(data):
        raise ValueError(
            f"buffer too short: need {size} bytes at offset {offset}, "
            f"{max(len(data) - offset, 0)} available"
        )


def _pack(packer: struct.Struct, *values: Any) -> bytes:
    try:
        return packer.pack(*values)
    except struct.error as exc:
        raise ValueError(f"value {values!r} does not fit the wire type: {exc}") from exc


def _unpack(packer: struct.Struct, data: Any, offset: int) -> tuple[tuple, int]:
    _need(data, offset, packer.size)
    return packer.unpack_from(data, offset), offset + packer.size


def _is_message_type(kind: Any) -> bool:
    return isinstance(kind, type) and issubclass(kind, Message)


def _encode(kind: Any, value: Any) -> bytes:
    if isinstance(kind, tuple):
        item_kind, count = kind
        items = list(value)
        if count is None:
            head = _pack(_U32, len(items))
        elif len(items) != count:
            raise ValueError(f"fixed array needs {count} items, got {len(items)}")
        else:
            head = b""
        return head + b"".join(_encode(item_kind, item) for item in items)
    if _is_message_type(kind):
        return value.serialize()
    if kind == "string":
        raw = value.encode("utf-8")
        return _pack(_U32, len(raw)) + raw
    if kind == "time":
        return _pack(_TIME, value.sec, value.nsec)
    if kind == "duration":
        return _pack(_DURATION, value.sec, value.nsec)
    try:
        packer = _SCALARS[kind]
    except KeyError:
        raise TypeError(f"unknown wire kind {kind!r}") from None
    return _pack(packer, value)


def _decode(kind: Any, data: Any, offset: int) -> tuple[Any, int]:
    if isinstance(kind, tuple):
        item_kind, count = kind
        if count is None:
            (count,), offset = _unpack(_U32, data, offset)
        items = []
        for _ in range(count):
            item, offset = _decode(item_kind, data, offset)
            items.append(item)
        return items, offset
    if _is_message_type(kind):
        return kind.deserialize(data, offset)
    if kind == "string":
        (length,), offset = _unpack(_U32, data, offset)
        _need(data, offset, length)
        text = bytes(data[offset : offset + length]).decode("utf-8")
        return text, offset + length
    if kind == "time":
        (sec, nsec), offset = _unpack(_TIME, data, offset)
        return RosTime(sec, nsec), offset
    if kind == "duration":
        (sec, nsec), offset = _unpack(_DURATION, data, offset)
        return RosTime(sec, nsec), offset
    try:
        packer = _SCALARS[kind]
    except KeyError:
        raise TypeError(f"unknown wire kind {kind!r}") from None
    (value,), offset = _unpack(packer, data, offset)
    return value, offset


class Message:
    """Base for all messages: serialization driven by ``_layout``."""

    type_name: ClassVar[str] = ""
    md5: ClassVar[str] = ""
    _layout: ClassVar[tuple] = ()

    def serialize(self) -> bytes:
        """Encode the message into its wire bytes."""
        return b"".join(_encode(kind, getattr(self, name)) for name, kind in self._layout)

    @classmethod
    def deserialize(cls: type[M], data: Any, offset: int = 0) -> tuple[M, int]:
        """Decode a message starting at ``offset``; return it and the end offset."""
        values = {}
        for name, kind in cls._layout:
            values[name], offset = _decode(kind, data, offset)
        return cls(**values), offset

    @classmethod
    def from_bytes(cls: type[M], data: Any) -> M:
        """Decode a message that fills ``data`` exactly."""
        msg, end = cls.deserialize(data, 0)
        if end != len(data):
            raise ValueError(f"{len(data) - end} trailing bytes after {cls.__name__}")
        return msg