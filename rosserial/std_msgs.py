"""Standard scalar and time messages."""

from __future__ import annotations

from dataclasses import dataclass, field

from .message import Message, RosTime


@dataclass
class Byte(Message):
    """A single signed byte."""

    type_name = "std_msgs/Byte"
    md5 = "ad736a2e8818154c487bb80fe42ce43b"
    _layout = (("data", "int8"),)

    data: int = 0


@dataclass
class ColorRGBA(Message):
    """A colour with alpha, each channel a 32-bit float."""

    type_name = "std_msgs/ColorRGBA"
    md5 = "a29a96539573343b1310c73607334b00"
    _layout = (("r", "float32"), ("g", "float32"), ("b", "float32"), ("a", "float32"))

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


@dataclass
class Int16(Message):
    """A signed 16-bit integer."""

    type_name = "std_msgs/Int16"
    md5 = "8524586e34fbd7cb1c08c5f5f1ca0e57"
    _layout = (("data", "int16"),)

    data: int = 0


@dataclass
class Time(Message):
    """A timestamp."""

    type_name = "std_msgs/Time"
    md5 = "cd7166c74c552c311fbcc2fe5a7bc289"
    _layout = (("data", "time"),)

    data: RosTime = field(default_factory=RosTime)


@dataclass
class UInt64(Message):
    """An unsigned 64-bit integer."""

    type_name = "std_msgs/UInt64"
    md5 = "1b2a79973e8bf53d7b53acb71299cb57"
    _layout = (("data", "uint64"),)

    data: int = 0