"""Small messages from the diagnostics, reconfigure, navigation and tf2 sets."""

from __future__ import annotations

from dataclasses import dataclass

from .message import Message

_EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"


@dataclass
class KeyValue(Message):
    """A key and its value, both strings."""

    type_name = "diagnostic_msgs/KeyValue"
    md5 = "cf57fdc6617a881a88c16e768132149c"
    _layout = (("key", "string"), ("value", "string"))

    key: str = ""
    value: str = ""


@dataclass
class StrParameter(Message):
    """A named string parameter."""

    type_name = "dynamic_reconfigure/StrParameter"
    md5 = "bc6ccc4a57f61779c8eaae61e9f422e0"
    _layout = (("name", "string"), ("value", "string"))

    name: str = ""
    value: str = ""


@dataclass
class GetMapGoal(Message):
    """Empty goal of the get-map action."""

    type_name = "nav_msgs/GetMapGoal"
    md5 = _EMPTY_MD5


@dataclass
class LookupTransformFeedback(Message):
    """Empty feedback of the transform lookup action."""

    type_name = "tf2_msgs/LookupTransformFeedback"
    md5 = _EMPTY_MD5