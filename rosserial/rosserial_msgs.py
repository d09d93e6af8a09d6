"""Messages of the serial protocol itself: logging and topic negotiation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .message import Message


class LogLevel(IntEnum):
    """Severity of a log message sent to the host."""

    ROSDEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


@dataclass
class Log(Message):
    """A log line with its severity."""

    type_name = "rosserial_msgs/Log"
    md5 = "11abd731c25933261cd6183bd12d6295"
    _layout = (("level", "uint8"), ("msg", "string"))

    level: int = 0
    msg: str = ""


class TopicId(IntEnum):
    """Reserved topic ids used by the protocol."""

    PUBLISHER = 0
    SUBSCRIBER = 1
    SERVICE_SERVER = 2
    SERVICE_CLIENT = 4
    PARAMETER_REQUEST = 6
    LOG = 7
    TIME = 10
    TX_STOP = 11


@dataclass
class TopicInfo(Message):
    """Description of a topic, sent while negotiating with the host."""

    type_name = "rosserial_msgs/TopicInfo"
    md5 = "0ad51f88fc44892f8c10684077646005"
    _layout = (
        ("topic_id", "uint16"),
        ("topic_name", "string"),
        ("message_type", "string"),
        ("md5sum", "string"),
        ("buffer_size", "int32"),
    )

    topic_id: int = 0
    topic_name: str = ""
    message_type: str = ""
    md5sum: str = ""
    buffer_size: int = 0