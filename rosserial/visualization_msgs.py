"""Visualization messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .message import Message


class MenuCommandType(IntEnum):
    """How a menu entry's command is carried out."""

    FEEDBACK = 0
    ROSRUN = 1
    ROSLAUNCH = 2


@dataclass
class MenuEntry(Message):
    """One entry of an interactive marker's context menu."""

    type_name = "visualization_msgs/MenuEntry"
    md5 = "b90ec63024573de83b57aa93eb39be2d"
    _layout = (
        ("id", "uint32"),
        ("parent_id", "uint32"),
        ("title", "string"),
        ("command", "string"),
        ("command_type", "uint8"),
    )

    id: int = 0
    parent_id: int = 0
    title: str = ""
    command: str = ""
    command_type: int = MenuCommandType.FEEDBACK