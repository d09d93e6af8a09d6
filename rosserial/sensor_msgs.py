"""Sensor messages."""

from __future__ import annotations

from dataclasses import dataclass

from .message import Message


@dataclass
class RegionOfInterest(Message):
    """A rectangular window within an image, optionally to be rectified."""

    type_name = "sensor_msgs/RegionOfInterest"
    md5 = "bdb633039d588fcccb441a4d43ccfe09"
    _layout = (
        ("x_offset", "uint32"),
        ("y_offset", "uint32"),
        ("height", "uint32"),
        ("width", "uint32"),
        ("do_rectify", "bool"),
    )

    x_offset: int = 0
    y_offset: int = 0
    height: int = 0
    width: int = 0
    do_rectify: bool = False