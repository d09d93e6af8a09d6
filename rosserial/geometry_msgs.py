"""Geometry messages."""

from __future__ import annotations

from dataclasses import dataclass

from .message import Message


@dataclass
class Point32(Message):
    """A point in space with 32-bit float coordinates."""

    type_name = "geometry_msgs/Point32"
    md5 = "cc153912f1453b708d221682bc23d9ac"
    _layout = (("x", "float32"), ("y", "float32"), ("z", "float32"))

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0