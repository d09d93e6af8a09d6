"""Service definitions: request/response message pairs sharing a type name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .message import Message

_EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"


class Service:
    """A service: a request message type paired with a response message type.

    Subclasses set ``Request`` and ``Response``; ``type_name`` is taken from
    the request when not given, and both messages must carry that name.
    """

    type_name: ClassVar[str] = ""
    Request: ClassVar[type[Message]]
    Response: ClassVar[type[Message]]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for role in ("Request", "Response"):
            kind = getattr(cls, role, None)
            if not (isinstance(kind, type) and issubclass(kind, Message)):
                raise TypeError(f"{cls.__name__}.{role} must be a Message subclass")
        if not cls.type_name:
            cls.type_name = cls.Request.type_name
        for kind in (cls.Request, cls.Response):
            if kind.type_name != cls.type_name:
                raise TypeError(
                    f"{kind.__name__} has type {kind.type_name!r}, "
                    f"expected {cls.type_name!r}"
                )


_ADD_DIAGNOSTICS = "diagnostic_msgs/AddDiagnostics"


@dataclass
class AddDiagnosticsRequest(Message):
    """Asks the aggregator to load analyzers from a parameter namespace."""

    type_name = _ADD_DIAGNOSTICS
    md5 = "c26cf6e164288fbc6050d74f838bcdf0"
    _layout = (("load_namespace", "string"),)

    load_namespace: str = ""


@dataclass
class AddDiagnosticsResponse(Message):
    """Whether the analyzers were loaded, with a message."""

    type_name = _ADD_DIAGNOSTICS
    md5 = "937c9679a518e3a18d831e57125ea522"
    _layout = (("success", "bool"), ("message", "string"))

    success: bool = False
    message: str = ""


class AddDiagnostics(Service):
    """Load diagnostic analyzers."""

    Request = AddDiagnosticsRequest
    Response = AddDiagnosticsResponse


_NODELET_UNLOAD = "nodelet/NodeletUnload"


@dataclass
class NodeletUnloadRequest(Message):
    """Names the nodelet to unload."""

    type_name = _NODELET_UNLOAD
    md5 = "c1f3d28f1b044c871e6eff2e9fc3c667"
    _layout = (("name", "string"),)

    name: str = ""


@dataclass
class NodeletUnloadResponse(Message):
    """Whether the nodelet was unloaded."""

    type_name = _NODELET_UNLOAD
    md5 = "358e233cde0c8a8bcfea4ce193f8fc15"
    _layout = (("success", "bool"),)

    success: bool = False


class NodeletUnload(Service):
    """Unload a nodelet."""

    Request = NodeletUnloadRequest
    Response = NodeletUnloadResponse


_FRAME_GRAPH = "tf/FrameGraph"


@dataclass
class FrameGraphRequest(Message):
    """Empty request for the transform frame graph."""

    type_name = _FRAME_GRAPH
    md5 = _EMPTY_MD5


@dataclass
class FrameGraphResponse(Message):
    """The frame graph in dot notation."""

    type_name = _FRAME_GRAPH
    md5 = "c4af9ac907e58e906eb0b6e3c58478c0"
    _layout = (("dot_graph", "string"),)

    dot_graph: str = ""


class FrameGraph(Service):
    """Fetch the transform frame graph."""

    Request = FrameGraphRequest
    Response = FrameGraphResponse


_DEMUX_ADD = "topic_tools/DemuxAdd"


@dataclass
class DemuxAddRequest(Message):
    """Names the output topic to add to a demux."""

    type_name = _DEMUX_ADD
    md5 = "d8f94bae31b356b24d0427f80426d0c3"
    _layout = (("topic", "string"),)

    topic: str = ""


@dataclass
class DemuxAddResponse(Message):
    """Empty acknowledgement."""

    type_name = _DEMUX_ADD
    md5 = _EMPTY_MD5


class DemuxAdd(Service):
    """Add an output topic to a demux."""

    Request = DemuxAddRequest
    Response = DemuxAddResponse


_DEMUX_SELECT = "topic_tools/DemuxSelect"


@dataclass
class DemuxSelectRequest(Message):
    """Names the output topic a demux should switch to."""

    type_name = _DEMUX_SELECT
    md5 = "d8f94bae31b356b24d0427f80426d0c3"
    _layout = (("topic", "string"),)

    topic: str = ""


@dataclass
class DemuxSelectResponse(Message):
    """The topic that was selected before the switch."""

    type_name = _DEMUX_SELECT
    md5 = "3db0a473debdbafea387c9e49358c320"
    _layout = (("prev_topic", "string"),)

    prev_topic: str = ""


class DemuxSelect(Service):
    """Select the output topic of a demux."""

    Request = DemuxSelectRequest
    Response = DemuxSelectResponse


_MUX_DELETE = "topic_tools/MuxDelete"


@dataclass
class MuxDeleteRequest(Message):
    """Names the input topic to remove from a mux."""

    type_name = _MUX_DELETE
    md5 = "d8f94bae31b356b24d0427f80426d0c3"
    _layout = (("topic", "string"),)

    topic: str = ""


@dataclass
class MuxDeleteResponse(Message):
    """Empty acknowledgement."""

    type_name = _MUX_DELETE
    md5 = _EMPTY_MD5


class MuxDelete(Service):
    """Remove an input topic from a mux."""

    Request = MuxDeleteRequest
    Response = MuxDeleteResponse