"""Result and feedback messages of the action library's test actions."""

from __future__ import annotations

from dataclasses import dataclass

from .message import Message


@dataclass
class TestRequestFeedback(Message):
    """Empty feedback of the test-request action."""

    __test__ = False

    type_name = "actionlib/TestRequestFeedback"
    md5 = "d41d8cd98f00b204e9800998ecf8427e"


@dataclass
class TestRequestResult(Message):
    """Result of the test-request action."""

    __test__ = False

    type_name = "actionlib/TestRequestResult"
    md5 = "61c2364524499c7c5017e2f3fce7ba06"
    _layout = (("the_result", "int32"), ("is_simple_server", "bool"))

    the_result: int = 0
    is_simple_server: bool = False


@dataclass
class TwoIntsResult(Message):
    """Sum returned by the two-ints action."""

    type_name = "actionlib/TwoIntsResult"
    md5 = "b88405221c77b1878a3cbbfff53428d7"
    _layout = (("sum", "int64"),)

    sum: int = 0