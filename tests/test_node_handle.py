from collections import deque

import pytest

from rosserial.message import RosTime
from rosserial.node_handle import (
    NodeHandle,
    Publisher,
    SpinResult,
    Subscriber,
    encode_frame,
)
from rosserial.rosserial_msgs import Log, LogLevel, TopicId, TopicInfo
from rosserial.std_msgs import Int16, Time


class FakeHardware:
    def __init__(self, step=0):
        self.clock = 0
        self.step = step
        self.incoming = deque()
        self.frames = []
        self.init_args = []

    def init(self, *args):
        self.init_args.append(args)

    def read(self):
        return self.incoming.popleft() if self.incoming else -1

    def write(self, data):
        self.frames.append(bytes(data))

    def time(self):
        now = self.clock
        self.clock += self.step
        return now

    def feed(self, data):
        self.incoming.extend(data)


def parse_frame(frame):
    assert frame[0] == 0xFF and frame[1] == 0xFE
    length = frame[2] | (frame[3] << 8)
    topic = frame[5] | (frame[6] << 8)
    return topic, frame[7 : 7 + length]


def configured_handle(hw, **kwargs):
    nh = NodeHandle(hw, **kwargs)
    nh.init_node()
    hw.feed(encode_frame(TopicId.PUBLISHER, b""))
    assert nh.spin_once() == SpinResult.ERR
    hw.frames.clear()
    return nh


def test_encode_frame_checksums():
    payload = Int16(data=-3).serialize()
    frame = encode_frame(130, payload)
    assert frame[:2] == b"\xff\xfe"
    assert frame[2] | (frame[3] << 8) == len(payload)
    assert (frame[2] + frame[3] + frame[4]) % 256 == 255
    assert sum(frame[5:]) % 256 == 255
    assert parse_frame(frame) == (130, payload)


def test_encode_frame_rejects_huge_payload():
    with pytest.raises(ValueError):
        encode_frame(100, bytes(0x10000))


def test_init_node_passes_port_name():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    nh.init_node()
    nh.init_node("tcp-port")
    assert hw.init_args == [(), ("tcp-port",)]


def test_advertise_and_subscribe_assign_ids():
    nh = NodeHandle(FakeHardware())
    pub = Publisher("chatter", Int16)
    sub = Subscriber("toggle", Int16, lambda m: None)
    assert nh.advertise(pub)
    assert nh.subscribe(sub)
    assert pub.id == 125
    assert sub.id == 100
    assert pub.node_handle is nh


def test_advertise_fails_when_full():
    nh = NodeHandle(FakeHardware(), max_publishers=1, max_subscribers=1)
    assert nh.advertise(Publisher("a", Int16))
    assert not nh.advertise(Publisher("b", Int16))
    assert nh.subscribe(Subscriber("c", Int16, print))
    assert not nh.subscribe(Subscriber("d", Int16, print))


def test_unadvertised_publisher_raises():
    with pytest.raises(RuntimeError):
        Publisher("chatter", Int16).publish(Int16())


def test_publish_user_topic_before_configured_is_skipped():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    pub = Publisher("chatter", Int16)
    nh.advertise(pub)
    assert pub.publish(Int16(data=5)) == 0
    assert hw.frames == []


def test_negotiation_describes_topics():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    pub = Publisher("chatter", Int16)
    sub = Subscriber("toggle", Time, lambda m: None)
    nh.advertise(pub)
    nh.subscribe(sub)
    nh.init_node()
    assert not nh.connected()
    hw.feed(encode_frame(TopicId.PUBLISHER, b""))
    assert nh.spin_once() == SpinResult.ERR
    assert nh.connected()

    topics = [parse_frame(f) for f in hw.frames]
    assert [t for t, _ in topics] == [TopicId.TIME, TopicId.PUBLISHER, TopicId.SUBSCRIBER]
    pub_info = TopicInfo.from_bytes(topics[1][1])
    assert pub_info == TopicInfo(pub.id, "chatter", Int16.type_name, Int16.md5, 512)
    sub_info = TopicInfo.from_bytes(topics[2][1])
    assert sub_info == TopicInfo(sub.id, "toggle", Time.type_name, Time.md5, 512)


def test_published_frame_round_trips():
    hw = FakeHardware()
    nh = configured_handle(hw)
    pub = Publisher("chatter", Int16)
    nh.advertise(pub)
    length = pub.publish(Int16(data=-1234))
    assert length == len(hw.frames[0])
    topic, payload = parse_frame(hw.frames[0])
    assert topic == pub.id
    assert Int16.from_bytes(payload) == Int16(data=-1234)


def test_subscriber_receives_message():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    received = []
    sub = Subscriber("toggle", Int16, received.append)
    nh.subscribe(sub)
    nh.init_node()
    hw.feed(encode_frame(sub.id, Int16(data=42).serialize()))
    assert nh.spin_once() == SpinResult.OK
    assert received == [Int16(data=42)]


def test_bad_checksum_is_ignored():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    received = []
    sub = Subscriber("toggle", Int16, received.append)
    nh.subscribe(sub)
    frame = bytearray(encode_frame(sub.id, Int16(data=1).serialize()))
    frame[-1] ^= 0x01
    hw.feed(frame)
    nh.spin_once()
    assert received == []


def test_partial_frame_times_out():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    received = []
    sub = Subscriber("toggle", Int16, received.append)
    nh.subscribe(sub)
    hw.feed(b"\xff\xfe")
    nh.spin_once()
    hw.clock = 100
    hw.feed(encode_frame(sub.id, Int16(data=7).serialize()))
    nh.spin_once()
    assert received == [Int16(data=7)]


def test_tx_stop_disconnects():
    hw = FakeHardware()
    nh = configured_handle(hw)
    hw.feed(encode_frame(TopicId.TX_STOP, b""))
    nh.spin_once()
    assert not nh.connected()


def test_connection_lost_without_sync():
    hw = FakeHardware()
    nh = configured_handle(hw)
    hw.clock = 20_000
    nh.spin_once()
    assert not nh.connected()


def test_periodic_time_sync():
    hw = FakeHardware()
    nh = configured_handle(hw)
    hw.clock = 2000
    nh.spin_once()
    assert hw.frames == []
    hw.clock = 3000
    nh.spin_once()
    assert [parse_frame(f)[0] for f in hw.frames] == [TopicId.TIME]


def test_wrong_protocol_version_requests_sync():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    hw.feed(b"\xff\xff")
    nh.spin_once()
    assert [parse_frame(f)[0] for f in hw.frames] == [TopicId.TIME]


def test_spin_timeout_leaves_remaining_bytes():
    hw = FakeHardware(step=1)
    nh = NodeHandle(hw)
    nh.set_spin_timeout(3)
    hw.feed(bytes(50))
    assert nh.spin_once() == SpinResult.TIMEOUT
    assert len(hw.incoming) > 0


def test_stuck_waiting_for_sync_times_out():
    hw = FakeHardware(step=1000)
    nh = NodeHandle(hw)
    hw.feed(bytes(20))
    assert nh.spin_once() == SpinResult.TIMEOUT
    assert not nh.connected()


def test_set_now_round_trip_and_advance():
    hw = FakeHardware()
    hw.clock = 123_456
    nh = NodeHandle(hw)
    target = RosTime(50, 250_000_000)
    nh.set_now(target)
    assert nh.now() == target
    hw.clock += 1500
    assert nh.now() == RosTime(51, 750_000_000)


def test_sync_time_adopts_host_time():
    hw = FakeHardware()
    hw.clock = 9_999
    nh = NodeHandle(hw)
    nh.request_sync_time()
    host = RosTime(1_700_000_000, 400_000_000)
    nh.sync_time(Time(data=host).serialize())
    assert nh.now() == host


def test_time_frame_from_host_sets_clock():
    hw = FakeHardware()
    nh = NodeHandle(hw)
    host = RosTime(77, 5_000_000)
    hw.feed(encode_frame(TopicId.TIME, Time(data=host).serialize()))
    nh.spin_once()
    assert nh.now() == host


@pytest.mark.parametrize(
    "method, level",
    [
        ("logdebug", LogLevel.ROSDEBUG),
        ("loginfo", LogLevel.INFO),
        ("logwarn", LogLevel.WARN),
        ("logerror", LogLevel.ERROR),
        ("logfatal", LogLevel.FATAL),
    ],
)
def test_log_levels(method, level):
    hw = FakeHardware()
    nh = NodeHandle(hw)
    getattr(nh, method)("infos")
    topic, payload = parse_frame(hw.frames[0])
    assert topic == TopicId.LOG
    assert Log.from_bytes(payload) == Log(level=level, msg="infos")


def test_oversized_message_is_dropped_with_error_log():
    hw = FakeHardware()
    nh = NodeHandle(hw, output_size=100)
    assert nh.publish(TopicId.LOG, Log(level=1, msg="x" * 200)) == -1
    assert len(hw.frames) == 1
    topic, payload = parse_frame(hw.frames[0])
    assert topic == TopicId.LOG
    log = Log.from_bytes(payload)
    assert log.level == LogLevel.ERROR
    assert log.msg == "Message from device dropped: message larger than buffer."


def test_oversized_error_log_does_not_recurse():
    hw = FakeHardware()
    nh = NodeHandle(hw, output_size=20)
    assert nh.publish(TopicId.LOG, Log(level=1, msg="x" * 50)) == -1
    assert hw.frames == []