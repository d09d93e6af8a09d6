"""rosserial client: wire-format messages, services, frame handling, a node handle and a TCP transport."""

__version__ = "0.1.0"

__all__ = [
    "message",
    "std_msgs",
    "rosserial_msgs",
    "geometry_msgs",
    "sensor_msgs",
    "services",
    "visualization_msgs",
    "actionlib",
    "misc_msgs",
    "trajectory_msgs",
    "node_handle",
    "tcp_hardware",
]