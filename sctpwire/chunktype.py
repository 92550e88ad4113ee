"""SCTP chunk type identifiers."""

from __future__ import annotations

from enum import IntEnum

_NAMES = {
    0: "DATA",
    1: "INIT",
    2: "INIT-ACK",
    3: "SACK",
    4: "HEARTBEAT",
    5: "HEARTBEAT-ACK",
    6: "ABORT",
    7: "SHUTDOWN",
    8: "SHUTDOWN-ACK",
    9: "ERROR",
    10: "COOKIE-ECHO",
    11: "COOKIE-ACK",
    13: "ECNE",  # Explicit Congestion Notification Echo
    14: "SHUTDOWN-COMPLETE",
    130: "RECONFIG",
    192: "FORWARD-TSN",
}


class ChunkType(IntEnum):
    """Known values of the SCTP Chunk Type field."""

    PAYLOAD_DATA = 0
    INIT = 1
    INIT_ACK = 2
    SACK = 3
    HEARTBEAT = 4
    HEARTBEAT_ACK = 5
    ABORT = 6
    SHUTDOWN = 7
    SHUTDOWN_ACK = 8
    ERROR = 9
    COOKIE_ECHO = 10
    COOKIE_ACK = 11
    CWR = 13
    SHUTDOWN_COMPLETE = 14
    RECONFIG = 130
    FORWARD_TSN = 192

    def __str__(self) -> str:
        return chunk_type_name(self)


def chunk_type_name(value: int) -> str:
    """Return the display name of a chunk type value, known or not."""
    name = _NAMES.get(int(value))
    if name is None:
        return f"Unknown ChunkType: {int(value)}"
    return name


def as_chunk_type(value: int) -> int:
    """Return a ChunkType member for a known value, else the plain int."""
    try:
        return ChunkType(value)
    except ValueError:
        return int(value)