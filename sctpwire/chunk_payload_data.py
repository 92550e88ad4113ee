"""The SCTP DATA chunk carrying user messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from .chunkheader import ChunkHeader, SctpError
from .chunktype import ChunkType, chunk_type_name

PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK = 1
PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK = 2
PAYLOAD_DATA_UNORDERED_BITMASK = 4
PAYLOAD_DATA_IMMEDIATE_SACK = 8

PAYLOAD_DATA_HEADER_SIZE = 12

_DATA_HEADER = struct.Struct(">IHHI")


class PayloadProtocolIdentifier(IntEnum):
    """Payload protocol identifiers used by data channels."""

    UNKNOWN = 0
    WEBRTC_DCEP = 50
    WEBRTC_STRING = 51
    WEBRTC_BINARY = 53
    WEBRTC_STRING_EMPTY = 56
    WEBRTC_BINARY_EMPTY = 57

    def __str__(self) -> str:
        return payload_protocol_name(self)


_NAMES = {
    50: "WebRTC DCEP",
    51: "WebRTC String",
    53: "WebRTC Binary",
    56: "WebRTC String (Empty)",
    57: "WebRTC Binary (Empty)",
}


def payload_protocol_name(value: int) -> str:
    """Return the display name of a payload protocol identifier."""
    name = _NAMES.get(int(value))
    if name is None:
        return f"Unknown Payload Protocol Identifier: {int(value)}"
    return name


def _as_payload_type(value: int) -> int:
    try:
        return PayloadProtocolIdentifier(value)
    except ValueError:
        return int(value)


@dataclass
class ChunkPayloadData(ChunkHeader):
    """DATA chunk, plus the sender-side state kept for each chunk in flight."""

    chunk_type: int = ChunkType.PAYLOAD_DATA

    unordered: bool = False
    beginning_fragment: bool = False
    ending_fragment: bool = False
    immediate_sack: bool = False

    tsn: int = 0
    stream_identifier: int = 0
    stream_sequence_number: int = 0
    payload_type: int = PayloadProtocolIdentifier.UNKNOWN
    user_data: bytes = b""

    # Whether the peer acknowledged this chunk.
    acked: bool = False
    miss_indicator: int = 0

    # Partial-reliability state used only by the sender.
    since: Optional[float] = None
    n_sent: int = 0
    _abandoned: bool = field(default=False, init=False, repr=False)
    _all_inflight: bool = field(default=False, init=False, repr=False)

    # Set when the retransmission timer fired while this chunk was in flight.
    retransmit: bool = False

    head: Optional["ChunkPayloadData"] = field(default=None, repr=False, compare=False)
    stream_version: int = 0

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkPayloadData":
        """Parse a DATA chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        value = header.raw
        if len(value) < PAYLOAD_DATA_HEADER_SIZE:
            raise SctpError("packet is smaller than the header size")
        tsn, stream_id, ssn, ppi = _DATA_HEADER.unpack_from(value)
        flags = header.flags
        return cls(
            chunk_type=header.chunk_type,
            flags=flags,
            raw=value,
            immediate_sack=bool(flags & PAYLOAD_DATA_IMMEDIATE_SACK),
            unordered=bool(flags & PAYLOAD_DATA_UNORDERED_BITMASK),
            beginning_fragment=bool(flags & PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK),
            ending_fragment=bool(flags & PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK),
            tsn=tsn,
            stream_identifier=stream_id,
            stream_sequence_number=ssn,
            payload_type=_as_payload_type(ppi),
            user_data=value[PAYLOAD_DATA_HEADER_SIZE:],
        )

    def marshal(self) -> bytes:
        """Return the wire form of this chunk, without trailing padding."""
        body = _DATA_HEADER.pack(
            self.tsn & 0xFFFFFFFF,
            self.stream_identifier & 0xFFFF,
            self.stream_sequence_number & 0xFFFF,
            int(self.payload_type) & 0xFFFFFFFF,
        ) + bytes(self.user_data)

        flags = 0
        if self.ending_fragment:
            flags |= PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK
        if self.beginning_fragment:
            flags |= PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK
        if self.unordered:
            flags |= PAYLOAD_DATA_UNORDERED_BITMASK
        if self.immediate_sack:
            flags |= PAYLOAD_DATA_IMMEDIATE_SACK

        self.flags = flags
        self.chunk_type = ChunkType.PAYLOAD_DATA
        self.raw = body
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return False

    def abandoned(self) -> bool:
        """Return whether the message this fragment belongs to is abandoned."""
        owner = self.head if self.head is not None else self
        return owner._abandoned and owner._all_inflight

    def set_abandoned(self, abandoned: bool) -> None:
        """Mark the message this fragment belongs to as abandoned or not."""
        owner = self.head if self.head is not None else self
        owner._abandoned = abandoned

    def set_all_inflight(self) -> None:
        """Record that every fragment is in flight, once the last one is sent."""
        if self.ending_fragment:
            owner = self.head if self.head is not None else self
            owner._all_inflight = True

    def __str__(self) -> str:
        return f"{chunk_type_name(self.chunk_type)}\n{self.tsn}"