"""The FORWARD-TSN chunk used by partially reliable SCTP."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .chunkheader import ChunkHeader, SctpError
from .chunktype import ChunkType

NEW_CUMULATIVE_TSN_LENGTH = 4
FORWARD_TSN_STREAM_LENGTH = 4

_STREAM = struct.Struct(">HH")
_TSN = struct.Struct(">I")


@dataclass
class ForwardTSNStream:
    """A stream skipped by a FORWARD-TSN and the largest sequence skipped on it."""

    identifier: int = 0
    sequence: int = 0

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ForwardTSNStream":
        """Parse a stream entry from the start of ``raw``."""
        if len(raw) < FORWARD_TSN_STREAM_LENGTH:
            raise SctpError("chunk too short")
        identifier, sequence = _STREAM.unpack_from(raw)
        return cls(identifier=identifier, sequence=sequence)

    def marshal(self) -> bytes:
        """Return the four-byte wire form of this entry."""
        return _STREAM.pack(self.identifier & 0xFFFF, self.sequence & 0xFFFF)


@dataclass
class ChunkForwardTSN(ChunkHeader):
    """FORWARD-TSN chunk: moves the receiver's cumulative TSN point forward."""

    chunk_type: int = ChunkType.FORWARD_TSN
    new_cumulative_tsn: int = 0
    streams: list[ForwardTSNStream] = field(default_factory=list)

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkForwardTSN":
        """Parse a FORWARD-TSN chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        value = header.raw
        if len(value) < NEW_CUMULATIVE_TSN_LENGTH:
            raise SctpError("chunk too short")
        (new_cumulative_tsn,) = _TSN.unpack_from(value)

        streams = []
        offset = NEW_CUMULATIVE_TSN_LENGTH
        while offset < len(value):
            try:
                stream = ForwardTSNStream.unmarshal(value[offset:])
            except SctpError as exc:
                raise SctpError(f"failed to marshal stream: {exc}") from exc
            streams.append(stream)
            offset += FORWARD_TSN_STREAM_LENGTH

        return cls(
            chunk_type=header.chunk_type,
            flags=header.flags,
            raw=value,
            new_cumulative_tsn=new_cumulative_tsn,
            streams=streams,
        )

    def marshal(self) -> bytes:
        """Return the wire form of this chunk, without trailing padding."""
        body = _TSN.pack(self.new_cumulative_tsn & 0xFFFFFFFF)
        body += b"".join(stream.marshal() for stream in self.streams)
        self.chunk_type = ChunkType.FORWARD_TSN
        self.raw = body
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return True

    def __str__(self) -> str:
        lines = [f"New Cumulative TSN: {self.new_cumulative_tsn}\n"]
        lines.extend(f" - si={s.identifier}, ssn={s.sequence}\n" for s in self.streams)
        return "".join(lines)