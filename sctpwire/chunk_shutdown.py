"""The SHUTDOWN, SHUTDOWN-ACK and SHUTDOWN-COMPLETE chunks."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .chunkheader import ChunkHeader, SctpError
from .chunktype import ChunkType, chunk_type_name

CUMULATIVE_TSN_ACK_LENGTH = 4

_TSN = struct.Struct(">I")


def _expect_type(header: ChunkHeader, expected: ChunkType, label: str) -> None:
    if header.chunk_type != expected:
        raise SctpError(
            f"ChunkType is not of type {label}: actually is "
            f"{chunk_type_name(header.chunk_type)}"
        )


@dataclass
class ChunkShutdown(ChunkHeader):
    """SHUTDOWN chunk carrying the sender's cumulative TSN ack."""

    chunk_type: int = ChunkType.SHUTDOWN
    cumulative_tsn_ack: int = 0

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkShutdown":
        """Parse a SHUTDOWN chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        _expect_type(header, ChunkType.SHUTDOWN, "SHUTDOWN")
        if len(header.raw) != CUMULATIVE_TSN_ACK_LENGTH:
            raise SctpError("invalid chunk size")
        (cum_ack,) = _TSN.unpack(header.raw)
        return cls(
            chunk_type=header.chunk_type,
            flags=header.flags,
            raw=header.raw,
            cumulative_tsn_ack=cum_ack,
        )

    def marshal(self) -> bytes:
        """Return the wire form of this chunk."""
        self.chunk_type = ChunkType.SHUTDOWN
        self.raw = _TSN.pack(self.cumulative_tsn_ack & 0xFFFFFFFF)
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return False


@dataclass
class ChunkShutdownAck(ChunkHeader):
    """SHUTDOWN-ACK chunk; it has no value."""

    chunk_type: int = ChunkType.SHUTDOWN_ACK

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkShutdownAck":
        """Parse a SHUTDOWN-ACK chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        _expect_type(header, ChunkType.SHUTDOWN_ACK, "SHUTDOWN-ACK")
        return cls(chunk_type=header.chunk_type, flags=header.flags, raw=header.raw)

    def marshal(self) -> bytes:
        """Return the wire form of this chunk."""
        self.chunk_type = ChunkType.SHUTDOWN_ACK
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return False


@dataclass
class ChunkShutdownComplete(ChunkHeader):
    """SHUTDOWN-COMPLETE chunk; it has no value."""

    chunk_type: int = ChunkType.SHUTDOWN_COMPLETE

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkShutdownComplete":
        """Parse a SHUTDOWN-COMPLETE chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        _expect_type(header, ChunkType.SHUTDOWN_COMPLETE, "SHUTDOWN-COMPLETE")
        return cls(chunk_type=header.chunk_type, flags=header.flags, raw=header.raw)

    def marshal(self) -> bytes:
        """Return the wire form of this chunk."""
        self.chunk_type = ChunkType.SHUTDOWN_COMPLETE
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return False