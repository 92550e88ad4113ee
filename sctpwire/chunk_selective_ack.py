"""The SCTP SACK chunk acknowledging received DATA chunks."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .chunkheader import ChunkHeader, SctpError
from .chunktype import ChunkType, chunk_type_name

SELECTIVE_ACK_HEADER_SIZE = 12

_SACK_HEADER = struct.Struct(">IIHH")
_GAP = struct.Struct(">HH")
_TSN = struct.Struct(">I")


@dataclass
class GapAckBlock:
    """A run of received TSNs, as offsets from the cumulative TSN ack."""

    start: int = 0
    end: int = 0

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass
class ChunkSelectiveAck(ChunkHeader):
    """SACK chunk: cumulative ack, receiver window, gap blocks and duplicates."""

    chunk_type: int = ChunkType.SACK
    cumulative_tsn_ack: int = 0
    advertised_receiver_window_credit: int = 0
    gap_ack_blocks: list[GapAckBlock] = field(default_factory=list)
    duplicate_tsn: list[int] = field(default_factory=list)

    @classmethod
    def unmarshal(cls, raw: bytes) -> "ChunkSelectiveAck":
        """Parse a SACK chunk from the start of ``raw``."""
        header = ChunkHeader.unmarshal(raw)
        if header.chunk_type != ChunkType.SACK:
            raise SctpError(
                "ChunkType is not of type SACK: actually is "
                f"{chunk_type_name(header.chunk_type)}"
            )
        value = header.raw
        if len(value) < SELECTIVE_ACK_HEADER_SIZE:
            raise SctpError(
                "SACK Chunk size is not large enough to contain header: "
                f"{len(value)} remaining, needs {SELECTIVE_ACK_HEADER_SIZE} bytes"
            )
        cum_ack, arwnd, n_gaps, n_dups = _SACK_HEADER.unpack_from(value)
        if len(value) != SELECTIVE_ACK_HEADER_SIZE + 4 * n_gaps + 4 * n_dups:
            raise SctpError(
                "SACK Chunk size does not match predicted amount from header values"
            )

        gaps_end = SELECTIVE_ACK_HEADER_SIZE + 4 * n_gaps
        gap_ack_blocks = [
            GapAckBlock(start, end)
            for start, end in _GAP.iter_unpack(value[SELECTIVE_ACK_HEADER_SIZE:gaps_end])
        ]
        duplicate_tsn = [tsn for (tsn,) in _TSN.iter_unpack(value[gaps_end:])]

        return cls(
            chunk_type=header.chunk_type,
            flags=header.flags,
            raw=value,
            cumulative_tsn_ack=cum_ack,
            advertised_receiver_window_credit=arwnd,
            gap_ack_blocks=gap_ack_blocks,
            duplicate_tsn=duplicate_tsn,
        )

    def marshal(self) -> bytes:
        """Return the wire form of this chunk."""
        parts = [
            _SACK_HEADER.pack(
                self.cumulative_tsn_ack & 0xFFFFFFFF,
                self.advertised_receiver_window_credit & 0xFFFFFFFF,
                len(self.gap_ack_blocks) & 0xFFFF,
                len(self.duplicate_tsn) & 0xFFFF,
            )
        ]
        parts.extend(_GAP.pack(g.start & 0xFFFF, g.end & 0xFFFF) for g in self.gap_ack_blocks)
        parts.extend(_TSN.pack(t & 0xFFFFFFFF) for t in self.duplicate_tsn)

        self.chunk_type = ChunkType.SACK
        self.raw = b"".join(parts)
        return super().marshal()

    def check(self) -> bool:
        """Return whether receiving this chunk calls for an abort."""
        return False

    def __str__(self) -> str:
        dups = " ".join(str(t) for t in self.duplicate_tsn)
        res = (
            f"SACK cumTsnAck={self.cumulative_tsn_ack} "
            f"arwnd={self.advertised_receiver_window_credit} dupTsn=[{dups}]"
        )
        for gap in self.gap_ack_blocks:
            res = f"{res}\n gap ack: {gap}"
        return res