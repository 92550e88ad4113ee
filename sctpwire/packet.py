"""SCTP packets: the common header followed by a sequence of chunks."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .chunk_forward_tsn import ChunkForwardTSN
from .chunk_payload_data import ChunkPayloadData
from .chunk_selective_ack import ChunkSelectiveAck
from .chunk_shutdown import ChunkShutdown, ChunkShutdownAck, ChunkShutdownComplete
from .chunkheader import CHUNK_HEADER_SIZE, ChunkHeader, SctpError, get_padding
from .chunktype import ChunkType, chunk_type_name

PACKET_HEADER_SIZE = 12

_COMMON_HEADER = struct.Struct(">HHI")
_CHECKSUM = struct.Struct("<I")

_CASTAGNOLI_POLY = 0x82F63B78


def _make_table(poly: int) -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table(_CASTAGNOLI_POLY)

# Chunk types whose value this package keeps as an opaque ChunkHeader.
_OPAQUE_TYPES = frozenset(
    {
        ChunkType.INIT,
        ChunkType.INIT_ACK,
        ChunkType.ABORT,
        ChunkType.COOKIE_ECHO,
        ChunkType.COOKIE_ACK,
        ChunkType.HEARTBEAT,
        ChunkType.RECONFIG,
        ChunkType.ERROR,
    }
)

_CHUNK_CLASSES: dict[int, type[ChunkHeader]] = {
    ChunkType.PAYLOAD_DATA: ChunkPayloadData,
    ChunkType.SACK: ChunkSelectiveAck,
    ChunkType.FORWARD_TSN: ChunkForwardTSN,
    ChunkType.SHUTDOWN: ChunkShutdown,
    ChunkType.SHUTDOWN_ACK: ChunkShutdownAck,
    ChunkType.SHUTDOWN_COMPLETE: ChunkShutdownComplete,
}


def crc32c(data: bytes, crc: int = 0) -> int:
    """Continue a CRC-32C (Castagnoli) checksum ``crc`` over ``data``."""
    crc = ~crc & 0xFFFFFFFF
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return ~crc & 0xFFFFFFFF


def generate_packet_checksum(raw: bytes) -> int:
    """Return the checksum of a packet, treating its checksum field as zero."""
    crc = crc32c(raw[0:8])
    crc = crc32c(bytes(4), crc)
    return crc32c(raw[12:], crc)


def _chunk_class(typ: int) -> type[ChunkHeader]:
    cls = _CHUNK_CLASSES.get(typ)
    if cls is not None:
        return cls
    if typ in _OPAQUE_TYPES:
        return ChunkHeader
    raise SctpError(
        f"failed to unmarshal, contains unknown chunk type: {chunk_type_name(typ)}"
    )


@dataclass
class Packet:
    """An SCTP packet: ports, verification tag and chunks."""

    source_port: int = 0
    destination_port: int = 0
    verification_tag: int = 0
    chunks: list[ChunkHeader] = field(default_factory=list)

    @classmethod
    def unmarshal(cls, raw: bytes) -> "Packet":
        """Parse a packet and verify its checksum."""
        raw = bytes(raw)
        if len(raw) < PACKET_HEADER_SIZE:
            raise SctpError(
                "raw is smaller than the minimum length for a SCTP packet: "
                f"raw only {len(raw)} bytes, {PACKET_HEADER_SIZE} is the minimum length"
            )
        source_port, destination_port, verification_tag = _COMMON_HEADER.unpack_from(raw)

        chunks: list[ChunkHeader] = []
        offset = PACKET_HEADER_SIZE
        while offset != len(raw):
            if offset + CHUNK_HEADER_SIZE > len(raw):
                raise SctpError(
                    "unable to parse SCTP chunk, not enough data for complete header: "
                    f"offset {offset} remaining {len(raw)}"
                )
            chunk = _chunk_class(raw[offset]).unmarshal(raw[offset:])
            chunks.append(chunk)
            value_length = chunk.value_length()
            offset += CHUNK_HEADER_SIZE + value_length + get_padding(value_length)
            if offset > len(raw):
                raise SctpError(
                    "unable to parse SCTP chunk, not enough data for complete header: "
                    f"offset {offset} remaining {len(raw)}"
                )

        (theirs,) = _CHECKSUM.unpack_from(raw, 8)
        ours = generate_packet_checksum(raw)
        if theirs != ours:
            raise SctpError(f"checksum mismatch theirs: {theirs} ours: {ours}")

        return cls(
            source_port=source_port,
            destination_port=destination_port,
            verification_tag=verification_tag,
            chunks=chunks,
        )

    def marshal(self) -> bytes:
        """Return the wire form of this packet with its checksum filled in."""
        raw = bytearray(
            _COMMON_HEADER.pack(
                self.source_port & 0xFFFF,
                self.destination_port & 0xFFFF,
                self.verification_tag & 0xFFFFFFFF,
            )
        )
        raw += bytes(4)
        for chunk in self.chunks:
            raw += chunk.marshal()
            raw += bytes(get_padding(len(raw)))

        _CHECKSUM.pack_into(raw, 8, generate_packet_checksum(raw))
        return bytes(raw)

    def __str__(self) -> str:
        res = (
            "Packet:\n"
            f"\tsourcePort: {self.source_port}\n"
            f"\tdestinationPort: {self.destination_port}\n"
            f"\tverificationTag: {self.verification_tag}\n"
            "\t"
        )
        for index, chunk in enumerate(self.chunks):
            res += f"Chunk {index}:\n {chunk}"
        return res