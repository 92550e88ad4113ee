"""The common header shared by every SCTP chunk."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .chunktype import as_chunk_type, chunk_type_name

CHUNK_HEADER_SIZE = 4

_HEADER = struct.Struct(">BBH")


class SctpError(ValueError):
    """Raised when SCTP data cannot be parsed or built."""


def get_padding(length: int) -> int:
    """Return how many zero bytes pad ``length`` up to a multiple of four."""
    return (4 - length % 4) % 4


def pad_bytes(data: bytes, padding: int) -> bytes:
    """Return ``data`` followed by ``padding`` zero bytes."""
    if padding <= 0:
        return bytes(data)
    return bytes(data) + bytes(padding)


@dataclass
class ChunkHeader:
    """Chunk type, flags and value of an SCTP chunk."""

    chunk_type: int = 0
    flags: int = 0
    raw: bytes = b""

    @classmethod
    def unmarshal(cls, raw: bytes):
        """Parse the chunk header and value from the start of ``raw``."""
        if len(raw) < CHUNK_HEADER_SIZE:
            raise SctpError(
                f"raw is too small for a SCTP chunk: raw only {len(raw)} bytes, "
                f"{CHUNK_HEADER_SIZE} is the minimum length"
            )
        typ, flags, length = _HEADER.unpack_from(raw)
        # The length is an unsigned 16-bit field that includes the header.
        value_length = (length - CHUNK_HEADER_SIZE) & 0xFFFF
        end = CHUNK_HEADER_SIZE + value_length
        after_value = len(raw) - end
        if after_value < 0:
            raise SctpError(
                "not enough data left in SCTP packet to satisfy requested length: "
                f"remain {value_length} req {len(raw) - CHUNK_HEADER_SIZE}"
            )
        if after_value < 4:
            # Terminating padding is at most three bytes and must be zero.
            for offset in range(len(raw) - 1, end - 1, -1):
                if raw[offset] != 0:
                    raise SctpError(f"chunk padding is non-zero at offset: {offset}")
        return cls(chunk_type=as_chunk_type(typ), flags=flags, raw=bytes(raw[CHUNK_HEADER_SIZE:end]))

    def marshal(self) -> bytes:
        """Return the header followed by the value, without trailing padding."""
        length = (len(self.raw) + CHUNK_HEADER_SIZE) & 0xFFFF
        return _HEADER.pack(int(self.chunk_type) & 0xFF, self.flags & 0xFF, length) + bytes(self.raw)

    def value_length(self) -> int:
        """Return the length of the chunk value."""
        return len(self.raw)

    def __str__(self) -> str:
        return chunk_type_name(self.chunk_type)