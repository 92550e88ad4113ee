"""Encoding and decoding of SCTP packets, chunks and error causes."""

__version__ = "0.1.0"

__all__ = [
    "chunktype",
    "chunkheader",
    "error_cause",
    "chunk_forward_tsn",
    "chunk_payload_data",
    "chunk_selective_ack",
    "chunk_shutdown",
    "packet",
    "control_queue",
]