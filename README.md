# sctpwire

Encoding and decoding of the SCTP wire format in pure Python, using only the
standard library.

## What it covers

- `sctpwire.packet` – `Packet`, the common header (ports and verification
  tag) followed by chunks. `Packet.unmarshal` checks the CRC32c checksum;
  `Packet.marshal` pads each chunk to four bytes and fills the checksum in.
  `crc32c(data, crc)` and `generate_packet_checksum(raw)` are available on
  their own.
- `sctpwire.chunkheader` – `ChunkHeader` (type, flags, value) with checks of
  the length field and of terminating padding, `get_padding`, `pad_bytes`
  and the `SctpError` exception.
- `sctpwire.chunktype` – the `ChunkType` enum and `chunk_type_name`.
- Chunk classes, each with `unmarshal` (a class method), `marshal` and
  `check` (which returns whether receiving the chunk calls for an abort):
  - `sctpwire.chunk_payload_data.ChunkPayloadData` (DATA), with the
    `PayloadProtocolIdentifier` enum and the sender-side helpers
    `abandoned`, `set_abandoned` and `set_all_inflight`;
  - `sctpwire.chunk_selective_ack.ChunkSelectiveAck` (SACK) and
    `GapAckBlock`;
  - `sctpwire.chunk_forward_tsn.ChunkForwardTSN` (FORWARD-TSN) and
    `ForwardTSNStream`;
  - `sctpwire.chunk_shutdown.ChunkShutdown`, `ChunkShutdownAck` and
    `ChunkShutdownComplete`.
- `sctpwire.error_cause` – `ErrorCause` and the subclasses
  `InvalidMandatoryParameter`, `UnrecognizedChunkType`, `ProtocolViolation`
  and `UserInitiatedAbort`; `build_error_cause(raw)` picks the subclass from
  the cause code; `ErrorCauseCode` and `error_cause_code_name`.
- `sctpwire.control_queue.ControlQueue` – a first-in, first-out list of
  packets with `push`, `push_all`, `pop_all` and `len()`.

## Installation

```
pip install .
```

## Usage

Decode a chunk and encode it again:

```python
from sctpwire.chunk_shutdown import ChunkShutdown

chunk = ChunkShutdown.unmarshal(bytes([0x07, 0x00, 0x00, 0x08, 0x12, 0x34, 0x56, 0x78]))
print(chunk.cumulative_tsn_ack)   # 305419896
assert chunk.marshal() == bytes([0x07, 0x00, 0x00, 0x08, 0x12, 0x34, 0x56, 0x78])
```

Decode a whole packet. A checksum mismatch raises `SctpError`:

```python
from sctpwire.packet import Packet

raw = bytes([0x13, 0x88, 0x13, 0x88, 0x00, 0x00, 0x00, 0x00, 0x06, 0xa9, 0x00, 0xe1])
packet = Packet.unmarshal(raw)
print(packet.source_port, packet.destination_port)   # 5000 5000
assert packet.marshal() == raw
```

Malformed input raises `sctpwire.chunkheader.SctpError` (a `ValueError`)
with a message saying what was wrong:

```python
from sctpwire.chunkheader import SctpError
from sctpwire.chunk_forward_tsn import ChunkForwardTSN

try:
    ChunkForwardTSN.unmarshal(bytes([0xc0, 0x00, 0x00, 0x04]))
except SctpError as exc:
    print(exc)   # chunk too short
```

## What it does not do

- INIT, INIT-ACK, ABORT, COOKIE-ECHO, COOKIE-ACK, HEARTBEAT, RECONFIG and
  ERROR chunks inside a packet are kept as plain `ChunkHeader` objects with
  their value as raw bytes; their fields and parameters are not decoded.
  Other chunk types, such as HEARTBEAT-ACK and ECNE, make
  `Packet.unmarshal` raise `SctpError`.
- There is no association, stream or retransmission logic, and no network
  transport: the package only turns bytes into objects and back.

## Running the tests

```
pip install .[test]
pytest
```