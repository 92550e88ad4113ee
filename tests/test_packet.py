import pytest

from sctpwire.chunk_payload_data import ChunkPayloadData, PayloadProtocolIdentifier
from sctpwire.chunk_shutdown import ChunkShutdown, ChunkShutdownAck
from sctpwire.chunkheader import SctpError
from sctpwire.chunktype import ChunkType
from sctpwire.packet import Packet, crc32c, generate_packet_checksum

HEADER_ONLY = bytes(
    [0x13, 0x88, 0x13, 0x88, 0x00, 0x00, 0x00, 0x00, 0x06, 0xA9, 0x00, 0xE1]
)

RAW_CHUNK = bytes(
    [
        0x13, 0x88, 0x13, 0x88, 0x00, 0x00, 0x00, 0x00, 0x81, 0x46, 0x9D, 0xFC, 0x01, 0x00, 0x00, 0x56, 0x55,
        0xB9, 0x64, 0xA5, 0x00, 0x02, 0x00, 0x00, 0x04, 0x00, 0x08, 0x00, 0xE8, 0x6D, 0x10, 0x30, 0xC0, 0x00, 0x00, 0x04, 0x80,
        0x08, 0x00, 0x09, 0xC0, 0x0F, 0xC1, 0x80, 0x82, 0x00, 0x00, 0x00, 0x80, 0x02, 0x00, 0x24, 0x9F, 0xEB, 0xBB, 0x5C, 0x50,
        0xC9, 0xBF, 0x75, 0x9C, 0xB1, 0x2C, 0x57, 0x4F, 0xA4, 0x5A, 0x51, 0xBA, 0x60, 0x17, 0x78, 0x27, 0x94, 0x5C, 0x31, 0xE6,
        0x5D, 0x5B, 0x09, 0x47, 0xE2, 0x22, 0x06, 0x80, 0x04, 0x00, 0x06, 0x00, 0x01, 0x00, 0x00, 0x80, 0x03, 0x00, 0x06, 0x80, 0xC1, 0x00, 0x00,
    ]
)


def test_unmarshal_too_small():
    with pytest.raises(SctpError):
        Packet.unmarshal(b"")


def test_unmarshal_header_only():
    pkt = Packet.unmarshal(HEADER_ONLY)
    assert pkt.source_port == 5000
    assert pkt.destination_port == 5000
    assert pkt.verification_tag == 0
    assert pkt.chunks == []


def test_unmarshal_with_chunk():
    pkt = Packet.unmarshal(RAW_CHUNK)
    assert len(pkt.chunks) == 1
    assert pkt.chunks[0].chunk_type == ChunkType.INIT
    assert pkt.chunks[0].value_length() == 82


def test_marshal_header_only_round_trip():
    pkt = Packet.unmarshal(HEADER_ONLY)
    assert pkt.marshal() == HEADER_ONLY


def test_checksum_of_header_only():
    assert generate_packet_checksum(HEADER_ONLY) == int.from_bytes(HEADER_ONLY[8:12], "little")


def test_crc32c_check_value():
    assert crc32c(b"123456789") == 0xE3069283


def test_crc32c_chaining_matches_single_pass():
    data = b"hello sctp world"
    assert crc32c(data[7:], crc32c(data[:7])) == crc32c(data)


def test_checksum_mismatch():
    broken = bytearray(HEADER_ONLY)
    broken[8] ^= 0xFF
    with pytest.raises(SctpError, match="checksum mismatch"):
        Packet.unmarshal(bytes(broken))


def test_truncated_chunk_header():
    raw = HEADER_ONLY + b"\x07\x00"
    with pytest.raises(SctpError, match="not enough data"):
        Packet.unmarshal(raw)


def test_unknown_chunk_type():
    raw = HEADER_ONLY + bytes([0x0D, 0x00, 0x00, 0x04])
    with pytest.raises(SctpError, match="unknown chunk type"):
        Packet.unmarshal(raw)


def test_round_trip_with_chunks():
    shutdown = ChunkShutdown(cumulative_tsn_ack=0x12345678)
    data = ChunkPayloadData(
        tsn=7,
        stream_identifier=1,
        stream_sequence_number=2,
        payload_type=PayloadProtocolIdentifier.WEBRTC_STRING,
        user_data=b"abc",
        beginning_fragment=True,
        ending_fragment=True,
    )
    pkt = Packet(source_port=1, destination_port=2, verification_tag=3,
                 chunks=[shutdown, data, ChunkShutdownAck()])
    raw = pkt.marshal()
    assert len(raw) % 4 == 0

    parsed = Packet.unmarshal(raw)
    assert parsed.source_port == 1
    assert parsed.destination_port == 2
    assert parsed.verification_tag == 3
    assert [type(c) for c in parsed.chunks] == [ChunkShutdown, ChunkPayloadData, ChunkShutdownAck]
    assert parsed.chunks[0].cumulative_tsn_ack == 0x12345678
    parsed_data = parsed.chunks[1]
    assert parsed_data.user_data == b"abc"
    assert parsed_data.tsn == 7
    assert parsed_data.payload_type == PayloadProtocolIdentifier.WEBRTC_STRING
    assert parsed_data.beginning_fragment and parsed_data.ending_fragment
    assert parsed.marshal() == raw


def test_str_lists_ports():
    text = str(Packet.unmarshal(HEADER_ONLY))
    assert "sourcePort: 5000" in text
    assert "destinationPort: 5000" in text