import pytest

from sctpwire.chunk_payload_data import (
    PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK,
    PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK,
    PAYLOAD_DATA_IMMEDIATE_SACK,
    PAYLOAD_DATA_UNORDERED_BITMASK,
    ChunkPayloadData,
    PayloadProtocolIdentifier,
    payload_protocol_name,
)
from sctpwire.chunkheader import SctpError
from sctpwire.chunktype import ChunkType


def _chunk(**kwargs):
    defaults = dict(
        tsn=1,
        stream_identifier=2,
        stream_sequence_number=3,
        payload_type=PayloadProtocolIdentifier.WEBRTC_STRING,
        user_data=b"ab",
        beginning_fragment=True,
        ending_fragment=True,
    )
    defaults.update(kwargs)
    return ChunkPayloadData(**defaults)


def test_marshal_wire_bytes():
    expected = bytes(
        [0x00, 0x03, 0x00, 0x12,
         0x00, 0x00, 0x00, 0x01,
         0x00, 0x02, 0x00, 0x03,
         0x00, 0x00, 0x00, 0x33,
         0x61, 0x62]
    )
    assert _chunk().marshal() == expected


def test_round_trip_fields():
    original = _chunk(unordered=True, immediate_sack=True, user_data=b"hello")
    parsed = ChunkPayloadData.unmarshal(original.marshal())
    assert parsed.chunk_type == ChunkType.PAYLOAD_DATA
    assert parsed.tsn == original.tsn
    assert parsed.stream_identifier == original.stream_identifier
    assert parsed.stream_sequence_number == original.stream_sequence_number
    assert parsed.payload_type == PayloadProtocolIdentifier.WEBRTC_STRING
    assert parsed.user_data == b"hello"
    assert parsed.unordered and parsed.immediate_sack
    assert parsed.beginning_fragment and parsed.ending_fragment


def test_round_trip_bytes():
    raw = _chunk(user_data=b"xyz", unordered=True).marshal()
    assert ChunkPayloadData.unmarshal(raw).marshal() == raw


@pytest.mark.parametrize(
    "flags",
    [
        PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK,
        PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK,
        PAYLOAD_DATA_UNORDERED_BITMASK,
        PAYLOAD_DATA_IMMEDIATE_SACK,
    ],
)
def test_single_flag_round_trip(flags):
    chunk = _chunk(
        ending_fragment=bool(flags & PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK),
        beginning_fragment=bool(flags & PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK),
        unordered=bool(flags & PAYLOAD_DATA_UNORDERED_BITMASK),
        immediate_sack=bool(flags & PAYLOAD_DATA_IMMEDIATE_SACK),
    )
    raw = chunk.marshal()
    assert raw[1] == flags
    assert ChunkPayloadData.unmarshal(raw).flags == flags


def test_unknown_payload_type_kept():
    raw = _chunk(payload_type=999).marshal()
    parsed = ChunkPayloadData.unmarshal(raw)
    assert parsed.payload_type == 999
    assert payload_protocol_name(parsed.payload_type) == "Unknown Payload Protocol Identifier: 999"


def test_unmarshal_too_short():
    with pytest.raises(SctpError):
        ChunkPayloadData.unmarshal(bytes([0x00, 0x03, 0x00, 0x08, 0, 0, 0, 1]))


def test_unmarshal_header_too_short():
    with pytest.raises(SctpError):
        ChunkPayloadData.unmarshal(b"\x00\x03")


@pytest.mark.parametrize(
    "value,name",
    [
        (PayloadProtocolIdentifier.WEBRTC_DCEP, "WebRTC DCEP"),
        (PayloadProtocolIdentifier.WEBRTC_STRING, "WebRTC String"),
        (PayloadProtocolIdentifier.WEBRTC_BINARY, "WebRTC Binary"),
        (PayloadProtocolIdentifier.WEBRTC_STRING_EMPTY, "WebRTC String (Empty)"),
        (PayloadProtocolIdentifier.WEBRTC_BINARY_EMPTY, "WebRTC Binary (Empty)"),
        (PayloadProtocolIdentifier.UNKNOWN, "Unknown Payload Protocol Identifier: 0"),
    ],
)
def test_payload_protocol_names(value, name):
    assert payload_protocol_name(value) == name
    assert str(value) == name


def test_check_does_not_abort():
    assert _chunk().check() is False


def test_abandoned_requires_all_inflight():
    chunk = _chunk()
    chunk.set_abandoned(True)
    assert chunk.abandoned() is False
    chunk.set_all_inflight()
    assert chunk.abandoned() is True


def test_fragments_share_head_state():
    head = _chunk(ending_fragment=False)
    middle = _chunk(beginning_fragment=False, ending_fragment=False, head=head)
    tail = _chunk(beginning_fragment=False, head=head)

    middle.set_abandoned(True)
    assert head.abandoned() is False
    middle.set_all_inflight()
    assert tail.abandoned() is False

    tail.set_all_inflight()
    assert head.abandoned() is True
    assert middle.abandoned() is True
    assert tail.abandoned() is True


def test_set_abandoned_false_clears():
    chunk = _chunk()
    chunk.set_all_inflight()
    chunk.set_abandoned(True)
    chunk.set_abandoned(False)
    assert chunk.abandoned() is False


def test_str_shows_type_and_tsn():
    assert str(_chunk(tsn=7)) == "DATA\n7"