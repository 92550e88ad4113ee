"""Error causes carried in SCTP ERROR and ABORT chunks."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from .chunkheader import SctpError

ERROR_CAUSE_HEADER_LENGTH = 4

_HEADER = struct.Struct(">HH")


class ErrorCauseCode(IntEnum):
    """Cause codes that appear in ERROR or ABORT chunks."""

    INVALID_STREAM_IDENTIFIER = 1
    MISSING_MANDATORY_PARAMETER = 2
    STALE_COOKIE_ERROR = 3
    OUT_OF_RESOURCE = 4
    UNRESOLVABLE_ADDRESS = 5
    UNRECOGNIZED_CHUNK_TYPE = 6
    INVALID_MANDATORY_PARAMETER = 7
    UNRECOGNIZED_PARAMETERS = 8
    NO_USER_DATA = 9
    COOKIE_RECEIVED_WHILE_SHUTTING_DOWN = 10
    RESTART_OF_AN_ASSOCIATION_WITH_NEW_ADDRESSES = 11
    USER_INITIATED_ABORT = 12
    PROTOCOL_VIOLATION = 13

    def __str__(self) -> str:
        return error_cause_code_name(self)


_NAMES = {
    1: "Invalid Stream Identifier",
    2: "Missing Mandatory Parameter",
    3: "Stale Cookie Error",
    4: "Out Of Resource",
    5: "Unresolvable IP",
    6: "Unrecognized Chunk Type",
    7: "Invalid Mandatory Parameter",
    8: "Unrecognized Parameters",
    9: "No User Data",
    10: "Cookie Received While Shutting Down",
    11: "Restart Of An Association With New Addresses",
    12: "User Initiated Abort",
    13: "Protocol Violation",
}


def error_cause_code_name(value: int) -> str:
    """Return the display name of a cause code, known or not."""
    name = _NAMES.get(int(value))
    if name is None:
        return f"Unknown CauseCode: {int(value)}"
    return name


def _as_code(value: int) -> int:
    try:
        return ErrorCauseCode(value)
    except ValueError:
        return int(value)


@dataclass
class ErrorCause:
    """An error cause: a cause code followed by a cause-specific value."""

    code: int = 0
    value: bytes = b""

    @classmethod
    def unmarshal(cls, raw: bytes):
        """Parse an error cause from the start of ``raw``."""
        if len(raw) < ERROR_CAUSE_HEADER_LENGTH:
            raise SctpError(f"error cause too short: {len(raw)} bytes")
        code, length = _HEADER.unpack_from(raw)
        if length < ERROR_CAUSE_HEADER_LENGTH or length > len(raw):
            raise SctpError(f"invalid error cause length {length} for {len(raw)} bytes")
        return cls(code=_as_code(code), value=bytes(raw[ERROR_CAUSE_HEADER_LENGTH:length]))

    def marshal(self) -> bytes:
        """Return the wire form of this error cause."""
        return _HEADER.pack(int(self.code), self.length()) + bytes(self.value)

    def length(self) -> int:
        """Return the cause length, header included."""
        return (len(self.value) + ERROR_CAUSE_HEADER_LENGTH) & 0xFFFF

    def __str__(self) -> str:
        return error_cause_code_name(self.code)


@dataclass
class InvalidMandatoryParameter(ErrorCause):
    """Invalid Mandatory Parameter error cause."""

    code: int = ErrorCauseCode.INVALID_MANDATORY_PARAMETER


@dataclass
class UnrecognizedChunkType(ErrorCause):
    """Unrecognized Chunk Type error cause, carrying the offending chunk."""

    code: int = ErrorCauseCode.UNRECOGNIZED_CHUNK_TYPE

    @property
    def unrecognized_chunk(self) -> bytes:
        return self.value

    @unrecognized_chunk.setter
    def unrecognized_chunk(self, chunk: bytes) -> None:
        self.value = bytes(chunk)

    def marshal(self) -> bytes:
        self.code = ErrorCauseCode.UNRECOGNIZED_CHUNK_TYPE
        return super().marshal()


@dataclass
class ProtocolViolation(ErrorCause):
    """Protocol Violation error cause with additional information."""

    code: int = ErrorCauseCode.PROTOCOL_VIOLATION

    @classmethod
    def unmarshal(cls, raw: bytes):
        try:
            return super().unmarshal(raw)
        except SctpError as exc:
            raise SctpError(f"unable to unmarshal Protocol Violation error: {exc}") from exc

    @property
    def additional_information(self) -> bytes:
        return self.value

    @additional_information.setter
    def additional_information(self, info: bytes) -> None:
        self.value = bytes(info)

    def __str__(self) -> str:
        text = self.value.decode("utf-8", errors="replace")
        return f"{error_cause_code_name(self.code)}: {text}"


@dataclass
class UserInitiatedAbort(ErrorCause):
    """User Initiated Abort error cause, carrying the upper layer's reason."""

    code: int = ErrorCauseCode.USER_INITIATED_ABORT

    @property
    def upper_layer_abort_reason(self) -> bytes:
        return self.value

    @upper_layer_abort_reason.setter
    def upper_layer_abort_reason(self, reason: bytes) -> None:
        self.value = bytes(reason)

    def marshal(self) -> bytes:
        self.code = ErrorCauseCode.USER_INITIATED_ABORT
        return super().marshal()

    def __str__(self) -> str:
        text = self.value.decode("utf-8", errors="replace")
        return f"{error_cause_code_name(self.code)}: {text}"


_BUILDERS: dict[int, type[ErrorCause]] = {
    ErrorCauseCode.INVALID_MANDATORY_PARAMETER: InvalidMandatoryParameter,
    ErrorCauseCode.UNRECOGNIZED_CHUNK_TYPE: UnrecognizedChunkType,
    ErrorCauseCode.PROTOCOL_VIOLATION: ProtocolViolation,
    ErrorCauseCode.USER_INITIATED_ABORT: UserInitiatedAbort,
}


def build_error_cause(raw: bytes) -> ErrorCause:
    """Parse ``raw`` into the error cause class matching its cause code."""
    if len(raw) < 2:
        raise SctpError(f"error cause too short: {len(raw)} bytes")
    (code,) = struct.unpack_from(">H", raw)
    cause_cls = _BUILDERS.get(code)
    if cause_cls is None:
        raise SctpError(f"BuildErrorCause does not handle: {error_cause_code_name(code)}")
    return cause_cls.unmarshal(raw)