"""ICMP message view (RFC 792)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Union

from netpkt.checksum import cal_checksum
from netpkt.ipv4 import IpV4Packet

HEADER_LEN = 8


class _OpenEnum(IntEnum):
    """IntEnum that maps unlisted byte values to UNKNOWN_<n> members."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFF:
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value}"
            member._value_ = value
            return member
        return None

    @property
    def is_unknown(self) -> bool:
        """True for values without a named member."""
        return self._name_ not in type(self).__members__


class IcmpKind(_OpenEnum):
    """ICMP message type."""

    ECHO_REPLY = 0
    DESTINATION_UNREACHABLE = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO_REQUEST = 8
    ROUTER_ADVERTISEMENT = 9
    ROUTER_SOLICITATION = 10
    TIME_EXCEEDED = 11
    PARAMETER_PROBLEM = 12
    TIMESTAMP_REQUEST = 13
    TIMESTAMP_REPLY = 14
    INFORMATION_REQUEST = 15
    INFORMATION_REPLY = 16
    ADDRESS_MASK_REQUEST = 17
    ADDRESS_MASK_REPLY = 18
    TRACE_ROUTE = 30


class DestinationUnreachableCode(_OpenEnum):
    """Codes of Destination Unreachable messages."""

    DESTINATION_NETWORK_UNREACHABLE = 0
    DESTINATION_HOST_UNREACHABLE = 1
    DESTINATION_PROTOCOL_UNREACHABLE = 2
    DESTINATION_PORT_UNREACHABLE = 3
    FRAGMENTATION_REQUIRED = 4
    SOURCE_ROUTE_FAILED = 5
    DESTINATION_NETWORK_UNKNOWN = 6
    DESTINATION_HOST_UNKNOWN = 7
    SOURCE_HOST_ISOLATED = 8
    NETWORK_ADMINISTRATIVELY_PROHIBITED = 9
    HOST_ADMINISTRATIVELY_PROHIBITED = 10
    NETWORK_UNREACHABLE_FOR_TOS = 11
    HOST_UNREACHABLE_FOR_TOS = 12
    COMMUNICATION_ADMINISTRATIVELY_PROHIBITED = 13
    HOST_PRECEDENCE_VIOLATION = 14
    PRECEDENT_CUTOFF_IN_EFFECT = 15


class RedirectCode(_OpenEnum):
    """Codes of Redirect messages."""

    REDIRECT_DATAGRAM_FOR_NETWORK = 0
    REDIRECT_DATAGRAM_FOR_HOST = 1
    REDIRECT_DATAGRAM_FOR_TOS_AND_NETWORK = 2
    REDIRECT_DATAGRAM_FOR_TOS_AND_HOST = 3


class TimeExceededCode(_OpenEnum):
    """Codes of Time Exceeded messages."""

    TRANSIT = 0
    REASSEMBLY = 1


class ParameterProblemCode(_OpenEnum):
    """Codes of Parameter Problem messages."""

    POINTER_INDICATES_ERROR = 0
    MISSING_REQUIRED_DATA = 1
    BAD_LENGTH = 2


Code = Union[DestinationUnreachableCode, RedirectCode, ParameterProblemCode, int]


def icmp_code(kind: int, code: int) -> Code:
    """Interpret ``code`` according to the message ``kind``.

    Kinds without a dedicated code table yield the plain integer.
    """
    kind = IcmpKind(int(kind))
    if kind is IcmpKind.DESTINATION_UNREACHABLE:
        return DestinationUnreachableCode(code)
    if kind is IcmpKind.REDIRECT:
        return RedirectCode(code)
    if kind is IcmpKind.PARAMETER_PROBLEM:
        return ParameterProblemCode(code)
    return int(code)


@dataclass(frozen=True)
class HeaderOther:
    """The four header bytes after the checksum, interpreted by message kind.

    ``variant`` is one of ``"identifier"`` (identifier, sequence),
    ``"unused"``, ``"address"`` or ``"unknown"`` (four bytes each), or
    ``"pointer"`` (one byte).
    """

    variant: str
    values: tuple


class Timestamp(NamedTuple):
    """Originate, receive and transmit timestamps."""

    originate: int
    receive: int
    transmit: int


_IDENTIFIED = {
    IcmpKind.ECHO_REPLY,
    IcmpKind.ECHO_REQUEST,
    IcmpKind.TIMESTAMP_REQUEST,
    IcmpKind.TIMESTAMP_REPLY,
    IcmpKind.INFORMATION_REQUEST,
    IcmpKind.INFORMATION_REPLY,
}
_UNUSED = {
    IcmpKind.DESTINATION_UNREACHABLE,
    IcmpKind.TIME_EXCEEDED,
    IcmpKind.SOURCE_QUENCH,
}
_CARRIES_IP = {
    IcmpKind.DESTINATION_UNREACHABLE,
    IcmpKind.TIME_EXCEEDED,
    IcmpKind.PARAMETER_PROBLEM,
    IcmpKind.SOURCE_QUENCH,
    IcmpKind.REDIRECT,
}
_TIMESTAMPED = {IcmpKind.TIMESTAMP_REQUEST, IcmpKind.TIMESTAMP_REPLY}


class IcmpPacket:
    """A view over an ICMP message; writes go straight into the buffer."""

    def __init__(self, buffer):
        if len(buffer) < HEADER_LEN:
            raise ValueError(f"ICMP message shorter than {HEADER_LEN} bytes")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def kind(self) -> IcmpKind:
        """Message type."""
        return IcmpKind(self.buffer[0])

    @kind.setter
    def kind(self, value: int) -> None:
        self.buffer[0] = int(IcmpKind(int(value)))

    @property
    def code(self) -> Code:
        """Message code, interpreted according to the type."""
        return icmp_code(self.kind, self.buffer[1])

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def header_other(self) -> HeaderOther:
        """Bytes 4..8 of the header, interpreted by message type."""
        kind = self.kind
        rest = bytes(self.buffer[4:8])
        if kind in _IDENTIFIED:
            return HeaderOther(
                "identifier",
                (int.from_bytes(rest[0:2], "big"), int.from_bytes(rest[2:4], "big")),
            )
        if kind in _UNUSED:
            return HeaderOther("unused", tuple(rest))
        if kind is IcmpKind.REDIRECT:
            return HeaderOther("address", tuple(rest))
        if kind is IcmpKind.PARAMETER_PROBLEM:
            return HeaderOther("pointer", (rest[0],))
        return HeaderOther("unknown", tuple(rest))

    @property
    def payload(self) -> bytes:
        """Bytes following the 8-byte header."""
        return bytes(self.buffer[HEADER_LEN:])

    @property
    def description(self) -> Union[IpV4Packet, Timestamp, bytes]:
        """The body, interpreted by message type.

        Error messages yield the embedded IPv4 header when it parses,
        timestamp messages yield a :class:`Timestamp`, anything else the
        raw payload.
        """
        kind = self.kind
        payload = self.payload
        if kind in _CARRIES_IP:
            try:
                return IpV4Packet(payload)
            except ValueError:
                return payload
        if kind in _TIMESTAMPED:
            if len(payload) < 12:
                raise ValueError("timestamp message shorter than 12 payload bytes")
            return Timestamp(
                int.from_bytes(payload[0:4], "big"),
                int.from_bytes(payload[4:8], "big"),
                int.from_bytes(payload[8:12], "big"),
            )
        return payload

    def update_checksum(self) -> None:
        """Recompute and store the checksum over the whole message."""
        self.buffer[2:4] = b"\x00\x00"
        self.buffer[2:4] = cal_checksum(self.buffer).to_bytes(2, "big")

    def __repr__(self) -> str:
        name = "IcmpPacket" if self.is_valid else "IcmpPacket!"
        return (
            f"{name}(kind={self.kind!r}, code={self.code!r}, "
            f"checksum={self.checksum}, payload={self.payload!r})"
        )