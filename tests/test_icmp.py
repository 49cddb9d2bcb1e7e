import pytest

from netpkt.checksum import cal_checksum
from netpkt.icmp import (
    DestinationUnreachableCode,
    HeaderOther,
    IcmpKind,
    IcmpPacket,
    ParameterProblemCode,
    RedirectCode,
    TimeExceededCode,
    Timestamp,
    icmp_code,
)
from netpkt.ipv4 import IpV4Packet


def _echo_request(ident=0x1234, seq=7, data=b"hello"):
    return bytearray(
        bytes((8, 0, 0, 0)) + ident.to_bytes(2, "big") + seq.to_bytes(2, "big") + data
    )


def _ipv4_header():
    header = bytearray(20)
    header[0] = 0x45
    header[9] = 17
    header[12:16] = bytes((10, 0, 0, 1))
    header[16:20] = bytes((10, 0, 0, 2))
    return header


def test_too_short_rejected():
    with pytest.raises(ValueError):
        IcmpPacket(bytearray(7))


def test_unchecked_skips_validation():
    packet = IcmpPacket.unchecked(bytearray(b"\x08"))
    assert packet.kind is IcmpKind.ECHO_REQUEST


def test_kind_values_from_wire():
    assert IcmpKind(0) is IcmpKind.ECHO_REPLY
    assert IcmpKind(8) is IcmpKind.ECHO_REQUEST
    assert IcmpKind(30) is IcmpKind.TRACE_ROUTE


def test_unknown_kind_round_trips():
    kind = IcmpKind(99)
    assert kind.is_unknown
    assert int(kind) == 99
    assert not IcmpKind.ECHO_REPLY.is_unknown


def test_kind_setter_writes_buffer():
    packet = IcmpPacket(_echo_request())
    packet.kind = IcmpKind.ECHO_REPLY
    assert packet.buffer[0] == 0
    assert packet.kind is IcmpKind.ECHO_REPLY


def test_update_checksum_makes_valid():
    packet = IcmpPacket(_echo_request())
    packet.update_checksum()
    assert packet.checksum != 0
    assert packet.is_valid
    assert cal_checksum(packet.buffer) == 0


def test_corrupted_checksum_invalid():
    packet = IcmpPacket(_echo_request())
    packet.update_checksum()
    packet.buffer[-1] ^= 0xFF
    assert not packet.is_valid
    assert repr(packet).startswith("IcmpPacket!")


def test_zero_checksum_counts_valid():
    packet = IcmpPacket(_echo_request())
    assert packet.checksum == 0
    assert packet.is_valid


def test_header_other_identifier():
    packet = IcmpPacket(_echo_request(ident=0x1234, seq=7))
    assert packet.header_other == HeaderOther("identifier", (0x1234, 7))


def test_header_other_pointer_and_address():
    buf = bytearray(bytes((12, 0, 0, 0, 5, 6, 7, 8)))
    assert IcmpPacket(buf).header_other == HeaderOther("pointer", (5,))
    buf[0] = 5
    assert IcmpPacket(buf).header_other == HeaderOther("address", (5, 6, 7, 8))
    buf[0] = 11
    assert IcmpPacket(buf).header_other == HeaderOther("unused", (5, 6, 7, 8))
    buf[0] = 9
    assert IcmpPacket(buf).header_other == HeaderOther("unknown", (5, 6, 7, 8))


def test_code_interpretation():
    assert icmp_code(IcmpKind.DESTINATION_UNREACHABLE, 3) is (
        DestinationUnreachableCode.DESTINATION_PORT_UNREACHABLE
    )
    assert icmp_code(IcmpKind.REDIRECT, 1) is RedirectCode.REDIRECT_DATAGRAM_FOR_HOST
    assert icmp_code(IcmpKind.PARAMETER_PROBLEM, 2) is ParameterProblemCode.BAD_LENGTH
    assert icmp_code(IcmpKind.TIME_EXCEEDED, 1) == 1
    assert icmp_code(IcmpKind.DESTINATION_UNREACHABLE, 200).is_unknown


def test_time_exceeded_code_table():
    assert TimeExceededCode(0) is TimeExceededCode.TRANSIT
    assert TimeExceededCode(1) is TimeExceededCode.REASSEMBLY
    assert TimeExceededCode(9).is_unknown


def test_packet_code():
    buf = bytearray(bytes((3, 4, 0, 0, 0, 0, 0, 0)))
    assert IcmpPacket(buf).code is DestinationUnreachableCode.FRAGMENTATION_REQUIRED


def test_payload():
    packet = IcmpPacket(_echo_request(data=b"hello"))
    assert packet.payload == b"hello"
    assert packet.description == b"hello"


def test_description_embedded_ipv4():
    buf = bytearray(bytes((3, 3, 0, 0, 0, 0, 0, 0))) + _ipv4_header()
    description = IcmpPacket(buf).description
    assert isinstance(description, IpV4Packet)
    assert str(description.source_ip) == "10.0.0.1"
    assert str(description.destination_ip) == "10.0.0.2"


def test_description_error_without_ip_falls_back():
    buf = bytearray(bytes((11, 0, 0, 0, 0, 0, 0, 0)) + b"abc")
    assert IcmpPacket(buf).description == b"abc"


def test_description_timestamp():
    body = (1).to_bytes(4, "big") + (2).to_bytes(4, "big") + (3).to_bytes(4, "big")
    buf = bytearray(bytes((13, 0, 0, 0, 0, 1, 0, 1)) + body)
    assert IcmpPacket(buf).description == Timestamp(1, 2, 3)


def test_description_timestamp_too_short():
    buf = bytearray(bytes((14, 0, 0, 0, 0, 1, 0, 1)) + b"\x00" * 4)
    with pytest.raises(ValueError):
        IcmpPacket(buf).description