import ipaddress
import struct

import pytest

from netpkt.checksum import cal_checksum
from netpkt.ip_protocol import IpProtocol
from netpkt.ipv4 import IpV4Packet, parse_ip_packet


def build(
    ihl=5,
    dscp=46,
    ecn=1,
    ident=0x1234,
    flags=2,
    offset=100,
    ttl=64,
    proto=17,
    src="10.0.0.1",
    dst="10.0.0.2",
    options=b"",
    payload=b"hello",
):
    total = ihl * 4 + len(payload)
    header = struct.pack(
        ">BBHHHBBH4s4s",
        (4 << 4) | ihl,
        (dscp << 2) | ecn,
        total,
        ident,
        (flags << 13) | offset,
        ttl,
        proto,
        0,
        ipaddress.IPv4Address(src).packed,
        ipaddress.IPv4Address(dst).packed,
    )
    return bytearray(header + options + payload)


def test_fields_read_back():
    packet = IpV4Packet(build())
    assert packet.version == 4
    assert packet.header_len == 5
    assert packet.dscp == 46
    assert packet.ecn == 1
    assert packet.length == 25
    assert packet.id == 0x1234
    assert packet.flags == 2
    assert packet.offset == 100
    assert packet.ttl == 64
    assert packet.protocol is IpProtocol.UDP
    assert packet.source_ip == ipaddress.IPv4Address("10.0.0.1")
    assert packet.destination_ip == ipaddress.IPv4Address("10.0.0.2")
    assert packet.options == b""
    assert packet.payload == b"hello"


def test_options_and_payload_split_by_header_len():
    packet = IpV4Packet(build(ihl=6, options=b"\x01\x01\x01\x00", payload=b"xyz"))
    assert packet.options == b"\x01\x01\x01\x00"
    assert len(packet.header) == 24
    assert packet.payload == b"xyz"


def test_too_short_raises():
    with pytest.raises(ValueError, match="len < 20"):
        IpV4Packet(bytearray(19))


def test_wrong_version_raises():
    buf = build()
    buf[0] = 0x65
    with pytest.raises(ValueError, match="not ipv4"):
        IpV4Packet(buf)


def test_header_len_beyond_buffer_raises():
    buf = build(payload=b"")
    buf[0] = 0x46
    with pytest.raises(ValueError, match="head_len"):
        IpV4Packet(buf)


def test_unchecked_skips_validation():
    buf = bytearray(b"\x60" + bytes(19))
    packet = IpV4Packet.unchecked(buf)
    assert packet.version == 6


def test_update_checksum_makes_header_valid():
    packet = IpV4Packet(build())
    packet.update_checksum()
    assert packet.checksum != 0
    assert cal_checksum(packet.header) == 0
    assert packet.is_valid


def test_known_header_checksum():
    buf = bytearray.fromhex("4500007300004000401100 00c0a80001c0a800c7".replace(" ", ""))
    packet = IpV4Packet(buf)
    packet.update_checksum()
    assert packet.checksum == 0xB861


def test_zero_checksum_is_valid_and_corruption_detected():
    packet = IpV4Packet(build())
    assert packet.checksum == 0
    assert packet.is_valid
    packet.update_checksum()
    packet.buffer[8] ^= 0xFF
    assert not packet.is_valid


def test_checksum_ignores_payload():
    packet = IpV4Packet(build())
    packet.update_checksum()
    before = packet.checksum
    packet.buffer[-1] ^= 0xFF
    assert packet.is_valid
    packet.update_checksum()
    assert packet.checksum == before


def test_setters_round_trip():
    packet = IpV4Packet(build())
    packet.source_ip = "192.168.1.5"
    packet.destination_ip = ipaddress.IPv4Address("172.16.0.9")
    packet.protocol = IpProtocol.TCP
    assert packet.source_ip == ipaddress.IPv4Address("192.168.1.5")
    assert packet.destination_ip == ipaddress.IPv4Address("172.16.0.9")
    assert packet.protocol is IpProtocol.TCP


def test_flags_setter_keeps_offset():
    packet = IpV4Packet(build(flags=2, offset=100))
    packet.flags = 1
    assert packet.flags == 1
    assert packet.offset == 100


def test_unknown_protocol_number():
    packet = IpV4Packet(build(proto=200))
    assert int(packet.protocol) == 200
    assert packet.protocol.is_unknown


def test_parse_ip_packet():
    packet = parse_ip_packet(build())
    assert packet.ttl == 64


def test_parse_ip_packet_rejects_other_versions():
    with pytest.raises(ValueError):
        parse_ip_packet(bytearray(b"\x60" + bytes(39)))