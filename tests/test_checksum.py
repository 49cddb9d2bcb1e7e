import ipaddress

import pytest

from netpkt.checksum import cal_checksum, ipv4_cal_checksum

IP_HEADER = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")


def test_all_ones_word_gives_zero():
    assert cal_checksum(bytes([255, 255])) == 0


def test_empty_buffer():
    assert cal_checksum(b"") == 0xFFFF


def test_odd_length_is_zero_padded():
    assert cal_checksum(b"\x01") == cal_checksum(b"\x01\x00")
    assert cal_checksum(b"\x01") == 0xFEFF


def test_known_ipv4_header():
    assert cal_checksum(IP_HEADER) == 0xB861


def test_verification_yields_zero():
    header = bytearray(IP_HEADER)
    header[10:12] = cal_checksum(header).to_bytes(2, "big")
    assert cal_checksum(header) == 0


def test_accepts_bytearray_and_memoryview():
    assert cal_checksum(bytearray(IP_HEADER)) == cal_checksum(memoryview(IP_HEADER))


@pytest.mark.parametrize("payload", [b"", b"a", b"hello", b"\x00" * 17, bytes(range(64))])
def test_udp_checksum_round_trip(payload):
    src = ipaddress.IPv4Address("10.0.0.1")
    dst = ipaddress.IPv4Address("10.0.0.2")
    length = 8 + len(payload)
    segment = bytearray(
        (1234).to_bytes(2, "big") + (80).to_bytes(2, "big") + length.to_bytes(2, "big") + b"\x00\x00" + payload
    )
    segment[6:8] = ipv4_cal_checksum(segment, src, dst, 17).to_bytes(2, "big")
    assert ipv4_cal_checksum(segment, src, dst, 17) == 0


def test_pseudo_header_equivalence():
    data = b"\x12\x34\x56\x78\x9a"
    pseudo = bytes([10, 0, 0, 1, 10, 0, 0, 2, 0, 6]) + len(data).to_bytes(2, "big")
    assert ipv4_cal_checksum(data, "10.0.0.1", "10.0.0.2", 6) == cal_checksum(pseudo + data + b"\x00")


def test_address_forms_agree():
    data = b"abcd"
    assert ipv4_cal_checksum(data, "192.168.0.1", "192.168.0.2", 17) == ipv4_cal_checksum(
        data, ipaddress.IPv4Address("192.168.0.1"), int(ipaddress.IPv4Address("192.168.0.2")), 17
    )


def test_invalid_address_raises():
    with pytest.raises(ValueError):
        ipv4_cal_checksum(b"", "not-an-ip", "10.0.0.1", 6)