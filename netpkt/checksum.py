"""Internet checksum (RFC 1071) helpers shared by the protocol parsers."""

from __future__ import annotations

import ipaddress
import struct
from typing import Union

AddressLike = Union[ipaddress.IPv4Address, str, int, bytes]


def _word_sum(data: bytes) -> int:
    """Sum the data as big-endian 16-bit words, zero-padding an odd tail."""
    if len(data) % 2:
        data += b"\x00"
    return sum(struct.unpack(f">{len(data) // 2}H", data))


def _fold(total: int) -> int:
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def cal_checksum(buffer: bytes) -> int:
    """Return the one's-complement checksum of ``buffer``.

    Computing it over data that already carries a correct checksum yields 0.
    """
    return _fold(_word_sum(bytes(buffer)))


def ipv4_cal_checksum(
    buffer: bytes,
    src_ip: AddressLike,
    dest_ip: AddressLike,
    protocol: int,
) -> int:
    """Return the checksum of an upper-layer segment with the IPv4 pseudo-header."""
    data = bytes(buffer)
    pseudo = (
        ipaddress.IPv4Address(src_ip).packed
        + ipaddress.IPv4Address(dest_ip).packed
        + bytes((0, int(protocol) & 0xFF))
    )
    return _fold(_word_sum(pseudo) + len(data) + _word_sum(data))