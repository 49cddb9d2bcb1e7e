"""IPv4 packet view (RFC 791)."""

from __future__ import annotations

import ipaddress

from netpkt.checksum import cal_checksum
from netpkt.ip_protocol import IpProtocol

MIN_HEADER_LEN = 20


class IpV4Packet:
    """A view over an IPv4 datagram; writes go straight into the buffer.

    The header length field counts 4-byte words, so a header is at most
    60 bytes and options at most 40.
    """

    def __init__(self, buffer):
        if len(buffer) < MIN_HEADER_LEN:
            raise ValueError("len < 20")
        if buffer[0] >> 4 != 4:
            raise ValueError("not ipv4")
        self.buffer = buffer
        if len(buffer) < self.header_len * 4:
            raise ValueError("head_len err")

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating it."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def _header_end(self) -> int:
        return self.header_len * 4

    @property
    def version(self) -> int:
        """IP version; 4 for IPv4."""
        return self.buffer[0] >> 4

    @property
    def header_len(self) -> int:
        """Header length in 4-byte words."""
        return self.buffer[0] & 0x0F

    @property
    def dscp(self) -> int:
        """Differentiated services code point (upper six bits of byte 1)."""
        return self.buffer[1] >> 2

    @property
    def ecn(self) -> int:
        """Explicit congestion notification (lower two bits of byte 1)."""
        return self.buffer[1] & 0b11

    @property
    def length(self) -> int:
        """Total length of the datagram in bytes."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def id(self) -> int:
        """Identification shared by all fragments of one datagram."""
        return int.from_bytes(self.buffer[4:6], "big")

    @property
    def flags(self) -> int:
        """The three flag bits: reserved, don't fragment, more fragments."""
        return self.buffer[6] >> 5

    @flags.setter
    def flags(self, value: int) -> None:
        self.buffer[6] = (self.buffer[6] & 0x1F) | ((int(value) & 0x07) << 5)

    @property
    def offset(self) -> int:
        """Fragment offset (13 bits)."""
        return int.from_bytes(self.buffer[6:8], "big") & 0x1FFF

    @property
    def ttl(self) -> int:
        """Time to live."""
        return self.buffer[8]

    @property
    def protocol(self) -> IpProtocol:
        """Upper-layer protocol."""
        return IpProtocol(self.buffer[9])

    @protocol.setter
    def protocol(self, value: int) -> None:
        self.buffer[9] = int(IpProtocol(int(value)))

    @property
    def checksum(self) -> int:
        """Header checksum as stored."""
        return int.from_bytes(self.buffer[10:12], "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies over the header."""
        return self.checksum == 0 or cal_checksum(self.header) == 0

    @property
    def source_ip(self) -> ipaddress.IPv4Address:
        """Source address."""
        return ipaddress.IPv4Address(bytes(self.buffer[12:16]))

    @source_ip.setter
    def source_ip(self, value) -> None:
        self.buffer[12:16] = ipaddress.IPv4Address(value).packed

    @property
    def destination_ip(self) -> ipaddress.IPv4Address:
        """Destination address."""
        return ipaddress.IPv4Address(bytes(self.buffer[16:20]))

    @destination_ip.setter
    def destination_ip(self, value) -> None:
        self.buffer[16:20] = ipaddress.IPv4Address(value).packed

    @property
    def options(self) -> bytes:
        """Header bytes after the fixed 20-byte part."""
        return bytes(self.buffer[MIN_HEADER_LEN:self._header_end])

    @property
    def header(self) -> bytes:
        """The whole header, options included."""
        return bytes(self.buffer[:self._header_end])

    @property
    def payload(self) -> bytes:
        """Bytes following the header."""
        return bytes(self.buffer[self._header_end:])

    def update_checksum(self) -> None:
        """Recompute and store the header checksum."""
        self.buffer[10:12] = b"\x00\x00"
        self.buffer[10:12] = cal_checksum(self.header).to_bytes(2, "big")

    def __repr__(self) -> str:
        return (
            f"IpV4Packet(version={self.version}, header_len={self.header_len}, "
            f"dscp={self.dscp}, ecn={self.ecn}, length={self.length}, id={self.id}, "
            f"flags={self.flags}, offset={self.offset}, ttl={self.ttl}, "
            f"protocol={self.protocol!r}, checksum={self.checksum}, "
            f"is_valid={self.is_valid}, source={self.source_ip}, "
            f"destination={self.destination_ip}, options={self.options!r}, "
            f"payload={self.payload!r})"
        )


def parse_ip_packet(buffer) -> IpV4Packet:
    """Parse ``buffer`` as an IP packet; only version 4 is supported."""
    if not buffer or buffer[0] >> 4 != 4:
        raise ValueError("unsupported IP version")
    return IpV4Packet(buffer)