"""UDP datagram view (RFC 768) with IPv4 pseudo-header checksums."""

from __future__ import annotations

import ipaddress

from netpkt.checksum import ipv4_cal_checksum
from netpkt.ip_protocol import IpProtocol

HEADER_LEN = 8


class UdpPacket:
    """A view over a UDP datagram carried by IPv4; writes go into the buffer."""

    def __init__(self, source_ip, destination_ip, buffer):
        if len(buffer) < HEADER_LEN:
            raise ValueError(f"UDP datagram shorter than {HEADER_LEN} bytes")
        self.source_ip = ipaddress.IPv4Address(source_ip)
        self.destination_ip = ipaddress.IPv4Address(destination_ip)
        self.buffer = buffer

    @classmethod
    def unchecked(cls, source_ip, destination_ip, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.source_ip = ipaddress.IPv4Address(source_ip)
        packet.destination_ip = ipaddress.IPv4Address(destination_ip)
        packet.buffer = buffer
        return packet

    @property
    def source_port(self) -> int:
        """Source port."""
        return int.from_bytes(self.buffer[0:2], "big")

    @source_port.setter
    def source_port(self, value: int) -> None:
        self.buffer[0:2] = int(value).to_bytes(2, "big")

    @property
    def destination_port(self) -> int:
        """Destination port."""
        return int.from_bytes(self.buffer[2:4], "big")

    @destination_port.setter
    def destination_port(self, value: int) -> None:
        self.buffer[2:4] = int(value).to_bytes(2, "big")

    @property
    def length(self) -> int:
        """Length of header plus data, as stored."""
        return int.from_bytes(self.buffer[4:6], "big")

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return int.from_bytes(self.buffer[6:8], "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0 under IPv4) or verifies."""
        return self.checksum == 0 or self._cal_checksum() == 0

    @property
    def payload(self) -> bytes:
        """Bytes following the 8-byte header."""
        return bytes(self.buffer[HEADER_LEN:])

    def _cal_checksum(self) -> int:
        return ipv4_cal_checksum(
            self.buffer, self.source_ip, self.destination_ip, IpProtocol.UDP
        )

    def update_checksum(self) -> None:
        """Recompute and store the checksum over pseudo-header and datagram."""
        self.buffer[6:8] = b"\x00\x00"
        self.buffer[6:8] = self._cal_checksum().to_bytes(2, "big")

    def __repr__(self) -> str:
        return (
            f"UdpPacket(source={self.source_port}, destination={self.destination_port}, "
            f"length={self.length}, checksum={self.checksum}, is_valid={self.is_valid}, "
            f"payload={self.payload!r})"
        )