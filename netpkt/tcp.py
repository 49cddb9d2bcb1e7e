"""TCP segment view (RFC 793) with IPv4 pseudo-header checksums."""

from __future__ import annotations

import ipaddress
from enum import IntFlag

from netpkt.checksum import ipv4_cal_checksum
from netpkt.ip_protocol import IpProtocol

MIN_HEADER_LEN = 20


class TcpFlags(IntFlag):
    """TCP control bits."""

    FIN = 0b0000_0001
    SYN = 0b0000_0010
    RST = 0b0000_0100
    PSH = 0b0000_1000
    ACK = 0b0001_0000
    URG = 0b0010_0000

    def __str__(self) -> str:
        order = (
            TcpFlags.URG,
            TcpFlags.ACK,
            TcpFlags.PSH,
            TcpFlags.RST,
            TcpFlags.SYN,
            TcpFlags.FIN,
        )
        names = [flag.name for flag in order if int(self) & int(flag)]
        return "|".join(names) if names else "NULL"


class TcpPacket:
    """A view over a TCP segment carried by IPv4; writes go into the buffer."""

    def __init__(self, source_ip, destination_ip, buffer):
        if len(buffer) < MIN_HEADER_LEN:
            raise ValueError(f"TCP segment shorter than {MIN_HEADER_LEN} bytes")
        self.source_ip = ipaddress.IPv4Address(source_ip)
        self.destination_ip = ipaddress.IPv4Address(destination_ip)
        self.buffer = buffer
        if len(buffer) < self.data_offset * 4:
            raise ValueError("TCP data offset beyond end of segment")

    @classmethod
    def unchecked(cls, source_ip, destination_ip, buffer):
        """Wrap ``buffer`` without validating it."""
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
    def sequence(self) -> int:
        """Sequence number."""
        return int.from_bytes(self.buffer[4:8], "big")

    @property
    def acknowledgment(self) -> int:
        """Acknowledgment number."""
        return int.from_bytes(self.buffer[8:12], "big")

    @property
    def data_offset(self) -> int:
        """Header length in 4-byte words."""
        return self.buffer[12] >> 4

    @property
    def flags(self) -> TcpFlags:
        """Control bits."""
        return TcpFlags(self.buffer[13])

    @property
    def window(self) -> int:
        """Receive window."""
        return int.from_bytes(self.buffer[14:16], "big")

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return int.from_bytes(self.buffer[16:18], "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return self.checksum == 0 or self._cal_checksum() == 0

    @property
    def urgent_pointer(self) -> int:
        """Urgent pointer."""
        return int.from_bytes(self.buffer[18:20], "big")

    @property
    def options(self) -> bytes:
        """Option bytes between the fixed header and the data."""
        return bytes(self.buffer[MIN_HEADER_LEN:self.data_offset * 4])

    @property
    def payload(self) -> bytes:
        """Segment data."""
        return bytes(self.buffer[self.data_offset * 4:])

    def _cal_checksum(self) -> int:
        return ipv4_cal_checksum(
            self.buffer, self.source_ip, self.destination_ip, IpProtocol.TCP
        )

    def update_checksum(self) -> None:
        """Recompute and store the checksum over pseudo-header and segment."""
        self.buffer[16:18] = b"\x00\x00"
        self.buffer[16:18] = self._cal_checksum().to_bytes(2, "big")

    def __repr__(self) -> str:
        return (
            f"TcpPacket(source={self.source_port}, destination={self.destination_port}, "
            f"sequence={self.sequence}, acknowledgment={self.acknowledgment}, "
            f"offset={self.data_offset}, flags={self.flags}, window={self.window}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"pointer={self.urgent_pointer}, options={self.options!r}, "
            f"payload={self.payload!r})"
        )