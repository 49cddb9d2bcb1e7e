"""IGMP version 1 (RFC 1112) and version 2 (RFC 2236) message views."""

from __future__ import annotations

import ipaddress
from enum import IntEnum

from netpkt.checksum import cal_checksum

MESSAGE_LEN = 8


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


class IgmpType(_OpenEnum):
    """IGMP message types across all versions."""

    QUERY = 0x11
    REPORT_V1 = 0x12
    REPORT_V2 = 0x16
    REPORT_V3 = 0x22
    LEAVE_V2 = 0x17


class IgmpV1Type(_OpenEnum):
    """IGMPv1 message types."""

    QUERY = 0x11
    REPORT_V1 = 0x12


class IgmpV2Type(_OpenEnum):
    """IGMPv2 message types."""

    QUERY = 0x11
    REPORT_V2 = 0x16
    LEAVE_V2 = 0x17


def _check_len(buffer) -> None:
    if len(buffer) != MESSAGE_LEN:
        raise ValueError(f"IGMP message must be {MESSAGE_LEN} bytes, got {len(buffer)}")


def _read_checksum(buffer) -> int:
    return int.from_bytes(buffer[2:4], "big")


def _write_checksum(buffer, value: int) -> None:
    buffer[2:4] = int(value).to_bytes(2, "big")


def _refresh_checksum(buffer) -> None:
    _write_checksum(buffer, 0)
    _write_checksum(buffer, cal_checksum(buffer))


def _checksum_ok(buffer) -> bool:
    return _read_checksum(buffer) == 0 or cal_checksum(buffer) == 0


def _read_group(buffer) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(bytes(buffer[4:8]))


def _write_group(buffer, value) -> None:
    buffer[4:8] = ipaddress.IPv4Address(value).packed


class IgmpV1Packet:
    """A view over an IGMPv1 message; writes go straight into the buffer."""

    def __init__(self, buffer):
        _check_len(buffer)
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def version(self) -> int:
        """Version nibble (upper four bits of byte 0)."""
        return self.buffer[0] >> 4

    @version.setter
    def version(self, value: int) -> None:
        self.buffer[0] = ((int(value) << 4) & 0xFF) | (self.buffer[0] & 0x0F)

    @property
    def igmp_type(self) -> IgmpV1Type:
        """Type nibble (lower four bits of byte 0)."""
        return IgmpV1Type(self.buffer[0] & 0x0F)

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = (self.buffer[0] & 0xF0) | int(IgmpV1Type(int(value)))

    @property
    def unused(self) -> int:
        """The unused byte."""
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return _checksum_ok(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Multicast group address."""
        return _read_group(self.buffer)

    @group_address.setter
    def group_address(self, value) -> None:
        _write_group(self.buffer, value)

    def update_checksum(self) -> None:
        """Recompute and store the checksum over the whole message."""
        _refresh_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV1Packet(version={self.version}, type={self.igmp_type!r}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"group_address={self.group_address})"
        )


class IgmpV2Packet:
    """A view over an IGMPv2 message; writes go straight into the buffer."""

    def __init__(self, buffer):
        _check_len(buffer)
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV2Type:
        """Message type."""
        return IgmpV2Type(self.buffer[0])

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = int(IgmpV2Type(int(value)))

    @property
    def max_resp_time(self) -> int:
        """Maximum response time, in tenths of a second."""
        return self.buffer[1]

    @max_resp_time.setter
    def max_resp_time(self, value: int) -> None:
        self.buffer[1] = value

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return _checksum_ok(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Multicast group address."""
        return _read_group(self.buffer)

    @group_address.setter
    def group_address(self, value) -> None:
        _write_group(self.buffer, value)

    def update_checksum(self) -> None:
        """Recompute and store the checksum over the whole message."""
        _refresh_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV2Packet(type={self.igmp_type!r}, max_resp_time={self.max_resp_time}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"group_address={self.group_address})"
        )