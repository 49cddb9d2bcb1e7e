"""IGMP version 3 message views (RFC 3376): queries, reports and group records."""

from __future__ import annotations

import ipaddress
from typing import List, Optional

from netpkt.checksum import cal_checksum
from netpkt.igmp import _OpenEnum

QUERY_MIN_LEN = 12
REPORT_MIN_LEN = 8
RECORD_MIN_LEN = 8


class IgmpV3Type(_OpenEnum):
    """IGMPv3 message types."""

    QUERY = 0x11
    REPORT_V3 = 0x22


class IgmpV3RecordType(_OpenEnum):
    """Group record types of an IGMPv3 report."""

    MODE_IS_INCLUDE = 1
    MODE_IS_EXCLUDE = 2
    CHANGE_TO_INCLUDE_MODE = 3
    CHANGE_TO_EXCLUDE_MODE = 4
    ALLOW_NEW_SOURCES = 5
    BLOCK_OLD_SOURCES = 6


def _check_min_len(buffer, min_len: int, kind: str) -> None:
    if len(buffer) < min_len:
        raise ValueError(f"{kind} shorter than {min_len} bytes")


def _address_at(buffer, start: int) -> Optional[ipaddress.IPv4Address]:
    end = start + 4
    if end > len(buffer):
        return None
    return ipaddress.IPv4Address(bytes(buffer[start:end]))


def _address_list(buffer, first: int, count: int) -> Optional[List[ipaddress.IPv4Address]]:
    """Read ``count`` addresses from ``first``; None if none or if the buffer runs short."""
    if count == 0:
        return None
    addresses = []
    for position in range(first, first + count * 4, 4):
        address = _address_at(buffer, position)
        if address is None:
            return None
        addresses.append(address)
    return addresses


class IgmpV3QueryPacket:
    """A view over an IGMPv3 membership query; writes go into the buffer."""

    def __init__(self, buffer):
        _check_min_len(buffer, QUERY_MIN_LEN, "IGMPv3 query")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV3Type:
        """Message type."""
        return IgmpV3Type(self.buffer[0])

    def set_igmp_type(self) -> None:
        """Mark the message as a query."""
        self.buffer[0] = int(IgmpV3Type.QUERY)

    @property
    def max_resp_code(self) -> int:
        """Maximum response code."""
        return self.buffer[1]

    @max_resp_code.setter
    def max_resp_code(self, value: int) -> None:
        self.buffer[1] = value

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return int.from_bytes(self.buffer[2:4], "big")

    @checksum.setter
    def checksum(self, value: int) -> None:
        self.buffer[2:4] = int(value).to_bytes(2, "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Queried group; 0.0.0.0 for a general query."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    @property
    def resv(self) -> int:
        """Reserved bits (upper four bits of byte 8)."""
        return self.buffer[8] >> 4

    @property
    def s(self) -> int:
        """Suppress router-side processing flag."""
        return (self.buffer[8] & 0x0F) >> 3

    @property
    def qrv(self) -> int:
        """Querier's robustness variable."""
        return self.buffer[8] & 0x07

    @qrv.setter
    def qrv(self, value: int) -> None:
        self.buffer[8] = (self.buffer[8] & ~0x07 & 0xFF) | (int(value) & 0x07)

    @property
    def qqic(self) -> int:
        """Querier's query interval code."""
        return self.buffer[9]

    @qqic.setter
    def qqic(self, value: int) -> None:
        self.buffer[9] = value

    @property
    def source_number(self) -> int:
        """Number of source addresses carried."""
        return int.from_bytes(self.buffer[10:12], "big")

    @property
    def source_addresses(self) -> Optional[List[ipaddress.IPv4Address]]:
        """Source addresses; None if there are none or the buffer is short."""
        return _address_list(self.buffer, QUERY_MIN_LEN, self.source_number)

    def source_address(self, index: int) -> Optional[ipaddress.IPv4Address]:
        """Address in slot ``index``; None when ``index`` does not exceed the
        source count or the slot lies past the buffer end."""
        if self.source_number >= index:
            return None
        return _address_at(self.buffer, QUERY_MIN_LEN + index * 4)

    def update_checksum(self) -> None:
        """Recompute and store the checksum over the whole message."""
        self.checksum = 0
        self.checksum = cal_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV3QueryPacket(type={self.igmp_type!r}, "
            f"max_resp_code={self.max_resp_code}, checksum={self.checksum}, "
            f"is_valid={self.is_valid}, group_address={self.group_address}, "
            f"s={self.s}, qrv={self.qrv}, qqic={self.qqic}, "
            f"source_number={self.source_number}, "
            f"source_addresses={self.source_addresses})"
        )


class IgmpV3RecordPacket:
    """A view over one group record of an IGMPv3 report."""

    def __init__(self, buffer):
        _check_min_len(buffer, RECORD_MIN_LEN, "IGMPv3 group record")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def record_type(self) -> IgmpV3RecordType:
        """Record type."""
        return IgmpV3RecordType(self.buffer[0])

    @property
    def aux_data_len(self) -> int:
        """Auxiliary data length in 4-byte words."""
        return self.buffer[1]

    @property
    def source_number(self) -> int:
        """Number of source addresses."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def multicast_address(self) -> ipaddress.IPv4Address:
        """Multicast group the record refers to."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @property
    def source_addresses(self) -> Optional[List[ipaddress.IPv4Address]]:
        """Source addresses; None if there are none or the buffer is short."""
        return _address_list(self.buffer, RECORD_MIN_LEN, self.source_number)

    def source_address(self, index: int) -> Optional[ipaddress.IPv4Address]:
        """Address in slot ``index``; None when ``index`` does not exceed the
        source count or the slot lies past the buffer end."""
        if self.source_number >= index:
            return None
        return _address_at(self.buffer, RECORD_MIN_LEN + index * 4)

    @property
    def auxiliary_data(self) -> bytes:
        """Auxiliary data after the sources; empty if the buffer is short."""
        start = RECORD_MIN_LEN + self.source_number * 4
        end = start + self.aux_data_len * 4
        if end > len(self.buffer):
            return b""
        return bytes(self.buffer[start:end])

    def __repr__(self) -> str:
        return (
            f"IgmpV3RecordPacket(record_type={self.record_type!r}, "
            f"aux_data_len={self.aux_data_len}, source_number={self.source_number}, "
            f"multicast_address={self.multicast_address}, "
            f"source_addresses={self.source_addresses}, "
            f"auxiliary_data={self.auxiliary_data!r})"
        )


class IgmpV3ReportPacket:
    """A view over an IGMPv3 membership report."""

    def __init__(self, buffer):
        _check_min_len(buffer, REPORT_MIN_LEN, "IGMPv3 report")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    @property
    def igmp_type(self) -> IgmpV3Type:
        """Message type."""
        return IgmpV3Type(self.buffer[0])

    @property
    def reserved1(self) -> int:
        """First reserved field (byte 1)."""
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        """Checksum as stored."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def is_valid(self) -> bool:
        """True if the checksum is unset (0) or verifies."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def reserved2(self) -> int:
        """Second reserved field (bytes 4-5)."""
        return int.from_bytes(self.buffer[4:6], "big")

    @property
    def record_number(self) -> int:
        """Number of group records."""
        return int.from_bytes(self.buffer[6:8], "big")

    @property
    def group_records(self) -> Optional[List[IgmpV3RecordPacket]]:
        """The group records; None if there are none or any is truncated."""
        count = self.record_number
        if count == 0:
            return None
        data = bytes(self.buffer)
        records = []
        start = REPORT_MIN_LEN
        for _ in range(count):
            if start >= len(data) or len(data) - start < RECORD_MIN_LEN:
                return None
            head = IgmpV3RecordPacket.unchecked(data[start:start + RECORD_MIN_LEN])
            end = start + RECORD_MIN_LEN + head.aux_data_len * 4 + head.source_number * 4
            if end > len(data):
                return None
            records.append(IgmpV3RecordPacket(data[start:end]))
            start = end
        return records

    def __repr__(self) -> str:
        return (
            f"IgmpV3ReportPacket(type={self.igmp_type!r}, reserved1={self.reserved1}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"reserved2={self.reserved2}, record_number={self.record_number}, "
            f"group_records={self.group_records})"
        )