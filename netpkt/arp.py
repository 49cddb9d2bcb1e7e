"""ARP packet view (Ethernet hardware, IPv4 protocol addresses)."""

from __future__ import annotations

ARP_LEN = 28


def _check_size(value: bytes, size: int, field: str) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{field} must be {size} bytes, got {len(value)}")
    return value


class ArpPacket:
    """A view over a 28-byte ARP packet; writes go straight into the buffer."""

    def __init__(self, buffer):
        if len(buffer) != ARP_LEN:
            raise ValueError(f"ARP packet must be {ARP_LEN} bytes, got {len(buffer)}")
        self.buffer = buffer

    @classmethod
    def unchecked(cls, buffer):
        """Wrap ``buffer`` without validating its length."""
        packet = cls.__new__(cls)
        packet.buffer = buffer
        return packet

    def _get_u16(self, start: int) -> int:
        return int.from_bytes(self.buffer[start:start + 2], "big")

    def _set_u16(self, start: int, value: int) -> None:
        self.buffer[start:start + 2] = int(value).to_bytes(2, "big")

    @property
    def hardware_type(self) -> int:
        """Hardware type; 1 for Ethernet."""
        return self._get_u16(0)

    @hardware_type.setter
    def hardware_type(self, value: int) -> None:
        self._set_u16(0, value)

    @property
    def protocol_type(self) -> int:
        """Upper protocol type; 0x0800 for IPv4."""
        return self._get_u16(2)

    @protocol_type.setter
    def protocol_type(self, value: int) -> None:
        self._set_u16(2, value)

    @property
    def hardware_size(self) -> int:
        """Hardware address length; 6 for MAC."""
        return self.buffer[4]

    @hardware_size.setter
    def hardware_size(self, value: int) -> None:
        self.buffer[4] = value

    @property
    def protocol_size(self) -> int:
        """Protocol address length; 4 for IPv4."""
        return self.buffer[5]

    @protocol_size.setter
    def protocol_size(self, value: int) -> None:
        self.buffer[5] = value

    @property
    def op_code(self) -> int:
        """1 ARP request, 2 ARP reply, 3 RARP request, 4 RARP reply."""
        return self._get_u16(6)

    @op_code.setter
    def op_code(self, value: int) -> None:
        self._set_u16(6, value)

    @property
    def sender_hardware_addr(self) -> bytes:
        """Sender MAC address."""
        return bytes(self.buffer[8:14])

    @sender_hardware_addr.setter
    def sender_hardware_addr(self, value: bytes) -> None:
        self.buffer[8:14] = _check_size(value, 6, "sender_hardware_addr")

    @property
    def sender_protocol_addr(self) -> bytes:
        """Sender IPv4 address."""
        return bytes(self.buffer[14:18])

    @sender_protocol_addr.setter
    def sender_protocol_addr(self, value: bytes) -> None:
        self.buffer[14:18] = _check_size(value, 4, "sender_protocol_addr")

    @property
    def target_hardware_addr(self) -> bytes:
        """Target MAC address."""
        return bytes(self.buffer[18:24])

    @target_hardware_addr.setter
    def target_hardware_addr(self, value: bytes) -> None:
        self.buffer[18:24] = _check_size(value, 6, "target_hardware_addr")

    @property
    def target_protocol_addr(self) -> bytes:
        """Target IPv4 address."""
        return bytes(self.buffer[24:28])

    @target_protocol_addr.setter
    def target_protocol_addr(self, value: bytes) -> None:
        self.buffer[24:28] = _check_size(value, 4, "target_protocol_addr")

    def __repr__(self) -> str:
        return (
            f"ArpPacket(hardware_type={self.hardware_type}, protocol_type={self.protocol_type:#06x}, "
            f"hardware_size={self.hardware_size}, protocol_size={self.protocol_size}, "
            f"op_code={self.op_code}, sender_hardware_addr={self.sender_hardware_addr.hex(':')}, "
            f"sender_protocol_addr={'.'.join(map(str, self.sender_protocol_addr))}, "
            f"target_hardware_addr={self.target_hardware_addr.hex(':')}, "
            f"target_protocol_addr={'.'.join(map(str, self.target_protocol_addr))})"
        )