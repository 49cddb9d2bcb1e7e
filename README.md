# netpkt

Views over raw network packet bytes. You can read header fields and rewrite
some of them in place, and you can recompute checksums. The package needs
only the standard library.

## Modules

- `netpkt.checksum`: `cal_checksum(buffer)` gives the RFC 1071 one's-complement
  checksum. `ipv4_cal_checksum(buffer, src_ip, dest_ip, protocol)` gives the
  same checksum with the IPv4 pseudo-header included.
- `netpkt.ethernet`: `EthernetPacket` and the `EthernetProtocol` EtherType enum.
- `netpkt.arp`: `ArpPacket`, a view over 28-byte ARP packets.
- `netpkt.ip_protocol`: `IpProtocol`, the enum of IPv4 protocol numbers.
- `netpkt.ipv4`: `IpV4Packet` and `parse_ip_packet(buffer)`. The function
  accepts version 4 only.
- `netpkt.udp`: `UdpPacket`.
- `netpkt.tcp`: `TcpPacket` and the `TcpFlags` flag enum. `str()` of a flag
  value gives text such as `ACK|SYN`, or `NULL` when no flag is set.
- `netpkt.icmp`: `IcmpPacket` and the enums `IcmpKind`,
  `DestinationUnreachableCode`, `RedirectCode`, `TimeExceededCode` and
  `ParameterProblemCode`. It also has `icmp_code(kind, code)` and the result
  types `HeaderOther` and `Timestamp`.
- `netpkt.igmp`: `IgmpV1Packet` and `IgmpV2Packet`, with the type enums
  `IgmpType`, `IgmpV1Type` and `IgmpV2Type`.
- `netpkt.igmp_v3`: `IgmpV3QueryPacket`, `IgmpV3ReportPacket` and
  `IgmpV3RecordPacket`, with the enums `IgmpV3Type` and `IgmpV3RecordType`.
- `netpkt.finger`: `Finger(text)`. Its `calculate_finger(nonce, secret_body)`
  method returns a 12-byte fingerprint: the last 12 bytes of
  SHA-256(nonce, body, SHA-256(text)).

Header fields are properties. Reading a field returns an `int`, an enum
member, `bytes` or an `ipaddress.IPv4Address`. A value missing from an enum
does not raise an error. It becomes a member named `UNKNOWN_<n>`, and that
member's `is_unknown` is true.

## Example

```python
from netpkt.ipv4 import IpV4Packet
from netpkt.udp import UdpPacket

packet = IpV4Packet(bytearray(raw_bytes))
print(packet.source_ip, packet.destination_ip, packet.protocol)

udp = UdpPacket(packet.source_ip, packet.destination_ip, bytearray(packet.payload))
print(udp.source_port, udp.destination_port, udp.is_valid)

udp.destination_port = 5353
udp.update_checksum()
```

## Constructors

Each constructor checks the buffer length and raises `ValueError` when the
bytes cannot hold the header. `IpV4Packet` also raises `ValueError` when the
version is not 4. Every class also has an `unchecked` class method, which
wraps a buffer without these checks.

Setters and `update_checksum` write straight into the buffer, so they need a
mutable buffer such as a `bytearray`. Properties such as `payload` and
`header` return copies as `bytes`.

## Checksums

```python
from netpkt.checksum import cal_checksum

cal_checksum(b"\xff\xff")  # 0
```

The `is_valid` property is true in two cases: the stored checksum is 0, or
the checksum verifies.

## Fingerprints

```python
from netpkt.finger import Finger

finger = Finger("token")
tag = finger.calculate_finger(bytes(12), b"body")  # 12 bytes
```

## What it does not do

This package does not capture, send or receive packets. It does not encrypt
or decrypt payloads. It parses IPv4 only, not IPv6. It works only on byte
buffers that you supply.

## Running the tests

```
pip install .[test]
pytest
```