"""Views over Ethernet, ARP, IPv4, TCP, UDP, ICMP and IGMP packet bytes, with checksums and fingerprints."""

__version__ = "0.1.0"

__all__ = [
    "arp",
    "checksum",
    "ethernet",
    "finger",
    "icmp",
    "igmp",
    "igmp_v3",
    "ip_protocol",
    "ipv4",
    "tcp",
    "udp",
]