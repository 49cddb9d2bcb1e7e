[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netpkt"
version = "0.1.0"
description = "Views over raw Ethernet, ARP, IPv4, TCP, UDP, ICMP and IGMP packet bytes, with Internet checksums"
requires-python = ">=3.10"
dependencies = []
keywords = ["packet", "ipv4", "tcp", "udp", "icmp", "igmp", "arp", "ethernet", "checksum"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["netpkt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
