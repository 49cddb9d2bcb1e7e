"""Packet fingerprints derived from a shared token with SHA-256."""

from __future__ import annotations

import hashlib

FINGER_LEN = 12


class Finger:
    """Computes 12-byte fingerprints keyed by the SHA-256 of a token."""

    def __init__(self, text: str):
        self.hash = hashlib.sha256(text.encode("utf-8")).digest()

    def calculate_finger(self, nonce: bytes, secret_body: bytes) -> bytes:
        """Return the last 12 bytes of SHA-256(nonce, body, key hash)."""
        hasher = hashlib.sha256()
        hasher.update(bytes(nonce))
        hasher.update(bytes(secret_body))
        hasher.update(self.hash)
        return hasher.digest()[-FINGER_LEN:]

    def __repr__(self) -> str:
        return "Finger(...)"