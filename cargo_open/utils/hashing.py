"""
Stable short hashes, computed the way Cargo names its cache directories.

Cargo derives directory names such as ``github.com-1ecc6299db9ec823`` by
feeding a value through Rust's ``Hash`` machinery into SipHash-2-4 with a zero
key, and printing the 64-bit result as little-endian hex. Python's ``hashlib``
has no SipHash, so ``SipHasher`` provides one with the same interface.
"""

import struct

_MASK = 0xFFFFFFFFFFFFFFFF

# Terminator Rust appends after hashing a ``str``.
STR_TERMINATOR = b"\xff"


def _rotl(value, bits):
    return ((value << bits) | (value >> (64 - bits))) & _MASK


def _sipround(v0, v1, v2, v3):
    v0 = (v0 + v1) & _MASK
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


class SipHasher:
    """SipHash-2-4 with a ``hashlib``-style interface."""

    name = "siphash-2-4"
    digest_size = 8

    def __init__(self, data=b"", key=bytes(16)):
        if len(key) != 16:
            raise ValueError("SipHash key must be 16 bytes long")
        k0, k1 = struct.unpack("<QQ", key)
        self._v = (
            k0 ^ 0x736F6D6570736575,
            k1 ^ 0x646F72616E646F6D,
            k0 ^ 0x6C7967656E657261,
            k1 ^ 0x7465646279746573,
        )
        self._tail = b""
        self._length = 0
        if data:
            self.update(data)

    def _compress(self, word):
        v0, v1, v2, v3 = self._v
        v3 ^= word
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= word
        self._v = (v0, v1, v2, v3)

    def update(self, data):
        data = bytes(data)
        self._length += len(data)
        data = self._tail + data
        end = len(data) - len(data) % 8
        for offset in range(0, end, 8):
            (word,) = struct.unpack_from("<Q", data, offset)
            self._compress(word)
        self._tail = data[end:]

    def intdigest(self):
        v0, v1, v2, v3 = self._v
        last = ((self._length & 0xFF) << 56) | int.from_bytes(self._tail, "little")
        v3 ^= last
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= last
        v2 ^= 0xFF
        for _ in range(4):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        return v0 ^ v1 ^ v2 ^ v3

    def digest(self):
        return struct.pack("<Q", self.intdigest())

    def hexdigest(self):
        return self.digest().hex()


def hash_discriminant(value):
    """Bytes Rust feeds the hasher for an enum discriminant (an ``isize``)."""
    return struct.pack("<q", value)


def hash_str(value):
    """Bytes Rust feeds the hasher for a ``str``."""
    return value.encode("utf-8") + STR_TERMINATOR


def short_hash(*parts):
    """Hash the concatenated byte *parts* and return 16 hex digits."""
    hasher = SipHasher()
    for part in parts:
        hasher.update(part)
    return hasher.hexdigest()
