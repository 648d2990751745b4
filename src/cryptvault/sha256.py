"""
SHA-256 hash (FIPS 180-4), implemented without a crypto library.

Used to derive the 256-bit cipher key from a password and to report
content hashes of files.

Message layout before compression:
  message || 0x80 || 0x00 ... || bit_length (64-bit big-endian)
padded so the total length is a multiple of 64 bytes.
"""

from __future__ import annotations

MASK_32 = 0xFFFFFFFF
BLOCK_SIZE = 64
DIGEST_SIZE = 32

# First 32 bits of the fractional parts of the cube roots of the first 64 primes
K = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5, 0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3, 0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc, 0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7, 0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13, 0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3, 0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5, 0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208, 0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)

# First 32 bits of the fractional parts of the square roots of the first 8 primes
H0 = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & z)


def _maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def _big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def _small_sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _small_sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def pad_message(data: bytes) -> bytes:
    """Apply Merkle-Damgard padding.

    Args:
        data: Raw message

    Returns:
        Padded message whose length is a multiple of 64 bytes
    """
    bit_length = len(data) * 8
    zeros = (55 - len(data)) % BLOCK_SIZE
    return bytes(data) + b"\x80" + bytes(zeros) + bit_length.to_bytes(8, "big")


def _message_schedule(block: bytes) -> list[int]:
    """Expand one 64-byte block to 64 schedule words."""
    w = [int.from_bytes(block[i:i + 4], "big") for i in range(0, BLOCK_SIZE, 4)]
    for i in range(16, 64):
        w.append(
            (_small_sigma1(w[i - 2]) + w[i - 7] + _small_sigma0(w[i - 15]) + w[i - 16])
            & MASK_32
        )
    return w


def _compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    """Run the 64 compression rounds and fold the result into state."""
    w = _message_schedule(block)
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    return tuple(
        (s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e, f, g, h))
    )


def sha256(data: bytes) -> bytes:
    """Compute the SHA-256 digest of a byte sequence.

    Args:
        data: Message of any length (bytes, bytearray or memoryview)

    Returns:
        32-byte digest
    """
    message = pad_message(bytes(data))
    state = H0
    for offset in range(0, len(message), BLOCK_SIZE):
        state = _compress(state, message[offset:offset + BLOCK_SIZE])
    return b"".join(word.to_bytes(4, "big") for word in state)


def sha256_hex(data: bytes) -> str:
    """SHA-256 digest as 64 lowercase hex characters."""
    return sha256(data).hex()
