"""Block-size padding (PKCS#7) for 16-byte blocks."""

from __future__ import annotations

from .errors import InvalidPadding

BLOCK_SIZE = 16


def pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Append N bytes of value N so the length becomes a multiple of block_size.

    A full block of padding is added when data is already aligned, so the
    result is always at least one byte longer than the input.
    """
    pad_len = block_size - (len(data) % block_size)
    return bytes(data) + bytes([pad_len] * pad_len)


def unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Strip padding added by pad().

    Raises:
        InvalidPadding: If data is empty or misaligned, or the trailing
            bytes do not form a valid padding run
    """
    if not data or len(data) % block_size != 0:
        raise InvalidPadding(
            f"Padded data must be a non-empty multiple of {block_size} bytes, got {len(data)}"
        )

    pad_len = data[-1]
    if not 1 <= pad_len <= block_size:
        raise InvalidPadding(f"Padding length out of range: {pad_len}")
    if any(b != pad_len for b in data[-pad_len:]):
        raise InvalidPadding("Padding bytes are inconsistent")

    return bytes(data[:-pad_len])
