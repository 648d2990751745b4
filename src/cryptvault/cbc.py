"""
Password-based AES-256-CBC encryption.

Ciphertext envelope (no header or version field):

    IV (16 bytes) || C1 || C2 || ... || Cn      n >= 1

The cipher key is sha256(password). A fresh CipherKey (key + round-key
schedule) is derived for every call and never stored on the cipher.
Blocks of one message are chained, so they are always processed in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .aes256 import BLOCK_SIZE, KEY_SIZE, decrypt_block, encrypt_block, expand_key
from .bytemath import xor_bytes
from .errors import (
    DecryptionFailed,
    InvalidCiphertext,
    InvalidPadding,
    RandomnessUnavailable,
)
from .padding import pad, unpad
from .randomness import RandomProvider, RandomSource
from .sha256 import sha256

logger = logging.getLogger(__name__)

IV_SIZE = BLOCK_SIZE
MIN_CIPHERTEXT_SIZE = IV_SIZE + BLOCK_SIZE


def derive_key(password: str | bytes) -> bytes:
    """Derive the 32-byte cipher key as a single SHA-256 of the password."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    return sha256(password)


@dataclass(frozen=True)
class CipherKey:
    """Cipher key plus its expanded round-key schedule."""

    key: bytes
    schedule: bytes

    @classmethod
    def from_key(cls, key: bytes) -> CipherKey:
        """Build from a raw 32-byte key."""
        if len(key) != KEY_SIZE:
            raise ValueError(f"Key must be 32 bytes, got {len(key)}")
        key = bytes(key)
        return cls(key=key, schedule=expand_key(key))

    @classmethod
    def from_password(cls, password: str | bytes) -> CipherKey:
        """Build from a password (str is UTF-8 encoded)."""
        return cls.from_key(derive_key(password))

    def __repr__(self) -> str:
        return "CipherKey(<redacted>)"


def _blocks(data: bytes):
    for offset in range(0, len(data), BLOCK_SIZE):
        yield data[offset:offset + BLOCK_SIZE]


class ChainCipher:
    """AES-256-CBC with PKCS#7 padding and a random IV per message.

    Holds only the randomness provider, so one instance can serve
    concurrent calls.
    """

    def __init__(self, random_bytes: RandomProvider | None = None):
        """
        Args:
            random_bytes: Callable returning n random bytes; defaults to
                a RandomSource backed by the OS CSPRNG
        """
        self.random_bytes = random_bytes if random_bytes is not None else RandomSource()

    def _new_iv(self) -> bytes:
        try:
            iv = self.random_bytes(IV_SIZE)
        except Exception as e:
            raise RandomnessUnavailable(f"Could not generate random IV: {e}") from e
        if not isinstance(iv, (bytes, bytearray)) or len(iv) != IV_SIZE:
            raise RandomnessUnavailable("Randomness provider returned a malformed IV")
        return bytes(iv)

    # ---- key-level API ----

    def encrypt_with_key(
        self,
        plaintext: bytes,
        cipher_key: CipherKey,
        iv: bytes | None = None,
    ) -> bytes:
        """Pad and encrypt plaintext under an already-derived key.

        Args:
            plaintext: Data of any length
            cipher_key: Derived key and schedule
            iv: Explicit 16-byte IV; drawn from the provider when omitted

        Returns:
            IV || ciphertext blocks
        """
        if iv is None:
            iv = self._new_iv()
        elif len(iv) != IV_SIZE:
            raise ValueError(f"IV must be 16 bytes, got {len(iv)}")

        padded = pad(plaintext)
        out = bytearray(iv)
        chain = bytes(iv)
        for block in _blocks(padded):
            chain = encrypt_block(xor_bytes(block, chain), cipher_key.schedule)
            out += chain

        logger.debug("Encrypted %d bytes into %d blocks", len(plaintext), len(padded) // BLOCK_SIZE)
        return bytes(out)

    def decrypt_with_key(self, ciphertext: bytes, cipher_key: CipherKey) -> bytes:
        """Decrypt and unpad IV || ciphertext under an already-derived key.

        Raises:
            InvalidCiphertext: If the envelope is too short or misaligned
            DecryptionFailed: If padding is invalid (wrong key or corrupt data)
        """
        if len(ciphertext) < MIN_CIPHERTEXT_SIZE or (len(ciphertext) - IV_SIZE) % BLOCK_SIZE != 0:
            raise InvalidCiphertext(
                f"Ciphertext must be IV plus a positive multiple of {BLOCK_SIZE} bytes, "
                f"got {len(ciphertext)}"
            )

        chain = bytes(ciphertext[:IV_SIZE])
        recovered = bytearray()
        for block in _blocks(bytes(ciphertext[IV_SIZE:])):
            recovered += xor_bytes(decrypt_block(block, cipher_key.schedule), chain)
            chain = block

        try:
            plaintext = unpad(bytes(recovered))
        except InvalidPadding as e:
            logger.debug("Padding check failed: %s", e)
            raise DecryptionFailed() from None

        logger.debug("Decrypted %d blocks into %d bytes", len(recovered) // BLOCK_SIZE, len(plaintext))
        return plaintext

    # ---- password API ----

    def encrypt(self, plaintext: bytes, password: str | bytes) -> bytes:
        """Encrypt plaintext with a key derived from password."""
        return self.encrypt_with_key(plaintext, CipherKey.from_password(password))

    def decrypt(self, ciphertext: bytes, password: str | bytes) -> bytes:
        """Decrypt ciphertext with a key derived from password."""
        return self.decrypt_with_key(ciphertext, CipherKey.from_password(password))

    # ---- text (hex transport) ----

    def encrypt_text(self, text: str, password: str | bytes) -> str:
        """Encrypt UTF-8 text; returns lowercase hex."""
        return self.encrypt(text.encode("utf-8"), password).hex()

    def decrypt_text(self, hex_ciphertext: str, password: str | bytes) -> str:
        """Decrypt lowercase/uppercase hex produced by encrypt_text()."""
        try:
            data = bytes.fromhex(hex_ciphertext.strip())
        except ValueError as e:
            raise InvalidCiphertext(f"Invalid hex ciphertext: {e}") from e

        plaintext = self.decrypt(data, password)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise DecryptionFailed() from None


_default_cipher = ChainCipher()


def encrypt(plaintext: bytes, password: str | bytes) -> bytes:
    """Encrypt with the default cipher (OS randomness)."""
    return _default_cipher.encrypt(plaintext, password)


def decrypt(ciphertext: bytes, password: str | bytes) -> bytes:
    """Decrypt with the default cipher."""
    return _default_cipher.decrypt(ciphertext, password)


def encrypt_text(text: str, password: str | bytes) -> str:
    """Encrypt text with the default cipher; returns hex."""
    return _default_cipher.encrypt_text(text, password)


def decrypt_text(hex_ciphertext: str, password: str | bytes) -> str:
    """Decrypt hex text with the default cipher."""
    return _default_cipher.decrypt_text(hex_ciphertext, password)
