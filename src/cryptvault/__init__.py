"""Crypt Vault: AES-256-CBC file and text encryption with SHA-256 key derivation."""

__version__ = "0.1.0"

from .errors import (
    CryptVaultError,
    DecryptionFailed,
    InvalidCiphertext,
    InvalidPadding,
    RandomnessUnavailable,
)
from .sha256 import sha256, sha256_hex
from .aes256 import expand_key, encrypt_block, decrypt_block
from .padding import pad, unpad
from .randomness import RandomSource
from .cbc import (
    ChainCipher,
    CipherKey,
    derive_key,
    encrypt,
    decrypt,
    encrypt_text,
    decrypt_text,
)
from .config import VaultConfig

__all__ = [
    "CryptVaultError",
    "DecryptionFailed",
    "InvalidCiphertext",
    "InvalidPadding",
    "RandomnessUnavailable",
    "sha256",
    "sha256_hex",
    "expand_key",
    "encrypt_block",
    "decrypt_block",
    "pad",
    "unpad",
    "RandomSource",
    "ChainCipher",
    "CipherKey",
    "derive_key",
    "encrypt",
    "decrypt",
    "encrypt_text",
    "decrypt_text",
    "VaultConfig",
]
