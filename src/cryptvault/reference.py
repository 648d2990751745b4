"""Independent reference implementation using PyCryptodome.

Used by the test-suite and the ``selftest`` command to check the
hand-written primitives; the cipher itself never calls into this module.
"""

from __future__ import annotations

from Crypto.Cipher import AES
from Crypto.Hash import SHA256
from Crypto.Util.Padding import pad, unpad


def reference_encrypt_block(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block with AES-256-ECB.

    Args:
        key: 32-byte AES-256 key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key or plaintext has the wrong size
    """
    if len(key) != 32:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def reference_encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-256-CBC with PKCS#7 padding; returns IV || ciphertext."""
    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    return iv + cipher.encrypt(pad(plaintext, AES.block_size))


def reference_decrypt(ciphertext: bytes, key: bytes) -> bytes:
    """Inverse of reference_encrypt()."""
    cipher = AES.new(key, AES.MODE_CBC, iv=ciphertext[:16])
    return unpad(cipher.decrypt(ciphertext[16:]), AES.block_size)


def reference_sha256(data: bytes) -> bytes:
    """SHA-256 digest of data."""
    return SHA256.new(data).digest()


def validate_against_reference(
    key: bytes, plaintext: bytes, iv: bytes, candidate_ciphertext: bytes
) -> tuple[bool, str]:
    """Validate a candidate CBC envelope against the reference.

    Args:
        key: 32-byte AES-256 key
        plaintext: Plaintext that was encrypted
        iv: IV used for the candidate
        candidate_ciphertext: IV || ciphertext to validate

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = reference_encrypt(plaintext, key, iv)
    if candidate_ciphertext == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected.hex()}, "
            f"got {candidate_ciphertext.hex()}"
        )


# FIPS-197 Appendix C.3 and NIST SP 800-38A F.1.5 (ECB-AES256)
AES256_BLOCK_VECTORS = [
    {
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("6bc1bee22e409f96e93d7e117393172a"),
        "ciphertext": bytes.fromhex("f3eed1bdb5d2a03c064b5a7e3db181f8"),
    },
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("ae2d8a571e03ac9c9eb76fac45af8e51"),
        "ciphertext": bytes.fromhex("591ccb10d410ed26dc5ba74a31362870"),
    },
]

# NIST SP 800-38A F.2.5 (CBC-AES256.Encrypt), four blocks without padding
CBC_AES256_VECTOR = {
    "key": bytes.fromhex(
        "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
    ),
    "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
    "plaintext": bytes.fromhex(
        "6bc1bee22e409f96e93d7e117393172a"
        "ae2d8a571e03ac9c9eb76fac45af8e51"
        "30c81c46a35ce411e5fbc1191a0a52ef"
        "f69f2445df4f9b17ad2b417be66c3710"
    ),
    "ciphertext": bytes.fromhex(
        "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
        "9cfc4e967edb808d679f777bc6702c7d"
        "39f23369a9d9bacfa530e26304231461"
        "b2eb05e2c39be9fcda6c19078c6a9d1b"
    ),
}

# FIPS 180-2 Appendix B
SHA256_VECTORS = [
    {
        "message": b"",
        "digest": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    },
    {
        "message": b"abc",
        "digest": "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
    },
    {
        "message": b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "digest": "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
    },
]
