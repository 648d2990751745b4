"""Tests for the SHA-256 implementation."""

import random

import pytest

from cryptvault.reference import SHA256_VECTORS, reference_sha256
from cryptvault.sha256 import pad_message, sha256, sha256_hex


class TestKnownVectors:
    """FIPS 180-2 known-answer tests."""

    def test_empty_string(self) -> None:
        """Published digest of the empty message."""
        assert sha256_hex(b"") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_abc(self) -> None:
        """Published digest of 'abc'."""
        assert sha256_hex(b"abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    @pytest.mark.parametrize("vec", SHA256_VECTORS)
    def test_all_vectors(self, vec: dict) -> None:
        assert sha256_hex(vec["message"]) == vec["digest"]

    def test_896_bit_message(self) -> None:
        """Two-block message from FIPS 180-2 (SHA-384/512 vector, SHA-256 digest)."""
        message = (
            b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
            b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu"
        )
        assert sha256_hex(message) == (
            "cf5b16a778af8380036ce59e7b0492370b249b11e8f07a51afac45037afee9d1"
        )

    def test_million_a(self) -> None:
        """Long message: one million 'a' bytes."""
        assert sha256_hex(b"a" * 1_000_000) == (
            "cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0"
        )


class TestDigestShape:
    """Output format and input types."""

    def test_digest_is_32_bytes(self) -> None:
        assert len(sha256(b"anything")) == 32

    def test_hex_is_lowercase_64_chars(self) -> None:
        digest = sha256_hex(b"Crypt Vault")
        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_accepts_bytearray_and_memoryview(self) -> None:
        data = b"hello world"
        assert sha256(bytearray(data)) == sha256(data)
        assert sha256(memoryview(data)) == sha256(data)

    def test_deterministic(self) -> None:
        assert sha256(b"x" * 100) == sha256(b"x" * 100)


class TestPadding:
    """Merkle-Damgard message padding."""

    @pytest.mark.parametrize("length", [0, 1, 55, 56, 63, 64, 65, 119, 120])
    def test_padded_length_is_block_multiple(self, length: int) -> None:
        padded = pad_message(bytes(length))
        assert len(padded) % 64 == 0
        assert len(padded) >= length + 9

    def test_length_field_is_bit_count(self) -> None:
        padded = pad_message(b"abc")
        assert padded[3] == 0x80
        assert int.from_bytes(padded[-8:], "big") == 24

    def test_56_bytes_spills_into_second_block(self) -> None:
        """55 bytes fit one block; 56 need two."""
        assert len(pad_message(bytes(55))) == 64
        assert len(pad_message(bytes(56))) == 128


class TestAgainstReference:
    """Compare with PyCryptodome on boundary and random lengths."""

    @pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 127, 128, 1000])
    def test_boundary_lengths(self, length: int) -> None:
        data = bytes(i & 0xFF for i in range(length))
        assert sha256(data) == reference_sha256(data)

    @pytest.mark.parametrize("seed", range(10))
    def test_random_messages(self, seed: int) -> None:
        rng = random.Random(seed)
        data = bytes(rng.randint(0, 255) for _ in range(rng.randint(0, 300)))
        assert sha256(data) == reference_sha256(data)
