"""File-level encryption, hashing and batch processing.

Whole files are read into memory, transformed by the cipher and written
out only once the transform has succeeded, so a failed decrypt never
leaves a partial output file behind.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from .cbc import ChainCipher
from .config import VaultConfig
from .errors import CryptVaultError
from .sha256 import sha256_hex

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Path helpers
# ------------------------------------------------------------------

def add_enc_extension(path: str | Path, extension: str = ".enc") -> Path:
    """Return path with the encrypted-file suffix appended."""
    path = Path(path)
    return path.with_name(path.name + extension)


def has_enc_extension(path: str | Path, extension: str = ".enc") -> bool:
    """True if the file name ends with the suffix and has a stem before it."""
    name = Path(path).name
    return len(name) > len(extension) and name.endswith(extension)


def remove_enc_extension(path: str | Path, extension: str = ".enc") -> Path:
    """Strip the encrypted-file suffix; paths without it are returned unchanged."""
    path = Path(path)
    if has_enc_extension(path, extension):
        return path.with_name(path.name[: -len(extension)])
    return path


def default_encrypt_output(path: str | Path, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return add_enc_extension(path, config.extension)


def default_decrypt_output(
    path: str | Path,
    config: VaultConfig | None = None,
    batch: bool = False,
) -> Path:
    """Choose the output path for a decrypt.

    Inputs carrying the extension lose it. Otherwise single-file decrypts
    write to ``config.fallback_output`` and batch decrypts prefix the name
    with ``config.batch_prefix``, both beside the input.
    """
    config = config or VaultConfig()
    path = Path(path)
    if has_enc_extension(path, config.extension):
        return remove_enc_extension(path, config.extension)
    if batch:
        return path.with_name(config.batch_prefix + path.name)
    return path.with_name(config.fallback_output)


# ------------------------------------------------------------------
# Single-file operations
# ------------------------------------------------------------------

def encrypt_file(
    input_path: str | Path,
    output_path: str | Path,
    password: str | bytes,
    cipher: ChainCipher | None = None,
) -> Path:
    """Encrypt a file.

    Args:
        input_path: File to encrypt
        output_path: Destination for IV || ciphertext
        password: Password the key is derived from
        cipher: Cipher to use (default: OS randomness)

    Returns:
        Path to written file

    Raises:
        OSError: If the input cannot be read or the output written
        RandomnessUnavailable: If no IV could be generated
    """
    cipher = cipher or ChainCipher()
    data = Path(input_path).read_bytes()
    encrypted = cipher.encrypt(data, password)

    output_path = Path(output_path)
    output_path.write_bytes(encrypted)
    logger.info("Encrypted %s -> %s (%d bytes)", input_path, output_path, len(encrypted))
    return output_path


def decrypt_file(
    input_path: str | Path,
    output_path: str | Path,
    password: str | bytes,
    cipher: ChainCipher | None = None,
) -> Path:
    """Decrypt a file written by encrypt_file().

    Raises:
        OSError: If the input cannot be read or the output written
        InvalidCiphertext: If the file is not a valid envelope
        DecryptionFailed: Wrong password or corrupt file
    """
    cipher = cipher or ChainCipher()
    data = Path(input_path).read_bytes()
    decrypted = cipher.decrypt(data, password)

    output_path = Path(output_path)
    output_path.write_bytes(decrypted)
    logger.info("Decrypted %s -> %s (%d bytes)", input_path, output_path, len(decrypted))
    return output_path


def hash_file(path: str | Path) -> str:
    """SHA-256 of a file's contents as 64 lowercase hex characters."""
    return sha256_hex(Path(path).read_bytes())


# ------------------------------------------------------------------
# Batch processing
# ------------------------------------------------------------------

@dataclass
class BatchResult:
    """Outcome of one file in a batch run."""

    source: Path
    destination: Path | None
    ok: bool
    elapsed_seconds: float = 0.0
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "source": str(self.source),
            "destination": str(self.destination) if self.destination else None,
            "ok": self.ok,
            "elapsed_seconds": self.elapsed_seconds,
            "error": self.error,
        }


def _process_one(
    path: Path,
    password: str | bytes,
    encrypt: bool,
    cipher: ChainCipher,
    config: VaultConfig,
) -> BatchResult:
    if not path.is_file():
        logger.warning("Skipping %s: not found", path)
        return BatchResult(source=path, destination=None, ok=False, error="not found")

    if encrypt:
        destination = default_encrypt_output(path, config)
    else:
        destination = default_decrypt_output(path, config, batch=True)

    start = time.perf_counter()
    try:
        if encrypt:
            encrypt_file(path, destination, password, cipher)
        else:
            decrypt_file(path, destination, password, cipher)
    except (CryptVaultError, OSError) as e:
        logger.warning("Failed on %s: %s", path, e)
        return BatchResult(
            source=path,
            destination=None,
            ok=False,
            elapsed_seconds=time.perf_counter() - start,
            error=str(e),
        )

    return BatchResult(
        source=path,
        destination=destination,
        ok=True,
        elapsed_seconds=time.perf_counter() - start,
    )


def batch_process(
    paths: Iterable[str | Path],
    password: str | bytes,
    encrypt: bool = True,
    config: VaultConfig | None = None,
    cipher: ChainCipher | None = None,
) -> list[BatchResult]:
    """Encrypt or decrypt many files with one password.

    Files are independent, so up to ``config.workers`` run concurrently.
    Per-file failures are recorded rather than raised.

    Returns:
        One BatchResult per input, in input order
    """
    config = config or VaultConfig()
    cipher = cipher or ChainCipher()
    paths = [Path(p) for p in paths]

    if config.workers == 1 or len(paths) <= 1:
        results = [_process_one(p, password, encrypt, cipher, config) for p in paths]
    else:
        max_workers = min(len(paths), config.workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(
                executor.map(
                    lambda p: _process_one(p, password, encrypt, cipher, config),
                    paths,
                )
            )

    succeeded = sum(1 for r in results if r.ok)
    logger.info(
        "Batch %s finished: %d/%d succeeded",
        "encrypt" if encrypt else "decrypt",
        succeeded,
        len(results),
    )
    return results
