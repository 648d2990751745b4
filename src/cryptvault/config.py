"""Configuration for the file and command-line layers."""

from __future__ import annotations

from dataclasses import dataclass

MAX_WORKERS = 64


@dataclass
class VaultConfig:
    """Settings shared by file operations, batch runs and the CLI."""

    # Suffix appended to encrypted files
    extension: str = ".enc"

    # Decrypt output name when the input lacks the extension
    fallback_output: str = "decrypted.txt"

    # Batch decrypt prefix for inputs lacking the extension
    batch_prefix: str = "decrypted_"

    # Lines shown by the content preview
    preview_lines: int = 50

    # Files processed concurrently in batch mode
    workers: int = 1

    # Ask for the password twice when encrypting interactively
    confirm_password: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise ValueError(f"extension must look like '.enc', got {self.extension!r}")
        if not self.fallback_output:
            raise ValueError("fallback_output must not be empty")
        if not self.batch_prefix:
            raise ValueError("batch_prefix must not be empty")
        if self.preview_lines < 1:
            raise ValueError(f"preview_lines must be >= 1, got {self.preview_lines}")
        if not 1 <= self.workers <= MAX_WORKERS:
            raise ValueError(f"workers must be 1..{MAX_WORKERS}, got {self.workers}")
