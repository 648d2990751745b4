"""Command-line interface for Crypt Vault."""

from __future__ import annotations

import dataclasses
import logging
import sys
import time
from pathlib import Path

import click

from . import __version__
from .aes256 import encrypt_block
from .cbc import ChainCipher, CipherKey
from .config import VaultConfig
from .errors import CryptVaultError
from .files import (
    batch_process,
    decrypt_file,
    default_decrypt_output,
    default_encrypt_output,
    encrypt_file,
    hash_file,
)
from .reference import (
    AES256_BLOCK_VECTORS,
    CBC_AES256_VECTOR,
    SHA256_VECTORS,
    reference_decrypt,
    reference_sha256,
    validate_against_reference,
)
from .randomness import RandomSource
from .reporting import export_batch_json, format_batch_table, format_stats_table
from .sha256 import sha256, sha256_hex
from .stats import file_stats, password_strength, preview_lines

logger = logging.getLogger(__name__)

ABOUT_TEXT = """\
Crypt Vault uses AES-256-CBC, a standard symmetric encryption algorithm.

How it works:
  1. Your password is hashed via SHA-256 -> 256-bit key
  2. A random 16-byte IV is generated per encryption
  3. Data is padded (PKCS7) and encrypted in CBC mode
  4. IV is prepended to the ciphertext (not secret)

Security features:
  - AES-256: 2^256 possible keys
  - CBC mode: each block depends on the previous
  - Random IV: same plaintext encrypts differently each time
  - PKCS7 padding: handles arbitrary-length data

Limitations:
  - The key is a single SHA-256 of the password (no key stretching)
  - There is no authentication tag; a wrong password and a corrupt
    file are reported as the same error

Remember: security depends on your password strength!"""


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _get_password(
    ctx: click.Context,
    password: str | None,
    confirm: bool = False,
    show_strength: bool = False,
) -> str:
    """Use --password or prompt for one; empty passwords are rejected."""
    config: VaultConfig = ctx.obj
    if password is None:
        password = click.prompt(
            "Enter password",
            hide_input=True,
            confirmation_prompt=confirm and config.confirm_password,
        )
    if not password:
        _fail("Password cannot be empty.")
    if show_strength:
        click.echo(f"Password strength: {password_strength(password).label}")
    return password


def _echo_file_stats(path: Path) -> None:
    try:
        result = file_stats(path)
    except OSError as e:
        _fail(str(e))
    click.echo(f"File statistics for '{path}':")
    click.echo(format_stats_table(result))


password_opt = click.option(
    "--password", "-p",
    type=str,
    default=None,
    help="Password (prompted for when omitted)",
)


@click.group()
@click.version_option(version=__version__, prog_name="crypt-vault")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--no-confirm",
    is_flag=True,
    help="Do not ask for the password twice when encrypting",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, no_confirm: bool) -> None:
    """Crypt Vault - AES-256-CBC file and text encryption.

    Keys are derived from a password with SHA-256; every encryption uses
    a fresh random IV stored in front of the ciphertext.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    ctx.obj = VaultConfig(confirm_password=not no_confirm)


# ------------------------------------------------------------------
# Core operations
# ------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: INPUT_FILE.enc)",
)
@password_opt
@click.pass_context
def encrypt(ctx: click.Context, input_file: Path, output: Path | None, password: str | None) -> None:
    """Encrypt a file."""
    output = output or default_encrypt_output(input_file, ctx.obj)
    password = _get_password(ctx, password, confirm=True, show_strength=True)

    start = time.perf_counter()
    try:
        encrypt_file(input_file, output, password)
    except (CryptVaultError, OSError) as e:
        _fail(str(e))

    click.echo(f"Encrypted {input_file} -> {output}")
    click.echo(f"Time: {time.perf_counter() - start:.4f} seconds")
    _echo_file_stats(output)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: INPUT_FILE without .enc)",
)
@password_opt
@click.pass_context
def decrypt(ctx: click.Context, input_file: Path, output: Path | None, password: str | None) -> None:
    """Decrypt a file."""
    output = output or default_decrypt_output(input_file, ctx.obj)
    password = _get_password(ctx, password)

    start = time.perf_counter()
    try:
        decrypt_file(input_file, output, password)
    except (CryptVaultError, OSError) as e:
        _fail(str(e))

    click.echo(f"Decrypted {input_file} -> {output}")
    click.echo(f"Time: {time.perf_counter() - start:.4f} seconds")
    _echo_file_stats(output)


@main.command(name="encrypt-text")
@click.argument("text", type=str)
@password_opt
@click.pass_context
def encrypt_text_cmd(ctx: click.Context, text: str, password: str | None) -> None:
    """Encrypt TEXT and print the ciphertext as hex."""
    password = _get_password(ctx, password, confirm=True, show_strength=True)
    try:
        click.echo(ChainCipher().encrypt_text(text, password))
    except CryptVaultError as e:
        _fail(str(e))


@main.command(name="decrypt-text")
@click.argument("hex_ciphertext", type=str)
@password_opt
@click.pass_context
def decrypt_text_cmd(ctx: click.Context, hex_ciphertext: str, password: str | None) -> None:
    """Decrypt hex produced by encrypt-text."""
    password = _get_password(ctx, password)
    try:
        click.echo(ChainCipher().decrypt_text(hex_ciphertext, password))
    except CryptVaultError as e:
        _fail(str(e))


# ------------------------------------------------------------------
# Batch operations
# ------------------------------------------------------------------

def _run_batch(
    ctx: click.Context,
    files: tuple[Path, ...],
    password: str | None,
    workers: int,
    report: Path | None,
    encrypt: bool,
) -> None:
    try:
        config = dataclasses.replace(ctx.obj, workers=workers)
    except ValueError as e:
        _fail(str(e))

    password = _get_password(ctx, password, confirm=encrypt, show_strength=encrypt)

    logger.debug("Batch of %d files with %d worker(s)", len(files), config.workers)
    click.echo("Processing...")
    results = batch_process(files, password, encrypt=encrypt, config=config)
    click.echo(format_batch_table(results))

    if report is not None:
        path = export_batch_json(results, report)
        click.echo(f"Report: {path}")

    ok = sum(1 for r in results if r.ok)
    verb = "encrypted" if encrypt else "decrypted"
    click.echo(f"\nDone! {ok}/{len(results)} files {verb}.")
    if ok != len(results):
        sys.exit(1)


def _batch_command(name: str, encrypt: bool, help_text: str):
    @main.command(name=name, help=help_text)
    @click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
    @password_opt
    @click.option(
        "--workers", "-j",
        type=int,
        default=1,
        help="Files processed concurrently (default: 1)",
    )
    @click.option(
        "--report",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write a JSON report of the run",
    )
    @click.pass_context
    def command(
        ctx: click.Context,
        files: tuple[Path, ...],
        password: str | None,
        workers: int,
        report: Path | None,
    ) -> None:
        _run_batch(ctx, files, password, workers, report, encrypt=encrypt)

    return command


batch_encrypt = _batch_command("batch-encrypt", True, "Encrypt multiple files with one password.")
batch_decrypt = _batch_command("batch-decrypt", False, "Decrypt multiple files with one password.")


# ------------------------------------------------------------------
# Utilities
# ------------------------------------------------------------------

@main.command(name="hash")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def hash_cmd(file: Path) -> None:
    """Print the SHA-256 of FILE."""
    try:
        digest = hash_file(file)
    except OSError as e:
        _fail(str(e))
    click.echo(f"{digest}  {file}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stats(file: Path) -> None:
    """Show size, character, letter, digit and line counts of FILE."""
    _echo_file_stats(file)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--lines", "-n",
    "max_lines",
    type=int,
    default=None,
    help="Maximum lines to show (default: 50)",
)
@click.pass_context
def view(ctx: click.Context, file: Path, max_lines: int | None) -> None:
    """Show the first lines of FILE."""
    config: VaultConfig = ctx.obj
    limit = max_lines if max_lines is not None else config.preview_lines
    if limit < 1:
        _fail(f"--lines must be >= 1, got {limit}")
    try:
        lines, truncated = preview_lines(file, limit)
    except OSError as e:
        _fail(str(e))

    click.echo(f"Content of '{file}':")
    click.echo("-" * 52)
    for line in lines:
        click.echo(line)
    if truncated:
        click.echo(f"\n... (truncated, showing first {limit} lines) ...")
    click.echo("-" * 52)


@main.command()
def about() -> None:
    """Describe how Crypt Vault protects data."""
    click.echo(ABOUT_TEXT)


@main.command()
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=20,
    help="Number of random round-trip tests (default: 20)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output",
)
def selftest(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate the cipher against published vectors and PyCryptodome."""
    failures = 0
    checks = 0

    click.echo("Running SHA-256 known-answer tests...")
    for i, vec in enumerate(SHA256_VECTORS):
        checks += 1
        got = sha256_hex(vec["message"])
        if got == vec["digest"]:
            if verbose:
                click.echo(f"  SHA-256 test {i+1}: PASS")
        else:
            failures += 1
            click.echo(f"  SHA-256 test {i+1}: FAIL - expected {vec['digest']}, got {got}")

    click.echo("Running AES-256 block known-answer tests...")
    for i, vec in enumerate(AES256_BLOCK_VECTORS):
        checks += 1
        got = encrypt_block(vec["plaintext"], CipherKey.from_key(vec["key"]).schedule)
        if got == vec["ciphertext"]:
            if verbose:
                click.echo(f"  AES test {i+1}: PASS")
        else:
            failures += 1
            click.echo(
                f"  AES test {i+1}: FAIL - expected {vec['ciphertext'].hex()}, got {got.hex()}"
            )

    click.echo("Running CBC-AES256 known-answer test...")
    checks += 1
    vec = CBC_AES256_VECTOR
    envelope = ChainCipher().encrypt_with_key(
        vec["plaintext"], CipherKey.from_key(vec["key"]), iv=vec["iv"]
    )
    # The vector has no padding; our envelope adds one padding block at the end
    if envelope[16:16 + len(vec["ciphertext"])] != vec["ciphertext"]:
        failures += 1
        click.echo("  CBC test: FAIL")
    elif verbose:
        click.echo("  CBC test: PASS")

    click.echo(f"\nRunning {num_tests} random tests against PyCryptodome...")
    source = RandomSource(seed=seed)
    cipher = ChainCipher(random_bytes=source)
    for i in range(num_tests):
        checks += 1
        password = source.get_bytes(12).hex()
        message = source.get_bytes(source.get_bytes(1)[0] % 101)
        cipher_key = CipherKey.from_password(password)

        ok = sha256(message) == reference_sha256(message)
        envelope = cipher.encrypt_with_key(message, cipher_key)
        correct, detail = validate_against_reference(
            cipher_key.key, message, envelope[:16], envelope
        )
        ok = ok and correct
        try:
            ok = ok and reference_decrypt(envelope, cipher_key.key) == message
            ok = ok and cipher.decrypt(envelope, password) == message
        except (CryptVaultError, ValueError) as e:
            ok = False
            detail = detail or str(e)

        if not ok:
            failures += 1
            click.echo(f"  Random test {i+1}: FAIL {detail}")
        elif verbose:
            click.echo(f"  Random test {i+1}: PASS ({len(message)} bytes)")

    if verbose:
        summary = source.get_summary()
        breakdown = summary["bytes_breakdown"]
        click.echo(
            f"\nRandomness: {summary['calls']} calls, {summary['total_bytes']} bytes "
            f"(iv={breakdown['iv']}, other={breakdown['other']}, seed={summary['seed']})"
        )

    click.echo("")
    if failures == 0:
        click.echo(f"SELFTEST PASSED: All {checks} checks passed")
        sys.exit(0)
    else:
        click.echo(f"SELFTEST FAILED: {failures} of {checks} checks failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
