"""Tests for the crypt-vault command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cryptvault.cli import main
from cryptvault.reference import reference_sha256


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text("alpha\nbeta\ngamma\n")
    return path


class TestFileCommands:
    """encrypt / decrypt."""

    def test_round_trip(self, runner: CliRunner, sample: Path) -> None:
        original = sample.read_bytes()

        result = runner.invoke(main, ["encrypt", str(sample), "--password", "Secr3t!pass"])
        assert result.exit_code == 0, result.output
        assert "Password strength: Strong" in result.output
        encrypted = sample.with_name("notes.txt.enc")
        assert encrypted.exists()

        sample.unlink()
        result = runner.invoke(main, ["decrypt", str(encrypted), "--password", "Secr3t!pass"])
        assert result.exit_code == 0, result.output
        assert sample.read_bytes() == original

    def test_output_stats_shown(self, runner: CliRunner, sample: Path) -> None:
        """The written file's statistics follow each single-file operation."""
        result = runner.invoke(main, ["encrypt", str(sample), "-p", "pw"])
        assert result.exit_code == 0, result.output
        encrypted = sample.with_name("notes.txt.enc")
        assert f"File statistics for '{encrypted}':" in result.output
        # 16-byte IV plus two blocks for 17 bytes of plaintext
        assert "48 bytes" in result.output

        sample.unlink()
        result = runner.invoke(main, ["decrypt", str(encrypted), "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert f"File statistics for '{sample}':" in result.output
        assert "17 bytes" in result.output

    def test_explicit_output(self, runner: CliRunner, sample: Path, tmp_path: Path) -> None:
        out = tmp_path / "custom.bin"
        result = runner.invoke(main, ["encrypt", str(sample), "-o", str(out), "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_decrypt_without_extension_uses_fallback(
        self, runner: CliRunner, sample: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "cipher.bin"
        runner.invoke(main, ["encrypt", str(sample), "-o", str(out), "-p", "pw"])

        result = runner.invoke(main, ["decrypt", str(out), "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "decrypted.txt").read_bytes() == sample.read_bytes()

    def test_prompted_password_with_confirmation(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["encrypt", str(sample)], input="pw\npw\n")
        assert result.exit_code == 0, result.output
        assert sample.with_name("notes.txt.enc").exists()

    def test_no_confirm_prompts_once(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["--no-confirm", "encrypt", str(sample)], input="pw\n")
        assert result.exit_code == 0, result.output

    def test_empty_password_rejected(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["encrypt", str(sample), "--password", ""])
        assert result.exit_code == 1
        assert "Password cannot be empty" in result.output

    def test_wrong_password(self, runner: CliRunner, sample: Path, tmp_path: Path) -> None:
        runner.invoke(main, ["encrypt", str(sample), "-p", "right"])
        out = tmp_path / "out.txt"

        result = runner.invoke(
            main, ["decrypt", str(sample.with_name("notes.txt.enc")), "-o", str(out), "-p", "wrong"]
        )
        assert result.exit_code == 1
        assert "Decryption failed" in result.output
        assert not out.exists()

    def test_missing_input(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["encrypt", str(tmp_path / "nope"), "-p", "pw"])
        assert result.exit_code != 0


class TestTextCommands:
    """encrypt-text / decrypt-text."""

    def test_round_trip(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["encrypt-text", "hello vault", "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert "Password strength: Weak" in result.output
        hex_ct = result.output.strip().splitlines()[-1]
        assert len(hex_ct) == 64
        assert hex_ct == hex_ct.lower()

        result = runner.invoke(main, ["decrypt-text", hex_ct, "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "hello vault"

    def test_invalid_hex(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["decrypt-text", "xyz", "-p", "pw"])
        assert result.exit_code == 1
        assert "Invalid hex" in result.output

    def test_too_short(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["decrypt-text", "00" * 16, "-p", "pw"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestBatchCommands:
    """batch-encrypt / batch-decrypt."""

    def _files(self, tmp_path: Path) -> list[Path]:
        paths = []
        for name in ("a.txt", "b.txt", "c.txt"):
            p = tmp_path / name
            p.write_text(f"content of {name}\n")
            paths.append(p)
        return paths

    def test_round_trip_with_report(self, runner: CliRunner, tmp_path: Path) -> None:
        paths = self._files(tmp_path)
        originals = [p.read_bytes() for p in paths]
        report = tmp_path / "report.json"

        result = runner.invoke(
            main,
            ["batch-encrypt", *map(str, paths), "-p", "pw", "--workers", "2", "--report", str(report)],
        )
        assert result.exit_code == 0, result.output
        assert "3/3 files encrypted" in result.output
        assert json.loads(report.read_text())["succeeded"] == 3

        for p in paths:
            p.unlink()

        enc = [str(p.with_name(p.name + ".enc")) for p in paths]
        result = runner.invoke(main, ["batch-decrypt", *enc, "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert "3/3 files decrypted" in result.output
        assert [p.read_bytes() for p in paths] == originals

    def test_missing_file_fails_run(self, runner: CliRunner, tmp_path: Path) -> None:
        paths = self._files(tmp_path)
        result = runner.invoke(
            main, ["batch-encrypt", str(paths[0]), str(tmp_path / "ghost.txt"), "-p", "pw"]
        )
        assert result.exit_code == 1
        assert "1/2 files encrypted" in result.output
        assert "not found" in result.output

    def test_invalid_workers(self, runner: CliRunner, tmp_path: Path) -> None:
        paths = self._files(tmp_path)
        result = runner.invoke(main, ["batch-encrypt", str(paths[0]), "-p", "pw", "--workers", "0"])
        assert result.exit_code == 1
        assert "workers" in result.output


class TestUtilityCommands:
    """hash / stats / view / about / selftest."""

    def test_hash(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["hash", str(sample)])
        assert result.exit_code == 0, result.output
        assert reference_sha256(sample.read_bytes()).hex() in result.output

    def test_stats(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["stats", str(sample)])
        assert result.exit_code == 0, result.output
        assert "17 bytes" in result.output
        assert "Lines" in result.output

    def test_view_truncates(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["view", str(sample), "--lines", "2"])
        assert result.exit_code == 0, result.output
        assert "alpha" in result.output
        assert "beta" in result.output
        assert "gamma" not in result.output
        assert "truncated" in result.output

    def test_view_full(self, runner: CliRunner, sample: Path) -> None:
        result = runner.invoke(main, ["view", str(sample)])
        assert result.exit_code == 0, result.output
        assert "gamma" in result.output
        assert "truncated" not in result.output

    def test_about(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["about"])
        assert result.exit_code == 0
        assert "AES-256-CBC" in result.output

    def test_selftest(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["selftest", "--n", "3", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "SELFTEST PASSED" in result.output

    def test_selftest_reports_randomness_usage(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["selftest", "--n", "3", "--seed", "1", "-v"])
        assert result.exit_code == 0, result.output
        # One 16-byte IV per random round trip
        assert "iv=48" in result.output
        assert "seed=1" in result.output

    def test_selftest_seed_is_reproducible(self, runner: CliRunner) -> None:
        first = runner.invoke(main, ["selftest", "--n", "3", "--seed", "7", "-v"])
        second = runner.invoke(main, ["selftest", "--n", "3", "--seed", "7", "-v"])
        assert first.exit_code == 0, first.output
        assert first.output == second.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
