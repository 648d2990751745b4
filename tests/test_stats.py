"""Tests for file statistics, preview and password strength."""

from pathlib import Path

import pytest

from cryptvault.stats import file_stats, password_strength, preview_lines


class TestFileStats:
    """Tests for file_stats()."""

    def test_counts(self, tmp_path: Path) -> None:
        path = tmp_path / "sample.txt"
        path.write_bytes(b"Hello 123\nWorld!\n")

        stats = file_stats(path)

        assert stats.size_bytes == 17
        assert stats.chars == 17
        assert stats.letters == 10
        assert stats.digits == 3
        assert stats.lines == 2

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty"
        path.write_bytes(b"")
        stats = file_stats(path)
        assert (stats.size_bytes, stats.chars, stats.letters, stats.digits, stats.lines) == (0, 0, 0, 0, 0)

    def test_non_ascii_bytes_are_not_letters(self, tmp_path: Path) -> None:
        path = tmp_path / "latin"
        path.write_bytes("é".encode("utf-8") + b"a")
        assert file_stats(path).letters == 1

    def test_to_dict(self, tmp_path: Path) -> None:
        path = tmp_path / "x"
        path.write_bytes(b"ab\n")
        d = file_stats(path).to_dict()
        assert d["letters"] == 2
        assert d["lines"] == 1
        assert d["path"] == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            file_stats(tmp_path / "missing")


class TestPreview:
    """Tests for preview_lines()."""

    def test_short_file(self, tmp_path: Path) -> None:
        path = tmp_path / "short.txt"
        path.write_text("one\ntwo\nthree\n")
        assert preview_lines(path, 50) == (["one", "two", "three"], False)

    def test_truncated(self, tmp_path: Path) -> None:
        path = tmp_path / "long.txt"
        path.write_text("".join(f"line {i}\n" for i in range(100)))

        lines, truncated = preview_lines(path, 50)

        assert len(lines) == 50
        assert lines[-1] == "line 49"
        assert truncated is True

    def test_exact_limit_not_truncated(self, tmp_path: Path) -> None:
        path = tmp_path / "exact.txt"
        path.write_text("a\nb\n")
        assert preview_lines(path, 2) == (["a", "b"], False)

    def test_binary_content_does_not_fail(self, tmp_path: Path) -> None:
        path = tmp_path / "blob"
        path.write_bytes(b"\xff\xfe\x00abc\n")
        lines, _ = preview_lines(path)
        assert lines[0].endswith("abc")


class TestPasswordStrength:
    """Tests for password_strength()."""

    @pytest.mark.parametrize(
        "password,score,label",
        [
            ("", 0, "Weak"),
            ("abc", 0, "Weak"),
            ("abcdefgh", 1, "Weak"),
            ("abcdefgh1", 2, "Medium"),
            ("Abcdefgh1", 3, "Medium"),
            ("Abcdefgh1!", 4, "Strong"),
            ("Abcdefghijk1!", 5, "Strong"),
            ("!!!!", 1, "Weak"),
        ],
    )
    def test_scores(self, password: str, score: int, label: str) -> None:
        strength = password_strength(password)
        assert strength.score == score
        assert strength.label == label
