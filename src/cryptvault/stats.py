"""File statistics, content preview and password strength scoring."""

from __future__ import annotations

import string
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_LETTERS = frozenset(string.ascii_letters.encode("ascii"))
_DIGITS = frozenset(string.digits.encode("ascii"))


@dataclass
class FileStats:
    """Byte-level statistics of a file."""

    path: Path
    size_bytes: int
    chars: int
    letters: int
    digits: int
    lines: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "size_bytes": self.size_bytes,
            "chars": self.chars,
            "letters": self.letters,
            "digits": self.digits,
            "lines": self.lines,
        }


def file_stats(path: str | Path) -> FileStats:
    """Count bytes, ASCII letters, ASCII digits and newlines in a file.

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(path)
    data = path.read_bytes()
    return FileStats(
        path=path,
        size_bytes=path.stat().st_size,
        chars=len(data),
        letters=sum(1 for b in data if b in _LETTERS),
        digits=sum(1 for b in data if b in _DIGITS),
        lines=data.count(b"\n"),
    )


def preview_lines(path: str | Path, max_lines: int = 50) -> tuple[list[str], bool]:
    """Read up to max_lines lines of a file as text.

    Undecodable bytes are replaced, so binary files preview as noise
    rather than failing.

    Returns:
        Tuple of (lines without newlines, truncated flag)
    """
    lines: list[str] = []
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            if len(lines) == max_lines:
                return lines, True
            lines.append(line.rstrip("\r\n"))
    return lines, False


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    label: str


def password_strength(password: str) -> PasswordStrength:
    """Score a password 0-5 on length and character classes.

    One point each for length >= 8, length >= 12, mixed case, a digit,
    and any other character. 0-1 is Weak, 2-3 Medium, 4-5 Strong.
    """
    score = 0
    if len(password) >= 8:
        score += 1
    if len(password) >= 12:
        score += 1

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)
    has_other = any(not (c.isupper() or c.islower() or c.isdigit()) for c in password)

    if has_upper and has_lower:
        score += 1
    if has_digit:
        score += 1
    if has_other:
        score += 1

    if score <= 1:
        label = "Weak"
    elif score <= 3:
        label = "Medium"
    else:
        label = "Strong"
    return PasswordStrength(score=score, label=label)
