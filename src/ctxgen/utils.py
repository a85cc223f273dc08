"""
Utility functions for ctxgen.

Includes path normalization, line counting, and strict text reading with
encoding diagnostics.
"""

from __future__ import annotations

import os
from pathlib import Path

import chardet

from .errors import FileReadFailure


def normalize_path(path: str) -> str:
    """Normalize a path for consistent cross-platform comparisons.

    Backslashes are only separators on Windows; elsewhere they are legal
    file name characters and are kept.

    Args:
        path: Path string that may contain platform-specific separators.

    Returns:
        Normalized path using forward slashes.
    """
    if os.sep == "\\":
        return path.replace("\\", "/")
    return path


def lossy_path(path: str | Path) -> str:
    """Render a path as valid Unicode text.

    Bytes in a file name that are not valid UTF-8 become U+FFFD, so the
    result can always be encoded again.

    Args:
        path: Path as returned by the filesystem.

    Returns:
        The path with undecodable bytes replaced.
    """
    return os.fsencode(path).decode("utf-8", errors="replace")


def count_lines(text: str) -> int:
    """Count newline-delimited lines in ``text``.

    An empty string has no lines. A trailing newline closes the last line
    rather than opening a new one, so ``"a\\n"`` and ``"a"`` both count as 1.
    Only ``\\n`` separates lines.

    Args:
        text: Input text.

    Returns:
        Number of lines.
    """
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def is_binary_sample(sample: bytes) -> bool:
    """Heuristically determine whether a byte sample comes from a binary file.

    Uses a fast null-byte check first, then falls back to a ratio of printable
    ASCII bytes.

    Args:
        sample: Leading bytes of a file.

    Returns:
        True if the sample is likely binary, otherwise False.
    """
    if not sample:
        return False

    if b"\x00" in sample:
        return True

    printable_count = sum(
        1
        for b in sample
        if 32 <= b <= 126 or b in (9, 10, 13) or b >= 128  # printable, whitespace, UTF-8 bytes
    )

    return printable_count / len(sample) < 0.70


def describe_undecodable(data: bytes, sample_size: int = 8192) -> str:
    """Explain why ``data`` is not valid UTF-8 text.

    Args:
        data: Raw file contents that failed to decode.
        sample_size: Number of leading bytes to inspect.

    Returns:
        A short human-readable reason.
    """
    sample = data[:sample_size]
    if is_binary_sample(sample):
        return "file appears to be binary"

    result = chardet.detect(sample)
    encoding = result.get("encoding")
    if isinstance(encoding, str) and encoding:
        return f"stream did not contain valid UTF-8 (detected encoding: {encoding.lower()})"
    return "stream did not contain valid UTF-8"


def read_text_strict(file_path: Path) -> str:
    """Read a whole file as UTF-8 text, without newline translation.

    Args:
        file_path: Path to the file to read.

    Returns:
        The decoded contents, unchanged.

    Raises:
        FileReadFailure: If the file cannot be opened or is not valid UTF-8.
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise FileReadFailure(file_path, str(e)) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileReadFailure(file_path, describe_undecodable(data)) from e
