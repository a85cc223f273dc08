"""
Context directory scanner for ctxgen.

Discovers every file under the context directory (following symlinks), reads it,
and runs fold substitution on it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator, Optional

from .config import ContextFile, GenerationStats
from .errors import ContextDirMissing, ContextDirNotADirectory
from .folds import replace_folds
from .utils import lossy_path, normalize_path, read_text_strict


def validate_context_dir(path: Path) -> Path:
    """Check that the context directory exists and is a directory.

    Args:
        path: Context directory as given by the user.

    Returns:
        The same path, unchanged, so relative labels stay relative to it.

    Raises:
        ContextDirMissing: If nothing exists at `path`.
        ContextDirNotADirectory: If `path` exists but is not a directory.
    """
    if not path.exists():
        raise ContextDirMissing(path)

    if not path.is_dir():
        raise ContextDirNotADirectory(path)

    return path


def relative_label(file_path: Path, root_path: Path) -> str:
    """
    Compute the label used for a file in the output.

    Falls back to the full path if `file_path` is not under `root_path`.
    Undecodable bytes in file names are replaced with U+FFFD.
    """
    try:
        rel_path = lossy_path(file_path.relative_to(root_path))
    except ValueError:
        rel_path = lossy_path(file_path)

    return normalize_path(rel_path)


def _dir_key(path: Path) -> tuple[int, int]:
    st = path.stat()
    return st.st_dev, st.st_ino


def walk_files(
    root_path: Path, stats: Optional[GenerationStats] = None
) -> Generator[Path, None, None]:
    """
    Walk the context directory and yield every non-directory entry.

    Symlinks are followed. Entries that cannot be enumerated (unreadable
    directories, broken links, symlink loops) are skipped and counted.

    Args:
        root_path: Directory to walk
        stats: Optional counters to update

    Yields:
        Paths built by joining entry names onto `root_path`
    """
    try:
        root_key = _dir_key(root_path)
    except OSError:
        return

    # Each pending directory carries the identities of its ancestors
    dirs_to_process: list[tuple[Path, frozenset[tuple[int, int]]]] = [
        (root_path, frozenset({root_key}))
    ]

    while dirs_to_process:
        current_dir, ancestors = dirs_to_process.pop()

        try:
            with os.scandir(current_dir) as entries:
                entries_list = sorted(entries, key=lambda e: e.name)
        except OSError:
            if stats is not None:
                stats.entries_skipped += 1
            continue

        for entry in entries_list:
            entry_path = current_dir / entry.name

            try:
                if entry.is_dir():
                    key = _dir_key(entry_path)
                    if key in ancestors:
                        # Symlink back into a directory already being walked
                        if stats is not None:
                            stats.entries_skipped += 1
                        continue
                    dirs_to_process.append((entry_path, ancestors | {key}))

                elif entry.is_symlink() and not entry_path.exists():
                    # Broken link
                    if stats is not None:
                        stats.entries_skipped += 1

                else:
                    yield entry_path

            except OSError:
                if stats is not None:
                    stats.entries_skipped += 1
                continue


def collect_context_files(
    root_path: Path, stats: Optional[GenerationStats] = None
) -> list[ContextFile]:
    """
    Read and fold-process every file under `root_path`.

    Args:
        root_path: Context directory (already validated)
        stats: Optional counters to update

    Returns:
        ContextFile objects sorted by relative path

    Raises:
        FileReadFailure: If any discovered file cannot be read as UTF-8 text
    """
    context_files: list[ContextFile] = []

    for file_path in walk_files(root_path, stats):
        content = read_text_strict(file_path)
        rel_path = relative_label(file_path, root_path)

        processed, regions = replace_folds(content, rel_path)

        context_files.append(
            ContextFile(
                relative_path=rel_path,
                content=processed,
                has_folds=bool(regions),
                fold_count=len(regions),
            )
        )

        if stats is not None:
            stats.files_read += 1
            stats.bytes_read += len(content.encode("utf-8"))
            if regions:
                stats.files_with_folds += 1
                stats.folds_replaced += len(regions)

    # Sort by path for consistent output
    context_files.sort(key=lambda f: f.relative_path)
    return context_files
