"""
Configuration models and defaults for ctxgen.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Default locations, relative to the working directory
DEFAULT_CONTEXT_DIR = Path(".context")
DEFAULT_OUTPUT_DIR = Path(".")

# Every run writes the same document under each of these names
OUTPUT_FILE_NAMES: tuple[str, ...] = ("AGENTS.md", "CLAUDE.md")

# Fold markers (case-sensitive literals)
FOLD_OPEN = "<ctxgen:fold>"
FOLD_CLOSE = "</ctxgen:fold>"


@dataclass(frozen=True)
class GeneratorConfig:
    """Resolved settings for a single generation run."""

    context_dir: Path = DEFAULT_CONTEXT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class FoldRegion:
    """A single fold found in a file.

    Attributes:
        line_count: Lines inside the fold, per ``count_lines``
        start_line: 1-indexed line on which the hidden content starts
        end_line: 1-indexed line on which the hidden content ends
    """

    line_count: int
    start_line: int
    end_line: int

    def placeholder(self, path_label: str) -> str:
        """Text substituted for this fold."""
        line_text = "line" if self.line_count == 1 else "lines"
        return (
            f"[Folded content: {self.line_count} {line_text} "
            f"(lines {self.start_line}-{self.end_line}). "
            f"Read '{path_label}' for full content.]"
        )


@dataclass(frozen=True)
class ContextFile:
    """A context file after fold substitution."""

    relative_path: str
    content: str
    has_folds: bool = False
    fold_count: int = 0


@dataclass
class GenerationStats:
    """Counters collected during a generation run."""

    files_read: int = 0
    files_with_folds: int = 0
    folds_replaced: int = 0
    bytes_read: int = 0
    entries_skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "files_read": self.files_read,
            "files_with_folds": self.files_with_folds,
            "folds_replaced": self.folds_replaced,
            "bytes_read": self.bytes_read,
            "entries_skipped": self.entries_skipped,
        }
