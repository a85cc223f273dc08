"""
Renderer for ctxgen.

Formats processed context files into a single markdown document and writes it
to the output directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .config import OUTPUT_FILE_NAMES, ContextFile
from .errors import OutputDirCreateFailure, OutputWriteFailure

# Separator between consecutive file entries (one blank line)
ENTRY_SEPARATOR = "\n\n"


def format_file_entry(file: ContextFile) -> str:
    """
    Render one file as a ``<file>`` block.

    The ``has_folds`` attribute is only present when the file had folds.
    Attribute values are wrapped in double quotes without further escaping.
    """
    has_folds_attr = ' has_folds="true"' if file.has_folds else ""

    return f'<file path="{file.relative_path}"{has_folds_attr}>\n{file.content.strip()}\n</file>'


def render_document(files: Iterable[ContextFile]) -> str:
    """
    Join file entries into the final document.

    Args:
        files: Context files, already in output order

    Returns:
        Entries separated by a blank line, with no trailing separator
    """
    return ENTRY_SEPARATOR.join(format_file_entry(f) for f in files)


def write_outputs(output_dir: Path, content: str) -> list[Path]:
    """
    Write the document to every output file name in `output_dir`.

    The directory is created if needed and existing files are overwritten.

    Args:
        output_dir: Destination directory
        content: Rendered document

    Returns:
        List of written file paths

    Raises:
        OutputDirCreateFailure: If the directory cannot be created
        OutputWriteFailure: If a file cannot be written
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirCreateFailure(output_dir, str(e)) from e

    output_paths = [output_dir / name for name in OUTPUT_FILE_NAMES]

    # Encode before opening anything so a bad document never truncates a file
    try:
        data = content.encode("utf-8")
    except UnicodeError as e:
        raise OutputWriteFailure(output_paths[0], str(e)) from e

    output_files = []

    for output_path in output_paths:
        try:
            with open(output_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise OutputWriteFailure(output_path, str(e)) from e
        output_files.append(output_path)

    return output_files
