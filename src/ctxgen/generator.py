"""
Generation pipeline for ctxgen.

Ties the scanner, fold processor and renderer together:
validate -> collect -> render -> write.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import GenerationStats, GeneratorConfig
from .errors import CtxgenError, GenerationError, OutputError
from .renderer import render_document, write_outputs
from .scanner import collect_context_files, validate_context_dir


def generate_context_markdown(
    context_dir: Path, stats: Optional[GenerationStats] = None
) -> str:
    """Collect and process all context files and render the document.

    Args:
        context_dir: Existing context directory.
        stats: Optional counters to update.

    Returns:
        The rendered markdown document.

    Raises:
        GenerationError: Wrapping the underlying read failure.
    """
    try:
        files = collect_context_files(context_dir, stats)
    except CtxgenError as e:
        raise GenerationError("Failed to generate context markdown") from e

    return render_document(files)


def write_output_files(output_dir: Path, content: str) -> list[Path]:
    """Write the rendered document to AGENTS.md and CLAUDE.md.

    Raises:
        OutputError: Wrapping the directory or file failure.
    """
    try:
        return write_outputs(output_dir, content)
    except CtxgenError as e:
        raise OutputError("Failed to write output files") from e


def run(config: GeneratorConfig) -> tuple[list[Path], GenerationStats]:
    """Run a full generation pass.

    Nothing is written unless the whole document was built first.

    Args:
        config: Resolved settings.

    Returns:
        Tuple of (written file paths, GenerationStats).
    """
    stats = GenerationStats()

    context_dir = validate_context_dir(config.context_dir)
    content = generate_context_markdown(context_dir, stats)
    output_files = write_output_files(config.output_dir, content)

    return output_files, stats
