"""
Exception hierarchy for ctxgen.

Every failure the tool can report is a CtxgenError. The pipeline wraps low-level
causes in a top-level context error using ``raise ... from ...`` so the CLI can
print the whole chain once.
"""

from __future__ import annotations

from pathlib import Path


class CtxgenError(Exception):
    """Base error for ctxgen."""

    pass


class ConfigError(CtxgenError):
    """Explicitly requested config file is missing or invalid."""

    pass


class ContextDirMissing(CtxgenError):
    """The context directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Context directory '{path}' does not exist")


class ContextDirNotADirectory(CtxgenError):
    """The context path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"'{path}' is not a directory")


class FileReadFailure(CtxgenError):
    """A discovered file could not be read as text."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to read file: {path}: {detail}")


class OutputDirCreateFailure(CtxgenError):
    """The output directory could not be created."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to create output directory: {path}: {detail}")


class OutputWriteFailure(CtxgenError):
    """One of the output files could not be written."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to write {path}: {detail}")


class GenerationError(CtxgenError):
    """Top-level failure while building the context document."""

    pass


class OutputError(CtxgenError):
    """Top-level failure while writing the output files."""

    pass


def describe_error(exc: BaseException) -> str:
    """Join an exception and its ``__cause__`` chain into one line.

    Args:
        exc: The outermost exception.

    Returns:
        Messages from outermost to innermost, separated by ``": "``.
    """
    messages = [str(exc) or type(exc).__name__]
    current: BaseException = exc
    while current.__cause__ is not None:
        cause = current.__cause__
        message = str(cause) or type(cause).__name__
        # A cause whose text the outer error already embedded is not repeated
        if message != getattr(current, "detail", None):
            messages.append(message)
        current = cause
    # File names may carry undecodable bytes
    return ": ".join(messages).encode("utf-8", errors="replace").decode("utf-8")
