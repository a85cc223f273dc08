"""
ctxgen: Generate AGENTS.md and CLAUDE.md from a .context folder.

Every file in the context folder is concatenated into one markdown document.
Regions wrapped in <ctxgen:fold>...</ctxgen:fold> are replaced with a short
placeholder pointing back at the source file.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
