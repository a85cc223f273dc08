"""
Fold tag processing for ctxgen.

Replaces every ``<ctxgen:fold>...</ctxgen:fold>`` region with a placeholder that
records how many lines were hidden and where they were in the original file.
"""

from __future__ import annotations

import re

from .config import FOLD_CLOSE, FOLD_OPEN, FoldRegion
from .utils import count_lines

# Non-greedy so that each pair of tags is its own region; DOTALL so folds may span lines
FOLD_PATTERN = re.compile(re.escape(FOLD_OPEN) + r"(.*?)" + re.escape(FOLD_CLOSE), re.DOTALL)


def _region_for(content: str, match: re.Match[str]) -> FoldRegion:
    inner_start, inner_end = match.span(1)
    return FoldRegion(
        line_count=count_lines(match.group(1)),
        start_line=count_lines(content[:inner_start]) + 1,
        end_line=count_lines(content[:inner_end]),
    )


def find_folds(content: str) -> list[FoldRegion]:
    """
    Locate every fold region in document order.

    Args:
        content: Raw file content

    Returns:
        One FoldRegion per matched pair of tags
    """
    return [_region_for(content, match) for match in FOLD_PATTERN.finditer(content)]


def replace_folds(content: str, path_label: str) -> tuple[str, list[FoldRegion]]:
    """
    Replace each fold region (tags included) with its placeholder.

    Text outside the regions is copied verbatim. Unmatched tags are left as-is.

    Args:
        content: Raw file content
        path_label: Label quoted in the placeholder, usually the relative path

    Returns:
        Tuple of (new content, regions replaced)
    """
    regions: list[FoldRegion] = []
    parts: list[str] = []
    last_end = 0

    for match in FOLD_PATTERN.finditer(content):
        parts.append(content[last_end:match.start()])

        region = _region_for(content, match)
        regions.append(region)
        parts.append(region.placeholder(path_label))

        last_end = match.end()

    if not regions:
        return content, regions

    parts.append(content[last_end:])
    return "".join(parts), regions


def process_folds(content: str, path_label: str) -> tuple[str, bool]:
    """
    Process fold tags in content.

    Returns:
        Tuple of (new content, whether any fold was found). Content without
        folds is returned unchanged.
    """
    new_content, regions = replace_folds(content, path_label)
    return new_content, bool(regions)
