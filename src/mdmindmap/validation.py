#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdmindmap/validation.py
"""Advisory markdown linting.

:func:`validate_markdown` reports a short list of human-readable warnings and
never raises. Two conditions are reported, each with its 1-indexed line:

- ``Line N: Unclosed code block`` for a fence line with no fence line after
  it. Opening and closing fences are not told apart, so the closing fence
  of the last block in a document is reported as well. Existing consumers
  rely on this output, so it is kept as is.
- ``Line N: Headers deeper than 6 levels are not standard`` for a line
  starting with seven or more ``#`` characters.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdmindmap.analysis.extractor import is_fence_line
from mdmindmap.constants import DEEP_HEADER_PATTERN

logger = logging.getLogger(__name__)


def validate_markdown(markdown: Optional[str]) -> list[str]:
    """Return advisory warnings for ``markdown``.

    Parameters
    ----------
    markdown : str or None
        Markdown source; None and non-string input yield no warnings

    Returns
    -------
    list of str
        Warnings in line order

    Examples
    --------
        >>> validate_markdown("####### Too deep")
        ['Line 1: Headers deeper than 6 levels are not standard']

    """
    if not markdown or not isinstance(markdown, str):
        return []

    lines = markdown.split("\n")
    fence_lines = [index for index, line in enumerate(lines) if is_fence_line(line)]
    last_fence = fence_lines[-1] if fence_lines else -1

    warnings: list[str] = []
    for index, line in enumerate(lines):
        line_number = index + 1
        if index == last_fence:
            warnings.append(f"Line {line_number}: Unclosed code block")
        if DEEP_HEADER_PATTERN.match(line):
            warnings.append(f"Line {line_number}: Headers deeper than 6 levels are not standard")

    for warning in warnings:
        logger.debug("Markdown validation: %s", warning)
    return warnings


__all__ = [
    "validate_markdown",
]
