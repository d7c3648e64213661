"""
Resolve command-line arguments into an ordered list of input labels.

- Arguments containing glob metacharacters are expanded (recursive `**`,
  hidden files included); directories matched by a pattern are dropped.
- Other arguments are kept literally, so a missing file still surfaces as an
  open error later.
- The resolved list is sorted so output order is deterministic.
"""

from __future__ import annotations

import glob
import os
import re
from typing import Iterable, List

from errors import PatternError
from logs import get_logger
from manifest import STDIN_LABEL

log = get_logger("sha_calc.inputs")

GLOB_CHARS = ("*", "?", "[")
_SEP_RE = re.compile(r"[\\/]" if os.sep == "\\" else "/")


def is_pattern(arg: str) -> bool:
    return any(c in arg for c in GLOB_CHARS)


def validate_pattern(pattern: str) -> None:
    """
    Reject patterns glob would silently treat as literals.

    Raises:
        PatternError: on an unclosed `[` or a `**` that is not a whole
            path component.
    """
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise PatternError(
                    f"Failed to parse glob pattern: {pattern}: unclosed '[' at {i}"
                )
            i = close
        i += 1

    for part in _SEP_RE.split(pattern):
        if "**" in part and part != "**":
            raise PatternError(
                f"Failed to parse glob pattern: {pattern}: "
                "'**' must be a whole path component"
            )


def expand_pattern(pattern: str) -> List[str]:
    validate_pattern(pattern)
    matches = glob.glob(pattern, recursive=True, include_hidden=True)
    files = [m for m in matches if not os.path.isdir(m)]
    if not files:
        log.warning(f"Pattern matched no files: {pattern}")
    elif len(files) != len(matches):
        log.debug(f"{pattern}: skipped {len(matches) - len(files)} director(ies)")
    return files


def resolve_inputs(args: Iterable[str]) -> List[str]:
    """
    Expand `args` into labels, sorted lexicographically.

    `-` stays `-` (standard input). All patterns are validated before any
    label is returned, so a bad pattern aborts before hashing starts.

    Raises:
        PatternError: if any pattern is invalid.
    """
    labels: List[str] = []
    for arg in args:
        if arg != STDIN_LABEL and is_pattern(arg):
            labels.extend(expand_pattern(arg))
        else:
            labels.append(arg)
    return sorted(labels)
