"""
Checksum manifest lines: `<hex-digest><two spaces><path>`.

Compute mode writes lines with `format_line`; check mode reads them back with
`parse_line`, so both directions share one separator definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from errors import MalformedLineError

SEPARATOR = "  "
STDIN_LABEL = "-"


@dataclass(frozen=True)
class ManifestLine:
    expected_digest: str
    target_label: str
    line_no: int = 0

    @property
    def is_stdin(self) -> bool:
        return self.target_label == STDIN_LABEL


def format_line(digest: str, label: str) -> str:
    return f"{digest}{SEPARATOR}{label}"


def parse_line(raw: str, line_no: int = 0) -> Optional[ManifestLine]:
    """
    Parse one manifest line.

    Returns None for blank lines. The split happens on the first two-space
    run of the untrimmed line, so paths may themselves contain spaces.

    Raises:
        MalformedLineError: if the separator is missing.
    """
    line = raw.rstrip("\r\n")
    if not line.strip():
        return None
    expected, sep, label = line.partition(SEPARATOR)
    if not sep:
        raise MalformedLineError(line_no)
    return ManifestLine(expected_digest=expected, target_label=label, line_no=line_no)


def read_manifest(path: Union[str, Path]) -> List[Tuple[int, str]]:
    """
    Read a manifest into (line_no, raw_line) pairs. The whole file is read up
    front so its handle is closed before any target is opened. Only LF
    ends a line; a lone CR stays part of the path.

    Raises:
        OSError: if the file cannot be read.
        UnicodeDecodeError: if the file is not valid UTF-8.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    return list(enumerate(text.split("\n"), start=1))


def iter_entries(
    lines: List[Tuple[int, str]],
) -> Iterator[Union[ManifestLine, MalformedLineError]]:
    """Yield parsed entries (or the parse error) for every non-blank line."""
    for line_no, raw in lines:
        try:
            entry = parse_line(raw, line_no)
        except MalformedLineError as exc:
            yield exc
            continue
        if entry is not None:
            yield entry
