"""
Check mode: re-hash every file named in one or more manifests and compare.

The sweep is best-effort. A bad line, a missing target or an unreadable
manifest is recorded and reported, then processing moves on; only the final
summary decides success.

The manifest never names its algorithm. Every line is checked with the one
selector the process was started with, so a manifest written with another
algorithm shows up as FAILED lines, not as a dedicated diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Sequence, Union

import typer

from algorithms import HashAlgorithm
from digest import CHUNK_SIZE, digest_file
from errors import InputAccessError, MalformedLineError, NoManifestError
from logs import get_logger
from manifest import ManifestLine, iter_entries, read_manifest

log = get_logger("sha_calc.verify")

Echo = Callable[..., None]


class Verdict(str, Enum):
    OK = "ok"
    MISMATCH = "mismatch"
    ERROR = "error"


@dataclass(frozen=True)
class LineResult:
    manifest: str
    line_no: int
    label: str
    verdict: Verdict
    reason: Optional[str] = None


@dataclass
class CheckSummary:
    checked: int = 0
    passed: int = 0
    mismatched: int = 0
    errors: int = 0

    @property
    def all_passed(self) -> bool:
        return self.mismatched == 0 and self.errors == 0

    def record(self, result: LineResult) -> None:
        self.checked += 1
        if result.verdict is Verdict.OK:
            self.passed += 1
        elif result.verdict is Verdict.MISMATCH:
            self.mismatched += 1
        else:
            self.errors += 1


def check_entry(
    entry: ManifestLine,
    algorithm: HashAlgorithm,
    *,
    manifest: str = "",
    chunk_size: int = CHUNK_SIZE,
) -> LineResult:
    """Recompute one manifest entry and classify it."""
    label = entry.target_label

    def _result(verdict: Verdict, reason: Optional[str] = None) -> LineResult:
        return LineResult(manifest, entry.line_no, label, verdict, reason)

    if entry.is_stdin:
        return _result(Verdict.ERROR, "cannot check stdin")

    try:
        actual = digest_file(label, algorithm, chunk_size=chunk_size)
    except InputAccessError as exc:
        return _result(Verdict.ERROR, str(exc))

    if actual.lower() == entry.expected_digest.lower():
        return _result(Verdict.OK)

    if len(entry.expected_digest) != algorithm.hex_length:
        log.debug(
            f"{label}: expected digest has {len(entry.expected_digest)} hex chars, "
            f"{algorithm.display_name} produces {algorithm.hex_length}"
        )
    return _result(Verdict.MISMATCH)


def iter_manifest_results(
    manifest: Union[str, Path],
    algorithm: HashAlgorithm,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[LineResult]:
    """Yield one result per non-blank line of `manifest`, in file order."""
    name = str(manifest)
    try:
        lines = read_manifest(manifest)
    except (OSError, UnicodeDecodeError) as exc:
        reason = str(InputAccessError(name, "Failed to read hash file", exc))
        yield LineResult(name, 0, name, Verdict.ERROR, reason)
        return

    log.debug(f"Checking {name} with {algorithm.display_name}")
    for item in iter_entries(lines):
        if isinstance(item, MalformedLineError):
            yield LineResult(name, item.line_no, name, Verdict.ERROR, f"{name}: {item}")
            continue
        yield check_entry(item, algorithm, manifest=name, chunk_size=chunk_size)


def report(result: LineResult, *, quiet: bool = False, echo: Echo = typer.echo) -> None:
    """Print the terminal line for one result."""
    if result.verdict is Verdict.OK:
        if not quiet:
            echo(f"{result.label}: OK")
    elif result.verdict is Verdict.MISMATCH:
        echo(f"{result.label}: FAILED")
    else:
        echo(f"sha-calc: {result.reason}", err=True)


def run_check(
    manifests: Sequence[Union[str, Path]],
    algorithm: HashAlgorithm,
    *,
    quiet: bool = False,
    chunk_size: int = CHUNK_SIZE,
    echo: Echo = typer.echo,
) -> CheckSummary:
    """
    Check every manifest in order, reporting each line as it completes.

    Raises:
        NoManifestError: if `manifests` is empty.
    """
    if not manifests:
        raise NoManifestError("No hash files specified for checking")

    summary = CheckSummary()
    for result in _sweep(manifests, algorithm, chunk_size):
        summary.record(result)
        report(result, quiet=quiet, echo=echo)

    log.info(
        f"Checked {summary.checked} line(s): {summary.passed} OK, "
        f"{summary.mismatched} FAILED, {summary.errors} error(s)"
    )
    return summary


def _sweep(
    manifests: Iterable[Union[str, Path]], algorithm: HashAlgorithm, chunk_size: int
) -> Iterator[LineResult]:
    for manifest in manifests:
        yield from iter_manifest_results(manifest, algorithm, chunk_size=chunk_size)
