"""
CLI entrypoint for sha-calc.

- compute: print `<digest>  <label>` for each file / pattern (stdin if none)
- check (-c): verify `<digest>  <path>` manifests with the selected algorithm
- --list-algorithms: show the supported tokens
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from algorithms import ALGORITHMS, HashAlgorithm
from config import AppConfig
from digest import digest_file, digest_stream
from errors import InternalError, ShaCalcError
from inputs import resolve_inputs
from logs import get_logger, init_logging
from manifest import STDIN_LABEL, format_line
from verify import run_check

APP_NAME = "sha-calc"
APP_VERSION = "0.1.0"

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

log = get_logger("sha_calc")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit()


def _print_algorithms() -> None:
    typer.echo("Supported hash algorithms:")
    for algo in HashAlgorithm:
        info = ALGORITHMS[algo]
        line = f"- {algo.value:<9} {info.display_name} ({info.digest_size * 8}-bit)"
        if info.note:
            line += f", {info.note}"
        typer.echo(line)


def _hash_inputs(
    labels: List[str], algorithm: HashAlgorithm, *, quiet: bool, chunk_size: int
) -> None:
    # Strict: the first unreadable input aborts the run.
    for label in labels:
        if label == STDIN_LABEL:
            stdin = typer.get_binary_stream("stdin")
            digest = digest_stream(stdin, algorithm, chunk_size=chunk_size)
        else:
            digest = digest_file(label, algorithm, chunk_size=chunk_size)
        typer.echo(digest if quiet else format_line(digest, label))


@app.command()
def main(
    files: Optional[List[str]] = typer.Argument(
        None,
        help="Input files or glob patterns (stdin if none); hash files with -c",
        show_default=False,
    ),
    algorithm: Optional[HashAlgorithm] = typer.Option(
        None,
        "--algorithm",
        "-a",
        case_sensitive=False,
        help="Hash algorithm to use (default: sha256, or digest.algorithm from config)",
        show_default=False,
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Output only the hash / hide OK lines in check mode"
    ),
    check: bool = typer.Option(
        False, "--check", "-c", help="Check hash files (format: hash  filename)"
    ),
    list_algorithms: bool = typer.Option(
        False, "--list-algorithms", help="List all supported hash algorithms"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Path to sha-calc.toml"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit",
    ),
) -> None:
    """
    Calculate SHA hashes for files or stdin.

    In check mode every manifest line is verified with the algorithm selected
    by -a (default sha256); manifests do not record their own algorithm, so
    pass the same -a that produced them.
    """
    init_logging(level="DEBUG" if verbose else None)
    if verbose:
        log.debug("Verbose logging enabled")

    if list_algorithms:
        _print_algorithms()
        return

    all_ok = True
    try:
        cfg = AppConfig.load(config_file)
        algo = algorithm or cfg.digest.algorithm
        chunk_size = cfg.digest.chunk_size
        log.debug(f"Algorithm: {algo.display_name}, chunk size: {chunk_size}")

        if check:
            summary = run_check(files or [], algo, quiet=quiet, chunk_size=chunk_size)
            all_ok = summary.all_passed
        else:
            labels = resolve_inputs(files) if files else [STDIN_LABEL]
            _hash_inputs(labels, algo, quiet=quiet, chunk_size=chunk_size)

    except ShaCalcError as exc:
        typer.echo(f"{APP_NAME}: {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception:
        log.exception("Unexpected error")
        raise typer.Exit(code=1) from InternalError(
            "Unexpected failure. Re-run with -v for details."
        )

    if not all_ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
