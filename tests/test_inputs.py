from __future__ import annotations

from pathlib import Path

import pytest

from errors import PatternError
from inputs import is_pattern, resolve_inputs, validate_pattern


def test_resolve_expands_and_sorts(tmp_path: Path) -> None:
    (tmp_path / "test2.txt").write_bytes(b"content2")
    (tmp_path / "test1.txt").write_bytes(b"content1")
    (tmp_path / "other.bin").write_bytes(b"x")
    (tmp_path / "sub.txt").mkdir()  # directory matched by the pattern

    labels = resolve_inputs([str(tmp_path / "*.txt")])
    assert labels == [str(tmp_path / "test1.txt"), str(tmp_path / "test2.txt")]


def test_literal_paths_kept_and_sorted(tmp_path: Path) -> None:
    b = str(tmp_path / "b")
    a = str(tmp_path / "a")
    assert resolve_inputs([b, a]) == [a, b]


def test_missing_literal_is_kept(tmp_path: Path) -> None:
    missing = str(tmp_path / "missing.txt")
    assert resolve_inputs([missing]) == [missing]


def test_hidden_files_and_recursive(tmp_path: Path) -> None:
    (tmp_path / ".hidden.txt").write_bytes(b"x")
    (tmp_path / "deep").mkdir()
    (tmp_path / "deep" / "n.txt").write_bytes(b"x")

    labels = resolve_inputs([str(tmp_path / "**" / "*.txt")])
    names = {Path(p).name for p in labels}
    assert names == {".hidden.txt", "n.txt"}


def test_pattern_without_matches(tmp_path: Path) -> None:
    assert resolve_inputs([str(tmp_path / "*.nothing")]) == []


def test_stdin_dash_is_not_a_pattern() -> None:
    assert resolve_inputs(["-"]) == ["-"]
    assert not is_pattern("plain.txt")
    assert is_pattern("a?.txt")


@pytest.mark.parametrize("pattern", ["a[", "dir/[abc", "a**b", "x/**y/z"])
def test_invalid_patterns(pattern: str) -> None:
    with pytest.raises(PatternError):
        validate_pattern(pattern)


@pytest.mark.parametrize("pattern", ["*.txt", "[]]x", "[!a]b", "**/x", "a/**/b?"])
def test_valid_patterns(pattern: str) -> None:
    validate_pattern(pattern)


def test_invalid_pattern_aborts_resolution(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_bytes(b"x")
    with pytest.raises(PatternError):
        resolve_inputs([str(tmp_path / "*.txt"), str(tmp_path / "b[")])
