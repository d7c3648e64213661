from __future__ import annotations

from pathlib import Path

import pytest

from algorithms import HashAlgorithm
from config import AppConfig
from errors import ConfigLoadError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SHACALC_ALGORITHM", raising=False)
    monkeypatch.delenv("SHACALC_CHUNK_SIZE", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file() -> None:
    cfg = AppConfig.load()
    assert cfg.digest.algorithm is HashAlgorithm.SHA256
    assert cfg.digest.chunk_size == 8192


def test_cwd_file_is_read(tmp_path: Path) -> None:
    (tmp_path / "sha-calc.toml").write_text(
        '[digest]\nalgorithm = "SHA3-512"\nchunk_size = 4096\n', encoding="utf-8"
    )
    cfg = AppConfig.load()
    assert cfg.digest.algorithm is HashAlgorithm.SHA3_512
    assert cfg.digest.chunk_size == 4096


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('[digest]\nalgorithm = "sha1"\n', encoding="utf-8")
    monkeypatch.setenv("SHACALC_ALGORITHM", "blake2b")
    monkeypatch.setenv("SHACALC_CHUNK_SIZE", "1024")
    cfg = AppConfig.load(path)
    assert cfg.digest.algorithm is HashAlgorithm.BLAKE2B
    assert cfg.digest.chunk_size == 1024


def test_explicit_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError):
        AppConfig.load(tmp_path / "absent.toml")


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text("[digest\nalgorithm = ", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="Invalid TOML"):
        AppConfig.load(path)


def test_unknown_algorithm(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text('[digest]\nalgorithm = "md5"\n', encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="Invalid configuration values") as info:
        AppConfig.load(path)
    assert "Unsupported algorithm" in str(info.value)


def test_bad_chunk_size_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHACALC_CHUNK_SIZE", "0")
    with pytest.raises(ConfigLoadError, match="environment"):
        AppConfig.load()
