# src/config.py
"""
Configuration loader with validation and safe error handling.

- Reads an optional sha-calc.toml (or a provided path).
- Falls back to defaults when no file is present.
- Applies SHACALC_* environment overrides last.
- Exposes a typed configuration object used by the CLI.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from algorithms import DEFAULT_ALGORITHM, HashAlgorithm
from digest import CHUNK_SIZE
from errors import ConfigLoadError

CONFIG_FILENAME = "sha-calc.toml"


class DigestConfig(BaseModel):
    """Settings for the digest engine."""

    algorithm: HashAlgorithm = Field(
        DEFAULT_ALGORITHM, description="Default algorithm when -a is not given"
    )
    chunk_size: int = Field(
        CHUNK_SIZE, gt=0, description="Read size used by the streaming reader"
    )

    @field_validator("algorithm", mode="before")
    @classmethod
    def _normalize_token(cls, v: Any) -> Any:
        """Accept tokens in any case, e.g. "SHA3-256"."""
        if isinstance(v, str):
            return HashAlgorithm.from_token(v)
        return v


class AppConfig(BaseModel):
    """Root application configuration object."""

    digest: DigestConfig = DigestConfig()

    @staticmethod
    def load(path: Optional[Path] = None) -> "AppConfig":
        """
        Load config from TOML if present; otherwise return defaults.

        Load order:
          1) Provided path (must exist).
          2) ./sha-calc.toml in the current working directory.
        Env overrides:
          - SHACALC_ALGORITHM: overrides digest.algorithm
          - SHACALC_CHUNK_SIZE: overrides digest.chunk_size

        Raises:
            ConfigLoadError: if a TOML file cannot be read or validated, or an
                env override is invalid.
        """
        if path is not None and not path.exists():
            raise ConfigLoadError(f"Config file not found: {path}")

        data: dict[str, Any] = {}
        toml_path = path or (Path.cwd() / CONFIG_FILENAME)
        if toml_path.exists():
            try:
                raw_text = toml_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigLoadError(
                    f"Failed to read config file: {toml_path}"
                ) from exc

            try:
                parsed = tomllib.loads(raw_text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigLoadError(
                    f"Invalid TOML in config file: {toml_path}"
                ) from exc
            section = parsed.get("digest", {})
            if not isinstance(section, dict):
                raise ConfigLoadError(
                    f"[digest] must be a table in config file: {toml_path}"
                )
            data.update(section)

        algo_env = os.getenv("SHACALC_ALGORITHM")
        if algo_env:
            data["algorithm"] = algo_env
        chunk_env = os.getenv("SHACALC_CHUNK_SIZE")
        if chunk_env:
            data["chunk_size"] = chunk_env

        try:
            return AppConfig(digest=DigestConfig(**data))
        except ValidationError as exc:
            source = toml_path if toml_path.exists() else "environment"
            raise ConfigLoadError(
                f"Invalid configuration values in {source}: "
                + "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in exc.errors()
                )
            ) from exc
