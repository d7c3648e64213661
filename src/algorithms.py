"""
Supported hash algorithms: a closed set of selectors plus their metadata.

The enum value is the CLI token, so typer can offer the tokens as choices
directly. Display names and widths live in one constant table that is checked
for completeness at import time.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple


class HashAlgorithm(str, Enum):
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_224 = "sha3-224"
    SHA3_256 = "sha3-256"
    SHA3_384 = "sha3-384"
    SHA3_512 = "sha3-512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"

    @property
    def display_name(self) -> str:
        return ALGORITHMS[self].display_name

    @property
    def digest_size(self) -> int:
        """Output width in bytes."""
        return ALGORITHMS[self].digest_size

    @property
    def hex_length(self) -> int:
        return 2 * self.digest_size

    @classmethod
    def from_token(cls, token: str) -> "HashAlgorithm":
        """
        Resolve a CLI token (case-insensitive) to a selector.

        Raises:
            ValueError: if the token names no supported algorithm.
        """
        key = token.strip().lower()
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ValueError(
                f"Unsupported algorithm: {token!r} (choose from: {choices})"
            ) from None


class AlgorithmInfo(NamedTuple):
    display_name: str
    digest_size: int
    note: str = ""


ALGORITHMS: Mapping[HashAlgorithm, AlgorithmInfo] = MappingProxyType(
    {
        HashAlgorithm.SHA1: AlgorithmInfo(
            "SHA-1", 20, "legacy, not recommended for security"
        ),
        HashAlgorithm.SHA224: AlgorithmInfo("SHA-224", 28),
        HashAlgorithm.SHA256: AlgorithmInfo("SHA-256", 32, "most common"),
        HashAlgorithm.SHA384: AlgorithmInfo("SHA-384", 48),
        HashAlgorithm.SHA512: AlgorithmInfo("SHA-512", 64),
        HashAlgorithm.SHA3_224: AlgorithmInfo("SHA3-224", 28),
        HashAlgorithm.SHA3_256: AlgorithmInfo("SHA3-256", 32),
        HashAlgorithm.SHA3_384: AlgorithmInfo("SHA3-384", 48),
        HashAlgorithm.SHA3_512: AlgorithmInfo("SHA3-512", 64),
        HashAlgorithm.BLAKE2B: AlgorithmInfo("BLAKE2b-512", 64, "high performance"),
        HashAlgorithm.BLAKE2S: AlgorithmInfo(
            "BLAKE2s-256", 32, "high performance, smaller output"
        ),
    }
)

DEFAULT_ALGORITHM = HashAlgorithm.SHA256

_missing = set(HashAlgorithm) - set(ALGORITHMS)
if _missing:
    raise RuntimeError(
        f"Algorithm registry is incomplete: {sorted(a.value for a in _missing)}"
    )
