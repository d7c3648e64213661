from __future__ import annotations

import pytest

from algorithms import ALGORITHMS, DEFAULT_ALGORITHM, HashAlgorithm


def test_registry_covers_every_selector() -> None:
    assert set(ALGORITHMS) == set(HashAlgorithm)
    assert len(HashAlgorithm) == 11


def test_widths_and_names() -> None:
    expected = {
        "sha1": ("SHA-1", 20),
        "sha224": ("SHA-224", 28),
        "sha256": ("SHA-256", 32),
        "sha384": ("SHA-384", 48),
        "sha512": ("SHA-512", 64),
        "sha3-224": ("SHA3-224", 28),
        "sha3-256": ("SHA3-256", 32),
        "sha3-384": ("SHA3-384", 48),
        "sha3-512": ("SHA3-512", 64),
        "blake2b": ("BLAKE2b-512", 64),
        "blake2s": ("BLAKE2s-256", 32),
    }
    got = {a.value: (a.display_name, a.digest_size) for a in HashAlgorithm}
    assert got == expected


def test_from_token_is_case_insensitive() -> None:
    assert HashAlgorithm.from_token("SHA3-256") is HashAlgorithm.SHA3_256
    assert HashAlgorithm.from_token(" blake2s ") is HashAlgorithm.BLAKE2S
    assert DEFAULT_ALGORITHM is HashAlgorithm.SHA256


def test_from_token_unknown() -> None:
    with pytest.raises(ValueError, match="Unsupported algorithm"):
        HashAlgorithm.from_token("md5")


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        ALGORITHMS[HashAlgorithm.SHA1] = ALGORITHMS[HashAlgorithm.SHA256]  # type: ignore[index]
