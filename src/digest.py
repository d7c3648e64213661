"""
Digest engine.

- One entrypoint, `compute`, maps (bytes or EMPTY, algorithm) -> lowercase hex.
- `drain` turns a stream into the single buffer `compute` consumes.
- `digest_stream` / `digest_file` glue the two together for callers.

Primitives come from hashlib; nothing here implements a hash function.
"""

from __future__ import annotations

import hashlib
import io
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Union

from algorithms import ALGORITHMS, HashAlgorithm
from errors import InputAccessError
from logs import get_logger

log = get_logger("sha_calc.digest")

CHUNK_SIZE = 8192


class EmptyInput(Enum):
    """Sentinel type: the stream produced zero bytes."""

    MARKER = "empty"


EMPTY = EmptyInput.MARKER

Payload = Union[bytes, EmptyInput]

_PRIMITIVES: Dict[HashAlgorithm, Callable[[], "hashlib._Hash"]] = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA224: hashlib.sha224,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA384: hashlib.sha384,
    HashAlgorithm.SHA512: hashlib.sha512,
    HashAlgorithm.SHA3_224: hashlib.sha3_224,
    HashAlgorithm.SHA3_256: hashlib.sha3_256,
    HashAlgorithm.SHA3_384: hashlib.sha3_384,
    HashAlgorithm.SHA3_512: hashlib.sha3_512,
    HashAlgorithm.BLAKE2B: hashlib.blake2b,
    HashAlgorithm.BLAKE2S: hashlib.blake2s,
}


def _check_primitives() -> None:
    missing = set(HashAlgorithm) - set(_PRIMITIVES)
    if missing:
        raise RuntimeError(
            f"No hash primitive for: {sorted(a.value for a in missing)}"
        )
    for algo, factory in _PRIMITIVES.items():
        size = factory().digest_size
        if size != ALGORITHMS[algo].digest_size:
            raise RuntimeError(
                f"{algo.display_name}: primitive yields {size} bytes, "
                f"registry says {ALGORITHMS[algo].digest_size}"
            )


_check_primitives()


def new_hasher(algorithm: HashAlgorithm) -> "hashlib._Hash":
    """Fresh hashlib object for `algorithm`."""
    return _PRIMITIVES[algorithm]()


def compute(data: Payload, algorithm: HashAlgorithm) -> str:
    """
    Hash `data` with `algorithm` and return the lowercase hex digest.

    `EMPTY` and `b""` take the same path: the hasher is simply never fed,
    so both yield the algorithm's hash-of-empty-string constant.
    """
    hasher = new_hasher(algorithm)
    if data is not EMPTY:
        hasher.update(data)
    return hasher.hexdigest()


def drain(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Payload:
    """
    Read `stream` to exhaustion without knowing its length up front.

    - first read returns nothing   -> EMPTY
    - first read is short          -> that chunk is the whole input
    - first read fills the chunk   -> keep reading and concatenate

    Raw (unbuffered) streams are wrapped so a short read really means EOF,
    which keeps the rules above valid for pipes.

    Raises:
        OSError: if the stream cannot be read.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not isinstance(stream, io.RawIOBase):
        return _drain_buffered(stream, chunk_size)

    wrapped = io.BufferedReader(stream, buffer_size=chunk_size)
    try:
        return _drain_buffered(wrapped, chunk_size)
    finally:
        # the caller owns the raw stream; don't let the wrapper close it
        wrapped.detach()


def _drain_buffered(stream: BinaryIO, chunk_size: int) -> Payload:
    first = stream.read(chunk_size)
    if not first:
        return EMPTY
    if len(first) < chunk_size:
        return bytes(first)

    parts = [first]
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parts.append(chunk)
    return b"".join(parts)


def digest_stream(
    stream: BinaryIO,
    algorithm: HashAlgorithm,
    *,
    chunk_size: int = CHUNK_SIZE,
    label: str = "-",
) -> str:
    """
    Drain `stream` and hash it.

    Raises:
        InputAccessError: if reading fails.
    """
    try:
        payload = drain(stream, chunk_size)
    except OSError as exc:
        raise InputAccessError(label, "Failed to read from input", exc) from exc
    size = 0 if payload is EMPTY else len(payload)
    log.debug(f"{algorithm.display_name}: {label} ({size} bytes)")
    return compute(payload, algorithm)


def digest_file(
    path: Union[str, Path],
    algorithm: HashAlgorithm,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> str:
    """
    Hash the file at `path`. The handle is closed before returning.

    Raises:
        InputAccessError: if the file cannot be opened or read.
    """
    label = str(path)
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise InputAccessError(label, "Failed to open file", exc) from exc
    with f:
        return digest_stream(f, algorithm, chunk_size=chunk_size, label=label)
