"""
Symbol Writers
===============

Drain a lazy symbol sequence into a file in caller-chosen batches, so
the full output never has to be materialised in memory.
"""

from __future__ import annotations

from itertools import islice
from pathlib import Path
from typing import IO, Iterable, Iterator

from vigenere.streams.reader import codec_errors

DEFAULT_BATCH_SIZE = 4


def batched(symbols: Iterable, size: int) -> Iterator[list]:
    """Split *symbols* into lists of at most *size* items."""
    if size <= 0:
        raise ValueError(f"batch size must be positive, got {size}")
    iterator = iter(symbols)
    while batch := list(islice(iterator, size)):
        yield batch


def write_symbols_to(
    symbols: Iterable[str] | Iterable[int],
    fh: IO[bytes],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    binary: bool = False,
    encoding: str = "utf-8",
) -> int:
    """Write *symbols* to an open binary handle; return the symbol count."""
    errors = codec_errors(encoding)
    written = 0
    for batch in batched(symbols, batch_size):
        if binary:
            fh.write(bytes(batch))
        else:
            fh.write("".join(batch).encode(encoding, errors))
        written += len(batch)
    return written


def write_symbols(
    symbols: Iterable[str] | Iterable[int],
    path: str | Path,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    binary: bool = False,
    encoding: str = "utf-8",
) -> int:
    """Create (or truncate) *path* and write *symbols* into it.

    Args:
        symbols: Characters, or byte values when *binary* is true.
        path: Destination file. Parent directories are created.
        batch_size: Symbols pulled from *symbols* per write.
        binary: Write byte values verbatim instead of encoding text.
        encoding: Text encoding used when *binary* is false.

    Returns:
        Number of symbols written.

    Raises:
        OSError: If the file cannot be created or written.
    """
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with open(destination, "wb") as fh:
        return write_symbols_to(
            symbols, fh, batch_size=batch_size, binary=binary, encoding=encoding
        )
