"""
Symbol Readers
===============

Turn text buffers and files into lazy symbol sequences for the engine.

Files are read in fixed-size byte chunks. Text mode feeds every chunk
through an incremental decoder, so a multi-byte UTF-8 character split
across two chunks is held back until its remaining bytes arrive and is
never emitted half-formed. Binary mode yields the raw byte values.

References:
    - Python ``codecs`` module: incremental decoders.
    - RFC 3629 (2003). UTF-8, a transformation format of ISO 10646.
"""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Iterator

DEFAULT_CHUNK_SIZE = 32

_UTF_CODECS = frozenset({"utf-8", "utf-16", "utf-16-le", "utf-16-be",
                         "utf-32", "utf-32-le", "utf-32-be"})


def codec_errors(encoding: str) -> str:
    """Error handler for *encoding*.

    UTF codecs use ``surrogatepass`` so lone surrogates, which lie inside
    the ``unicode`` policy's range and can appear in ciphertext, survive a
    write / read round trip. Every other malformed sequence still raises.
    """
    name = codecs.lookup(encoding).name
    return "surrogatepass" if name in _UTF_CODECS else "strict"


def iter_text_symbols(text: str) -> Iterator[str]:
    """Yield the characters of an in-memory string."""
    yield from text


def iter_file_symbols(
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    binary: bool = False,
    encoding: str = "utf-8",
) -> Iterator[str] | Iterator[int]:
    """Lazily read symbols from *path*.

    Args:
        path: File to read.
        chunk_size: Bytes read per ``read()`` call.
        binary: Yield byte values (ints) instead of decoded characters.
        encoding: Text encoding used when *binary* is false.

    Raises:
        ValueError: If *chunk_size* is not positive.
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file holds a malformed byte sequence,
            including a truncated character at end of file.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if binary:
        return _iter_bytes(Path(path), chunk_size)
    return _iter_chars(Path(path), chunk_size, encoding)


def _iter_bytes(path: Path, chunk_size: int) -> Iterator[int]:
    with open(path, "rb") as fh:
        while chunk := fh.read(chunk_size):
            yield from chunk


def _iter_chars(path: Path, chunk_size: int, encoding: str) -> Iterator[str]:
    decoder = codecs.getincrementaldecoder(encoding)(errors=codec_errors(encoding))
    with open(path, "rb") as fh:
        while chunk := fh.read(chunk_size):
            yield from decoder.decode(chunk)
        # Flush; raises if the file ends inside a multi-byte sequence.
        yield from decoder.decode(b"", final=True)
