"""
Vigenère Streams
=================

Symbol sources and sinks around the engine: chunked file readers that
keep multi-byte characters intact and batched writers.
"""

from vigenere.streams.reader import (
    DEFAULT_CHUNK_SIZE,
    iter_file_symbols,
    iter_text_symbols,
)
from vigenere.streams.writer import (
    DEFAULT_BATCH_SIZE,
    batched,
    write_symbols,
    write_symbols_to,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_CHUNK_SIZE",
    "batched",
    "iter_file_symbols",
    "iter_text_symbols",
    "write_symbols",
    "write_symbols_to",
]
