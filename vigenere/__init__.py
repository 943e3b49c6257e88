"""
Tabula Vigenère -- Polyalphabetic Cipher Tool
==============================================

Streaming Vigenère cipher over a configurable symbol alphabet, with
chunked file I/O, an identifying-marker check, and a Click-based
command-line interface.

Modules:
    - vigenere.core.policy: Symbol policies (alphabets)
    - vigenere.core.key: Key validation and key cycle
    - vigenere.core.engine: The cipher engine
    - vigenere.core.session: File / text sessions and reports
    - vigenere.core.models: Pydantic data models
    - vigenere.streams: Chunked readers and batched writers
    - vigenere.output: Console and report output
    - vigenere.cli: Click-based command-line interface

Usage::

    >>> from vigenere import VigenereEngine
    >>> VigenereEngine("LEMON", "letters").cipher_text("attack at dawn")
    'LXFOPVEFRNHR'

References:
    - Kahn, D. (1996). The Codebreakers. Scribner.
"""

__version__ = "1.0.0"
__tool_name__ = "vigenere"

from vigenere.core.engine import VigenereEngine
from vigenere.core.errors import InvalidKeyError, MarkerMismatchError, VigenereError
from vigenere.core.policy import PolicyName, SymbolPolicy, get_policy

__all__ = [
    "InvalidKeyError",
    "MarkerMismatchError",
    "PolicyName",
    "SymbolPolicy",
    "VigenereEngine",
    "VigenereError",
    "get_policy",
]
