"""
Vigenère Core Module
=====================

Contains the cipher engine, symbol policies, key handling, session
orchestration and data models.
"""

from vigenere.core.engine import VigenereEngine, decode_shift, encode_shift
from vigenere.core.errors import InvalidKeyError, MarkerMismatchError, VigenereError
from vigenere.core.key import Key, KeyCycle
from vigenere.core.models import Direction, SessionReport, SourceKind, TransformOutcome
from vigenere.core.policy import (
    DEFAULT_POLICY,
    EXTENDED,
    LETTERS,
    PRINTABLE,
    UNICODE,
    PolicyName,
    SymbolPolicy,
    available_policies,
    get_policy,
)
from vigenere.core.session import CipherSession

__all__ = [
    "CipherSession",
    "DEFAULT_POLICY",
    "Direction",
    "EXTENDED",
    "InvalidKeyError",
    "Key",
    "KeyCycle",
    "LETTERS",
    "MarkerMismatchError",
    "PRINTABLE",
    "PolicyName",
    "SessionReport",
    "SourceKind",
    "SymbolPolicy",
    "TransformOutcome",
    "UNICODE",
    "VigenereEngine",
    "VigenereError",
    "available_policies",
    "decode_shift",
    "encode_shift",
    "get_policy",
]
