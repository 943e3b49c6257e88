"""
Vigenère Cipher Engine
=======================

Streaming polyalphabetic substitution over a contiguous symbol range.

The tabula recta is realised arithmetically rather than as a lookup
table. With ``LOW`` and ``RANGE_LEN`` taken from the symbol policy::

    rel_s  = code(s) - LOW
    rel_k  = code(k) - LOW
    encode = (rel_s + rel_k) mod RANGE_LEN
    decode = (rel_s + RANGE_LEN - rel_k) mod RANGE_LEN
    result = symbol(shifted + LOW)

Under the ``letters`` policy (``LOW = 'A'``, ``RANGE_LEN = 26``) this is
exactly the classical 26x26 Vigenère square.

Pipeline for both directions::

    input -> drop out-of-domain -> normalise -> zip(KeyCycle) -> shift -> output

Dropped symbols never advance the key cycle. The pipeline is a generator:
memory between emissions is the key cycle position and nothing else.

References:
    - de Vigenère, B. (1586). Traicté des chiffres, ou secrètes manières
      d'escrire. Paris.
    - Kahn, D. (1996). The Codebreakers. Scribner. Ch. 4.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from shared.logger import TabulaLogger

from vigenere.core.key import Key
from vigenere.core.policy import PolicyName, Symbol, SymbolPolicy, get_policy

ShiftFunction = Callable[[int, int, int], int]

_logger = TabulaLogger("vigenere.engine")


def encode_shift(rel_symbol: int, rel_key: int, range_len: int) -> int:
    """Shift an offset forward by the key offset, wrapping at *range_len*."""
    return (rel_symbol + rel_key) % range_len


def decode_shift(rel_symbol: int, rel_key: int, range_len: int) -> int:
    """Inverse of :func:`encode_shift` for offsets in ``[0, range_len)``."""
    return (rel_symbol + range_len - rel_key) % range_len


class VigenereEngine:
    """Owns a validated key and exposes the two mirror transforms.

    Usage::

        engine = VigenereEngine("LEMON", "letters")
        "".join(engine.cipher("ATTACKATDAWN"))    # 'LXFOPVEFRNHR'
        engine.decipher_text("LXFOPVEFRNHR")      # 'ATTACKATDAWN'

    The engine is immutable after construction, so one instance may be
    shared by several threads; every call builds its own key cycle.

    Args:
        key: Key text supplied by the user.
        policy: A :class:`SymbolPolicy`, a policy name, or ``None`` for the
            default (``unicode``).

    Raises:
        InvalidKeyError: If *key* is empty or contains symbols outside the
            policy's alphabet.
        ValueError: If *policy* names an unknown policy.
    """

    __slots__ = ("_key", "_policy")

    def __init__(
        self,
        key: str,
        policy: Optional[SymbolPolicy | PolicyName | str] = None,
    ) -> None:
        self._policy = get_policy(policy)
        self._key = Key.parse(key, self._policy)
        _logger.debug(
            "Engine ready: policy=%s key_length=%d",
            self._policy.name,
            len(self._key),
        )

    def __repr__(self) -> str:
        return f"VigenereEngine(policy={self._policy.name!r})"

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def policy(self) -> SymbolPolicy:
        """Symbol policy this engine was built with."""
        return self._policy

    @property
    def key_length(self) -> int:
        """Number of symbols in the validated key (the cipher period)."""
        return len(self._key)

    # ------------------------------------------------------------------ #
    #  Streaming transforms
    # ------------------------------------------------------------------ #

    def cipher(self, symbols: Iterable[Symbol]) -> Iterator[Symbol]:
        """Lazily encipher *symbols*; out-of-domain symbols are dropped."""
        return self._transform(symbols, encode_shift)

    def decipher(self, symbols: Iterable[Symbol]) -> Iterator[Symbol]:
        """Lazily decipher *symbols*; out-of-domain symbols are dropped."""
        return self._transform(symbols, decode_shift)

    def _transform(
        self, symbols: Iterable[Symbol], shift: ShiftFunction
    ) -> Iterator[Symbol]:
        policy = self._policy
        low = policy.low
        range_len = policy.range_len
        key_cycle = self._key.cycle()

        for symbol in symbols:
            if not policy.is_in_domain(symbol):
                continue
            symbol = policy.normalize(symbol)
            if isinstance(symbol, str):
                shifted = shift(ord(symbol) - low, next(key_cycle), range_len)
                yield chr(shifted + low)
            else:
                shifted = shift(symbol - low, next(key_cycle), range_len)
                yield shifted + low

    # ------------------------------------------------------------------ #
    #  Materialising helpers
    # ------------------------------------------------------------------ #

    def cipher_text(self, text: str) -> str:
        """Encipher a whole string."""
        return "".join(self.cipher(text))  # type: ignore[arg-type]

    def decipher_text(self, text: str) -> str:
        """Decipher a whole string."""
        return "".join(self.decipher(text))  # type: ignore[arg-type]

    def cipher_bytes(self, data: bytes) -> bytes:
        """Encipher raw bytes; requires a byte-compatible policy."""
        self._require_byte_policy()
        return bytes(self.cipher(data))  # type: ignore[arg-type]

    def decipher_bytes(self, data: bytes) -> bytes:
        """Decipher raw bytes; requires a byte-compatible policy."""
        self._require_byte_policy()
        return bytes(self.decipher(data))  # type: ignore[arg-type]

    def _require_byte_policy(self) -> None:
        if not self._policy.byte_compatible:
            raise ValueError(
                f"The {self._policy.name!r} policy shifts beyond 0xFF and "
                f"cannot be applied to raw bytes"
            )
