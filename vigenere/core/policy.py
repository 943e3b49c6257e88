"""
Symbol Policies
================

A symbol policy decides which symbols take part in the cipher, how they
are normalised before shifting, and the contiguous code range over
which shifting wraps.

Four policies are provided, all selectable at engine construction:

    ==========  =======  =======  ===================================
    name        LOW      HIGH     notes
    ==========  =======  =======  ===================================
    letters     0x41     0x5A     ASCII a-z folded to A-Z
    printable   0x20     0x7E     printable ASCII
    extended    0x20     0xFF     printable ASCII + Latin-1 upper half
    unicode     0x0020   0xFFFD   Basic Multilingual Plane
    ==========  =======  =======  ===================================

Symbols outside ``[LOW, HIGH]`` are dropped from the output stream.

A symbol is either a one-character ``str`` or an ``int`` code (iterating
over ``bytes`` yields ints). Results keep the element type of the input.

References:
    - Kahn, D. (1996). The Codebreakers. Scribner. Ch. 4.
    - Unicode Standard 15.0, Ch. 2 (code point ranges).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

Symbol = Union[str, int]

_ASCII_LOWER_A = 0x61
_ASCII_LOWER_Z = 0x7A
_CASE_OFFSET = 0x20


class PolicyName(str, enum.Enum):
    """Names of the built-in symbol policies."""

    LETTERS = "letters"
    PRINTABLE = "printable"
    EXTENDED = "extended"
    UNICODE = "unicode"


@dataclass(frozen=True, slots=True)
class SymbolPolicy:
    """Alphabet definition used by :class:`~vigenere.core.engine.VigenereEngine`.

    Attributes:
        name: Policy name.
        low: Lowest in-domain code (inclusive).
        high: Highest in-domain code (inclusive).
        fold_case: Fold ASCII lowercase letters to uppercase before shifting.
        key_ignores_spaces: Strip spaces from key text before validation.
        description: One-line human description.
    """

    name: str
    low: int
    high: int
    fold_case: bool = False
    key_ignores_spaces: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if self.low < 0 or self.high < self.low:
            raise ValueError(
                f"Invalid symbol range for policy {self.name!r}: "
                f"[{self.low:#x}, {self.high:#x}]"
            )

    @property
    def range_len(self) -> int:
        """Number of symbols in the alphabet (``HIGH - LOW + 1``)."""
        return self.high - self.low + 1

    @property
    def byte_compatible(self) -> bool:
        """Whether every shifted code still fits in a single byte."""
        return self.high <= 0xFF

    # ------------------------------------------------------------------ #
    #  Symbol classification
    # ------------------------------------------------------------------ #

    @staticmethod
    def code(symbol: Symbol) -> int | None:
        """Numeric code of *symbol*, or ``None`` if it is not a symbol."""
        if isinstance(symbol, bool):
            return None
        if isinstance(symbol, int):
            return symbol
        if isinstance(symbol, str) and len(symbol) == 1:
            return ord(symbol)
        return None

    def normalize(self, symbol: Symbol) -> Symbol:
        """Fold ASCII lowercase to uppercase under case-folding policies.

        Identity for every other policy and for non-letter symbols.
        """
        if not self.fold_case:
            return symbol
        value = self.code(symbol)
        if value is None or not _ASCII_LOWER_A <= value <= _ASCII_LOWER_Z:
            return symbol
        if isinstance(symbol, str):
            return chr(value - _CASE_OFFSET)
        return value - _CASE_OFFSET

    def is_in_domain(self, symbol: object) -> bool:
        """Return ``True`` if *symbol* participates in the cipher.

        Total over every Python value: anything that is not a
        one-character string or an integer is out of domain.
        """
        if self.code(symbol) is None:  # type: ignore[arg-type]
            return False
        value = self.code(self.normalize(symbol))  # type: ignore[arg-type]
        return value is not None and self.low <= value <= self.high

    def reduce(self, text: str) -> str:
        """Filter and normalise *text* exactly as the engine would."""
        return "".join(
            self.normalize(ch) for ch in text if self.is_in_domain(ch)  # type: ignore[misc]
        )


# ===================================================================== #
#  Built-in policies
# ===================================================================== #

LETTERS = SymbolPolicy(
    name=PolicyName.LETTERS.value,
    low=ord("A"),
    high=ord("Z"),
    fold_case=True,
    key_ignores_spaces=True,
    description="Latin letters A-Z, case-insensitive (classical tabula recta)",
)

PRINTABLE = SymbolPolicy(
    name=PolicyName.PRINTABLE.value,
    low=0x20,
    high=0x7E,
    description="Printable ASCII, space through tilde",
)

EXTENDED = SymbolPolicy(
    name=PolicyName.EXTENDED.value,
    low=0x20,
    high=0xFF,
    description="Printable ASCII plus the Latin-1 upper half (0x20-0xFF)",
)

UNICODE = SymbolPolicy(
    name=PolicyName.UNICODE.value,
    low=0x0020,
    high=0xFFFD,
    description="Basic Multilingual Plane, U+0020 through U+FFFD",
)

_REGISTRY: dict[str, SymbolPolicy] = {
    policy.name: policy for policy in (LETTERS, PRINTABLE, EXTENDED, UNICODE)
}

DEFAULT_POLICY: SymbolPolicy = UNICODE


def available_policies() -> list[SymbolPolicy]:
    """Return the built-in policies in declaration order."""
    return list(_REGISTRY.values())


def get_policy(policy: SymbolPolicy | PolicyName | str | None = None) -> SymbolPolicy:
    """Resolve *policy* to a :class:`SymbolPolicy`.

    Accepts an existing policy (returned unchanged), a :class:`PolicyName`,
    a case-insensitive name, or ``None`` for :data:`DEFAULT_POLICY`.

    Raises:
        ValueError: If the name does not match a built-in policy.
    """
    if policy is None:
        return DEFAULT_POLICY
    if isinstance(policy, SymbolPolicy):
        return policy
    name = policy.value if isinstance(policy, PolicyName) else str(policy)
    try:
        return _REGISTRY[name.strip().lower()]
    except KeyError:
        choices = ", ".join(_REGISTRY)
        raise ValueError(
            f"Unknown symbol policy {policy!r} (choose from: {choices})"
        ) from None
