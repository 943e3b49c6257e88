"""
Key and Key Cycle
==================

A :class:`Key` is validated once against a symbol policy and then kept
as a tuple of offsets relative to the policy's ``LOW`` bound. The
:class:`KeyCycle` walks those offsets forever, holding only an integer
position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from vigenere.core.errors import InvalidKeyError
from vigenere.core.policy import SymbolPolicy


@dataclass(frozen=True, slots=True)
class Key:
    """Immutable, validated cipher key.

    Use :meth:`parse` to build one from user-supplied text. The key
    symbols are kept out of ``repr`` so they do not leak into logs.

    Attributes:
        policy: Policy the key was validated against.
        offsets: Key symbol codes minus ``policy.low``, in key order.
    """

    policy: SymbolPolicy
    offsets: tuple[int, ...] = field(repr=False)

    @classmethod
    def parse(cls, text: str, policy: SymbolPolicy) -> Key:
        """Validate *text* and return a :class:`Key`.

        Under policies with ``key_ignores_spaces`` spaces are removed
        before validation. Letters are normalised by the policy.

        Raises:
            InvalidKeyError: If the key is empty or holds an out-of-domain
                symbol.
        """
        if policy.key_ignores_spaces:
            text = text.replace(" ", "")
        if not text:
            raise InvalidKeyError(policy.name)

        offsets: list[int] = []
        for symbol in text:
            if not policy.is_in_domain(symbol):
                raise InvalidKeyError(policy.name, symbol)
            offsets.append(ord(policy.normalize(symbol)) - policy.low)  # type: ignore[arg-type]
        return cls(policy=policy, offsets=tuple(offsets))

    def __len__(self) -> int:
        return len(self.offsets)

    def cycle(self) -> KeyCycle:
        """Return a fresh cycle positioned at the first key symbol."""
        return KeyCycle(self.offsets)


class KeyCycle:
    """Infinite iterator over key offsets: k0, k1, ..., kn-1, k0, ...

    Shares the key's tuple; the only per-iteration state is the
    position counter.
    """

    __slots__ = ("_offsets", "_position")

    def __init__(self, offsets: tuple[int, ...]) -> None:
        if not offsets:
            raise ValueError("KeyCycle requires at least one key symbol")
        self._offsets = offsets
        self._position = 0

    @property
    def position(self) -> int:
        """Index of the key symbol that :meth:`__next__` returns next."""
        return self._position

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        offset = self._offsets[self._position]
        self._position += 1
        if self._position == len(self._offsets):
            self._position = 0
        return offset
