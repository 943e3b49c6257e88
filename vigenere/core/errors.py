"""
Vigenère Error Types
=====================

Both error kinds are detected synchronously and are recoverable: the
caller inspects them and reports a message to the user.
"""

from __future__ import annotations


class VigenereError(Exception):
    """Base class for every error raised by the vigenere package."""


class InvalidKeyError(VigenereError, ValueError):
    """The proposed key is empty or contains out-of-domain symbols.

    Attributes:
        policy: Name of the symbol policy the key was validated against.
        offending: The first rejected symbol, or ``None`` for an empty key.
    """

    MESSAGE = (
        "key must be composed only of symbols in the supported alphabet, "
        "and non-empty"
    )

    def __init__(self, policy: str, offending: str | int | None = None) -> None:
        self.policy = policy
        self.offending = offending
        detail = (
            "key is empty"
            if offending is None
            else f"symbol {offending!r} is outside the alphabet"
        )
        super().__init__(f"{self.MESSAGE} ({policy} policy: {detail})")


class MarkerMismatchError(VigenereError):
    """The deciphered prefix is not the identifying marker.

    Raised when a stream was not enciphered by this tool or was
    deciphered with the wrong key.
    """

    def __init__(self, expected_length: int) -> None:
        self.expected_length = expected_length
        super().__init__(
            "Message was not enciphered by this tool "
            "(identifying marker mismatch, check the key)"
        )
