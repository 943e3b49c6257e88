"""Tests for key validation and the key cycle."""

from __future__ import annotations

from itertools import islice

import pytest

from vigenere.core.errors import InvalidKeyError
from vigenere.core.key import Key, KeyCycle
from vigenere.core.policy import LETTERS, PRINTABLE, UNICODE


class TestKeyParse:
    def test_offsets_relative_to_low(self) -> None:
        key = Key.parse("LEMON", LETTERS)
        assert key.offsets == (11, 4, 12, 14, 13)
        assert len(key) == 5

    def test_lowercase_letters_are_folded(self) -> None:
        assert Key.parse("lemon", LETTERS) == Key.parse("LEMON", LETTERS)

    def test_letters_key_ignores_spaces(self) -> None:
        key = Key.parse("FIRST SECOND", LETTERS)
        assert len(key) == 11
        assert Key.parse("my key", LETTERS) == Key.parse("MYKEY", LETTERS)

    def test_printable_key_keeps_spaces(self) -> None:
        key = Key.parse("a b", PRINTABLE)
        assert key.offsets == (ord("a") - 0x20, 0, ord("b") - 0x20)

    def test_unicode_key(self) -> None:
        key = Key.parse("ключ", UNICODE)
        assert key.offsets[0] == ord("к") - 0x20

    @pytest.mark.parametrize("policy", [LETTERS, PRINTABLE, UNICODE])
    def test_empty_key_rejected(self, policy) -> None:
        with pytest.raises(InvalidKeyError) as info:
            Key.parse("", policy)
        assert info.value.offending is None
        assert info.value.policy == policy.name

    def test_spaces_only_key_rejected_under_letters(self) -> None:
        with pytest.raises(InvalidKeyError):
            Key.parse("   ", LETTERS)

    def test_digits_rejected_under_letters(self) -> None:
        with pytest.raises(InvalidKeyError) as info:
            Key.parse("abc123", LETTERS)
        assert info.value.offending == "1"
        assert "non-empty" in str(info.value)

    def test_digits_accepted_under_printable(self) -> None:
        assert len(Key.parse("abc123", PRINTABLE)) == 6

    def test_control_character_rejected(self) -> None:
        with pytest.raises(InvalidKeyError):
            Key.parse("ab\tc", UNICODE)

    def test_invalid_key_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Key.parse("", LETTERS)

    def test_repr_hides_key_material(self) -> None:
        key = Key.parse("SECRET", LETTERS)
        assert "offsets" not in repr(key)


class TestKeyCycle:
    def test_cycles_forever(self) -> None:
        cycle = KeyCycle((1, 2, 3))
        assert list(islice(cycle, 7)) == [1, 2, 3, 1, 2, 3, 1]

    def test_position_wraps(self) -> None:
        cycle = KeyCycle((5, 6))
        assert cycle.position == 0
        next(cycle)
        assert cycle.position == 1
        next(cycle)
        assert cycle.position == 0

    def test_single_symbol(self) -> None:
        cycle = KeyCycle((9,))
        assert [next(cycle) for _ in range(3)] == [9, 9, 9]

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            KeyCycle(())

    def test_fresh_cycles_are_independent(self) -> None:
        key = Key.parse("AB", LETTERS)
        first = key.cycle()
        next(first)
        second = key.cycle()
        assert next(second) == 0
        assert next(first) == 1
