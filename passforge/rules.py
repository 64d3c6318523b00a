"""
Module: rules.py
Project: Passforge (Open Source)
License: MIT
Description:
    Example Password Rules.

    The generator treats rules as opaque objects with two operations,
    `config()` and `valid(password)`. This module ships the rules used by the
    API and the CLI:
    1. DemoPasswordRule: unambiguous letters and digits, plus optional special
       characters, with minimums set as a share of the requested length.
    2. NoRepeatedSpecialRule: the same composition, rejecting two special
       characters in a row (some legacy systems choke on sequences like '--').
"""

import math
import re

from .services.generator import CharacterClassConfiguration, Configuration

# Letters and digits without look-alikes (I/l/1, O/o/0).
UNAMBIGUOUS_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz"
UNAMBIGUOUS_DIGITS = "23456789"
# Widely compatible and unambiguous characters.
COMPATIBLE_SPECIAL_CHARACTERS = "_-@!*."

LETTER_SHARE = 0.5
DIGIT_SHARE = 0.33
SPECIAL_SHARE = 0.17


class DemoPasswordRule:
    """
    Password rule with minimums relative to the requested length.

    Typically minimums would be constants; since the length varies, they are
    set here as percentages of the total length (rounded up).

    Args:
        length (int): Minimum length of the generated password.
        special_characters (bool): Include special characters.
    """

    def __init__(self, length: int = 8, special_characters: bool = True):
        self.length = length
        self.special_characters = special_characters

    def config(self) -> Configuration:
        classes = [
            CharacterClassConfiguration(UNAMBIGUOUS_LETTERS, math.ceil(self.length * LETTER_SHARE)),
            CharacterClassConfiguration(UNAMBIGUOUS_DIGITS, math.ceil(self.length * DIGIT_SHARE)),
        ]
        if self.special_characters:
            classes.append(
                CharacterClassConfiguration(COMPATIBLE_SPECIAL_CHARACTERS, math.ceil(self.length * SPECIAL_SHARE))
            )
        return Configuration(length=self.length, character_classes=classes)

    def valid(self, password: str) -> bool:
        return True


class NoRepeatedSpecialRule(DemoPasswordRule):
    """Demo rule that never allows two special characters next to each other."""

    _repeated = re.compile("[" + re.escape(COMPATIBLE_SPECIAL_CHARACTERS) + "]{2,}")

    def valid(self, password: str) -> bool:
        return self._repeated.search(password) is None


def build_rule(length: int, special_characters: bool = True, strict: bool = False) -> DemoPasswordRule:
    """Selects the demo rule matching the API/CLI options."""
    rule_class = NoRepeatedSpecialRule if strict else DemoPasswordRule
    return rule_class(length=length, special_characters=special_characters)
