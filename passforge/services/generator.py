"""
Module: generator.py
Project: Passforge (Open Source)
License: MIT
Description:
    Rule Driven Password Generator.

    A password is assembled one character at a time from a weighted character
    source whose distribution mirrors the composition requested by a rule.
    Each appended character is checked against the rule; rejected characters
    are rolled back. The loop has two bounds:
    1. A ceiling of rejected characters, after which generation fails.
    2. A maximum length of 1.5x the target, past which the candidate is
       discarded and assembly starts over.

    The resulting length is random, in the range length <= n <= 1.5 * length.
    Random lengths let the minimum composition be met without enforcing a strict
    composition (e.g. exactly 2 digits and exactly 1 special character).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

from .random_source import RandomSource
from .weighted import WeightedEntry, WeightedRandomSet

# --- Logging Configuration ---
logger = logging.getLogger(__name__)

# ============================================================
# CHARACTER SETS
# ============================================================

DIGIT_CHARACTERS = "0123456789"
UPPERCASE_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE_CHARACTERS = "abcdefghijklmnopqrstuvwxyz"
# OWASP recommended password special characters.
SPECIAL_CHARACTERS = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"
URL_SAFE_SPECIAL_CHARACTERS = "-_"

# Guards against a rule that rejects (nearly) everything.
MAX_INVALID_PASSWORD_REJECTIONS = 10
MAX_LENGTH_FACTOR = 1.5


# ============================================================
# ERRORS
# ============================================================

class PasswordRuleRejectionError(Exception):
    """The password rule rejected an excessive number of candidate characters."""

    def __init__(self, message: str = "password rule rejected too many passwords"):
        super().__init__(message)


class ConfigurationError(ValueError):
    """A rule supplied a configuration that can never produce a password."""


# ============================================================
# CONFIGURATION & RULE INTERFACE
# ============================================================

@dataclass(frozen=True)
class CharacterClassConfiguration:
    """
    A class of characters and the minimum number of them the password must hold.

    The minimum also sets the share of the password the class receives on
    average. Duplicate characters are dropped, keeping first occurrences.
    """
    characters: str
    minimum: int = 0

    def __post_init__(self):
        object.__setattr__(self, "characters", "".join(dict.fromkeys(self.characters)))


@dataclass(frozen=True)
class Configuration:
    """
    Properties of the generated password.

    Attributes:
        length (int): Minimum length. The actual length is random, between
            `length` and `max_length`.
        character_classes (tuple): The CharacterClassConfiguration entries.
    """
    length: int
    character_classes: Tuple[CharacterClassConfiguration, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "character_classes", tuple(self.character_classes))

    @property
    def max_length(self) -> int:
        return int(self.length * MAX_LENGTH_FACTOR)


class Rule(Protocol):
    """Sets the behavior of the generator: its configuration and an acceptance test."""

    def config(self) -> Configuration:
        ...

    def valid(self, password: str) -> bool:
        ...


def validate_configuration(config: Configuration) -> None:
    """
    Fails fast on a configuration that cannot yield a password.

    Raises:
        ConfigurationError: On a non-positive length, missing classes, negative
            minimums, an empty class with a positive minimum, all minimums zero,
            or minimums that cannot fit in the maximum length.
    """
    if config.length < 1:
        raise ConfigurationError(f"Password length must be positive, got {config.length}.")
    if not config.character_classes:
        raise ConfigurationError("At least one character class is required.")

    for character_class in config.character_classes:
        if character_class.minimum < 0:
            raise ConfigurationError(f"Negative minimum {character_class.minimum} for a character class.")
        if character_class.minimum > 0 and not character_class.characters:
            raise ConfigurationError("A character class with a positive minimum has no characters.")

    required = [c for c in config.character_classes if c.minimum > 0]
    if not required:
        raise ConfigurationError("At least one character class must have a positive minimum.")

    # One character may count toward several overlapping classes, so only
    # disjoint classes have to fit side by side.
    if _disjoint(required):
        shortest = sum(c.minimum for c in required)
    else:
        shortest = max(c.minimum for c in required)
    if shortest > config.max_length:
        raise ConfigurationError(
            f"Class minimums ({shortest}) exceed the maximum password length ({config.max_length})."
        )


def _disjoint(character_classes: Sequence[CharacterClassConfiguration]) -> bool:
    seen = set()
    for character_class in character_classes:
        members = set(character_class.characters)
        if seen & members:
            return False
        seen |= members
    return True


# ============================================================
# CHARACTER SOURCE
# ============================================================

def build_character_source(config: Configuration, random_source: Optional[RandomSource] = None) -> WeightedRandomSet:
    """
    Builds the weighted character source for a configuration.

    The probability of drawing from a class is its minimum over the sum of all
    minimums; that probability is then split evenly across the class members.
    Classes with a zero minimum contribute nothing.
    """
    total_minimum = sum(c.minimum for c in config.character_classes)

    entries: List[WeightedEntry] = []
    for character_class in config.character_classes:
        probability = character_class.minimum / total_minimum
        if probability <= 0.0:
            continue
        weight = probability / len(character_class.characters)
        entries.extend(WeightedEntry(c, weight) for c in character_class.characters)

    return WeightedRandomSet(entries, random_source)


def occurrences(password: Sequence[str], characters: str) -> int:
    """Counts the characters of `password` that belong to `characters`."""
    members = set(characters)
    return sum(1 for c in password if c in members)


# ============================================================
# GENERATOR
# ============================================================

class Generator:
    """
    Generates random passwords matching a rule.

    The character source is built from `rule.config()` at construction. Each
    call to `generate()` reads the configuration again; if it changed, the
    source is rebuilt so the weights and the completion thresholds always come
    from the same configuration.

    Args:
        rule (Rule): The password rule.
        random_source (RandomSource): Optional uniform source, for instance a
            seeded one in tests. Defaults to the secure system source.

    Raises:
        ConfigurationError: If the rule's configuration is unusable.
    """

    def __init__(self, rule: Rule, random_source: Optional[RandomSource] = None):
        self.rule = rule
        self._random_source = random_source
        # (configuration, character source), always replaced as one pair.
        self._state = self._load(rule.config())

    def _load(self, config: Configuration) -> Tuple[Configuration, WeightedRandomSet]:
        validate_configuration(config)
        return config, build_character_source(config, self._random_source)

    @property
    def config(self) -> Configuration:
        return self._state[0]

    def generate(self) -> str:
        """
        Generates a new random password.

        Returns:
            str: The password, in the order its characters were drawn.

        Raises:
            PasswordRuleRejectionError: If the rule rejected too many characters.
            ConfigurationError: If the rule now returns an unusable configuration.
        """
        state = self._state
        config = self.rule.config()
        if config != state[0]:
            logger.debug("Rule configuration changed, rebuilding the character source.")
            state = self._load(config)
            self._state = state
        config, source = state

        password: List[str] = []
        rejections = 0

        while rejections < MAX_INVALID_PASSWORD_REJECTIONS:
            if self._complete(config, password):
                return "".join(password)

            password.append(source.next())

            if not self.rule.valid("".join(password)):
                # Roll back the last character.
                password.pop()
                rejections += 1
                continue

            # Past the maximum length, start again from scratch. This caps the
            # long tail of the length distribution. Rejections carry over.
            if len(password) > config.max_length:
                logger.debug("Candidate exceeded %d characters, restarting.", config.max_length)
                password = []

        logger.warning("Password rule rejected %d candidate characters, giving up.", rejections)
        raise PasswordRuleRejectionError()

    @staticmethod
    def _complete(config: Configuration, password: List[str]) -> bool:
        """Has the password met the minimum length and every class minimum?"""
        if len(password) < config.length:
            return False

        for character_class in config.character_classes:
            if occurrences(password, character_class.characters) < character_class.minimum:
                return False

        return True
