"""
Module: __init__.py
Project: Passforge (Open Source)
License: MIT
Description:
    Password Generation Core.

    Framework independent services: the secure uniform random source, the
    weighted random set and the rule driven generator. Nothing in this package
    touches Flask, so it can be used directly as a library.
"""

from .random_source import CryptoRandomSource, EntropySourceError, RandomSource
from .weighted import WeightedEntry, WeightedRandomSet, WeightError
from .generator import (
    CharacterClassConfiguration,
    Configuration,
    ConfigurationError,
    Generator,
    PasswordRuleRejectionError,
    Rule,
)
