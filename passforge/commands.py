"""
Module: commands.py
Project: Passforge (Open Source)
License: MIT
Description:
    Custom CLI Commands.

    This module registers commands with the Flask CLI so the generator can be
    used straight from a terminal.

    Primary Functions:
    1. 'generate-password': Prints one or more passwords built from the demo rules.
    2. 'password-stats': Samples many passwords and reports the length range and
       character composition, a sanity check of the generator's distribution.
"""

import logging
from collections import Counter

import click
from flask import current_app

# --- Logging Configuration ---
logger = logging.getLogger(__name__)


def register_commands(app):
    """
    Registers custom CLI commands with the Flask application instance.

    Args:
        app (Flask): The active Flask application instance.
    """

    @app.cli.command("generate-password")
    @click.option("--length", type=int, default=None, help="Minimum length of the generated password.")
    @click.option("--special/--no-special", default=None, help="Include special characters.")
    @click.option("--strict", is_flag=True, default=False, help="Reject consecutive special characters.")
    @click.option("--count", type=click.IntRange(min=1), default=1, help="Number of passwords to print.")
    def generate_password(length, special, strict, count):
        """Generates random passwords and prints one per line."""
        from .rules import build_rule
        from .services.generator import ConfigurationError, Generator, PasswordRuleRejectionError

        if length is None:
            length = current_app.config["PASSWORD_DEFAULT_LENGTH"]
        if special is None:
            special = current_app.config["PASSWORD_SPECIAL_CHARACTERS"]

        try:
            generator = Generator(build_rule(length, special_characters=special, strict=strict))
            for _ in range(count):
                click.echo(generator.generate())
        except ConfigurationError as exc:
            raise click.BadParameter(str(exc), param_hint="--length")
        except PasswordRuleRejectionError as exc:
            raise click.ClickException(str(exc))

    @app.cli.command("password-stats")
    @click.option("--length", type=int, default=None, help="Minimum length of the generated passwords.")
    @click.option("--special/--no-special", default=None, help="Include special characters.")
    @click.option("--samples", type=click.IntRange(min=1), default=10_000, help="Number of passwords to sample.")
    def password_stats(length, special, samples):
        """
        Samples passwords and prints length and composition statistics.

        Each class share is reported next to the share its minimum asks for,
        which makes distribution regressions easy to spot by eye.
        """
        from .rules import build_rule
        from .services.generator import ConfigurationError, Generator, occurrences

        if length is None:
            length = current_app.config["PASSWORD_DEFAULT_LENGTH"]
        if special is None:
            special = current_app.config["PASSWORD_SPECIAL_CHARACTERS"]

        rule = build_rule(length, special_characters=special)
        try:
            generator = Generator(rule)
        except ConfigurationError as exc:
            raise click.BadParameter(str(exc), param_hint="--length")

        lengths = Counter()
        class_totals = Counter()
        config = generator.config

        with click.progressbar(range(samples), label="Sampling passwords") as bar:
            for _ in bar:
                password = generator.generate()
                lengths[len(password)] += 1
                for index, character_class in enumerate(config.character_classes):
                    class_totals[index] += occurrences(password, character_class.characters)

        total_chars = sum(n * k for n, k in lengths.items())
        total_minimum = sum(c.minimum for c in config.character_classes)
        mean = total_chars / samples

        click.echo(f"Samples: {samples}")
        click.echo(f"Length: min={min(lengths)} max={max(lengths)} mean={mean:.2f}")
        for index, character_class in enumerate(config.character_classes):
            share = class_totals[index] / total_chars
            expected = character_class.minimum / total_minimum
            click.echo(
                f"  Class {index} ({len(character_class.characters)} chars, min {character_class.minimum}): "
                f"{share:.3f} observed, {expected:.3f} configured"
            )
        logger.debug("password-stats finished for length=%s samples=%s", length, samples)
