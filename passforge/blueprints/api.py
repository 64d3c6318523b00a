"""
Module: api.py
Project: Passforge (Open Source)
License: MIT
Description:
    JSON API for password generation.

    Exposes the demo rules over HTTP so that provisioning scripts and frontends
    can request credentials without embedding the generator. Passwords are
    returned in the response body only; nothing is stored or logged.
"""

import logging
from flask import Blueprint, current_app, jsonify, request

from ..rules import build_rule
from ..services.generator import ConfigurationError, Generator, PasswordRuleRejectionError

# --- Blueprint Configuration ---
bp_api = Blueprint("api", __name__, url_prefix="/api")
logger = logging.getLogger(__name__)


def _flag(name: str, default: bool) -> bool:
    """Reads a boolean query parameter ('1', 'true', 'yes', 'on' are truthy)."""
    raw = request.args.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@bp_api.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200


@bp_api.route("/password", methods=["GET"])
def password():
    """
    API Endpoint: /api/password
    Method: GET

    Generates one or more random passwords.

    Query Parameters:
        length (int): [Optional] Minimum length. Defaults to PASSWORD_DEFAULT_LENGTH.
        special (bool): [Optional] Include special characters.
        strict (bool): [Optional] Forbid consecutive special characters.
        count (int): [Optional] Number of passwords, 1 to PASSWORD_MAX_COUNT.

    Returns:
        JSON Response:
            - On Success (200): { "passwords": list, "length": int, "special": bool, "strict": bool }
            - On Error (400/422): { "error": str }
    """
    # 1. Parameter Extraction & Validation
    # ---------------------------------------------------------
    length = request.args.get("length", default=current_app.config["PASSWORD_DEFAULT_LENGTH"], type=int)
    count = request.args.get("count", default=1, type=int)
    special = _flag("special", current_app.config["PASSWORD_SPECIAL_CHARACTERS"])
    strict = _flag("strict", False)
    max_count = current_app.config["PASSWORD_MAX_COUNT"]

    if length is None or length < 1:
        return jsonify({"error": "Parameter 'length' must be a positive integer."}), 400
    if count is None or not 1 <= count <= max_count:
        return jsonify({"error": f"Parameter 'count' must be between 1 and {max_count}."}), 400

    # 2. Generation
    # ---------------------------------------------------------
    try:
        generator = Generator(build_rule(length, special_characters=special, strict=strict))
        passwords = [generator.generate() for _ in range(count)]
    except ConfigurationError as exc:
        logger.info("Rejected password request (length=%s, special=%s): %s", length, special, exc)
        return jsonify({"error": str(exc)}), 400
    except PasswordRuleRejectionError as exc:
        logger.error("Password rule gave up (length=%s, strict=%s): %s", length, strict, exc)
        return jsonify({"error": str(exc)}), 422

    return jsonify({
        "passwords": passwords,
        "length": length,
        "special": special,
        "strict": strict,
    }), 200
