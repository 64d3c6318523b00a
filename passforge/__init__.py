"""
Module: __init__.py
Project: Passforge (Open Source)
License: MIT
Description:
    Application Factory and Entry Point.

    This module initializes the Flask application instance. It is responsible for:
    1. Loading configuration from TOML files (supporting environment overrides).
    2. Mapping generator defaults (length, special characters, batch size) onto app.config.
    3. Registering Blueprints (the JSON password API).
    4. Registering the CLI commands.

    The password core itself lives in `passforge.services` and has no Flask dependency.
"""

import os
import logging
from pathlib import Path
from typing import Optional

import toml
from flask import Flask

logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION LOADING
# ============================================================

def find_config_path() -> Path:
    """
    Locates the TOML configuration file.

    Selection Priority:
    1. The path in the 'PASSFORGE_CONFIG' environment variable.
    2. 'config.toml' in the project root.
    3. 'config/config.toml' in the project root.

    Raises:
        FileNotFoundError: If no configuration file exists.
    """
    project_root = Path(__file__).resolve().parent.parent
    cfg_env = os.environ.get("PASSFORGE_CONFIG")
    cfg_path = Path(cfg_env) if cfg_env else project_root / "config.toml"

    # Fallback path if root config is missing
    if not cfg_path.is_file():
        cfg_path = project_root / "config" / "config.toml"

    if not cfg_path.is_file():
        raise FileNotFoundError(f"CRITICAL: Missing configuration file at: {cfg_path}")

    return cfg_path


# ============================================================
# APPLICATION FACTORY
# ============================================================

def create_app(overrides: Optional[dict] = None) -> Flask:
    """
    Initializes and configures the Flask application.

    Args:
        overrides (dict): Optional values applied on top of the TOML
                          configuration (used by tests).

    Returns:
        Flask: The fully configured application instance.
    """
    app = Flask(__name__)

    # ---------------------------------------------------------
    # 1. Configuration Loading (TOML)
    # ---------------------------------------------------------
    cfg_path = find_config_path()
    config_data = toml.load(str(cfg_path))
    # Preserve the full nested structure in app.config
    app.config.update(config_data)

    flask_sec = config_data.get("flask", {})
    app.config["SECRET_KEY"] = flask_sec.get("secret_key", "dev_key_only")

    # ---------------------------------------------------------
    # 2. Generator Defaults
    # ---------------------------------------------------------
    gen_cfg = config_data.get("generator", {})
    app.config.update(
        PASSWORD_DEFAULT_LENGTH=int(gen_cfg.get("default_length", 8)),
        PASSWORD_SPECIAL_CHARACTERS=bool(gen_cfg.get("special_characters", True)),
        PASSWORD_MAX_COUNT=int(gen_cfg.get("max_count", 50)),
    )
    app.config["LOG_LEVEL"] = config_data.get("logging", {}).get("level", "INFO").upper()

    if overrides:
        app.config.update(overrides)

    logger.debug("Loaded configuration from %s", cfg_path)

    # ---------------------------------------------------------
    # 3. Registration
    # ---------------------------------------------------------
    from .blueprints.api import bp_api
    app.register_blueprint(bp_api)

    from .commands import register_commands
    register_commands(app)

    return app
