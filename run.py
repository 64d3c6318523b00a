"""
Module: run.py
Project: Passforge (Open Source)
License: MIT
Description:
    Main Entry Point of the Application.

    This script bootstraps the Flask application instance used by both the
    JSON API and the Flask CLI commands.

    Flow:
    1. Import the application factory (create_app).
    2. Instantiate the Flask app.
    3. Configure logging with the level from config.toml.
    4. Start the development server when executed directly.

    CLI usage:
        $ flask --app run.py generate-password --length 12
        $ flask --app run.py password-stats --samples 10000
"""

import os
import logging
from passforge import create_app

# --- Application Initialization ---
app = create_app()

# --- Execution Configuration ---
# Debug mode is explicitly disabled unless FLASK_DEBUG is '1'
debug_mode = os.environ.get("FLASK_DEBUG", "0") == "1"

logging.basicConfig(
    level=app.config.get("LOG_LEVEL", "INFO"),
    format='[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    # Configuration via environment or defaults
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", 5000))

    logger.info("Starting Passforge API...")
    logger.info("Local URL: http://%s:%s", host, port)

    if debug_mode:
        logger.warning("Caution: DEBUG MODE is ACTIVE. Enhanced logging enabled.")

    app.run(host=host, port=port, debug=debug_mode)
