"""
FLASK APP MAIN ENTRY POINT - OTP BACKEND SERVER
==================================================

Sets up the Flask app, CORS, logging and registers the OTP blueprint.

MAIN FEATURES
- JSON API around the pure OTP core (code / parse / uri)
- CORS enabled so a browser front end on another origin can call it
- Root endpoint listing the available API endpoints
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from .config import Config
from .routes import otp_bp

logger = logging.getLogger(__name__)


def create_app(overrides=None) -> Flask:
    """
    Build the Flask app.

    Arguments:
        overrides: optional dict applied on top of Config (tests use this)
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Allow the front end (other domain/port) to call the API
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.register_blueprint(otp_bp)

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "service": "otp-engine",
            "endpoints": {
                "POST /code": "current TOTP code for a secret or otpauth URI",
                "POST /parse": "otpauth URI -> config",
                "POST /uri": "config -> otpauth URI",
            },
        })

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    app = create_app()
    logger.info("Starting OTP backend on %s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])


# Only run when executed directly (not on import)
if __name__ == '__main__':
    main()
