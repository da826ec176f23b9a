"""
Sanuli Game Engine Package

A Finnish word-guessing game engine: guess evaluation, daily words,
single and four-board rounds, per-mode streaks and share codes, served
to a local client through a small Flask API.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.share_controller import share_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(share_bp, url_prefix='/api')

    return app
