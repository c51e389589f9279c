"""
Wordle Game Server Application Package

Single-player Wordle with configurable word length and guess budget,
locally persisted games and per-word-length statistics.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, store=None, dictionary=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        store: GameStore to use instead of the one named by the configuration
        dictionary: Dictionary to use instead of loading the configured word lists

    Returns:
        Flask application instance with all services initialized
    """
    from .services.dictionary_service import load_dictionary
    from .services.game_service import initialize_game_service
    from .services.store_service import create_store

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Initialize services
    if store is None:
        store = create_store(config_class)
    if dictionary is None:
        dictionary = load_dictionary(config_class.VALID_WORDS_FILE, config_class.ANSWER_WORDS_FILE)
    app.game_service = initialize_game_service(store, dictionary, config_class)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.stats_controller import stats_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(stats_bp, url_prefix='/api')

    return app
