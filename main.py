"""
Wordle Game Server - Main Entry Point

This is the main entry point for the Wordle game server.
It builds the Flask application with its store and dictionary and starts it.
"""

import os
from wordle_app import create_app
from wordle_app.config import config
from wordle_app.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config[os.getenv('WORDLE_ENV', 'default')]
    try:
        print("Initializing services...")
        app = create_app(config_class)
        print("✓ Flask application created successfully")
        print(f"✓ Store backend: {type(app.game_service.store).__name__}")

        game_logger.logger.info("Wordle Server Starting")

        print(f"\nStarting Wordle Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        app.run(host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG, threaded=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
