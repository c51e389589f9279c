"""
Request Decorators

Contains decorators shared by the HTTP controllers.
"""

from functools import wraps
from flask import request, jsonify
from .game_logger import game_logger


def with_game_service(action: str):
    """
    Decorator for game endpoints: injects the game service and maps
    service-level failures onto JSON error responses.

    - service not initialized -> 500
    - unknown game id -> 404
    - invalid settings (ValueError) -> 400
    - evaluator length mismatch (a bug, not bad input) -> 500
    - anything else -> 500, logged with the action name
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            from ..services.game_engine import LengthMismatchError
            from ..services.game_service import GameNotFoundError, get_game_service

            game_id = kwargs.get('game_id')
            game_service = get_game_service()
            if not game_service:
                return jsonify({
                    'success': False,
                    'error': 'Game service unavailable'
                }), 500

            try:
                return f(game_service, *args, **kwargs)
            except GameNotFoundError:
                error_response = {
                    'success': False,
                    'error': 'Game not found'
                }
                game_logger.log_server_response(request, action, False, error_response, game_id)
                return jsonify(error_response), 404
            except LengthMismatchError as e:
                game_logger.log_error(request, e, action, game_id)
                return jsonify({'success': False, 'error': 'Internal game error'}), 500
            except ValueError as e:
                error_response = {
                    'success': False,
                    'error': str(e)
                }
                game_logger.log_server_response(request, action, False, error_response, game_id)
                return jsonify(error_response), 400
            except Exception as e:
                game_logger.log_error(request, e, action, game_id)
                error_response = {
                    'success': False,
                    'error': str(e)
                }
                game_logger.log_server_response(request, action, False, error_response, game_id)
                return jsonify(error_response), 500

        return decorated_function
    return decorator
