"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..utils.decorators import with_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import get_json_body, optional_int

game_bp = Blueprint('game', __name__)


@game_bp.route('/session', methods=['POST'])
@with_game_service('start_session')
def start_session(game_service):
    """Resume a game that is still being played, or start a new one."""
    data = get_json_body()
    game_id = data.get('game_id')

    game_logger.log_user_action(request, 'start_session', game_id)

    game_id, state, resumed = game_service.start_session(
        game_id,
        optional_int(data, 'word_length'),
        optional_int(data, 'max_guesses')
    )

    response_data = {
        'success': True,
        'game_id': game_id,
        'resumed': resumed,
        'state': state.public_dict()
    }
    game_logger.log_server_response(request, 'start_session', True, response_data, game_id, resumed=resumed)
    return jsonify(response_data)


@game_bp.route('/new_game', methods=['POST'])
@with_game_service('new_game')
def new_game(game_service):
    """Create a new game, optionally replacing the game stored under game_id."""
    data = get_json_body()
    word_length = optional_int(data, 'word_length')
    max_guesses = optional_int(data, 'max_guesses')

    game_logger.log_user_action(
        request, 'new_game', data.get('game_id'),
        word_length=word_length, max_guesses=max_guesses
    )

    game_id, state = game_service.new_game(word_length, max_guesses, data.get('game_id'))

    response_data = {
        'success': True,
        'game_id': game_id,
        'state': state.public_dict()
    }
    game_logger.log_server_response(
        request, 'new_game', True, response_data, game_id,
        word_length=state.word_length, max_guesses=state.max_guesses
    )
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@with_game_service('get_state')
def get_state(game_service, game_id):
    """Get current game state."""
    game_logger.log_user_action(request, 'get_state', game_id)

    state = game_service.get_state(game_id)

    response_data = {
        'success': True,
        'state': state.public_dict()
    }
    game_logger.log_server_response(request, 'get_state', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
@with_game_service('type_letter')
def type_letter(game_service, game_id):
    """Append one letter to the current guess."""
    letter = get_json_body().get('letter')
    if not isinstance(letter, str) or not letter:
        error_response = {
            'success': False,
            'error': 'Letter is required'
        }
        game_logger.log_server_response(request, 'type_letter', False, error_response, game_id)
        return jsonify(error_response), 400

    game_logger.log_user_action(request, 'type_letter', game_id, letter=letter)

    state = game_service.type_letter(game_id, letter)

    response_data = {
        'success': True,
        'state': state.public_dict()
    }
    game_logger.log_server_response(request, 'type_letter', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/backspace', methods=['POST'])
@with_game_service('backspace')
def backspace(game_service, game_id):
    """Remove the last letter of the current guess."""
    game_logger.log_user_action(request, 'backspace', game_id)

    state = game_service.backspace(game_id)

    response_data = {
        'success': True,
        'state': state.public_dict()
    }
    game_logger.log_server_response(request, 'backspace', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@with_game_service('submit_guess')
def make_guess(game_service, game_id):
    """Submit the current guess, or the word sent as 'guess'."""
    guess = get_json_body().get('guess')
    if guess is not None and not isinstance(guess, str):
        error_response = {
            'success': False,
            'error': 'Guess must be a string'
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 400

    game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

    result = game_service.submit(game_id, guess)

    if not result.accepted:
        error_response = {
            'success': False,
            'error': result.message,
            'state': result.state.public_dict()
        }
        game_logger.log_server_response(
            request, 'submit_guess', False, error_response, game_id,
            validation_error=result.message, attempted_guess=guess
        )
        return jsonify(error_response), 400

    response_data = {
        'success': True,
        'message': result.message,
        'state': result.state.public_dict()
    }
    game_logger.log_server_response(
        request, 'submit_guess', True, response_data, game_id,
        round=len(result.state.guesses), status=result.state.status.value
    )
    return jsonify(response_data)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@with_game_service('delete_game')
def delete_game(game_service, game_id):
    """Delete a stored game (manual reset)."""
    game_logger.log_user_action(request, 'delete_game', game_id)

    success = game_service.delete_game(game_id)

    response_data = {
        'success': success
    }
    game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)
    if success:
        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
        return jsonify(response_data)
    return jsonify({'success': False, 'error': 'Game not found'}), 404


@game_bp.route('/health', methods=['GET'])
@with_game_service('health_check')
def health_check(game_service):
    """Health check endpoint."""
    game_logger.log_user_action(request, 'health_check')

    response_data = {
        'status': 'healthy',
        'store': type(game_service.store).__name__,
        'dictionary': game_service.dictionary.word_counts(),
        'word_statistics': game_service.dictionary.word_statistics(),
        'log_stats': game_logger.get_log_stats()
    }
    game_logger.log_server_response(request, 'health_check', True, response_data)
    return jsonify(response_data)
