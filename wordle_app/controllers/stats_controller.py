"""
Statistics Controller

Handles the win/loss statistics endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import is_supported_word_length
from ..services.game_service import get_stats_service
from ..services.stats_service import (
    get_available_word_lengths, get_stats_for_word_length, stats_summary
)
from ..utils.game_logger import game_logger

stats_bp = Blueprint('stats', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Statistics service unavailable'
    }), 500


@stats_bp.route('/stats', methods=['GET'])
def get_stats():
    """Aggregate statistics plus one entry per word length played."""
    stats_service = get_stats_service()
    if not stats_service:
        return _service_unavailable()

    try:
        game_logger.log_user_action(request, 'get_stats')

        stats = stats_service.get_stats()
        lengths = get_available_word_lengths(stats)
        response_data = {
            'success': True,
            'stats': stats_summary(stats),
            'available_word_lengths': lengths,
            'by_word_length': {
                str(length): stats_summary(get_stats_for_word_length(stats, length)) for length in lengths
            }
        }
        game_logger.log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_stats')
        return jsonify({'success': False, 'error': str(e)}), 500


@stats_bp.route('/stats/<int:word_length>', methods=['GET'])
def get_stats_for_length(word_length):
    """Statistics for a single word length."""
    stats_service = get_stats_service()
    if not stats_service:
        return _service_unavailable()

    if not is_supported_word_length(word_length):
        return jsonify({'success': False, 'error': f'Unsupported word length: {word_length}'}), 400

    try:
        game_logger.log_user_action(request, 'get_stats', word_length=word_length)

        stats = stats_service.get_stats()
        response_data = {
            'success': True,
            'word_length': word_length,
            'stats': stats_summary(get_stats_for_word_length(stats, word_length))
        }
        game_logger.log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_stats')
        return jsonify({'success': False, 'error': str(e)}), 500


@stats_bp.route('/stats', methods=['DELETE'])
def reset_stats():
    """Erase all recorded statistics."""
    stats_service = get_stats_service()
    if not stats_service:
        return _service_unavailable()

    try:
        game_logger.log_user_action(request, 'reset_stats')

        deleted = stats_service.reset_stats()
        response_data = {
            'success': True,
            'deleted': deleted
        }
        game_logger.log_server_response(request, 'reset_stats', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'reset_stats')
        return jsonify({'success': False, 'error': str(e)}), 500
