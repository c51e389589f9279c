"""
Game Logger Module for the Wordle Server

Every entry is one JSON object written after a timestamp and level, so
the daily log file can be grepped by eye or parsed line by line.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path
from ..config.app_config import Config

USER_ACTION = 'USER_ACTION'
RESPONSE_OK = 'SERVER_RESPONSE_SUCCESS'
RESPONSE_FAILED = 'SERVER_RESPONSE_ERROR'
GAME_EVENT = 'GAME_EVENT'
ERROR = 'ERROR'

# Counter in get_log_stats() for each entry type
_STATS_BUCKETS = {
    USER_ACTION: 'user_actions',
    RESPONSE_OK: 'server_responses',
    RESPONSE_FAILED: 'server_responses',
    GAME_EVENT: 'game_events',
    ERROR: 'errors',
}


class GameLogger:
    """
    Structured logger for requests, responses and game lifecycle events.

    Entries go to logs/game_log_<date>.log at the configured level; only
    warnings and errors are echoed to the console.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO", name: str = 'wordle_game'):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper())
        if not isinstance(self.level, int):
            self.level = logging.INFO

        self.logger = self._setup_logger(name)

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.level)

        # Re-created on app reload; drop the handlers of the previous instance
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        return logger

    @staticmethod
    def _client(request) -> Dict[str, str]:
        return {'user_ip': getattr(request, 'remote_addr', None) or 'unknown'}

    def _write(self,
               level: int,
               event_type: str,
               action: str,
               client: Dict[str, str],
               details: Dict[str, Any]):
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': client,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self,
                        request,
                        action: str,
                        game_id: Optional[str] = None,
                        **kwargs):
        """
        Record an incoming request before it is handled.

        Args:
            request: Flask request object
            action: Controller action, e.g. 'submit_guess' or 'type_letter'
            game_id: Game the request targets, if any
            **kwargs: Request parameters worth keeping
        """
        details = {
            'game_id': game_id,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            'url': getattr(request, 'url', None),
            **kwargs
        }
        self._write(logging.INFO, USER_ACTION, action, self._client(request), details)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            game_id: Optional[str] = None,
                            **kwargs):
        """
        Record the JSON body sent back for an action.

        Failed responses are logged as warnings. Game snapshots in the body
        are reduced to a summary so answers never reach the log mid-game.
        """
        details = {
            'game_id': game_id,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._summarize_response(response_data),
            **kwargs
        }
        if success:
            self._write(logging.INFO, RESPONSE_OK, action, self._client(request), details)
        else:
            self._write(logging.WARNING, RESPONSE_FAILED, action, self._client(request), details)

    def log_game_event(self,
                       game_id: Optional[str],
                       event: str,
                       user_ip: str = 'system',
                       **kwargs):
        """Record a lifecycle event such as 'game_won' or 'stats_recorded'."""
        self._write(logging.INFO, GAME_EVENT, event, {'user_ip': user_ip}, {'game_id': game_id, **kwargs})

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  game_id: Optional[str] = None):
        details = {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }
        self._write(logging.ERROR, ERROR, action, self._client(request), details)

    @staticmethod
    def _summarize_response(data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        summary = dict(data)
        state = summary.get('state')
        if isinstance(state, dict):
            summary['state'] = {
                'status': state.get('status'),
                'word_length': state.get('word_length'),
                'max_guesses': state.get('max_guesses'),
                'guesses_count': len(state.get('guesses', [])),
                'current_guess_length': len(state.get('current_guess') or ''),
                'answer_revealed': state.get('answer') is not None
            }
        return summary

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's entries per type, for the health endpoint."""
        log_file = self.log_file
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        stats = {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': 0,
            'user_actions': 0,
            'server_responses': 0,
            'game_events': 0,
            'errors': 0
        }

        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    stats['total_entries'] += 1
                    bucket = _STATS_BUCKETS.get(self._event_type(line))
                    if bucket:
                        stats[bucket] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return stats

    @staticmethod
    def _event_type(line: str) -> Optional[str]:
        payload = line.split(' | ', 2)[-1]
        try:
            return json.loads(payload).get('event_type')
        except (ValueError, AttributeError):
            return None


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
