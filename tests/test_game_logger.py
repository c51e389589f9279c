import json
import logging
from types import SimpleNamespace

import pytest

from wordle_app.utils.game_logger import GameLogger


@pytest.fixture
def logger(tmp_path):
    return GameLogger(str(tmp_path), "DEBUG", name="wordle_game_test")


def request_from(ip="10.0.0.1"):
    return SimpleNamespace(remote_addr=ip, endpoint="game.submit_guess", method="POST", url="http://x/api")


def entries(logger):
    for handler in logger.logger.handlers:
        handler.flush()
    with open(logger.log_file, encoding="utf-8") as f:
        return [json.loads(line.split(" | ", 2)[2]) for line in f if line.strip()]


def test_response_summary_hides_snapshot_details(logger):
    state = {"status": "playing", "word_length": 5, "max_guesses": 6, "guesses": ["TRACE"],
             "current_guess": "CR", "answer": None}
    logger.log_server_response(request_from(), "submit_guess", True, {"success": True, "state": state}, "g1")

    [entry] = entries(logger)
    assert entry["event_type"] == "SERVER_RESPONSE_SUCCESS"
    assert entry["user"] == {"user_ip": "10.0.0.1"}
    assert entry["details"]["response_data"]["state"] == {
        "status": "playing", "word_length": 5, "max_guesses": 6,
        "guesses_count": 1, "current_guess_length": 2, "answer_revealed": False,
    }


def test_log_stats_count_each_entry_type(logger):
    request = request_from()
    logger.log_user_action(request, "new_game")
    logger.log_server_response(request, "new_game", True, {"success": True})
    logger.log_server_response(request, "submit_guess", False, {"success": False, "error": "Not a valid word"})
    logger.log_game_event("g1", "game_won", guesses_used=3)
    logger.log_error(request, RuntimeError("store offline"), "submit_guess", "g1")
    for handler in logger.logger.handlers:
        handler.flush()

    stats = logger.get_log_stats()
    assert stats["total_entries"] == 5
    assert stats["user_actions"] == 1
    assert stats["server_responses"] == 2
    assert stats["game_events"] == 1
    assert stats["errors"] == 1


def test_unknown_level_defaults_to_info(tmp_path):
    logger = GameLogger(str(tmp_path), "chatty", name="wordle_game_test_level")
    assert logger.level == logging.INFO
