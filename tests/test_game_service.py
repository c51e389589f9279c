import gc
import threading

import pytest

from wordle_app.models.game import GameState, GameStatus
from wordle_app.services.game_engine import outcome_event
from wordle_app.services.game_service import (
    GAME_ALREADY_OVER, LOSE_MESSAGES, NOT_A_VALID_WORD, NOT_ENOUGH_LETTERS, WIN_MESSAGES, GameNotFoundError
)


def test_new_game_uses_dictionary_answer(game_service, store):
    game_id, state = game_service.new_game()
    assert state.answer == "CRANE"
    assert state.word_length == 5
    assert state.max_guesses == 6
    assert store.load_game(game_id)["answer"] == "CRANE"


def test_new_game_with_custom_settings(game_service):
    _, state = game_service.new_game(word_length=6, max_guesses=8)
    assert state.answer == "LETTER"
    assert state.max_guesses == 8


@pytest.mark.parametrize("word_length,max_guesses", [(3, 6), (9, 6), (5, 3), (5, 9)])
def test_new_game_rejects_out_of_range_settings(game_service, word_length, max_guesses):
    with pytest.raises(ValueError):
        game_service.new_game(word_length, max_guesses)


def test_new_game_replaces_existing_game(game_service):
    game_id, _ = game_service.new_game()
    game_service.submit(game_id, "TRACE")
    same_id, state = game_service.new_game(game_id=game_id)
    assert same_id == game_id
    assert game_service.get_state(game_id).guesses == ()


def test_start_session_resumes_game_in_progress(game_service):
    game_id, _ = game_service.new_game()
    game_service.type_letter(game_id, "c")

    resumed_id, state, resumed = game_service.start_session(game_id)
    assert resumed is True
    assert resumed_id == game_id
    assert state.current_guess == "C"


def test_start_session_replaces_finished_game(game_service):
    game_id, _ = game_service.new_game()
    game_service.submit(game_id, "CRANE")

    new_id, state, resumed = game_service.start_session(game_id)
    assert resumed is False
    assert new_id == game_id
    assert state.status is GameStatus.PLAYING
    assert state.guesses == ()


def test_start_session_without_id_creates_game(game_service):
    game_id, state, resumed = game_service.start_session()
    assert game_id
    assert resumed is False


def test_letters_and_backspace_are_persisted(game_service, store):
    game_id, _ = game_service.new_game()
    for letter in "TRA":
        game_service.type_letter(game_id, letter)
    game_service.backspace(game_id)
    assert store.load_game(game_id)["current_guess"] == "TR"


def test_submit_incomplete_guess(game_service):
    game_id, _ = game_service.new_game()
    game_service.type_letter(game_id, "T")
    result = game_service.submit(game_id)
    assert result.accepted is False
    assert result.message == NOT_ENOUGH_LETTERS
    assert result.state.current_guess == "T"


def test_submit_unknown_word(game_service, store):
    game_id, _ = game_service.new_game()
    result = game_service.submit(game_id, "ZZZZZ")
    assert result.accepted is False
    assert result.message == NOT_A_VALID_WORD
    assert result.state.guesses == ()
    # The typed word stays on the board so the player can fix it
    assert store.load_game(game_id)["current_guess"] == "ZZZZZ"


def test_submit_rejects_too_long_guess(game_service):
    game_id, _ = game_service.new_game()
    result = game_service.submit(game_id, "CRANES")
    assert result.accepted is False
    assert result.state.current_guess == ""


def test_submit_staged_letters(game_service):
    game_id, _ = game_service.new_game()
    for letter in "TRACE":
        game_service.type_letter(game_id, letter)
    result = game_service.submit(game_id)
    assert result.accepted is True
    assert result.message == ""
    assert result.state.guesses == ("TRACE",)
    assert result.state.current_guess == ""


def test_winning_records_stats_once(game_service, stats_service):
    game_id, _ = game_service.new_game()
    result = game_service.submit(game_id, "crane")

    assert result.state.status is GameStatus.WON
    assert result.message in WIN_MESSAGES
    stats = stats_service.get_stats()
    assert stats.wins == 1
    assert stats.by_word_length[5].guess_distribution == {1: 1}

    # A repeated terminal event for the same answer is ignored
    stats_service.record(outcome_event(result.state))
    assert stats_service.get_stats().by_word_length[5].guess_distribution == {1: 1}


def test_losing_records_loss(game_service, stats_service):
    game_id, _ = game_service.new_game()
    for guess in ["TRACE", "RAISE", "STARE", "SLATE", "AROSE"]:
        assert game_service.submit(game_id, guess).state.status is GameStatus.PLAYING
    result = game_service.submit(game_id, "CRATE")

    assert result.state.status is GameStatus.LOST
    assert len(result.state.guesses) == 6
    assert result.message in [message.format(answer="CRANE") for message in LOSE_MESSAGES]
    stats = stats_service.get_stats()
    assert stats.games_played == 1
    assert stats.wins == 0


def test_finished_game_rejects_further_guesses(game_service, stats_service):
    game_id, _ = game_service.new_game()
    game_service.submit(game_id, "CRANE")

    result = game_service.submit(game_id, "TRACE")
    assert result.accepted is False
    assert result.message == GAME_ALREADY_OVER
    assert game_service.type_letter(game_id, "A").current_guess == ""
    assert stats_service.get_stats().games_played == 1


def test_unknown_game_raises(game_service):
    with pytest.raises(GameNotFoundError):
        game_service.get_state("missing")
    with pytest.raises(GameNotFoundError):
        game_service.submit("missing", "CRANE")


def test_delete_game(game_service):
    game_id, _ = game_service.new_game()
    assert game_service.delete_game(game_id) is True
    assert game_service.delete_game(game_id) is False
    with pytest.raises(GameNotFoundError):
        game_service.get_state(game_id)


def test_concurrent_letters_are_serialized(game_service):
    game_id, _ = game_service.new_game(word_length=8, max_guesses=6)
    threads = [threading.Thread(target=game_service.type_letter, args=(game_id, "A")) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert game_service.get_state(game_id).current_guess == "AAAAAAAA"


def test_stored_snapshot_matches_returned_state(game_service, store):
    game_id, _ = game_service.new_game()
    result = game_service.submit(game_id, "TRACE")
    assert GameState.from_dict(store.load_game(game_id)) == result.state


def test_game_locks_are_dropped_once_unused(game_service):
    game_id, _ = game_service.new_game()
    game_service.type_letter(game_id, "C")
    gc.collect()
    assert game_id not in game_service._locks


def test_delete_keeps_lock_that_is_still_referenced(game_service):
    game_id, _ = game_service.new_game()
    held = game_service._lock_for(game_id)

    game_service.delete_game(game_id)

    assert game_service._lock_for(game_id) is held


def test_waiting_transition_uses_the_held_lock(game_service):
    game_id, _ = game_service.new_game()
    held = game_service._lock_for(game_id)

    with held:
        worker = threading.Thread(target=game_service.type_letter, args=(game_id, "C"))
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        assert game_service._lock_for(game_id) is held
        assert game_service.get_state(game_id).current_guess == ""

    worker.join()
    assert game_service.get_state(game_id).current_guess == "C"
