import random

import pytest

from wordle_app import create_app
from wordle_app.config import TestingConfig
from wordle_app.services.dictionary_service import Dictionary
from wordle_app.services.game_service import GameService
from wordle_app.services.stats_service import StatsService
from wordle_app.services.store_service import MemoryStore

VALID_WORDS = {
    4: ['ABLE', 'BALL', 'LOOP', 'POOL'],
    5: ['CRANE', 'TRACE', 'ALLOY', 'LOLLY', 'SLATE', 'RAISE', 'STARE', 'LEVEL', 'BELLE', 'AROSE', 'CRATE'],
    6: ['LETTER', 'SETTLE', 'BETTER'],
}

ANSWER_WORDS = {
    4: ['BALL'],
    5: ['CRANE'],
    6: ['LETTER'],
}


class FakeClock:
    """Settable clock in epoch seconds."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def dictionary():
    return Dictionary(VALID_WORDS, ANSWER_WORDS, rng=random.Random(7))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stats_service(store, clock):
    return StatsService(store, dedupe_window=60, clock=clock)


@pytest.fixture
def game_service(store, dictionary, stats_service):
    return GameService(store, dictionary, stats_service, rng=random.Random(3))


@pytest.fixture
def app(store, dictionary):
    app = create_app(TestingConfig, store=store, dictionary=dictionary)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
