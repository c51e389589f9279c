"""
Store Service

Persistence for game snapshots and statistics. The game engine never
touches a store; GameService and StatsService read and write plain dicts
through the GameStore interface.
"""

import copy
import json
import os
import re
import tempfile
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

STATS_KEY = 'stats'
_SAFE_GAME_ID = re.compile(r'^[A-Za-z0-9_-]+$')


class GameStore(ABC):
    """Load/save/delete of game snapshots (by game id) and of the statistics."""

    @abstractmethod
    def load_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def save_game(self, game_id: str, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete_game(self, game_id: str) -> bool:
        ...

    @abstractmethod
    def load_stats(self) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def save_stats(self, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete_stats(self) -> bool:
        ...


class MemoryStore(GameStore):
    """Process-local store, used by the test configuration."""

    def __init__(self):
        self.games: Dict[str, Dict[str, Any]] = {}
        self.stats: Optional[Dict[str, Any]] = None

    def load_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        data = self.games.get(game_id)
        return copy.deepcopy(data) if data is not None else None

    def save_game(self, game_id: str, data: Dict[str, Any]) -> None:
        self.games[game_id] = copy.deepcopy(data)

    def delete_game(self, game_id: str) -> bool:
        return self.games.pop(game_id, None) is not None

    def load_stats(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.stats) if self.stats is not None else None

    def save_stats(self, data: Dict[str, Any]) -> None:
        self.stats = copy.deepcopy(data)

    def delete_stats(self) -> bool:
        existed = self.stats is not None
        self.stats = None
        return existed


class JsonFileStore(GameStore):
    """
    Local JSON files: one file per game under games/ and a single stats.json.

    Writes go to a temporary file that replaces the target, so a crash
    never leaves half a snapshot behind.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self.games_dir = os.path.join(data_dir, 'games')
        os.makedirs(self.games_dir, exist_ok=True)
        self._lock = threading.Lock()

    def _game_path(self, game_id: str) -> str:
        if not _SAFE_GAME_ID.match(game_id):
            raise ValueError(f"Invalid game id: {game_id!r}")
        return os.path.join(self.games_dir, f"{game_id}.json")

    @property
    def _stats_path(self) -> str:
        return os.path.join(self.data_dir, f"{STATS_KEY}.json")

    def _read(self, path: str) -> Optional[Dict[str, Any]]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return None

    def _write(self, path: str, data: Dict[str, Any]) -> None:
        with self._lock:
            fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                os.unlink(tmp_path)
                raise

    def _delete(self, path: str) -> bool:
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            return False

    def load_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        return self._read(self._game_path(game_id))

    def save_game(self, game_id: str, data: Dict[str, Any]) -> None:
        self._write(self._game_path(game_id), data)

    def delete_game(self, game_id: str) -> bool:
        return self._delete(self._game_path(game_id))

    def load_stats(self) -> Optional[Dict[str, Any]]:
        return self._read(self._stats_path)

    def save_stats(self, data: Dict[str, Any]) -> None:
        self._write(self._stats_path, data)

    def delete_stats(self) -> bool:
        return self._delete(self._stats_path)


class MongoStore(GameStore):
    """
    MongoDB-backed store with a document per game and a single stats document.

    Args:
        database: A pymongo Database (or anything exposing the same collections)
    """

    def __init__(self, database):
        self.db = database
        self.games_collection = self.db.games
        self.stats_collection = self.db.stats

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str = 'wordle_game') -> 'MongoStore':
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        # Fail fast if the server is unreachable
        client.admin.command('ping')
        return cls(client[db_name])

    @staticmethod
    def _strip(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if document is None:
            return None
        return {key: value for key, value in document.items() if key != '_id'}

    def load_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        return self._strip(self.games_collection.find_one({'_id': game_id}))

    def save_game(self, game_id: str, data: Dict[str, Any]) -> None:
        self.games_collection.replace_one({'_id': game_id}, {'_id': game_id, **data}, upsert=True)

    def delete_game(self, game_id: str) -> bool:
        return self.games_collection.delete_one({'_id': game_id}).deleted_count > 0

    def load_stats(self) -> Optional[Dict[str, Any]]:
        return self._strip(self.stats_collection.find_one({'_id': STATS_KEY}))

    def save_stats(self, data: Dict[str, Any]) -> None:
        self.stats_collection.replace_one({'_id': STATS_KEY}, {'_id': STATS_KEY, **data}, upsert=True)

    def delete_stats(self) -> bool:
        return self.stats_collection.delete_one({'_id': STATS_KEY}).deleted_count > 0


def create_store(config) -> GameStore:
    """
    Build the store named by config.STORE_BACKEND.

    Raises:
        ValueError: If the backend is unknown or mongo is selected without MONGO_URI
    """
    backend = (config.STORE_BACKEND or 'json').lower()
    if backend == 'memory':
        return MemoryStore()
    if backend == 'json':
        return JsonFileStore(config.DATA_DIR)
    if backend == 'mongo':
        if not config.MONGO_URI:
            raise ValueError("STORE_BACKEND is 'mongo' but MONGO_URI is not configured")
        return MongoStore.from_uri(config.MONGO_URI, config.MONGO_DB)
    raise ValueError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND}")
