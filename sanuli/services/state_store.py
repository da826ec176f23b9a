"""
State Store

Persists the player's settings, streaks and unfinished rounds. Every
backend reads and writes the whole document at once. Unreadable or
corrupt data is reported as PersistenceCorrupt and left to the caller to
recover from; a rejected write is reported as PersistenceFailed.
"""

import copy
import json
import os
import tempfile
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..errors import PersistenceCorrupt, PersistenceFailed
from ..models.state import PersistedState


def parse_state(data: Any) -> PersistedState:
    """Build a PersistedState from a stored document."""
    try:
        return PersistedState.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PersistenceCorrupt(f"Stored state is malformed: {e}") from e


class StateStore:
    """Base class for state backends."""

    def load(self) -> PersistedState:
        """
        Read the stored state.

        Returns:
            PersistedState: Defaults when nothing has been stored yet

        Raises:
            PersistenceCorrupt: If stored data cannot be read
        """
        raise NotImplementedError

    def save(self, state: PersistedState) -> None:
        """
        Write the whole state document.

        Raises:
            PersistenceFailed: If the backend rejects the write
        """
        raise NotImplementedError


class MemoryStateStore(StateStore):
    """Keeps the document in memory. Used by tests and throwaway sessions."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self.document = document
        self.saves = 0

    def load(self) -> PersistedState:
        if self.document is None:
            return PersistedState()
        return parse_state(copy.deepcopy(self.document))

    def save(self, state: PersistedState) -> None:
        self.document = state.to_dict()
        self.saves += 1


class JsonFileStateStore(StateStore):
    """Stores the document as a JSON file, replaced atomically on save."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> PersistedState:
        if not os.path.exists(self.path):
            return PersistedState()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceCorrupt(f"Cannot read state file {self.path}: {e}") from e

        return parse_state(data)

    def save(self, state: PersistedState) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))

        try:
            os.makedirs(directory, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix='.sanuli-state-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
                os.replace(temp_path, self.path)
            except BaseException:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise
        except OSError as e:
            raise PersistenceFailed(f"Cannot write state file {self.path}: {e}") from e


class MongoStateStore(StateStore):
    """
    Stores one document per profile in MongoDB.
    """

    def __init__(self, collection, profile: str = 'default'):
        """
        Args:
            collection: pymongo collection holding player state documents
            profile: Identifier of the player profile
        """
        self.collection = collection
        self.profile = profile

    @classmethod
    def connect(cls, mongo_uri: str, database: str = 'sanuli', profile: str = 'default') -> "MongoStateStore":
        """Open a MongoDB connection and check that the server answers."""
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        client.admin.command('ping')
        return cls(client[database].player_state, profile)

    def load(self) -> PersistedState:
        try:
            document = self.collection.find_one({"_id": self.profile})
        except PyMongoError as e:
            raise PersistenceCorrupt(f"Cannot read state of profile '{self.profile}': {e}") from e

        if document is None:
            return PersistedState()

        document.pop("_id", None)
        return parse_state(document)

    def save(self, state: PersistedState) -> None:
        document = state.to_dict()
        document["_id"] = self.profile
        try:
            self.collection.replace_one({"_id": self.profile}, document, upsert=True)
        except PyMongoError as e:
            raise PersistenceFailed(f"Cannot save state of profile '{self.profile}': {e}") from e


def create_state_store(config) -> StateStore:
    """Pick a backend from configuration (STATE_BACKEND)."""
    backend = getattr(config, 'STATE_BACKEND', 'json')

    if backend == 'memory':
        return MemoryStateStore()
    if backend == 'json':
        return JsonFileStateStore(config.STATE_FILE)
    if backend == 'mongo':
        if not config.MONGO_URI:
            raise ValueError("STATE_BACKEND is 'mongo' but MONGO_URI is not configured")
        return MongoStateStore.connect(config.MONGO_URI, config.MONGO_DATABASE, config.STATE_PROFILE)

    raise ValueError(f"Unknown STATE_BACKEND '{backend}'")
