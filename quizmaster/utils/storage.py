"""
Key-value storage backends for the local fallback store
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

import redis

from quizmaster.exceptions import LocalStoreError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal get/set capability the local store depends on"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStorage:
    """Process-local storage, lost on restart"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    On-device storage: all keys live in a single JSON object on disk

    Writes go to a temporary file that replaces the original, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise LocalStoreError(f"Cannot read {self.path}: {str(e)}") from e
        if not isinstance(data, dict):
            raise LocalStoreError(f"Unexpected contents in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except LocalStoreError as e:
            logger.error(f"Discarding unreadable local store: {str(e)}")
            data = {}
        data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise LocalStoreError(f"Cannot write {self.path}: {str(e)}") from e


class RedisStorage:
    """Redis-backed storage for deployments without a writable disk"""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStorage":
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5
        )
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            raise LocalStoreError(f"Redis get error: {str(e)}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            raise LocalStoreError(f"Redis set error: {str(e)}") from e


def build_storage(backend: str, path: str = "", redis_url: str = "") -> KeyValueStorage:
    """
    Create the storage backend named in settings

    Args:
        backend: "file", "redis" or "memory"
        path: JSON file location for the file backend
        redis_url: Connection URL for the redis backend

    Returns:
        Storage instance
    """
    if backend == "file":
        logger.info(f"Local store backed by file {path}")
        return JsonFileStorage(path)
    if backend == "redis":
        logger.info("Local store backed by Redis")
        return RedisStorage.from_url(redis_url)
    if backend == "memory":
        logger.warning("Local store kept in memory, data is lost on restart")
        return InMemoryStorage()
    raise ValueError(f"Unknown local store backend: {backend}")
