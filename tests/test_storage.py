"""Tests for the key-value storage backends and the local quiz store."""

import json
from unittest.mock import MagicMock

import pytest
import redis

from quizmaster.exceptions import LocalStoreError
from quizmaster.services.local_store import LocalQuizStore
from quizmaster.utils.storage import (
    InMemoryStorage,
    JsonFileStorage,
    RedisStorage,
    build_storage,
)
from tests.conftest import make_quiz, make_result


class TestJsonFileStorage:

    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "store.json"))
        assert storage.get("localQuizzes") is None

    def test_set_then_get_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        storage = JsonFileStorage(str(path))

        storage.set("a", "1")
        storage.set("b", "2")

        assert storage.get("a") == "1"
        assert json.loads(path.read_text()) == {"a": "1", "b": "2"}

    def test_corrupt_file_raises_on_read(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("not json")
        with pytest.raises(LocalStoreError):
            JsonFileStorage(str(path)).get("a")

    def test_corrupt_file_is_replaced_on_write(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        storage = JsonFileStorage(str(path))

        storage.set("a", "1")

        assert storage.get("a") == "1"


class TestRedisStorage:

    def test_get_and_set_delegate_to_client(self):
        client = MagicMock()
        client.get.return_value = "[]"
        storage = RedisStorage(client)

        storage.set("quizHistory", "[]")

        assert storage.get("quizHistory") == "[]"
        client.set.assert_called_once_with("quizHistory", "[]")

    def test_redis_errors_become_local_store_errors(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("refused")
        client.set.side_effect = redis.ConnectionError("refused")
        storage = RedisStorage(client)

        with pytest.raises(LocalStoreError):
            storage.get("a")
        with pytest.raises(LocalStoreError):
            storage.set("a", "1")


class TestBuildStorage:

    def test_file_backend(self, tmp_path):
        storage = build_storage("file", path=str(tmp_path / "s.json"))
        assert isinstance(storage, JsonFileStorage)

    def test_memory_backend(self):
        assert isinstance(build_storage("memory"), InMemoryStorage)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_storage("floppy")


class TestLocalQuizStore:

    def test_add_quiz_mints_id_and_timestamps(self, local_store):
        stored = local_store.add_quiz(make_quiz("Local"))

        assert stored.id
        assert stored.created_at == stored.updated_at
        assert local_store.find_quiz(stored.id).title == "Local"

    def test_quizzes_persist_as_json_list(self, storage, local_store):
        local_store.add_quiz(make_quiz("One"))
        local_store.add_quiz(make_quiz("Two"))

        items = json.loads(storage.get("localQuizzes"))
        assert [item["title"] for item in items] == ["One", "Two"]

    def test_custom_keys(self, storage):
        store = LocalQuizStore(storage, quizzes_key="q", history_key="h")
        store.add_quiz(make_quiz())
        store.append_result(make_result("quiz-1"))

        assert storage.get("q") and storage.get("h")
        assert storage.get("localQuizzes") is None

    def test_non_list_contents_read_as_empty(self, storage, local_store):
        storage.set("localQuizzes", json.dumps({"not": "a list"}))
        assert local_store.load_quizzes() == []

    def test_append_to_corrupt_history_starts_fresh(self, storage, local_store):
        storage.set("quizHistory", "garbage")

        result_id = local_store.append_result(make_result("quiz-1"))

        assert [r.id for r in local_store.load_history()] == [result_id]

    def test_file_backed_store_survives_reopen(self, tmp_path):
        path = str(tmp_path / "store.json")
        stored = LocalQuizStore(JsonFileStorage(path)).add_quiz(make_quiz("Durable"))

        reopened = LocalQuizStore(JsonFileStorage(path))

        assert reopened.find_quiz(stored.id).title == "Durable"
