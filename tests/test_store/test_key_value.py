"""
Tests for quiz_recommender/store/key_value.py.

What we test
------------
InMemoryStore:
  - Missing keys read as None.
  - JSON-string values (localStorage serialisation) are decoded.
  - Plain non-JSON strings pass through unchanged.
  - The key prefix is applied to reads and writes.
  - Satisfies the KeyValueStore protocol.
JsonFileStore:
  - Missing file behaves like an empty store.
  - Reads reflect file changes made after construction.
  - A truncated, undecodable or non-object file reads as empty and logs a
    WARNING instead of raising.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from quiz_recommender.store.key_value import InMemoryStore, JsonFileStore, KeyValueStore


class TestInMemoryStore:
    def test_missing_key_is_none(self):
        assert InMemoryStore().read("nothing") is None

    def test_json_string_decoded(self):
        store = InMemoryStore({"k": json.dumps({"a": 1})})
        assert store.read("k") == {"a": 1}

    def test_plain_string_passthrough(self):
        store = InMemoryStore({"k": "hello world"})
        assert store.read("k") == "hello world"

    def test_prefix_applied(self):
        store = InMemoryStore(prefix="shikshanam_")
        store.set("gunaProfilerState", {"x": 1})
        assert store.read("gunaProfilerState") == {"x": 1}
        assert InMemoryStore({"shikshanam_k": 5}, prefix="shikshanam_").read("k") == 5

    def test_remove(self):
        store = InMemoryStore({"k": 1})
        store.remove("k")
        store.remove("k")
        assert store.read("k") is None
        assert len(store) == 0

    def test_protocol(self):
        assert isinstance(InMemoryStore(), KeyValueStore)


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path: Path):
        store = JsonFileStore(tmp_path / "absent.json")
        assert store.read("gunaProfilerState") is None

    def test_reads_latest_contents(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        store = JsonFileStore(path)
        assert store.read("a") == 1

        path.write_text(json.dumps({"a": 2}), encoding="utf-8")
        assert store.read("a") == 2

    def test_nested_json_string_decoded(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"k": json.dumps({"dominantGuna": "rajas"})}), encoding="utf-8")
        assert JsonFileStore(path).read("k") == {"dominantGuna": "rajas"}

    def test_non_object_file_is_empty(self, tmp_path: Path, caplog):
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="quiz_recommender.store.key_value"):
            assert JsonFileStore(path).read("k") is None
        assert "must contain a JSON object" in caplog.text

    @pytest.mark.parametrize(
        "raw",
        [
            '{"gunaProfilerState": {"scores": {"sattva": 4',
            "",
            "not json at all",
        ],
    )
    def test_corrupt_file_is_empty(self, tmp_path: Path, caplog, raw):
        path = tmp_path / "state.json"
        path.write_text(raw, encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="quiz_recommender.store.key_value"):
            assert JsonFileStore(path).read("gunaProfilerState") is None
        assert "Failed to load store file" in caplog.text

    def test_directory_path_is_empty(self, tmp_path: Path):
        assert JsonFileStore(tmp_path).read("k") is None

    def test_undecodable_bytes_are_empty(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert JsonFileStore(path).read("k") is None

    def test_recovers_once_file_is_rewritten(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text("{", encoding="utf-8")
        store = JsonFileStore(path)
        assert store.read("a") is None
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert store.read("a") == 1

    def test_protocol(self, tmp_path: Path):
        assert isinstance(JsonFileStore(tmp_path / "x.json"), KeyValueStore)
