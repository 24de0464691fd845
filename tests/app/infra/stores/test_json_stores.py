"""Testes dos stores JSON (arquivos do runtime de agente)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.infra.stores import JsonIdentityLinkStore, JsonSessionRegistry
from app.infra.stores.json_file import read_json_file
from utils.errors import StoreUnavailableError


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestReadJsonFile:
    def test_reads_json(self, tmp_path: Path) -> None:
        assert read_json_file(_write(tmp_path / "a.json", {"x": 1})) == {"x": 1}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(StoreUnavailableError):
            read_json_file(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(StoreUnavailableError, match="invalid_json"):
            read_json_file(path)


class TestJsonIdentityLinkStore:
    def test_reads_identity_links_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "openclaw.json",
            {
                "agents": {"main": {}},
                "session": {
                    "identityLinks": {
                        "alice": ["email:alice@example.com", "telegram:1"],
                        "broken": "email:x@example.com",
                    }
                },
            },
        )

        links = JsonIdentityLinkStore(path).load_links()

        assert links == {"alice": ["email:alice@example.com", "telegram:1"]}

    def test_rereads_file_on_each_call(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "openclaw.json", {"session": {"identityLinks": {}}})
        store = JsonIdentityLinkStore(path)
        assert store.load_links() == {}

        _write(path, {"session": {"identityLinks": {"bob": ["email:bob@example.com"]}}})

        assert store.load_links() == {"bob": ["email:bob@example.com"]}

    @pytest.mark.parametrize("data", [[], {"session": None}, {"session": {"identityLinks": []}}])
    def test_unexpected_shapes_yield_empty_table(self, tmp_path: Path, data: object) -> None:
        assert JsonIdentityLinkStore(_write(tmp_path / "c.json", data)).load_links() == {}

    def test_unreadable_file_degrades_with_warning(
        self,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level("WARNING"):
            links = JsonIdentityLinkStore(tmp_path / "missing.json").load_links()

        assert links == {}
        assert "identity_links_unreadable" in caplog.text


class TestJsonSessionRegistry:
    def test_reads_records_and_skips_non_objects(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "sessions.json",
            {"agent:main:alice": {"sessionId": "uuid-1"}, "junk": 3},
        )

        assert JsonSessionRegistry(path).load_registry() == {
            "agent:main:alice": {"sessionId": "uuid-1"}
        }

    def test_unreadable_file_degrades_with_warning(
        self,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = tmp_path / "sessions.json"
        path.write_text("not json", encoding="utf-8")

        with caplog.at_level("WARNING"):
            registry = JsonSessionRegistry(path).load_registry()

        assert registry == {}
        assert "session_registry_unreadable" in caplog.text
