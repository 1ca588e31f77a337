"""Unit tests for credential state and persistence."""

import json

import pytest

from pixelmedic.credentials import CredentialFile, CredentialStore, credential_key


class TestCredentialStore:
    def test_unconfigured_by_default(self):
        store = CredentialStore()
        assert store.is_configured() is False
        assert store.credential is None

    def test_empty_string_is_unconfigured(self):
        store = CredentialStore()
        store.set_credential("")
        assert store.is_configured() is False

    def test_set_credential(self):
        store = CredentialStore()
        store.set_credential("AIza-test")
        assert store.is_configured() is True
        assert store.credential == "AIza-test"

    def test_listeners_notified(self):
        store = CredentialStore()
        seen = []
        store.subscribe(seen.append)

        store.set_credential("one")
        store.set_credential("two")

        assert seen == ["one", "two"]


class TestCredentialFile:
    def test_missing_file_loads_none(self, tmp_path):
        assert CredentialFile(tmp_path / "creds.json").load("gemini_api_key") is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "creds.json"
        store = CredentialFile(path)

        store.save("gemini_api_key", "AIza-1")
        store.save("openai_api_key", "sk-2")

        assert store.load("gemini_api_key") == "AIza-1"
        assert json.loads(path.read_text()) == {"gemini_api_key": "AIza-1", "openai_api_key": "sk-2"}
        assert path.stat().st_mode & 0o777 == 0o600

    def test_overwrite(self, tmp_path):
        store = CredentialFile(tmp_path / "creds.json")
        store.save("gemini_api_key", "old")
        store.save("gemini_api_key", "new")
        assert store.load("gemini_api_key") == "new"

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "creds.json"
        path.write_text("{not json")

        with pytest.raises(RuntimeError, match="not valid JSON"):
            CredentialFile(path).load("gemini_api_key")

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "creds.json"
        path.write_text("[]")

        with pytest.raises(RuntimeError, match="JSON object"):
            CredentialFile(path).load("gemini_api_key")


def test_credential_key():
    assert credential_key("gemini") == "gemini_api_key"
