"""
Tests for CredentialStore - local settings.json persistence.
"""

import json
from pathlib import Path

from kassistant.adapters.credential_store import CredentialStore, SavedCredentials


class TestCredentialStore:
    """Load / save / clear."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        saved = CredentialStore(tmp_path).load()

        assert saved.server_url == "http://localhost:5000"
        assert saved.username == ""
        assert saved.remember_credentials is False

    def test_save_then_load(self, tmp_path: Path):
        store = CredentialStore(tmp_path / "nested")
        store.save(
            SavedCredentials(
                server_url="http://nas:5000",
                username="admin",
                password="pw",
                remember_credentials=True,
            )
        )

        saved = store.load()

        assert saved.server_url == "http://nas:5000"
        assert saved.username == "admin"
        assert saved.remember_credentials is True

    def test_file_uses_camel_case_keys(self, tmp_path: Path):
        store = CredentialStore(tmp_path)
        store.save(SavedCredentials(username="admin", remember_credentials=True))

        data = json.loads(store.path.read_text(encoding="utf-8"))

        assert data["rememberCredentials"] is True
        assert data["serverUrl"] == "http://localhost:5000"

    def test_reads_pascal_case_file(self, tmp_path: Path):
        (tmp_path / "settings.json").write_text(
            json.dumps({"ServerUrl": "http://nas:5000", "Username": "bob", "RememberCredentials": True}),
            encoding="utf-8",
        )

        saved = CredentialStore(tmp_path).load()

        assert saved.username == "bob"
        assert saved.remember_credentials is True

    def test_corrupt_file_gives_defaults(self, tmp_path: Path):
        (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")

        assert CredentialStore(tmp_path).load() == SavedCredentials()

    def test_clear_removes_file(self, tmp_path: Path):
        store = CredentialStore(tmp_path)
        store.save(SavedCredentials(username="admin"))

        store.clear()
        store.clear()

        assert not store.path.exists()
