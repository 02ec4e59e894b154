"""Tests for the per-repository login cache."""

import os
import stat

import pytest

from nexus_push.credentials import (
    CacheFileError,
    FileCredentialStore,
    InvalidCredentialError,
    ResolutionContext,
    ResolvedCredential,
)


class TestFileCredentialStore:
    """Test FileCredentialStore functionality."""

    @pytest.fixture
    def store(self, tmp_path):
        """Create a store rooted in a temporary directory."""
        return FileCredentialStore(tmp_path)

    def test_store_name(self, store):
        assert store.name == "cache"

    def test_path_for(self, store, tmp_path):
        assert store.path_for("nexus") == tmp_path / "auth.nexus"

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "..\\evil"])
    def test_path_for_rejects_unsafe_names(self, store, name):
        with pytest.raises(CacheFileError):
            store.path_for(name)

    def test_save_and_load(self, store):
        store.save("nexus", "a", "b")

        assert store.load("nexus") == ResolvedCredential(username="a", password="b", source="cache")

    def test_file_format(self, store, tmp_path):
        store.save("nexus", "alice", "secret")

        assert (tmp_path / "auth.nexus").read_text() == "alice:secret\n"

    def test_save_overwrites(self, store):
        store.save("nexus", "old", "old-pass")
        store.save("nexus", "new", "new-pass")

        assert store.load("nexus").as_auth() == ("new", "new-pass")

    def test_password_may_contain_colon(self, store):
        store.save("nexus", "alice", "pa:ss:word")

        assert store.load("nexus").as_auth() == ("alice", "pa:ss:word")

    def test_username_with_colon_rejected(self, store, tmp_path):
        with pytest.raises(InvalidCredentialError, match="cannot contain ':'") as exc_info:
            store.save("nexus", "al:ice", "secret")

        assert exc_info.value.repo == "nexus"
        assert exc_info.value.suggestion
        assert not (tmp_path / "auth.nexus").exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_permissions(self, store, tmp_path):
        store.save("nexus", "alice", "secret")

        mode = stat.S_IMODE((tmp_path / "auth.nexus").stat().st_mode)
        assert mode == 0o600

    def test_save_missing_directory_raises(self, tmp_path):
        store = FileCredentialStore(tmp_path / "does-not-exist")

        with pytest.raises(CacheFileError) as exc_info:
            store.save("nexus", "alice", "secret")

        assert exc_info.value.repo == "nexus"
        assert exc_info.value.source == "cache"

    def test_load_missing_returns_none(self, store):
        assert store.load("nexus") is None

    def test_load_without_separator_returns_none(self, store, tmp_path):
        (tmp_path / "auth.nexus").write_text("just-a-token\n")

        assert store.load("nexus") is None

    def test_load_empty_file_returns_none(self, store, tmp_path):
        (tmp_path / "auth.nexus").write_text("")

        assert store.load("nexus") is None

    def test_load_reads_first_line_only(self, store, tmp_path):
        (tmp_path / "auth.nexus").write_text("alice:secret\nleftover:line\n")

        assert store.load("nexus").as_auth() == ("alice", "secret")

    def test_load_unreadable_raises(self, store, tmp_path):
        (tmp_path / "auth.nexus").mkdir()

        with pytest.raises(CacheFileError):
            store.load("nexus")

    def test_clear_then_load(self, store):
        store.save("nexus", "a", "b")

        assert store.clear("nexus") is True
        assert store.load("nexus") is None

    def test_clear_missing_is_not_an_error(self, store, tmp_path):
        assert store.clear("nexus") is False
        assert list(tmp_path.iterdir()) == []

    def test_repositories_are_independent(self, store):
        store.save("nexus", "alice", "one")
        store.save("other", "bob", "two")
        store.clear("other")

        assert store.load("nexus").as_auth() == ("alice", "one")
        assert store.load("other") is None

    def test_lookup(self, store):
        store.save("nexus", "alice", "secret")

        credential = store.lookup(ResolutionContext(repo="nexus"))

        assert credential.source == "cache"
        assert credential.as_auth() == ("alice", "secret")

    def test_lookup_miss(self, store):
        assert store.lookup(ResolutionContext(repo="nexus")) is None
