"""Tests for JSON file persistence of the playbook library."""

import json

import pytest

from chalktalk.core.models import Playbook, PlaybookLibrary
from chalktalk.core.playbook import create_play, create_playbook
from chalktalk.storage import PlaybookStore
from chalktalk.storage.store import (
    CURRENT_PLAYBOOK_KEY,
    LEGACY_COLUMNS_KEY,
    LEGACY_PLAYS_KEY,
    PLAYBOOKS_KEY,
)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "playbooks.json"


@pytest.fixture
def store(store_path) -> PlaybookStore:
    return PlaybookStore(store_path)


class TestLoad:
    """Tests for loading and initializing the store."""

    def test_missing_file_starts_default_playbook(self, store, store_path):
        library = store.load()
        assert len(library.playbooks) == 1
        assert library.current.name == "My Playbook"
        assert library.current.play_count == 0
        # The new library is written immediately
        data = json.loads(store_path.read_text())
        assert data[CURRENT_PLAYBOOK_KEY] == library.current_playbook_id

    def test_custom_default_name(self, store_path):
        library = PlaybookStore(store_path, default_playbook_name="Playbook").load()
        assert library.current.name == "Playbook"

    def test_save_then_load(self, store, library):
        store.save(library)
        loaded = store.load()
        assert loaded.current_playbook_id == library.current_playbook_id
        assert [pb.to_dict() for pb in loaded.playbooks] == [pb.to_dict() for pb in library.playbooks]

    def test_unknown_current_id_falls_back(self, store, store_path, playbook_with_plays):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            PLAYBOOKS_KEY: [playbook_with_plays.to_dict()],
            CURRENT_PLAYBOOK_KEY: "deleted-elsewhere",
        }))
        assert store.load().current_playbook_id == playbook_with_plays.id

    def test_malformed_records_skipped(self, store, store_path, playbook_with_plays):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            PLAYBOOKS_KEY: [{"name": "broken"}, playbook_with_plays.to_dict()],
        }))
        library = store.load()
        assert [pb.id for pb in library.playbooks] == [playbook_with_plays.id]

    def test_unreadable_records_backed_up(self, store, store_path):
        """A store whose only record is broken is kept aside before being replaced."""
        store_path.parent.mkdir(parents=True)
        original = json.dumps({
            PLAYBOOKS_KEY: [{"name": "Mine", "plays": [{"name": "p", "players": [{"role": "QB"}]}]}],
        })
        store_path.write_text(original)

        library = store.load()
        assert library.current.name == "My Playbook"
        assert store_path.with_name("playbooks.json.corrupt").read_text() == original

    def test_partial_load_backed_up(self, store, store_path, playbook_with_plays):
        store_path.parent.mkdir(parents=True)
        original = json.dumps({PLAYBOOKS_KEY: [{"name": "broken"}, playbook_with_plays.to_dict()]})
        store_path.write_text(original)

        store.load()
        assert store_path.with_name("playbooks.json.corrupt").read_text() == original

    def test_clean_load_makes_no_backup(self, store, store_path, playbook_with_plays):
        store.save(PlaybookLibrary.single(playbook_with_plays))
        store.load()
        assert not store_path.with_name("playbooks.json.corrupt").exists()

    def test_corrupt_file_is_set_aside(self, store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json")
        library = store.load()
        assert library.current.name == "My Playbook"
        assert store_path.with_name("playbooks.json.corrupt").read_text() == "{not json"


class TestLegacyUpgrade:
    """Tests for upgrading the single-list layout."""

    def test_saved_plays_become_a_playbook(self, store, store_path, playbook_with_plays):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            LEGACY_PLAYS_KEY: [p.to_dict() for p in playbook_with_plays.plays],
            LEGACY_COLUMNS_KEY: ["Base", "Shot"],
        }))

        library = store.load()
        playbook = library.current
        assert playbook.name == "My Playbook"
        assert [p.id for p in playbook.plays] == [p.id for p in playbook_with_plays.plays]
        assert playbook.grid_config.column_names == ("Base", "Shot")

        data = json.loads(store_path.read_text())
        assert LEGACY_PLAYS_KEY not in data
        assert LEGACY_COLUMNS_KEY not in data
        assert len(data[PLAYBOOKS_KEY]) == 1

    def test_playbooks_key_wins_over_legacy(self, store, store_path, playbook_with_plays):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            PLAYBOOKS_KEY: [playbook_with_plays.to_dict()],
            LEGACY_PLAYS_KEY: [],
        }))
        assert store.load().current.id == playbook_with_plays.id


class TestSave:
    """Tests for writing the library."""

    def test_unrelated_keys_preserved(self, store, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"theme": "dark"}))
        library = store.load()

        library, _ = create_playbook(library, "Second")
        store.save(library)
        data = json.loads(store_path.read_text())
        assert data["theme"] == "dark"
        assert len(data[PLAYBOOKS_KEY]) == 2

    def test_save_writes_plays(self, store, store_path):
        playbook, _ = create_play(Playbook.create("Quick"), "Stick")
        store.save(PlaybookLibrary.single(playbook))
        data = json.loads(store_path.read_text())
        assert data[PLAYBOOKS_KEY][0]["plays"][0]["name"] == "Stick"
        assert not store_path.with_name("playbooks.json.tmp").exists()
