"""Tests for play, grid and library operations."""

import json

import pytest

from chalktalk.core.errors import ImportParseError, LastPlaybookError
from chalktalk.core.models import GridPosition, Playbook, PlaybookLibrary
from chalktalk.core.playbook import (
    add_column,
    assign_play_to_cell,
    copy_play,
    copy_playbook,
    create_play,
    create_playbook,
    delete_play,
    delete_playbook,
    duplicate_play,
    duplicate_playbook,
    grid_cells,
    import_document,
    remove_column,
    rename_column,
    rename_playbook,
    select_playbook,
    unassign_play,
)


def _all_ids(playbook: Playbook) -> set[str]:
    ids = {playbook.id}
    for play in playbook.plays:
        ids.add(play.id)
        for player in play.players:
            ids.add(player.id)
            ids.update(route.id for route in player.routes)
    return ids


# =============================================================================
# Plays
# =============================================================================

class TestPlays:
    """Tests for play CRUD."""

    def test_create_play_default_name(self):
        playbook = Playbook.create("Empty")
        playbook, play = create_play(playbook)
        assert play.name == "Play 1"
        playbook, play = create_play(playbook)
        assert play.name == "Play 2"
        assert playbook.play_count == 2

    def test_create_play_lineup(self):
        _, play = create_play(Playbook.create("Empty"), "Mesh")
        assert play.name == "Mesh"
        assert [p.role for p in play.players] == ["C", "QB", "WR-L", "WR-R", "SR"]
        assert play.grid_position is None

    def test_delete_play(self, playbook_with_plays):
        play = playbook_with_plays.plays[1]
        playbook = delete_play(playbook_with_plays, play.id)
        assert not playbook.has_play(play.id)
        assert playbook.play_count == 2

    def test_delete_unknown_is_noop(self, playbook_with_plays):
        assert delete_play(playbook_with_plays, "ghost") is playbook_with_plays

    def test_copy_play_fresh_ids(self, playbook_with_plays):
        original = playbook_with_plays.plays[0]
        copy = copy_play(original)
        assert copy.name == "Spider 2 Y Banana (Copy)"
        assert copy.id != original.id
        assert not {p.id for p in copy.players} & {p.id for p in original.players}
        assert [p.position for p in copy.players] == [p.position for p in original.players]

    def test_copy_play_is_unplaced(self, playbook_with_plays):
        placed = assign_play_to_cell(playbook_with_plays, playbook_with_plays.plays[0].id, 0, 0)
        assert copy_play(placed.plays[0]).grid_position is None

    def test_duplicate_play(self, playbook_with_plays):
        playbook, duplicate = duplicate_play(playbook_with_plays, playbook_with_plays.plays[0].id)
        assert playbook.play_count == 4
        assert playbook.plays[-1] == duplicate

    def test_duplicate_unknown(self, playbook_with_plays):
        playbook, duplicate = duplicate_play(playbook_with_plays, "ghost")
        assert duplicate is None
        assert playbook is playbook_with_plays


# =============================================================================
# Grid
# =============================================================================

class TestGrid:
    """Tests for call-sheet grid placement."""

    def test_assign(self, playbook_with_plays):
        play = playbook_with_plays.plays[0]
        playbook = assign_play_to_cell(playbook_with_plays, play.id, 2, 1)
        assert playbook.get_play(play.id).grid_position == GridPosition(2, 1)
        assert grid_cells(playbook)[(2, 1)].id == play.id

    def test_assign_evicts_occupant(self, playbook_with_plays):
        first, second = playbook_with_plays.plays[:2]
        playbook = assign_play_to_cell(playbook_with_plays, first.id, 0, 0)
        playbook = assign_play_to_cell(playbook, second.id, 0, 0)
        assert playbook.get_play(first.id).grid_position is None
        assert playbook.get_play(second.id).grid_position == GridPosition(0, 0)

    def test_one_play_per_cell(self, playbook_with_plays):
        playbook = playbook_with_plays
        for play in playbook.plays:
            playbook = assign_play_to_cell(playbook, play.id, 1, 3)
        cells = [p.grid_position for p in playbook.plays if p.grid_position is not None]
        assert cells == [GridPosition(1, 3)]

    def test_move_between_cells(self, playbook_with_plays):
        play = playbook_with_plays.plays[0]
        playbook = assign_play_to_cell(playbook_with_plays, play.id, 0, 0)
        playbook = assign_play_to_cell(playbook, play.id, 3, 2)
        assert grid_cells(playbook) == {(3, 2): playbook.get_play(play.id)}

    @pytest.mark.parametrize("row,column", [(-1, 0), (0, -1), (0, 4)])
    def test_out_of_grid_is_rejected(self, playbook_with_plays, row, column):
        play = playbook_with_plays.plays[0]
        assert assign_play_to_cell(playbook_with_plays, play.id, row, column) is playbook_with_plays

    def test_unassign(self, playbook_with_plays):
        play = playbook_with_plays.plays[0]
        playbook = assign_play_to_cell(playbook_with_plays, play.id, 0, 0)
        playbook = unassign_play(playbook, play.id)
        assert playbook.get_play(play.id).grid_position is None

    def test_rename_column(self, playbook_with_plays):
        playbook = rename_column(playbook_with_plays, 1, "3rd Down")
        assert playbook.grid_config.column_names[1] == "3rd Down"
        assert rename_column(playbook_with_plays, 9, "x") is playbook_with_plays

    def test_add_column(self, playbook_with_plays):
        playbook = add_column(playbook_with_plays)
        assert playbook.grid_config.column_names[-1] == "Column 5"
        assert add_column(playbook, "Goal Line").grid_config.column_names[-1] == "Goal Line"

    def test_remove_column_shifts_plays(self, playbook_with_plays):
        first, second, third = playbook_with_plays.plays
        playbook = assign_play_to_cell(playbook_with_plays, first.id, 0, 0)
        playbook = assign_play_to_cell(playbook, second.id, 0, 1)
        playbook = assign_play_to_cell(playbook, third.id, 0, 3)

        playbook = remove_column(playbook, 1)
        assert playbook.grid_config.column_names == ("Column 1", "Column 3", "Column 4")
        assert playbook.get_play(first.id).grid_position == GridPosition(0, 0)
        assert playbook.get_play(second.id).grid_position is None
        assert playbook.get_play(third.id).grid_position == GridPosition(0, 2)

    def test_cannot_remove_last_column(self):
        playbook = Playbook.create("Narrow", column_names=("Only",))
        assert remove_column(playbook, 0) is playbook


# =============================================================================
# Library
# =============================================================================

class TestLibrary:
    """Tests for playbook library operations."""

    def test_create_playbook_becomes_current(self, library):
        library, playbook = create_playbook(library, "Two Minute")
        assert library.current_playbook_id == playbook.id
        assert len(library.playbooks) == 3

    def test_select_playbook(self, library):
        other = library.playbooks[1]
        assert select_playbook(library, other.id).current.id == other.id
        assert select_playbook(library, "ghost") is library

    def test_rename_playbook(self, library):
        playbook = library.playbooks[1]
        renamed = rename_playbook(library, playbook.id, "Goal Line")
        assert renamed.get_playbook(playbook.id).name == "Goal Line"

    def test_copy_playbook_fresh_ids(self, playbook_with_plays):
        copy = copy_playbook(playbook_with_plays)
        assert copy.name == "Base Offense (Copy)"
        assert not _all_ids(copy) & _all_ids(playbook_with_plays)
        assert copy.play_count == playbook_with_plays.play_count

    def test_copy_playbook_is_unplaced(self, playbook_with_plays):
        placed = assign_play_to_cell(playbook_with_plays, playbook_with_plays.plays[0].id, 1, 2)
        placed = rename_column(placed, 0, "Openers")
        copy = copy_playbook(placed)
        assert copy.plays[0].grid_position is None
        assert copy.grid_config == placed.grid_config

    def test_duplicate_playbook_keeps_current(self, library):
        updated, duplicate = duplicate_playbook(library, library.playbooks[0].id)
        assert updated.playbooks[-1] == duplicate
        assert updated.current_playbook_id == library.current_playbook_id

    def test_delete_playbook(self, library):
        other = library.playbooks[1]
        updated = delete_playbook(library, other.id)
        assert updated.get_playbook(other.id) is None

    def test_delete_current_selects_first_remaining(self, library):
        current = library.current
        updated = delete_playbook(library, current.id)
        assert updated.current_playbook_id == library.playbooks[1].id

    def test_cannot_delete_last_playbook(self):
        library = PlaybookLibrary.single(Playbook.create("Only"))
        with pytest.raises(LastPlaybookError):
            delete_playbook(library, library.current_playbook_id)

    def test_library_requires_a_playbook(self):
        with pytest.raises(ValueError):
            PlaybookLibrary(playbooks=(), current_playbook_id="")

    def test_unknown_current_falls_back_to_first(self, playbook_with_plays):
        library = PlaybookLibrary(playbooks=(playbook_with_plays,), current_playbook_id="ghost")
        assert library.current_playbook_id == playbook_with_plays.id


# =============================================================================
# Import
# =============================================================================

class TestImport:
    """Tests for merging exported documents."""

    def test_single_playbook(self, library, playbook_with_plays):
        document = json.dumps(playbook_with_plays.to_dict())
        updated, count = import_document(library, document)
        assert count == 3
        assert len(updated.playbooks) == 3
        imported = updated.playbooks[-1]
        assert imported.name == "Base Offense"
        assert not _all_ids(imported) & _all_ids(playbook_with_plays)

    def test_list_of_playbooks(self, library, playbook_with_plays):
        document = [playbook_with_plays.to_dict(), Playbook.create("Empty").to_dict()]
        updated, count = import_document(library, document)
        assert count == 3
        assert len(updated.playbooks) == 4
        assert updated.current_playbook_id == library.current_playbook_id

    def test_bare_play_list_goes_to_current(self, library, playbook_with_plays):
        placed = assign_play_to_cell(playbook_with_plays, playbook_with_plays.plays[0].id, 0, 0)
        document = json.dumps([p.to_dict() for p in placed.plays])

        updated, count = import_document(library, document)
        assert count == 3
        assert len(updated.playbooks) == 2
        current = updated.current
        assert current.play_count == 6
        for play in current.plays[3:]:
            assert play.grid_position is None
        assert not {p.id for p in current.plays[3:]} & {p.id for p in placed.plays}

    def test_grid_config_preserved_for_playbooks(self, library):
        playbook = Playbook.create("Custom", column_names=("Run", "Pass"))
        updated, _ = import_document(library, playbook.to_dict())
        assert updated.playbooks[-1].grid_config.column_names == ("Run", "Pass")

    @pytest.mark.parametrize("document", [
        "not json",
        '{"name": "no plays"}',
        "42",
        "[1, 2]",
        '[{"name": "missing players"}]',
        '{"plays": [{"players": [{"id": "p1"}]}]}',
    ])
    def test_malformed_documents(self, library, document):
        with pytest.raises(ImportParseError):
            import_document(library, document)

    def test_failed_import_leaves_library(self, library):
        before = [pb.to_dict() for pb in library.playbooks]
        with pytest.raises(ImportParseError):
            import_document(library, "{")
        assert [pb.to_dict() for pb in library.playbooks] == before

    def test_out_of_range_timestamps_fall_back(self, library):
        document = json.dumps({"name": "Old", "plays": [], "createdAt": 1e300, "updatedAt": -1e300})
        updated, count = import_document(library, document)
        assert count == 0
        imported = updated.playbooks[-1]
        assert imported.name == "Old"
        assert isinstance(imported.created_at, str)
        assert isinstance(imported.updated_at, str)

    def test_oversized_coordinate_rejected(self, library):
        huge = "1" + "0" * 400
        document = (
            '{"name": "Deep", "plays": [{"name": "p", "players": '
            '[{"role": "QB", "position": {"x": ' + huge + ', "y": 0}}]}]}'
        )
        with pytest.raises(ImportParseError):
            import_document(library, document)

    def test_shared_cell_keeps_last_play(self, library, playbook_with_plays):
        data = playbook_with_plays.to_dict()
        for play in data["plays"][:2]:
            play["gridPosition"] = {"row": 0, "column": 0}

        updated, _ = import_document(library, data)
        imported = updated.playbooks[-1]
        assert imported.plays[0].grid_position is None
        assert imported.plays[1].grid_position == GridPosition(0, 0)
        assert len(grid_cells(imported)) == 1
