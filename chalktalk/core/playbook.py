"""
Playbook and library operations.

Plays live in playbooks; playbooks live in a PlaybookLibrary with one
marked current. All operations are copy-on-write: they return new
playbooks/libraries and never modify their inputs.

Grid layout:
    Each play may sit in one (row, column) cell of its playbook's grid.
    A cell holds at most one play; placing a play on an occupied cell
    unplaces the previous occupant.

Identity:
    Copies and imports always get fresh ids for the play/playbook and
    everything inside it, so they can never collide with existing data.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Optional, Union

from chalktalk.core.errors import ImportParseError, LastPlaybookError
from chalktalk.core.formations import default_players
from chalktalk.core.models import (
    GridConfig,
    GridPosition,
    Play,
    Playbook,
    PlaybookLibrary,
    new_id,
    timestamp,
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


# =============================================================================
# Plays
# =============================================================================

def create_play(playbook: Playbook, name: Optional[str] = None) -> tuple[Playbook, Play]:
    """Add a new play lined up in the default formation."""
    play = Play(
        id=new_id(),
        name=name or f"Play {playbook.play_count + 1}",
        players=default_players(),
    )
    return add_play(playbook, play), play


def add_play(playbook: Playbook, play: Play) -> Playbook:
    return replace(playbook, plays=playbook.plays + (play,), updated_at=timestamp())


def update_play(playbook: Playbook, play: Play) -> Playbook:
    """Store an edited play. Unknown plays leave the playbook unchanged."""
    if not playbook.has_play(play.id):
        return playbook
    return playbook.replace_play(play)


def delete_play(playbook: Playbook, play_id: str) -> Playbook:
    if not playbook.has_play(play_id):
        return playbook
    return replace(
        playbook,
        plays=tuple(p for p in playbook.plays if p.id != play_id),
        updated_at=timestamp(),
    )


def copy_play(play: Play) -> Play:
    """Deep copy of a play with fresh ids. The copy is not placed on the grid."""
    return replace(
        play.with_new_ids(),
        name=f"{play.name}{COPY_SUFFIX}",
        grid_position=None,
    )


def duplicate_play(playbook: Playbook, play_id: str) -> tuple[Playbook, Optional[Play]]:
    """Copy a play into the same playbook."""
    play = playbook.get_play(play_id)
    if play is None:
        return playbook, None
    duplicate = copy_play(play)
    return add_play(playbook, duplicate), duplicate


# =============================================================================
# Grid
# =============================================================================

def grid_cells(playbook: Playbook) -> dict[tuple[int, int], Play]:
    """Map of occupied (row, column) cells to their play."""
    return {
        (p.grid_position.row, p.grid_position.column): p
        for p in playbook.plays
        if p.grid_position is not None
    }


def assign_play_to_cell(playbook: Playbook, play_id: str, row: int, column: int) -> Playbook:
    """
    Place a play in a grid cell.

    Whatever play already occupied the cell is unplaced. Cells outside
    the configured columns, negative rows and unknown plays are ignored.
    """
    if not playbook.has_play(play_id):
        return playbook
    if row < 0 or not 0 <= column < playbook.grid_config.column_count:
        logger.debug(f"Cell ({row}, {column}) is outside the grid of {playbook.name}")
        return playbook

    cell = GridPosition(row=row, column=column)
    plays = []
    for play in playbook.plays:
        if play.id == play_id:
            play = replace(play, grid_position=cell)
        elif play.grid_position == cell:
            play = replace(play, grid_position=None)
        plays.append(play)
    return replace(playbook, plays=tuple(plays), updated_at=timestamp())


def unassign_play(playbook: Playbook, play_id: str) -> Playbook:
    play = playbook.get_play(play_id)
    if play is None or play.grid_position is None:
        return playbook
    return playbook.replace_play(replace(play, grid_position=None))


def rename_column(playbook: Playbook, index: int, name: str) -> Playbook:
    names = list(playbook.grid_config.column_names)
    if not 0 <= index < len(names):
        return playbook
    names[index] = name
    return replace(playbook, grid_config=GridConfig(tuple(names)), updated_at=timestamp())


def add_column(playbook: Playbook, name: Optional[str] = None) -> Playbook:
    names = playbook.grid_config.column_names
    name = name or f"Column {len(names) + 1}"
    return replace(playbook, grid_config=GridConfig(names + (name,)), updated_at=timestamp())


def remove_column(playbook: Playbook, index: int) -> Playbook:
    """
    Drop a grid column.

    Plays in the column are unplaced and plays in later columns shift one
    column left. The last column cannot be removed.
    """
    names = playbook.grid_config.column_names
    if len(names) <= 1 or not 0 <= index < len(names):
        return playbook

    plays = []
    for play in playbook.plays:
        cell = play.grid_position
        if cell is not None and cell.column == index:
            play = replace(play, grid_position=None)
        elif cell is not None and cell.column > index:
            play = replace(play, grid_position=GridPosition(cell.row, cell.column - 1))
        plays.append(play)

    return replace(
        playbook,
        plays=tuple(plays),
        grid_config=GridConfig(names[:index] + names[index + 1:]),
        updated_at=timestamp(),
    )


# =============================================================================
# Library
# =============================================================================

def create_playbook(library: PlaybookLibrary, name: str) -> tuple[PlaybookLibrary, Playbook]:
    """Add an empty playbook and make it current."""
    playbook = Playbook.create(name)
    library = PlaybookLibrary(
        playbooks=library.playbooks + (playbook,),
        current_playbook_id=playbook.id,
    )
    return library, playbook


def select_playbook(library: PlaybookLibrary, playbook_id: str) -> PlaybookLibrary:
    if library.get_playbook(playbook_id) is None:
        return library
    return replace(library, current_playbook_id=playbook_id)


def rename_playbook(library: PlaybookLibrary, playbook_id: str, name: str) -> PlaybookLibrary:
    playbook = library.get_playbook(playbook_id)
    if playbook is None:
        return library
    return library.replace_playbook(replace(playbook, name=name, updated_at=timestamp()))


def copy_playbook(playbook: Playbook) -> Playbook:
    """
    Deep copy of a playbook with fresh ids at every level.

    Plays in the copy start unplaced. Column names are kept.
    """
    now = timestamp()
    duplicate = playbook.with_new_ids()
    return replace(
        duplicate,
        plays=tuple(replace(p, grid_position=None) for p in duplicate.plays),
        name=f"{playbook.name}{COPY_SUFFIX}",
        created_at=now,
        updated_at=now,
    )


def duplicate_playbook(
    library: PlaybookLibrary, playbook_id: str
) -> tuple[PlaybookLibrary, Optional[Playbook]]:
    playbook = library.get_playbook(playbook_id)
    if playbook is None:
        return library, None
    duplicate = copy_playbook(playbook)
    return replace(library, playbooks=library.playbooks + (duplicate,)), duplicate


def delete_playbook(library: PlaybookLibrary, playbook_id: str) -> PlaybookLibrary:
    """
    Remove a playbook.

    Raises:
        LastPlaybookError: If it is the only playbook left

    When the current playbook is deleted the first remaining playbook
    becomes current.
    """
    if library.get_playbook(playbook_id) is None:
        return library
    if len(library.playbooks) == 1:
        raise LastPlaybookError("Cannot delete the last playbook")

    remaining = tuple(pb for pb in library.playbooks if pb.id != playbook_id)
    current_id = library.current_playbook_id
    if current_id == playbook_id:
        current_id = remaining[0].id
    return PlaybookLibrary(playbooks=remaining, current_playbook_id=current_id)


# =============================================================================
# Import
# =============================================================================

def _load_json(raw: Union[str, bytes, bytearray, Any]) -> Any:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ImportParseError(f"Invalid JSON: {e}") from e
    return raw


def _is_playbook_record(item: Any) -> bool:
    return isinstance(item, dict) and "plays" in item


def import_document(library: PlaybookLibrary, raw: Any) -> tuple[PlaybookLibrary, int]:
    """
    Merge an exported document into the library.

    Accepts JSON text or already-decoded data in one of three shapes:
        - a bare list of plays (older exports): appended to the current
          playbook, unplaced
        - a list of playbooks: each appended as a new playbook
        - a single playbook object: appended as a new playbook

    Every id in the document is regenerated before merging.

    Returns:
        Tuple of (new library, number of plays imported)

    Raises:
        ImportParseError: If the document is not one of the shapes above.
            The input library is untouched.
    """
    data = _load_json(raw)

    try:
        if isinstance(data, dict):
            if not _is_playbook_record(data):
                raise ImportParseError("Document is not a playbook")
            playbooks = [Playbook.from_dict(data).with_new_ids()]
            plays = []
        elif isinstance(data, list):
            if data and all(_is_playbook_record(item) for item in data):
                playbooks = [Playbook.from_dict(item).with_new_ids() for item in data]
                plays = []
            else:
                playbooks = []
                plays = [
                    replace(Play.from_dict(item).with_new_ids(), grid_position=None)
                    for item in data
                ]
        else:
            raise ImportParseError(f"Unsupported document type: {type(data).__name__}")
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
        raise ImportParseError(f"Malformed play data: {e}") from e

    if playbooks:
        library = replace(library, playbooks=library.playbooks + tuple(playbooks))
        count = sum(pb.play_count for pb in playbooks)
        logger.info(f"Imported {len(playbooks)} playbooks ({count} plays)")
        return library, count

    current = library.current
    updated = replace(current, plays=current.plays + tuple(plays), updated_at=timestamp())
    logger.info(f"Imported {len(plays)} plays into {current.name}")
    return library.replace_playbook(updated), len(plays)
