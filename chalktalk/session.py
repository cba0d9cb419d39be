"""
Editing session.

An EditorSession holds everything that lives for the duration of one
editing session: the playbook library, which play and player are
selected, and the modal states (drawing a route, picking a motion
target). UI collaborators call its action methods in response to clicks
and keys; each action applies a pure core operation and, when state
changed, writes the library back to the store.

Actions that need a selection (a current play, a selected player) are
no-ops without one. Actions that can be rejected return an ActionReport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from chalktalk.core import editing, formations
from chalktalk.core import playbook as playbook_ops
from chalktalk.core.enums import FormationSide, Role, RouteLayer, RoutePreset, parse_enum
from chalktalk.core.errors import ImportParseError, LastPlaybookError
from chalktalk.core.field import clamp_point
from chalktalk.core.models import Play, Playbook, PlaybookLibrary, Player, Point
from chalktalk.storage.transfer import (
    IMPORT_FAILED_MESSAGE,
    export_document,
    export_filename,
    import_success_message,
    read_import_file,
)

logger = logging.getLogger(__name__)


class LibraryStore(Protocol):
    def load(self) -> PlaybookLibrary: ...

    def save(self, library: PlaybookLibrary) -> None: ...


@dataclass
class ActionReport:
    """Outcome of an action the user should be told about."""
    success: bool
    message: str = ""


@dataclass
class DrawingState:
    """A route being drawn point by point."""
    player_id: str
    layer: RouteLayer
    points: list[Point] = field(default_factory=list)


class EditorSession:
    """
    Selection and modal state for one editing session.

    Attributes:
        library: All playbooks, one of them current
        current_play_id: Play open on the field, in the current playbook
        selected_player_id: Player selected on that play
        active_layer: Layer new routes are installed on
        drawing: In-progress hand-drawn route, None when not drawing
        is_setting_motion: Waiting for a click on the motion target
    """

    def __init__(self, library: PlaybookLibrary, store: Optional[LibraryStore] = None):
        self.library = library
        self.store = store
        self.current_play_id: Optional[str] = None
        self.selected_player_id: Optional[str] = None
        self.active_layer = RouteLayer.PRIMARY
        self.drawing: Optional[DrawingState] = None
        self.is_setting_motion = False

    @classmethod
    def open(cls, store: LibraryStore) -> EditorSession:
        """Start a session from persisted state."""
        return cls(store.load(), store=store)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def playbook(self) -> Playbook:
        return self.library.current

    @property
    def current_play(self) -> Optional[Play]:
        if self.current_play_id is None:
            return None
        return self.playbook.get_play(self.current_play_id)

    @property
    def selected_player(self) -> Optional[Player]:
        play = self.current_play
        if play is None or self.selected_player_id is None:
            return None
        return play.get_player(self.selected_player_id)

    @property
    def is_drawing(self) -> bool:
        return self.drawing is not None

    def to_dict(self) -> dict:
        """Selection and mode snapshot for clients."""
        play = self.current_play
        return {
            "currentPlaybookId": self.library.current_playbook_id,
            "currentPlayId": play.id if play else None,
            "selectedPlayerId": self.selected_player_id if self.selected_player else None,
            "activeLayer": self.active_layer.value,
            "isDrawing": self.is_drawing,
            "drawingLayer": self.drawing.layer.value if self.drawing else None,
            "drawingPoints": [p.to_dict() for p in self.drawing.points] if self.drawing else [],
            "isSettingMotion": self.is_setting_motion,
            "play": play.to_dict() if play else None,
        }

    def _commit(self, library: PlaybookLibrary) -> None:
        self.library = library
        if self.store is not None:
            self.store.save(library)

    def _commit_playbook(self, playbook: Playbook) -> None:
        self._commit(self.library.replace_playbook(playbook))

    def _edit_play(self, operation: Callable[..., Play], *args) -> bool:
        play = self.current_play
        if play is None:
            logger.debug(f"{operation.__name__} ignored: no play selected")
            return False
        updated = operation(play, *args)
        if updated is play:
            return False
        self._commit_playbook(self.playbook.replace_play(updated))
        return True

    def _edit_selected(self, operation: Callable[..., Play], *args) -> bool:
        if self.selected_player is None:
            logger.debug(f"{operation.__name__} ignored: no player selected")
            return False
        return self._edit_play(operation, self.selected_player_id, *args)

    def _clear_selection(self) -> None:
        self.current_play_id = None
        self.selected_player_id = None
        self.cancel()

    # =========================================================================
    # Playbooks
    # =========================================================================

    def new_playbook(self, name: str) -> Playbook:
        library, playbook = playbook_ops.create_playbook(self.library, name)
        self._commit(library)
        self._clear_selection()
        return playbook

    def select_playbook(self, playbook_id: str) -> bool:
        if self.library.get_playbook(playbook_id) is None:
            return False
        if playbook_id != self.library.current_playbook_id:
            self._commit(playbook_ops.select_playbook(self.library, playbook_id))
            self._clear_selection()
        return True

    def rename_playbook(self, playbook_id: str, name: str) -> bool:
        library = playbook_ops.rename_playbook(self.library, playbook_id, name)
        if library is self.library:
            return False
        self._commit(library)
        return True

    def copy_playbook(self, playbook_id: str) -> Optional[Playbook]:
        library, duplicate = playbook_ops.duplicate_playbook(self.library, playbook_id)
        if duplicate is not None:
            self._commit(library)
        return duplicate

    def delete_playbook(self, playbook_id: str) -> ActionReport:
        was_current = playbook_id == self.library.current_playbook_id
        try:
            library = playbook_ops.delete_playbook(self.library, playbook_id)
        except LastPlaybookError as e:
            logger.warning(f"Rejected playbook deletion: {e}")
            return ActionReport(False, str(e))
        if library is self.library:
            return ActionReport(False, "Playbook not found")
        self._commit(library)
        if was_current:
            self._clear_selection()
        return ActionReport(True, "Playbook deleted")

    # =========================================================================
    # Plays
    # =========================================================================

    def new_play(self, name: Optional[str] = None) -> Play:
        playbook, play = playbook_ops.create_play(self.playbook, name)
        self._commit_playbook(playbook)
        self._clear_selection()
        self.current_play_id = play.id
        return play

    def select_play(self, play_id: str) -> bool:
        if not self.playbook.has_play(play_id):
            return False
        self._clear_selection()
        self.current_play_id = play_id
        return True

    def delete_play(self, play_id: str) -> bool:
        playbook = playbook_ops.delete_play(self.playbook, play_id)
        if playbook is self.playbook:
            return False
        self._commit_playbook(playbook)
        if play_id == self.current_play_id:
            self._clear_selection()
        return True

    def copy_play(self, play_id: str) -> Optional[Play]:
        playbook, duplicate = playbook_ops.duplicate_play(self.playbook, play_id)
        if duplicate is None:
            return None
        self._commit_playbook(playbook)
        self._clear_selection()
        self.current_play_id = duplicate.id
        return duplicate

    def edit_play(self, play_id: str, operation: Callable[..., Play], *args) -> bool:
        """Apply a core operation to any play of the current playbook."""
        play = self.playbook.get_play(play_id)
        if play is None:
            return False
        updated = operation(play, *args)
        if updated is play:
            return False
        self._commit_playbook(self.playbook.replace_play(updated))
        return True

    def rename_play(self, play_id: str, name: str) -> bool:
        return self.edit_play(play_id, editing.rename_play, name)

    def set_play_description(self, play_id: str, description: Optional[str]) -> bool:
        return self.edit_play(play_id, editing.set_description, description)

    def set_ball_position(self, position: Optional[Point]) -> bool:
        return self._edit_play(editing.set_ball_position, position)

    # =========================================================================
    # Grid
    # =========================================================================

    def _edit_playbook(self, operation: Callable[..., Playbook], *args) -> bool:
        playbook = operation(self.playbook, *args)
        if playbook is self.playbook:
            return False
        self._commit_playbook(playbook)
        return True

    def assign_play_to_cell(self, play_id: str, row: int, column: int) -> bool:
        return self._edit_playbook(playbook_ops.assign_play_to_cell, play_id, row, column)

    def unassign_play(self, play_id: str) -> bool:
        return self._edit_playbook(playbook_ops.unassign_play, play_id)

    def rename_column(self, index: int, name: str) -> bool:
        return self._edit_playbook(playbook_ops.rename_column, index, name)

    def add_column(self, name: Optional[str] = None) -> bool:
        return self._edit_playbook(playbook_ops.add_column, name)

    def remove_column(self, index: int) -> bool:
        return self._edit_playbook(playbook_ops.remove_column, index)

    # =========================================================================
    # Players
    # =========================================================================

    def select_player(self, player_id: Optional[str]) -> bool:
        play = self.current_play
        if player_id is not None and (play is None or play.get_player(player_id) is None):
            return False
        self.selected_player_id = player_id
        return True

    def pick_player(self, player_id: str) -> bool:
        """
        A click on a player token.

        In motion-targeting mode the clicked player becomes the motion
        target of the selected player. While drawing, clicks on tokens
        are ignored. Otherwise the player is selected.
        """
        if self.is_setting_motion:
            changed = self._edit_selected(editing.set_motion, player_id)
            self.is_setting_motion = False
            return changed
        if self.is_drawing:
            return False
        return self.select_player(player_id)

    def add_player(self) -> Optional[Player]:
        player = formations.new_field_player()
        if not self._edit_play(editing.add_player, player):
            return None
        self.selected_player_id = player.id
        return player

    def remove_player(self, player_id: str) -> bool:
        changed = self._edit_play(editing.remove_player, player_id)
        if changed and player_id == self.selected_player_id:
            self.selected_player_id = None
            self.cancel()
        return changed

    def update_player(self, label: Optional[str] = None, color: Optional[str] = None) -> bool:
        return self._edit_selected(editing.update_player, label, color)

    def move_player(self, position: Point) -> bool:
        return self._edit_selected(editing.move_player, position)

    def set_position(self, role: Union[str, Role]) -> bool:
        return self._edit_selected(formations.set_player_to_role, role)

    def apply_formation(self, side: Union[str, FormationSide]) -> bool:
        return self._edit_play(formations.apply_formation, side)

    # =========================================================================
    # Routes
    # =========================================================================

    def set_active_layer(self, layer: Union[str, RouteLayer]) -> bool:
        resolved = parse_enum(RouteLayer, layer)
        if resolved is None:
            return False
        self.active_layer = resolved
        return True

    def apply_route(self, preset: Union[str, RoutePreset]) -> bool:
        return self._edit_selected(editing.apply_route_preset, self.active_layer, preset)

    def clear_routes(self) -> bool:
        return self._edit_selected(editing.clear_routes)

    def start_drawing(self) -> bool:
        player = self.selected_player
        if player is None:
            return False
        self.is_setting_motion = False
        self.drawing = DrawingState(
            player_id=player.id,
            layer=self.active_layer,
            points=[player.route_start],
        )
        return True

    def add_draw_point(self, point: Point) -> bool:
        """
        A click on the field.

        While drawing, the clamped point extends the route. Otherwise the
        click deselects the player.
        """
        if self.drawing is None:
            self.selected_player_id = None
            return False
        self.drawing.points.append(clamp_point(point))
        return True

    def finish_drawing(self) -> bool:
        """Install the drawn route. Drafts under two points are discarded."""
        drawing = self.drawing
        self.drawing = None
        if drawing is None or len(drawing.points) < 2:
            return False
        if self.current_play is None:
            return False
        return self._edit_play(editing.set_route, drawing.player_id, drawing.layer, drawing.points)

    def cancel(self) -> None:
        """Leave drawing and motion-targeting modes."""
        self.drawing = None
        self.is_setting_motion = False

    # =========================================================================
    # Motion
    # =========================================================================

    def toggle_motion_mode(self) -> bool:
        if self.selected_player is None:
            self.is_setting_motion = False
            return False
        self.is_setting_motion = not self.is_setting_motion
        return self.is_setting_motion

    def clear_motion(self) -> bool:
        return self._edit_selected(editing.clear_motion)

    # =========================================================================
    # Keys
    # =========================================================================

    def handle_key(self, key: str) -> None:
        """Enter finishes a drawing; Escape cancels a mode or deselects."""
        if key == "Enter" and self.is_drawing:
            self.finish_drawing()
        elif key == "Escape":
            if self.is_drawing or self.is_setting_motion:
                self.cancel()
            else:
                self.selected_player_id = None

    # =========================================================================
    # Import / Export
    # =========================================================================

    def import_data(self, raw) -> ActionReport:
        """Merge an import document; state is untouched on failure."""
        try:
            library, count = playbook_ops.import_document(self.library, raw)
        except ImportParseError as e:
            logger.warning(f"Import failed: {e}")
            return ActionReport(False, IMPORT_FAILED_MESSAGE)
        self._commit(library)
        return ActionReport(True, import_success_message(count))

    def import_file(self, path: Path) -> ActionReport:
        try:
            raw = read_import_file(path)
        except ImportParseError as e:
            logger.warning(f"Import failed: {e}")
            return ActionReport(False, IMPORT_FAILED_MESSAGE)
        return self.import_data(raw)

    def export_current(self) -> tuple[str, str]:
        """Filename and document for downloading the current playbook."""
        return export_filename(), export_document(self.playbook)
