"""
JSON file persistence for the playbook library.

The store file is a flat key/value document:

    {
        "playbooks": [ <playbook record>, ... ],
        "currentPlaybookId": "<id>"
    }

Older editors saved a bare list of plays under "savedPlays" with the
grid column names under "columnNames". That layout is upgraded into a
single playbook the first time it is loaded and the old keys are removed.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Optional

from chalktalk.core.models import (
    GridConfig,
    Play,
    Playbook,
    PlaybookLibrary,
    new_id,
    one_play_per_cell,
)

logger = logging.getLogger(__name__)

PLAYBOOKS_KEY = "playbooks"
CURRENT_PLAYBOOK_KEY = "currentPlaybookId"
LEGACY_PLAYS_KEY = "savedPlays"
LEGACY_COLUMNS_KEY = "columnNames"


class PlaybookStore:
    """
    Reads and writes the playbook library to a JSON file.

    Writes replace the whole document; the last writer wins.
    """

    def __init__(self, path: Path, default_playbook_name: str = "My Playbook"):
        self.path = Path(path)
        self.default_playbook_name = default_playbook_name

    def _backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            backup = self._backup_path()
            logger.warning(f"Unreadable store {self.path} ({e}), moved to {backup}")
            self.path.replace(backup)
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self.path}: expected an object")
            return {}
        return data

    def _keep_backup(self, skipped: int) -> None:
        backup = self._backup_path()
        logger.warning(f"Skipped {skipped} malformed records in {self.path}, original kept at {backup}")
        shutil.copyfile(self.path, backup)

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(self.path)

    def _parse_playbooks(self, records: list) -> tuple[list[Playbook], int]:
        playbooks = []
        skipped = 0
        for record in records:
            try:
                playbooks.append(Playbook.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
                logger.warning(f"Skipping malformed playbook record: {e}")
                skipped += 1
        return playbooks, skipped

    def _upgrade_legacy(self, data: dict) -> tuple[PlaybookLibrary, int]:
        plays = []
        skipped = 0
        for record in data.get(LEGACY_PLAYS_KEY) or []:
            try:
                plays.append(Play.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
                logger.warning(f"Skipping malformed legacy play: {e}")
                skipped += 1

        columns = data.get(LEGACY_COLUMNS_KEY)
        grid = GridConfig(tuple(str(c) for c in columns)) if columns else GridConfig()
        playbook = Playbook(
            id=new_id(),
            name=self.default_playbook_name,
            plays=one_play_per_cell(tuple(plays)),
            grid_config=grid,
        )
        logger.info(f"Upgraded legacy store with {len(plays)} plays into '{playbook.name}'")
        return PlaybookLibrary.single(playbook), skipped

    def load(self) -> PlaybookLibrary:
        """
        Load the library, upgrading or initializing the file as needed.

        A missing or empty store yields a library with one empty playbook.
        If any record had to be skipped, the file as found is copied to
        "<name>.corrupt" before anything is written over it.
        """
        data = self._read()
        skipped = 0

        if PLAYBOOKS_KEY in data:
            playbooks, skipped = self._parse_playbooks(data.get(PLAYBOOKS_KEY) or [])
            if skipped:
                self._keep_backup(skipped)
            if playbooks:
                library = PlaybookLibrary(
                    playbooks=tuple(playbooks),
                    current_playbook_id=str(data.get(CURRENT_PLAYBOOK_KEY) or ""),
                )
                logger.info(f"Loaded {len(playbooks)} playbooks from {self.path}")
                return library

        if LEGACY_PLAYS_KEY in data:
            library, legacy_skipped = self._upgrade_legacy(data)
            if legacy_skipped and not skipped:
                self._keep_backup(legacy_skipped)
        else:
            library = PlaybookLibrary.single(Playbook.create(self.default_playbook_name))
            logger.info(f"Starting new library at {self.path}")

        self.save(library, base=data)
        return library

    def save(self, library: PlaybookLibrary, base: Optional[dict] = None) -> None:
        """Write the library, dropping any legacy keys."""
        data = dict(base if base is not None else self._read())
        data.pop(LEGACY_PLAYS_KEY, None)
        data.pop(LEGACY_COLUMNS_KEY, None)
        data[PLAYBOOKS_KEY] = [pb.to_dict() for pb in library.playbooks]
        data[CURRENT_PLAYBOOK_KEY] = library.current_playbook_id
        self._write(data)
