"""Playbook export and import files."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from chalktalk.core.errors import ImportParseError
from chalktalk.core.models import Playbook

logger = logging.getLogger(__name__)

IMPORT_FAILED_MESSAGE = "Failed to import playbook. Invalid JSON file."


def export_filename(today: Optional[date] = None) -> str:
    """Download name for an export, stamped with the date."""
    today = today or date.today()
    return f"playbook-{today.isoformat()}.json"


def export_document(playbook: Playbook) -> str:
    """Serialize a playbook for download."""
    return json.dumps(playbook.to_dict(), indent=2)


def write_export(playbook: Playbook, directory: Path, today: Optional[date] = None) -> Path:
    """Write an export file into a directory and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    path.write_text(export_document(playbook))
    logger.info(f"Exported '{playbook.name}' ({playbook.play_count} plays) to {path}")
    return path


def read_import_file(path: Path) -> str:
    """
    Read an import document from disk.

    Raises:
        ImportParseError: If the file cannot be read as text
    """
    try:
        return Path(path).read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ImportParseError(f"Cannot read {path}: {e}") from e


def import_success_message(count: int) -> str:
    return f"Successfully imported {count} plays!"
