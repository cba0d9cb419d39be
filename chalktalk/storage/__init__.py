"""Playbook persistence and file transfer."""

from chalktalk.storage.store import PlaybookStore
from chalktalk.storage.transfer import (
    IMPORT_FAILED_MESSAGE,
    export_document,
    export_filename,
    import_success_message,
    read_import_file,
    write_export,
)

__all__ = [
    "IMPORT_FAILED_MESSAGE",
    "PlaybookStore",
    "export_document",
    "export_filename",
    "import_success_message",
    "read_import_file",
    "write_export",
]
