"""Exceptions raised by the playbook core."""


class ChalktalkError(Exception):
    """Base class for all playbook editor errors."""


class ImportParseError(ChalktalkError):
    """An import document could not be parsed into plays or playbooks."""


class LastPlaybookError(ChalktalkError):
    """Attempted to delete the only remaining playbook."""
