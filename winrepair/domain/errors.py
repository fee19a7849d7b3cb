from __future__ import annotations


class WinRepairError(Exception):
    """Base class for errors raised by winrepair."""


class IdentitySourceUnavailable(WinRepairError):
    """
    OS identity could not be read from the platform configuration store.
    Fatal: nothing downstream can run without an OSDescriptor.
    """

    def __init__(self, field: str, cause: Exception | None = None):
        self.field = field
        msg = f"Unable to read OS identity field '{field}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class ConfigError(WinRepairError):
    """Missing or invalid INI values."""
