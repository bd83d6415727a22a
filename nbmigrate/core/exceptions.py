"""nbmigrate exceptions.

Per-element problems are never raised; they are recorded as
diagnostics. Exceptions are reserved for things that stop a run.
"""


class NbMigrateError(Exception):
    """Base class for nbmigrate errors."""


class ConfigError(NbMigrateError):
    """Configuration file is missing, unreadable or invalid."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
