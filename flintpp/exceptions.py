"""Exception types raised by the style checker."""


class FlintError(Exception):
    """Base class for all checker errors."""


class ConfigError(FlintError):
    """A configuration file could not be read or parsed."""


class FileReadError(FlintError):
    """An input file could not be read. This aborts the whole run."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Error reading {path}: {reason}")
        self.path = path
        self.reason = reason
