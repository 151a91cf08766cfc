"""Exceptions raised for unreadable or malformed input files."""


class PSAIOError(Exception):
    """Base class for file format and I/O failures; carries the offending path."""

    def __init__(self, path, message: str):
        self.path = str(path)
        super().__init__(f"{message}: '{self.path}'")


class CurveFormatError(PSAIOError):
    """A curve table could not be read."""


class ConfigError(PSAIOError):
    """A configuration file holds an invalid value."""
