"""
Error types raised by yat.

Only the codec and the path helpers raise these; everything above them
logs the failure and falls back to an empty list or the default settings.
"""


class YatError(Exception):
    """Base class for all yat errors."""


class MalformedSave(YatError):
    """A save file could not be turned back into a task tree."""

    def __init__(self, line_number, reason):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class MissingSaveLocation(YatError):
    """The home/config directory could not be resolved."""


class IoFailure(YatError):
    """Reading or writing a file failed."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")
