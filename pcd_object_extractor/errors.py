"""Error types raised by the object extractor."""


class ConfigurationError(FileNotFoundError):
    """An input or output directory cannot be used."""


class ParseError(ValueError):
    """A detections file is malformed or a record misses a field."""

    def __init__(self, frame: str, field: str, reason: str) -> None:
        super().__init__(f"{frame}: {field} {reason}")
        self.frame = frame
        self.field = field
        self.reason = reason


class WriteError(OSError):
    """An extracted object could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
