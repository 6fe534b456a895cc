from typing import NamedTuple, Optional, Tuple


class SourceLocation(NamedTuple):
    line: int
    column: int


class MbsError(Exception):
    """Base exception for script loading and parsing."""

    pass


class ConfigurationError(MbsError):
    """Raised when a dialect cannot produce a consistent grammar."""

    pass


class LoadError(MbsError):
    """Raised when a source file or a symbol module cannot be loaded."""

    def __init__(self, message: str = "Failed to load source."):
        super().__init__(message)


class GrammarError(MbsError):
    """Raised when source text does not conform to the grammar."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ):
        super().__init__(f"Parse error: {message}")
        self.line = line
        self.column = column

    @property
    def location(self) -> Optional[Tuple[int, int]]:
        if self.line is None or self.column is None:
            return None
        return SourceLocation(self.line, self.column)


class SourceError(MbsError):
    """Raised when a token matched the grammar but holds an invalid value."""

    def __init__(self, location: SourceLocation, description: str):
        self.location = location
        self.description = description
        super().__init__(
            f"Error '{description}' at Line: {location.line}, Col: {location.column}"
        )
