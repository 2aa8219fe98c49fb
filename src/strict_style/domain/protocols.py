"""Ports the domain needs from the outside world."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RelativePosition:
    """Position inside a comment's own text: 1-based line, 0-based column on that line."""

    line: int
    column: int


class DocMarkupError(Exception):
    """Raised by a documentation parser when the markup is malformed."""

    def __init__(self, message: str, start: RelativePosition, finish: RelativePosition) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.finish = finish


class DocumentationParserProtocol(Protocol):
    """Parses the text of one documentation comment."""

    def parse(self, text: str) -> object:
        """Return the parsed document, or raise DocMarkupError."""
        ...
