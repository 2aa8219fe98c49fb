"""Source positions and spans shared by the tree, the comments and the violations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    A point in a source file.

    `line` is 1-based, `line_start` is the absolute offset of the first
    character of that line and `offset` is the absolute offset of the point.
    """

    line: int
    line_start: int
    offset: int

    @property
    def column(self) -> int:
        return self.offset - self.line_start


@dataclass(frozen=True)
class SourceLocation:
    """Half-open span [start, end) inside `filename`."""

    filename: str
    start: Position
    end: Position

    @classmethod
    def from_line_columns(
        cls,
        filename: str,
        line: int,
        column: int,
        end_line: int,
        end_column: int,
        line_starts: tuple[int, ...] = (),
    ) -> "SourceLocation":
        """Build a span from (line, column) pairs, resolving offsets with `line_starts` when known."""
        return cls(
            filename=filename,
            start=_position(line, column, line_starts),
            end=_position(end_line, end_column, line_starts),
        )

    def __str__(self) -> str:
        return f"{self.filename}:{self.start.line}:{self.start.column}"


def _position(line: int, column: int, line_starts: tuple[int, ...]) -> Position:
    line_start = line_starts[line - 1] if 0 < line <= len(line_starts) else 0
    return Position(line=line, line_start=line_start, offset=line_start + column)


class LineIndex:
    """Offsets of every line start in a source text."""

    def __init__(self, source: str) -> None:
        starts = [0]
        for index, char in enumerate(source):
            if char == "\n":
                starts.append(index + 1)
        self._starts = tuple(starts)

    @property
    def line_starts(self) -> tuple[int, ...]:
        return self._starts

    def location(
        self, filename: str, line: int, column: int, end_line: int, end_column: int
    ) -> SourceLocation:
        return SourceLocation.from_line_columns(
            filename, line, column, end_line, end_column, self._starts
        )
