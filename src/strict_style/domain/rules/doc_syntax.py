"""Documentation comment syntax check and relative-to-absolute location remapping."""

from typing import Iterator

from strict_style.domain.location import Position, SourceLocation
from strict_style.domain.protocols import (
    DocMarkupError,
    DocumentationParserProtocol,
    RelativePosition,
)
from strict_style.domain.violations import Violation


def remap_position(enclosing: SourceLocation, relative: RelativePosition) -> Position:
    """
    Translate a position reported inside a comment into file coordinates.

    On the comment's first line the column is relative to where the comment
    starts. On later lines the real line start is unknown, so the line start
    is 0 and the offset is the relative column as is.
    """
    start = enclosing.start
    if relative.line == 1:
        return Position(
            line=start.line,
            line_start=start.line_start,
            offset=start.offset + relative.column,
        )
    return Position(
        line=start.line + relative.line - 1,
        line_start=0,
        offset=relative.column,
    )


def remap_location(
    enclosing: SourceLocation, start: RelativePosition, finish: RelativePosition
) -> SourceLocation:
    return SourceLocation(
        filename=enclosing.filename,
        start=remap_position(enclosing, start),
        end=remap_position(enclosing, finish),
    )


class DocSyntaxRule:
    """Parses documentation comments and reports markup errors at their absolute location."""

    code: str = "doc-comment-syntax-error"
    description: str = "Documentation comments must be valid documentation markup."

    def __init__(self, parser: DocumentationParserProtocol) -> None:
        self._parser = parser

    def check(self, text: str, location: SourceLocation) -> Iterator[Violation]:
        try:
            self._parser.parse(text)
        except DocMarkupError as error:
            yield Violation.documentation_syntax_error(
                error.message, remap_location(location, error.start, error.finish)
            )
