"""
Parser for the text-formatting markup of documentation comments.

The markup is the ocamldoc one: `{b bold}`, `{i italic}`, `[code]`,
`{[ code block ]}`, `{v verbatim v}`, `{{:url} text}`, `{!reference}`,
lists (`{ul {- item}}`), headings (`{2 Title}`) and block tags at the start
of a line (`@param x ...`, `@return ...`, `@since 1.2`).

Only well-formedness is checked. Errors are raised as DocMarkupError with a
span relative to the comment text: lines count from 1, columns from 0 on
every line.
"""

from dataclasses import dataclass, field
from typing import Optional

from strict_style.domain.protocols import DocMarkupError, RelativePosition

STYLE_TAGS = frozenset({"b", "i", "e", "C", "L", "R", "^", "_"})
LIST_TAGS = frozenset({"ul", "ol"})
ITEM_TAGS = frozenset({"-", "li"})
HEADING_TAGS = frozenset("0123456789")

IDENT_TAGS = frozenset({"param", "raise", "raises"})
VERSION_TAGS = frozenset({"since", "before"})
PLAIN_TAGS = frozenset(
    {"author", "deprecated", "return", "returns", "version", "canonical", "inline", "open", "closed"}
)
SEE_DELIMITERS = {"<": ">", "'": "'", '"': '"'}


@dataclass
class _Frame:
    opener: str
    kind: str
    start: RelativePosition


@dataclass
class ParsedDoc:
    """What the parser saw: markup openers and block tags, in order."""

    markup: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


class DocMarkupParser:
    """Scan-and-validate parser. Implements DocumentationParserProtocol."""

    def parse(self, text: str) -> ParsedDoc:
        return _Scanner(text).run()


class _Scanner:
    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0
        self._line = 1
        self._column = 0
        self._line_begin = 0
        self._frames: list[_Frame] = []
        self._doc = ParsedDoc()

    # --- cursor ------------------------------------------------------------

    def _peek(self, ahead: int = 0) -> str:
        index = self._index + ahead
        return self._text[index] if index < len(self._text) else ""

    def _at(self, literal: str) -> bool:
        return self._text.startswith(literal, self._index)

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self._index >= len(self._text):
                return
            if self._text[self._index] == "\n":
                self._line += 1
                self._column = 0
                self._line_begin = self._index + 1
            else:
                self._column += 1
            self._index += 1

    def _position(self) -> RelativePosition:
        return RelativePosition(self._line, self._column)

    def _error(self, message: str, start: RelativePosition, finish: Optional[RelativePosition] = None) -> DocMarkupError:
        return DocMarkupError(message, start, finish or self._position())

    def _read_while(self, predicate) -> str:
        begin = self._index
        while self._index < len(self._text) and predicate(self._text[self._index]):
            self._advance()
        return self._text[begin:self._index]

    def _skip_blanks(self) -> None:
        self._read_while(lambda char: char in " \t")

    def _at_line_start(self) -> bool:
        prefix = self._text[self._line_begin:self._index].strip()
        return prefix in ("", "*")

    # --- driver ------------------------------------------------------------

    def run(self) -> ParsedDoc:
        while self._index < len(self._text):
            char = self._peek()
            if char == "\\":
                self._advance(2)
            elif char == "{":
                self._open_brace()
            elif char == "}":
                self._close_brace()
            elif char == "[":
                self._inline_code()
            elif char == "@" and self._at_line_start():
                self._block_tag()
            else:
                if not char.isspace() and self._in_list():
                    start = self._position()
                    self._advance()
                    raise self._error(
                        f"Only list items may appear inside '{self._frames[-1].opener}'", start
                    )
                self._advance()
        if self._frames:
            frame = self._frames[-1]
            raise self._error(f"Missing '}}' to close '{frame.opener}'", frame.start)
        return self._doc

    def _in_list(self) -> bool:
        return bool(self._frames) and self._frames[-1].kind == "list"

    # --- braces ------------------------------------------------------------

    def _open_brace(self) -> None:
        start = self._position()
        self._advance()
        if self._at("["):
            self._advance()
            self._skip_to("]}", "Unterminated code block", start)
            self._doc.markup.append("{[")
            return
        if self._at("v") and (self._peek(1) == "" or self._peek(1).isspace()):
            self._advance()
            self._skip_verbatim(start)
            self._doc.markup.append("{v")
            return
        if self._at("%"):
            self._advance()
            self._skip_to("%}", "Unterminated target-specific text", start)
            self._doc.markup.append("{%")
            return
        if self._at("!"):
            self._reference(start)
            return
        if self._at("{"):
            self._link(start)
            return
        tag = self._read_tag()
        opener = "{" + tag
        if not tag:
            raise self._error("Unexpected '{'", start)
        if tag in ITEM_TAGS:
            if not self._in_list():
                raise self._error(f"List item '{opener}' outside of a list", start)
            self._push(opener, "item", start)
        elif self._in_list():
            raise self._error(f"Only list items may appear inside '{self._frames[-1].opener}'", start)
        elif tag in LIST_TAGS:
            self._push(opener, "list", start)
        elif tag in STYLE_TAGS:
            self._push(opener, "style", start)
        elif tag[0] in HEADING_TAGS and _is_heading(tag):
            self._push(opener, "heading", start)
        else:
            raise self._error(f"Unknown tag '{opener}'", start)
        if self._peek() not in ("", "}") and not self._peek().isspace():
            raise self._error(f"Expected a blank after '{opener}'", start)

    def _read_tag(self) -> str:
        if self._peek() in ("-", "^", "_"):
            char = self._peek()
            self._advance()
            return char
        return self._read_while(lambda char: char.isalnum() or char == ":" or char == "_")

    def _push(self, opener: str, kind: str, start: RelativePosition) -> None:
        self._frames.append(_Frame(opener, kind, start))
        self._doc.markup.append(opener)

    def _close_brace(self) -> None:
        start = self._position()
        self._advance()
        if not self._frames:
            raise self._error("Unmatched '}'", start)
        self._frames.pop()

    def _skip_to(self, terminator: str, message: str, start: RelativePosition) -> None:
        while self._index < len(self._text):
            if self._at(terminator):
                self._advance(len(terminator))
                return
            self._advance()
        raise self._error(message, start)

    def _skip_verbatim(self, start: RelativePosition) -> None:
        while self._index < len(self._text):
            if self._at("v}") and self._text[self._index - 1].isspace():
                self._advance(2)
                return
            self._advance()
        raise self._error("Unterminated verbatim text", start)

    def _reference(self, start: RelativePosition) -> None:
        self._advance()
        target = self._read_while(lambda char: char != "}")
        if not self._at("}"):
            raise self._error("Unterminated reference", start)
        self._advance()
        if not target.strip():
            raise self._error("Empty reference", start)
        self._doc.markup.append("{!")

    def _link(self, start: RelativePosition) -> None:
        self._advance()
        if not self._at(":"):
            raise self._error("Expected ':' after '{{'", start)
        self._advance()
        url = self._read_while(lambda char: char != "}")
        if not self._at("}"):
            raise self._error("Unterminated link target", start)
        self._advance()
        if not url.strip():
            raise self._error("Empty link target", start)
        self._push("{{:", "link", start)

    # --- inline code -------------------------------------------------------

    def _inline_code(self) -> None:
        start = self._position()
        self._advance()
        depth = 1
        while self._index < len(self._text):
            char = self._peek()
            if char == "\\":
                self._advance(2)
                continue
            self._advance()
            if char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
                if depth == 0:
                    self._doc.markup.append("[")
                    return
        raise self._error("Unterminated code", start)

    # --- block tags --------------------------------------------------------

    def _block_tag(self) -> None:
        start = self._position()
        self._advance()
        name = self._read_while(lambda char: char.isalnum() or char == "_")
        if not name:
            return
        if self._frames:
            frame = self._frames[-1]
            raise self._error(f"Missing '}}' to close '{frame.opener}' before '@{name}'", frame.start, start)
        self._doc.tags.append(name)
        if name in IDENT_TAGS:
            self._skip_blanks()
            ident = self._read_while(lambda char: char.isalnum() or char in "_'.")
            if not ident or not (ident[0].isalpha() or ident[0] == "_"):
                raise self._error(f"Expected identifier after '@{name}'", start)
        elif name in VERSION_TAGS:
            self._skip_blanks()
            if not self._read_while(lambda char: not char.isspace()):
                raise self._error(f"Expected version after '@{name}'", start)
        elif name == "see":
            self._see_reference(start)

    def _see_reference(self, start: RelativePosition) -> None:
        self._skip_blanks()
        closing = SEE_DELIMITERS.get(self._peek())
        if closing is None:
            raise self._error("Expected <url>, 'file' or \"document\" after '@see'", start)
        self._advance()
        target = self._read_while(lambda char: char != closing and char != "\n")
        if not self._at(closing) or not target:
            raise self._error("Unterminated reference after '@see'", start)
        self._advance()


def _is_heading(tag: str) -> bool:
    """`{2` or `{2:label`."""
    level, _, label = tag.partition(":")
    return len(level) == 1 and (":" not in tag or bool(label))
