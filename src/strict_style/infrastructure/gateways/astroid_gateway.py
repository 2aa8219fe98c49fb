"""
Lowers astroid modules into the checker's module tree.

Python has no attribute or extension syntax, so the frontend maps the
constructs that carry the same intent:

- `@deprecated("...")` decorators become deprecation attributes whose
  payload is the positional arguments;
- `_ = expr` becomes a binding with the wildcard pattern and
  `_: T = expr` a binding of an explicitly constrained expression;
- `cast(T, expr)` is an explicit coercion;
- `ignore(expr)` is an application of the discard operation.

Comments are read with `tokenize`; their text excludes the leading `#`.
Consecutive `#*` lines form one documentation comment.
"""

import io
import logging
import tokenize
from pathlib import Path
from typing import Optional, Union

import astroid  # type: ignore[import-untyped]
from astroid import nodes

from strict_style.domain.constants import DEPRECATION_ATTRIBUTES
from strict_style.domain.location import LineIndex, SourceLocation
from strict_style.domain.rules import RawComment
from strict_style.domain.tree import (
    AnyPattern,
    Apply,
    Argument,
    Attribute,
    Coerce,
    Compound,
    CompoundPattern,
    Constant,
    Constraint,
    Declaration,
    EvalItem,
    Expression,
    Function,
    Ident,
    Item,
    Module,
    ModuleKind,
    Node,
    Pattern,
    StructurePayload,
    ValueBinding,
    ValueDescription,
    ValueItem,
    VarPattern,
)

logger = logging.getLogger(__name__)

WILDCARD_NAME = "_"
CAST_FUNCTIONS = frozenset({"cast", "typing.cast", "typing_extensions.cast"})
INTERFACE_SUFFIXES = (".pyi",)
DOC_COMMENT_PREFIX = "#*"


class ModuleLoweringError(Exception):
    """The source could not be parsed or tokenized."""


class AstroidGateway:
    """Parses Python sources and builds module trees and comment lists from them."""

    def parse_file(self, file_path: Union[str, Path]) -> nodes.Module:
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ModuleLoweringError(f"{path}: {exc}") from exc
        return self.parse_source(source, str(path))

    def parse_source(self, source: str, file_path: str = "<string>") -> nodes.Module:
        try:
            return astroid.parse(source, module_name=Path(file_path).stem, path=file_path)
        except astroid.AstroidSyntaxError as exc:
            raise ModuleLoweringError(f"{file_path}: {exc}") from exc

    @staticmethod
    def read_source(module: nodes.Module) -> str:
        """Return the text astroid built `module` from."""
        with module.stream() as stream:
            data = stream.read()
        return data.decode(module.file_encoding or "utf-8")

    @staticmethod
    def is_interface(file_path: str) -> bool:
        return file_path.endswith(INTERFACE_SUFFIXES)

    @staticmethod
    def filename(module: nodes.Module) -> str:
        return module.file or module.name or "<string>"

    def lower(self, module: nodes.Module, source: Optional[str] = None) -> Module:
        if source is None:
            source = self.read_source(module)
        filename = self.filename(module)
        kind = ModuleKind.SIGNATURE if self.is_interface(filename) else ModuleKind.STRUCTURE
        lowering = _Lowering(filename, LineIndex(source))
        return Module(kind=kind, filename=filename, items=lowering.items(module.body))

    def comments(self, source: str, filename: str) -> list[RawComment]:
        """
        Collect the comments of `source`, in order.

        A documentation comment (`#*`) alone on its line absorbs the `#*`
        lines directly below it, so markup can span several lines. On the
        continuation lines the `*` after `#` becomes a blank.
        """
        index = LineIndex(source)
        runs: list[list[tokenize.TokenInfo]] = []
        try:
            for token in tokenize.generate_tokens(io.StringIO(source).readline):
                if token.type != tokenize.COMMENT:
                    continue
                if runs and self._continues_doc_comment(runs[-1][-1], token):
                    runs[-1].append(token)
                else:
                    runs.append([token])
        except (tokenize.TokenError, SyntaxError) as exc:
            raise ModuleLoweringError(f"{filename}: {exc}") from exc
        result = [self._raw_comment(run, index, filename) for run in runs]
        logger.debug("Collected %d comments from %s", len(result), filename)
        return result

    @staticmethod
    def _is_own_line_doc_comment(token: tokenize.TokenInfo) -> bool:
        return token.string.startswith(DOC_COMMENT_PREFIX) and not token.line[: token.start[1]].strip()

    def _continues_doc_comment(self, previous: tokenize.TokenInfo, token: tokenize.TokenInfo) -> bool:
        return (
            token.start[0] == previous.end[0] + 1
            and self._is_own_line_doc_comment(previous)
            and self._is_own_line_doc_comment(token)
        )

    @staticmethod
    def _raw_comment(run: list[tokenize.TokenInfo], index: LineIndex, filename: str) -> RawComment:
        first, last = run[0], run[-1]
        lines = [first.string[1:]] + [" " + token.string[len(DOC_COMMENT_PREFIX):] for token in run[1:]]
        (line, column), (end_line, end_column) = first.start, last.end
        return RawComment(
            text="\n".join(lines),
            location=index.location(filename, line, column, end_line, end_column),
        )


def dotted_name(node: nodes.NodeNG) -> Optional[str]:
    """`a.b.c` for a chain of attribute accesses on a name, None for anything else."""
    if isinstance(node, nodes.Name):
        return node.name
    if isinstance(node, nodes.Attribute):
        base = dotted_name(node.expr)
        if base is not None:
            return f"{base}.{node.attrname}"
    return None


class _Lowering:
    def __init__(self, filename: str, index: LineIndex) -> None:
        self._filename = filename
        self._index = index

    def location(self, node: nodes.NodeNG) -> SourceLocation:
        line = node.lineno or 1
        column = node.col_offset or 0
        end_line = getattr(node, "end_lineno", None) or line
        end_column = getattr(node, "end_col_offset", None)
        if end_column is None:
            end_column = column
        return self._index.location(self._filename, line, column, end_line, end_column)

    # --- statements ---------------------------------------------------------

    def items(self, statements: list[nodes.NodeNG]) -> tuple[Item, ...]:
        return tuple(self.item(statement) for statement in statements)

    def item(self, node: nodes.NodeNG) -> Item:
        location = self.location(node)
        if isinstance(node, nodes.Assign):
            value = self.expression(node.value)
            bindings = tuple(
                ValueBinding(self.pattern(target), value, location) for target in node.targets
            )
            return ValueItem(bindings, location)
        if isinstance(node, nodes.AnnAssign):
            annotation = node.annotation.as_string()
            if node.value is None:
                return ValueDescription(node.target.as_string(), annotation, location)
            constrained = Constraint(self.expression(node.value), annotation, self.location(node.value))
            return ValueItem((ValueBinding(self.pattern(node.target), constrained, location),), location)
        if isinstance(node, nodes.Expr):
            return EvalItem(self.expression(node.value), location)
        return self.declaration(node, location)

    def declaration(self, node: nodes.NodeNG, location: SourceLocation) -> Declaration:
        lowered_decorators: list[Node] = []
        expressions: list[Node] = []
        items: list[Item] = []
        decorators = getattr(node, "decorators", None)
        if decorators is not None:
            for decorator in decorators.nodes:
                attribute = self.deprecation_attribute(decorator)
                lowered_decorators.append(self.expression(decorator) if attribute is None else attribute)
        for child in node.get_children():
            if child is decorators:
                continue
            if child.is_statement:
                items.append(self.item(child))
            else:
                expressions.append(self.expression(child))
        name = getattr(node, "name", "")
        return Declaration(
            kind=type(node).__name__.lower(),
            name=name if isinstance(name, str) else "",
            location=location,
            expressions=tuple(expressions),
            items=tuple(items),
            decorators=tuple(lowered_decorators),
        )

    def deprecation_attribute(self, decorator: nodes.NodeNG) -> Optional[Attribute]:
        call = decorator if isinstance(decorator, nodes.Call) else None
        name = dotted_name(call.func if call is not None else decorator)
        if name not in DEPRECATION_ATTRIBUTES:
            return None
        payload_items = ()
        if call is not None:
            payload_items = tuple(EvalItem(self.expression(arg), self.location(arg)) for arg in call.args)
        return Attribute(name, StructurePayload(payload_items), self.location(decorator))

    # --- patterns -----------------------------------------------------------

    def pattern(self, node: nodes.NodeNG) -> Pattern:
        location = self.location(node)
        if isinstance(node, nodes.AssignName):
            if node.name == WILDCARD_NAME:
                return AnyPattern(location)
            return VarPattern(node.name, location)
        if isinstance(node, (nodes.Tuple, nodes.List, nodes.Starred)):
            parts: tuple[Node, ...] = tuple(self.pattern(child) for child in node.get_children())
        else:
            parts = tuple(self.expression(child) for child in node.get_children())
        return CompoundPattern(type(node).__name__.lower(), location, parts)

    # --- expressions --------------------------------------------------------

    def expression(self, node: nodes.NodeNG) -> Expression:
        location = self.location(node)
        if isinstance(node, nodes.Name):
            return Ident(node.name, location)
        if isinstance(node, nodes.Attribute):
            name = dotted_name(node)
            if name is not None:
                return Ident(name, location)
        if isinstance(node, nodes.Const):
            return Constant(node.value, location)
        if isinstance(node, nodes.Lambda):
            parameters = tuple(VarPattern(name, location) for name in node.argnames())
            defaults = [*node.args.defaults, *(default for default in node.args.kw_defaults if default is not None)]
            return Function(
                parameters,
                self.expression(node.body),
                location,
                defaults=tuple(self.expression(default) for default in defaults),
            )
        if isinstance(node, nodes.Call):
            return self.call(node, location)
        return Compound(
            type(node).__name__.lower(),
            location,
            tuple(self.item(child) if child.is_statement else self.expression(child) for child in node.get_children()),
        )

    def call(self, node: nodes.Call, location: SourceLocation) -> Expression:
        if dotted_name(node.func) in CAST_FUNCTIONS and len(node.args) == 2 and not node.keywords:
            target_type, value = node.args
            return Coerce(self.expression(value), target_type.as_string(), location)
        arguments: list[Argument] = []
        for arg in node.args:
            if isinstance(arg, nodes.Starred):
                arguments.append(Argument(self.expression(arg.value), label="*"))
            else:
                arguments.append(Argument(self.expression(arg)))
        for keyword in node.keywords or ():
            arguments.append(Argument(self.expression(keyword.value), label=keyword.arg or "**"))
        return Apply(self.expression(node.func), tuple(arguments), location)
