"""
Module tree checked by the style rules.

Every node kind is a frozen dataclass and each family (items, patterns,
expressions, payloads) is a closed union. Hosts lower their own parse trees
into these nodes; the rules only ever match on the classes below.

`children()` yields the direct sub-nodes in source order. Attributes come
after the node's own parts, except on declarations where they lead, the way
decorators do.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from strict_style.domain.location import SourceLocation


class ModuleKind(Enum):
    STRUCTURE = "structure"
    SIGNATURE = "signature"


# --- Attributes and extensions ---------------------------------------------


@dataclass(frozen=True)
class Attribute:
    """A named marker attached to a node, e.g. a deprecation notice."""

    name: str
    payload: "Payload"
    location: SourceLocation

    def children(self) -> Iterator["Node"]:
        yield self.payload


@dataclass(frozen=True)
class Extension:
    """A named syntactic extension point with an arbitrary payload."""

    name: str
    payload: "Payload"
    location: SourceLocation

    def children(self) -> Iterator["Node"]:
        yield self.payload


@dataclass(frozen=True)
class StructurePayload:
    items: tuple["StructureItem", ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.items


@dataclass(frozen=True)
class SignaturePayload:
    items: tuple["SignatureItem", ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.items


@dataclass(frozen=True)
class TypePayload:
    text: str

    def children(self) -> Iterator["Node"]:
        return iter(())


@dataclass(frozen=True)
class PatternPayload:
    pattern: "Pattern"
    guard: Optional["Expression"] = None

    def children(self) -> Iterator["Node"]:
        yield self.pattern
        if self.guard is not None:
            yield self.guard


Payload = Union[StructurePayload, SignaturePayload, TypePayload, PatternPayload]


# --- Patterns ----------------------------------------------------------------


@dataclass(frozen=True)
class AnyPattern:
    """The wildcard pattern: matches anything and binds nothing."""

    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes


@dataclass(frozen=True)
class VarPattern:
    name: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes


@dataclass(frozen=True)
class CompoundPattern:
    """Any other pattern shape (tuples, attribute targets, subscripts...)."""

    kind: str
    location: SourceLocation
    parts: tuple["Node", ...] = ()
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.parts
        yield from self.attributes


Pattern = Union[AnyPattern, VarPattern, CompoundPattern]


# --- Expressions -------------------------------------------------------------


@dataclass(frozen=True)
class Ident:
    """A reference to a (possibly dotted) name."""

    name: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes


@dataclass(frozen=True)
class Constant:
    """A literal."""

    value: object
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes


@dataclass(frozen=True)
class Construct:
    """A data-constructor application, with or without argument."""

    name: str
    location: SourceLocation
    argument: Optional["Expression"] = None
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        if self.argument is not None:
            yield self.argument
        yield from self.attributes


@dataclass(frozen=True)
class Function:
    """A function literal (lambda). `defaults` are the parameter default values."""

    parameters: tuple[Pattern, ...]
    body: "Expression"
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()
    defaults: tuple["Expression", ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.parameters
        yield from self.defaults
        yield self.body
        yield from self.attributes


@dataclass(frozen=True)
class Constraint:
    """An expression with an explicit type annotation."""

    expression: "Expression"
    type_annotation: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.expression
        yield from self.attributes


@dataclass(frozen=True)
class Coerce:
    """An expression explicitly coerced to a type."""

    expression: "Expression"
    type_annotation: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.expression
        yield from self.attributes


@dataclass(frozen=True)
class Argument:
    """One argument of an application. `label` is None for positional arguments."""

    value: "Expression"
    label: Optional[str] = None

    def children(self) -> Iterator["Node"]:
        yield self.value


@dataclass(frozen=True)
class Apply:
    function: "Expression"
    arguments: tuple[Argument, ...]
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.function
        yield from self.arguments
        yield from self.attributes


@dataclass(frozen=True)
class Let:
    bindings: tuple["ValueBinding", ...]
    body: "Expression"
    location: SourceLocation
    recursive: bool = False
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.bindings
        yield self.body
        yield from self.attributes


@dataclass(frozen=True)
class ExtensionExpr:
    extension: Extension
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.extension
        yield from self.attributes


@dataclass(frozen=True)
class Compound:
    """Every other expression shape: operators, conditionals, containers, calls to unknown forms."""

    kind: str
    location: SourceLocation
    operands: tuple["Node", ...] = ()
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.operands
        yield from self.attributes


Expression = Union[
    Ident, Constant, Construct, Function, Constraint, Coerce, Apply, Let, ExtensionExpr, Compound
]


# --- Bindings and items ----------------------------------------------------


@dataclass(frozen=True)
class ValueBinding:
    pattern: Pattern
    expression: Expression
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.pattern
        yield self.expression
        yield from self.attributes


@dataclass(frozen=True)
class ValueItem:
    bindings: tuple[ValueBinding, ...]
    location: SourceLocation
    recursive: bool = False
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.bindings
        yield from self.attributes


@dataclass(frozen=True)
class EvalItem:
    """A top-level expression statement."""

    expression: Expression
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.expression
        yield from self.attributes


@dataclass(frozen=True)
class ExtensionItem:
    extension: Extension
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield self.extension
        yield from self.attributes


@dataclass(frozen=True)
class ValueDescription:
    """An interface-only declaration of a value and its type."""

    name: str
    type_annotation: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes


@dataclass(frozen=True)
class Declaration:
    """
    A named or anonymous block: functions, classes, modules, control flow.

    `decorators` keeps decorator expressions and deprecation attributes in
    source order; `expressions` are the other parts evaluated by the block
    itself (defaults, conditions); `items` are the nested statements.
    """

    kind: str
    name: str
    location: SourceLocation
    expressions: tuple["Node", ...] = ()
    items: tuple["Item", ...] = ()
    attributes: tuple[Attribute, ...] = ()
    decorators: tuple["Node", ...] = ()

    def children(self) -> Iterator["Node"]:
        yield from self.attributes
        yield from self.decorators
        yield from self.expressions
        yield from self.items


StructureItem = Union[ValueItem, EvalItem, ExtensionItem, Declaration]
SignatureItem = Union[ValueDescription, ExtensionItem, Declaration]
Item = Union[StructureItem, SignatureItem]


@dataclass(frozen=True)
class Module:
    kind: ModuleKind
    filename: str
    items: tuple[Item, ...] = field(default_factory=tuple)

    def children(self) -> Iterator["Node"]:
        yield from self.items


Node = Union[
    Module,
    Item,
    ValueBinding,
    Pattern,
    Expression,
    Argument,
    Attribute,
    Extension,
    Payload,
]
