"""
Single-pass tree walk with one hook per node type.

A hook receives the node and the walker and yields violations. It decides
how the walk continues: `walker.descend(node)` walks the children (without
running the hook on `node` again), `walker.visit(child)` applies the hooks
to another node. Nodes without a hook are descended.

The walk is lazy: whoever consumes the violations decides when to stop, and
nothing past the last consumed violation is inspected.
"""

from collections.abc import Callable, Iterator, Mapping

from strict_style.domain.tree import Node
from strict_style.domain.violations import Violation

Hook = Callable[[Node, "TreeWalker"], Iterator[Violation]]


class TreeWalker:
    def __init__(self, hooks: Mapping[type, Hook]) -> None:
        self._hooks = dict(hooks)

    def visit(self, node: Node) -> Iterator[Violation]:
        hook = self._hooks.get(type(node))
        if hook is None:
            yield from self.descend(node)
        else:
            yield from hook(node, self)

    def descend(self, node: Node) -> Iterator[Violation]:
        for child in node.children():
            yield from self.visit(child)
