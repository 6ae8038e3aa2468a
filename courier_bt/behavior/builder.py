"""Declarative construction of behavior trees."""

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Type

from .nodes import Action, Composite, Condition, Node, Selector, Sequence

ActionHook = Callable[[str, Callable[[], bool]], Callable[[], bool]]


class TreeBuildError(RuntimeError):
    """Raised when the builder is used out of order."""


class _Scope:
    """Composite under construction: its class, name and collected children."""

    def __init__(self, node_class: Type[Composite], name: Optional[str]):
        self.node_class = node_class
        self.name = name
        self.children: List[Node] = []

    def close(self) -> Composite:
        return self.node_class(self.children, name=self.name)


class TreeBuilder:
    """
    Builds a tree through nested composite scopes.

    Usage:
        builder = TreeBuilder()
        with builder.selector("root"):
            with builder.sequence("deliver"):
                builder.condition(agent.is_at_target)
                builder.action(agent.deliver_package)
        tree = builder.build()

    Nodes added inside a scope become children of that composite. The first
    node completed at the outermost level is the root. Composites are only
    instantiated when their scope closes, so the finished tree holds fixed
    child tuples.

    If on_action is given it is called as on_action(name, operation) for
    every action and the returned callable is wrapped instead.
    """

    def __init__(self, on_action: Optional[ActionHook] = None):
        self.on_action = on_action
        self._scopes: List[_Scope] = []
        self._root: Optional[Node] = None

    def condition(self, predicate: Callable[[], bool],
                  name: Optional[str] = None) -> "TreeBuilder":
        self._add(Condition(predicate, name))
        return self

    def action(self, operation: Callable[[], bool],
               name: Optional[str] = None) -> "TreeBuilder":
        name = name or getattr(operation, '__name__', None) or 'Action'
        if self.on_action is not None:
            operation = self.on_action(name, operation)
        self._add(Action(operation, name))
        return self

    def sequence(self, name: Optional[str] = None):
        return self._composite(Sequence, name)

    def selector(self, name: Optional[str] = None):
        return self._composite(Selector, name)

    def build(self) -> Node:
        if self._scopes:
            raise TreeBuildError(
                f"build() called with {len(self._scopes)} scope(s) still open"
            )
        if self._root is None:
            raise TreeBuildError("build() called before any node was added")
        return self._root

    @contextmanager
    def _composite(self, node_class: Type[Composite],
                   name: Optional[str]) -> Iterator["TreeBuilder"]:
        scope = _Scope(node_class, name)
        self._scopes.append(scope)
        try:
            yield self
        finally:
            self._scopes.pop()
        self._add(scope.close())

    def _add(self, node: Node) -> None:
        if self._scopes:
            self._scopes[-1].children.append(node)
        elif self._root is None:
            self._root = node
        else:
            raise TreeBuildError(
                f"{node!r} added at the outermost level but the tree "
                f"already has root {self._root!r}"
            )
