"""Behavior tree nodes with a plain boolean result."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Node(ABC):
    """Base class for all behavior tree nodes."""

    def __init__(self, name: Optional[str] = None):
        self.name = name or type(self).__name__

    @abstractmethod
    def evaluate(self) -> bool:
        """Run the node once and report success."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Condition(Node):
    """Leaf wrapping a side-effect-free predicate."""

    def __init__(self, predicate: Callable[[], bool], name: Optional[str] = None):
        super().__init__(name or getattr(predicate, '__name__', None))
        self.predicate = predicate

    def evaluate(self) -> bool:
        return bool(self.predicate())


class Action(Node):
    """Leaf wrapping an operation that may change the world."""

    def __init__(self, operation: Callable[[], bool], name: Optional[str] = None):
        super().__init__(name or getattr(operation, '__name__', None))
        self.operation = operation

    def evaluate(self) -> bool:
        return bool(self.operation())


class Composite(Node):
    """Node owning an ordered, fixed tuple of children."""

    def __init__(self, children: Iterable[Node] = (), name: Optional[str] = None):
        super().__init__(name)
        self.children: Tuple[Node, ...] = tuple(children)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


class Sequence(Composite):
    """
    AND with short-circuit: fails at the first failing child.

    Earlier children guard later ones. An empty sequence succeeds.
    """

    def evaluate(self) -> bool:
        for child in self.children:
            if not child.evaluate():
                logger.debug("%s failed at %s", self.name, child.name)
                return False
        return True


class Selector(Composite):
    """
    OR with short-circuit: succeeds at the first succeeding child.

    Child order is priority order. An empty selector fails.
    """

    def evaluate(self) -> bool:
        for child in self.children:
            if child.evaluate():
                logger.debug("%s chose %s", self.name, child.name)
                return True
        logger.debug("%s exhausted", self.name)
        return False


def render_tree(root: Node, indent: str = "  ") -> str:
    """Indented outline of the tree, one node per line."""
    lines: List[str] = []

    def visit(node: Node, depth: int) -> None:
        lines.append(f"{indent * depth}{type(node).__name__}: {node.name}")
        if isinstance(node, Composite):
            for child in node.children:
                visit(child, depth + 1)

    visit(root, 0)
    return "\n".join(lines)
