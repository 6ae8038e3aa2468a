"""Behavior tree engine and the courier delivery policy."""

from .nodes import Node, Condition, Action, Composite, Sequence, Selector, render_tree
from .builder import TreeBuilder, TreeBuildError
from .policy import build_policy_tree, build_turning_correction_tree

__all__ = [
    'Node',
    'Condition',
    'Action',
    'Composite',
    'Sequence',
    'Selector',
    'render_tree',
    'TreeBuilder',
    'TreeBuildError',
    'build_policy_tree',
    'build_turning_correction_tree',
]
