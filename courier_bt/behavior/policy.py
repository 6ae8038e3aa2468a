"""
Delivery policy: deliver first, otherwise navigate with a turning fallback.

Tree shape (priority order top to bottom):

    Selector root
      Sequence deliver
        is_at_target, has_package_in_hand, deliver_package
      Sequence navigate
        not_at_target
        Selector movement
          Sequence move_forward   (facing target and not blocked)
          Sequence avoid_obstacle (blocked: left detour, else right detour)
          Selector turning        (turn right, turn left, unconditional left)

The unconditional left turn closes the gap where should_turn_right and
should_turn_left are both False (|dx| == |dy| with an East/West facing).
Without it the turning selector would fail and the tick would do nothing,
forever.
"""

from typing import Optional, TYPE_CHECKING

from .builder import ActionHook, TreeBuilder
from .nodes import Node

if TYPE_CHECKING:
    from ..model.agent import Agent


def add_delivery_branch(builder: TreeBuilder, agent: "Agent") -> None:
    with builder.sequence("deliver"):
        builder.condition(agent.is_at_target)
        builder.condition(agent.has_package_in_hand)
        builder.action(agent.deliver_package)


def add_move_forward_strategy(builder: TreeBuilder, agent: "Agent") -> None:
    def facing_open_target() -> bool:
        return agent.is_facing_target() and not agent.is_facing_obstacle()

    with builder.sequence("move_forward"):
        builder.condition(facing_open_target)
        builder.action(agent.move_forward)


def add_avoidance_strategy(builder: TreeBuilder, agent: "Agent") -> None:
    """
    Detour around the blocked cell ahead, left side first.

    Turns always succeed, so a failed detour still leaves the robot rotated.
    When both detours fail the net facing is unchanged (left then right).
    """
    with builder.sequence("avoid_obstacle"):
        builder.condition(agent.is_facing_obstacle)
        with builder.selector("detour"):
            with builder.sequence("detour_left"):
                builder.action(agent.turn_left)
                builder.action(agent.move_forward)
            with builder.sequence("detour_right"):
                builder.action(agent.turn_right)
                builder.action(agent.move_forward)


def add_turning_correction(builder: TreeBuilder, agent: "Agent") -> None:
    with builder.selector("turning"):
        with builder.sequence("turn_right"):
            builder.condition(agent.should_turn_right)
            builder.action(agent.turn_right)
        with builder.sequence("turn_left"):
            builder.condition(agent.should_turn_left)
            builder.action(agent.turn_left)
        with builder.sequence("turn_fallback"):
            builder.action(agent.turn_left)


def add_navigation_branch(builder: TreeBuilder, agent: "Agent") -> None:
    def not_at_target() -> bool:
        return not agent.is_at_target()

    with builder.sequence("navigate"):
        builder.condition(not_at_target)
        with builder.selector("movement"):
            add_move_forward_strategy(builder, agent)
            add_avoidance_strategy(builder, agent)
            add_turning_correction(builder, agent)


def build_policy_tree(agent: "Agent",
                      on_action: Optional[ActionHook] = None) -> Node:
    """Assemble the full delivery tree for one robot."""
    builder = TreeBuilder(on_action=on_action)
    with builder.selector("root"):
        add_delivery_branch(builder, agent)
        add_navigation_branch(builder, agent)
    return builder.build()


def build_turning_correction_tree(agent: "Agent",
                                  on_action: Optional[ActionHook] = None) -> Node:
    builder = TreeBuilder(on_action=on_action)
    add_turning_correction(builder, agent)
    return builder.build()
