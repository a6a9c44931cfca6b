"""Define the search nodes, solutions, and base class shared by state-space search strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strips_planning.classical_planning import GroundAction, GroundingEngine, State
    from strips_planning.io.config import PlannerConfig


@dataclass(frozen=True)
class SearchNode:
    """A node in a search tree (represents a particular path to a state)."""

    state: State
    action: GroundAction | None = None
    """Action applied to the parent's state to reach this node (None at the root)."""

    parent: SearchNode | None = None
    depth: int = 0
    """Number of actions on the path from the root to this node."""


@dataclass(frozen=True)
class Solution:
    """A sequence of ground actions leading from the initial state to a goal state."""

    steps: int
    path: tuple[str, ...]
    """Rendered actions (name followed by bound values), ordered from start to goal."""

    actions: tuple[GroundAction, ...] = ()


class StateSpaceSearch(ABC):
    """Abstract forward search over the states reachable by applying ground actions."""

    strategy_name: str = "state-space search"

    def __init__(self, engine: GroundingEngine, goal_state: State, config: PlannerConfig) -> None:
        """Initialize the search using a grounding engine and a goal state.

        :param engine: Grounding engine used to expand states into their children
        :param goal_state: Goal state that solutions must satisfy
        :param config: Planner configuration (solution bound and diagnostics)
        """
        self.engine = engine
        self.goal_state = goal_state
        self.config = config

        self._nodes_expanded: int = 0
        """Number of nodes whose children have been enumerated."""

    @property
    def nodes_expanded(self) -> int:
        """Retrieve the number of nodes expanded so far."""
        return self._nodes_expanded

    @abstractmethod
    def search(self, initial_state: State) -> list[Solution]:
        """Search for solutions starting from the given state.

        :param initial_state: State at the root of the search
        :return: Solutions found (empty if no goal state is reachable)
        """

    @staticmethod
    def state_key(state: State) -> str:
        """Return the canonical key used to detect previously visited states."""
        return state.canonical_string

    def is_goal(self, state: State) -> bool:
        """Check whether the given state satisfies the search's goal."""
        return self.engine.is_goal(state, self.goal_state)

    def expand(self, node: SearchNode) -> list[SearchNode]:
        """Create a child node for each applicable action, in action enumeration order."""
        self._nodes_expanded += 1
        return [
            SearchNode(state=child_state, action=action, parent=node, depth=node.depth + 1)
            for child_state, action in self.engine.child_states(node.state)
        ]

    @staticmethod
    def extract_solution(node: SearchNode) -> Solution:
        """Walk parent links back to the root to compile the path leading to the given node."""
        actions: list[GroundAction] = []
        current: SearchNode | None = node
        while current is not None and current.action is not None:
            actions.append(current.action)
            current = current.parent
        actions.reverse()

        return Solution(
            steps=node.depth,
            path=tuple(str(action) for action in actions),
            actions=tuple(actions),
        )
