"""Define an A* search over grounded states, guided by a caller-supplied heuristic.

Reference: Section 3.5.2 (pg. 85-86) of AIMA (4th Ed.) by Russell and Norvig.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from strips_planning.io import console
from strips_planning.planning.state_space_search import SearchNode, Solution, StateSpaceSearch

if TYPE_CHECKING:
    from strips_planning.classical_planning import GroundingEngine, State
    from strips_planning.io.config import PlannerConfig

Heuristic = Callable[["State"], float]
"""Estimates the remaining cost from a state to the goal."""


@dataclass(order=True)
class AStarNode:
    """A frontier entry of A* search.

    Entries are ordered by f-value (estimated total cost), with ties broken by insertion order.
    """

    f: float
    """Estimated cost of the best path continuing from the node to the goal."""

    sequence: int
    """Insertion counter of the entry (earlier entries win ties)."""

    node: SearchNode = field(compare=False)
    h: float = field(default=0.0, compare=False)


class AStarSearch(StateSpaceSearch):
    """A* search returning the first goal reached (a single solution by design).

    Path cost g is the depth of a node; the frontier is expanded in order of g + h. A single
    visited set is shared by the whole search, as in breadth-first search.
    """

    strategy_name = "A*"

    def __init__(
        self,
        engine: GroundingEngine,
        goal_state: State,
        config: PlannerConfig,
        heuristic: Heuristic,
    ) -> None:
        """Initialize the A* search with a heuristic function over states."""
        super().__init__(engine, goal_state, config)
        self.heuristic = heuristic

        self.frontier: list[AStarNode] = []
        """Heap of nodes to be expanded."""

        self.visited: set[str] = set()
        self._num_pushed: int = 0

    def push(self, node: SearchNode) -> None:
        """Add a search node to the frontier, scored by its depth plus the heuristic."""
        h = self.heuristic(node.state)
        heapq.heappush(self.frontier, AStarNode(node.depth + h, self._num_pushed, node, h))
        self._num_pushed += 1

    def search(self, initial_state: State) -> list[Solution]:
        """Search for the first solution reached in order of estimated total cost."""
        self.frontier = []
        self.visited = set()
        self.push(SearchNode(state=initial_state))

        while self.frontier:
            entry = heapq.heappop(self.frontier)
            current = entry.node
            key = self.state_key(current.state)
            already_expanded = key in self.visited
            self.visited.add(key)

            if self.is_goal(current.state):
                return [self.extract_solution(current)]

            if already_expanded:
                continue

            for child in self.expand(current):
                if self.state_key(child.state) not in self.visited:
                    self.push(child)

            self.config.info(
                f"Depth: {current.depth}, Current cost: {entry.f}, Heuristic: {entry.h}, "
                f"{len(self.frontier)} child states.",
            )

        return []

    def log_info(self) -> None:
        """Log the current state of A* search to the console."""
        console.print(f"Current frontier size: {len(self.frontier)}.")
        console.print(f"Current number of visited states: {len(self.visited)}.")
        console.print(f"Nodes expanded: {self._nodes_expanded}.")
