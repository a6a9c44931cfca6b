"""Define an iterative breadth-first search over grounded states."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from strips_planning.planning.state_space_search import SearchNode, Solution, StateSpaceSearch

if TYPE_CHECKING:
    from strips_planning.classical_planning import State


class BreadthFirstSearch(StateSpaceSearch):
    """Breadth-first search returning up to `max_solutions` shortest solution paths.

    A single visited set is shared by the whole search: once a state has been expanded anywhere,
    it is never expanded again.
    """

    strategy_name = "breadth-first-search"

    def search(self, initial_state: State) -> list[Solution]:
        """Search breadth-first for solutions, returned in discovery order."""
        fringe: deque[SearchNode] = deque([SearchNode(state=initial_state)])
        visited: set[str] = set()
        solutions: list[Solution] = []

        while fringe:
            current = fringe.popleft()
            key = self.state_key(current.state)
            already_expanded = key in visited
            visited.add(key)

            if self.is_goal(current.state):
                solutions.append(self.extract_solution(current))
                if len(solutions) >= self.config.max_solutions:
                    return solutions
                continue

            if already_expanded:
                continue

            for child in self.expand(current):
                if self.state_key(child.state) not in visited:
                    fringe.append(child)

            self.config.info(f"Depth: {current.depth}, {len(fringe)} child states.")

        return solutions
