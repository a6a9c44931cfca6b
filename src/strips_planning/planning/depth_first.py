"""Define a depth-first search over grounded states, driven by an explicit stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from strips_planning.planning.state_space_search import SearchNode, Solution, StateSpaceSearch

if TYPE_CHECKING:
    from strips_planning.classical_planning import State


@dataclass
class _DepthFirstFrame:
    """The children of a node being explored, with the visited set local to that node."""

    visited: set[str]
    """Snapshot of the parent's visited set, extended as this node's children are explored."""

    children: Iterator[SearchNode]


class DepthFirstSearch(StateSpaceSearch):
    """Depth-first search returning up to `max_solutions` solution paths.

    Each node receives a snapshot of its parent's visited set and extends it locally as its
    children are explored. Siblings see each other's visits, but separate branches do not share
    visited states, so distinct solutions may pass through a common state while no single path
    ever revisits a state.
    """

    strategy_name = "depth-first-search"

    def search(self, initial_state: State) -> list[Solution]:
        """Search depth-first for solutions starting from the given state."""
        root = SearchNode(state=initial_state)
        if self.is_goal(root.state):
            return [self.extract_solution(root)]

        solutions: list[Solution] = []
        stack = [self._open(root, {self.state_key(initial_state)})]

        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            if child is None:
                stack.pop()
                continue

            key = self.state_key(child.state)
            if key in frame.visited:
                continue
            frame.visited.add(key)

            if self.is_goal(child.state):
                solutions.append(self.extract_solution(child))
                if len(solutions) >= self.config.max_solutions:
                    return solutions
                continue

            stack.append(self._open(child, set(frame.visited)))

        return solutions

    def _open(self, node: SearchNode, visited: set[str]) -> _DepthFirstFrame:
        children = self.expand(node)
        self.config.info(f"Depth: {node.depth}, {len(children)} child states.")
        return _DepthFirstFrame(visited, iter(children))
