"""Extract plans from mutex-annotated planning graphs by backward search (GraphPlan)."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, product
from typing import TYPE_CHECKING

from strips_planning.classical_planning import GroundAction, Literal, is_goal
from strips_planning.graphplan.mutex import MutexLayer, mark_mutex
from strips_planning.graphplan.planning_graph import build_planning_graph
from strips_planning.io.config import PlannerConfig
from strips_planning.outcome import Outcome
from strips_planning.planning.planner import prepare_engine

if TYPE_CHECKING:
    from strips_planning.classical_planning import (
        GroundingEngine,
        PDDLDomain,
        PDDLProblem,
        State,
    )

DEFAULT_MAX_GRAPH_LAYERS = 12
"""Depth at which extraction gives up when the configuration sets no maximum layer bound."""

Goals = frozenset[Literal]


@dataclass(frozen=True)
class Plan:
    """A layered plan: the actions chosen at each graph layer, first layer first.

    Actions within one layer are pairwise non-mutex, so they may be executed in any order.
    """

    layers: tuple[tuple[GroundAction, ...], ...]

    def __str__(self) -> str:
        """Return a readable, numbered listing of the plan's actions."""
        return "\n".join(f"{i}. {step}" for i, step in enumerate(self.path, start=1))

    @property
    def actions(self) -> tuple[GroundAction, ...]:
        """Retrieve the plan's actions as a sequence (layer by layer)."""
        return tuple(action for layer in self.layers for action in layer)

    @property
    def steps(self) -> int:
        """Retrieve the number of actions in the plan."""
        return len(self.actions)

    @property
    def path(self) -> tuple[str, ...]:
        """Retrieve the rendered actions of the plan (name followed by bound values)."""
        return tuple(str(action) for action in self.actions)


def _goal_order(goal: Literal) -> str:
    return goal.to_pddl()


class GraphPlanner:
    """Plans by growing a planning graph and searching it backward from the goal."""

    def __init__(self, engine: GroundingEngine, problem: PDDLProblem) -> None:
        """Initialize the planner for a problem using a prepared grounding engine.

        :param engine: Grounding engine for the problem's domain (object values populated)
        :param problem: Problem providing the initial state and the goal
        """
        self.engine = engine
        self.problem = problem
        self.config = engine.config

        self._nogoods: set[tuple[int, Goals]] = set()
        """Goal sets known to be unachievable at a given layer of the current graph."""

    def graph(self, depth: int) -> tuple[MutexLayer, ...]:
        """Build a planning graph of exactly `depth` layers and annotate its mutexes."""
        graph = build_planning_graph(
            self.engine,
            self.problem.initial_state,
            min_layers=depth,
            max_layers=depth,
        )
        return mark_mutex(graph, self.config)

    def solve(self) -> Outcome[Plan]:
        """Search graphs of increasing depth for a plan achieving the problem's goal.

        :return: Outcome containing the extracted plan, or a failure if the depth bound is reached
        """
        initial_state = self.problem.initial_state
        goals: Goals = frozenset(self.problem.goal_state.literals)

        if is_goal(initial_state, self.problem.goal_state):
            return Outcome.succeeded(Plan(()), message="The goal holds in the initial state.")

        max_depth = self.config.max_layers or DEFAULT_MAX_GRAPH_LAYERS
        depth = self.config.min_layers

        while depth <= max_depth:
            self.config.info(f"Processing graph at layer {depth}")
            graph = self.graph(depth)

            self._nogoods = set()
            layers = self._extract(graph, len(graph) - 1, goals)
            if layers is not None:
                plan = Plan(tuple(layers))
                return Outcome.succeeded(plan, message=f"Plan found at depth {depth}.")

            depth += 1

        message = f"No plan found within {max_depth} graph layers."
        self.config.info(message)
        return Outcome.failed(message)

    def _holds_initially(self, goals: Goals, initial_state: State) -> bool:
        return all(initial_state.holds(goal) == goal.is_positive for goal in goals)

    def _extract(
        self,
        graph: tuple[MutexLayer, ...],
        index: int,
        goals: Goals,
    ) -> list[tuple[GroundAction, ...]] | None:
        """Find actions at layers 0..index achieving the goals at the literals after `index`.

        :param graph: Mutex-annotated planning graph
        :param index: Index of the action layer that must produce the goals
        :param goals: Literals that must hold after the layer's actions
        :return: Chosen non-no-op actions per layer (layer 0 first), or None on failure
        """
        if index < 0:
            return [] if self._holds_initially(goals, self.problem.initial_state) else None

        if (index, goals) in self._nogoods:
            return None

        mutex_layer = graph[index]
        layer = mutex_layer.layer
        ordered_goals = sorted(goals, key=_goal_order)

        for first, second in combinations(ordered_goals, 2):
            if mutex_layer.literals_mutex(first, second):
                self.config.info(f"Goals {first} and {second} are mutex at layer {index + 1}.")
                self._nogoods.add((index, goals))
                return None

        carried: list[Literal] = []
        supporters: list[tuple[GroundAction, ...]] = []
        for goal in ordered_goals:
            producers = layer.producers_of(goal)
            if producers:
                supporters.append(tuple(sorted(producers, key=lambda a: not a.is_noop)))
            elif goal.is_negative:
                carried.append(goal)  # Holds while no chosen action adds its atom
            else:
                self._nogoods.add((index, goals))
                return None

        for combo in product(*supporters):
            chosen = tuple(dict.fromkeys(combo))
            conflict = next(
                ((a, b) for a, b in combinations(chosen, 2) if mutex_layer.actions_mutex(a, b)),
                None,
            )
            if conflict is not None:
                self.config.info(f"Failed due to mutex between {conflict[0]} and {conflict[1]}.")
                continue

            if any(goal.negated() in action.add_list for goal in carried for action in chosen):
                continue

            preconditions = (lit for action in chosen for lit in action.precondition)
            subgoals: Goals = frozenset((*preconditions, *carried))
            earlier = self._extract(graph, index - 1, subgoals)
            if earlier is not None:
                self.config.info(f"Satisfied goals at layer {index + 1} with {len(chosen)} items.")
                return [*earlier, tuple(action for action in chosen if not action.is_noop)]

        self._nogoods.add((index, goals))
        return None


def graphplan(
    domain: PDDLDomain,
    problem: PDDLProblem,
    config: PlannerConfig | None = None,
) -> Outcome[Plan]:
    """Find a plan for a problem using GraphPlan.

    :param domain: Domain defining the available action schemas
    :param problem: Problem defining the objects, initial state, and goal state
    :param config: Planner configuration (defaults to PlannerConfig())
    :return: Outcome containing the extracted plan, or a failure
    """
    config = config or PlannerConfig()

    prepared = prepare_engine(domain, problem, config)
    if not prepared.success or prepared.output is None:
        return Outcome.failed(prepared.message)

    return GraphPlanner(prepared.output, problem).solve()
