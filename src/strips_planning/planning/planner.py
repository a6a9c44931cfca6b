"""Solve planning problems using depth-first, breadth-first, or A* search."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strips_planning.classical_planning import GroundingEngine, attach_problem
from strips_planning.io.config import PlannerConfig, SearchStrategy
from strips_planning.outcome import Outcome
from strips_planning.planning.a_star import AStarSearch, Heuristic
from strips_planning.planning.breadth_first import BreadthFirstSearch
from strips_planning.planning.depth_first import DepthFirstSearch

if TYPE_CHECKING:
    from strips_planning.classical_planning import PDDLDomain, PDDLProblem
    from strips_planning.planning.state_space_search import Solution, StateSpaceSearch


def prepare_engine(
    domain: PDDLDomain,
    problem: PDDLProblem,
    config: PlannerConfig,
) -> Outcome[GroundingEngine]:
    """Construct a grounding engine for a problem, populating object values if needed.

    :param domain: Domain to be grounded (its object values are taken from the problem if empty)
    :param problem: Problem providing the objects to ground with
    :param config: Planner configuration
    :return: Outcome containing the grounding engine, or a failure describing the errors
    """
    if not domain.values:
        attached = attach_problem(domain, problem, config)
        if not attached.success or attached.output is None:
            return Outcome.failed(attached.message)
        domain = attached.output

    engine = GroundingEngine(domain, config)
    if not engine.is_valid:
        return Outcome.failed(" ".join(engine.configuration_errors))

    return Outcome.succeeded(engine)


def solve(
    domain: PDDLDomain,
    problem: PDDLProblem,
    config: PlannerConfig | None = None,
    heuristic: Heuristic | None = None,
) -> Outcome[list[Solution]]:
    """Find plans transforming the problem's initial state into one satisfying its goal.

    Passing a heuristic selects A* search; otherwise `config.strategy` selects depth-first
    (the default) or breadth-first search.

    :param domain: Domain defining the available action schemas
    :param problem: Problem defining the objects, initial state, and goal state
    :param config: Planner configuration (defaults to PlannerConfig())
    :param heuristic: Optional estimate of the remaining cost from a state to the goal
    :return: Outcome containing the solutions found (empty if the goal is unreachable)
    """
    config = config or PlannerConfig()

    if heuristic is not None and not callable(heuristic):
        message = (
            "The heuristic must be a function over states to serve as the A* search heuristic."
        )
        config.error(message)
        return Outcome.failed(message)

    if heuristic is None and config.strategy is SearchStrategy.ASTAR:
        message = "A* search requires a heuristic function."
        config.error(message)
        return Outcome.failed(message)

    prepared = prepare_engine(domain, problem, config)
    if not prepared.success or prepared.output is None:
        return Outcome.failed(prepared.message)
    engine = prepared.output

    search: StateSpaceSearch
    if heuristic is not None:
        search = AStarSearch(engine, problem.goal_state, config, heuristic)
    elif config.strategy is SearchStrategy.BFS:
        search = BreadthFirstSearch(engine, problem.goal_state, config)
    else:
        search = DepthFirstSearch(engine, problem.goal_state, config)

    config.info(f"Using {search.strategy_name}.")
    solutions = search.search(problem.initial_state)

    if not solutions:
        return Outcome.succeeded(solutions, message="No solution found.")
    return Outcome.succeeded(solutions, message=f"Found {len(solutions)} solution(s).")
