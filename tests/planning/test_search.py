"""Unit tests for depth-first, breadth-first, and A* state-space search."""

from __future__ import annotations

import inspect
import sys

import pytest

from strips_planning.classical_planning import (
    ActionSchema,
    Literal,
    ObjectDeclaration,
    PDDLDomain,
    PDDLProblem,
    State,
    TypedParameter,
    apply_action,
    is_goal,
)
from strips_planning.io import BufferSink, PlannerConfig, SearchStrategy
from strips_planning.planning import (
    AStarSearch,
    BreadthFirstSearch,
    DepthFirstSearch,
    Solution,
    prepare_engine,
    solve,
)

def replay(solution: Solution, initial_state: State) -> State:
    """Apply each action of a solution in turn, starting from the given state."""
    state = initial_state
    for action in solution.actions:
        state = apply_action(action, state)
    return state


def test_depth_first_blocks_world(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that depth-first search finds a Blocks World plan that achieves the goal."""
    # Arrange - Fixtures provide the untyped Blocks World domain and problem

    # Act - Solve the problem using the default (depth-first) strategy
    success, message, solutions = solve(blocks_domain, blocks_problem, config)

    # Assert - Expect one solution whose replayed path satisfies the goal
    assert success
    assert message == "Found 1 solution(s)."
    assert len(solutions) == 1
    solution = solutions[0]
    assert solution.steps == len(solution.path) == len(solution.actions)
    assert is_goal(replay(solution, blocks_problem.initial_state), blocks_problem.goal_state)


def test_breadth_first_finds_shortest_plan(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that breadth-first search finds a two-step Blocks World plan."""
    # Arrange - Select breadth-first search
    config = PlannerConfig(strategy=SearchStrategy.BFS, sink=buffer_sink)

    # Act - Solve the Blocks World problem
    outcome = solve(blocks_domain, blocks_problem, config)

    # Assert - Expect the shortest plan: move `c` off of `a`, then stack `a` onto `b`
    assert outcome.success
    assert outcome.output is not None
    solution = outcome.output[0]
    assert solution.steps == 2
    assert solution.path[-1] == "move a table b"
    assert is_goal(replay(solution, blocks_problem.initial_state), blocks_problem.goal_state)


def test_a_star_with_constant_heuristic_matches_breadth_first(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that A* with a 0-at-goal, constant-elsewhere heuristic finds a shortest plan."""
    # Arrange - Define a heuristic returning 0 for goal states and 1 otherwise
    goal_state = blocks_problem.goal_state

    def heuristic(state: State) -> float:
        return 0.0 if is_goal(state, goal_state) else 1.0

    engine = prepare_engine(blocks_domain, blocks_problem, config).output
    assert engine is not None
    bfs = BreadthFirstSearch(engine, goal_state, config)

    # Act - Search using A* and breadth-first search
    outcome = solve(blocks_domain, blocks_problem, config, heuristic=heuristic)
    bfs_solutions = bfs.search(blocks_problem.initial_state)

    # Assert - Expect A* to return a single solution as short as breadth-first search's
    assert outcome.success
    assert outcome.output is not None
    assert len(outcome.output) == 1
    assert outcome.output[0].steps == bfs_solutions[0].steps == 2


def test_a_star_reports_search_status(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    config: PlannerConfig,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Verify that A* search can print its frontier and visited set sizes."""
    # Arrange - Construct an A* search using a zero heuristic
    engine = prepare_engine(drive_domain, drive_problem, config).output
    assert engine is not None
    search = AStarSearch(engine, drive_problem.goal_state, config, heuristic=lambda _: 0.0)

    # Act - Search, then print the search status
    solutions = search.search(drive_problem.initial_state)
    search.log_info()

    # Assert - Expect the single-step plan and a printed summary
    assert [solution.path for solution in solutions] == [("drive truck1 home store",)]
    assert search.nodes_expanded >= 1
    assert "Current number of visited states" in capsys.readouterr().out


def test_non_callable_heuristic_is_rejected(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    config: PlannerConfig,
    buffer_sink: BufferSink,
) -> None:
    """Verify that a heuristic which is not a function is reported as an error."""
    outcome = solve(blocks_domain, blocks_problem, config, heuristic=3)  # type: ignore[arg-type]

    assert not outcome.success
    assert "heuristic" in outcome.message
    assert outcome.message in buffer_sink.errors


def test_a_star_strategy_requires_heuristic(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that selecting A* without passing a heuristic fails."""
    config = PlannerConfig(strategy=SearchStrategy.ASTAR, sink=buffer_sink)

    outcome = solve(blocks_domain, blocks_problem, config)

    assert not outcome.success
    assert buffer_sink.errors == ["A* search requires a heuristic function."]


@pytest.mark.parametrize("strategy", [SearchStrategy.DFS, SearchStrategy.BFS])
def test_unreachable_goal_yields_no_solutions(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    buffer_sink: BufferSink,
    strategy: SearchStrategy,
) -> None:
    """Verify that exhausting the search space succeeds with an empty list of solutions."""
    # Arrange - Replace the goal with one requiring a literal and its negation to hold together
    at_home = next(iter(drive_problem.initial_state))
    contradiction = State.from_literals([at_home, at_home.negated()])
    unreachable = PDDLProblem(drive_problem.objects, (drive_problem.initial_state, contradiction))
    config = PlannerConfig(strategy=strategy, verbose=True, sink=buffer_sink)

    # Act - Search for a solution
    outcome = solve(drive_domain, unreachable, config)

    # Assert - Expect success without solutions, and progress messages in the sink
    assert outcome.success
    assert outcome.output == []
    assert outcome.message == "No solution found."
    assert buffer_sink.infos


def test_searches_share_solution_format(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that depth- and breadth-first search agree on a problem with a unique plan."""
    engine = prepare_engine(drive_domain, drive_problem, config).output
    assert engine is not None

    dfs = DepthFirstSearch(engine, drive_problem.goal_state, config)
    bfs = BreadthFirstSearch(engine, drive_problem.goal_state, config)

    assert dfs.search(drive_problem.initial_state) == bfs.search(drive_problem.initial_state)


def test_depth_first_returns_distinct_paths_through_a_shared_state(
    roads_domain: PDDLDomain,
    diamond_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that depth-first branches keep separate visited sets, unlike breadth-first search."""
    # Arrange - Allow more solutions than the diamond's two routes
    dfs_config = PlannerConfig(max_solutions=3, sink=buffer_sink)
    bfs_config = PlannerConfig(max_solutions=3, strategy=SearchStrategy.BFS, sink=buffer_sink)

    # Act - Search the diamond using both strategies
    dfs_outcome = solve(roads_domain, diamond_problem, dfs_config)
    bfs_outcome = solve(roads_domain, diamond_problem, bfs_config)

    # Assert - Expect both routes through `r` from DFS, but only the first from BFS
    assert dfs_outcome.output is not None
    assert [solution.path for solution in dfs_outcome.output] == [
        ("go s p", "go p r", "go r g"),
        ("go s q", "go q r", "go r g"),
    ]
    assert bfs_outcome.output is not None
    assert [solution.path for solution in bfs_outcome.output] == [("go s p", "go p r", "go r g")]


def test_breadth_first_returns_solutions_by_increasing_length(
    roads_domain: PDDLDomain,
    shortcut_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that breadth-first search returns multiple solutions, shortest first."""
    # Arrange - Allow up to three solutions
    config = PlannerConfig(max_solutions=3, strategy=SearchStrategy.BFS, sink=buffer_sink)

    # Act - Search for routes from `s` to `g`
    outcome = solve(roads_domain, shortcut_problem, config)

    # Assert - Expect the direct road first, then the detour through `p`
    assert outcome.output is not None
    assert [solution.path for solution in outcome.output] == [
        ("go s g",),
        ("go s p", "go p g"),
    ]
    assert [solution.steps for solution in outcome.output] == [1, 2]


def test_depth_first_search_runs_deeper_than_the_recursion_limit(config: PlannerConfig) -> None:
    """Verify that depth-first search follows paths longer than the interpreter's call stack."""
    # Arrange - Define a problem whose only plans fill each of 120 slots, one per step
    fill = ActionSchema(
        name="fill",
        parameters=(TypedParameter("?s"),),
        precondition=(Literal.negative("full", "?s"),),
        effect=(Literal.positive("full", "?s"),),
    )
    domain = PDDLDomain(name="slots", requirements=frozenset(), actions=(fill,))
    slots = tuple(f"slot{i:03d}" for i in range(120))
    goal_state = State.from_literals(Literal.positive("full", slot) for slot in slots)
    problem = PDDLProblem((ObjectDeclaration(slots),), (State.from_literals([]), goal_state))

    original_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(len(inspect.stack(0)) + 60)

    # Act - Search with a recursion limit well below the plan's length
    try:
        outcome = solve(domain, problem, config)
    finally:
        sys.setrecursionlimit(original_limit)

    # Assert - Expect a single plan filling every slot
    assert outcome.output is not None
    assert [solution.steps for solution in outcome.output] == [120]
    assert is_goal(replay(outcome.output[0], problem.initial_state), goal_state)


def test_a_star_progress_reports_heuristic(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that verbose A* progress messages include each expanded node's heuristic value."""
    config = PlannerConfig(verbose=True, sink=buffer_sink)

    solve(drive_domain, drive_problem, config, heuristic=lambda _: 1.0)

    assert "Using A*." in buffer_sink.infos
    assert any("Current cost: 1.0, Heuristic: 1.0" in message for message in buffer_sink.infos)
