"""Unit tests for extracting plans from planning graphs using GraphPlan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strips_planning.classical_planning import Literal, PDDLProblem, State, apply_action, is_goal
from strips_planning.graphplan import DEFAULT_MAX_GRAPH_LAYERS, GraphPlanner, Plan, graphplan
from strips_planning.io import BufferSink, PlannerConfig
from strips_planning.planning import prepare_engine

if TYPE_CHECKING:
    from strips_planning.classical_planning import PDDLDomain


def replay(plan: Plan, initial_state: State) -> State:
    """Apply each action of a plan in turn, starting from the given state."""
    state = initial_state
    for action in plan.actions:
        state = apply_action(action, state)
    return state


def test_graphplan_blocks_world(
    blocks_domain: PDDLDomain,
    blocks_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that GraphPlan finds a two-step Blocks World plan that achieves the goal."""
    # Arrange - Enable progress messages
    config = PlannerConfig(verbose=True, sink=buffer_sink)

    # Act - Extract a plan using GraphPlan
    success, message, plan = graphplan(blocks_domain, blocks_problem, config)

    # Assert - Expect a plan of two layers (one action each) that reaches the goal
    assert success
    assert message == "Plan found at depth 2."
    assert plan.steps == len(plan.path) == 2
    assert len(plan.layers) == 2
    assert plan.path[-1] == "move a table b"
    assert is_goal(replay(plan, blocks_problem.initial_state), blocks_problem.goal_state)
    assert "Processing graph at layer 1" in buffer_sink.infos
    assert "Processing graph at layer 2" in buffer_sink.infos


def test_graphplan_typed_domain(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that GraphPlan finds the single-step plan in a typed domain."""
    outcome = graphplan(drive_domain, drive_problem, config)

    assert outcome.success
    assert outcome.output is not None
    assert outcome.output.path == ("drive truck1 home store",)
    assert str(outcome.output) == "1. drive truck1 home store"


def test_graphplan_goal_holds_initially(
    lamp_domain: PDDLDomain,
    lamp_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that an empty plan is returned when the initial state satisfies the goal."""
    # Arrange - Require only the literal that already holds initially
    problem = PDDLProblem(lamp_problem.objects, (lamp_problem.initial_state,) * 2)

    # Act - Extract a plan
    outcome = graphplan(lamp_domain, problem, config)

    # Assert - Expect success with zero steps
    assert outcome.success
    assert outcome.output == Plan(())
    assert outcome.output.steps == 0


def test_graphplan_fails_on_mutex_goals(
    drive_domain: PDDLDomain,
    drive_problem: PDDLProblem,
    buffer_sink: BufferSink,
) -> None:
    """Verify that goals mutex at every depth exhaust the layer bound and fail."""
    # Arrange - Require a literal and its negation to hold together, within three layers
    at_home = next(iter(drive_problem.initial_state))
    contradiction = State.from_literals([at_home, at_home.negated()])
    problem = PDDLProblem(drive_problem.objects, (drive_problem.initial_state, contradiction))
    config = PlannerConfig(max_layers=3, verbose=True, sink=buffer_sink)

    # Act - Attempt to extract a plan
    outcome = graphplan(drive_domain, problem, config)

    # Assert - Expect failure after each depth's goals are found to be mutex
    assert not outcome.success
    assert outcome.message == "No plan found within 3 graph layers."
    assert any("are mutex at layer" in message for message in buffer_sink.infos)


def test_graph_planner_depths(
    lamp_domain: PDDLDomain,
    lamp_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that the planner builds graphs of exactly the requested depth."""
    # Arrange - Prepare a grounding engine for the lamp problem
    engine = prepare_engine(lamp_domain, lamp_problem, config).output
    assert engine is not None
    planner = GraphPlanner(engine, lamp_problem)

    # Act - Build graphs of several depths, then solve
    depths = [len(planner.graph(depth)) for depth in (1, 3)]
    outcome = planner.solve()

    # Assert - Expect the requested depths and a one-step plan switching the lamp on
    assert depths == [1, 3]
    assert outcome.output is not None
    assert outcome.output.path == ("turn-on lamp",)
    assert DEFAULT_MAX_GRAPH_LAYERS >= 3


def test_unproduced_negative_goal_is_carried_back(
    lamp_domain: PDDLDomain,
    lamp_problem: PDDLProblem,
    config: PlannerConfig,
) -> None:
    """Verify that a negative goal no action produces must hold in the initial state."""
    # Arrange - Also require the lamp not to be broken (no action mentions `broken`)
    not_broken = State.from_literals(
        [*lamp_problem.goal_state, Literal.negative("broken", "lamp")],
    )
    problem = PDDLProblem(lamp_problem.objects, (lamp_problem.initial_state, not_broken))
    broken_initially = PDDLProblem(
        lamp_problem.objects,
        (
            State.from_literals([*lamp_problem.initial_state, Literal.positive("broken", "lamp")]),
            not_broken,
        ),
    )
    bounded = config.model_copy(update={"max_layers": 2})

    # Act - Extract plans with the lamp initially intact and initially broken
    intact_outcome = graphplan(lamp_domain, problem, bounded)
    broken_outcome = graphplan(lamp_domain, broken_initially, bounded)

    # Assert - Expect a one-step plan only when the lamp starts out intact
    assert intact_outcome.output is not None
    assert intact_outcome.output.path == ("turn-on lamp",)
    assert not broken_outcome.success
