"""Build leveled planning graphs of alternating literal and action layers.

Each layer holds the literals P_i it starts from, a no-op action carrying each of those literals
forward, and every ground action applicable over P_i. The effects of a layer's items form the
literals P_(i+1) from which the next layer is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from strips_planning.classical_planning import GroundAction, Literal, State

if TYPE_CHECKING:
    from strips_planning.classical_planning import GroundingEngine

PlanningGraph = tuple["GraphLayer", ...]
"""An ordered sequence of planning graph layers (layer 0 first)."""


@dataclass(frozen=True)
class GraphLayer:
    """A single layer of a planning graph."""

    literals: tuple[Literal, ...]
    """The distinct literals this layer starts from (P_i)."""

    items: tuple[GroundAction, ...]
    """No-op actions for each literal, followed by the applicable ground actions."""

    done: bool = False
    """True if the layer introduced no new literals and no new actions (leveled off)."""

    @cached_property
    def actions(self) -> tuple[GroundAction, ...]:
        """Retrieve the ground actions of the layer (excluding no-ops)."""
        return tuple(item for item in self.items if not item.is_noop)

    @cached_property
    def noops(self) -> tuple[GroundAction, ...]:
        """Retrieve the no-op actions of the layer."""
        return tuple(item for item in self.items if item.is_noop)

    @cached_property
    def producers(self) -> dict[Literal, tuple[GroundAction, ...]]:
        """Map each effect literal of the layer to the items producing it, in item order."""
        index: dict[Literal, list[GroundAction]] = {}
        for item in self.items:
            for literal in dict.fromkeys(item.effect):
                index.setdefault(literal, []).append(item)
        return {literal: tuple(items) for literal, items in index.items()}

    @property
    def effect_literals(self) -> tuple[Literal, ...]:
        """Retrieve the distinct literals produced by the layer (P_(i+1)), in first-seen order."""
        return tuple(self.producers)

    def producers_of(self, literal: Literal) -> tuple[GroundAction, ...]:
        """Retrieve the items of the layer whose effects contain the given literal."""
        return self.producers.get(literal, ())


def initial_graph_layer(engine: GroundingEngine, initial_state: State) -> GraphLayer:
    """Build layer 0 from the initial state: a no-op per literal plus its applicable actions."""
    literals = tuple(initial_state)
    noops = tuple(GroundAction.noop(literal) for literal in literals)
    actions = tuple(engine.applicable_actions_plus(initial_state))
    return GraphLayer(literals=literals, items=noops + actions)


def next_graph_layer(
    engine: GroundingEngine,
    previous: GraphLayer,
    skip_negative_literals: bool = False,
    index: int = 1,
) -> GraphLayer:
    """Build the layer following the given one.

    :param engine: Grounding engine used to find the actions applicable over the new literals
    :param previous: Layer whose effects become the literals of the new layer
    :param skip_negative_literals: Whether to drop negative effect literals
    :param index: Index of the new layer within its graph (used for diagnostics)
    :return: Constructed layer, flagged as done if the graph has leveled off
    """
    literals = tuple(
        literal
        for literal in previous.effect_literals
        if not (skip_negative_literals and literal.is_negative)
    )
    noops = tuple(GroundAction.noop(literal) for literal in literals)
    actions = tuple(engine.applicable_actions_plus(State.from_literals(literals)))

    engine.config.info(
        f"P{index - 1}: {len(previous.literals)}, A{index - 1}: {len(previous.actions)}, "
        f"P{index}: {len(literals)}, A{index}: {len(actions)}",
    )

    leveled_off = len(literals) == len(previous.literals) and len(actions) == len(
        previous.actions,
    )
    return GraphLayer(literals=literals, items=noops + actions, done=leveled_off)


def build_planning_graph(
    engine: GroundingEngine,
    initial_state: State,
    min_layers: int | None = None,
    max_layers: int | None = None,
    skip_negative_literals: bool | None = None,
) -> PlanningGraph:
    """Build a planning graph until it levels off, subject to layer bounds.

    Layer bounds and the negative literal option default to those of the engine's config.

    :param engine: Grounding engine for the domain being planned in
    :param initial_state: State from which layer 0 is built
    :param min_layers: Minimum number of layers (forces growth past leveling off)
    :param max_layers: Maximum number of layers (None for no bound)
    :param skip_negative_literals: Whether negative effect literals are dropped between layers
    :return: Tuple of constructed graph layers
    """
    config = engine.config
    min_layers = config.min_layers if min_layers is None else min_layers
    max_layers = config.max_layers if max_layers is None else max_layers
    if skip_negative_literals is None:
        skip_negative_literals = config.skip_negative_literals

    graph = [initial_graph_layer(engine, initial_state)]
    layer = next_graph_layer(engine, graph[0], skip_negative_literals, index=1)

    while (not layer.done or len(graph) < min_layers) and (
        max_layers is None or len(graph) < max_layers
    ):
        config.info(f"Processing layer {len(graph)}")
        graph.append(layer)
        layer = next_graph_layer(engine, layer, skip_negative_literals, index=len(graph))

    return tuple(graph)
