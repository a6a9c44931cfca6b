"""Annotate planning graph layers with mutual exclusion (mutex) relationships.

Four rules are applied to each layer, in order:

    1. Inconsistent effects - an action's effect negates an effect of another item.
    2. Interference - an item's effect negates a precondition of an action.
    3. Negation - two literals produced by the layer are negations of one another.
    4. Inconsistent support - every pair of items producing two literals is mutex.

Before the rules run, each no-op of layer k > 0 inherits the literal mutexes its literal had at
layer k - 1. Rules 1 and 2 start from a non-no-op action, but the other item may be a no-op,
so an action is also mutex with the no-ops carrying literals it negates. The classical
"competing needs" rule (preconditions mutex at the prior layer) is applied only when enabled in
the planner configuration.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import TYPE_CHECKING, Mapping, Union

from strips_planning.classical_planning import GroundAction, Literal

if TYPE_CHECKING:
    from strips_planning.graphplan.planning_graph import GraphLayer, PlanningGraph
    from strips_planning.io.config import PlannerConfig

MutexTarget = Union[GroundAction, Literal]


class MutexReason(str, Enum):
    """The rule that made two items (or two literals) mutually exclusive."""

    INCONSISTENT_EFFECT = "inconsistentEffect"
    INTERFERENCE = "interference"
    NEGATION = "negation"
    INCONSISTENT_SUPPORT = "inconsistentSupport"
    COMPETING_NEEDS = "competingNeeds"


@dataclass(frozen=True)
class MutexRelation:
    """Records that the annotated item or literal conflicts with another, and why."""

    other: MutexTarget
    reason: MutexReason


@dataclass(frozen=True, eq=False)
class MutexLayer:
    """A planning graph layer annotated with its action and literal mutexes."""

    layer: GraphLayer
    action_mutexes: Mapping[GroundAction, frozenset[MutexRelation]]
    """Maps each item of the layer to its mutex relations with other items."""

    literal_mutexes: Mapping[Literal, frozenset[MutexRelation]]
    """Maps each literal produced by the layer to its mutex relations with other literals."""

    def mutexes_of(self, target: MutexTarget) -> frozenset[MutexRelation]:
        """Retrieve the mutex relations of an item or a produced literal of the layer."""
        if isinstance(target, Literal):
            return self.literal_mutexes.get(target, frozenset())
        return self.action_mutexes.get(target, frozenset())

    def actions_mutex(self, first: GroundAction, second: GroundAction) -> bool:
        """Evaluate whether two items of the layer are mutually exclusive."""
        return any(relation.other == second for relation in self.mutexes_of(first))

    def literals_mutex(self, first: Literal, second: Literal) -> bool:
        """Evaluate whether two literals produced by the layer are mutually exclusive."""
        return any(relation.other == second for relation in self.mutexes_of(first))


class _MutexMarker:
    """Accumulates symmetric mutex relations while a layer is analyzed."""

    def __init__(self) -> None:
        self.actions: dict[GroundAction, set[MutexRelation]] = defaultdict(set)
        self.literals: dict[Literal, set[MutexRelation]] = defaultdict(set)
        self._action_partners: dict[GroundAction, set[GroundAction]] = defaultdict(set)

    def mark_actions(self, first: GroundAction, second: GroundAction, reason: MutexReason) -> None:
        if first == second:
            return
        self.actions[first].add(MutexRelation(second, reason))
        self.actions[second].add(MutexRelation(first, reason))
        self._action_partners[first].add(second)
        self._action_partners[second].add(first)

    def mark_literals(self, first: Literal, second: Literal, reason: MutexReason) -> None:
        self.literals[first].add(MutexRelation(second, reason))
        self.literals[second].add(MutexRelation(first, reason))

    def actions_mutex(self, first: GroundAction, second: GroundAction) -> bool:
        return second in self._action_partners.get(first, ())

    def freeze(self, layer: GraphLayer) -> MutexLayer:
        return MutexLayer(
            layer=layer,
            action_mutexes={item: frozenset(rels) for item, rels in self.actions.items()},
            literal_mutexes={lit: frozenset(rels) for lit, rels in self.literals.items()},
        )


def _inherit_literal_mutexes(marker: _MutexMarker, layer: GraphLayer, previous: MutexLayer) -> None:
    """Make no-ops mutex when the literals they carry were mutex at the previous layer."""
    noop_for = {noop.effect[0]: noop for noop in layer.noops}
    for literal, noop in noop_for.items():
        for relation in previous.mutexes_of(literal):
            if not isinstance(relation.other, Literal):
                continue
            other_noop = noop_for.get(relation.other)
            if other_noop is not None:
                marker.mark_actions(noop, other_noop, relation.reason)


def _mark_competing_needs(marker: _MutexMarker, layer: GraphLayer, previous: MutexLayer) -> None:
    """Make items mutex when any of their preconditions were mutex at the previous layer."""
    for first, second in combinations(layer.items, 2):
        if any(
            previous.literals_mutex(pre_1, pre_2)
            for pre_1 in first.precondition
            for pre_2 in second.precondition
        ):
            marker.mark_actions(first, second, MutexReason.COMPETING_NEEDS)


def _mark_inconsistent_effects(marker: _MutexMarker, layer: GraphLayer) -> None:
    for action in layer.actions:
        for effect in action.effect:
            for other in layer.producers_of(effect.negated()):
                marker.mark_actions(action, other, MutexReason.INCONSISTENT_EFFECT)


def _mark_interference(marker: _MutexMarker, layer: GraphLayer) -> None:
    for action in layer.actions:
        for precondition in action.precondition:
            for other in layer.producers_of(precondition.negated()):
                marker.mark_actions(action, other, MutexReason.INTERFERENCE)


def _mark_negation(marker: _MutexMarker, layer: GraphLayer) -> None:
    for literal in layer.effect_literals:
        if layer.producers_of(literal.negated()):
            marker.mark_literals(literal, literal.negated(), MutexReason.NEGATION)


def _mark_inconsistent_support(marker: _MutexMarker, layer: GraphLayer) -> None:
    for first, second in combinations(layer.effect_literals, 2):
        if all(
            marker.actions_mutex(producer_1, producer_2)
            for producer_1 in layer.producers_of(first)
            for producer_2 in layer.producers_of(second)
        ):
            marker.mark_literals(first, second, MutexReason.INCONSISTENT_SUPPORT)


def mark_mutex_layer(
    layer: GraphLayer,
    previous: MutexLayer | None,
    config: PlannerConfig,
) -> MutexLayer:
    """Compute the mutex relations of a single planning graph layer.

    :param layer: Layer to be analyzed
    :param previous: Annotated preceding layer (None for layer 0)
    :param config: Planner configuration (enables the competing needs rule)
    :return: The layer annotated with its action and literal mutexes
    """
    marker = _MutexMarker()

    if previous is not None:
        _inherit_literal_mutexes(marker, layer, previous)
        if config.competing_needs:
            _mark_competing_needs(marker, layer, previous)

    _mark_inconsistent_effects(marker, layer)
    _mark_interference(marker, layer)
    _mark_negation(marker, layer)
    _mark_inconsistent_support(marker, layer)

    return marker.freeze(layer)


def mark_mutex(graph: PlanningGraph, config: PlannerConfig) -> tuple[MutexLayer, ...]:
    """Annotate every layer of a planning graph with its mutex relations, layer 0 first."""
    annotated: list[MutexLayer] = []
    previous: MutexLayer | None = None

    for layer in graph:
        previous = mark_mutex_layer(layer, previous, config)
        annotated.append(previous)

    return tuple(annotated)
