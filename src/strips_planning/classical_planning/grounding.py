"""Ground action schemas into concrete actions and apply them to states.

Grounding enumerates every legal binding of an action schema's parameters to the objects of a
problem, tests each grounded precondition against a state, and substitutes the same bindings
into the schema's effects.
"""

from __future__ import annotations

from itertools import permutations, product
from typing import TYPE_CHECKING, Iterable, Sequence

from strips_planning.classical_planning.actions import ActionSchema, GroundAction
from strips_planning.classical_planning.parameters import Bindings
from strips_planning.classical_planning.states import State
from strips_planning.outcome import Outcome

if TYPE_CHECKING:
    from strips_planning.classical_planning.literals import Literal
    from strips_planning.classical_planning.pddl_domain import PDDLDomain
    from strips_planning.io.config import PlannerConfig

Combination = tuple[str, ...]
"""A tuple of concrete objects, one per parameter of an action schema."""


def parameter_combinations(
    domain: PDDLDomain,
    schema: ActionSchema,
    config: PlannerConfig,
) -> Outcome[list[Combination]]:
    """Enumerate all legal bindings of the given schema's parameters.

    If the domain requires typing, each parameter ranges over the objects of its declared type;
    otherwise every parameter ranges over all objects. In `fast` mode, no object is used twice
    within one binding.

    :param domain: Domain whose object values are enumerated
    :param schema: Action schema whose parameters are bound
    :param config: Planner configuration (enumeration mode and error reporting)
    :return: Outcome containing the distinct combinations, in enumeration order
    """
    combinations: Iterable[Combination]

    if domain.requires_typing:
        candidates: list[tuple[str, ...]] = []
        for parameter in schema.parameters:
            if parameter.object_type is None:
                message = (
                    f":typing is specified, but no type found in action '{schema.name}' "
                    f"for parameter '{parameter.name}'."
                )
                config.error(message)
                return Outcome.failed(message)

            objects = domain.values.get(parameter.object_type)
            if not objects:
                message = (
                    f"No objects of type '{parameter.object_type}' found for parameter "
                    f"'{parameter.name}' of action '{schema.name}'."
                )
                config.error(message)
                return Outcome.failed(message)

            candidates.append(tuple(objects))

        combinations = product(*candidates)
    elif config.fast:
        combinations = permutations(domain.all_values, schema.arity)
    else:
        combinations = product(domain.all_values, repeat=schema.arity)

    if config.fast:
        combinations = (c for c in combinations if len(set(c)) == len(c))

    return Outcome.succeeded(list(dict.fromkeys(combinations)))


def is_precondition_satisfied(state: State, precondition: Sequence[Literal]) -> bool:
    """Evaluate whether a grounded precondition is satisfied in a state.

    Every positive literal must be matched in the state, while a negative literal whose atom is
    present vetoes the precondition outright.
    """
    and_count = sum(1 for literal in precondition if literal.is_positive)
    match_count = 0

    for literal in precondition:
        if state.holds(literal):
            if literal.is_negative:
                return False
            match_count += 1

    return match_count == and_count


def apply_action(action: GroundAction, state: State) -> State:
    """Apply a ground action's effects to a state, producing a new state.

    Positive effects add literals that are not already present in the input state; negative
    effects remove literals that are present in the input state. The input is never modified.
    """
    added = {literal for literal in action.add_list if not state.holds(literal)}
    deleted_atoms = {literal.atom for literal in action.delete_list}
    kept = (literal for literal in state.literals if literal.atom not in deleted_atoms)
    return State(frozenset(kept).union(added))


def is_goal(state: State, goal_state: State) -> bool:
    """Evaluate whether a state satisfies every literal of a goal state.

    Positive goal literals must be present in the state and negative goal literals must be absent.
    """
    for goal_literal in goal_state:
        if state.holds(goal_literal) != goal_literal.is_positive:
            return False
    return True


class GroundingEngine:
    """Grounds the action schemas of a domain against the domain's object values."""

    def __init__(self, domain: PDDLDomain, config: PlannerConfig) -> None:
        """Initialize the engine, precomputing parameter combinations for each schema.

        Schemas whose combinations cannot be enumerated are reported and yield no actions.

        :param domain: Domain with its object values already populated
        :param config: Planner configuration used for enumeration and diagnostics
        """
        self.domain = domain
        self.config = config

        self.configuration_errors: list[str] = []
        """Messages describing schemas that could not be grounded."""

        if not domain.values:
            self._report_configuration_error("No parameter values found in the domain values.")

        self._known_objects = frozenset(domain.all_values)
        self._combinations: list[list[Combination]] = []
        for schema in domain.actions:
            outcome = parameter_combinations(domain, schema, config)
            if not outcome.success:
                self.configuration_errors.append(outcome.message)
            self._combinations.append(outcome.output or [])

    def _report_configuration_error(self, message: str) -> None:
        self.config.error(message)
        self.configuration_errors.append(message)

    @property
    def is_valid(self) -> bool:
        """Check whether every schema of the domain was grounded without error."""
        return not self.configuration_errors

    def ground(self, schema: ActionSchema, values: Combination) -> GroundAction:
        """Ground a schema using the given values for its parameters.

        Effect parameters that are neither bound nor known objects are reported, and the
        corresponding literal is left unsubstituted.

        :param schema: Action schema to be grounded
        :param values: Concrete objects bound to the schema's parameters, in order
        :return: Constructed ground action
        """
        bindings = Bindings.for_parameters(schema.parameters, values)
        precondition = tuple(literal.substitute(bindings)[0] for literal in schema.precondition)
        return self._complete(schema, bindings, precondition)

    def _complete(
        self,
        schema: ActionSchema,
        bindings: Bindings,
        precondition: tuple[Literal, ...],
    ) -> GroundAction:
        effect: list[Literal] = []
        for literal in schema.effect:
            substituted, unbound = literal.substitute(bindings)
            for parameter in unbound:
                if parameter not in self._known_objects:
                    self.config.error(
                        f"Value not found for parameter {parameter} in effect {literal} "
                        f"of action '{schema.name}'.",
                    )
            effect.append(substituted)

        return GroundAction(schema.name, bindings, precondition, tuple(effect), schema=schema)

    def applicable_actions(self, state: State) -> list[GroundAction]:
        """Find every ground action whose precondition is satisfied in the given state.

        Actions are returned in a stable order (schema order, then binding enumeration order);
        duplicates of an already-found name and binding are dropped.
        """
        found: dict[tuple[str, tuple[str, ...]], GroundAction] = {}

        for schema, combinations in zip(self.domain.actions, self._combinations):
            for values in combinations:
                bindings = Bindings.for_parameters(schema.parameters, values)
                precondition = tuple(lit.substitute(bindings)[0] for lit in schema.precondition)
                if not is_precondition_satisfied(state, precondition):
                    continue

                action = self._complete(schema, bindings, precondition)
                found.setdefault(action.key, action)

        return list(found.values())

    def applicable_actions_plus(self, state: State) -> list[GroundAction]:
        """Find applicable ground actions in a state that may contain negative literals.

        Applicability is computed once using only the state's positive literals, and once after
        cancelling each positive literal whose negation is also present. The two results are
        merged, keeping the first occurrence of each action.
        """
        positive_only = state.positive_literals()
        found = {action.key: action for action in self.applicable_actions(positive_only)}
        for action in self.applicable_actions(state.without_negated_atoms()):
            found.setdefault(action.key, action)
        return list(found.values())

    def apply_action(self, action: GroundAction, state: State) -> State:
        """Apply a ground action to a state (see `apply_action()`)."""
        return apply_action(action, state)

    def child_states(self, state: State) -> list[tuple[State, GroundAction]]:
        """Compute the successor of a state under each applicable action, in action order."""
        return [(apply_action(action, state), action) for action in self.applicable_actions(state)]

    def is_goal(self, state: State, goal_state: State) -> bool:
        """Evaluate whether a state satisfies a goal state (see `is_goal()`)."""
        return is_goal(state, goal_state)
