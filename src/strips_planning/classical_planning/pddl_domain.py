"""Define a dataclass to represent PDDL domains."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional, Tuple

from strips_planning.outcome import Outcome

if TYPE_CHECKING:
    from strips_planning.classical_planning.actions import ActionSchema
    from strips_planning.classical_planning.pddl_problem import PDDLProblem
    from strips_planning.io.config import PlannerConfig

TYPING_REQUIREMENT = "typing"

ObjectValues = Mapping[Optional[str], Tuple[str, ...]]
"""Maps each object type (None for undeclared objects) to the objects of that type."""


@dataclass(frozen=True)
class PDDLDomain:
    """A PDDL domain defining the 'universal' aspects of a planning problem."""

    name: str
    """Name of the domain."""

    requirements: frozenset[str]
    """Additional PDDL features required by the domain (e.g., `typing`)."""

    actions: tuple[ActionSchema, ...]
    """The action schemas (i.e., lifted STRIPS actions) of the domain."""

    values: ObjectValues = field(default_factory=dict)
    """Typed objects available for grounding, populated from a problem before grounding."""

    @property
    def requires_typing(self) -> bool:
        """Check whether the domain requires its action parameters to be typed."""
        return TYPING_REQUIREMENT in self.requirements

    @property
    def all_values(self) -> tuple[str, ...]:
        """Retrieve every distinct object across all types, in declaration order."""
        return tuple(dict.fromkeys(obj for objs in self.values.values() for obj in objs))

    def with_values(self, values: ObjectValues) -> PDDLDomain:
        """Return a copy of the domain using the given typed objects."""
        return replace(self, values={t: tuple(objs) for t, objs in values.items()})


def attach_problem(
    domain: PDDLDomain,
    problem: PDDLProblem,
    config: PlannerConfig,
) -> Outcome[PDDLDomain]:
    """Populate a domain's typed object values from a problem.

    :param domain: Domain whose action schemas will be grounded
    :param problem: Problem providing the objects and states
    :param config: Planner configuration (used to report errors)
    :return: Outcome containing the domain with its object values populated
    """
    values = problem.object_values()

    if domain.requires_typing and None in values:
        untyped = ", ".join(values[None])
        message = (
            f":typing is specified in domain '{domain.name}', but objects ({untyped}) have no "
            "declared type. Verify that the problem declares all of its objects."
        )
        config.error(message)
        return Outcome.failed(message)

    return Outcome.succeeded(domain.with_values(values))
