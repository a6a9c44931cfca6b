"""Define classes to represent lifted action schemas and their ground instances."""

from __future__ import annotations

from dataclasses import dataclass, field

from strips_planning.classical_planning.literals import Literal
from strips_planning.classical_planning.parameters import Bindings, TypedParameter

NOOP_NAME = "noop"
"""Name of the synthetic action carrying a literal unchanged between planning graph layers."""


@dataclass(frozen=True)
class ActionSchema:
    """A lifted STRIPS action defining a symbolic transition model.

    Positive effect literals form the add list; negative effect literals form the delete list.
    """

    name: str
    parameters: tuple[TypedParameter, ...]
    precondition: tuple[Literal, ...]
    """Conjunction of literals that must hold (positive) or be absent (negative)."""

    effect: tuple[Literal, ...]

    def __str__(self) -> str:
        """Return a readable string representation of the action schema."""
        return f"{self.name}({', '.join(map(str, self.parameters))})"

    @property
    def arity(self) -> int:
        """Retrieve the number of parameters of the action schema."""
        return len(self.parameters)


@dataclass(frozen=True)
class GroundAction:
    """An action whose parameters have all been bound to concrete objects."""

    name: str
    bindings: Bindings
    precondition: tuple[Literal, ...]
    effect: tuple[Literal, ...]
    schema: ActionSchema | None = field(default=None, compare=False, repr=False)
    """Schema that was grounded to create this action (None for no-op actions)."""

    @classmethod
    def noop(cls, literal: Literal) -> GroundAction:
        """Construct the no-op action carrying the given literal forward unchanged."""
        return cls(NOOP_NAME, Bindings(()), precondition=(literal,), effect=(literal,))

    def __str__(self) -> str:
        """Render the action name followed by its bound values, space-separated."""
        if self.is_noop:
            return f"{NOOP_NAME} {self.effect[0].to_pddl()}"
        return " ".join((self.name, *self.bindings.bound_values))

    @property
    def key(self) -> tuple[str, tuple[str, ...]]:
        """Retrieve the identity of the ground action: its name and bound values."""
        if self.is_noop:
            carried = self.effect[0]
            return (self.name, (carried.polarity.value, carried.name, *carried.parameters))
        return (self.name, self.bindings.bound_values)

    @property
    def is_noop(self) -> bool:
        """Check whether this is a synthetic no-op action."""
        return self.schema is None and self.name == NOOP_NAME

    @property
    def add_list(self) -> tuple[Literal, ...]:
        """Retrieve the positive effect literals of the action."""
        return tuple(literal for literal in self.effect if literal.is_positive)

    @property
    def delete_list(self) -> tuple[Literal, ...]:
        """Retrieve the negative effect literals of the action."""
        return tuple(literal for literal in self.effect if literal.is_negative)
