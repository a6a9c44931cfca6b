"""Define classes to represent literals: predicates applied to arguments, with a polarity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strips_planning.classical_planning.parameters import Bindings


class Polarity(str, Enum):
    """Whether a literal asserts its atom (`and`) or the atom's negation (`not`)."""

    POSITIVE = "and"
    NEGATIVE = "not"

    def flipped(self) -> Polarity:
        """Return the opposite polarity."""
        return Polarity.NEGATIVE if self is Polarity.POSITIVE else Polarity.POSITIVE


@dataclass(frozen=True)
class Literal:
    """A predicate applied to an ordered tuple of arguments, with a polarity.

    Before grounding the arguments are variable names (e.g., `?x`); after grounding they are the
    names of concrete objects.
    """

    name: str
    parameters: tuple[str, ...]
    polarity: Polarity

    @classmethod
    def positive(cls, name: str, *parameters: str) -> Literal:
        """Construct a positive literal from a predicate name and its arguments."""
        return cls(name, tuple(parameters), Polarity.POSITIVE)

    @classmethod
    def negative(cls, name: str, *parameters: str) -> Literal:
        """Construct a negative literal from a predicate name and its arguments."""
        return cls(name, tuple(parameters), Polarity.NEGATIVE)

    def __str__(self) -> str:
        """Return a readable string representation of the literal."""
        return self.to_pddl()

    @property
    def is_positive(self) -> bool:
        """Check whether the literal asserts its atom."""
        return self.polarity is Polarity.POSITIVE

    @property
    def is_negative(self) -> bool:
        """Check whether the literal asserts the negation of its atom."""
        return self.polarity is Polarity.NEGATIVE

    @property
    def atom(self) -> tuple[str, tuple[str, ...]]:
        """Retrieve the literal's atom (predicate name and arguments), ignoring polarity."""
        return (self.name, self.parameters)

    def negated(self) -> Literal:
        """Return the exact negation of this literal."""
        return replace(self, polarity=self.polarity.flipped())

    def as_positive(self) -> Literal:
        """Return the positive literal sharing this literal's atom."""
        return replace(self, polarity=Polarity.POSITIVE)

    def matches_atom(self, other: Literal) -> bool:
        """Evaluate whether two literals share a name and arguments (polarity is ignored)."""
        return self.atom == other.atom

    def substitute(self, bindings: Bindings) -> tuple[Literal, tuple[str, ...]]:
        """Substitute bound values for the literal's parameters.

        Parameters without a binding are left unchanged.

        :param bindings: Maps parameter names to bound objects
        :return: Tuple containing the substituted literal and any unbound parameter names
        """
        unbound = tuple(p for p in self.parameters if p not in bindings)
        values = tuple(bindings.get(p, p) for p in self.parameters)
        return replace(self, parameters=values), unbound

    def to_atom_string(self) -> str:
        """Render the literal's atom in the form `(name p1 p2 ...)`."""
        return f"({' '.join((self.name, *self.parameters))})"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the literal."""
        atom_string = self.to_atom_string()
        return atom_string if self.is_positive else f"(not {atom_string})"
