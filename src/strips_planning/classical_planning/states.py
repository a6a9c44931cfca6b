"""Define a class to represent symbolic states as sets of literals."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import cached_property

from strips_planning.classical_planning.literals import Literal


@dataclass(frozen=True)
class State:
    """A state is the set of literals (i.e., facts) asserted in the world.

    States are compared structurally: two states holding the same literals are equal regardless
    of the order in which their literals were inserted.
    """

    literals: frozenset[Literal]

    @classmethod
    def from_literals(cls, literals: Iterable[Literal]) -> State:
        """Construct a state from any iterable of literals (duplicates are merged)."""
        return cls(frozenset(literals))

    def __contains__(self, literal: Literal) -> bool:
        """Evaluate whether the exact literal (including polarity) is in the state."""
        return literal in self.literals

    def __iter__(self) -> Iterator[Literal]:
        """Iterate over the state's literals in canonical (sorted) order."""
        return iter(sorted(self.literals, key=Literal.to_pddl))

    def __len__(self) -> int:
        """Return the number of literals in the state."""
        return len(self.literals)

    def __str__(self) -> str:
        """Create a readable string representation of the state."""
        return f"State({self.canonical_string})"

    @cached_property
    def _atoms(self) -> frozenset[tuple[str, tuple[str, ...]]]:
        return frozenset(literal.atom for literal in self.literals)

    def holds(self, literal: Literal) -> bool:
        """Evaluate whether any literal in the state shares the given literal's atom."""
        return literal.atom in self._atoms

    @cached_property
    def canonical_string(self) -> str:
        """Render the state's literals, lexicographically sorted and joined by spaces."""
        return " ".join(sorted(literal.to_pddl() for literal in self.literals))

    def positive_literals(self) -> State:
        """Return the state containing only this state's positive literals."""
        return State(frozenset(literal for literal in self.literals if literal.is_positive))

    def without_negated_atoms(self) -> State:
        """Return the positive literals whose negation is not also present in this state."""
        negated = {literal.as_positive() for literal in self.literals if literal.is_negative}
        return State(
            frozenset(lit for lit in self.literals if lit.is_positive and lit not in negated),
        )

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the state."""
        all_literals = "\n\t".join(literal.to_pddl() for literal in self)
        return f"(and\n\t{all_literals}\n)"
