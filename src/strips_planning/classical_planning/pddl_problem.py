"""Define dataclasses to represent PDDL problems."""

from __future__ import annotations

from dataclasses import dataclass

from strips_planning.classical_planning.states import State


@dataclass(frozen=True)
class ObjectDeclaration:
    """Declares objects of a single type (e.g., `a b c - block`)."""

    names: tuple[str, ...]
    object_type: str | None = None


@dataclass(frozen=True)
class PDDLProblem:
    """A PDDL problem defines typed objects, an initial state, and a goal state."""

    objects: tuple[ObjectDeclaration, ...]
    states: tuple[State, State]
    """The initial state (index 0) and the goal state (index 1)."""

    @property
    def initial_state(self) -> State:
        """Retrieve the initial state of the problem."""
        return self.states[0]

    @property
    def goal_state(self) -> State:
        """Retrieve the goal state of the problem."""
        return self.states[1]

    def type_of(self, object_name: str) -> str | None:
        """Look up the declared type of the named object (None if undeclared or untyped)."""
        for declaration in self.objects:
            if object_name in declaration.names:
                return declaration.object_type
        return None

    def object_values(self) -> dict[str | None, tuple[str, ...]]:
        """Group every object of the problem by its declared type.

        Objects are collected from the literals of both states (in canonical order), followed by
        any declared objects that no state mentions.

        :return: Map from each object type (None if undeclared) to its objects
        """
        seen: dict[str, None] = {}
        for state in self.states:
            for literal in state:
                seen.update(dict.fromkeys(literal.parameters))
        for declaration in self.objects:
            seen.update(dict.fromkeys(declaration.names))

        grouped: dict[str | None, list[str]] = {}
        for object_name in seen:
            grouped.setdefault(self.type_of(object_name), []).append(object_name)

        return {object_type: tuple(names) for object_type, names in grouped.items()}
