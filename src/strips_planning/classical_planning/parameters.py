"""Define classes to represent typed action parameters and their bindings."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TypedParameter:
    """A parameter of an action schema, with an optional object type."""

    name: str  # Name of the lifted parameter (e.g., `?x`)
    object_type: str | None = None  # Object type expected by the parameter, if typed

    def __str__(self) -> str:
        """Create a readable string representation of the typed parameter."""
        return self.name if self.object_type is None else f"{self.name} - {self.object_type}"


@dataclass(frozen=True)
class Bindings(Mapping[str, str]):
    """An ordered mapping from parameter names to their bound concrete objects."""

    pairs: tuple[tuple[str, str], ...]
    """Parameter-object pairs, in the order of the schema's parameters."""

    @classmethod
    def for_parameters(
        cls,
        parameters: Sequence[TypedParameter],
        values: Sequence[str],
    ) -> Bindings:
        """Bind the given values to the given schema parameters, in order.

        :param parameters: Parameters of an action schema
        :param values: Concrete objects to bind, one per parameter
        :return: Constructed Bindings instance
        :raises ValueError: If the values don't cover each parameter exactly once
        """
        if len(parameters) != len(values):
            raise ValueError(
                f"Expected {len(parameters)} values to bind parameters "
                f"({', '.join(p.name for p in parameters)}) but received {len(values)}.",
            )

        names = [p.name for p in parameters]
        if len(set(names)) != len(names):
            raise ValueError(f"Parameter names must be unique, got: {', '.join(names)}.")

        return cls(tuple(zip(names, values)))

    def __getitem__(self, name: str) -> str:
        """Retrieve the object bound to the named parameter."""
        for param_name, value in self.pairs:
            if param_name == name:
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the bound parameter names, in schema order."""
        return (param_name for param_name, _ in self.pairs)

    def __len__(self) -> int:
        """Return the number of bound parameters."""
        return len(self.pairs)

    @property
    def bound_values(self) -> tuple[str, ...]:
        """Retrieve the bound objects, in schema order."""
        return tuple(value for _, value in self.pairs)
