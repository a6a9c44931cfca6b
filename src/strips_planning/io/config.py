"""Define a Pydantic model for the options shared by every planner entry point."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from strips_planning.io.logging import ConsoleSink, OutputLevel, OutputSink


class SearchStrategy(str, Enum):
    """State-space search strategies available to the planner."""

    DFS = "dfs"
    BFS = "bfs"
    ASTAR = "astar"


class PlannerConfig(BaseModel):
    """Options threaded explicitly into grounding, search, and GraphPlan."""

    fast: bool = False
    """Enumerate bindings without reusing an object (faster, but may miss solutions)."""

    verbose: bool = False
    """Emit progress diagnostics through the output sink."""

    max_solutions: int = Field(default=1, ge=1)
    """Maximum number of solutions returned by depth- or breadth-first search."""

    strategy: SearchStrategy = SearchStrategy.DFS

    min_layers: int = Field(default=1, ge=1)
    """Minimum number of planning graph layers (GraphPlan starts extraction at this depth)."""

    max_layers: Optional[int] = Field(default=None, ge=1)
    """Maximum number of planning graph layers (None leaves the builder unbounded)."""

    skip_negative_literals: bool = False
    """Drop negative literals when carrying effects into the next graph layer."""

    competing_needs: bool = False
    """Also mark actions mutex when their preconditions are mutex at the prior layer."""

    sink: OutputSink = Field(default_factory=ConsoleSink, exclude=True)
    """Destination of diagnostics; never serialized."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_layer_bounds(self) -> PlannerConfig:
        """Verify that the maximum layer bound is not below the minimum."""
        if self.max_layers is not None and self.max_layers < self.min_layers:
            raise ValueError(
                f"max_layers ({self.max_layers}) is less than min_layers ({self.min_layers})",
            )
        return self

    def info(self, message: str) -> None:
        """Send a progress message to the sink, if verbose output is enabled."""
        if self.verbose:
            self.sink.write(message, OutputLevel.INFO)

    def error(self, message: str) -> None:
        """Report an error through the sink (regardless of verbosity)."""
        self.sink.write(message, OutputLevel.ERROR)


def load_planner_config(yaml_path: Path, sink: OutputSink | None = None) -> PlannerConfig:
    """Load planner options from a YAML file.

    :param yaml_path: Path to a YAML file mapping option names to values
    :param sink: Optional output sink for the loaded configuration (defaults to the console)
    :return: Validated planner configuration
    :raises FileNotFoundError: If the YAML file doesn't exist
    :raises TypeError: If the file holds something other than a mapping of options
    :raises pydantic.ValidationError: If the file contains unknown or invalid options
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load planner options from nonexistent file: {yaml_path}")

    with yaml_path.open() as yaml_file:
        yaml_data = yaml.safe_load(yaml_file) or {}  # An empty file holds no options

    if not isinstance(yaml_data, dict):
        raise TypeError(f"Expected a mapping of planner options in {yaml_path}")

    if sink is not None:
        return PlannerConfig.model_validate({**yaml_data, "sink": sink})
    return PlannerConfig.model_validate(yaml_data)


def save_planner_config(config: PlannerConfig, yaml_path: Path) -> None:
    """Export the serializable planner options to a YAML file."""
    with yaml_path.open("w") as yaml_file:
        yaml.safe_dump(config.model_dump(mode="json"), yaml_file, sort_keys=True)
