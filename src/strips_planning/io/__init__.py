"""Import classes and definitions used for configuration, logging, and output."""

from .config import PlannerConfig as PlannerConfig
from .config import SearchStrategy as SearchStrategy
from .config import load_planner_config as load_planner_config
from .config import save_planner_config as save_planner_config
from .logging import BufferSink as BufferSink
from .logging import ConsoleSink as ConsoleSink
from .logging import LoggingSink as LoggingSink
from .logging import OutputLevel as OutputLevel
from .logging import OutputSink as OutputSink
from .logging import console as console
