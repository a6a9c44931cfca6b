"""Import classes and functions for state-space search."""

from .a_star import AStarSearch as AStarSearch
from .a_star import Heuristic as Heuristic
from .breadth_first import BreadthFirstSearch as BreadthFirstSearch
from .depth_first import DepthFirstSearch as DepthFirstSearch
from .planner import prepare_engine as prepare_engine
from .planner import solve as solve
from .state_space_search import SearchNode as SearchNode
from .state_space_search import Solution as Solution
from .state_space_search import StateSpaceSearch as StateSpaceSearch
