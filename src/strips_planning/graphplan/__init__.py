"""Import classes and functions for building and searching planning graphs."""

from .extraction import DEFAULT_MAX_GRAPH_LAYERS as DEFAULT_MAX_GRAPH_LAYERS
from .extraction import GraphPlanner as GraphPlanner
from .extraction import Plan as Plan
from .extraction import graphplan as graphplan
from .mutex import MutexLayer as MutexLayer
from .mutex import MutexReason as MutexReason
from .mutex import MutexRelation as MutexRelation
from .mutex import mark_mutex as mark_mutex
from .mutex import mark_mutex_layer as mark_mutex_layer
from .planning_graph import GraphLayer as GraphLayer
from .planning_graph import PlanningGraph as PlanningGraph
from .planning_graph import build_planning_graph as build_planning_graph
from .planning_graph import initial_graph_layer as initial_graph_layer
from .planning_graph import next_graph_layer as next_graph_layer
