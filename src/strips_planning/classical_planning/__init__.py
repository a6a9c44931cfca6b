"""Import classes from the modules in this directory."""

from .actions import NOOP_NAME as NOOP_NAME
from .actions import ActionSchema as ActionSchema
from .actions import GroundAction as GroundAction
from .grounding import GroundingEngine as GroundingEngine
from .grounding import apply_action as apply_action
from .grounding import is_goal as is_goal
from .grounding import is_precondition_satisfied as is_precondition_satisfied
from .grounding import parameter_combinations as parameter_combinations
from .literals import Literal as Literal
from .literals import Polarity as Polarity
from .parameters import Bindings as Bindings
from .parameters import TypedParameter as TypedParameter
from .pddl_domain import PDDLDomain as PDDLDomain
from .pddl_domain import attach_problem as attach_problem
from .pddl_problem import ObjectDeclaration as ObjectDeclaration
from .pddl_problem import PDDLProblem as PDDLProblem
from .states import State as State
