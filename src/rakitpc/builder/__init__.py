"""Builder: budget split, component selection and compatibility checks"""

from .budget import DEFAULT_ALLOCATION_WEIGHTS, BudgetAllocation, allocate_budget
from .compatibility import check_compatibility, check_selection, extract_socket
from .picker import best_fit_under_budget, cheapest, pick_component, recommend_build

__all__ = [
    "DEFAULT_ALLOCATION_WEIGHTS",
    "BudgetAllocation",
    "allocate_budget",
    "check_compatibility",
    "check_selection",
    "extract_socket",
    "best_fit_under_budget",
    "cheapest",
    "pick_component",
    "recommend_build",
]
