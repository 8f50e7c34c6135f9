"""
Budget Allocation Module

Split a total budget into a per-category price ceiling using a fixed weight table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ..schemas import COMPONENT_TYPES, ComponentType


DEFAULT_ALLOCATION_WEIGHTS: Dict[ComponentType, float] = {
    "CPU": 0.25,
    "GPU": 0.30,
    "RAM": 0.10,
    "Motherboard": 0.12,
    "Storage": 0.08,
    "PSU": 0.07,
    "Case": 0.05,
    "Cooler": 0.03,
}
"""
Default Allocation Weights

Fraction of the total budget earmarked for each category. Each weight is applied
independently, so a custom table does not have to sum to 1.0 (this one does).

- GPU: 30% - the largest single share
- CPU: 25%
- Motherboard: 12%
- RAM: 10%
- Storage: 8%
- PSU: 7%
- Case: 5%
- Cooler: 3%
"""


@dataclass
class BudgetAllocation:
    """
    Budget Allocation Result

    Price ceiling per category for one recommendation run.

    Field Descriptions:
    - total: the budget that was split
    - limits: category -> maximum price for that category
    """
    total: float
    limits: Dict[ComponentType, float] = field(default_factory=dict)

    def max_price(self, component_type: ComponentType) -> Optional[float]:
        """
        Ceiling for a category, or None if the weight table has no entry for it.
        """
        return self.limits.get(component_type)

    def to_dict(self) -> Dict[str, float]:
        """
        Convert to Dictionary

        Returns:
            Category -> maximum price, in engine iteration order
        """
        return {t: self.limits[t] for t in COMPONENT_TYPES if t in self.limits}


def allocate_budget(
    total_budget: float,
    weights: Mapping[ComponentType, float] | None = None,
    custom_weights: Mapping[ComponentType, float] | None = None,
) -> BudgetAllocation:
    """
    Allocate Budget

    Compute ``max_price = total_budget * weight`` for every category.

    Allocation Strategy:
    1. Start from ``weights`` (the default table when omitted)
    2. Override single entries with ``custom_weights`` (if provided)
    3. Multiply each weight by the total budget, without rounding

    Parameters:
        total_budget: Total budget, already validated as a positive number
        weights: Full weight table to use instead of the default one
        custom_weights: Per-category overrides applied on top of ``weights``

    Returns:
        Budget allocation result object
    """
    table: Dict[ComponentType, float] = dict(weights or DEFAULT_ALLOCATION_WEIGHTS)

    if custom_weights:
        for key, value in custom_weights.items():
            if key in table:
                table[key] = value

    for key, value in table.items():
        if value < 0:
            raise ValueError(f"allocation weight for {key} must be nonnegative, got {value}")

    return BudgetAllocation(
        total=total_budget,
        limits={key: total_budget * value for key, value in table.items()},
    )
