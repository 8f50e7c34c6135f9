"""
Component Selection Module

Pick one component per category from a catalog snapshot under a budget split.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from ..schemas import (
    COMPONENT_TYPES,
    Build,
    Component,
    ComponentType,
    GpuVendorFilter,
    PlatformFilter,
    build_key,
)
from .budget import BudgetAllocation, allocate_budget
from .filters import apply_name_filter

logger = logging.getLogger(__name__)


def best_fit_under_budget(
    candidates: Sequence[Component],
    max_price: float,
) -> Optional[Component]:
    """
    Best Fit Under Budget

    Pick the candidate whose price is closest to ``max_price`` without going over.
    Spending as much of the category allocation as possible is the point; this is
    not a cheapest-possible rule.

    Ties keep the first candidate encountered, so the result is deterministic for
    a given catalog ordering.

    Parameters:
        candidates: Components to choose from, any price
        max_price: Category ceiling

    Returns:
        Selected component, or None if no candidate fits under the ceiling
    """
    best: Optional[Component] = None
    for item in candidates:
        if item.price > max_price:
            continue
        if best is None or (max_price - item.price) < (max_price - best.price):
            best = item
    return best


def cheapest(candidates: Sequence[Component]) -> Optional[Component]:
    """
    Cheapest Fallback

    Lowest price among the candidates, first encountered on ties.
    """
    best: Optional[Component] = None
    for item in candidates:
        if best is None or item.price < best.price:
            best = item
    return best


def pick_component(
    catalog: Sequence[Component],
    component_type: ComponentType,
    max_price: float,
    platform: PlatformFilter = "all",
    gpu_vendor: GpuVendorFilter = "all",
) -> Optional[Component]:
    """
    Choose Component by Category

    Selection Strategy:
    1. Keep items of this type priced at or under ``max_price``
    2. Apply the category name filter when one is active
    3. Best fit under budget among what is left
    4. If nothing is left, drop the price cap (type and name filter only)
       and take the cheapest
    5. If still nothing, the category stays empty

    Parameters:
        catalog: Full catalog snapshot, not modified
        component_type: Category to fill
        max_price: Category ceiling from the budget split
        platform: CPU/Motherboard filter, "all" disables it
        gpu_vendor: GPU filter, "all" disables it

    Returns:
        Selected component, or None if the category has no eligible item at all
    """
    of_type: List[Component] = [c for c in catalog if c.type == component_type]
    filtered = apply_name_filter(of_type, component_type, platform, gpu_vendor)

    eligible = [c for c in filtered if c.price <= max_price]
    chosen = best_fit_under_budget(eligible, max_price)
    if chosen is not None:
        return chosen

    fallback = cheapest(filtered)
    if fallback is not None:
        logger.debug(
            "%s: nothing under %.2f, falling back to cheapest id=%s price=%.2f",
            component_type,
            max_price,
            fallback.id,
            fallback.price,
        )
    return fallback


def recommend_build(
    catalog: Sequence[Component],
    total_budget: float,
    platform: PlatformFilter = "all",
    gpu_vendor: GpuVendorFilter = "all",
    weights: Mapping[ComponentType, float] | None = None,
    allocation: BudgetAllocation | None = None,
) -> Build:
    """
    Recommend Build

    Fill every category in fixed order (CPU, GPU, RAM, Motherboard, Storage,
    PSU, Case, Cooler) and sum the selected prices. Pure function: no I/O and
    the catalog is left untouched. The budget must already be validated as a
    positive number.

    Parameters:
        catalog: Catalog snapshot for this run
        total_budget: Total budget
        platform: "all", "intel" or "amd"
        gpu_vendor: "all", "nvidia" or "amd"
        weights: Allocation table, the default table when omitted
        allocation: Precomputed allocation for this budget; overrides weights

    Returns:
        Fresh build owned by the caller
    """
    if allocation is None:
        allocation = allocate_budget(total_budget, weights)
    picked: Dict[str, Component] = {}
    total = 0.0

    for component_type in COMPONENT_TYPES:
        max_price = allocation.max_price(component_type)
        if max_price is None:
            continue
        component = pick_component(catalog, component_type, max_price, platform, gpu_vendor)
        if component is None:
            logger.debug("%s: no candidates in catalog", component_type)
            continue
        picked[build_key(component_type)] = component
        total += component.price

    return Build(**picked, total_price=total)
