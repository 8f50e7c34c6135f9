"""Manual PC assembly: a caller-owned selection of one component per category."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .builder.compatibility import check_selection
from .schemas import COMPONENT_TYPES, Component, ComponentType


class ManualBuildSelection:
    """Current picks in the assembly flow.

    Only ``pick`` and ``unpick`` change it. Compatibility is recomputed from the
    current picks on every ``issues()`` call, nothing is cached.
    """

    def __init__(self, picks: Iterable[Component] | None = None):
        self._selected: Dict[ComponentType, Optional[Component]] = {
            t: None for t in COMPONENT_TYPES
        }
        for component in picks or ():
            self.pick(component)

    def pick(self, component: Component) -> None:
        """Select a component for its category, replacing the previous pick."""
        self._selected[component.type] = component

    def unpick(self, component_type: ComponentType) -> None:
        self._selected[component_type] = None

    def get(self, component_type: ComponentType) -> Optional[Component]:
        return self._selected[component_type]

    def as_dict(self) -> Dict[ComponentType, Optional[Component]]:
        return dict(self._selected)

    def total_price(self) -> float:
        return sum(c.price for c in self._selected.values() if c is not None)

    def issues(self) -> List[str]:
        return check_selection(self._selected)


def candidates(catalog: Iterable[Component], component_type: ComponentType) -> List[Component]:
    return [c for c in catalog if c.type == component_type]
