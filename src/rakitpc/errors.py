"""Error types shared by the store, the service layer and the API."""

from __future__ import annotations

import math


class RakitError(Exception):
    """Base class for application errors."""


class InvalidBudgetError(RakitError, ValueError):
    """Budget is missing, non-numeric, zero or negative."""


class CatalogUnavailableError(RakitError):
    """The catalog store could not be read."""


class ComponentNotFoundError(RakitError, LookupError):
    def __init__(self, component_id: int):
        super().__init__(f"component {component_id} not found")
        self.component_id = component_id


def validate_budget(value) -> float:
    """Parse a user-entered budget and reject anything that is not a positive number.

    Strings are accepted the way a form field delivers them ("15000000").
    """
    if value is None or isinstance(value, bool):
        raise InvalidBudgetError("budget is required")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidBudgetError("budget is required")
    try:
        budget = float(value)
    except (TypeError, ValueError) as err:
        raise InvalidBudgetError(f"budget is not a number: {value!r}") from err
    if not math.isfinite(budget) or budget <= 0:
        raise InvalidBudgetError("budget must be greater than 0")
    return budget
