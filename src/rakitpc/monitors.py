"""Monitor catalog browsing filters."""

from __future__ import annotations

from typing import Iterable, List

from .schemas import Monitor, MonitorPreset

GAMING_MIN_REFRESH_HZ = 144
PROFESSIONAL_MIN_SCREEN_INCH = 27
DEFAULT_BUDGET_MAX = 4_500_000


def filter_monitors(
    monitors: Iterable[Monitor],
    query: str = "",
    preset: MonitorPreset = "all",
    budget_max: float = DEFAULT_BUDGET_MAX,
) -> List[Monitor]:
    """Search title/description (case-insensitive) and narrow by preset.

    Presets:
    - gaming: refresh rate at least 144 Hz
    - professional: screen at least 27 inch
    - budget: price at or under ``budget_max``
    """
    needle = (query or "").strip().lower()
    result = [
        m
        for m in monitors
        if not needle or needle in m.title.lower() or needle in m.description.lower()
    ]

    if preset == "gaming":
        result = [m for m in result if m.refresh_rate >= GAMING_MIN_REFRESH_HZ]
    elif preset == "professional":
        result = [m for m in result if m.screen_size >= PROFESSIONAL_MIN_SCREEN_INCH]
    elif preset == "budget":
        result = [m for m in result if m.price <= budget_max]

    return result
