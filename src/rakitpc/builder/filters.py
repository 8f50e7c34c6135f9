"""Name heuristics for platform and GPU vendor filters.

The catalog has no structured socket or vendor field, so classification is a
substring match over the product name.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from ..schemas import Component, ComponentType, GpuVendorFilter, PlatformFilter

# Case-sensitive, matched against the raw motherboard name.
INTEL_BOARD_MARKERS = ("LGA", "Z790", "B760", "H610")
AMD_BOARD_MARKERS = ("AM4", "AM5", "B650", "X670")

NVIDIA_GPU_MARKERS = ("rtx", "gtx")
AMD_GPU_MARKERS = ("rx",)


def cpu_matches_platform(component: Component, platform: str) -> bool:
    """
    CPU Platform Match

    Case-insensitive check that the platform name ("intel", "amd") appears in
    the CPU name.

    Parameters:
        component: CPU candidate
        platform: "intel" or "amd"

    Returns:
        True when the name mentions the platform
    """
    return platform.lower() in component.name.lower()


def board_matches_platform(component: Component, platform: str) -> bool:
    """
    Motherboard Platform Match

    Case-sensitive chipset and socket markers against the raw board name.

    Parameters:
        component: Motherboard candidate
        platform: "intel", "amd" or anything else for no filtering

    Returns:
        True when a marker of the platform appears in the name
    """
    if platform == "intel":
        return any(marker in component.name for marker in INTEL_BOARD_MARKERS)
    if platform == "amd":
        return any(marker in component.name for marker in AMD_BOARD_MARKERS)
    return True


def gpu_matches_vendor(component: Component, vendor: str) -> bool:
    """
    GPU Vendor Match

    Parameters:
        component: GPU candidate
        vendor: "nvidia", "amd" or anything else for no filtering

    Returns:
        True when a vendor marker ("rtx", "gtx", "rx") appears in the name, any case
    """
    name = component.name.lower()
    if vendor == "nvidia":
        return any(marker in name for marker in NVIDIA_GPU_MARKERS)
    if vendor == "amd":
        return any(marker in name for marker in AMD_GPU_MARKERS)
    return True


def name_filter_for(
    component_type: ComponentType,
    platform: PlatformFilter = "all",
    gpu_vendor: GpuVendorFilter = "all",
) -> Optional[Callable[[Component], bool]]:
    """
    Name Filter

    Parameters:
        component_type: Category being filled
        platform: "all", "intel" or "amd"
        gpu_vendor: "all", "nvidia" or "amd"

    Returns:
        The active name predicate for the category, or None when nothing filters it
    """
    if component_type == "CPU" and platform != "all":
        return lambda c: cpu_matches_platform(c, platform)
    if component_type == "Motherboard" and platform != "all":
        return lambda c: board_matches_platform(c, platform)
    if component_type == "GPU" and gpu_vendor != "all":
        return lambda c: gpu_matches_vendor(c, gpu_vendor)
    return None


def apply_name_filter(
    items: Iterable[Component],
    component_type: ComponentType,
    platform: PlatformFilter = "all",
    gpu_vendor: GpuVendorFilter = "all",
) -> List[Component]:
    """
    Apply Name Filter

    Parameters:
        items: Candidates of one category
        component_type: Category being filled
        platform: "all", "intel" or "amd"
        gpu_vendor: "all", "nvidia" or "amd"

    Returns:
        New list of candidates passing the active predicate, in input order
    """
    predicate = name_filter_for(component_type, platform, gpu_vendor)
    if predicate is None:
        return list(items)
    return [item for item in items if predicate(item)]
