"""Compatibility checks for manually assembled builds."""

from __future__ import annotations

import re
from typing import List, Mapping, Optional

from ..schemas import Component, ComponentType

SOCKET_PATTERN = re.compile(r"LGA\s?\d+|AM\d", re.IGNORECASE)


def extract_socket(specs: str | None) -> Optional[str]:
    """
    Extract Socket

    Find the first socket token in free-text specs ("LGA1700", "LGA 1151",
    "AM5") and return it as written.

    Parameters:
        specs: Free-text spec string, may be empty or None

    Returns:
        Socket token, or None when the specs carry none
    """
    if not specs:
        return None
    match = SOCKET_PATTERN.search(specs)
    return match.group(0) if match else None


def normalize_socket(token: str) -> str:
    """Strip whitespace and upper-case a socket token ("lga 1700" -> "LGA1700")."""
    return re.sub(r"\s", "", token).upper()


def check_compatibility(
    cpu: Optional[Component],
    motherboard: Optional[Component],
) -> List[str]:
    """
    Check Compatibility

    Compare the socket tokens of a CPU/Motherboard pair. A part whose specs
    carry no recognizable socket token is not treated as a conflict.

    Parameters:
        cpu: Current CPU pick, may be None
        motherboard: Current Motherboard pick, may be None

    Returns:
        List of issues, empty when nothing conflicts
    """
    issues: List[str] = []
    if cpu is None or motherboard is None:
        return issues

    # Socket must match after whitespace and case normalization
    cpu_socket = extract_socket(cpu.specs)
    board_socket = extract_socket(motherboard.specs)
    if cpu_socket and board_socket:
        if normalize_socket(cpu_socket) != normalize_socket(board_socket):
            issues.append(
                f"Socket mismatch: CPU ({cpu_socket}) vs Motherboard ({board_socket})"
            )

    return issues


def check_selection(selection: Mapping[ComponentType, Optional[Component]]) -> List[str]:
    """
    Check Selection

    Parameters:
        selection: Caller-owned map of category -> picked component

    Returns:
        Issues for the CPU and Motherboard slots of the selection
    """
    return check_compatibility(selection.get("CPU"), selection.get("Motherboard"))
