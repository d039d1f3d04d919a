"""
Threshold Filter.

Keeps the edges that belong to the selected network and are recent enough
to be worth drawing.
"""

from typing import Iterable, List

from ..config import STALENESS_THRESHOLD_MS
from .types import DisplayEdge, NetworkType


def is_fresh(edge: DisplayEdge) -> bool:
    """True when the edge is within the staleness window (inclusive)."""
    return edge.age <= STALENESS_THRESHOLD_MS


def filter_edges(edges: Iterable[DisplayEdge], network_type: NetworkType) -> List[DisplayEdge]:
    """Edges of ``network_type`` inside the staleness window, in input order."""
    return [e for e in edges if is_fresh(e) and e.type == network_type]


def empty_message(network_type: NetworkType) -> str:
    """Placeholder text shown instead of an empty diagram."""
    label = str(network_type)
    return f"No {label[:1].upper()}{label[1:]} data available"
