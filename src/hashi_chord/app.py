"""
Application state and the mainnet/testnet view toggle.

The state is resolved once per run. Renders are recomputed from it on
demand; the toggle is the only writer of ``current_type``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from .core.filter import filter_edges
from .core.normalize import normalize_records
from .core.types import DisplayEdge, NetworkType, RawEdgeRecord
from .graph.chord import ChordView, build_chord_view

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Resolved display edges and the currently selected network."""
    edges: List[DisplayEdge] = field(default_factory=list)
    current_type: NetworkType = NetworkType.MAINNET


class ChordApp:
    """Drives Filter + Renderer for the selected network type."""

    def __init__(self, state: AppState):
        self.state = state

    @classmethod
    def from_records(
        cls,
        records: List[RawEdgeRecord],
        now: Optional[datetime] = None,
        network_type: NetworkType = NetworkType.MAINNET,
    ) -> "ChordApp":
        edges = normalize_records(records, now)
        logger.debug(f"Normalized {len(edges)} of {len(records)} records")
        return cls(AppState(edges=edges, current_type=network_type))

    def render_for(self, network_type: NetworkType) -> ChordView:
        """Filter + render for an explicit type without touching the state."""
        return build_chord_view(filter_edges(self.state.edges, network_type), network_type)

    def render(self) -> ChordView:
        return self.render_for(self.state.current_type)

    def toggle(self, checked: bool) -> ChordView:
        """Handle a switch change: checked selects testnet, then re-render."""
        self.state.current_type = NetworkType.from_switch(checked)
        logger.debug(f"View switched to {self.state.current_type}")
        return self.render()

    def all_views(self) -> Dict[str, ChordView]:
        """Both views, for embedding in a page that toggles client-side."""
        return {str(t): self.render_for(t) for t in NetworkType}
