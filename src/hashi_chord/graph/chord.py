"""
Chord Model Builder.

Turns a filtered list of display edges into everything the page needs to
draw one directed chord diagram:

- the vertex names, in first-seen order (this order drives both matrix
  indexing and palette colors);
- the N x N weight matrix handed to ``d3.chordDirected``;
- per-ribbon presentation data (color, opacity, tooltip) keyed by the
  ``"i,j"`` matrix cell, so the page never scans the edge list.

The angular layout itself is left to D3.
"""

import html
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx
from pydantic import BaseModel, Field

from ..config import MISSING_OPACITY, PALETTE
from ..core.ageing import humanize_age, opacity_for_age
from ..core.filter import empty_message
from ..core.types import DisplayEdge, NetworkType

UNKNOWN_AGE = "Unknown"


class Ribbon(BaseModel):
    """Presentation data for one directed ribbon."""
    source: str
    target: str
    source_index: int
    target_index: int
    weight: int
    color: str
    opacity: float
    age: int
    age_text: str
    tooltip: str


class ChordGroup(BaseModel):
    """One outer arc (a chain)."""
    index: int
    name: str
    color: str


class ChordView(BaseModel):
    """
    A fully computed view for one network type.

    ``empty`` carries the placeholder text when no edge survived the
    filter; the other collections are then empty.
    """
    network_type: NetworkType
    names: List[str] = Field(default_factory=list)
    matrix: List[List[int]] = Field(default_factory=list)
    groups: List[ChordGroup] = Field(default_factory=list)
    ribbons: Dict[str, Ribbon] = Field(default_factory=dict)
    empty: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.empty is not None


def color_for(index: int) -> str:
    """Palette color for a vertex index, wrapping past the palette size."""
    return PALETTE[index % len(PALETTE)]


def ribbon_key(source_index: int, target_index: int) -> str:
    return f"{source_index},{target_index}"


def vertex_names(edges: Iterable[DisplayEdge]) -> List[str]:
    """Distinct source/target names in first-seen order."""
    seen: Dict[str, None] = {}
    for edge in edges:
        seen.setdefault(edge.source)
        seen.setdefault(edge.target)
    return list(seen)


def build_graph(edges: Iterable[DisplayEdge], names: List[str]) -> nx.DiGraph:
    """Weighted digraph; parallel edges accumulate their values."""
    g = nx.DiGraph()
    g.add_nodes_from(names)
    for edge in edges:
        if g.has_edge(edge.source, edge.target):
            g[edge.source][edge.target]["weight"] += edge.value
        else:
            g.add_edge(edge.source, edge.target, weight=edge.value)
    return g


def weight_matrix(g: nx.DiGraph, names: List[str]) -> List[List[int]]:
    """Dense matrix with rows/columns in ``names`` order."""
    return [
        [g[u][v]["weight"] if g.has_edge(u, v) else 0 for v in names]
        for u in names
    ]


class RibbonIndex:
    """
    Edge lookup by (source, target) name pair.

    Built once per render. When several edges share a pair, the first one
    in filtered order describes the ribbon.
    """

    def __init__(self, edges: Iterable[DisplayEdge]):
        self._edges: Dict[Tuple[str, str], DisplayEdge] = {}
        for edge in edges:
            self._edges.setdefault((edge.source, edge.target), edge)

    def get(self, source: str, target: str) -> Optional[DisplayEdge]:
        return self._edges.get((source, target))

    def opacity_for(self, source: str, target: str) -> float:
        edge = self.get(source, target)
        if edge is None:
            return MISSING_OPACITY
        return opacity_for_age(edge.age)

    def age_text(self, source: str, target: str) -> str:
        edge = self.get(source, target)
        if edge is None:
            return UNKNOWN_AGE
        return humanize_age(edge.age)


def tooltip_html(source: str, target: str, age_text: str) -> str:
    return (
        f"The last <b>{html.escape(source)}</b> block header was propagated "
        f"on <b>{html.escape(target)}</b> {html.escape(age_text)}"
    )


def build_chord_view(edges: List[DisplayEdge], network_type: NetworkType) -> ChordView:
    """
    Build the view for already-filtered edges.

    Args:
        edges: Output of ``filter_edges`` for ``network_type``.
        network_type: The network the edges were filtered for.

    Returns:
        ChordView: Either a drawable view or one carrying the empty-state
        placeholder.
    """
    if not edges:
        return ChordView(network_type=network_type, empty=empty_message(network_type))

    names = vertex_names(edges)
    g = build_graph(edges, names)
    index = RibbonIndex(edges)
    position = {name: i for i, name in enumerate(names)}

    ribbons: Dict[str, Ribbon] = {}
    for source, target, data in g.edges(data=True):
        i, j = position[source], position[target]
        edge = index.get(source, target)
        age_text = index.age_text(source, target)
        ribbons[ribbon_key(i, j)] = Ribbon(
            source=source,
            target=target,
            source_index=i,
            target_index=j,
            weight=data["weight"],
            color=color_for(i),
            opacity=index.opacity_for(source, target),
            age=edge.age,
            age_text=age_text,
            tooltip=tooltip_html(source, target, age_text),
        )

    return ChordView(
        network_type=network_type,
        names=names,
        matrix=weight_matrix(g, names),
        groups=[ChordGroup(index=i, name=name, color=color_for(i)) for i, name in enumerate(names)],
        ribbons=dict(sorted(ribbons.items(), key=lambda kv: (kv[1].source_index, kv[1].target_index))),
    )
