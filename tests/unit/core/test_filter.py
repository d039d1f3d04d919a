"""Unit tests for the staleness/network filter."""

from hashi_chord.config import STALENESS_THRESHOLD_MS
from hashi_chord.core.filter import empty_message, filter_edges
from hashi_chord.core.types import DisplayEdge, NetworkType

WEEK = 7 * 24 * 60 * 60 * 1000


def edge(source="BNB Chain", target="Gnosis Chain", type=NetworkType.MAINNET, age=0):
    return DisplayEdge(source=source, target=target, type=type, age=age)


class TestFilterEdges:
    def test_threshold_constant(self):
        assert STALENESS_THRESHOLD_MS == 1000 * 60 * 60 * 24 * 7 * 6

    def test_keeps_matching_type_only(self):
        edges = [edge(), edge(source="Ethereum Sepolia", type=NetworkType.TESTNET)]

        assert filter_edges(edges, NetworkType.MAINNET) == [edges[0]]
        assert filter_edges(edges, NetworkType.TESTNET) == [edges[1]]

    def test_threshold_is_inclusive(self):
        edges = [edge(age=STALENESS_THRESHOLD_MS), edge(age=STALENESS_THRESHOLD_MS + 1)]

        assert filter_edges(edges, NetworkType.MAINNET) == [edges[0]]

    def test_seven_week_old_edges_are_excluded_from_both_views(self):
        edges = [
            edge(age=7 * WEEK),
            edge(source="Gnosis Chiado", type=NetworkType.TESTNET, age=7 * WEEK),
        ]

        assert filter_edges(edges, NetworkType.MAINNET) == []
        assert filter_edges(edges, NetworkType.TESTNET) == []

    def test_preserves_order(self):
        edges = [edge(source=name) for name in ["C", "A", "B"]]
        assert [e.source for e in filter_edges(edges, NetworkType.MAINNET)] == ["C", "A", "B"]


class TestEmptyMessage:
    def test_capitalized_type_name(self):
        assert empty_message(NetworkType.MAINNET) == "No Mainnet data available"
        assert empty_message(NetworkType.TESTNET) == "No Testnet data available"
