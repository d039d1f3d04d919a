"""Unit tests for the application state and view toggle."""

from datetime import datetime, timedelta, timezone

import pytest

from hashi_chord.app import AppState, ChordApp
from hashi_chord.core.types import NetworkType, RawEdgeRecord

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def record(source, target, delta=timedelta(minutes=10)):
    return RawEdgeRecord(
        source_chain=source,
        target_chain=target,
        last_agreed_block_time=(NOW - delta).isoformat(),
    )


class TestChordApp:
    @pytest.fixture
    def app(self):
        return ChordApp.from_records(
            [
                record("bnb", "gnosis"),
                record("ethereum_sepolia", "gnosis_chiado", timedelta(hours=2)),
                record("polygon", "base", timedelta(weeks=7)),
            ],
            now=NOW,
        )

    def test_defaults_to_mainnet(self, app):
        assert app.state.current_type == NetworkType.MAINNET

        view = app.render()
        assert view.names == ["BNB Chain", "Gnosis Chain"]
        assert view.ribbons["0,1"].opacity == 0.75
        assert view.ribbons["0,1"].age_text == "~ 10 minutes ago"

    def test_toggle_to_testnet(self, app):
        view = app.toggle(True)

        assert app.state.current_type == NetworkType.TESTNET
        assert view.names == ["Ethereum Sepolia", "Gnosis Chiado"]
        assert view.ribbons["0,1"].opacity == 0.55

    def test_toggle_back_reuses_resolved_edges(self, app):
        edges_before = list(app.state.edges)

        app.toggle(True)
        view = app.toggle(False)

        assert app.state.edges == edges_before
        assert view == app.render_for(NetworkType.MAINNET)

    def test_stale_edges_never_render(self, app):
        names = app.render_for(NetworkType.MAINNET).names + app.render_for(NetworkType.TESTNET).names
        assert "Polygon" not in names
        assert "Base" not in names

    def test_empty_testnet_view(self):
        app = ChordApp.from_records([record("bnb", "gnosis")], now=NOW)
        view = app.toggle(True)

        assert view.is_empty
        assert view.empty == "No Testnet data available"

    def test_all_views_does_not_change_selection(self, app):
        views = app.all_views()

        assert set(views) == {"mainnet", "testnet"}
        assert app.state.current_type == NetworkType.MAINNET

    def test_initial_type(self):
        app = ChordApp.from_records([], now=NOW, network_type=NetworkType.TESTNET)
        assert app.state == AppState(edges=[], current_type=NetworkType.TESTNET)

    def test_naive_now_matches_utc_now(self):
        records = [record("bnb", "gnosis")]

        naive = ChordApp.from_records(records, now=NOW.replace(tzinfo=None))
        aware = ChordApp.from_records(records, now=NOW)

        assert naive.state.edges == aware.state.edges
        assert naive.render().names == ["BNB Chain", "Gnosis Chain"]
