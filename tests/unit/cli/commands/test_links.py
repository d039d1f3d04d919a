"""
Unit tests for the 'links' command.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest
from click.testing import CliRunner

from hashi_chord.cli.commands.links import build_table, links
from hashi_chord.core.types import DisplayEdge, NetworkType
from hashi_chord.graph.chord import build_chord_view


def _records() -> str:
    now = datetime.now(timezone.utc)
    return json.dumps([
        {"source_chain": "bnb", "target_chain": "gnosis",
         "last_agreed_block_time": (now - timedelta(minutes=5)).isoformat()},
        {"source_chain": "base", "target_chain": "optimism",
         "last_agreed_block_time": (now - timedelta(days=2)).isoformat()},
    ])


class TestLinksCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_prints_table(self, runner):
        result = runner.invoke(links, ["--data", _records()])

        assert result.exit_code == 0
        assert "Mainnet links" in result.output
        assert "BNB Chain" in result.output
        assert "Optimism" in result.output
        assert "~ 2 days ago" in result.output

    def test_empty_testnet(self, runner):
        result = runner.invoke(links, ["--data", _records(), "--testnet"])

        assert result.exit_code == 0
        assert "No Testnet data available" in result.output

    def test_invalid_data(self, runner):
        result = runner.invoke(links, ["--data", "{"])

        assert result.exit_code == 1
        assert "Invalid data provided." in result.output


class TestBuildTable:
    def test_one_row_per_ribbon(self):
        view = build_chord_view(
            [
                DisplayEdge(source="A", target="B", type=NetworkType.MAINNET, age=0),
                DisplayEdge(source="B", target="A", type=NetworkType.MAINNET, age=0),
                DisplayEdge(source="A", target="B", type=NetworkType.MAINNET, age=0),
            ],
            NetworkType.MAINNET,
        )
        table = build_table(view)

        assert table.row_count == 2
        assert len(table.columns) == 5
