"""Unit tests for the record normalizer."""

from datetime import datetime, timedelta, timezone

import pytest

from hashi_chord.core.normalize import (
    beautify_chain_name,
    compute_age,
    infer_network_type,
    normalize_record,
    normalize_records,
    parse_timestamp,
)
from hashi_chord.core.types import DisplayEdge, NetworkType, RawEdgeRecord

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _iso(delta: timedelta) -> str:
    return (NOW - delta).isoformat()


class TestBeautifyChainName:
    @pytest.mark.parametrize("chain,label", [
        ("bnb", "BNB Chain"),
        ("gnosis", "Gnosis Chain"),
        ("polygon", "Polygon"),
        ("base", "Base"),
        ("optimism", "Optimism"),
        ("arbitrum", "Arbitrum"),
        ("ethereum_sepolia", "Ethereum Sepolia"),
        ("unichain_sepolia", "Unichain Testnet"),
        ("gnosis_chiado", "Gnosis Chiado"),
    ])
    def test_known_chains(self, chain, label):
        assert beautify_chain_name(chain) == label

    def test_unknown_chain_passes_through(self):
        assert beautify_chain_name("zksync") == "zksync"
        assert beautify_chain_name("") == ""


class TestInferNetworkType:
    def test_plain_ids_are_mainnet(self):
        assert infer_network_type("bnb", "gnosis") == NetworkType.MAINNET

    def test_underscore_suffix_on_either_side_is_testnet(self):
        assert infer_network_type("ethereum_sepolia", "gnosis") == NetworkType.TESTNET
        assert infer_network_type("bnb", "gnosis_chiado") == NetworkType.TESTNET

    def test_mainnet_suffix_is_mainnet(self):
        assert infer_network_type("lukso_mainnet", "gnosis") == NetworkType.MAINNET

    def test_mainnet_suffix_does_not_mask_other_side(self):
        assert infer_network_type("lukso_mainnet", "unichain_sepolia") == NetworkType.TESTNET

    def test_deterministic(self):
        results = {infer_network_type("base_goerli", "base") for _ in range(5)}
        assert results == {NetworkType.TESTNET}


class TestComputeAge:
    def test_age_in_milliseconds(self):
        assert compute_age(_iso(timedelta(minutes=10)), NOW) == 600_000

    def test_missing_timestamp_is_zero(self):
        assert compute_age(None, NOW) == 0
        assert compute_age("", NOW) == 0

    def test_zulu_suffix(self):
        assert compute_age("2025-01-01T11:59:00Z", NOW) == 60_000

    def test_naive_timestamp_is_utc(self):
        assert compute_age("2025-01-01T11:00:00", NOW) == 3_600_000

    def test_naive_now_is_utc(self):
        naive_now = NOW.replace(tzinfo=None)
        assert compute_age("2025-01-01T11:59:00Z", naive_now) == 60_000

    def test_invalid_timestamp_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestNormalizeRecord:
    def test_maps_all_fields(self):
        record = RawEdgeRecord(
            source_chain="bnb",
            target_chain="gnosis",
            last_agreed_block_time=_iso(timedelta(minutes=10)),
        )
        edge = normalize_record(record, NOW)

        assert edge == DisplayEdge(
            source="BNB Chain",
            target="Gnosis Chain",
            type=NetworkType.MAINNET,
            value=1,
            age=600_000,
        )

    def test_display_edge_is_immutable(self):
        edge = normalize_record(RawEdgeRecord(source_chain="a", target_chain="b"), NOW)
        with pytest.raises(Exception):
            edge.age = 5

    def test_batch_skips_bad_timestamps(self):
        records = [
            RawEdgeRecord(source_chain="bnb", target_chain="gnosis", last_agreed_block_time="not-a-date"),
            RawEdgeRecord(source_chain="base", target_chain="optimism"),
        ]
        edges = normalize_records(records, NOW)

        assert len(edges) == 1
        assert edges[0].source == "Base"
        assert edges[0].age == 0

    def test_batch_accepts_naive_now(self):
        records = [RawEdgeRecord(source_chain="bnb", target_chain="gnosis", last_agreed_block_time="2025-01-01T11:50:00Z")]

        edges = normalize_records(records, NOW.replace(tzinfo=None))

        assert edges[0].age == 600_000
