"""
Record Normalizer.

Maps raw API records to display edges: beautified chain names, the
network type heuristic, and the age of the last agreed block.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from .types import DisplayEdge, NetworkType, RawEdgeRecord

logger = logging.getLogger(__name__)

CHAIN_NAMES: Dict[str, str] = {
    "bnb": "BNB Chain",
    "gnosis": "Gnosis Chain",
    "polygon": "Polygon",
    "base": "Base",
    "optimism": "Optimism",
    "arbitrum": "Arbitrum",
    "ethereum_sepolia": "Ethereum Sepolia",
    "unichain_sepolia": "Unichain Testnet",
    "gnosis_chiado": "Gnosis Chiado",
}

MAINNET_TOKEN = "_mainnet"

_ONE_MS = timedelta(milliseconds=1)


def beautify_chain_name(chain: str) -> str:
    """Human-readable label for a chain id; unknown ids pass through."""
    return CHAIN_NAMES.get(chain, chain)


def _looks_like_testnet(chain: str) -> bool:
    return "_" in chain and MAINNET_TOKEN not in chain


def infer_network_type(source_chain: str, target_chain: str) -> NetworkType:
    """
    Classify a link by its chain ids.

    Any id with an underscore suffix other than ``_mainnet`` marks the
    whole link as testnet.
    """
    if _looks_like_testnet(source_chain) or _looks_like_testnet(target_chain):
        return NetworkType.TESTNET
    return NetworkType.MAINNET


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp. Naive values are taken as UTC.

    Raises:
        ValueError: If the string is not ISO-8601.
    """
    return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def compute_age(last_agreed_block_time: Optional[str], now: datetime) -> int:
    """
    Milliseconds elapsed since the timestamp; 0 when it is missing.

    A naive ``now`` is read as UTC, like naive timestamps.
    """
    if not last_agreed_block_time:
        return 0
    return (_as_utc(now) - parse_timestamp(last_agreed_block_time)) // _ONE_MS


def normalize_record(record: RawEdgeRecord, now: datetime) -> DisplayEdge:
    """
    Map one raw record to a display edge.

    Raises:
        ValueError: If ``last_agreed_block_time`` is present but unparseable.
    """
    return DisplayEdge(
        source=beautify_chain_name(record.source_chain),
        target=beautify_chain_name(record.target_chain),
        type=infer_network_type(record.source_chain, record.target_chain),
        value=1,
        age=compute_age(record.last_agreed_block_time, now),
    )


def normalize_records(records: Iterable[RawEdgeRecord], now: Optional[datetime] = None) -> List[DisplayEdge]:
    """
    Normalize a batch of records against a single reference time.

    Records with an unparseable timestamp are dropped; they have no age and
    so could never pass the staleness filter.
    """
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    edges: List[DisplayEdge] = []
    for record in records:
        try:
            edges.append(normalize_record(record, now))
        except ValueError as e:
            logger.warning(
                f"Skipping {record.source_chain} -> {record.target_chain}: "
                f"bad timestamp {record.last_agreed_block_time!r} ({e})"
            )
    return edges
