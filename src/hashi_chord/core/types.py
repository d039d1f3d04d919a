"""
Core type definitions for hashi-chord.

Raw records come straight from the API (or the inline ``data`` parameter)
and are untrusted; display edges are derived from them once per run.
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class NetworkType(StrEnum):
    """Which family of chains a link belongs to."""
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def from_switch(cls, checked: bool) -> "NetworkType":
        """Map the view switch state: unchecked is mainnet, checked is testnet."""
        return cls.TESTNET if checked else cls.MAINNET


class RawEdgeRecord(BaseModel):
    """
    One propagation link as reported by the query endpoint.

    Only the three fields below are read; anything else the API sends
    is ignored.
    """
    source_chain: str
    target_chain: str
    last_agreed_block_time: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class DisplayEdge(BaseModel):
    """
    A display-ready directed edge.

    ``value`` is a constant weight of 1 and ``age`` is the number of
    milliseconds since the last agreed block time.
    """
    source: str
    target: str
    type: NetworkType
    value: int = 1
    age: int

    model_config = ConfigDict(frozen=True)
