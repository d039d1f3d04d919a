"""
hashi-chord - Cross-chain header propagation chord diagrams.

Renders which chains' block headers have recently been propagated to which
other chains, as a directed chord diagram with a mainnet/testnet switch.

Key Components:
- core: record resolution, normalization, age helpers and the staleness filter
- graph: chord model building and the D3 page generator
- app: application state and the view toggle

Usage:
    from hashi_chord.app import ChordApp
    from hashi_chord.core.source import resolve_records

    records = resolve_records().unwrap()
    view = ChordApp.from_records(records).render()
"""

__version__ = "0.1.0"
