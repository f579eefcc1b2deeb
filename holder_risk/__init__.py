"""Holder distribution risk engine package.

This package scores a token's holder snapshot for concentration and
distribution risk. It is a pure library: no network, no persistence, no
shared state between calls. It includes:

- Config schema and YAML defaults
- Holder entities and the value tier enum
- Tier classification, filtering and tier rollups
- Liquidity-pool aggregation
- Top-N concentration
- Stability scoring (whale / distribution / LP / holder count)
- Suspicious pattern alerts
- Health grading and structural risk flags
- Provider payload schemas, report assembly and CSV export
"""

from .errors import DataIntegrityError
from .entities import ClassifiedHolder, Holder, PotentialDevWallet, Tier
from .report import HoldersReport, analyze_holders, analyze_snapshot

__all__ = [
    "config_schema",
    "entities",
    "tiers",
    "liquidity",
    "concentration",
    "scorer",
    "patterns",
    "grading",
    "schemas",
    "report",
    "export",
    "ClassifiedHolder",
    "DataIntegrityError",
    "Holder",
    "HoldersReport",
    "PotentialDevWallet",
    "Tier",
    "analyze_holders",
    "analyze_snapshot",
]
