"""Seed Assets: the fixed sample set written by init_ledger.

Invariants:
    - Exactly six assets, asset1..asset6, all tagged docType="asset"
    - Tuple of frozen Assets: the seed set cannot be mutated at runtime
"""

from asset_ledger.core.asset import Asset
from asset_ledger.core.domain_types import ASSET_DOC_TYPE


SEED_ASSETS: tuple[Asset, ...] = (
    Asset("asset1", "blue", 5, "Tomoko", 300, ASSET_DOC_TYPE),
    Asset("asset2", "red", 5, "Brad", 400, ASSET_DOC_TYPE),
    Asset("asset3", "green", 10, "Jin Soo", 500, ASSET_DOC_TYPE),
    Asset("asset4", "yellow", 10, "Max", 600, ASSET_DOC_TYPE),
    Asset("asset5", "black", 15, "Adriana", 700, ASSET_DOC_TYPE),
    Asset("asset6", "white", 15, "Michel", 800, ASSET_DOC_TYPE),
)
