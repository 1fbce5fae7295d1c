# Blockchain Module
"""
Hash-linked ledger core:
- Immutable blocks (frozen dataclass)
- Canonical block hashing over (previous_hash, name, data)
- Chain validation and append returning typed results
- Genesis creation and next-block generation
"""

from .block import GENESIS_INDEX, GENESIS_PREV_HASH, Block, current_millis
from .chain import Chain
from .hashing import HASH_SEPARATOR, canonical_payload, compute_block_hash
from .operations import create_genesis_chain, extend_chain, generate_block, next_block_hash

__all__ = [
    'Block',
    'GENESIS_PREV_HASH',
    'GENESIS_INDEX',
    'current_millis',
    'Chain',
    'HASH_SEPARATOR',
    'canonical_payload',
    'compute_block_hash',
    'create_genesis_chain',
    'next_block_hash',
    'generate_block',
    'extend_chain',
]
