"""
hashledger - single-node, append-only chain of hash-linked blocks.

Modules:
  - core_crypto: named, pluggable digest functions
  - blockchain: blocks, chain validation/append, genesis and generation
  - integration: async boundary and single-writer chain holder
"""

from .result import ChainError, Err, ErrorKind, Ok, Result, failure_from_exception
from .blockchain.block import GENESIS_PREV_HASH, Block
from .blockchain.chain import Chain
from .blockchain.hashing import compute_block_hash
from .blockchain.operations import (
    create_genesis_chain,
    extend_chain,
    generate_block,
    next_block_hash,
)

__version__ = "0.1.0"

__all__ = [
    'Block',
    'Chain',
    'ChainError',
    'Err',
    'ErrorKind',
    'GENESIS_PREV_HASH',
    'Ok',
    'Result',
    'compute_block_hash',
    'create_genesis_chain',
    'extend_chain',
    'failure_from_exception',
    'generate_block',
    'next_block_hash',
]
