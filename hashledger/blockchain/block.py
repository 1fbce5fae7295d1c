"""
Block Module

Immutable hash-linked record. The hash covers (previous_hash, name,
data) only; index and timestamp are carried alongside but are not
part of the digest.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Generic, TypeVar


N = TypeVar('N')
D = TypeVar('D')


# ============================================================================
# Constants
# ============================================================================

GENESIS_PREV_HASH = "none"  # Sentinel previous hash of the genesis block
GENESIS_INDEX = 1

# Serialization field order
BLOCK_FIELDS = ('index', 'hash', 'previous_hash', 'timestamp', 'name', 'data')


def current_millis() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


# ============================================================================
# Block Structure (Immutable)
# ============================================================================

@dataclass(frozen=True)
class Block(Generic[N, D]):
    """
    Immutable block.

    name and data are opaque caller values; they only need a stable
    str() since that is what gets hashed.
    """
    index: int
    hash: str
    previous_hash: str
    timestamp: int
    name: N
    data: D

    @property
    def is_genesis(self) -> bool:
        return self.index == GENESIS_INDEX and self.previous_hash == GENESIS_PREV_HASH

    def to_dict(self) -> Dict[str, Any]:
        """Convert block to dictionary for serialization."""
        return {key: getattr(self, key) for key in BLOCK_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Block':
        """Create block from dictionary."""
        return cls(
            index=int(data['index']),
            hash=data['hash'],
            previous_hash=data['previous_hash'],
            timestamp=int(data['timestamp']),
            name=data['name'],
            data=data['data'],
        )

    def __str__(self) -> str:
        return (
            f"Block #{self.index}\n"
            f"  Hash: {self.hash[:16]}...\n"
            f"  Prev: {self.previous_hash[:16]}\n"
            f"  Name: {self.name}"
        )
