"""
Chain Module

Ordered, immutable sequence of blocks with a validated append protocol.

Invariants:
- The chain is empty, or its first block is the genesis block
  (index 1, previous hash "none")
- Each block links to its predecessor: matching previous hash,
  index + 1, and a hash that recomputes from (prev.hash, name, data)
- Growth happens only at the tail; every transition returns a new
  Chain and leaves the original untouched

Validation is strict: a previous-hash mismatch OR a hash mismatch OR an
index gap is enough to reject a candidate.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Generic, Iterator, Optional, Tuple

from ..core_crypto.digest import DEFAULT_METHOD, DigestProvider
from ..result import Err, ErrorKind, Ok, Result
from .block import Block, D, N
from .hashing import compute_block_hash


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chain(Generic[N, D]):
    """
    Immutable chain of blocks.

    method names the digest algorithm used for every hash in the chain.
    provider is injectable and is ignored by equality.
    """
    blocks: Tuple[Block[N, D], ...] = ()
    method: str = DEFAULT_METHOD
    provider: Optional[DigestProvider] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.blocks, tuple):
            object.__setattr__(self, 'blocks', tuple(self.blocks))

    # ========================================================================
    # Read access
    # ========================================================================

    @property
    def length(self) -> int:
        return len(self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[Block[N, D]]:
        return iter(self.blocks)

    def last_blocks(self, count: int) -> Result[Tuple[Block[N, D], ...]]:
        """
        Get the trailing blocks of the chain.

        Args:
            count: Maximum number of blocks to return (negative means 0)

        Returns:
            Ok(last min(count, length) blocks in chain order), or
            Err(EMPTY_CHAIN)
        """
        if not self.blocks:
            return Err(ErrorKind.EMPTY_CHAIN, "Chain has no blocks")
        take = max(0, min(count, len(self.blocks)))
        return Ok(self.blocks[len(self.blocks) - take:])

    def last_block(self) -> Result[Block[N, D]]:
        """Get the last block, or Err(EMPTY_CHAIN)."""
        result = self.last_blocks(1)
        if isinstance(result, Err):
            return result
        return Ok(result.value[-1])

    # ========================================================================
    # Validation
    # ========================================================================

    def _check_link(self, previous_block: Block, candidate: Block) -> Result[Block]:
        """Check that candidate correctly follows previous_block."""
        expected = compute_block_hash(
            self.method,
            previous_block.hash,
            candidate.name,
            candidate.data,
            provider=self.provider
        )
        if isinstance(expected, Err):
            return expected

        if candidate.previous_hash != previous_block.hash:
            logger.debug("Block #%s rejected: previous hash mismatch", candidate.index)
            return Err(ErrorKind.INVALID_BLOCK, "Previous hash mismatch")

        if candidate.hash != expected.value:
            logger.debug("Block #%s rejected: hash mismatch", candidate.index)
            return Err(ErrorKind.INVALID_BLOCK, "Block hash mismatch")

        if candidate.index != previous_block.index + 1:
            logger.debug("Block #%s rejected: index gap", candidate.index)
            return Err(
                ErrorKind.INVALID_BLOCK,
                f"Invalid index: expected {previous_block.index + 1}, got {candidate.index}"
            )

        return Ok(candidate)

    def validate_block(self, previous_block: Block[N, D], candidate: Block[N, D]) -> Result[Block[N, D]]:
        """
        Validate a candidate block against a predecessor in this chain.

        Args:
            previous_block: Block the candidate claims to follow
            candidate: Block to check

        Returns:
            Ok(candidate) unchanged, or Err(BLOCK_NOT_FOUND),
            Err(INVALID_BLOCK) or Err(HASH_COMPUTATION_FAILED)
        """
        if previous_block not in self.blocks:
            logger.debug("Previous block #%s is not in the chain", previous_block.index)
            return Err(ErrorKind.BLOCK_NOT_FOUND, "Previous block is not part of the chain")
        return self._check_link(previous_block, candidate)

    def verify(self) -> Result['Chain[N, D]']:
        """
        Validate the entire chain.

        Returns:
            Ok(self), or the first failure found walking from genesis
        """
        if not self.blocks:
            return Ok(self)

        if not self.blocks[0].is_genesis:
            return Err(ErrorKind.INVALID_BLOCK, "Invalid genesis block")

        for previous_block, block in zip(self.blocks, self.blocks[1:]):
            result = self._check_link(previous_block, block)
            if isinstance(result, Err):
                return result

        return Ok(self)

    # ========================================================================
    # Append
    # ========================================================================

    def append_block(self, candidate: Block[N, D]) -> Result['Chain[N, D]']:
        """
        Append a block after validating it against the last block.

        Returns:
            Ok(new chain), Err(EMPTY_CHAIN) if there is no genesis yet,
            or the validation failure unchanged
        """
        if not self.blocks:
            logger.debug("Append rejected: chain is empty")
            return Err(ErrorKind.EMPTY_CHAIN, "Append requires a genesis block")

        validated = self.validate_block(self.blocks[-1], candidate)
        if isinstance(validated, Err):
            return validated

        return Ok(replace(self, blocks=self.blocks + (validated.value,)))

    def append_genesis(self, candidate: Block[N, D]) -> Result['Chain[N, D]']:
        """
        Start the chain with a genesis block.

        The genesis block is trusted as given; only an existing genesis
        causes a failure (GENESIS_ALREADY_EXISTS).
        """
        if self.blocks:
            logger.debug("Genesis rejected: chain already has %d blocks", len(self.blocks))
            return Err(ErrorKind.GENESIS_ALREADY_EXISTS, "Chain already has a genesis block")

        return Ok(replace(self, blocks=(candidate,)))

    # ========================================================================
    # Serialization
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'method': self.method,
            'blocks': [block.to_dict() for block in self.blocks],
        }

    def to_json(self) -> Result[str]:
        """
        Serialize chain to JSON.

        Every name and data value must come back from JSON unchanged
        (same value, same str()), otherwise the reloaded hashes would not
        verify. Tuples, non-string dict keys and other non-JSON values
        are refused.

        Returns:
            Ok(json string) or Err(UNKNOWN) naming the offending block
        """
        for block in self.blocks:
            for label, value in (('name', block.name), ('data', block.data)):
                try:
                    reloaded = json.loads(json.dumps(value))
                except (TypeError, ValueError, RecursionError) as exc:
                    return Err(
                        ErrorKind.UNKNOWN,
                        f"Block #{block.index} {label} is not JSON-serializable: {exc}"
                    )
                if reloaded != value or str(reloaded) != str(value):
                    return Err(
                        ErrorKind.UNKNOWN,
                        f"Block #{block.index} {label} does not survive a JSON round trip"
                    )

        return Ok(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def from_json(cls, json_str: str, provider: Optional[DigestProvider] = None) -> Result['Chain']:
        """
        Deserialize and verify a chain.

        Returns:
            Ok(verified chain), the verification failure, or Err(UNKNOWN)
            for malformed input
        """
        try:
            data = json.loads(json_str)
            chain = cls(
                blocks=tuple(Block.from_dict(item) for item in data['blocks']),
                method=data.get('method', DEFAULT_METHOD),
                provider=provider,
            )
        except (ValueError, KeyError, TypeError, AttributeError, RecursionError) as exc:
            return Err(ErrorKind.UNKNOWN, f"Malformed chain JSON: {exc}")

        return chain.verify()
