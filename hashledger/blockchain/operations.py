"""
Chain Operations

Orchestration built on Chain and the hashing engine:
- create_genesis_chain: hash and build the first block of a new chain
- next_block_hash: hash of a block that would follow the current tail
- generate_block: build (but do not append) the next candidate block
- extend_chain: generate a block and append it in one step

Every function returns a Result; nothing here raises for a domain
failure.
"""

import logging
from typing import Any, Callable, Optional

from ..core_crypto.digest import DEFAULT_METHOD, DigestProvider
from ..result import Err, Ok, Result
from .block import GENESIS_INDEX, GENESIS_PREV_HASH, Block, current_millis
from .chain import Chain
from .hashing import compute_block_hash


logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def create_genesis_chain(
    name: Any,
    data: Any,
    method: str = DEFAULT_METHOD,
    provider: Optional[DigestProvider] = None,
    clock: Clock = current_millis
) -> Result[Chain]:
    """
    Create a new chain holding only a genesis block.

    Args:
        name: Genesis block name
        data: Genesis block data
        method: Digest algorithm used for this chain
        provider: Optional digest provider
        clock: Millisecond timestamp source

    Returns:
        Ok(chain) or Err(HASH_COMPUTATION_FAILED)
    """
    hashed = compute_block_hash(method, GENESIS_PREV_HASH, name, data, provider=provider)
    if isinstance(hashed, Err):
        return hashed

    genesis = Block(
        index=GENESIS_INDEX,
        hash=hashed.value,
        previous_hash=GENESIS_PREV_HASH,
        timestamp=clock(),
        name=name,
        data=data,
    )
    logger.debug("Created genesis block %s", genesis.hash)
    return Chain(method=method, provider=provider).append_genesis(genesis)


def next_block_hash(chain: Chain, name: Any, data: Any) -> Result[str]:
    """Hash for a block with this name and data following the chain's tail."""
    last = chain.last_block()
    if isinstance(last, Err):
        return last
    return compute_block_hash(
        chain.method,
        last.value.hash,
        name,
        data,
        provider=chain.provider
    )


def generate_block(
    chain: Chain,
    name: Any,
    data: Any,
    clock: Clock = current_millis
) -> Result[Block]:
    """
    Build the next block for a chain without appending it.

    The caller appends the returned block with Chain.append_block.

    Returns:
        Ok(block), Err(EMPTY_CHAIN) when there is no genesis yet, or
        Err(HASH_COMPUTATION_FAILED)
    """
    last = chain.last_block()
    if isinstance(last, Err):
        return last

    hashed = next_block_hash(chain, name, data)
    if isinstance(hashed, Err):
        return hashed

    return Ok(Block(
        index=last.value.index + 1,
        hash=hashed.value,
        previous_hash=last.value.hash,
        timestamp=clock(),
        name=name,
        data=data,
    ))


def extend_chain(
    chain: Chain,
    name: Any,
    data: Any,
    clock: Clock = current_millis
) -> Result[Chain]:
    """Generate a block and append it to the chain."""
    generated = generate_block(chain, name, data, clock=clock)
    if isinstance(generated, Err):
        return generated
    return chain.append_block(generated.value)
