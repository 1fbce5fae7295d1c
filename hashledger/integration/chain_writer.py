"""
Chain Writer Module

Single-writer holder for one logical chain. The ledger core has no
locking; concurrent producers that share a chain go through a
ChainWriter, which swaps the chain reference only while holding a lock.

Features:
- Genesis creation, append and generate+append under one lock
- Compare-and-swap for callers that build new chains themselves
- Listeners notified of every appended block
"""

import logging
from threading import Lock
from typing import Any, Callable, List, Optional

from ..blockchain.block import Block
from ..blockchain.chain import Chain
from ..blockchain.operations import create_genesis_chain, generate_block
from ..core_crypto.digest import DEFAULT_METHOD, DigestProvider
from ..result import Err, Ok, Result


logger = logging.getLogger(__name__)

Listener = Callable[[Block], None]


class ChainWriter:
    """
    Serializes updates to a shared chain reference.

    The held chain is always a complete, valid Chain value; a failed
    update leaves it unchanged.
    """

    def __init__(
        self,
        chain: Optional[Chain] = None,
        method: str = DEFAULT_METHOD,
        provider: Optional[DigestProvider] = None
    ):
        """
        Initialize the writer.

        Args:
            chain: Existing chain to manage (an empty chain if None)
            method: Digest algorithm for a new empty chain
            provider: Digest provider for a new empty chain
        """
        self._chain = chain if chain is not None else Chain(method=method, provider=provider)
        self._lock = Lock()
        self._listeners: List[Listener] = []

    @property
    def current(self) -> Chain:
        """Current chain value."""
        with self._lock:
            return self._chain

    def add_listener(self, listener: Listener) -> None:
        """Add a callback notified with each appended block."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, block: Block) -> None:
        for listener in list(self._listeners):
            try:
                listener(block)
            except Exception:
                logger.exception("Chain listener failed for block #%s", block.index)

    def _swap(self, new_chain: Chain) -> Block:
        self._chain = new_chain
        block = new_chain.blocks[-1]
        logger.info("Appended block #%s (%s)", block.index, block.hash[:16])
        return block

    # ========================================================================
    # Updates
    # ========================================================================

    def create_genesis(self, name: Any, data: Any) -> Result[Chain]:
        """
        Create the genesis block on the held (empty) chain.

        Returns:
            Ok(new chain), Err(GENESIS_ALREADY_EXISTS) or
            Err(HASH_COMPUTATION_FAILED)
        """
        with self._lock:
            created = create_genesis_chain(
                name,
                data,
                method=self._chain.method,
                provider=self._chain.provider
            )
            if isinstance(created, Err):
                return created
            result = self._chain.append_genesis(created.value.blocks[0])
            if isinstance(result, Err):
                return result
            block = self._swap(result.value)
        self._notify(block)
        return result

    def append(self, candidate: Block) -> Result[Chain]:
        """Validate and append a caller-built block."""
        with self._lock:
            result = self._chain.append_block(candidate)
            if isinstance(result, Err):
                return result
            block = self._swap(result.value)
        self._notify(block)
        return result

    def extend(self, name: Any, data: Any) -> Result[Chain]:
        """Generate the next block and append it atomically."""
        with self._lock:
            generated = generate_block(self._chain, name, data)
            if isinstance(generated, Err):
                return generated
            result = self._chain.append_block(generated.value)
            if isinstance(result, Err):
                return result
            block = self._swap(result.value)
        self._notify(block)
        return result

    def compare_and_swap(self, expected: Chain, new_chain: Chain) -> bool:
        """
        Replace the chain only if it is still `expected`.

        new_chain must use the same digest method and extend expected by
        exactly one block that validates against expected's tail (or is
        a genesis block when expected is empty); anything else is refused.

        Returns:
            True if the swap happened
        """
        with self._lock:
            if self._chain is not expected:
                return False
            if new_chain.method != expected.method:
                logger.debug("Compare-and-swap refused: digest method changed")
                return False
            if new_chain.blocks[:-1] != expected.blocks or len(new_chain) != len(expected) + 1:
                logger.debug("Compare-and-swap refused: not a one-block extension")
                return False
            tail = new_chain.blocks[-1]
            if expected.is_empty:
                if not tail.is_genesis:
                    logger.debug("Compare-and-swap refused: first block is not a genesis")
                    return False
            else:
                checked = expected.validate_block(expected.blocks[-1], tail)
                if isinstance(checked, Err):
                    logger.debug("Compare-and-swap refused: %s", checked)
                    return False
            block = self._swap(new_chain)
        self._notify(block)
        return True


def writer_for(chain: Chain) -> Result[ChainWriter]:
    """Wrap an existing chain in a writer after verifying it."""
    verified = chain.verify()
    if isinstance(verified, Err):
        return verified
    return Ok(ChainWriter(verified.value))
