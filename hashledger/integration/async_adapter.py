"""
Async Adapter Module

Runs block generation behind an awaitable boundary so hashing can be
moved off the event loop. The core stays synchronous; this module only
schedules it on an executor.

- No ordering guarantees are added: callers still serialize appends
  against a single chain (see ChainWriter)
- Cancellation propagates; a block is only ever returned whole
- No timeouts are applied here; wrap calls with asyncio.wait_for
"""

import asyncio
import functools
import logging
from concurrent.futures import Executor
from typing import Any, Callable, Optional

from ..blockchain.block import Block
from ..blockchain.chain import Chain
from ..blockchain.operations import extend_chain, generate_block
from ..result import Result, failure_from_exception


logger = logging.getLogger(__name__)


async def _run(executor: Optional[Executor], function: Callable[[], Result]) -> Result:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(executor, function)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        logger.warning("Ledger operation failed in executor: %s", exc)
        return failure_from_exception(exc)


async def generate_block_async(
    chain: Chain,
    name: Any,
    data: Any,
    executor: Optional[Executor] = None
) -> Result[Block]:
    """
    Generate the next block on an executor.

    Args:
        chain: Chain whose tail the block follows
        name: Block name
        data: Block data
        executor: Executor to run on (the loop's default if None)

    Returns:
        Same Result as generate_block; executor failures come back as
        Err(UNKNOWN)
    """
    return await _run(executor, functools.partial(generate_block, chain, name, data))


async def extend_chain_async(
    chain: Chain,
    name: Any,
    data: Any,
    executor: Optional[Executor] = None
) -> Result[Chain]:
    """Generate and append a block on an executor."""
    return await _run(executor, functools.partial(extend_chain, chain, name, data))
