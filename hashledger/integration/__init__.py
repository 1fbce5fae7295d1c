# Integration Module
"""
Caller-side adapters around the ledger core:
- Async generation on an executor
- Single-writer chain holder with compare-and-swap
"""

from .async_adapter import extend_chain_async, generate_block_async
from .chain_writer import ChainWriter, writer_for

__all__ = [
    'ChainWriter',
    'writer_for',
    'generate_block_async',
    'extend_chain_async',
]
