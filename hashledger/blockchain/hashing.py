"""
Block hashing.

A block hash is the digest of the canonical payload
"previous_hash,name,data". Genesis creation, block generation and
validation all go through compute_block_hash so they always agree.
"""

import logging
from typing import Any, Optional

from ..core_crypto.digest import DigestProvider, default_provider
from ..result import Err, ErrorKind, Result


logger = logging.getLogger(__name__)

HASH_SEPARATOR = ","


def canonical_payload(previous_hash: str, name: Any, data: Any) -> str:
    """Build the string that gets hashed for a block."""
    return HASH_SEPARATOR.join((previous_hash, str(name), str(data)))


def compute_block_hash(
    method: str,
    previous_hash: str,
    name: Any,
    data: Any,
    provider: Optional[DigestProvider] = None
) -> Result[str]:
    """
    Compute the hash of a block from its predecessor hash and contents.

    Args:
        method: Digest algorithm name
        previous_hash: Hash of the preceding block ("none" for genesis)
        name: Block name, hashed through str()
        data: Block data, hashed through str()
        provider: Digest provider, the module default if omitted

    Returns:
        Ok(hex hash) or Err(HASH_COMPUTATION_FAILED), with the digest
        failure kind kept as the cause
    """
    provider = provider or default_provider

    try:
        payload = canonical_payload(previous_hash, name, data).encode('utf-8')
    except Exception as exc:
        return Err(
            ErrorKind.HASH_COMPUTATION_FAILED,
            f"Cannot build block payload: {exc}"
        )

    result = provider.digest(method, payload)
    if isinstance(result, Err):
        logger.debug("Block hash failed with %s: %s", method, result)
        return Err(
            ErrorKind.HASH_COMPUTATION_FAILED,
            result.message,
            cause=result.kind
        )
    return result


__all__ = [
    'HASH_SEPARATOR',
    'canonical_payload',
    'compute_block_hash',
]
