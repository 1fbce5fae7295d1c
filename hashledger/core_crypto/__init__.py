# Core Cryptography Module
"""
Digest primitives used by the ledger:
- Named digest algorithms (SHA-2, SHA-3, SHA-1, MD5)
- Pluggable DigestProvider registry
"""

from .digest import (
    DEFAULT_METHOD,
    DigestProvider,
    default_provider,
    digest_hex,
    supported_methods,
)

__all__ = [
    'DEFAULT_METHOD',
    'DigestProvider',
    'default_provider',
    'digest_hex',
    'supported_methods',
]
