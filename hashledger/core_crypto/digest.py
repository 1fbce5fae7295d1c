"""
Digest Provider Module

Pluggable one-way hash functions, looked up by algorithm name:
- Built-in algorithms backed by `cryptography` (SHA-2, SHA-3, SHA-1, MD5)
- Custom digest functions registered by name
- Case-insensitive lookup using the standard algorithm names ("SHA-256")

A digest always comes back as a lowercase hex string. An unknown
algorithm is reported as DIGEST_UNAVAILABLE and never falls back to
a default.
"""

import logging
from typing import Callable, Dict, List

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

from ..result import Err, ErrorKind, Ok, Result


logger = logging.getLogger(__name__)

DigestFunction = Callable[[bytes], str]


# ============================================================================
# Constants
# ============================================================================

DEFAULT_METHOD = "SHA-256"

# Standard algorithm name -> cryptography HashAlgorithm class
BUILTIN_ALGORITHMS = {
    "MD5": hashes.MD5,
    "SHA-1": hashes.SHA1,
    "SHA-224": hashes.SHA224,
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
    "SHA-512/224": hashes.SHA512_224,
    "SHA-512/256": hashes.SHA512_256,
    "SHA3-224": hashes.SHA3_224,
    "SHA3-256": hashes.SHA3_256,
    "SHA3-384": hashes.SHA3_384,
    "SHA3-512": hashes.SHA3_512,
}


def _hash_function(algorithm: type) -> DigestFunction:
    """Wrap a cryptography hash algorithm as a bytes -> hex function."""
    def digest(payload: bytes) -> str:
        ctx = hashes.Hash(algorithm(), backend=default_backend())
        ctx.update(payload)
        return ctx.finalize().hex()
    return digest


# ============================================================================
# Digest Provider
# ============================================================================

class DigestProvider:
    """
    Registry of digest functions keyed by algorithm name.

    Names are matched case-insensitively. A provider starts with the
    built-in algorithms unless include_builtins is False.
    """

    def __init__(self, include_builtins: bool = True):
        self._functions: Dict[str, DigestFunction] = {}
        if include_builtins:
            for name, algorithm in BUILTIN_ALGORITHMS.items():
                self.register(name, _hash_function(algorithm))

    @staticmethod
    def _key(method: str) -> str:
        return method.strip().upper()

    def register(self, name: str, function: DigestFunction) -> None:
        """
        Register (or replace) a digest function.

        Args:
            name: Algorithm identifier
            function: Callable mapping payload bytes to a hex string
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Digest name must be a non-empty string")
        if not callable(function):
            raise TypeError("Digest function must be callable")
        self._functions[self._key(name)] = function

    def supports(self, method: str) -> bool:
        return isinstance(method, str) and self._key(method) in self._functions

    def supported_methods(self) -> List[str]:
        """Names of all registered algorithms, sorted."""
        return sorted(self._functions)

    def digest(self, method: str, payload: bytes) -> Result[str]:
        """
        Hash a payload with the named algorithm.

        Args:
            method: Algorithm identifier (e.g. "SHA-256")
            payload: Bytes to hash

        Returns:
            Ok(lowercase hex digest), Err(DIGEST_UNAVAILABLE) for an
            unknown algorithm, or Err(HASH_COMPUTATION_FAILED) when the
            digest function itself fails
        """
        if not self.supports(method):
            logger.debug("Digest algorithm unavailable: %r", method)
            return Err(
                ErrorKind.DIGEST_UNAVAILABLE,
                f"Unsupported digest algorithm: {method!r}"
            )

        try:
            hex_digest = self._functions[self._key(method)](payload)
        except Exception as exc:
            logger.debug("Digest %s failed: %s", method, exc)
            return Err(
                ErrorKind.HASH_COMPUTATION_FAILED,
                f"{method} digest failed: {exc}"
            )

        if not isinstance(hex_digest, str):
            logger.debug("Digest %s returned %s, not a hex string", method, type(hex_digest).__name__)
            return Err(
                ErrorKind.HASH_COMPUTATION_FAILED,
                f"{method} digest returned {type(hex_digest).__name__}, expected str"
            )

        return Ok(hex_digest.lower())


# ============================================================================
# Convenience Functions
# ============================================================================

default_provider = DigestProvider()


def digest_hex(method: str, payload: bytes) -> Result[str]:
    """Hash a payload using the default provider."""
    return default_provider.digest(method, payload)


def supported_methods() -> List[str]:
    """Algorithms known to the default provider."""
    return default_provider.supported_methods()
