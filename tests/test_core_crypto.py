"""
Unit tests for the digest provider.

Tests:
- Known SHA-256 vectors
- Case-insensitive algorithm lookup
- Unknown algorithms
- Custom digest registration
"""

import hashlib

import pytest

from hashledger.blockchain.operations import create_genesis_chain
from hashledger.core_crypto.digest import (
    DEFAULT_METHOD, DigestProvider, default_provider, digest_hex, supported_methods
)
from hashledger.result import Err, ErrorKind, Ok


class TestDigestProvider:
    """Tests for built-in digests."""

    def test_sha256_empty(self):
        """SHA-256 of empty input matches the standard vector."""
        result = digest_hex("SHA-256", b"")
        assert result == Ok("e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")

    def test_sha256_abc(self):
        """SHA-256 of 'abc' matches the standard vector."""
        result = digest_hex("SHA-256", b"abc")
        assert result.value == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_default_method_is_sha256(self):
        assert DEFAULT_METHOD == "SHA-256"

    def test_case_insensitive_lookup(self):
        """Algorithm names are matched ignoring case."""
        assert digest_hex("sha-256", b"abc") == digest_hex("SHA-256", b"abc")

    @pytest.mark.parametrize("method,reference", [
        ("SHA-1", "sha1"),
        ("SHA-384", "sha384"),
        ("SHA-512", "sha512"),
        ("SHA3-256", "sha3_256"),
    ])
    def test_other_algorithms(self, method, reference):
        """Built-in algorithms agree with hashlib."""
        expected = hashlib.new(reference, b"ledger").hexdigest()
        assert digest_hex(method, b"ledger").value == expected

    def test_output_is_lowercase_hex(self):
        value = digest_hex("SHA-512", b"x").value
        assert value == value.lower()
        int(value, 16)

    def test_deterministic(self):
        """Same input always gives the same digest."""
        assert digest_hex("SHA-256", b"same") == digest_hex("SHA-256", b"same")

    def test_supported_methods(self):
        methods = supported_methods()
        assert "SHA-256" in methods
        assert "SHA3-512" in methods


class TestUnknownDigest:
    """Tests for unavailable algorithms."""

    def test_unknown_algorithm(self):
        """Unknown algorithm is reported, not replaced by a default."""
        result = digest_hex("ABCDEFGHIJKLMNOPQRSTUVWXYZ", b"abc")
        assert isinstance(result, Err)
        assert result.kind == ErrorKind.DIGEST_UNAVAILABLE

    def test_non_string_algorithm(self):
        result = default_provider.digest(None, b"abc")
        assert result == Err(ErrorKind.DIGEST_UNAVAILABLE)

    def test_empty_provider_has_nothing(self):
        provider = DigestProvider(include_builtins=False)
        assert provider.supported_methods() == []
        assert provider.digest("SHA-256", b"abc").kind == ErrorKind.DIGEST_UNAVAILABLE


class TestCustomDigest:
    """Tests for registered digest functions."""

    def test_register_custom(self):
        """Registered functions are used by name."""
        provider = DigestProvider()
        provider.register("reverse", lambda payload: payload[::-1].hex())
        assert provider.digest("REVERSE", b"\x01\x02") == Ok("0201")

    def test_custom_output_lowercased(self):
        provider = DigestProvider()
        provider.register("upper", lambda payload: "ABCDEF")
        assert provider.digest("upper", b"") == Ok("abcdef")

    def test_failing_custom_digest(self):
        """A raising digest function is wrapped, not propagated."""
        def broken(payload):
            raise RuntimeError("hardware fault")

        provider = DigestProvider()
        provider.register("broken", broken)
        result = provider.digest("broken", b"abc")
        assert result.kind == ErrorKind.HASH_COMPUTATION_FAILED
        assert "hardware fault" in result.message

    @pytest.mark.parametrize("output", [None, b"abcdef", 1234])
    def test_non_string_digest_output(self, output):
        """A digest function returning a non-string is reported as a failure."""
        provider = DigestProvider()
        provider.register("odd", lambda payload: output)
        result = provider.digest("odd", b"abc")
        assert result == Err(ErrorKind.HASH_COMPUTATION_FAILED)

    def test_non_string_output_through_chain(self):
        """Bad digest output never escapes genesis creation."""
        provider = DigestProvider()
        provider.register("bad", lambda payload: None)
        result = create_genesis_chain("n", "d", method="bad", provider=provider)
        assert result.kind == ErrorKind.HASH_COMPUTATION_FAILED
        assert result.cause == ErrorKind.HASH_COMPUTATION_FAILED

    def test_register_invalid(self):
        provider = DigestProvider()
        with pytest.raises(ValueError):
            provider.register("", lambda payload: "")
        with pytest.raises(TypeError):
            provider.register("x", "not callable")

    def test_custom_does_not_leak_to_default(self):
        provider = DigestProvider()
        provider.register("private-algo", lambda payload: "00")
        assert not default_provider.supports("private-algo")
