# hashledger Test Suite
"""
Test suite including:
- Unit tests (digest, hashing, blocks, chain)
- Integration tests (async adapter, chain writer)
- Security tests (tampering, forged blocks)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
