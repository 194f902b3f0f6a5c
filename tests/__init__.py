# refcrypto Test Suite
"""
Test suite including:
- Known-answer tests (FIPS 180-4, FIPS 197, FIPS 202, SP 800-38A)
- Cross-checks against hashlib and the cryptography package
- Command line tests

Run with: pytest
Slow tests (million-character messages): pytest -m slow
"""
