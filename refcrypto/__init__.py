"""
refcrypto - reference implementations of standard cryptographic primitives.
"""

__version__ = "1.0.0"
