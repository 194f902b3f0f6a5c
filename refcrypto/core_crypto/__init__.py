# Core Cryptography Module
"""
Reference implementations of published cryptographic primitives:
- SHA-3 / Keccak (FIPS 202)
- SHA-1, SHA-256, SHA-512 (FIPS 180-4)
- AES (FIPS 197) with counter mode (SP 800-38A)
- XXTEA (Corrected Block TEA)
"""
