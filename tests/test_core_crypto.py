"""
Unit tests for Core Crypto modules.

Tests:
- SHA-1, SHA-256, SHA-512 implementations
- AES key expansion and cipher
- AES counter mode
- Block TEA (XXTEA)
"""

import base64
import hashlib

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from refcrypto.core_crypto import aes_ctr, sha1, sha256, sha512, tea_block
from refcrypto.core_crypto.aes import (
    S_BOX, KeySchedule, cipher, key_expansion, rot_word, sub_word,
)
from refcrypto.core_crypto.sha1 import sha1_hex
from refcrypto.core_crypto.sha256 import sha256_hex
from refcrypto.core_crypto.sha512 import sha512_hex


MSG_448 = "abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
UNICODE_TEXT = "My big secret סוד קצת بت سرية  ความลับบิต 位的秘密"
UNICODE_PASSWORD = "pāšşŵōřđ"


def _message(length: int) -> bytes:
    return bytes((i * 13 + 5) % 256 for i in range(length))


class TestSHA1:
    """Unit tests for SHA-1 implementation."""

    def test_abc(self):
        assert sha1.hash("abc", {"outFormat": "hex-w"}) == "a9993e36 4706816a ba3e2571 7850c26c 9cd0d89d"

    def test_448_bit_message(self):
        assert sha1.hash(MSG_448, {"outFormat": "hex-w"}) == "84983e44 1c3bd26e baae4aa1 f95129e5 e54670f1"

    def test_empty_string(self):
        assert sha1_hex(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"

    def test_returns_20_bytes(self):
        assert len(sha1.sha1(b"test")) == 20

    def test_matches_hashlib(self):
        for length in list(range(0, 70)) + [119, 120, 127, 128, 129]:
            data = _message(length)
            assert sha1.sha1(data) == hashlib.sha1(data).digest(), length

    def test_hex_bytes_message(self):
        assert sha1.hash("616263", {"msgFormat": "hex-bytes"}) == sha1_hex(b"abc")


class TestSHA256:
    """Unit tests for SHA-256 implementation."""

    def test_empty_string(self):
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert sha256_hex(b"") == expected

    def test_abc(self):
        assert sha256.hash("abc", {"outFormat": "hex-w"}) == (
            "ba7816bf 8f01cfea 414140de 5dae2223 b00361a3 96177a9c b410ff61 f20015ad"
        )

    def test_long_message(self):
        expected = "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"
        assert sha256.hash(MSG_448) == expected

    def test_deterministic(self):
        msg = b"test message"
        assert sha256.sha256(msg) == sha256.sha256(msg)

    def test_returns_32_bytes(self):
        assert len(sha256.sha256(b"test")) == 32

    def test_different_inputs_different_hashes(self):
        assert sha256.sha256(b"a") != sha256.sha256(b"b")

    def test_matches_hashlib_at_padding_boundaries(self):
        for length in [0, 1, 54, 55, 56, 57, 63, 64, 65, 119, 120, 128]:
            data = _message(length)
            assert sha256.sha256(data) == hashlib.sha256(data).digest(), length

    def test_unicode_message(self):
        assert sha256.hash("☺") == hashlib.sha256("☺".encode("utf-8")).hexdigest()

    @pytest.mark.slow
    def test_million_a(self):
        assert sha256.hash("a" * 1_000_000, {"outFormat": "hex-w"}) == (
            "cdc76e5c 9914fb92 81a1c7e2 84d73e67 f1809a48 a497200e 046d39cc c7112cd0"
        )


class TestSHA512:
    """Unit tests for SHA-512 implementation."""

    def test_empty_string(self):
        assert sha512_hex(b"") == (
            "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
            "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
        )

    def test_abc(self):
        assert sha512.hash("abc", {"outFormat": "hex-w"}) == (
            "ddaf35a193617aba cc417349ae204131 12e6fa4e89a97ea2 0a9eeee64b55d39a "
            "2192992a274fc1a8 36ba3c23a3feebbd 454d4423643ce80e 2a9ac94fa54ca49f"
        )

    def test_returns_64_bytes(self):
        assert len(sha512.sha512(b"test")) == 64

    def test_matches_hashlib_at_padding_boundaries(self):
        for length in [0, 1, 110, 111, 112, 113, 127, 128, 129, 239, 240, 256]:
            data = _message(length)
            assert sha512.sha512(data) == hashlib.sha512(data).digest(), length


class TestAESKeySchedule:
    """Unit tests for AES Key Schedule."""

    @pytest.mark.parametrize("key_size,words", [(16, 44), (24, 52), (32, 60)])
    def test_key_expansion_length(self, key_size, words):
        w = key_expansion(bytes(range(key_size)))
        assert len(w) == words
        assert all(len(word) == 4 for word in w)

    def test_first_words_are_key(self):
        key = bytes(range(32))
        schedule = KeySchedule(key)
        assert schedule.get_round_key(0) == key[:16]
        assert schedule.get_round_key(1) == key[16:]

    def test_aes256_last_round_key(self):
        """FIPS 197 Appendix C.3."""
        schedule = KeySchedule(bytes(range(32)))
        assert schedule.num_rounds == 14
        assert len(schedule.round_keys) == 15
        assert schedule.get_round_key(14) == bytes.fromhex("24fc79ccbf0979e9371ac23c6d68de36")

    def test_aes128_last_round_key(self):
        """FIPS 197 Appendix A.1."""
        schedule = KeySchedule(bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"))
        assert schedule.get_round_key(10) == bytes.fromhex("d014f9a8c9ee2589e13f0cc8b6630ca6")

    def test_deterministic(self):
        key = bytes(range(32))
        assert key_expansion(key) == key_expansion(key)

    def test_different_keys_different_schedule(self):
        key1 = bytes(32)
        key2 = bytes([1] + [0] * 31)
        assert key_expansion(key1) != key_expansion(key2)

    def test_invalid_key_length(self):
        with pytest.raises(ValueError):
            key_expansion(bytes(20))

    def test_round_key_out_of_range(self):
        schedule = KeySchedule(bytes(16))
        with pytest.raises(ValueError):
            schedule.get_round_key(11)

    def test_sbox_bijective(self):
        assert len(set(S_BOX)) == 256

    def test_word_helpers(self):
        assert rot_word([1, 2, 3, 4]) == [2, 3, 4, 1]
        assert sub_word([0x00, 0x01, 0x53, 0xff]) == [0x63, 0x7c, 0xed, 0x16]


class TestAESCipher:
    """Unit tests for the AES forward cipher."""

    PLAINTEXT = bytes.fromhex("00112233445566778899aabbccddeeff")

    @pytest.mark.parametrize("key_size,expected", [
        (16, "69c4e0d86a7b0430d8cdb78070b4c55a"),
        (24, "dda97ca4864cdfe06eaf70a0ec0d7191"),
        (32, "8ea2b7ca516745bfeafc49904b496089"),
    ])
    def test_fips_197_vectors(self, key_size, expected):
        """FIPS 197 Appendix C."""
        assert cipher(self.PLAINTEXT, key_expansion(bytes(range(key_size)))).hex() == expected

    def test_accepts_list_input(self):
        w = key_expansion(bytes(range(16)))
        assert cipher(list(self.PLAINTEXT), w) == cipher(self.PLAINTEXT, w)

    @pytest.mark.parametrize("key_size", [16, 24, 32])
    def test_matches_cryptography_library(self, key_size):
        key = _message(key_size)
        block = _message(16)[::-1]
        encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
        expected = encryptor.update(block) + encryptor.finalize()
        assert KeySchedule(key).encrypt_block(block) == expected

    def test_invalid_block_length(self):
        with pytest.raises(ValueError):
            cipher(bytes(15), key_expansion(bytes(16)))


class TestAESCounterMode:
    """Unit tests for AES CTR."""

    def test_sp800_38a_vector(self):
        """NIST SP 800-38A F.5.1 CTR-AES128.Encrypt."""
        key = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")
        counter = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")
        plaintext = bytes.fromhex(
            "6bc1bee22e409f96e93d7e117393172a"
            "ae2d8a571e03ac9c9eb76fac45af8e51"
            "30c81c46a35ce411e5fbc1191a0a52ef"
            "f69f2445df4f9b17ad2b417be66c3710"
        )
        expected = bytes.fromhex(
            "874d6191b620e3261bef6864990db6ce"
            "9806f66b7970fdff8617187bb9fffdff"
            "5ae4df3edbd5d35e5b4f09020db03eab"
            "1e031dda2fbe03d1792170a0f3009cee"
        )
        assert aes_ctr.nist_encryption(plaintext, key, counter) == expected
        assert aes_ctr.nist_decryption(expected, key, counter) == plaintext

    @pytest.mark.parametrize("key_size", [16, 24, 32])
    def test_matches_cryptography_library(self, key_size):
        key = _message(key_size)
        counter = bytes(range(8)) + bytes(8)
        data = _message(100)
        encryptor = Cipher(algorithms.AES(key), modes.CTR(counter)).encryptor()
        expected = encryptor.update(data) + encryptor.finalize()
        assert aes_ctr.nist_encryption(data, key, counter) == expected

    def test_counter_block_not_modified(self):
        counter = bytearray(16)
        aes_ctr.nist_encryption(bytes(40), bytes(16), counter)
        assert counter == bytearray(16)

    def test_partial_final_block(self):
        out = aes_ctr.nist_encryption(bytes(20), bytes(16), bytes(16))
        assert len(out) == 20

    @pytest.mark.parametrize("n_bits", [128, 192, 256])
    def test_unicode_round_trip(self, n_bits):
        ciphertext = aes_ctr.encrypt(UNICODE_TEXT, UNICODE_PASSWORD, n_bits)
        assert aes_ctr.decrypt(ciphertext, UNICODE_PASSWORD, n_bits) == UNICODE_TEXT

    @pytest.mark.parametrize("length", [0, 1, 10, 100, 1000, 10000])
    def test_various_lengths(self, length):
        plaintext = ("0123456789" * (length // 10 + 1))[:length]
        for n_bits in (128, 192, 256):
            ciphertext = aes_ctr.encrypt(plaintext, "password", n_bits)
            assert aes_ctr.decrypt(ciphertext, "password", n_bits) == plaintext

    def test_ciphertext_layout(self):
        nonce = bytes(range(8))
        ciphertext = aes_ctr.encrypt("big secret", "pw", 128, nonce=nonce)
        raw = base64.b64decode(ciphertext)
        assert raw[:8] == nonce
        assert len(raw) == 8 + len("big secret")

    def test_fixed_nonce_is_deterministic(self):
        nonce = bytes(8)
        assert aes_ctr.encrypt("abc", "pw", 256, nonce=nonce) == aes_ctr.encrypt("abc", "pw", 256, nonce=nonce)

    def test_derived_key_length(self):
        for n_bits in (128, 192, 256):
            assert len(aes_ctr.derive_key("pw", n_bits)) == n_bits // 8

    def test_nonce_layout(self):
        nonce = aes_ctr.generate_nonce()
        assert len(nonce) == 8
        assert int.from_bytes(nonce[:2], "little") < 1000

    def test_invalid_key_size(self):
        with pytest.raises(ValueError, match="128 / 192 / 256"):
            aes_ctr.encrypt("abc", "pw", 512)
        with pytest.raises(ValueError):
            aes_ctr.decrypt("AAAAAAAAAAA=", "pw", 100)

    def test_invalid_nonce(self):
        with pytest.raises(ValueError):
            aes_ctr.encrypt("abc", "pw", 128, nonce=bytes(4))

    def test_truncated_ciphertext(self):
        with pytest.raises(ValueError):
            aes_ctr.decrypt(base64.b64encode(bytes(4)).decode(), "pw", 128)

    def test_invalid_base64(self):
        with pytest.raises(ValueError):
            aes_ctr.decrypt("not base64!", "pw", 128)


class TestBlockTEA:
    """Unit tests for XXTEA."""

    KEY = [0x01234567, 0x89abcdef, 0xfedcba98, 0x76543210]

    def test_unicode_round_trip(self):
        ciphertext = tea_block.encrypt(UNICODE_TEXT, UNICODE_PASSWORD)
        assert tea_block.decrypt(ciphertext, UNICODE_PASSWORD) == UNICODE_TEXT

    def test_encode_decode_inverse(self):
        v = [0x11111111, 0x22222222, 0x33333333, 0xffffffff, 0]
        encoded = tea_block.encode(v, self.KEY)
        assert encoded != v
        assert tea_block.decode(encoded, self.KEY) == v

    def test_encode_does_not_modify_input(self):
        v = [1, 2, 3]
        tea_block.encode(v, self.KEY)
        assert v == [1, 2, 3]

    def test_short_vector_extended(self):
        encoded = tea_block.encode([42], self.KEY)
        assert len(encoded) == 2
        assert tea_block.decode(encoded, self.KEY) == [42, 0]

    def test_words_stay_32_bit(self):
        encoded = tea_block.encode([0xffffffff] * 8, self.KEY)
        assert all(0 <= word <= 0xffffffff for word in encoded)

    def test_decode_rejects_single_word(self):
        with pytest.raises(ValueError):
            tea_block.decode([1], self.KEY)

    @pytest.mark.parametrize("plaintext", ["a", "abcd", "abcde", "x" * 97])
    def test_round_trip_lengths(self, plaintext):
        assert tea_block.decrypt(tea_block.encrypt(plaintext, "pw"), "pw") == plaintext

    def test_empty(self):
        assert tea_block.encrypt("", "pw") == ""
        assert tea_block.decrypt("", "pw") == ""

    def test_different_password_different_ciphertext(self):
        assert tea_block.encrypt("secret", "one") != tea_block.encrypt("secret", "two")

    def test_deterministic(self):
        assert tea_block.encrypt("secret", "pw") == tea_block.encrypt("secret", "pw")

    def test_long_password_truncated_to_16_bytes(self):
        assert tea_block.encrypt("secret", "p" * 16) == tea_block.encrypt("secret", "p" * 40)

    def test_byte_word_conversion(self):
        assert tea_block.bytes_to_longs(b"\x01\x00\x00\x00\x02") == [1, 2]
        assert tea_block.longs_to_bytes([1, 2]) == b"\x01\x00\x00\x00\x02\x00\x00\x00"

    def test_malformed_ciphertext(self):
        with pytest.raises(ValueError):
            tea_block.decrypt(base64.b64encode(b"\x00" * 6).decode(), "pw")
