"""Tests for challenge encryption."""

import base64
from unittest.mock import MagicMock

import pytest
from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA1
from Crypto.PublicKey import RSA

from abha_sdk.constants.errors import ErrorCodes
from abha_sdk.core.exceptions import EncryptionError
from abha_sdk.services.abha.encryption import (
    CryptoChallengeEncoder,
    PKCS1OAEPProvider,
    load_rsa_public_key,
    max_plaintext_length,
)
from abha_sdk.services.abha.models import PublicKeyMaterial


def decrypt(rsa_key, ciphertext: str) -> bytes:
    cipher = PKCS1_OAEP.new(rsa_key, hashAlgo=SHA1)
    return cipher.decrypt(base64.b64decode(ciphertext))


class TestLoadPublicKey:
    """Tests for public key loading."""

    def test_base64_der(self, rsa_key, public_key_b64):
        assert load_rsa_public_key(public_key_b64).n == rsa_key.n

    def test_pem(self, rsa_key):
        pem = rsa_key.public_key().export_key(format="PEM").decode("ascii")
        assert load_rsa_public_key(pem).n == rsa_key.n

    def test_base64_with_line_breaks(self, rsa_key, public_key_b64):
        wrapped = "\n".join(public_key_b64[i : i + 64] for i in range(0, len(public_key_b64), 64))
        assert load_rsa_public_key(wrapped).n == rsa_key.n

    @pytest.mark.parametrize("material", ["", "   ", "not-base64!!", base64.b64encode(b"garbage").decode()])
    def test_malformed(self, material):
        with pytest.raises(EncryptionError) as exc_info:
            load_rsa_public_key(material)
        assert exc_info.value.code == ErrorCodes.ENCRYPTION_FAILED

    def test_never_returns_private_part(self, rsa_key, public_key_b64):
        assert not load_rsa_public_key(public_key_b64).has_private()


class TestMaxPlaintextLength:
    """Tests for the OAEP payload bound."""

    def test_2048_bit_key(self, rsa_key):
        assert max_plaintext_length(rsa_key.public_key()) == 256 - 42

    def test_1024_bit_key(self):
        key = RSA.generate(1024)
        assert max_plaintext_length(key.public_key()) == 128 - 42


class TestCryptoChallengeEncoder:
    """Tests for CryptoChallengeEncoder."""

    def test_round_trip(self, rsa_key, public_key_b64):
        encoder = CryptoChallengeEncoder()
        ciphertext = encoder.encrypt("123456", public_key_b64)
        assert decrypt(rsa_key, ciphertext) == b"123456"

    def test_accepts_key_material(self, rsa_key, public_key_b64):
        encoder = CryptoChallengeEncoder()
        material = PublicKeyMaterial(key=public_key_b64, algorithm="RSA/ECB/OAEPWithSHA-1AndMGF1Padding")
        ciphertext = encoder.encrypt("12-3456-7890-1234", material)
        assert decrypt(rsa_key, ciphertext) == b"12-3456-7890-1234"

    def test_ciphertext_is_randomized(self, public_key_b64):
        encoder = CryptoChallengeEncoder()
        assert encoder.encrypt("123456", public_key_b64) != encoder.encrypt("123456", public_key_b64)

    def test_maximum_payload_accepted(self, rsa_key, public_key_b64):
        encoder = CryptoChallengeEncoder()
        payload = b"x" * 214
        assert decrypt(rsa_key, encoder.encrypt(payload, public_key_b64)) == payload

    def test_oversized_payload(self, public_key_b64):
        encoder = CryptoChallengeEncoder()
        with pytest.raises(EncryptionError) as exc_info:
            encoder.encrypt(b"x" * 215, public_key_b64)
        assert exc_info.value.details["limit"] == 214

    def test_malformed_key(self):
        with pytest.raises(EncryptionError):
            CryptoChallengeEncoder().encrypt("123456", "bogus")

    def test_custom_provider(self, public_key_b64):
        provider = MagicMock()
        provider.encrypt.return_value = "ciphertext"
        encoder = CryptoChallengeEncoder(provider)

        assert encoder.encrypt("123456", public_key_b64) == "ciphertext"
        provider.encrypt.assert_called_once_with(public_key_b64, b"123456")

    def test_provider_failure_is_wrapped(self, public_key_b64):
        provider = MagicMock()
        provider.encrypt.side_effect = ValueError("boom")
        with pytest.raises(EncryptionError):
            CryptoChallengeEncoder(provider).encrypt("123456", public_key_b64)

    def test_default_provider(self):
        assert isinstance(CryptoChallengeEncoder().provider, PKCS1OAEPProvider)
