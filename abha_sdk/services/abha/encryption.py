"""ABHA challenge encryption - RSA/ECB/OAEPWithSHA-1AndMGF1Padding."""

import base64
import binascii
from typing import Optional, Protocol, Union

from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA1
from Crypto.PublicKey import RSA
from loguru import logger

from ...constants.defaults import Encryption
from ...core.exceptions import EncryptionError
from .models import PublicKeyMaterial


def load_rsa_public_key(material: str) -> RSA.RsaKey:
    """
    Load an RSA public key from PEM text or bare base64-encoded DER.

    Raises:
        EncryptionError: If the key cannot be parsed
    """
    if not material or not material.strip():
        raise EncryptionError("Public key is empty")
    text = material.strip()
    try:
        if text.startswith("-----BEGIN"):
            key = RSA.import_key(text)
        else:
            der = base64.b64decode("".join(text.split()), validate=True)
            key = RSA.import_key(der)
    except (ValueError, IndexError, TypeError, binascii.Error) as e:
        raise EncryptionError(f"Malformed public key: {e}") from e
    return key.public_key()


def max_plaintext_length(key: RSA.RsaKey) -> int:
    """OAEP payload bound ``k - 2*hLen - 2`` for the key's modulus size."""
    modulus_bytes = (key.size_in_bits() + 7) // 8
    return modulus_bytes - 2 * Encryption.HASH_LENGTH - 2


class CryptoProvider(Protocol):
    """Performs OAEP/SHA-1 encryption of a short plaintext."""

    def encrypt(self, public_key: str, plaintext: bytes) -> str:
        ...


class PKCS1OAEPProvider:
    """Crypto provider backed by pycryptodome's PKCS1_OAEP with SHA-1 and MGF1-SHA-1."""

    def encrypt(self, public_key: str, plaintext: bytes) -> str:
        """
        Encrypt plaintext and return base64 ciphertext.

        Raises:
            EncryptionError: On malformed key or oversized plaintext
        """
        key = load_rsa_public_key(public_key)
        # MGF1 defaults to the same hash as the main OAEP hash
        cipher = PKCS1_OAEP.new(key, hashAlgo=SHA1)
        try:
            encrypted = cipher.encrypt(plaintext)
        except ValueError as e:
            raise EncryptionError(f"Encryption failed: {e}") from e
        return base64.b64encode(encrypted).decode("ascii")


class CryptoChallengeEncoder:
    """Encrypts identifiers, OTPs and passwords under the ABHA public key."""

    def __init__(self, provider: Optional[CryptoProvider] = None):
        """
        Initialize encoder.

        Args:
            provider: Crypto provider (defaults to PKCS1OAEPProvider)
        """
        self.provider = provider or PKCS1OAEPProvider()

    def encrypt(self, plaintext: Union[str, bytes], public_key: Union[PublicKeyMaterial, str]) -> str:
        """
        Encrypt a secret for transmission.

        The size limit is derived from the key actually supplied, so 2048 and
        4096-bit keys are both handled.

        Args:
            plaintext: Secret to encrypt (str is UTF-8 encoded)
            public_key: Key material from the certificate endpoint, or the raw key text

        Returns:
            Base64 encoded ciphertext

        Raises:
            EncryptionError: If the key is malformed or the plaintext is too long
        """
        if isinstance(public_key, PublicKeyMaterial):
            if public_key.algorithm and public_key.algorithm != Encryption.ALGORITHM:
                logger.warning(
                    f"Public key advertises '{public_key.algorithm}', "
                    f"encrypting with {Encryption.ALGORITHM}"
                )
            key_text = public_key.key
        else:
            key_text = public_key

        data = plaintext.encode("utf-8") if isinstance(plaintext, str) else plaintext

        key = load_rsa_public_key(key_text)
        limit = max_plaintext_length(key)
        if len(data) > limit:
            raise EncryptionError(
                f"Plaintext of {len(data)} bytes exceeds the {limit}-byte limit "
                f"for a {key.size_in_bits()}-bit key",
                details={"length": len(data), "limit": limit},
            )

        try:
            return self.provider.encrypt(key_text, data)
        except EncryptionError:
            raise
        except (ValueError, TypeError) as e:
            raise EncryptionError(f"Encryption failed: {e}") from e
