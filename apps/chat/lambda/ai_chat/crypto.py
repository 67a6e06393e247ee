"""AES-256-GCM encryption of provider API keys stored at rest.

Wire format (base64, standard alphabet):
  [12-byte nonce][ciphertext...][16-byte tag]
"""

import base64
import binascii
import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import (
    ENCRYPTED_MIN_LENGTH,
    ENCRYPTION_KEY_SIZE,
    ENCRYPTION_NONCE_SIZE,
    ENCRYPTION_TAG_SIZE,
)
from .errors import AuthenticationFailure, CryptoError, InvalidCiphertext

logger = logging.getLogger(__name__)


def derive_key(secret: str) -> bytes:
    """Zero-pad or truncate the configured secret to an AES-256 key."""
    key = secret.encode("utf-8")
    if len(key) < ENCRYPTION_KEY_SIZE:
        return key.ljust(ENCRYPTION_KEY_SIZE, b"\x00")
    return key[:ENCRYPTION_KEY_SIZE]


def _b64decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidCiphertext("ciphertext is not valid base64") from e


class CredentialCipher:
    def __init__(self, secret: str) -> None:
        self._aead = AESGCM(derive_key(secret))

    def encrypt(self, plaintext: str) -> str:
        if not plaintext:
            return ""
        nonce = os.urandom(ENCRYPTION_NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        if not ciphertext:
            return ""
        data = _b64decode(ciphertext)
        if len(data) < ENCRYPTION_NONCE_SIZE:
            raise InvalidCiphertext("ciphertext is shorter than the nonce")

        nonce, sealed = data[:ENCRYPTION_NONCE_SIZE], data[ENCRYPTION_NONCE_SIZE:]
        if len(sealed) < ENCRYPTION_TAG_SIZE:
            raise AuthenticationFailure("ciphertext is missing its authentication tag")
        try:
            plaintext = self._aead.decrypt(nonce, sealed, None)
        except InvalidTag as e:
            raise AuthenticationFailure("ciphertext failed authentication") from e

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CryptoError("decrypted payload is not valid UTF-8") from e

    def decrypt_or_passthrough(self, stored: str, *, label: str) -> str:
        """Decrypt a stored value, treating undecryptable values as legacy plaintext."""
        try:
            return self.decrypt(stored)
        except CryptoError as e:
            logger.warning(
                "Stored credential could not be decrypted; using it as plaintext",
                extra={"credential": label, "reason": type(e).__name__},
            )
            return stored


def is_probably_encrypted(value: str) -> bool:
    """Heuristic check for values produced by ``CredentialCipher.encrypt``.

    Only confirms the value is base64 and longer than a minimum length, so a
    long plaintext key drawn from the base64 alphabet is misclassified. Use it
    for migration decisions, never for security decisions.
    """
    if not value:
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return len(value) > ENCRYPTED_MIN_LENGTH
