"""
Jasypt-compatible password-based encryption.

Reproduces the default string encryptor of jasypt-spring-boot:
PBEWithMD5AndDES, 1000 key-obtention iterations, a random 8-byte salt
stored in front of the ciphertext, no IV generator and base64 output.
Values produced here decrypt with ``ENC(...)`` in a Spring application
configured with the same password, and vice versa.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, modes

from ..exceptions import ResourceError

DEFAULT_ITERATIONS = 1000
SALT_SIZE = 8
_BLOCK_BITS = 64


def derive_key_iv(password: str, salt: bytes, iterations: int) -> tuple[bytes, bytes]:
    """
    PBKDF1 with MD5 (PKCS #5 v1.5).

    Returns:
        The 8-byte DES key and the 8-byte IV
    """
    digest = hashlib.md5(password.encode("utf-8") + salt).digest()
    for _ in range(iterations - 1):
        digest = hashlib.md5(digest).digest()
    return digest[:8], digest[8:16]


def _cipher(password: str, salt: bytes, iterations: int) -> Cipher:
    key, iv = derive_key_iv(password, salt, iterations)
    # EDE with three equal keys is single DES
    return Cipher(TripleDES(key * 3), modes.CBC(iv))


class PBEWithMD5AndDES:
    """
    CipherProvider implementing jasypt's PBEWithMD5AndDES string encryptor.

    Example:
        >>> pbe = PBEWithMD5AndDES()
        >>> token = pbe.encrypt("s3cret", "master")
        >>> pbe.decrypt(token, "master")
        's3cret'
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS) -> None:
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations

    def encrypt(self, plaintext: str, password: str, salt: bytes | None = None) -> str:
        """
        Encrypt plaintext under password.

        Args:
            plaintext: Text to encrypt
            password: Encryptor password
            salt: Fixed 8-byte salt (default: random)

        Returns:
            base64(salt + ciphertext)
        """
        if salt is None:
            salt = os.urandom(SALT_SIZE)
        elif len(salt) != SALT_SIZE:
            raise ValueError(f"salt must be {SALT_SIZE} bytes")

        padder = padding.PKCS7(_BLOCK_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = _cipher(password, salt, self.iterations).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(salt + ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str, password: str) -> str:
        """
        Decrypt a value produced by encrypt.

        Raises:
            ResourceError: If the input is not valid base64, is truncated,
                or the password is wrong
        """
        try:
            raw = base64.b64decode(ciphertext.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ResourceError("decryption failed") from e

        body = raw[SALT_SIZE:]
        if len(raw) <= SALT_SIZE or len(body) % (_BLOCK_BITS // 8):
            raise ResourceError("decryption failed")

        decryptor = _cipher(password, raw[:SALT_SIZE], self.iterations).decryptor()
        try:
            padded = decryptor.update(body) + decryptor.finalize()
            unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
            plain = unpadder.update(padded) + unpadder.finalize()
            return plain.decode("utf-8")
        except ValueError as e:
            # Bad padding or undecodable bytes
            raise ResourceError("decryption failed") from e
