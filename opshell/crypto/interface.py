"""
Cipher collaborator interface.
"""

from typing import Protocol


class CipherProvider(Protocol):
    """Symmetric string encryption under a password."""

    def encrypt(self, plaintext: str, password: str) -> str:
        """Encrypt plaintext, returning printable ciphertext."""
        ...

    def decrypt(self, ciphertext: str, password: str) -> str:
        """
        Decrypt ciphertext produced by encrypt.

        Raises:
            ResourceError: If the input is malformed or the password is wrong
        """
        ...
