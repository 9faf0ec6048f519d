"""
Password-based string encryption.
"""

from .interface import CipherProvider
from .pbe import DEFAULT_ITERATIONS, PBEWithMD5AndDES, derive_key_iv

__all__ = ["CipherProvider", "DEFAULT_ITERATIONS", "PBEWithMD5AndDES", "derive_key_iv"]
