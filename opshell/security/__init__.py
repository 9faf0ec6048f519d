"""
Secret masking for log output and informational commands.
"""

from .masking import DEFAULT_PATTERNS, SecretMasker, get_masker, reset_masker

__all__ = ["DEFAULT_PATTERNS", "SecretMasker", "get_masker", "reset_masker"]
