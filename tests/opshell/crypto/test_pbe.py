"""
Tests for crypto/pbe.py.
"""

import base64
import hashlib
import warnings

import pytest
from cryptography.utils import CryptographyDeprecationWarning

from opshell.crypto.pbe import SALT_SIZE, PBEWithMD5AndDES, derive_key_iv
from opshell.exceptions import ResourceError


@pytest.fixture
def pbe():
    return PBEWithMD5AndDES()


@pytest.mark.unit
class TestDeriveKeyIv:
    """Test PBKDF1-MD5 key derivation."""

    def test_single_iteration(self):
        """Test one iteration is a single MD5 of password and salt."""
        salt = b"\x01" * 8
        digest = hashlib.md5(b"master" + salt).digest()

        assert derive_key_iv("master", salt, 1) == (digest[:8], digest[8:16])

    def test_iterations_rehash_digest(self):
        """Test each further iteration hashes the previous digest."""
        salt = b"saltsalt"
        digest = hashlib.md5(hashlib.md5(hashlib.md5(b"pw" + salt).digest()).digest()).digest()

        assert derive_key_iv("pw", salt, 3) == (digest[:8], digest[8:16])


@pytest.mark.unit
class TestPBEWithMD5AndDES:
    """Test encrypt/decrypt."""

    def test_output_layout(self, pbe):
        """Test output is base64 of the salt followed by whole DES blocks."""
        salt = b"\x00\x01\x02\x03\x04\x05\x06\x07"
        raw = base64.b64decode(pbe.encrypt("hello", "master", salt=salt))

        assert raw[:SALT_SIZE] == salt
        assert len(raw[SALT_SIZE:]) == 8

    def test_fixed_salt_is_deterministic(self, pbe):
        """Test the same salt, password and input give the same output."""
        salt = b"abcdefgh"

        assert pbe.encrypt("x", "pw", salt=salt) == pbe.encrypt("x", "pw", salt=salt)

    def test_known_vector(self, pbe):
        """Test output matches a reference jasypt token for a fixed salt."""
        token = "AAAAAAAAAADrvzqiilvtJg=="

        assert pbe.encrypt("hello", "pw", salt=b"\0" * 8) == token
        assert pbe.decrypt(token, "pw") == "hello"

    def test_no_deprecation_warning(self, pbe):
        """Test the DES cipher is built without a short-key warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", CryptographyDeprecationWarning)
            pbe.decrypt(pbe.encrypt("hello", "pw"), "pw")

    def test_random_salt(self, pbe):
        """Test two encryptions of the same value differ."""
        assert pbe.encrypt("same", "pw") != pbe.encrypt("same", "pw")

    @pytest.mark.parametrize("plaintext", ["", "a", "exactly8", "jdbc:mysql://db/app?ssl=true", "密码"])
    def test_decrypt_recovers_plaintext(self, pbe, plaintext):
        """Test decrypt inverts encrypt, including empty and non-ASCII input."""
        assert pbe.decrypt(pbe.encrypt(plaintext, "master"), "master") == plaintext

    def test_wrong_password(self, pbe):
        """Test a wrong password fails cleanly or never yields the plaintext."""
        token = pbe.encrypt("top secret value", "right")

        try:
            result = pbe.decrypt(token, "wrong")
        except ResourceError as e:
            assert str(e) == "decryption failed"
        else:
            assert result != "top secret value"

    @pytest.mark.parametrize(
        "token",
        [
            "not base64!",
            base64.b64encode(b"short").decode(),
            base64.b64encode(b"12345678").decode(),
            base64.b64encode(b"12345678" + b"123").decode(),
        ],
    )
    def test_malformed_input(self, pbe, token):
        """Test malformed input raises ResourceError."""
        with pytest.raises(ResourceError, match="decryption failed"):
            pbe.decrypt(token, "pw")

    def test_iterations_matter(self):
        """Test a different iteration count cannot decrypt."""
        token = PBEWithMD5AndDES(1000).encrypt("value-value-value", "pw")

        try:
            assert PBEWithMD5AndDES(999).decrypt(token, "pw") != "value-value-value"
        except ResourceError:
            pass

    def test_invalid_arguments(self, pbe):
        """Test bad iteration counts and salts are rejected."""
        with pytest.raises(ValueError):
            PBEWithMD5AndDES(0)
        with pytest.raises(ValueError):
            pbe.encrypt("x", "pw", salt=b"short")
