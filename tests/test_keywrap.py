"""Tests for RSA-OAEP wrapping of the symmetric key."""

import base64

import pytest

from securemsg.common.exceptions import DecryptionError, KeyUnwrapError, KeyWrapError
from securemsg.crypto.aes import generate_symmetric_key, encrypt_message, decrypt_message
from securemsg.crypto.keywrap import encrypt_symmetric_key, decrypt_symmetric_key


class TestKeyWrap:

    def test_unwrapped_key_decrypts_content(self, bob_bundle) -> None:
        """A key wrapped for Bob can be recovered by Bob and used to decrypt."""
        key = generate_symmetric_key()
        blob = encrypt_message("ola", key)

        wrapped = encrypt_symmetric_key(key, bob_bundle.encryption.public_key)
        recovered = decrypt_symmetric_key(wrapped, bob_bundle.encryption.private_key)

        assert recovered == key
        assert decrypt_message(blob, recovered) == "ola"

    def test_wrapped_key_is_base64_of_modulus_size(self, bob_bundle) -> None:
        wrapped = encrypt_symmetric_key(generate_symmetric_key(), bob_bundle.encryption.public_key)
        assert len(base64.b64decode(wrapped)) == bob_bundle.encryption.public_key.key_size // 8

    def test_oaep_is_randomized(self, bob_bundle) -> None:
        key = generate_symmetric_key()
        public_key = bob_bundle.encryption.public_key
        assert encrypt_symmetric_key(key, public_key) != encrypt_symmetric_key(key, public_key)

    def test_wrong_private_key_fails(self, alice_bundle, bob_bundle) -> None:
        wrapped = encrypt_symmetric_key(generate_symmetric_key(), bob_bundle.encryption.public_key)
        with pytest.raises(KeyUnwrapError):
            decrypt_symmetric_key(wrapped, alice_bundle.encryption.private_key)

    def test_unwrap_error_is_decryption_error(self, bob_bundle) -> None:
        with pytest.raises(DecryptionError):
            decrypt_symmetric_key("%%%", bob_bundle.encryption.private_key)

    def test_wrong_length_key_material_rejected(self, bob_bundle) -> None:
        wrapped = encrypt_symmetric_key(b"sixteen byte key", bob_bundle.encryption.public_key)
        with pytest.raises(KeyUnwrapError, match="expected 32"):
            decrypt_symmetric_key(wrapped, bob_bundle.encryption.private_key)

    def test_oversized_key_cannot_be_wrapped(self, bob_bundle) -> None:
        with pytest.raises(KeyWrapError):
            encrypt_symmetric_key(b"\x00" * 512, bob_bundle.encryption.public_key)
