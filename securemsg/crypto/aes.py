"""
AES-256-GCM Content Encryption

Each message gets a fresh 256-bit key and a fresh 96-bit nonce. The nonce is
prepended to the ciphertext (which already carries the 128-bit tag) and the
result is base64-encoded:

    base64( nonce[12] || ciphertext || tag[16] )
"""

import binascii
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from securemsg.common.exceptions import EncryptionError, DecryptionError
from securemsg.common.utils import b64encode, b64decode, generate_nonce

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def generate_symmetric_key() -> bytes:
    """
    Generate a random AES-256 key.
    
    Returns:
        32-byte key
    """
    return AESGCM.generate_key(bit_length=KEY_SIZE * 8)


def encrypt_message(plaintext: str, key: bytes) -> str:
    """
    Encrypt plaintext using AES-256-GCM.
    
    Args:
        plaintext: String to encrypt
        key: 32-byte AES key
    
    Returns:
        Base64-encoded nonce || ciphertext || tag
    
    Raises:
        EncryptionError: If the key is invalid or encryption fails
    """
    if len(key) != KEY_SIZE:
        raise EncryptionError(f"AES-256 requires {KEY_SIZE}-byte key, got {len(key)} bytes")
    
    # Fresh nonce for every call
    nonce = generate_nonce(NONCE_SIZE)
    
    try:
        ciphertext = AESGCM(key).encrypt(nonce, plaintext.encode('utf-8'), None)
    except Exception as e:
        raise EncryptionError(f"Encryption failed: {e}") from e
    
    return b64encode(nonce + ciphertext)


def decrypt_message(blob: str, key: bytes) -> str:
    """
    Decrypt and authenticate a base64 nonce || ciphertext || tag blob.
    
    Wrong keys and tampered data are reported the same way.
    
    Args:
        blob: Output of encrypt_message
        key: 32-byte AES key
    
    Returns:
        Decrypted plaintext string
    
    Raises:
        DecryptionError: If the message cannot be decrypted
    """
    if len(key) != KEY_SIZE:
        raise DecryptionError(f"AES-256 requires {KEY_SIZE}-byte key, got {len(key)} bytes")
    
    try:
        combined = b64decode(blob)
    except (binascii.Error, ValueError) as e:
        raise DecryptionError(f"Decryption failed: malformed ciphertext ({e})") from e
    
    if len(combined) < NONCE_SIZE + TAG_SIZE:
        raise DecryptionError("Decryption failed: ciphertext too short")
    
    nonce, ciphertext = combined[:NONCE_SIZE], combined[NONCE_SIZE:]
    
    try:
        plaintext_bytes = AESGCM(key).decrypt(nonce, ciphertext, None)
        return plaintext_bytes.decode('utf-8')
    except (InvalidTag, UnicodeDecodeError) as e:
        logger.debug("AES-GCM authentication failed")
        raise DecryptionError("Decryption failed: could not decrypt message") from e


# Test function for development
if __name__ == "__main__":
    test_key = generate_symmetric_key()
    test_message = "Hello, SecureMsg!"
    
    print(f"Original: {test_message}")
    
    encrypted = encrypt_message(test_message, test_key)
    print(f"Encrypted (base64): {encrypted}")
    
    decrypted = decrypt_message(encrypted, test_key)
    print(f"Decrypted: {decrypted}")
    
    assert decrypted == test_message, "Encryption/Decryption test failed!"
    print("\n[✓] AES-GCM encryption/decryption test passed!")
