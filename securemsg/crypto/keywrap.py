"""
RSA-OAEP Key Wrapping

Protects the per-message AES key with the recipient's encryption public key.
OAEP uses SHA-256 for both the label hash and MGF1.
"""

import binascii
import logging

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from securemsg.common.exceptions import KeyWrapError, KeyUnwrapError
from securemsg.common.utils import b64encode, b64decode
from securemsg.crypto.aes import KEY_SIZE

logger = logging.getLogger(__name__)


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def encrypt_symmetric_key(key: bytes, recipient_public_key: rsa.RSAPublicKey) -> str:
    """
    Wrap a symmetric key for the recipient.
    
    Args:
        key: Raw AES key bytes
        recipient_public_key: Recipient's RSA encryption public key
    
    Returns:
        Base64-encoded RSA-OAEP ciphertext
    
    Raises:
        KeyWrapError: If wrapping fails
    """
    try:
        wrapped = recipient_public_key.encrypt(key, _oaep())
    except Exception as e:
        raise KeyWrapError(f"Failed to wrap symmetric key: {e}") from e
    
    return b64encode(wrapped)


def decrypt_symmetric_key(wrapped_key_b64: str, recipient_private_key: rsa.RSAPrivateKey) -> bytes:
    """
    Recover a wrapped symmetric key.
    
    Args:
        wrapped_key_b64: Output of encrypt_symmetric_key
        recipient_private_key: Recipient's RSA encryption private key
    
    Returns:
        32-byte AES key
    
    Raises:
        KeyUnwrapError: If the key cannot be recovered
    """
    try:
        wrapped = b64decode(wrapped_key_b64)
    except (binascii.Error, ValueError) as e:
        raise KeyUnwrapError(f"Malformed wrapped key: {e}") from e
    
    try:
        key = recipient_private_key.decrypt(wrapped, _oaep())
    except ValueError as e:
        logger.debug("RSA-OAEP unwrap failed")
        raise KeyUnwrapError("Failed to unwrap symmetric key") from e
    
    if len(key) != KEY_SIZE:
        raise KeyUnwrapError(f"Unwrapped key has {len(key)} bytes, expected {KEY_SIZE}")
    
    return key
