"""
RSA Digital Signatures

The sender hashes the plaintext with SHA-256 and signs the raw digest bytes
using RSASSA-PKCS1-v1_5 with SHA-256. Verification never raises; every
failure is reported as an invalid signature.
"""

import logging
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from securemsg.common.exceptions import SigningError
from securemsg.common.utils import sha256_hex, b64encode, b64decode
from securemsg.crypto.keys import load_public_key

logger = logging.getLogger(__name__)


def hash_message(plaintext: str) -> str:
    """
    Compute the integrity digest of a plaintext.
    
    Args:
        plaintext: Message text
    
    Returns:
        Lowercase hex SHA-256 of the UTF-8 bytes
    """
    return sha256_hex(plaintext.encode('utf-8'))


def sign_message(digest_hex: str, private_key: rsa.RSAPrivateKey) -> str:
    """
    Sign a message digest.
    
    Args:
        digest_hex: Hex digest produced by hash_message
        private_key: Sender's RSA signing private key
    
    Returns:
        Base64-encoded signature
    
    Raises:
        SigningError: If the digest is not hex or signing fails
    """
    try:
        digest_bytes = bytes.fromhex(digest_hex)
    except ValueError as e:
        raise SigningError(f"Digest is not valid hex: {e}") from e
    
    try:
        signature = private_key.sign(
            digest_bytes,
            padding.PKCS1v15(),
            hashes.SHA256()
        )
    except Exception as e:
        raise SigningError(f"Signing failed: {e}") from e
    
    return b64encode(signature)


def verify_signature(
    digest_hex: str,
    signature_b64: str,
    public_key: Union[rsa.RSAPublicKey, str]
) -> bool:
    """
    Verify an RSA signature over a digest.
    
    Args:
        digest_hex: Hex digest that was signed
        signature_b64: Base64-encoded signature
        public_key: RSA public key object or its PEM (as carried in a certificate)
    
    Returns:
        True if signature is valid, False otherwise
    """
    try:
        if isinstance(public_key, str):
            public_key = load_public_key(public_key)
        
        public_key.verify(
            b64decode(signature_b64),
            bytes.fromhex(digest_hex),
            padding.PKCS1v15(),
            hashes.SHA256()
        )
        
        return True
    
    except InvalidSignature:
        return False
    except Exception as e:
        logger.debug(f"Signature verification error: {e}")
        return False


# Test function for development
if __name__ == "__main__":
    from securemsg.crypto.keys import generate_signature_key_pair
    
    print("[*] Testing RSA Signature")
    
    key_pair = generate_signature_key_pair()
    
    digest = hash_message("Hello, SecureMsg!")
    print(f"\n[1] Digest: {digest}")
    
    signature = sign_message(digest, key_pair.private_key)
    print(f"[2] Signature (base64): {signature[:64]}...")
    
    is_valid = verify_signature(digest, signature, key_pair.public_key)
    print(f"[3] Signature verification: {is_valid}")
    
    other_digest = hash_message("Hello, SecureMsg?")
    is_valid_modified = verify_signature(other_digest, signature, key_pair.public_key)
    print(f"[4] Modified digest verification: {is_valid_modified}")
    
    assert is_valid == True, "Signature verification failed!"
    assert is_valid_modified == False, "Modified digest verification should fail!"
    
    print("\n[✓] RSA signature test passed!")
