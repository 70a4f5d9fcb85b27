"""
Cryptographic primitives for SecureMsg.

This package provides implementations of:
- RSA key pair generation for encryption and signing
- AES-256-GCM encryption/decryption
- RSA-OAEP wrapping of the symmetric key
- SHA-256 hashing and RSA PKCS#1 v1.5 signatures
- A simplified certificate authority
"""

from .keys import (
    AsymmetricKeyPair,
    UserKeyBundle,
    generate_encryption_key_pair,
    generate_signature_key_pair,
    generate_user_key_bundle,
    load_public_key,
)
from .aes import generate_symmetric_key, encrypt_message, decrypt_message
from .keywrap import encrypt_symmetric_key, decrypt_symmetric_key
from .sign import hash_message, sign_message, verify_signature
from .pki import CertificateAuthority, verify_certificate, certificate_fingerprint, get_certificate_info

__all__ = [
    'AsymmetricKeyPair',
    'UserKeyBundle',
    'generate_encryption_key_pair',
    'generate_signature_key_pair',
    'generate_user_key_bundle',
    'load_public_key',
    'generate_symmetric_key',
    'encrypt_message',
    'decrypt_message',
    'encrypt_symmetric_key',
    'decrypt_symmetric_key',
    'hash_message',
    'sign_message',
    'verify_signature',
    'CertificateAuthority',
    'verify_certificate',
    'certificate_fingerprint',
    'get_certificate_info',
]
