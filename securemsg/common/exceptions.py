"""
Custom exceptions for SecureMsg.
"""


class SecureMsgException(Exception):
    """Base exception for SecureMsg errors."""
    pass


class KeyGenerationError(SecureMsgException):
    """Asymmetric key pair generation failed."""
    pass


class KeyImportError(KeyGenerationError):
    """A serialized key could not be loaded."""
    pass


class CertificateError(SecureMsgException):
    """Certificate issuance failed."""
    pass


class EncryptionError(SecureMsgException):
    """Symmetric encryption failed."""
    pass


class KeyWrapError(EncryptionError):
    """Wrapping the symmetric key for the recipient failed."""
    pass


class DecryptionError(SecureMsgException):
    """Decryption failed (wrong key or tampered ciphertext)."""
    pass


class KeyUnwrapError(DecryptionError):
    """Unwrapping the symmetric key failed."""
    pass


class SigningError(SecureMsgException):
    """Signing the message digest failed."""
    pass


class ProtocolError(SecureMsgException):
    """Message exchange used out of order or by the wrong party."""
    pass


__all__ = [
    'SecureMsgException',
    'KeyGenerationError',
    'KeyImportError',
    'CertificateError',
    'EncryptionError',
    'KeyWrapError',
    'DecryptionError',
    'KeyUnwrapError',
    'SigningError',
    'ProtocolError',
]
