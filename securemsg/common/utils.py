"""
Utility functions for SecureMsg.
"""

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.
    
    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def add_one_year(moment: datetime) -> datetime:
    """
    Advance a datetime by one calendar year.
    
    February 29th maps to February 28th of the following year.
    
    Args:
        moment: Starting datetime
    
    Returns:
        Datetime one year later
    """
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        return moment.replace(year=moment.year + 1, day=28)


def sha256_hex(data: bytes) -> str:
    """
    Compute SHA-256 hash and return as hex string.
    
    Args:
        data: Data to hash
    
    Returns:
        Lowercase hex-encoded SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


def b64encode(data: bytes) -> str:
    """
    Base64 encode bytes to string.
    
    Args:
        data: Bytes to encode
    
    Returns:
        Base64-encoded string
    """
    return base64.b64encode(data).decode('ascii')


def b64decode(data: str) -> bytes:
    """
    Base64 decode string to bytes.
    
    Args:
        data: Base64-encoded string
    
    Returns:
        Decoded bytes
    
    Raises:
        binascii.Error: If data is not valid base64
    """
    return base64.b64decode(data, validate=True)


def generate_nonce(length: int = 12) -> bytes:
    """
    Generate a cryptographically secure random nonce.
    
    Args:
        length: Length in bytes (default: 12, the AES-GCM nonce size)
    
    Returns:
        Random bytes
    """
    return secrets.token_bytes(length)


def random_hex(num_bytes: int) -> str:
    """Random bytes from the OS CSPRNG, lowercase hex encoded."""
    return secrets.token_hex(num_bytes)


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """
    Constant-time comparison to prevent timing attacks.
    
    Args:
        a: First bytes object
        b: Second bytes object
    
    Returns:
        True if equal, False otherwise
    """
    return hmac.compare_digest(a, b)
