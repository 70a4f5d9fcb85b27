"""
Common utilities and data models for SecureMsg.
"""

from .protocol import *
from .utils import now_utc, sha256_hex, b64encode, b64decode
from .exceptions import *

__all__ = [
    'now_utc',
    'sha256_hex',
    'b64encode',
    'b64decode',
]
