"""
SecureMsg

A two-party secure messaging simulator implementing:
- RSA key pairs for encryption (OAEP) and signing (PKCS#1 v1.5)
- A simplified certificate authority
- Hybrid encryption (AES-256-GCM content, RSA-OAEP wrapped key)
- SHA-256 integrity hashing and digital signatures
- A verification pipeline yielding a Secure / Warning / Breach verdict
"""

from .common.protocol import (
    Certificate,
    SecureMessage,
    SecurityVerdict,
    FailureReason,
    VerificationStep,
    VerificationResult,
)
from .common.exceptions import *
from .session import PartyId, Session, initialize_parties
from .exchange import (
    ExchangeState,
    ExchangeEvent,
    MessageExchange,
    TamperTarget,
    verify_message,
    tamper_message,
)

__version__ = "1.0.0"

__all__ = [
    'Certificate',
    'SecureMessage',
    'SecurityVerdict',
    'FailureReason',
    'VerificationStep',
    'VerificationResult',
    'PartyId',
    'Session',
    'initialize_parties',
    'ExchangeState',
    'ExchangeEvent',
    'MessageExchange',
    'TamperTarget',
    'verify_message',
    'tamper_message',
]
