"""
Data models exchanged between the parties, the CA and the console front end.

Every record is an immutable Pydantic model. Binary material is carried as
base64 text, digests as lowercase hex, timestamps as ISO-8601 when serialized.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PartyId(str, Enum):
    """The two parties of the simulation."""
    ALICE = "alice"
    BOB = "bob"

    @property
    def peer(self) -> "PartyId":
        """The party on the other end of the conversation."""
        return PartyId.BOB if self is PartyId.ALICE else PartyId.ALICE

    @property
    def display_name(self) -> str:
        """Name used as the certificate subject."""
        return self.value.capitalize()


class SecurityVerdict(str, Enum):
    """Outcome of the verification pipeline."""
    SECURE = "secure"
    WARNING = "warning"
    BREACH = "breach"


class FailureReason(str, Enum):
    """Which verification stage turned the verdict into a breach."""
    CERTIFICATE_INVALID = "certificate_invalid"
    DECRYPTION_FAILED = "decryption_failed"
    HASH_MISMATCH = "hash_mismatch"
    SIGNATURE_INVALID = "signature_invalid"


class Certificate(BaseModel):
    """Binding of a subject identity to its signing public key."""
    model_config = ConfigDict(frozen=True)

    subject: str = Field(..., description="Identity the certificate was issued to")
    issuer: str = Field(..., description="Name of the issuing CA")
    valid_from: datetime
    valid_until: datetime
    serial_number: str = Field(..., description="Hex-encoded random serial")
    public_key: str = Field(..., description="PEM-encoded signing public key (SPKI)")
    ca_signature: str = Field(..., description="Placeholder CA binding string")

    @model_validator(mode="after")
    def _check_validity_window(self) -> "Certificate":
        if self.valid_from >= self.valid_until:
            raise ValueError("valid_from must be earlier than valid_until")
        return self


class SecureMessage(BaseModel):
    """The envelope for one transmitted message."""
    model_config = ConfigDict(frozen=True)

    sender: PartyId
    encrypted_content: str = Field(..., description="Base64 of nonce || AES-GCM ciphertext || tag")
    encrypted_symmetric_key: str = Field(..., description="Base64 RSA-OAEP wrapped AES key")
    signature: str = Field(..., description="Base64 RSA signature over message_hash")
    certificate: Certificate
    message_hash: str = Field(..., description="Hex-encoded SHA-256 of the plaintext")
    timestamp: datetime


class VerificationStep(BaseModel):
    """One stage of the verification pipeline and its outcome."""
    model_config = ConfigDict(frozen=True)

    name: str
    passed: bool
    detail: str = ""


class VerificationResult(BaseModel):
    """Verdict plus the diagnostics that led to it."""
    model_config = ConfigDict(frozen=True)

    verdict: SecurityVerdict
    plaintext: Optional[str] = None
    failure: Optional[FailureReason] = None
    steps: List[VerificationStep] = Field(default_factory=list)

    @property
    def is_secure(self) -> bool:
        return self.verdict is SecurityVerdict.SECURE


def serialize_message(msg: BaseModel) -> str:
    """Serialize Pydantic model to JSON string."""
    return msg.model_dump_json()


def deserialize_message(json_str: str) -> SecureMessage:
    """Rebuild a SecureMessage from its JSON form."""
    return SecureMessage.model_validate_json(json_str)


__all__ = [
    'PartyId',
    'SecurityVerdict',
    'FailureReason',
    'Certificate',
    'SecureMessage',
    'VerificationStep',
    'VerificationResult',
    'serialize_message',
    'deserialize_message',
]
