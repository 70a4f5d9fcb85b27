"""
Message Exchange Protocol

Builds SecureMessage envelopes on the sending side and runs the verification
pipeline on the receiving side:

    1. certificate check      -> BREACH (certificate_invalid)
    2. unwrap key + decrypt   -> DecryptionError (recorded as decryption_failed)
    3. digest comparison      -> BREACH (hash_mismatch)
    4. signature check        -> BREACH (signature_invalid)
    5. all passed             -> SECURE

MessageExchange holds the single in-flight message and moves through
NO_MESSAGE -> SENT -> VERIFIED, notifying subscribers after each change.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from securemsg.common.exceptions import DecryptionError, ProtocolError
from securemsg.common.protocol import (
    Certificate,
    FailureReason,
    PartyId,
    SecureMessage,
    SecurityVerdict,
    VerificationResult,
    VerificationStep,
)
from securemsg.common.utils import now_utc, constant_time_compare
from securemsg.crypto.aes import generate_symmetric_key, encrypt_message, decrypt_message
from securemsg.crypto.keys import UserKeyBundle
from securemsg.crypto.keywrap import encrypt_symmetric_key, decrypt_symmetric_key
from securemsg.crypto.pki import verify_certificate
from securemsg.crypto.sign import hash_message, sign_message, verify_signature
from securemsg.session import Session

logger = logging.getLogger(__name__)

TAMPERED_CA_SIGNATURE = ""
TAMPERED_HASH = "tampered_hash_data"
TAMPERED_SIGNATURE = "tampered_signature_data"

STEP_CERTIFICATE = "certificate"
STEP_DECRYPTION = "decryption"
STEP_INTEGRITY = "integrity"
STEP_SIGNATURE = "signature"


class ExchangeState(str, Enum):
    NO_MESSAGE = "no_message"
    SENT = "sent"
    VERIFIED = "verified"


class TamperTarget(str, Enum):
    """Envelope field corrupted by tamper()."""
    CERTIFICATE = "certificate"
    MESSAGE_HASH = "message_hash"
    SIGNATURE = "signature"


@dataclass(frozen=True)
class ExchangeEvent:
    """
    Snapshot delivered to subscribers after every state change.

    After verify(), message is the envelope that was verified.
    """
    state: ExchangeState
    verdict: Optional[SecurityVerdict]
    message: Optional[SecureMessage]
    result: Optional[VerificationResult] = None


Listener = Callable[[ExchangeEvent], None]


def build_message(
    plaintext: str,
    sender_bundle: UserKeyBundle,
    receiver_public_key: rsa.RSAPublicKey,
    sender_certificate: Certificate,
) -> SecureMessage:
    """
    Encrypt, wrap, hash and sign a plaintext into an envelope.

    Args:
        plaintext: Message text
        sender_bundle: Sender's key bundle (signing private key is used)
        receiver_public_key: Receiver's RSA encryption public key
        sender_certificate: Certificate attached to the envelope

    Returns:
        SecureMessage timestamped now

    Raises:
        EncryptionError, KeyWrapError, SigningError: If any step fails
    """
    symmetric_key = generate_symmetric_key()
    encrypted_content = encrypt_message(plaintext, symmetric_key)
    encrypted_symmetric_key = encrypt_symmetric_key(symmetric_key, receiver_public_key)

    message_hash = hash_message(plaintext)
    signature = sign_message(message_hash, sender_bundle.signing.private_key)

    return SecureMessage(
        sender=sender_bundle.party,
        encrypted_content=encrypted_content,
        encrypted_symmetric_key=encrypted_symmetric_key,
        signature=signature,
        certificate=sender_certificate,
        message_hash=message_hash,
        timestamp=now_utc(),
    )


def _breach(reason: FailureReason, steps: List[VerificationStep], plaintext: Optional[str] = None) -> VerificationResult:
    return VerificationResult(
        verdict=SecurityVerdict.BREACH,
        plaintext=plaintext,
        failure=reason,
        steps=steps,
    )


def _run_pipeline(
    message: SecureMessage,
    receiver_bundle: UserKeyBundle,
    steps: List[VerificationStep],
) -> VerificationResult:
    # 1. Certificate
    if not verify_certificate(message.certificate):
        steps.append(VerificationStep(name=STEP_CERTIFICATE, passed=False, detail="certificate validation failed"))
        return _breach(FailureReason.CERTIFICATE_INVALID, steps)
    steps.append(VerificationStep(name=STEP_CERTIFICATE, passed=True, detail=f"issued by {message.certificate.issuer}"))

    # 2. Unwrap the symmetric key and decrypt
    try:
        symmetric_key = decrypt_symmetric_key(
            message.encrypted_symmetric_key,
            receiver_bundle.encryption.private_key,
        )
        plaintext = decrypt_message(message.encrypted_content, symmetric_key)
    except DecryptionError as e:
        steps.append(VerificationStep(name=STEP_DECRYPTION, passed=False, detail=str(e)))
        raise
    steps.append(VerificationStep(name=STEP_DECRYPTION, passed=True))

    # 3. Integrity
    calculated_hash = hash_message(plaintext)
    if not constant_time_compare(calculated_hash.encode('utf-8'), message.message_hash.encode('utf-8')):
        steps.append(VerificationStep(name=STEP_INTEGRITY, passed=False, detail="digest mismatch"))
        return _breach(FailureReason.HASH_MISMATCH, steps, plaintext)
    steps.append(VerificationStep(name=STEP_INTEGRITY, passed=True, detail=calculated_hash))

    # 4. Signature, checked against the key in the sender's certificate
    if not verify_signature(message.message_hash, message.signature, message.certificate.public_key):
        steps.append(VerificationStep(name=STEP_SIGNATURE, passed=False, detail="signature invalid"))
        return _breach(FailureReason.SIGNATURE_INVALID, steps, plaintext)
    steps.append(VerificationStep(name=STEP_SIGNATURE, passed=True, detail=f"signed by {message.certificate.subject}"))

    return VerificationResult(verdict=SecurityVerdict.SECURE, plaintext=plaintext, steps=steps)


def verify_message(message: SecureMessage, receiver_bundle: UserKeyBundle) -> VerificationResult:
    """
    Run the verification pipeline for the receiver.

    Args:
        message: Envelope to check
        receiver_bundle: Receiver's key bundle (encryption private key is used)

    Returns:
        VerificationResult (SECURE, or BREACH with the failing stage)

    Raises:
        ProtocolError: If the receiver is the sender of the message
        DecryptionError: If the key cannot be unwrapped or the content decrypted
    """
    if receiver_bundle.party == message.sender:
        raise ProtocolError(f"{message.sender.display_name} cannot verify their own message")

    return _run_pipeline(message, receiver_bundle, [])


def tamper_message(message: SecureMessage, target: TamperTarget) -> SecureMessage:
    """
    Return a copy of the envelope with one field corrupted.

    Args:
        message: Original envelope (left untouched)
        target: Field to corrupt

    Returns:
        New SecureMessage
    """
    if target is TamperTarget.CERTIFICATE:
        certificate = message.certificate.model_copy(update={"ca_signature": TAMPERED_CA_SIGNATURE})
        return message.model_copy(update={"certificate": certificate})
    if target is TamperTarget.MESSAGE_HASH:
        return message.model_copy(update={"message_hash": TAMPERED_HASH})
    return message.model_copy(update={"signature": TAMPERED_SIGNATURE})


class MessageExchange:
    """
    The single message slot shared by Alice and Bob.

    send() and tamper() replace the message wholesale; verify() derives a
    verdict from it. Subscribers are called after every state change.
    """

    def __init__(self, session: Optional[Session] = None, rng: Optional[random.Random] = None):
        self.session = session or Session.initialize()
        self._rng = rng or random.Random()
        self._listeners: List[Listener] = []
        self.message: Optional[SecureMessage] = None
        self.state = ExchangeState.NO_MESSAGE
        self.verdict: Optional[SecurityVerdict] = None
        self.last_result: Optional[VerificationResult] = None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, message: Optional[SecureMessage] = None) -> None:
        event = ExchangeEvent(
            state=self.state,
            verdict=self.verdict,
            message=message if message is not None else self.message,
            result=self.last_result,
        )
        for listener in list(self._listeners):
            listener(event)

    def send(self, plaintext: str, sender: PartyId) -> SecureMessage:
        """
        Send a message from one party to the other.

        On failure the error propagates and the previous message stays in place.

        Args:
            plaintext: Message text
            sender: Sending party

        Returns:
            The new in-flight SecureMessage
        """
        receiver = sender.peer
        message = build_message(
            plaintext,
            self.session.bundle(sender),
            self.session.bundle(receiver).encryption.public_key,
            self.session.certificate(sender),
        )

        self.message = message
        self.state = ExchangeState.SENT
        self.verdict = None
        self.last_result = None

        logger.info(f"{sender.display_name} sent a message to {receiver.display_name}")
        self._notify()
        return message

    def verify(self, receiver: PartyId, message: Optional[SecureMessage] = None) -> VerificationResult:
        """
        Verify and decrypt a message as the receiver.

        Args:
            receiver: Party verifying the message
            message: Envelope to check (default: the in-flight message)

        Returns:
            VerificationResult

        Raises:
            ProtocolError: If there is no message or the receiver sent it
            DecryptionError: After recording a decryption_failed breach
        """
        if message is None:
            message = self.message
        if message is None:
            raise ProtocolError("No message to verify")
        if message.sender == receiver:
            raise ProtocolError(f"{receiver.display_name} cannot verify their own message")

        steps: List[VerificationStep] = []
        try:
            result = _run_pipeline(message, self.session.bundle(receiver), steps)
        except DecryptionError:
            self._record(_breach(FailureReason.DECRYPTION_FAILED, steps), message)
            raise

        self._record(result, message)
        return result

    def _record(self, result: VerificationResult, message: SecureMessage) -> None:
        self.state = ExchangeState.VERIFIED
        self.verdict = result.verdict
        self.last_result = result

        if result.verdict is SecurityVerdict.BREACH:
            logger.warning(f"Verification failed: {result.failure.value}")
        else:
            logger.info(f"Message verified: {result.verdict.value}")
        self._notify(message)

    def tamper(self, target: Optional[TamperTarget] = None) -> SecureMessage:
        """
        Corrupt one field of the in-flight message (demonstration hook).

        Args:
            target: Field to corrupt (default: chosen at random)

        Returns:
            The tampered SecureMessage, now in flight
        """
        if self.message is None:
            raise ProtocolError("No message to tamper with")

        target = target or self._rng.choice(list(TamperTarget))
        self.message = tamper_message(self.message, target)
        self.state = ExchangeState.SENT
        self.verdict = SecurityVerdict.WARNING
        self.last_result = None

        logger.warning(f"Message tampered: {target.value}")
        self._notify()
        return self.message

    def reset(self) -> None:
        """Regenerate both parties' keys and certificates (same CA) and clear the slot."""
        self.session = Session.initialize(self.session.ca)
        self.message = None
        self.state = ExchangeState.NO_MESSAGE
        self.verdict = None
        self.last_result = None

        logger.info("Exchange reset")
        self._notify()
