"""
RSA Key Management

Generates the two independent RSA key pairs each party owns:
- an encryption pair, used with RSA-OAEP (SHA-256, MGF1-SHA-256)
- a signing pair, used with RSASSA-PKCS1-v1_5 over SHA-256

The two pairs are always generated together and never swapped between roles.
"""

import logging
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from securemsg import config
from securemsg.common.exceptions import KeyGenerationError, KeyImportError
from securemsg.common.protocol import PartyId

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class AsymmetricKeyPair:
    """An RSA key pair. The private half never leaves its owner's bundle."""
    public_key: rsa.RSAPublicKey
    private_key: rsa.RSAPrivateKey

    def public_pem(self) -> str:
        """SPKI PEM of the public key."""
        return public_key_to_pem(self.public_key)

    def private_pem(self) -> str:
        """Unencrypted PKCS#8 PEM of the private key."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode('ascii')


@dataclass(frozen=True)
class UserKeyBundle:
    """Both key pairs of one party, created and replaced as a unit."""
    party: PartyId
    encryption: AsymmetricKeyPair
    signing: AsymmetricKeyPair

    @property
    def encryption_public_pem(self) -> str:
        return self.encryption.public_pem()

    @property
    def encryption_private_pem(self) -> str:
        return self.encryption.private_pem()

    @property
    def signing_public_pem(self) -> str:
        return self.signing.public_pem()

    @property
    def signing_private_pem(self) -> str:
        return self.signing.private_pem()


def _generate_rsa_key_pair(purpose: str) -> AsymmetricKeyPair:
    try:
        private_key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=config.RSA_KEY_SIZE,
        )
    except Exception as e:
        raise KeyGenerationError(f"Failed to generate {purpose} key pair: {e}") from e

    logger.debug(f"Generated {config.RSA_KEY_SIZE}-bit RSA {purpose} key pair")
    return AsymmetricKeyPair(public_key=private_key.public_key(), private_key=private_key)


def generate_encryption_key_pair() -> AsymmetricKeyPair:
    """
    Generate an RSA key pair for RSA-OAEP encryption.
    
    Returns:
        AsymmetricKeyPair (2048 bits or RSA_KEY_SIZE, exponent 65537)
    
    Raises:
        KeyGenerationError: If the provider fails
    """
    return _generate_rsa_key_pair("encryption")


def generate_signature_key_pair() -> AsymmetricKeyPair:
    """
    Generate an RSA key pair for PKCS#1 v1.5 signatures.
    
    Returns:
        AsymmetricKeyPair (2048 bits or RSA_KEY_SIZE, exponent 65537)
    
    Raises:
        KeyGenerationError: If the provider fails
    """
    return _generate_rsa_key_pair("signing")


def generate_user_key_bundle(party: PartyId) -> UserKeyBundle:
    """
    Generate both key pairs for a party.
    
    Args:
        party: Owner of the bundle
    
    Returns:
        UserKeyBundle with fresh encryption and signing pairs
    """
    bundle = UserKeyBundle(
        party=party,
        encryption=generate_encryption_key_pair(),
        signing=generate_signature_key_pair(),
    )
    logger.info(f"Key bundle generated for {party.display_name}")
    return bundle


def public_key_to_pem(public_key: rsa.RSAPublicKey) -> str:
    """Serialize an RSA public key to SPKI PEM text."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode('ascii')


def load_public_key(pem: Union[str, bytes]) -> rsa.RSAPublicKey:
    """
    Load an RSA public key from PEM.
    
    Args:
        pem: SPKI PEM text or bytes
    
    Returns:
        RSA public key object
    
    Raises:
        KeyImportError: If the PEM is malformed or not an RSA key
    """
    if isinstance(pem, str):
        pem = pem.encode('utf-8')

    try:
        public_key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError) as e:
        raise KeyImportError(f"Invalid public key PEM: {e}") from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyImportError("Public key is not an RSA key")

    return public_key
