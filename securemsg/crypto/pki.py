"""
Simplified Certificate Authority

Issues certificates binding a subject to its signing public key and checks
them. This CA is a teaching simulation:
- the CA signature is a placeholder string derived from the serial number,
  not a cryptographic signature over the certificate fields
- validation only checks that the identifying fields are present and that
  the current time lies inside the validity window

The validation deliberately does not tie ca_signature to public_key.
"""

import logging
from datetime import datetime
from typing import Optional, Set

from cryptography.hazmat.primitives.asymmetric import rsa

from securemsg import config
from securemsg.common.exceptions import CertificateError
from securemsg.common.protocol import Certificate
from securemsg.common.utils import now_utc, add_one_year, random_hex, sha256_hex
from securemsg.crypto.keys import public_key_to_pem

logger = logging.getLogger(__name__)

SERIAL_NUMBER_BYTES = 8
CA_SIGNATURE_PREFIX = "ca_signature_"
MAX_SERIAL_ATTEMPTS = 16


class CertificateAuthority:
    """
    Demonstration CA.
    
    Remembers every serial it has issued so that serials stay unique for the
    lifetime of the authority.
    """
    
    def __init__(self, issuer: Optional[str] = None):
        self.issuer = issuer or config.CA_ISSUER_NAME
        self._issued_serials: Set[str] = set()
    
    @property
    def issued_count(self) -> int:
        return len(self._issued_serials)
    
    def _next_serial(self) -> str:
        for _ in range(MAX_SERIAL_ATTEMPTS):
            serial = random_hex(SERIAL_NUMBER_BYTES)
            if serial not in self._issued_serials:
                self._issued_serials.add(serial)
                return serial
        raise CertificateError("Could not allocate a unique serial number")
    
    def issue_certificate(self, subject: str, signing_public_key: rsa.RSAPublicKey) -> Certificate:
        """
        Issue a certificate for a subject's signing key.
        
        Args:
            subject: Identity of the key owner (e.g. "Alice")
            signing_public_key: Subject's RSA signing public key
        
        Returns:
            Certificate valid from now for one year
        
        Raises:
            CertificateError: If the subject is empty or no serial is available
        """
        if not subject:
            raise CertificateError("Certificate subject must not be empty")
        
        serial = self._next_serial()
        valid_from = now_utc()
        
        cert = Certificate(
            subject=subject,
            issuer=self.issuer,
            valid_from=valid_from,
            valid_until=add_one_year(valid_from),
            serial_number=serial,
            public_key=public_key_to_pem(signing_public_key),
            ca_signature=f"{CA_SIGNATURE_PREFIX}{serial}",
        )
        
        logger.info(f"Issued certificate {serial} to '{subject}' (issuer: {self.issuer})")
        return cert


def verify_certificate(cert: Certificate, now: Optional[datetime] = None) -> bool:
    """
    Validate a certificate.
    
    Checks:
    1. subject, issuer, serial_number and ca_signature are non-empty
    2. now lies within [valid_from, valid_until]
    
    Args:
        cert: Certificate to validate
        now: Reference time (default: current UTC time)
    
    Returns:
        True if all checks pass, False otherwise
    """
    try:
        if not (cert.subject and cert.issuer and cert.serial_number and cert.ca_signature):
            logger.debug(f"Certificate {cert.serial_number!r} has empty identifying fields")
            return False
        
        now = now or now_utc()
        
        if now < cert.valid_from:
            logger.debug(f"Certificate {cert.serial_number} not yet valid (valid from {cert.valid_from})")
            return False
        
        if now > cert.valid_until:
            logger.debug(f"Certificate {cert.serial_number} expired on {cert.valid_until}")
            return False
        
        return True
    
    except Exception as e:
        logger.debug(f"Certificate validation error: {e}")
        return False


def certificate_fingerprint(cert: Certificate) -> str:
    """
    Compute SHA-256 fingerprint of a certificate.
    
    Args:
        cert: Certificate object
    
    Returns:
        Hex-encoded SHA-256 over the certificate's JSON form
    """
    return sha256_hex(cert.model_dump_json().encode('utf-8'))


def get_certificate_info(cert: Certificate) -> dict:
    """
    Extract certificate information for display.
    
    Args:
        cert: Certificate object
    
    Returns:
        Dictionary with certificate details
    """
    return {
        "subject": cert.subject,
        "issuer": cert.issuer,
        "serial_number": cert.serial_number,
        "valid_from": cert.valid_from.isoformat(),
        "valid_until": cert.valid_until.isoformat(),
        "ca_signature": cert.ca_signature,
        "fingerprint": certificate_fingerprint(cert),
        "valid": verify_certificate(cert),
    }
