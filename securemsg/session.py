"""
Session context for the two-party simulation.

A Session holds both parties' key bundles and certificates together with the
CA that issued them. It is built once and never mutated; a reset builds a new
one.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from securemsg.common.protocol import Certificate, PartyId
from securemsg.crypto.keys import UserKeyBundle, generate_user_key_bundle
from securemsg.crypto.pki import CertificateAuthority

logger = logging.getLogger(__name__)


class Session:
    """Key bundles and certificates of Alice and Bob."""
    
    def __init__(
        self,
        bundles: Mapping[PartyId, UserKeyBundle],
        certificates: Mapping[PartyId, Certificate],
        ca: CertificateAuthority,
    ):
        missing = [p.value for p in PartyId if p not in bundles or p not in certificates]
        if missing:
            raise ValueError(f"Session is missing parties: {', '.join(missing)}")
        
        self._bundles = MappingProxyType(dict(bundles))
        self._certificates = MappingProxyType(dict(certificates))
        self.ca = ca
    
    @classmethod
    def initialize(cls, ca: Optional[CertificateAuthority] = None) -> "Session":
        """
        Provision both parties.
        
        Generates an encryption and a signing key pair for each party and has
        the CA certify each signing public key.
        
        Args:
            ca: Issuing authority (default: a new CertificateAuthority)
        
        Returns:
            New Session
        """
        ca = ca or CertificateAuthority()
        bundles = {}
        certificates = {}
        
        for party in PartyId:
            bundle = generate_user_key_bundle(party)
            bundles[party] = bundle
            certificates[party] = ca.issue_certificate(party.display_name, bundle.signing.public_key)
        
        logger.info("Session initialized: keys and certificates generated for both parties")
        return cls(bundles, certificates, ca)
    
    @property
    def bundles(self) -> Mapping[PartyId, UserKeyBundle]:
        return self._bundles
    
    @property
    def certificates(self) -> Mapping[PartyId, Certificate]:
        return self._certificates
    
    def bundle(self, party: PartyId) -> UserKeyBundle:
        return self._bundles[party]
    
    def certificate(self, party: PartyId) -> Certificate:
        return self._certificates[party]


def initialize_parties(
    ca: Optional[CertificateAuthority] = None,
) -> Tuple[UserKeyBundle, UserKeyBundle, Certificate, Certificate]:
    """
    Provision Alice and Bob.
    
    Returns:
        Tuple of (alice_bundle, bob_bundle, alice_certificate, bob_certificate)
    """
    session = Session.initialize(ca)
    return (
        session.bundle(PartyId.ALICE),
        session.bundle(PartyId.BOB),
        session.certificate(PartyId.ALICE),
        session.certificate(PartyId.BOB),
    )
