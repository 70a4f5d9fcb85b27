"""Shared fixtures. RSA material is generated once per test run."""

import pytest

from securemsg.common.protocol import PartyId
from securemsg.crypto.keys import generate_encryption_key_pair, generate_signature_key_pair
from securemsg.exchange import MessageExchange
from securemsg.session import Session


@pytest.fixture(scope="session")
def session():
    """Alice and Bob with keys and certificates."""
    return Session.initialize()


@pytest.fixture(scope="session")
def alice_bundle(session):
    return session.bundle(PartyId.ALICE)


@pytest.fixture(scope="session")
def bob_bundle(session):
    return session.bundle(PartyId.BOB)


@pytest.fixture(scope="session")
def encryption_pair():
    return generate_encryption_key_pair()


@pytest.fixture(scope="session")
def signing_pair():
    return generate_signature_key_pair()


@pytest.fixture
def exchange(session):
    """A fresh message slot over the shared session."""
    return MessageExchange(session=session)
