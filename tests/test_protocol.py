"""Tests for the data models."""

import json
from datetime import timedelta

import pytest
from pydantic import ValidationError

from securemsg.common.protocol import (
    Certificate,
    PartyId,
    SecureMessage,
    SecurityVerdict,
    VerificationResult,
    deserialize_message,
    serialize_message,
)


class TestCertificateModel:

    def test_validity_window_must_be_ordered(self, session) -> None:
        cert = session.certificate(PartyId.ALICE)
        data = cert.model_dump()
        data["valid_until"] = data["valid_from"] - timedelta(days=1)

        with pytest.raises(ValidationError, match="valid_from"):
            Certificate(**data)

    def test_certificate_is_frozen(self, session) -> None:
        cert = session.certificate(PartyId.ALICE)
        with pytest.raises(ValidationError):
            cert.ca_signature = "edited in place"


class TestSecureMessageModel:

    def test_json_encoding(self, exchange) -> None:
        """Timestamps are ISO-8601 and binary fields are plain text."""
        message = exchange.send("ola", PartyId.ALICE)
        payload = json.loads(serialize_message(message))

        assert payload["sender"] == "alice"
        assert "T" in payload["timestamp"]
        assert "T" in payload["certificate"]["valid_from"]
        assert payload["message_hash"] == message.message_hash

    def test_deserialized_message_still_verifies(self, exchange) -> None:
        message = exchange.send("ola", PartyId.ALICE)
        restored = deserialize_message(serialize_message(message))

        assert isinstance(restored, SecureMessage)
        assert exchange.verify(PartyId.BOB, restored).plaintext == "ola"


class TestVerificationResult:

    def test_is_secure(self) -> None:
        assert VerificationResult(verdict=SecurityVerdict.SECURE, plaintext="ola").is_secure
        assert not VerificationResult(verdict=SecurityVerdict.BREACH).is_secure
