"""
Tests for the simplified certificate authority.

The CA signature is a placeholder string and validation only checks field
presence plus the validity window. The tests below pin that behaviour.
"""

from datetime import datetime, timedelta

import pytest

from securemsg import config
from securemsg.common.exceptions import CertificateError
from securemsg.crypto import pki
from securemsg.crypto.pki import (
    CertificateAuthority,
    verify_certificate,
    certificate_fingerprint,
    get_certificate_info,
)


@pytest.fixture
def ca():
    return CertificateAuthority(issuer="Test CA")


@pytest.fixture
def certificate(ca, signing_pair):
    return ca.issue_certificate("Alice", signing_pair.public_key)


class TestIssueCertificate:

    def test_fields(self, certificate, signing_pair) -> None:
        assert certificate.subject == "Alice"
        assert certificate.issuer == "Test CA"
        assert certificate.ca_signature == f"ca_signature_{certificate.serial_number}"
        assert certificate.public_key.startswith("-----BEGIN PUBLIC KEY-----")

    def test_serial_is_64_bit_hex(self, certificate) -> None:
        assert len(certificate.serial_number) == 16
        int(certificate.serial_number, 16)

    def test_valid_for_one_year(self, certificate) -> None:
        assert certificate.valid_from.tzinfo is not None
        assert certificate.valid_until.year == certificate.valid_from.year + 1
        assert certificate.valid_from < certificate.valid_until

    def test_default_issuer(self, signing_pair) -> None:
        cert = CertificateAuthority().issue_certificate("Bob", signing_pair.public_key)
        assert cert.issuer == config.CA_ISSUER_NAME

    def test_serials_unique_for_same_subject(self, ca, signing_pair) -> None:
        first = ca.issue_certificate("Alice", signing_pair.public_key)
        second = ca.issue_certificate("Alice", signing_pair.public_key)
        assert first.serial_number != second.serial_number
        assert ca.issued_count == 2

    def test_colliding_serial_is_redrawn(self, ca, signing_pair, monkeypatch) -> None:
        serials = iter(["aa" * 8, "aa" * 8, "bb" * 8])
        monkeypatch.setattr(pki, "random_hex", lambda n: next(serials))

        first = ca.issue_certificate("Alice", signing_pair.public_key)
        second = ca.issue_certificate("Alice", signing_pair.public_key)

        assert first.serial_number == "aa" * 8
        assert second.serial_number == "bb" * 8

    def test_serial_exhaustion_raises(self, ca, signing_pair, monkeypatch) -> None:
        monkeypatch.setattr(pki, "random_hex", lambda n: "aa" * 8)
        ca.issue_certificate("Alice", signing_pair.public_key)

        with pytest.raises(CertificateError, match="unique serial"):
            ca.issue_certificate("Alice", signing_pair.public_key)

    def test_empty_subject_rejected(self, ca, signing_pair) -> None:
        with pytest.raises(CertificateError):
            ca.issue_certificate("", signing_pair.public_key)


class TestVerifyCertificate:

    def test_fresh_certificate_is_valid(self, certificate) -> None:
        assert verify_certificate(certificate) is True

    def test_before_valid_from(self, certificate) -> None:
        now = certificate.valid_from - timedelta(seconds=1)
        assert verify_certificate(certificate, now=now) is False

    def test_after_valid_until(self, certificate) -> None:
        now = certificate.valid_until + timedelta(seconds=1)
        assert verify_certificate(certificate, now=now) is False

    def test_window_bounds_are_inclusive(self, certificate) -> None:
        assert verify_certificate(certificate, now=certificate.valid_from) is True
        assert verify_certificate(certificate, now=certificate.valid_until) is True

    @pytest.mark.parametrize("field", ["subject", "issuer", "serial_number", "ca_signature"])
    def test_empty_field_is_invalid(self, certificate, field: str) -> None:
        tampered = certificate.model_copy(update={field: ""})
        assert verify_certificate(tampered) is False

    def test_placeholder_signature_not_bound_to_key(self, certificate, alice_bundle) -> None:
        """
        Any non-empty ca_signature passes and the public key is not checked
        against it. This is the documented simplification of the simulated CA.
        """
        forged = certificate.model_copy(update={
            "ca_signature": "tampered_signature_data",
            "public_key": alice_bundle.encryption_public_pem,
        })
        assert verify_certificate(forged) is True

    def test_naive_reference_time_is_invalid_not_error(self, certificate) -> None:
        assert verify_certificate(certificate, now=datetime(2030, 1, 1)) is False

    def test_does_not_mutate(self, certificate) -> None:
        before = certificate.model_dump()
        verify_certificate(certificate)
        assert certificate.model_dump() == before


class TestCertificateInfo:

    def test_fingerprint_is_stable(self, certificate) -> None:
        assert certificate_fingerprint(certificate) == certificate_fingerprint(certificate)
        assert len(certificate_fingerprint(certificate)) == 64

    def test_fingerprint_changes_with_content(self, certificate) -> None:
        other = certificate.model_copy(update={"ca_signature": "x"})
        assert certificate_fingerprint(other) != certificate_fingerprint(certificate)

    def test_info(self, certificate) -> None:
        info = get_certificate_info(certificate)
        assert info["subject"] == "Alice"
        assert info["serial_number"] == certificate.serial_number
        assert info["valid"] is True
        assert datetime.fromisoformat(info["valid_from"]).utcoffset() == timedelta(0)
