"""
Unit tests for AuthRequest entity.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from douanier.domain.entities.auth_request import AuthRequest, AuthStatus
from tests.helpers import START_TIME, new_wallet_address


def _make_request(**overrides) -> AuthRequest:
    data = {
        "wallet_address": new_wallet_address(),
        "receiver_address": new_wallet_address(),
        "expected_amount": Decimal("0.000010042"),
        "created_at": START_TIME,
        "expires_at": START_TIME + timedelta(minutes=15),
    }
    data.update(overrides)
    return AuthRequest(**data)


class TestAuthRequest:
    """Unit tests for AuthRequest."""

    # ================================================================
    # Creation
    # ================================================================

    def test_new_request_is_pending(self):
        """Test new request starts pending without signature."""
        request = _make_request()

        assert request.status == AuthStatus.PENDING
        assert request.signature is None
        assert request.verified_at is None
        assert not request.is_verified

    def test_session_ids_are_unique(self):
        """Test each request gets its own session id."""
        ids = {_make_request().session_id for _ in range(50)}

        assert len(ids) == 50

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("wallet_address", "", "Wallet address"),
            ("receiver_address", "", "Receiver address"),
            ("expected_amount", Decimal("0"), "positive"),
            ("expires_at", START_TIME - timedelta(seconds=1), "Expiry"),
        ],
    )
    def test_invalid_fields_rejected(self, field, value, message):
        """Test invariant violations raise ValueError."""
        with pytest.raises(ValueError, match=message):
            _make_request(**{field: value})

    # ================================================================
    # Expiry
    # ================================================================

    def test_not_expired_at_exact_expiry_instant(self):
        """Test request expires strictly after expires_at."""
        request = _make_request()

        assert not request.is_expired(request.expires_at)
        assert request.is_expired(request.expires_at + timedelta(milliseconds=1))

    # ================================================================
    # Verification
    # ================================================================

    def test_verified_copy_sets_signature_once(self):
        """Test verified copy carries signature and leaves original pending."""
        request = _make_request()
        verified_at = START_TIME + timedelta(minutes=1)

        verified = request.verified_copy("5sig", verified_at)

        assert verified.status == AuthStatus.VERIFIED
        assert verified.signature == "5sig"
        assert verified.verified_at == verified_at
        assert verified.session_id == request.session_id
        assert request.status == AuthStatus.PENDING

    def test_verified_copy_rejects_second_verification(self):
        """Test a verified request cannot be verified again."""
        verified = _make_request().verified_copy("5sig", START_TIME)

        with pytest.raises(ValueError, match="already verified"):
            verified.verified_copy("other", START_TIME)

    def test_verified_copy_requires_signature(self):
        """Test empty signature is rejected."""
        with pytest.raises(ValueError, match="Signature"):
            _make_request().verified_copy("", START_TIME)

    # ================================================================
    # Serialization
    # ================================================================

    def test_dict_form_is_json_safe(self):
        """Test to_dict uses strings for amounts and epoch ms for times."""
        data = _make_request().to_dict()

        assert data["expected_amount"] == "0.000010042"
        assert data["created_at"] % 1000 == 42
        assert data["status"] == "pending"
        assert data["verified_at"] is None

    def test_from_dict_restores_verified_request(self):
        """Test verified request survives a dict round trip."""
        verified = _make_request().verified_copy("5sig", START_TIME)

        restored = AuthRequest.from_dict(verified.to_dict())

        assert restored == verified
