"""
Unit tests for Solana helpers.
"""

from decimal import Decimal

import pytest

from douanier.infrastructure.blockchain.solana_utils import (
    extract_account_keys,
    is_wallet_address,
    lamports_to_sol,
)
from tests.helpers import new_wallet_address, program_derived_address


class TestIsWalletAddress:
    """Tests for is_wallet_address."""

    def test_on_curve_key_accepted(self):
        """Test keypair public key is a valid wallet."""
        assert is_wallet_address(new_wallet_address())

    def test_off_curve_address_rejected(self):
        """Test program derived address cannot own a wallet."""
        assert not is_wallet_address(program_derived_address())

    @pytest.mark.parametrize(
        "address",
        ["", "not-an-address", "0OIl" * 11, "abc", None],
    )
    def test_malformed_rejected(self, address):
        """Test malformed input is rejected without raising."""
        assert not is_wallet_address(address)


class TestConversions:
    """Tests for amount and key helpers."""

    def test_lamports_to_sol(self):
        """Test lamports convert to exact SOL decimals."""
        assert lamports_to_sol(10042) == Decimal("0.000010042")
        assert lamports_to_sol(-5000) == Decimal("-0.000005")

    def test_extract_account_keys_mixed_formats(self):
        """Test string keys, parsed keys and loaded addresses flatten in order."""
        transaction = {
            "transaction": {
                "message": {
                    "accountKeys": ["A", {"pubkey": "B", "signer": False}],
                }
            },
            "meta": {"loadedAddresses": {"writable": ["C"], "readonly": ["D"]}},
        }

        assert extract_account_keys(transaction) == ["A", "B", "C", "D"]

    def test_extract_account_keys_without_meta(self):
        """Test missing meta yields static keys only."""
        transaction = {"transaction": {"message": {"accountKeys": ["A"]}}, "meta": None}

        assert extract_account_keys(transaction) == ["A"]
