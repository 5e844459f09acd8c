"""Shared test helpers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from solders.keypair import Keypair
from solders.pubkey import Pubkey

# 12:00:00.042 UTC: creation millisecond 042 -> bucket 42
START_TIME = datetime(2024, 1, 1, 12, 0, 0, 42000, tzinfo=timezone.utc)
BASE_AMOUNT = Decimal("0.00001")
SESSION_TIMEOUT = timedelta(minutes=15)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def new_wallet_address() -> str:
    """Fresh on-curve Solana address."""
    return str(Keypair().pubkey())


def program_derived_address() -> str:
    """Valid base58 address that lies off the ed25519 curve."""
    pda, _ = Pubkey.find_program_address([b"douanier"], Pubkey.default())
    return str(pda)
