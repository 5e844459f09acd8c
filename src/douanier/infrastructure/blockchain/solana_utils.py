"""
Solana blockchain utilities.

Helper functions for working with Solana addresses and amounts.
"""

from decimal import Decimal
from typing import List

from solders.pubkey import Pubkey

from douanier.domain.value_objects.correlation_amount import LAMPORTS_PER_SOL


def is_wallet_address(address: str) -> bool:
    """
    Check whether address is a base58 ed25519 public key on the curve.

    Program derived addresses parse but lie off the curve, so they cannot
    sign transactions and are rejected.

    Args:
        address: Candidate address (base58)

    Returns:
        True if address can own a wallet
    """
    if not address or not isinstance(address, str):
        return False

    try:
        pubkey = Pubkey.from_string(address)
    except ValueError:
        return False

    return pubkey.is_on_curve()


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert an integer lamport amount to SOL."""
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


def extract_account_keys(transaction: dict) -> List[str]:
    """
    Flatten the account key list of a getTransaction result.

    Balance arrays in meta are indexed over static account keys followed
    by v0 loaded writable then readonly addresses.

    Args:
        transaction: getTransaction "result" object

    Returns:
        Account addresses in balance-array order
    """
    message = transaction.get("transaction", {}).get("message", {})
    keys = []
    for key in message.get("accountKeys", []):
        # jsonParsed encoding returns objects instead of plain strings
        keys.append(key.get("pubkey", "") if isinstance(key, dict) else key)

    loaded = (transaction.get("meta") or {}).get("loadedAddresses") or {}
    keys.extend(loaded.get("writable", []))
    keys.extend(loaded.get("readonly", []))
    return keys
