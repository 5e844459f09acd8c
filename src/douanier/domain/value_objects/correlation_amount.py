"""
CorrelationPolicy value object - mints per-request payment amounts.

The ledger transfer carries no memo, so the amount itself identifies the
pending session: a fixed base amount plus a lamport-sized offset taken from
the low-order milliseconds of the creation time.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from douanier.domain.value_objects.timestamp import to_epoch_ms

LAMPORTS_PER_SOL = 1_000_000_000


@dataclass(frozen=True)
class CorrelationPolicy:
    """
    Policy for deriving the expected amount of an authentication request.

    Business rules:
    - expected = base + (creation_epoch_ms mod bucket_size) / 1e9
    - Rounded to `precision` decimal places
    - Deterministic for the same base and creation millisecond
    - Two requests in the same bucket collide (probabilistic uniqueness)
    """

    base_amount: Decimal
    bucket_size: int = 1000
    precision: int = 9

    def __post_init__(self):
        """Validate policy parameters."""
        if self.base_amount <= 0:
            raise ValueError("Base amount must be positive")

        if self.bucket_size < 1:
            raise ValueError("Bucket size must be at least 1")

        if self.precision < 0:
            raise ValueError("Precision cannot be negative")

    @property
    def quantum(self) -> Decimal:
        """Smallest representable step at the configured precision."""
        return Decimal(1).scaleb(-self.precision)

    def bucket_for(self, created_at: datetime) -> int:
        """Return the correlation bucket of a creation time."""
        return to_epoch_ms(created_at) % self.bucket_size

    def amount_for(self, created_at: datetime) -> Decimal:
        """
        Compute the expected payment amount for a request created at `created_at`.

        Args:
            created_at: Aware UTC creation time

        Returns:
            Expected amount in SOL, quantized to the policy precision
        """
        offset = Decimal(self.bucket_for(created_at)) / Decimal(LAMPORTS_PER_SOL)
        return (Decimal(self.base_amount) + offset).quantize(
            self.quantum, rounding=ROUND_HALF_UP
        )
