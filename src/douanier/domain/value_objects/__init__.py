"""
Value objects for Douanier domain.
"""

from douanier.domain.value_objects.correlation_amount import (
    LAMPORTS_PER_SOL,
    CorrelationPolicy,
)
from douanier.domain.value_objects.timestamp import (
    Clock,
    from_epoch_ms,
    to_epoch_ms,
    utc_now,
)

__all__ = [
    "CorrelationPolicy",
    "LAMPORTS_PER_SOL",
    "Clock",
    "utc_now",
    "to_epoch_ms",
    "from_epoch_ms",
]
